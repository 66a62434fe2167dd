"""Directed weighted multigraph holding an alignment."""

from typing import Iterator, Optional

import networkx as nx

from alignviz.models.alignment import Link, Node


class AlignmentGraph:
    """Alignment graph over :class:`Node` and :class:`Link`.

    Wraps a NetworkX MultiDiGraph keyed by node id so that several links
    may connect the same pair of nodes. Vertices iterate in insertion
    order; links are grouped by source vertex in that same order.
    """

    def __init__(self) -> None:
        self._graph = nx.MultiDiGraph()

    def add_node(self, node: Node) -> None:
        """Add a node. Re-adding an id replaces the stored node."""
        self._graph.add_node(node.id, node=node)

    def add_link(self, link: Link) -> None:
        """Add a link between two existing nodes."""
        for endpoint in (link.source_id, link.target_id):
            if endpoint not in self._graph:
                raise KeyError(f"Link {link.id} references unknown node: {endpoint}")
        self._graph.add_edge(
            link.source_id,
            link.target_id,
            key=link.id,
            link=link,
            weight=link.weight,
        )

    def get_node(self, node_id: str) -> Optional[Node]:
        if node_id not in self._graph:
            return None
        return self._graph.nodes[node_id]["node"]

    def nodes(self) -> Iterator[Node]:
        """Iterate over the vertex set."""
        for _, data in self._graph.nodes(data=True):
            yield data["node"]

    def links(self) -> Iterator[Link]:
        """Iterate over the edge set."""
        for _, _, data in self._graph.edges(data=True):
            yield data["link"]

    def outgoing_links(self, node_id: str) -> list[Link]:
        """Links whose source is the given node."""
        if node_id not in self._graph:
            return []
        return [data["link"] for _, _, data in self._graph.out_edges(node_id, data=True)]

    def out_degree(self, node_id: str) -> int:
        if node_id not in self._graph:
            return 0
        return self._graph.out_degree(node_id)

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def link_count(self) -> int:
        return self._graph.number_of_edges()

    def is_empty(self) -> bool:
        return self.node_count == 0

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def __len__(self) -> int:
        return self.node_count
