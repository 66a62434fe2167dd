"""Node indexing for alignment visualization.

Assigns every exported node a dense integer index. Header columns of the
worksheet come first, in visible column order, so anchor ``i`` always sits
at index ``i``. Every other non-column node of the graph follows.

Headers without a bound column node still get an anchor slot, built from
the raw header metadata. Such placeholder anchors have no node identity,
so they never enter the index map and can never be an edge endpoint.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from alignviz.logging_config import get_logger
from alignviz.models import AlignmentGraph, HeaderResolver, Node, NodeType

logger = get_logger(__name__)


@dataclass(frozen=True)
class NodeRecord:
    """A non-anchor node as exported to the client."""

    index: int
    label: str
    node_id: str
    node_type: str
    is_forced: bool
    node_domain: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "id": self.index,
            "nodeId": self.node_id,
            "nodeType": self.node_type,
            "isForcedByUser": self.is_forced,
            "nodeDomain": self.node_domain,
        }


@dataclass(frozen=True)
class ColumnAnchor(NodeRecord):
    """Anchor slot occupied by a column node bound to the header."""

    hnode_id: str = ""
    column: int = 0

    @property
    def is_placeholder(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        record = super().to_dict()
        record["hNodeId"] = self.hnode_id
        record["column"] = self.column
        return record


@dataclass(frozen=True)
class PlaceholderAnchor:
    """Anchor slot for a header with no bound column node."""

    index: int
    label: str
    hnode_id: str

    node_type: str = NodeType.COLUMN_NODE.value
    is_forced: bool = False
    node_domain: str = ""

    @property
    def is_placeholder(self) -> bool:
        return True

    @property
    def node_id(self) -> str:
        return self.hnode_id

    @property
    def column(self) -> int:
        return self.index

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "id": self.index,
            "nodeId": self.node_id,
            "nodeType": self.node_type,
            "isForcedByUser": self.is_forced,
            "nodeDomain": self.node_domain,
            "hNodeId": self.hnode_id,
            "column": self.column,
        }


Anchor = Union[ColumnAnchor, PlaceholderAnchor]


@dataclass
class IndexedNodes:
    """Result of indexing: the index map plus anchor and node records."""

    index_map: dict[str, int] = field(default_factory=dict)
    anchors: list[Anchor] = field(default_factory=list)
    nodes: list[NodeRecord] = field(default_factory=list)

    def index_of(self, node_id: str) -> Optional[int]:
        return self.index_map.get(node_id)

    @property
    def size(self) -> int:
        """Number of index slots, placeholder anchors included."""
        return len(self.anchors) + len(self.nodes)


class NodeIndexer:
    """Builds the index space shared by anchors, nodes and links."""

    def __init__(self, deterministic: bool = False):
        self.deterministic = deterministic

    def index(
        self,
        header_ids: Sequence[str],
        graph: Optional[AlignmentGraph],
        headers: Optional[HeaderResolver] = None,
    ) -> IndexedNodes:
        """
        Index the anchors and nodes of an alignment graph.

        Args:
            header_ids: Visible leaf header ids, in column order
            graph: Alignment graph, or None when no alignment exists yet
            headers: Resolver for header display names of placeholder anchors

        Returns:
            IndexedNodes with one anchor per header id
        """
        result = IndexedNodes()
        column_nodes = self._column_nodes_by_header(graph)

        for column_num, hnode_id in enumerate(header_ids):
            node = column_nodes.get(hnode_id)
            if node is not None:
                result.anchors.append(
                    ColumnAnchor(
                        index=column_num,
                        label=node.local_label,
                        node_id=node.id,
                        node_type=node.node_type.value,
                        is_forced=node.is_forced,
                        node_domain=node.domain_uri,
                        hnode_id=hnode_id,
                        column=column_num,
                    )
                )
                result.index_map[node.id] = column_num
            else:
                result.anchors.append(
                    PlaceholderAnchor(
                        index=column_num,
                        label=self._header_label(hnode_id, headers),
                        hnode_id=hnode_id,
                    )
                )

        counter = len(header_ids)
        for node in self._remaining_nodes(graph):
            result.nodes.append(
                NodeRecord(
                    index=counter,
                    label=node.local_label,
                    node_id=node.id,
                    node_type=node.node_type.value,
                    is_forced=node.is_forced,
                    node_domain=node.domain_uri,
                )
            )
            result.index_map[node.id] = counter
            counter += 1

        logger.debug(
            "Indexed alignment nodes",
            anchors=len(result.anchors),
            bound_anchors=sum(not a.is_placeholder for a in result.anchors),
            nodes=len(result.nodes),
        )
        return result

    def _column_nodes_by_header(self, graph: Optional[AlignmentGraph]) -> dict[str, Node]:
        columns: dict[str, Node] = {}
        if graph is None or graph.is_empty():
            return columns
        for node in graph.nodes():
            if node.is_column_node and node.hnode_id is not None:
                columns[node.hnode_id] = node
        return columns

    def _remaining_nodes(self, graph: Optional[AlignmentGraph]) -> list[Node]:
        if graph is None or graph.is_empty():
            return []
        remaining = [node for node in graph.nodes() if not node.is_column_node]
        if self.deterministic:
            remaining.sort(key=lambda n: n.id)
        return remaining

    def _header_label(self, hnode_id: str, headers: Optional[HeaderResolver]) -> str:
        header = headers.get_header(hnode_id) if headers is not None else None
        if header is None:
            logger.warning("Header metadata not found for anchor", hnode_id=hnode_id)
            return hnode_id
        return header.column_name
