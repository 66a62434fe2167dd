"""Edge classification for alignment visualization.

Every link of the alignment graph ends up in one of three places:

- ``links``: normal links, including holder links (links into a leaf
  column node, drawn as terminal connectors by the client)
- ``edgeLinks``: specialization links, whose ``source`` is the id of the
  link they refine rather than a node index
- dropped, when an endpoint has no index; the problem is logged and
  recorded as an issue, and the remaining links are still exported
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from alignviz.logging_config import get_logger
from alignviz.models import AlignmentGraph, Link, LinkKeyInfo, LinkType
from alignviz.services.node_indexer import IndexedNodes

logger = get_logger(__name__)

HOLDER_LINK = "holderLink"
KEY_MARKER = "*"


class LinkCategory(str, Enum):
    """Rendering bucket of a classified link."""

    NORMAL = "normal"
    HOLDER = "holder"
    SPECIALIZATION = "specialization"


class IssueSeverity(str, Enum):
    """Severity levels for export issues."""

    WARNING = "warning"
    ERROR = "error"


@dataclass
class ExportIssue:
    """A problem found while exporting a single link."""

    message: str
    severity: IssueSeverity = IssueSeverity.ERROR
    link_id: Optional[str] = None
    context: Optional[dict[str, Any]] = None

    def __str__(self) -> str:
        loc = f" at link {self.link_id}" if self.link_id else ""
        return f"[{self.severity.value.upper()}]{loc}: {self.message}"


def count_dropped(issues: list[ExportIssue]) -> int:
    """Number of links left out of the document."""
    return sum(1 for issue in issues if issue.severity == IssueSeverity.ERROR)


@dataclass(frozen=True)
class LinkRecord:
    """A link as exported to the client."""

    source: Union[int, str]
    target: int
    source_node_id: str
    target_node_id: str
    label: str
    id: str
    link_status: str
    link_uri: str
    link_type: str
    category: LinkCategory = LinkCategory.NORMAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "sourceNodeId": self.source_node_id,
            "targetNodeId": self.target_node_id,
            "label": self.label,
            "id": self.id,
            "linkStatus": self.link_status,
            "linkUri": self.link_uri,
            "linkType": self.link_type,
        }


@dataclass
class ClassifiedLinks:
    """Links sorted into their output collections."""

    links: list[LinkRecord] = field(default_factory=list)
    edge_links: list[LinkRecord] = field(default_factory=list)
    issues: list[ExportIssue] = field(default_factory=list)

    @property
    def dropped(self) -> int:
        return count_dropped(self.issues)

    @property
    def holder_links(self) -> list[LinkRecord]:
        return [r for r in self.links if r.category == LinkCategory.HOLDER]


class EdgeClassifier:
    """Classifies alignment graph links against an index space."""

    def __init__(self, deterministic: bool = False):
        self.deterministic = deterministic

    def classify(self, graph: Optional[AlignmentGraph], indexed: IndexedNodes) -> ClassifiedLinks:
        """Classify every link of the graph.

        Args:
            graph: Alignment graph, or None when no alignment exists yet
            indexed: Index space built by the NodeIndexer for the same graph

        Returns:
            ClassifiedLinks with links, edge links and per-link issues
        """
        result = ClassifiedLinks()
        if graph is None or graph.is_empty():
            return result

        links = list(graph.links())
        if self.deterministic:
            links.sort(key=lambda l: l.id)

        for link in links:
            record = self._classify_link(graph, indexed, link, result)
            if record is None:
                continue
            if record.category == LinkCategory.SPECIALIZATION:
                result.edge_links.append(record)
            else:
                result.links.append(record)

        logger.debug(
            "Classified alignment links",
            links=len(result.links),
            edge_links=len(result.edge_links),
            dropped=result.dropped,
        )
        return result

    def _classify_link(
        self,
        graph: AlignmentGraph,
        indexed: IndexedNodes,
        link: Link,
        result: ClassifiedLinks,
    ) -> Optional[LinkRecord]:
        source_index = indexed.index_of(link.source_id)
        target_index = indexed.index_of(link.target_id)

        if source_index is None or target_index is None:
            logger.error(
                "Edge vertex index not found",
                link_id=link.id,
                source_node_id=link.source_id,
                target_node_id=link.target_id,
            )
            missing = [
                node_id
                for node_id, index in ((link.source_id, source_index), (link.target_id, target_index))
                if index is None
            ]
            result.issues.append(
                ExportIssue(
                    message=f"Edge vertex index not found for {', '.join(missing)}",
                    link_id=link.id,
                    context={"missing_node_ids": missing},
                )
            )
            return None

        label = link.label.local_name
        link_type = link.link_type.value
        category = LinkCategory.NORMAL

        target = graph.get_node(link.target_id)
        is_holder = (
            target is not None
            and target.is_column_node
            and graph.out_degree(target.id) == 0
        )
        if is_holder:
            if link.key_info == LinkKeyInfo.PART_OF_KEY:
                label = label + KEY_MARKER
            # The declared type wins unless it is the generic kind
            if link.link_type == LinkType.NONE:
                link_type = HOLDER_LINK
                category = LinkCategory.HOLDER

        source: Union[int, str] = source_index
        if link.link_type.is_specialization:
            source = link.specialized_link_id
            category = LinkCategory.SPECIALIZATION

        return LinkRecord(
            source=source,
            target=target_index,
            source_node_id=link.source_id,
            target_node_id=link.target_id,
            label=label,
            id=str(link.id),
            link_status=link.status.value,
            link_uri=link.label.uri,
            link_type=link_type,
            category=category,
        )
