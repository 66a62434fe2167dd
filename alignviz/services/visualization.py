"""Alignment visualization document assembly.

Combines the index space from :mod:`alignviz.services.node_indexer` and
the classified links from :mod:`alignviz.services.edge_classifier` into
the document the client draws the schema-mapping diagram from::

    {
      "updateType": "AlignmentSVGVisualizationUpdate",
      "alignmentId": ..., "worksheetId": ...,
      "alignObject": {"anchors": [...], "nodes": [...], "links": [...], "edgeLinks": [...]}
    }

Each export reads one snapshot of the alignment graph and builds its own
index map and collections.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from alignviz.logging_config import get_logger
from alignviz.models import AlignmentGraph, Worksheet
from alignviz.services.edge_classifier import (
    ClassifiedLinks,
    EdgeClassifier,
    ExportIssue,
    LinkRecord,
    count_dropped,
)
from alignviz.services.node_indexer import Anchor, IndexedNodes, NodeIndexer, NodeRecord

logger = get_logger(__name__)

UPDATE_TYPE = "AlignmentSVGVisualizationUpdate"


class DocumentEncodingError(ValueError):
    """Raised when a visualization document cannot be serialized."""


class TextSink(Protocol):
    def write(self, s: str) -> Any:
        ...


def construct_alignment_id(workspace_id: str, worksheet_id: str) -> str:
    """Build the alignment id of a worksheet within a workspace."""
    return f"{workspace_id}:{worksheet_id}AL"


@dataclass
class VisualizationDocument:
    """The assembled export for one worksheet."""

    alignment_id: str
    worksheet_id: str
    anchors: list[Anchor] = field(default_factory=list)
    nodes: list[NodeRecord] = field(default_factory=list)
    links: list[LinkRecord] = field(default_factory=list)
    edge_links: list[LinkRecord] = field(default_factory=list)
    issues: list[ExportIssue] = field(default_factory=list)

    @classmethod
    def assemble(
        cls,
        alignment_id: str,
        worksheet_id: str,
        indexed: IndexedNodes,
        classified: ClassifiedLinks,
    ) -> "VisualizationDocument":
        return cls(
            alignment_id=alignment_id,
            worksheet_id=worksheet_id,
            anchors=list(indexed.anchors),
            nodes=list(indexed.nodes),
            links=list(classified.links),
            edge_links=list(classified.edge_links),
            issues=list(classified.issues),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "updateType": UPDATE_TYPE,
            "alignmentId": self.alignment_id,
            "worksheetId": self.worksheet_id,
            "alignObject": {
                "anchors": [a.to_dict() for a in self.anchors],
                "nodes": [n.to_dict() for n in self.nodes],
                "links": [l.to_dict() for l in self.links],
                "edgeLinks": [l.to_dict() for l in self.edge_links],
            },
        }

    def summary(self) -> dict[str, Any]:
        """Counts per collection plus the per-link issues."""
        return {
            "alignmentId": self.alignment_id,
            "worksheetId": self.worksheet_id,
            "anchors": len(self.anchors),
            "placeholderAnchors": sum(1 for a in self.anchors if a.is_placeholder),
            "nodes": len(self.nodes),
            "links": len(self.links),
            "edgeLinks": len(self.edge_links),
            "dropped": count_dropped(self.issues),
            "issues": [str(issue) for issue in self.issues],
        }


class AlignmentVisualizationUpdate:
    """Visualization update for the alignment of one worksheet.

    Two updates are equal when they target the same worksheet, so a
    queue of pending updates keeps at most one per worksheet.
    """

    def __init__(
        self,
        worksheet: Worksheet,
        graph: Optional[AlignmentGraph],
        workspace_id: str,
        deterministic: bool = False,
    ):
        self.worksheet = worksheet
        self.graph = graph
        self.alignment_id = construct_alignment_id(workspace_id, worksheet.id)
        self.indexer = NodeIndexer(deterministic=deterministic)
        self.classifier = EdgeClassifier(deterministic=deterministic)

    @property
    def worksheet_id(self) -> str:
        return self.worksheet.id

    def build(self) -> VisualizationDocument:
        """Index, classify and assemble the document."""
        header_ids = self.worksheet.get_header_visible_leaf_nodes()
        indexed = self.indexer.index(header_ids, self.graph, self.worksheet.headers)
        classified = self.classifier.classify(self.graph, indexed)

        if classified.issues:
            logger.warning(
                "Alignment links dropped from visualization",
                worksheet_id=self.worksheet_id,
                dropped=classified.dropped,
            )

        return VisualizationDocument.assemble(
            alignment_id=self.alignment_id,
            worksheet_id=self.worksheet_id,
            indexed=indexed,
            classified=classified,
        )

    def to_json(self, indent: Optional[int] = None) -> str:
        """
        Serialize the document.

        Raises:
            DocumentEncodingError: If the document cannot be encoded as JSON
        """
        document = self.build().to_dict()
        try:
            return json.dumps(document, indent=indent, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise DocumentEncodingError(
                f"Could not encode visualization for worksheet {self.worksheet_id}: {e}"
            ) from e

    def generate_json(self, sink: TextSink, indent: Optional[int] = None) -> bool:
        """
        Write the document to a sink.

        Nothing is written when encoding fails.

        Returns:
            True if the document was written
        """
        try:
            content = self.to_json(indent=indent)
        except DocumentEncodingError as e:
            logger.error("Error occurred while writing JSON", error=str(e), exc_info=True)
            return False
        sink.write(content)
        return True

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AlignmentVisualizationUpdate):
            return other.worksheet_id == self.worksheet_id
        return False

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.worksheet_id))
