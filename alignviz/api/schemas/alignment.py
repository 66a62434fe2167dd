"""Pydantic schemas for alignment visualization."""

from pydantic import BaseModel, ConfigDict, Field

from alignviz.services.graph_loader import (
    AlignmentPayload,
    HeaderPayload,
    LabelPayload,
    LinkPayload,
    NodePayload,
)

__all__ = [
    "AlignmentPayload",
    "HeaderPayload",
    "LabelPayload",
    "LinkPayload",
    "NodePayload",
    "VisualizationSummary",
]


class VisualizationSummary(BaseModel):
    """Counts of an exported visualization document."""

    model_config = ConfigDict(populate_by_name=True)

    alignment_id: str = Field(..., alias="alignmentId")
    worksheet_id: str = Field(..., alias="worksheetId")
    anchors: int = Field(..., description="Anchor slots (one per visible header)")
    placeholder_anchors: int = Field(
        ..., alias="placeholderAnchors", description="Headers without a bound column node"
    )
    nodes: int = Field(..., description="Non-anchor nodes")
    links: int = Field(..., description="Normal and holder links")
    edge_links: int = Field(..., alias="edgeLinks", description="Specialization links")
    dropped: int = Field(..., description="Links dropped for unresolved endpoints")
    issues: list[str] = Field(default_factory=list)
