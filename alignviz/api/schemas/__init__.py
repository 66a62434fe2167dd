"""Pydantic schemas for API request/response validation."""

from alignviz.api.schemas.alignment import (
    AlignmentPayload,
    HeaderPayload,
    LabelPayload,
    LinkPayload,
    NodePayload,
    VisualizationSummary,
)

__all__ = [
    "AlignmentPayload",
    "HeaderPayload",
    "LabelPayload",
    "LinkPayload",
    "NodePayload",
    "VisualizationSummary",
]
