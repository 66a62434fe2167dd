"""API routers for the Alignment Visualization Server."""

from alignviz.api.routers import alignment, health

__all__ = [
    "alignment",
    "health",
]
