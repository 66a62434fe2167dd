"""Alignment visualization services."""

from alignviz.services.edge_classifier import (
    HOLDER_LINK,
    ClassifiedLinks,
    EdgeClassifier,
    ExportIssue,
    LinkCategory,
    LinkRecord,
)
from alignviz.services.graph_loader import (
    AlignmentPayload,
    AlignmentSnapshot,
    GraphFormatError,
    load_alignment,
    load_alignment_file,
)
from alignviz.services.node_indexer import (
    ColumnAnchor,
    IndexedNodes,
    NodeIndexer,
    NodeRecord,
    PlaceholderAnchor,
)
from alignviz.services.published_metadata import (
    AlignmentVisualizationMetadata,
    AvroMetadata,
    PublishMetadataType,
    PublishPathError,
    get_published_metadata,
)
from alignviz.services.visualization import (
    UPDATE_TYPE,
    AlignmentVisualizationUpdate,
    DocumentEncodingError,
    VisualizationDocument,
    construct_alignment_id,
)

__all__ = [
    "AlignmentPayload",
    "AlignmentSnapshot",
    "AlignmentVisualizationMetadata",
    "AlignmentVisualizationUpdate",
    "AvroMetadata",
    "ClassifiedLinks",
    "ColumnAnchor",
    "DocumentEncodingError",
    "EdgeClassifier",
    "ExportIssue",
    "GraphFormatError",
    "HOLDER_LINK",
    "IndexedNodes",
    "LinkCategory",
    "LinkRecord",
    "NodeIndexer",
    "NodeRecord",
    "PlaceholderAnchor",
    "PublishMetadataType",
    "PublishPathError",
    "UPDATE_TYPE",
    "VisualizationDocument",
    "construct_alignment_id",
    "get_published_metadata",
    "load_alignment",
    "load_alignment_file",
]
