"""Data model for alignment graphs and worksheets."""

from alignviz.models.alignment import (
    SPECIALIZATION_LINK_TYPES,
    Label,
    Link,
    LinkKeyInfo,
    LinkStatus,
    LinkType,
    Node,
    NodeType,
)
from alignviz.models.graph import AlignmentGraph
from alignviz.models.worksheet import HeaderNode, HeaderResolver, HeaderTable, Worksheet

__all__ = [
    "AlignmentGraph",
    "HeaderNode",
    "HeaderResolver",
    "HeaderTable",
    "Label",
    "Link",
    "LinkKeyInfo",
    "LinkStatus",
    "LinkType",
    "Node",
    "NodeType",
    "SPECIALIZATION_LINK_TYPES",
    "Worksheet",
]
