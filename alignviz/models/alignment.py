"""Nodes and links of a semantic alignment graph."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NodeType(str, Enum):
    """Kinds of alignment graph nodes."""

    NONE = "None"
    INTERNAL_NODE = "InternalNode"
    COLUMN_NODE = "ColumnNode"
    LITERAL_NODE = "LiteralNode"


class LinkType(str, Enum):
    """Kinds of alignment graph links."""

    NONE = "None"
    DATA_PROPERTY_LINK = "DataPropertyLink"
    OBJECT_PROPERTY_LINK = "ObjectPropertyLink"
    SUB_CLASS_LINK = "SubClassLink"
    CLASS_INSTANCE_LINK = "ClassInstanceLink"
    COLUMN_SUB_CLASS_LINK = "ColumnSubClassLink"
    COMPACT_OBJECT_PROPERTY_LINK = "CompactObjectPropertyLink"
    COMPACT_SUB_CLASS_LINK = "CompactSubClassLink"
    OBJECT_PROPERTY_SPECIALIZATION_LINK = "ObjectPropertySpecializationLink"
    DATA_PROPERTY_OF_COLUMN_LINK = "DataPropertyOfColumnLink"

    @property
    def is_specialization(self) -> bool:
        """Specialization links refine another link, referenced by id."""
        return self in SPECIALIZATION_LINK_TYPES


SPECIALIZATION_LINK_TYPES = frozenset(
    {
        LinkType.OBJECT_PROPERTY_SPECIALIZATION_LINK,
        LinkType.DATA_PROPERTY_OF_COLUMN_LINK,
    }
)


class LinkStatus(str, Enum):
    """How a link came to be part of the alignment."""

    NORMAL = "Normal"
    PREFERRED_BY_UI = "PreferredByUI"
    FORCED_BY_USER = "ForcedByUser"


class LinkKeyInfo(str, Enum):
    """Key annotation on a link."""

    NONE = "None"
    PART_OF_KEY = "PartOfKey"
    URI_OF_INSTANCE = "UriOfInstance"


@dataclass(frozen=True)
class Label:
    """Ontology label of a node or link."""

    uri: str = ""
    local_name: str = ""

    @classmethod
    def from_uri(cls, uri: str) -> "Label":
        """Build a label whose local name is the URI fragment."""
        if not uri:
            return cls()
        for separator in ("#", "/", ":"):
            if separator in uri:
                return cls(uri=uri, local_name=uri.rsplit(separator, 1)[1])
        return cls(uri=uri, local_name=uri)


@dataclass(frozen=True)
class Node:
    """A vertex of the alignment graph.

    ``node_type`` is the discriminator. Column nodes additionally carry the
    header they are bound to (``hnode_id``) and its display name.
    """

    id: str
    local_label: str = ""
    domain_uri: str = ""
    is_forced: bool = False
    node_type: NodeType = NodeType.INTERNAL_NODE
    hnode_id: Optional[str] = None
    column_name: Optional[str] = None

    @property
    def is_column_node(self) -> bool:
        return self.node_type == NodeType.COLUMN_NODE

    @classmethod
    def column(
        cls,
        id: str,
        hnode_id: str,
        local_label: str = "",
        column_name: Optional[str] = None,
        domain_uri: str = "",
        is_forced: bool = False,
    ) -> "Node":
        """Create a column node bound to a source-table header."""
        return cls(
            id=id,
            local_label=local_label or column_name or id,
            domain_uri=domain_uri,
            is_forced=is_forced,
            node_type=NodeType.COLUMN_NODE,
            hnode_id=hnode_id,
            column_name=column_name,
        )


@dataclass(frozen=True)
class Link:
    """A directed, labeled edge of the alignment graph."""

    id: str
    source_id: str
    target_id: str
    label: Label = Label()
    status: LinkStatus = LinkStatus.NORMAL
    key_info: LinkKeyInfo = LinkKeyInfo.NONE
    link_type: LinkType = LinkType.NONE
    specialized_link_id: Optional[str] = None
    weight: float = 1.0

    def __post_init__(self) -> None:
        if self.link_type.is_specialization and not self.specialized_link_id:
            raise ValueError(
                f"{self.link_type.value} link {self.id} requires a specialized_link_id"
            )
