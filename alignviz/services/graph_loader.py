"""Loading alignment graphs from JSON descriptions.

The export itself never builds graphs; this loader exists so that a graph
computed elsewhere (and its worksheet headers) can be handed to the API
or the CLI as a JSON document.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from alignviz.logging_config import get_logger
from alignviz.models import (
    AlignmentGraph,
    HeaderNode,
    HeaderTable,
    Label,
    Link,
    LinkKeyInfo,
    LinkStatus,
    LinkType,
    Node,
    NodeType,
    Worksheet,
)

logger = get_logger(__name__)


class GraphFormatError(ValueError):
    """Raised when a graph description is malformed."""


# ---------------------------------------------------------------------------
# Payload Models
# ---------------------------------------------------------------------------


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class HeaderPayload(_Payload):
    """A source-table header column."""

    id: str = Field(..., description="Header id")
    column_name: str = Field(..., alias="columnName", description="Header display name")


class LabelPayload(_Payload):
    """Ontology label of a link."""

    uri: str = Field("", description="Property URI")
    local_name: Optional[str] = Field(
        None, alias="localName", description="Local name (defaults to the URI fragment)"
    )


class NodePayload(_Payload):
    """A vertex of the alignment graph."""

    id: str = Field(..., description="Globally unique node id")
    label: str = Field("", description="Display label")
    uri: str = Field("", description="Ontology class URI")
    type: NodeType = Field(NodeType.INTERNAL_NODE, description="Node kind")
    is_forced: bool = Field(False, alias="isForced", description="Pinned by the user")
    hnode_id: Optional[str] = Field(None, alias="hNodeId", description="Bound header (column nodes)")
    column_name: Optional[str] = Field(None, alias="columnName", description="Bound header name")


class LinkPayload(_Payload):
    """A directed edge of the alignment graph."""

    id: str = Field(..., description="Link id")
    source: str = Field(..., description="Source node id")
    target: str = Field(..., description="Target node id")
    label: LabelPayload = Field(default_factory=LabelPayload)
    status: LinkStatus = Field(LinkStatus.NORMAL)
    key_info: LinkKeyInfo = Field(LinkKeyInfo.NONE, alias="keyInfo")
    type: LinkType = Field(LinkType.NONE)
    specialized_link_id: Optional[str] = Field(None, alias="specializedLinkId")
    weight: float = Field(1.0)


class AlignmentPayload(_Payload):
    """A worksheet's headers together with its alignment graph."""

    workspace_id: str = Field(..., alias="workspaceId")
    worksheet_id: str = Field(..., alias="worksheetId")
    headers: list[HeaderPayload] = Field(default_factory=list)
    visible_headers: Optional[list[str]] = Field(
        None,
        alias="visibleHeaders",
        description="Visible leaf header ids in column order (defaults to headers order)",
    )
    nodes: list[NodePayload] = Field(default_factory=list)
    links: list[LinkPayload] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


@dataclass
class AlignmentSnapshot:
    """A consistent snapshot of a worksheet and its alignment graph."""

    workspace_id: str
    worksheet: Worksheet
    graph: AlignmentGraph


def load_alignment(payload: Union[AlignmentPayload, Mapping[str, Any]]) -> AlignmentSnapshot:
    """
    Build a worksheet and alignment graph from a description.

    Args:
        payload: AlignmentPayload or a mapping with the same shape

    Returns:
        AlignmentSnapshot

    Raises:
        GraphFormatError: If the description is malformed
    """
    if not isinstance(payload, AlignmentPayload):
        try:
            payload = AlignmentPayload.model_validate(payload)
        except ValidationError as e:
            raise GraphFormatError(f"Invalid alignment description: {e}") from e

    worksheet = _build_worksheet(payload)
    graph = _build_graph(payload)

    logger.debug(
        "Loaded alignment",
        worksheet_id=worksheet.id,
        headers=len(worksheet.visible_header_ids),
        nodes=graph.node_count,
        links=graph.link_count,
    )
    return AlignmentSnapshot(
        workspace_id=payload.workspace_id,
        worksheet=worksheet,
        graph=graph,
    )


def load_alignment_file(path: Union[str, Path]) -> AlignmentSnapshot:
    """Load an alignment description from a JSON file."""
    try:
        with open(path, "rb") as f:
            data = orjson.loads(f.read())
    except orjson.JSONDecodeError as e:
        raise GraphFormatError(f"JSON decode error in {path}: {e}") from e
    except OSError as e:
        raise GraphFormatError(f"Error reading {path}: {e}") from e

    if not isinstance(data, dict):
        raise GraphFormatError(f"Expected a JSON object in {path}")
    return load_alignment(data)


def _build_worksheet(payload: AlignmentPayload) -> Worksheet:
    headers = HeaderTable()
    for header in payload.headers:
        if header.id in headers:
            raise GraphFormatError(f"Duplicate header id: {header.id}")
        headers.add(HeaderNode(id=header.id, column_name=header.column_name))

    if payload.visible_headers is None:
        visible = [h.id for h in payload.headers]
    else:
        visible = list(payload.visible_headers)
        unknown = [h for h in visible if h not in headers]
        if unknown:
            raise GraphFormatError(f"Visible headers not declared: {', '.join(unknown)}")

    return Worksheet(id=payload.worksheet_id, headers=headers, visible_header_ids=visible)


def _build_graph(payload: AlignmentPayload) -> AlignmentGraph:
    graph = AlignmentGraph()

    for item in payload.nodes:
        if item.id in graph:
            raise GraphFormatError(f"Duplicate node id: {item.id}")
        if item.type == NodeType.COLUMN_NODE:
            if not item.hnode_id:
                raise GraphFormatError(f"Column node {item.id} has no hNodeId")
            node = Node.column(
                id=item.id,
                hnode_id=item.hnode_id,
                local_label=item.label,
                column_name=item.column_name,
                domain_uri=item.uri,
                is_forced=item.is_forced,
            )
        else:
            node = Node(
                id=item.id,
                local_label=item.label or Label.from_uri(item.uri).local_name or item.id,
                domain_uri=item.uri,
                is_forced=item.is_forced,
                node_type=item.type,
            )
        graph.add_node(node)

    seen_links: set[str] = set()
    for item in payload.links:
        if item.id in seen_links:
            raise GraphFormatError(f"Duplicate link id: {item.id}")
        seen_links.add(item.id)

        if item.type.is_specialization and not item.specialized_link_id:
            raise GraphFormatError(
                f"{item.type.value} link {item.id} has no specializedLinkId"
            )

        label = Label.from_uri(item.label.uri)
        if item.label.local_name is not None:
            label = Label(uri=item.label.uri, local_name=item.label.local_name)

        link = Link(
            id=item.id,
            source_id=item.source,
            target_id=item.target,
            label=label,
            status=item.status,
            key_info=item.key_info,
            link_type=item.type,
            specialized_link_id=item.specialized_link_id,
            weight=item.weight,
        )
        try:
            graph.add_link(link)
        except KeyError as e:
            raise GraphFormatError(e.args[0]) from e

    return graph
