"""Alignment visualization API endpoints.

Turns a posted worksheet + alignment graph description into the
visualization document the schema-mapping diagram is drawn from.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response

from alignviz.api.exceptions import ExportError, ValidationError_
from alignviz.api.schemas.alignment import AlignmentPayload, VisualizationSummary
from alignviz.config import Settings, get_settings
from alignviz.services.graph_loader import AlignmentSnapshot, GraphFormatError, load_alignment
from alignviz.services.visualization import AlignmentVisualizationUpdate, DocumentEncodingError

router = APIRouter(prefix="/alignment")

SettingsDep = Annotated[Settings, Depends(get_settings)]


def _build_update(
    payload: AlignmentPayload,
    settings: Settings,
    deterministic: Optional[bool],
) -> AlignmentVisualizationUpdate:
    try:
        snapshot: AlignmentSnapshot = load_alignment(payload)
    except GraphFormatError as e:
        raise ValidationError_(str(e))

    return AlignmentVisualizationUpdate(
        worksheet=snapshot.worksheet,
        graph=snapshot.graph,
        workspace_id=snapshot.workspace_id,
        deterministic=settings.deterministic_ordering if deterministic is None else deterministic,
    )


@router.post("/visualization")
async def export_visualization(
    payload: AlignmentPayload,
    settings: SettingsDep,
    deterministic: Optional[bool] = Query(
        None,
        description="Sort non-anchor nodes and links by id (defaults to server setting)",
    ),
) -> Response:
    """
    Export the visualization document for a worksheet's alignment.

    The response contains:
    - **anchors**: one per visible header, in column order
    - **nodes**: every other non-column node of the graph
    - **links**: normal and holder links, endpoints given as indices
    - **edgeLinks**: specialization links, sourced by the id of the link they refine

    Links with an endpoint outside the index space are left out.
    """
    update = _build_update(payload, settings, deterministic)

    try:
        content = update.to_json(indent=settings.json_indent)
    except DocumentEncodingError as e:
        raise ExportError(str(e), worksheet_id=update.worksheet_id)

    return Response(content=content, media_type="application/json")


@router.post("/visualization/summary", response_model=VisualizationSummary)
async def summarize_visualization(
    payload: AlignmentPayload,
    settings: SettingsDep,
    deterministic: Optional[bool] = Query(None),
) -> VisualizationSummary:
    """Counts per collection of the visualization document, plus dropped links."""
    update = _build_update(payload, settings, deterministic)
    return VisualizationSummary.model_validate(update.build().summary())
