"""Comanda grouping endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response

from ...schemas.groups import GroupingColumnsResponse, GroupingRequest, GroupingResponse
from ...services.grouping import ALLOWED_GROUPING_COLUMNS, build_comanda_groups, sanitize_grouping
from ...services.outputs.formatter import groups_to_csv, groups_to_json

router = APIRouter(prefix="/comandas/groups", tags=["comandas"])


@router.get("/columns", response_model=GroupingColumnsResponse, status_code=status.HTTP_200_OK)
def list_grouping_columns() -> GroupingColumnsResponse:
    return GroupingColumnsResponse(columns=list(ALLOWED_GROUPING_COLUMNS))


@router.post("", response_model=GroupingResponse, status_code=status.HTTP_200_OK)
def group_comandas(payload: GroupingRequest) -> GroupingResponse:
    try:
        groups = build_comanda_groups(payload.comandas, payload.grouping)
    except Exception as exc:
        logging.exception(f"Error grouping comandas: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to group comandas: {str(exc)}",
        ) from exc

    return GroupingResponse.model_validate(
        {
            "grouping": sanitize_grouping(payload.grouping),
            "total": len(payload.comandas),
            "groups": groups_to_json(groups),
        }
    )


@router.post("/export", response_class=Response, status_code=status.HTTP_200_OK)
def export_comanda_groups(payload: GroupingRequest) -> Response:
    """Download the leaf groups of a grouping as CSV."""
    grouping = sanitize_grouping(payload.grouping)
    if not grouping:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At least one grouping column is required. Allowed: {', '.join(ALLOWED_GROUPING_COLUMNS)}",
        )

    groups = build_comanda_groups(payload.comandas, grouping)
    return Response(
        content=groups_to_csv(groups, grouping),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="comandas_agrupadas.csv"'},
    )
