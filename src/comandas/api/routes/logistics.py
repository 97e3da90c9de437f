"""Logistics mass-update endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...schemas.logistics import (
    MassUpdatePlanRequest,
    MassUpdatePlanResponse,
    StateRegressionRequest,
    StateRegressionResponse,
    StatusColorResponse,
)
from ...services.logistics import (
    build_mass_update_plan,
    detect_state_regression,
    get_logistics_status_color,
    normalize_estado_nombre,
)
from ...services.outputs.formatter import mass_update_plan_to_json

router = APIRouter(prefix="/logistics", tags=["logistics"])


@router.post("/mass-update/plan", response_model=MassUpdatePlanResponse, status_code=status.HTTP_200_OK)
def plan_mass_update(payload: MassUpdatePlanRequest) -> MassUpdatePlanResponse:
    """Preview which fields a mass update would change for each comanda.

    Nothing is persisted: the caller applies each comanda's ``payload``.
    """
    try:
        plan = build_mass_update_plan(payload.comandas, payload.selections.model_dump())
    except Exception as exc:
        logging.exception(f"Error planning mass update: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan mass update: {str(exc)}",
        ) from exc
    return MassUpdatePlanResponse.model_validate(mass_update_plan_to_json(plan))


@router.post("/state-regression", response_model=StateRegressionResponse, status_code=status.HTTP_200_OK)
def check_state_regression(payload: StateRegressionRequest) -> StateRegressionResponse:
    restricted = None
    if payload.restrictedStatuses is not None:
        restricted = {normalize_estado_nombre(name) for name in payload.restrictedStatuses}

    regression = detect_state_regression(
        payload.comandas,
        payload.nextEstado,
        restricted_status_set=restricted,
    )
    return StateRegressionResponse(regression=regression)


@router.get("/status-color", response_model=StatusColorResponse, status_code=status.HTTP_200_OK)
def status_color(estado: str | None = Query(default=None, description="Status name to classify")) -> StatusColorResponse:
    return StatusColorResponse(estado=estado, color=get_logistics_status_color(estado))
