"""Logistics mass-update request/response schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SelectionOption(BaseModel):
    id: Any = None
    label: Optional[str] = None


class MassUpdateSelections(BaseModel):
    estado: Optional[SelectionOption] = None
    camionero: Optional[SelectionOption] = None
    camion: Optional[SelectionOption] = None
    puntoDistribucion: Optional[str] = None


class MassUpdatePlanRequest(BaseModel):
    comandas: List[dict[str, Any]] = Field(default_factory=list)
    selections: MassUpdateSelections = Field(default_factory=MassUpdateSelections)


class FieldStateModel(BaseModel):
    action: str
    reason: Optional[str] = None
    currentLabel: Optional[str] = None
    nextLabel: Optional[str] = None


class FieldSummaryModel(BaseModel):
    key: str
    label: str
    nextLabel: Optional[str] = None
    updateCount: int
    skipAlreadyAssignedCount: int
    skipNotSelectedCount: int
    skipUnchangedCount: int


class ComandaPlanModel(BaseModel):
    id: Any = None
    numero: Any = None
    cliente: str
    fieldStates: Dict[str, FieldStateModel]
    payload: Dict[str, Any]


class MassUpdatePlanResponse(BaseModel):
    comandas: List[ComandaPlanModel]
    summary: Dict[str, FieldSummaryModel]
    hasChanges: bool
    totalComandas: int


class StateRegressionRequest(BaseModel):
    comandas: List[dict[str, Any]] = Field(default_factory=list)
    nextEstado: Optional[dict[str, Any]] = Field(default=None, description="Target status with its 'orden' rank.")
    restrictedStatuses: Optional[List[str]] = Field(
        default=None,
        description="Status names that cannot be left backwards. Defaults to the configured set.",
    )


class StateRegressionResponse(BaseModel):
    regression: bool


class StatusColorResponse(BaseModel):
    estado: Optional[str] = None
    color: str
