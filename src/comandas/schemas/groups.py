"""Pydantic request/response models for comanda grouping endpoints."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field


class GroupingRequest(BaseModel):
    comandas: List[dict[str, Any]] = Field(default_factory=list, description="Populated comanda documents.")
    grouping: List[str] = Field(
        default_factory=list,
        description="Ordered grouping dimensions; unknown or repeated names are ignored.",
    )


class GroupPathModel(BaseModel):
    columnId: str
    label: str
    key: str


class GroupNodeModel(BaseModel):
    id: str
    columnId: str
    label: str
    rawValue: Any = None
    key: str
    count: int
    cantidadTotal: int | float
    path: List[GroupPathModel]
    groups: List["GroupNodeModel"]
    comandas: List[dict[str, Any]]


class GroupingResponse(BaseModel):
    grouping: List[str]
    total: int
    groups: List[GroupNodeModel]


class GroupingColumnsResponse(BaseModel):
    columns: List[str]
