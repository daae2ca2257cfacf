"""Pydantic schemas for flag metadata returned by the API."""

from __future__ import annotations

from typing import Any, Dict, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

FlagId = Literal[
    "abrosexual",
    "ace",
    "agender",
    "aromantic",
    "bi",
    "genderfluid",
    "genderqueer",
    "intersex",
    "lesbian",
    "nb",
    "pan",
    "poc",
    "pride",
    "trans",
]

FLAG_IDS: tuple[str, ...] = get_args(FlagId)

# Raw ``flags`` body: {"pride": {"defaultAlpha": 0.5, "tooltip": "..."}, ...}
FlagResponse = Dict[str, Dict[str, Any]]


class FlagDescriptor(BaseModel):
    """Read-only description of one flag as served by the API."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    key: str = Field(..., description="Flag identifier (one of FLAG_IDS).")
    default_alpha: float = Field(
        ...,
        alias="defaultAlpha",
        description="Opacity the API applies when no alpha is sent.",
    )
    tooltip: str = Field(..., description="Human-readable flag name.")
