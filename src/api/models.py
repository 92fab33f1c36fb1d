# src/api/models.py — v1
"""Public input models for the structured assistant features."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class TreatRequest(BaseModel):
    """Ingredients available at home for a treat recipe."""

    ingredients: list[str] = Field(min_length=1)

    @field_validator("ingredients")
    @classmethod
    def strip_ingredients(cls, v: list[str]) -> list[str]:  # noqa: N805
        cleaned = [i.strip() for i in v if i.strip()]
        if not cleaned:
            raise ValueError("at least one ingredient is required")
        return cleaned


class MemorialInfo(BaseModel):
    """Details for a memorial tribute."""

    name: str = Field(min_length=1)
    species: str = Field(min_length=1)
    years: int = Field(ge=0)
    description: str = Field(min_length=1)


class GrowthData(BaseModel):
    """Growth measurements compared against breed standards."""

    species: Literal["dog", "cat"] = "dog"
    breed: str = Field(min_length=1)
    age: int = Field(ge=0, description="Age in months")
    weight: float = Field(ge=0, description="Weight in kg")
    height: float | None = Field(default=None, ge=0, description="Height in cm")
