# src/health/models.py — v1
"""Health assessment domain models: questionnaire answers and analysis result."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

Severity = Literal["Low", "Moderate", "High"]


class HealthFormData(BaseModel):
    """Answers of the health questionnaire, with the form's defaults."""

    # Basic information
    name: str = ""
    species: str = ""
    breed: str = ""
    age_years: int = 0
    age_months: int = 0
    gender: str = ""
    photo: str | None = None  # data URL, uploaded on submit
    photo_url: str | None = None

    # Weight and body condition
    weight: float = 0
    weight_unit: Literal["kg", "lbs"] = "kg"
    weight_changed: bool = False
    body_condition: str = ""

    # Activity
    activity_duration: int = 0
    activity_types: list[str] = []
    activity_changed: bool = False

    # Diet
    food_type: str = ""
    meals_per_day: int = 2
    portion_size: str = ""
    food_allergies: list[str] = []
    treats_per_day: int = 0

    # Health history
    chronic_conditions: list[str] = []
    medications: bool = False
    surgery_history: bool = False
    last_checkup: str = ""

    # Behavior
    unusual_behaviors: list[str] = []
    behavioral_issues: list[str] = []
    energy_level: str = ""

    # Environment
    environment: str = ""
    water_access: bool = True
    hazards: list[str] = []

    # Preventive care
    vaccinated: bool = False
    preventive_care: bool = False
    last_dental: str = ""


class StructuredHealthAnalysis(BaseModel):
    """Analysis split into its four sections."""

    kind: Literal["structured"] = "structured"
    prediction: str
    risks: list[str] = []
    recommendations: list[str] = []
    severity: Severity = "Low"
    source: Literal["delimited", "paragraphs"] = "delimited"


class UnparsedHealthAnalysis(BaseModel):
    """Model reply that could not be split into sections; text kept verbatim."""

    kind: Literal["unparsed"] = "unparsed"
    text: str
    reason: str

    @property
    def prediction(self) -> str:
        return self.text

    @property
    def severity(self) -> Severity:
        return "Low"


HealthAnalysis = Annotated[
    Union[StructuredHealthAnalysis, UnparsedHealthAnalysis],
    Field(discriminator="kind"),
]
