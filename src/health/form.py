# src/health/form.py — v1
"""The eight-section health questionnaire."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

from petassist.health.models import HealthFormData
from petassist.wizard.controller import WizardController
from petassist.wizard.models import FieldSpec, WizardSection

T = TypeVar("T")

BODY_CONDITIONS = ["underweight", "ideal", "overweight", "obese"]

HEALTH_FORM_SECTIONS: list[WizardSection] = [
    WizardSection(
        title="Basic Information",
        fields=[
            FieldSpec(name="name", required=True),
            FieldSpec(name="species", required=True),
            FieldSpec(name="breed"),
            FieldSpec(name="age_years", kind="integer"),
            FieldSpec(name="age_months", kind="integer"),
            FieldSpec(name="gender"),
            FieldSpec(name="photo", label="Pet Photo"),
            FieldSpec(name="photo_url", label="Photo Path"),
        ],
    ),
    WizardSection(
        title="Weight and Body Condition",
        fields=[
            FieldSpec(name="weight", kind="number"),
            FieldSpec(name="weight_unit", kind="choice", options=["kg", "lbs"]),
            FieldSpec(name="weight_changed", kind="boolean"),
            FieldSpec(name="body_condition", kind="choice", options=BODY_CONDITIONS),
        ],
    ),
    WizardSection(
        title="Activity Levels",
        fields=[
            FieldSpec(name="activity_duration", kind="integer"),
            FieldSpec(name="activity_types", kind="list"),
            FieldSpec(name="activity_changed", kind="boolean"),
        ],
    ),
    WizardSection(
        title="Diet and Nutrition",
        fields=[
            FieldSpec(name="food_type"),
            FieldSpec(name="meals_per_day", kind="integer"),
            FieldSpec(name="portion_size"),
            FieldSpec(name="food_allergies", kind="list"),
            FieldSpec(name="treats_per_day", kind="integer"),
        ],
    ),
    WizardSection(
        title="Health History",
        fields=[
            FieldSpec(name="chronic_conditions", kind="list"),
            FieldSpec(name="medications", kind="boolean"),
            FieldSpec(name="surgery_history", kind="boolean"),
            FieldSpec(name="last_checkup", kind="date"),
        ],
    ),
    WizardSection(
        title="Behavioral Observations",
        fields=[
            FieldSpec(name="unusual_behaviors", kind="list"),
            FieldSpec(name="behavioral_issues", kind="list"),
            FieldSpec(name="energy_level"),
        ],
    ),
    WizardSection(
        title="Environmental Factors",
        fields=[
            FieldSpec(name="environment"),
            FieldSpec(name="water_access", kind="boolean"),
            FieldSpec(name="hazards", kind="list"),
        ],
    ),
    WizardSection(
        title="Vaccination and Preventive Care",
        fields=[
            FieldSpec(name="vaccinated", kind="boolean"),
            FieldSpec(name="preventive_care", kind="boolean"),
            FieldSpec(name="last_dental", kind="date"),
        ],
    ),
]


def create_health_wizard(
    on_submit: Callable[[dict[str, Any]], Awaitable[T]],
) -> WizardController[T]:
    """Health questionnaire wizard pre-filled with the form defaults."""
    defaults = HealthFormData().model_dump()
    return WizardController(HEALTH_FORM_SECTIONS, on_submit, initial_fields=defaults)
