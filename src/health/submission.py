# src/health/submission.py — v1
"""Health questionnaire submission: persist, analyze, persist the prediction.

Steps, each awaited in order:
  1. upload the pet photo to the ``pet-photos`` bucket, when one was given,
  2. insert the pet (birth date derived from the stated age),
  3. insert the health record,
  4. run the AI health analysis,
  5. insert the prediction linked to the health record.

Any failure aborts the remaining steps and surfaces as
SubmissionFailedError; rows already inserted are left in place.
"""

from __future__ import annotations

import base64
import logging
import mimetypes
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Mapping

from pydantic import BaseModel, ValidationError

from petassist.core.errors import PetAssistError, RecordStoreError, SubmissionFailedError
from petassist.gateway.models import split_data_url
from petassist.health.models import HealthAnalysis, HealthFormData
from petassist.storage.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30.44
PHOTO_BUCKET = "pet-photos"

PET_FIELDS = ("name", "species", "breed", "gender", "photo_url")
HEALTH_RECORD_FIELDS = (
    "weight", "weight_unit", "body_condition",
    "activity_duration", "activity_types",
    "food_type", "meals_per_day", "portion_size", "food_allergies", "treats_per_day",
    "chronic_conditions", "medications", "surgery_history", "last_checkup",
    "unusual_behaviors", "behavioral_issues", "energy_level",
    "environment", "water_access", "hazards",
    "vaccinated", "preventive_care", "last_dental",
)

Analyzer = Callable[[HealthFormData], Awaitable[HealthAnalysis]]


class HealthSubmissionResult(BaseModel):
    pet: dict[str, Any]
    health_record: dict[str, Any]
    prediction: dict[str, Any]
    analysis: HealthAnalysis


def estimate_birth_date(age_years: int, age_months: int, today: date) -> date:
    months = age_years * 12 + age_months
    return today - timedelta(days=months * DAYS_PER_MONTH)


class HealthAssessmentSubmitter:
    """Submission handler for the health questionnaire wizard."""

    def __init__(
        self,
        store: BaseRecordStore,
        analyze: Analyzer,
        today: Callable[[], date] = lambda: datetime.now(timezone.utc).date(),
    ) -> None:
        self._store = store
        self._analyze = analyze
        self._today = today

    async def __call__(self, fields: Mapping[str, Any]) -> HealthSubmissionResult:
        return await self.submit(fields)

    async def submit(self, fields: Mapping[str, Any]) -> HealthSubmissionResult:
        try:
            form = HealthFormData(**fields)
            if form.photo:
                path = await self._upload_photo(form.photo)
                form = form.model_copy(update={"photo": None, "photo_url": path})
            pet = await self._insert("pets", self._pet_row(form))
            record = await self._insert(
                "health_records",
                {"pet_id": pet["id"], **form.model_dump(include=set(HEALTH_RECORD_FIELDS))},
            )
            analysis = await self._analyze(form)
            prediction = await self._insert(
                "health_predictions",
                {
                    "health_record_id": record["id"],
                    "prediction_text": analysis.prediction,
                    "risk_factors": getattr(analysis, "risks", []),
                    "recommendations": getattr(analysis, "recommendations", []),
                    "severity": analysis.severity,
                },
            )
        except (PetAssistError, ValidationError) as e:
            logger.error("Error submitting health data: %s", e, exc_info=True)
            raise SubmissionFailedError() from e

        logger.info(
            "Health assessment stored: pet=%s record=%s severity=%s",
            pet["id"], record["id"], analysis.severity,
        )
        return HealthSubmissionResult(
            pet=pet, health_record=record, prediction=prediction, analysis=analysis
        )

    def _pet_row(self, form: HealthFormData) -> dict[str, Any]:
        row = form.model_dump(include=set(PET_FIELDS))
        row["birth_date"] = estimate_birth_date(
            form.age_years, form.age_months, self._today()
        ).isoformat()
        return row

    async def _insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        stored = await self._store.insert(table, row)
        if "id" not in stored:
            raise RecordStoreError(f"Insert into {table!r} returned a row without an id")
        return stored

    async def _upload_photo(self, data_url: str) -> str:
        mime, body = split_data_url(data_url)
        content_type = mime or "image/jpeg"
        ext = mimetypes.guess_extension(content_type) or ".jpg"
        name = f"{uuid.uuid4().hex}{ext}"
        path = await self._store.upload(
            PHOTO_BUCKET, name, base64.b64decode(body), content_type
        )
        logger.debug("Pet photo stored as %s/%s", PHOTO_BUCKET, path)
        return path
