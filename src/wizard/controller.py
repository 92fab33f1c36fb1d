# src/wizard/controller.py — v1
"""Multi-section form controller.

Sections are visited with ``next``/``previous``. Field updates land in the
accumulated mapping immediately, whichever section is active. Calling
``next`` on the last section submits instead of moving. Nothing blocks
navigation or submission on incomplete sections; ``missing_fields`` is
available to callers that want to warn first.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Generic, Mapping, Sequence, TypeVar

from petassist.core.errors import InputValidationError, UnknownFieldError
from petassist.wizard.models import FieldSpec, WizardSection, WizardState

logger = logging.getLogger(__name__)

T = TypeVar("T")

SubmitHandler = Callable[[dict[str, Any]], Awaitable[T]]


class WizardController(Generic[T]):
    """Tracks the active section and accumulated answers of a form."""

    def __init__(
        self,
        sections: Sequence[WizardSection],
        on_submit: SubmitHandler[T],
        initial_fields: Mapping[str, Any] | None = None,
    ) -> None:
        if not sections:
            raise ValueError("A wizard needs at least one section")
        self._sections = list(sections)
        self._on_submit = on_submit
        self._specs: dict[str, FieldSpec] = {
            spec.name: spec for section in self._sections for spec in section.fields
        }
        self._state = WizardState(fields=dict(initial_fields or {}))
        self._submitting = False

    # --- State ---

    @property
    def state(self) -> WizardState:
        """Copy of the current state."""
        return self._state.model_copy(deep=True)

    @property
    def index(self) -> int:
        return self._state.current_section_index

    @property
    def section_count(self) -> int:
        return len(self._sections)

    @property
    def current_section(self) -> WizardSection:
        return self._sections[self.index]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == len(self._sections) - 1

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self._state.fields)

    # --- Field updates ---

    def update(self, field: str, value: Any) -> Any:
        """Coerce and store a value; returns the stored value.

        Raises:
            UnknownFieldError: If no section declares the field.
            InputValidationError: If the value does not fit the field kind.
        """
        spec = self._specs.get(field)
        if spec is None:
            raise UnknownFieldError(field)
        coerced = spec.coerce(value)
        self._state.fields[field] = coerced
        return coerced

    def update_many(self, values: Mapping[str, Any]) -> None:
        for field, value in values.items():
            self.update(field, value)

    def label_for(self, field: str) -> str:
        """Display label of a field.

        Raises:
            UnknownFieldError: If no section declares the field.
        """
        spec = self._specs.get(field)
        if spec is None:
            raise UnknownFieldError(field)
        return spec.display_label()

    def missing_fields(self, section_index: int | None = None) -> list[str]:
        """Required fields that are unset or blank."""
        sections = (
            self._sections if section_index is None else [self._sections[section_index]]
        )
        missing = []
        for section in sections:
            for spec in section.fields:
                if spec.required and _is_empty(self._state.fields.get(spec.name)):
                    missing.append(spec.name)
        return missing

    # --- Navigation ---

    async def next(self) -> T | None:
        """Advance one section, or submit when already on the last one."""
        if self.is_last:
            return await self.submit()
        self._state.current_section_index += 1
        logger.debug("Wizard moved to section %d (%s)", self.index, self.current_section.title)
        return None

    def previous(self) -> bool:
        """Go back one section. Returns False (and stays) on the first."""
        if self.is_first:
            return False
        self._state.current_section_index -= 1
        return True

    def go_to(self, index: int) -> None:
        if not 0 <= index < len(self._sections):
            raise InputValidationError(
                f"Section index {index} out of range 0..{len(self._sections) - 1}"
            )
        self._state.current_section_index = index

    async def submit(self) -> T:
        """Hand every accumulated field to the submission handler."""
        if self._submitting:
            raise InputValidationError("Submission already in progress")
        missing = self.missing_fields()
        if missing:
            logger.info(
                "Submitting with unanswered required fields: %s",
                ", ".join(self.label_for(name) for name in missing),
            )
        self._submitting = True
        try:
            return await self._on_submit(dict(self._state.fields))
        finally:
            self._submitting = False


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return not value
    return False
