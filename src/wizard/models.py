# src/wizard/models.py — v1
"""Wizard domain models: FieldSpec, WizardSection, WizardState."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from petassist.core.errors import InputValidationError

FieldKind = Literal["text", "number", "integer", "boolean", "list", "choice", "date"]

_TRUE = {"true", "yes", "y", "1", "on"}
_FALSE = {"false", "no", "n", "0", "off", ""}


class FieldSpec(BaseModel):
    """One form field: its name, value kind and (for choices) allowed values."""

    name: str
    kind: FieldKind = "text"
    label: str = ""
    options: list[str] = []
    required: bool = False

    def display_label(self) -> str:
        return self.label or " ".join(w.capitalize() for w in self.name.split("_"))

    def coerce(self, value: Any) -> Any:
        """Convert raw input into the field's value type.

        Raises:
            InputValidationError: If the value cannot be converted.
        """
        if self.kind == "number":
            return _to_number(self.name, value)
        if self.kind == "integer":
            return _to_integer(self.name, value)
        if self.kind == "boolean":
            return _to_bool(self.name, value)
        if self.kind == "list":
            return _to_list(value)
        if self.kind == "choice":
            text = "" if value is None else str(value)
            if text and self.options and text not in self.options:
                raise InputValidationError(
                    f"Field {self.name!r} must be one of {self.options}, got {text!r}"
                )
            return text
        return "" if value is None else str(value)


class WizardSection(BaseModel):
    title: str
    fields: list[FieldSpec]

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


class WizardState(BaseModel):
    """Current position and every value entered so far."""

    current_section_index: int = 0
    fields: dict[str, Any] = Field(default_factory=dict)


def _to_number(name: str, value: Any) -> int | float:
    if isinstance(value, bool):
        raise InputValidationError(f"Field {name!r} expects a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise InputValidationError(
            f"Field {name!r} expects a number, got {value!r}"
        ) from None


def _to_integer(name: str, value: Any) -> int:
    number = _to_number(name, value)
    if isinstance(number, float):
        if not number.is_integer():
            raise InputValidationError(
                f"Field {name!r} expects a whole number, got {value!r}"
            )
        return int(number)
    return number


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise InputValidationError(f"Field {name!r} expects yes/no, got {value!r}")


def _to_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(v) for v in value]
    return [item.strip() for item in items if item.strip()]
