# src/prompts/builder.py — v1
"""Prompt builder: fill a fixed template with user-supplied inputs.

Pure function of (template id, inputs). Presence of required inputs is the
only validation.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from petassist.core.errors import MissingFieldError
from petassist.prompts.templates import PromptTemplate, TemplateId, get_template

_VIDEO_EXTRAS = {
    "emotion_extra": ("Changes in behavior over time", "Vocalizations and sounds"),
    "physical_extra": ("Movement patterns and gait", "Energy levels"),
    "environment_extra": ("Response to environmental changes", "Social interactions if present"),
    "recommendation_extra": ("Behavioral training suggestions if applicable",),
}


def build(template_id: TemplateId | str, inputs: Mapping[str, Any] | None = None) -> str:
    """Render the prompt for a template.

    Raises:
        KeyError: If the template id is unknown.
        MissingFieldError: If a required input is absent or blank.
    """
    template = get_template(template_id)
    inputs = dict(inputs or {})
    _check_required(template, inputs)
    prepare = _PREPARERS.get(template.id, _passthrough)
    return template.body.format(**prepare(inputs))


def _check_required(template: PromptTemplate, inputs: Mapping[str, Any]) -> None:
    for name in template.required:
        if is_blank(inputs.get(name)):
            raise MissingFieldError(name, template.id.value)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def _passthrough(inputs: dict[str, Any]) -> dict[str, Any]:
    return inputs


def _media_values(inputs: dict[str, Any]) -> dict[str, Any]:
    is_video = bool(inputs.get("is_video", False))
    values: dict[str, Any] = {"subject": "video" if is_video else "photo"}
    for placeholder, lines in _VIDEO_EXTRAS.items():
        values[placeholder] = "".join(f"\n   - {line}" for line in lines) if is_video else ""
    return values


def _recipe_values(inputs: dict[str, Any]) -> dict[str, Any]:
    return {"ingredients": join_list(inputs["ingredients"])}


def _growth_values(inputs: dict[str, Any]) -> dict[str, Any]:
    values = dict(inputs)
    height = inputs.get("height")
    if is_blank(height):
        values["height_line"] = ""
        values["height_clause"] = ""
    else:
        values["height_line"] = f"\nHeight: {height} cm"
        values["height_clause"] = " and height"
    return values


def _health_values(inputs: dict[str, Any]) -> dict[str, Any]:
    lines = [f"{field_label(name)}: {format_value(value)}" for name, value in inputs.items()]
    return {"answers": "\n".join(lines)}


def join_list(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    return ", ".join(str(v).strip() for v in value if str(v).strip())


def field_label(name: str) -> str:
    """'last_checkup' -> 'Last Checkup'."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split("_"))


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        return join_list(value) or "None"
    if value is None or value == "":
        return "Not provided"
    return str(value)


_PREPARERS: dict[TemplateId, Callable[[dict[str, Any]], dict[str, Any]]] = {
    TemplateId.MEDIA: _media_values,
    TemplateId.RECIPE: _recipe_values,
    TemplateId.GROWTH: _growth_values,
    TemplateId.HEALTH: _health_values,
}
