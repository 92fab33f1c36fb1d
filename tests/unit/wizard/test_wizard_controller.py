# tests/unit/wizard/test_wizard_controller.py — v1
"""Tests for wizard/ — field coercion, navigation bounds, submission."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from petassist.core.errors import InputValidationError, UnknownFieldError
from petassist.wizard.controller import WizardController
from petassist.wizard.models import FieldSpec, WizardSection


@pytest.fixture
def sections() -> list[WizardSection]:
    return [
        WizardSection(
            title="Basics",
            fields=[FieldSpec(name="name", required=True), FieldSpec(name="age", kind="number")],
        ),
        WizardSection(title="Diet", fields=[FieldSpec(name="allergies", kind="list")]),
        WizardSection(
            title="Care",
            fields=[
                FieldSpec(name="vaccinated", kind="boolean"),
                FieldSpec(name="size", kind="choice", options=["small", "large"]),
            ],
        ),
    ]


@pytest.fixture
def on_submit() -> AsyncMock:
    return AsyncMock(return_value="submitted")


@pytest.fixture
def wizard(sections, on_submit) -> WizardController[str]:
    return WizardController(sections, on_submit)


class TestFieldSpec:
    def test_number_from_string(self):
        spec = FieldSpec(name="age", kind="number")
        assert spec.coerce("3") == 3
        assert spec.coerce("2.5") == 2.5

    def test_number_rejects_text_and_bool(self):
        spec = FieldSpec(name="age", kind="number")
        with pytest.raises(InputValidationError):
            spec.coerce("three")
        with pytest.raises(InputValidationError):
            spec.coerce(True)

    def test_integer_accepts_whole_numbers_only(self):
        spec = FieldSpec(name="meals", kind="integer")
        assert spec.coerce("3") == 3
        assert spec.coerce(4.0) == 4
        with pytest.raises(InputValidationError):
            spec.coerce("2.5")

    def test_boolean(self):
        spec = FieldSpec(name="v", kind="boolean")
        assert spec.coerce("Yes") is True
        assert spec.coerce("off") is False
        with pytest.raises(InputValidationError):
            spec.coerce("maybe")

    def test_list_from_comma_string(self):
        assert FieldSpec(name="a", kind="list").coerce("chicken, , beef ") == ["chicken", "beef"]

    def test_choice(self):
        spec = FieldSpec(name="s", kind="choice", options=["small", "large"])
        assert spec.coerce("small") == "small"
        assert spec.coerce("") == ""
        with pytest.raises(InputValidationError):
            spec.coerce("medium")

    def test_display_label(self):
        assert FieldSpec(name="last_checkup").display_label() == "Last Checkup"
        assert FieldSpec(name="photo_url", label="Pet Photo").display_label() == "Pet Photo"

    def test_controller_label_for(self, sections):
        controller = WizardController(sections, AsyncMock())
        assert controller.label_for("name") == "Name"
        with pytest.raises(UnknownFieldError):
            controller.label_for("colour")


class TestNavigation:
    def test_starts_at_first_section(self, wizard):
        assert wizard.index == 0
        assert wizard.is_first
        assert wizard.current_section.title == "Basics"

    def test_previous_on_first_is_noop(self, wizard):
        assert wizard.previous() is False
        assert wizard.index == 0

    @pytest.mark.asyncio
    async def test_next_advances(self, wizard, on_submit):
        assert await wizard.next() is None
        assert wizard.index == 1
        on_submit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_next_on_last_submits(self, wizard, on_submit):
        wizard.go_to(2)
        result = await wizard.next()
        assert result == "submitted"
        assert wizard.index == 2
        on_submit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_previous_after_next(self, wizard):
        await wizard.next()
        assert wizard.previous() is True
        assert wizard.index == 0

    def test_go_to_out_of_range(self, wizard):
        with pytest.raises(InputValidationError):
            wizard.go_to(3)
        with pytest.raises(InputValidationError):
            wizard.go_to(-1)

    def test_empty_sections_rejected(self, on_submit):
        with pytest.raises(ValueError):
            WizardController([], on_submit)


class TestFields:
    def test_update_is_immediate_and_coerced(self, wizard):
        assert wizard.update("age", "4") == 4
        assert wizard.fields["age"] == 4

    def test_update_field_from_another_section(self, wizard):
        wizard.update("vaccinated", "yes")
        assert wizard.fields["vaccinated"] is True
        assert wizard.index == 0

    def test_unknown_field(self, wizard):
        with pytest.raises(UnknownFieldError):
            wizard.update("color", "brown")

    def test_invalid_value_leaves_state_unchanged(self, wizard):
        wizard.update("age", 2)
        with pytest.raises(InputValidationError):
            wizard.update("age", "old")
        assert wizard.fields["age"] == 2

    def test_state_is_a_copy(self, wizard):
        wizard.update("allergies", ["corn"])
        state = wizard.state
        state.fields["allergies"].append("soy")
        assert wizard.fields["allergies"] == ["corn"]

    def test_missing_fields(self, wizard):
        assert wizard.missing_fields() == ["name"]
        wizard.update("name", "Milo")
        assert wizard.missing_fields() == []
        assert wizard.missing_fields(section_index=1) == []

    def test_initial_fields(self, sections, on_submit):
        w = WizardController(sections, on_submit, initial_fields={"name": "Rex"})
        assert w.fields["name"] == "Rex"


class TestSubmit:
    @pytest.mark.asyncio
    async def test_submit_passes_all_fields(self, wizard, on_submit):
        wizard.update_many({"name": "Milo", "allergies": "corn", "vaccinated": True})
        await wizard.submit()
        submitted = on_submit.await_args.args[0]
        assert submitted == {"name": "Milo", "allergies": ["corn"], "vaccinated": True}

    @pytest.mark.asyncio
    async def test_submit_not_blocked_by_missing_required(self, wizard, on_submit):
        await wizard.submit()
        on_submit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_flag_reset_after_failure(self, sections):
        handler = AsyncMock(side_effect=RuntimeError("db down"))
        w = WizardController(sections, handler)
        with pytest.raises(RuntimeError):
            await w.submit()
        assert w.is_submitting is False

    @pytest.mark.asyncio
    async def test_concurrent_submit_rejected(self, sections):
        release = asyncio.Event()

        async def slow(fields):
            await release.wait()
            return "done"

        w = WizardController(sections, slow)
        first = asyncio.create_task(w.submit())
        await asyncio.sleep(0)
        assert w.is_submitting is True
        with pytest.raises(InputValidationError):
            await w.submit()
        release.set()
        assert await first == "done"
        assert w.is_submitting is False
