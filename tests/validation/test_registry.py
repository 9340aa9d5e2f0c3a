# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for ValidationRegistry."""

import pytest

from formkit.validation import (
    VALID,
    Outcome,
    ValidationRegistry,
    email,
    min_length,
    required,
)


@pytest.fixture
def registry() -> ValidationRegistry:
    registry = ValidationRegistry()
    registry.register_field("name", [required(), min_length(2)])
    registry.register_field("email", [required(), email()])
    return registry


class TestRegistration:
    def test_register_sets_default_value(self):
        registry = ValidationRegistry()
        registry.register_field("country", default="TR")
        assert registry.value("country") == "TR"
        assert registry.keys == ("country",)
        assert not registry.is_touched("country")
        assert not registry.is_dirty("country")

    def test_reregistration_keeps_state_and_refreshes_rules(self, registry):
        registry.set_value("name", "A")
        registry.touch_field("name")
        assert registry.error_message("name") == "Must be at least 2 characters"

        registry.register_field("name", [required()], default="Default")
        assert registry.value("name") == "A"
        assert registry.is_touched("name")
        assert registry.is_dirty("name")
        assert registry.validate_field("name")

        registry.reset_field("name")
        assert registry.value("name") == "Default"


class TestValueUpdates:
    def test_untouched_field_is_not_revalidated(self, registry):
        registry.set_value("email", "not-an-email")
        assert registry.result("email") == VALID
        assert registry.is_dirty("email")
        assert registry.error_message("email") is None

    def test_touched_field_revalidates_on_change(self, registry):
        registry.touch_field("email")
        assert registry.error_message("email") == "This field is required"

        registry.set_value("email", "not-an-email")
        assert registry.error_message("email") == "Please enter a valid email address"

        registry.set_value("email", "ada@example.com")
        assert registry.error_message("email") is None

    def test_values_snapshot_is_read_only(self, registry):
        registry.set_value("name", "Ada")
        values = registry.values
        assert values["name"] == "Ada"
        with pytest.raises(TypeError):
            values["name"] = "Grace"  # type: ignore[index]


class TestValidation:
    def test_rules_short_circuit_on_first_failure(self, registry):
        assert not registry.validate_field("email")
        assert registry.result("email") == Outcome.invalid("This field is required")

    def test_validate_field_is_idempotent(self, registry):
        registry.set_value("name", "A")
        first = (registry.validate_field("name"), registry.result("name"))
        second = (registry.validate_field("name"), registry.result("name"))
        assert first == second

    def test_validate_all_touches_every_field(self, registry):
        assert not registry.validate_all()
        assert registry.is_touched("name")
        assert registry.is_touched("email")
        assert registry.error_message("name") == "This field is required"

    def test_validate_all_success(self, registry):
        registry.set_value("name", "Ada")
        registry.set_value("email", "ada@example.com")
        assert registry.validate_all()
        assert registry.is_valid
        assert registry.validation_errors == {}

    def test_validation_errors_include_untouched_fields(self, registry):
        registry.set_value("name", "A")
        registry.validate_field("name")
        assert not registry.is_touched("name")
        assert registry.validation_errors == {"name": "Must be at least 2 characters"}
        assert registry.error_message("name") is None
        assert not registry.is_valid


class TestCrossFieldRules:
    @pytest.fixture
    def dates(self) -> ValidationRegistry:
        registry = ValidationRegistry()
        registry.register_field("start", [required()])
        registry.register_field("end", [required()])
        registry.add_cross_field_rule(
            ["start", "end"],
            lambda values: VALID if values["start"] <= values["end"] else Outcome.invalid("Start must precede end"),
            identifier="date_order",
        )
        return registry

    def test_error_attributed_to_every_key(self, dates):
        dates.set_value("start", "2026-05-02")
        dates.set_value("end", "2026-05-01")
        assert not dates.validate_all()
        assert dates.error_message("start") == "Start must precede end"
        assert dates.error_message("end") == "Start must precede end"

    def test_field_error_is_never_overwritten(self):
        registry = ValidationRegistry()
        registry.register_field("password", [min_length(8)])
        registry.register_field("confirm", [required()])
        registry.add_cross_field_rule(
            ["password", "confirm"],
            lambda values: VALID if values["password"] == values["confirm"] else Outcome.invalid("Passwords do not match"),
        )
        registry.set_value("password", "short")
        registry.set_value("confirm", "different")

        assert not registry.validate_all()
        assert registry.error_message("password") == "Must be at least 8 characters"
        assert registry.error_message("confirm") == "Passwords do not match"

    def test_cross_field_rule_sees_only_its_keys(self):
        seen = {}
        registry = ValidationRegistry()
        registry.register_field("a", default=1)
        registry.register_field("b", default=2)
        registry.register_field("c", default=3)

        def capture(values):
            seen.update(values)
            return VALID

        registry.add_cross_field_rule(["a", "c"], capture)
        assert registry.validate_all()
        assert seen == {"a": 1, "c": 3}

    def test_passing_cross_field_rule(self, dates):
        dates.set_value("start", "2026-05-01")
        dates.set_value("end", "2026-05-02")
        assert dates.validate_all()


class TestReset:
    def test_reset_restores_defaults_and_keeps_rules(self):
        registry = ValidationRegistry()
        registry.register_field("name", [required()], default="")
        registry.set_value("name", "Ada")
        registry.validate_all()

        registry.reset()
        assert registry.value("name") == ""
        assert not registry.is_touched("name")
        assert not registry.is_dirty("name")
        assert registry.result("name") == VALID

        assert not registry.validate_all()
        assert registry.error_message("name") == "This field is required"

    def test_clear_removes_everything(self, registry):
        registry.add_cross_field_rule(["name"], lambda values: Outcome.invalid("never"))
        registry.clear()
        assert registry.keys == ()
        assert registry.validate_all()


class TestUnregisteredKeys:
    def test_operations_are_noops(self):
        registry = ValidationRegistry()
        registry.set_value("ghost", "x")
        registry.touch_field("ghost")
        registry.reset_field("ghost")
        assert registry.validate_field("ghost")
        assert registry.value("ghost") is None
        assert registry.value("ghost", "fallback") == "fallback"
        assert registry.result("ghost") == VALID
        assert registry.error_message("ghost") is None
        assert not registry.is_touched("ghost")
        assert not registry.is_dirty("ghost")
        assert registry.keys == ()
