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
"""Tests for conditional and dependent rules."""

from formkit.validation import (
    MISSING,
    VALID,
    ConditionalRule,
    DependentRule,
    Outcome,
    ValidationRegistry,
    matches_field,
    min_length,
    required,
)


class TestConditionalRule:
    def test_false_predicate_is_definite_valid(self):
        rule = ConditionalRule(lambda v: False, required())
        assert rule.evaluate(None) == VALID

    def test_true_predicate_applies_rule(self):
        rule = ConditionalRule(lambda v: v is not None, min_length(5))
        assert rule.evaluate("abc") == Outcome.invalid("Must be at least 5 characters")
        assert rule.evaluate("abcdef") == VALID

    def test_identifier_defaults_from_wrapped_rule(self):
        assert ConditionalRule(lambda v: True, required()).identifier == "when_required"


class TestDependentRule:
    def test_reads_through_on_every_evaluation(self):
        current = {"password": "secret1"}
        rule = matches_field(lambda: current["password"], "Passwords do not match")

        assert rule.evaluate("secret1") == VALID
        current["password"] = "secret2"
        assert rule.evaluate("secret1") == Outcome.invalid("Passwords do not match")
        assert rule.evaluate("secret2") == VALID

    def test_missing_sentinel_yields_fallback(self):
        rule = matches_field(lambda: MISSING)
        assert rule.evaluate("anything") == VALID

    def test_lookup_error_yields_fallback(self):
        values: dict = {}
        rule = matches_field(lambda: values["password"])
        assert rule.evaluate("anything") == VALID

    def test_custom_fallback(self):
        rule = DependentRule(
            lambda: MISSING,
            lambda value, other: VALID,
            fallback=Outcome.invalid("Dependency unavailable"),
        )
        assert rule.evaluate("x") == Outcome.invalid("Dependency unavailable")

    def test_two_argument_validator(self):
        rule = DependentRule(
            lambda: 10,
            lambda value, limit: VALID if value <= limit else Outcome.invalid(f"Must not exceed {limit}"),
        )
        assert rule.evaluate(5) == VALID
        assert rule.evaluate(11) == Outcome.invalid("Must not exceed 10")

    def test_registry_accessor(self):
        registry = ValidationRegistry()
        registry.register_field("password", default="hunter22")
        confirm = matches_field(registry.accessor("password"))
        registry.register_field("confirm", [confirm])

        registry.set_value("confirm", "hunter22")
        assert registry.validate_field("confirm")

        registry.set_value("password", "changed!")
        assert not registry.validate_field("confirm")
        assert registry.result("confirm") == Outcome.invalid("Values do not match")

    def test_accessor_for_unregistered_field_is_missing(self):
        registry = ValidationRegistry()
        assert registry.accessor("ghost")() is MISSING
        assert matches_field(registry.accessor("ghost")).evaluate("x") == VALID

    def test_missing_is_falsy(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"
