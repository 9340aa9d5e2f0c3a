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
"""Tests for async outcomes, severity ordering and aggregation."""

import pytest

from formkit.asyncvalidation import AsyncOutcome, ValidationSeverity, aggregate_outcomes


class TestValidationSeverity:
    def test_ordering(self):
        ranks = [s.rank for s in (ValidationSeverity.INFO, ValidationSeverity.WARNING,
                                  ValidationSeverity.ERROR, ValidationSeverity.CRITICAL)]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 4

    def test_string_values(self):
        assert ValidationSeverity("warning") is ValidationSeverity.WARNING


class TestAsyncOutcome:
    def test_valid(self):
        outcome = AsyncOutcome.valid()
        assert outcome.is_valid
        assert outcome.message is None
        assert not outcome.is_warning

    def test_invalid_defaults_to_error(self):
        outcome = AsyncOutcome.invalid("Taken")
        assert outcome.is_error
        assert outcome.severity is ValidationSeverity.ERROR

    def test_warning_is_valid(self):
        outcome = AsyncOutcome.warning("Could not verify")
        assert outcome.is_valid
        assert outcome.is_warning
        assert not outcome.is_info

    def test_info_is_valid(self):
        outcome = AsyncOutcome.info("Strength: Good", {"strength": "Good"})
        assert outcome.is_info
        assert outcome.metadata["strength"] == "Good"

    def test_invalid_requires_message(self):
        with pytest.raises(ValueError):
            AsyncOutcome(is_valid=False)

    def test_metadata_is_read_only(self):
        outcome = AsyncOutcome.valid({"cardType": "Visa"})
        with pytest.raises(TypeError):
            outcome.metadata["cardType"] = "Amex"  # type: ignore[index]


class TestAggregateOutcomes:
    def test_all_valid(self):
        assert aggregate_outcomes([AsyncOutcome.valid(), AsyncOutcome.warning("w")]).is_valid

    def test_empty_is_valid(self):
        assert aggregate_outcomes([]).is_valid

    def test_error_beats_warning(self):
        result = aggregate_outcomes([
            AsyncOutcome.invalid("just a warning", ValidationSeverity.WARNING),
            AsyncOutcome.invalid("real error", ValidationSeverity.ERROR),
        ])
        assert not result.is_valid
        assert result.message == "real error"

    def test_critical_beats_error(self):
        result = aggregate_outcomes([
            AsyncOutcome.invalid("error"),
            AsyncOutcome.invalid("critical", ValidationSeverity.CRITICAL),
        ])
        assert result.severity is ValidationSeverity.CRITICAL

    def test_first_wins_on_tie(self):
        result = aggregate_outcomes([AsyncOutcome.invalid("first"), AsyncOutcome.invalid("second")])
        assert result.message == "first"
