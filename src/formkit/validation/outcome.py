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
"""Outcome of a single synchronous rule evaluation."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_FAILURE_MESSAGE = "Validation failed"


@dataclass(frozen=True)
class Outcome:
    """Immutable pass/fail result carrying at most one message.

    Build with :meth:`valid` or :meth:`invalid`; equality is structural.
    """

    is_valid: bool
    message: str | None = None

    def __post_init__(self) -> None:
        if self.is_valid and self.message is not None:
            raise ValueError("A valid outcome carries no message")
        if not self.is_valid and self.message is None:
            raise ValueError("An invalid outcome requires a message")

    # ── factories ──────────────────────────────────────────────

    @staticmethod
    def valid() -> Outcome:
        return VALID

    @staticmethod
    def invalid(message: str) -> Outcome:
        return Outcome(is_valid=False, message=message)

    # ── helpers ────────────────────────────────────────────────

    @property
    def error_message(self) -> str | None:
        return self.message

    def __bool__(self) -> bool:
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return "Outcome.valid()"
        return f"Outcome.invalid({self.message!r})"


VALID = Outcome(is_valid=True)
