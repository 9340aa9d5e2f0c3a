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
"""Severity-tagged outcomes for asynchronous validators."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class ValidationSeverity(str, Enum):
    """Severity of an async outcome, ordered INFO < WARNING < ERROR < CRITICAL."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {
    ValidationSeverity.INFO: 0,
    ValidationSeverity.WARNING: 1,
    ValidationSeverity.ERROR: 2,
    ValidationSeverity.CRITICAL: 3,
}


@dataclass(frozen=True)
class AsyncOutcome:
    """Result of one async validator.

    Unlike the synchronous :class:`~formkit.validation.outcome.Outcome`, a valid
    async outcome may still carry an informational or warning message.
    """

    is_valid: bool
    message: str | None = None
    severity: ValidationSeverity = ValidationSeverity.ERROR
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.is_valid and not self.message:
            raise ValueError("An invalid async outcome requires a message")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    # ── factories ──────────────────────────────────────────────

    @staticmethod
    def valid(metadata: Mapping[str, str] | None = None) -> AsyncOutcome:
        return AsyncOutcome(is_valid=True, severity=ValidationSeverity.INFO, metadata=metadata or {})

    @staticmethod
    def invalid(
        message: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
        metadata: Mapping[str, str] | None = None,
    ) -> AsyncOutcome:
        return AsyncOutcome(is_valid=False, message=message, severity=severity, metadata=metadata or {})

    @staticmethod
    def warning(message: str, metadata: Mapping[str, str] | None = None) -> AsyncOutcome:
        """Valid, but worth surfacing to the user."""
        return AsyncOutcome(
            is_valid=True, message=message, severity=ValidationSeverity.WARNING, metadata=metadata or {}
        )

    @staticmethod
    def info(message: str, metadata: Mapping[str, str] | None = None) -> AsyncOutcome:
        return AsyncOutcome(
            is_valid=True, message=message, severity=ValidationSeverity.INFO, metadata=metadata or {}
        )

    # ── helpers ────────────────────────────────────────────────

    @property
    def is_error(self) -> bool:
        return not self.is_valid

    @property
    def is_warning(self) -> bool:
        return self.is_valid and self.message is not None and self.severity is ValidationSeverity.WARNING

    @property
    def is_info(self) -> bool:
        return self.is_valid and self.message is not None and self.severity is ValidationSeverity.INFO


def aggregate_outcomes(outcomes: Iterable[AsyncOutcome]) -> AsyncOutcome:
    """Reduce outcomes to one: the highest-severity failure, else valid.

    Ties keep the earliest failure, i.e. the one from the validator that ran first.
    """
    worst: AsyncOutcome | None = None
    for outcome in outcomes:
        if outcome.is_valid:
            continue
        if worst is None or outcome.severity.rank > worst.severity.rank:
            worst = outcome
    return worst if worst is not None else AsyncOutcome.valid()
