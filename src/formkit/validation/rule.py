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
"""Rule — the atomic unit of synchronous validation.

A rule is a named, stateless function ``value -> Outcome``. Rules never raise
for bad input; they return :meth:`Outcome.invalid` instead. Any fault a rule
can produce is detected when it is constructed.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from formkit.validation.outcome import DEFAULT_FAILURE_MESSAGE, VALID, Outcome

Check = Callable[[Any], Outcome]


class Rule:
    """A stable identifier plus an ``evaluate(value) -> Outcome`` function.

    Rules are immutable once constructed and are safe to share across fields
    and evaluations.

    Usage::

        no_spaces = Rule(
            "no_spaces",
            "Spaces are not allowed",
            lambda v: Outcome.invalid("Spaces are not allowed") if " " in v else Outcome.valid(),
        )
    """

    __slots__ = ("_identifier", "_message", "_check")

    def __init__(self, identifier: str, message: str, check: Check | None = None) -> None:
        self._identifier = identifier
        self._message = message
        self._check = check

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def message(self) -> str:
        """The message this rule reports when it fails."""
        return self._message

    def evaluate(self, value: Any) -> Outcome:
        if self._check is None:
            raise NotImplementedError(f"{type(self).__name__} must override evaluate()")
        return self._check(value)

    def __call__(self, value: Any) -> Outcome:
        return self.evaluate(value)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._identifier!r})"

    # ── composition ────────────────────────────────────────────

    def and_(self, other: Rule) -> Rule:
        """Both rules must pass; the first failure is reported."""

        def check(value: Any) -> Outcome:
            first = self.evaluate(value)
            if not first.is_valid:
                return first
            return other.evaluate(value)

        return Rule(f"{self.identifier}_and_{other.identifier}", self.message, check)

    def or_(self, other: Rule) -> Rule:
        """At least one rule must pass; failure reports this rule's message."""

        def check(value: Any) -> Outcome:
            if self.evaluate(value).is_valid or other.evaluate(value).is_valid:
                return VALID
            return Outcome.invalid(self.message)

        return Rule(f"{self.identifier}_or_{other.identifier}", self.message, check)

    def negated(self, message: str | None = None) -> Rule:
        """Invert this rule: it fails exactly when the original passes."""
        failure = message or DEFAULT_FAILURE_MESSAGE

        def check(value: Any) -> Outcome:
            return Outcome.invalid(failure) if self.evaluate(value).is_valid else VALID

        return Rule(f"not_{self.identifier}", failure, check)


def predicate_rule(identifier: str, message: str, predicate: Callable[[Any], bool]) -> Rule:
    """Build a rule that fails with ``message`` whenever ``predicate`` is false."""
    failure = Outcome.invalid(message)
    return Rule(identifier, message, lambda value: VALID if predicate(value) else failure)
