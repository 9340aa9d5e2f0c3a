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
"""Built-in validation rules.

Only :func:`required` claims authority over presence. Every other rule treats
``None``, the empty string and values of a type it does not handle as valid,
so rules are composed rather than merged::

    registry.register_field("username", [required(), min_length(3), max_length(20)])
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Iterable
from decimal import Decimal
from numbers import Real
from typing import Any

from formkit.kernel.exceptions import InvalidPatternException, InvalidRuleParameterException
from formkit.validation.cards import CardBrand, detect_card_brand, luhn_check
from formkit.validation.outcome import DEFAULT_FAILURE_MESSAGE, VALID, Outcome
from formkit.validation.rule import Rule, predicate_rule

_EMAIL_RE = re.compile(r"[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")
_URL_RE = re.compile(r"https?://[^\s/$.?#].[^\s]*")
_PHONE_RE = re.compile(r"[+]?[0-9\s\-()]{7,20}")
_PHONE_STRIP_RE = re.compile(r"[^0-9+]")


def _non_empty_string(value: Any) -> str | None:
    """Return ``value`` if it is a non-empty string, else None (rule not applicable)."""
    if isinstance(value, str) and value:
        return value
    return None


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (Real, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _require_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidRuleParameterException(
            f"{name} must be a non-negative integer, got {value!r}",
            code="INVALID_RULE_PARAMETER",
            context={"parameter": name, "value": value},
        )


# ── presence ───────────────────────────────────────────────────


def required(message: str = "This field is required") -> Rule:
    """Invalid iff the value is None or a string that is blank after stripping."""
    failure = Outcome.invalid(message)

    def check(value: Any) -> Outcome:
        if value is None:
            return failure
        if isinstance(value, str) and not value.strip():
            return failure
        return VALID

    return Rule("required", message, check)


# ── length ─────────────────────────────────────────────────────


def min_length(length: int, message: str | None = None) -> Rule:
    _require_count("length", length)
    msg = message or f"Must be at least {length} characters"
    failure = Outcome.invalid(msg)

    def check(value: Any) -> Outcome:
        text = _non_empty_string(value)
        if text is None:
            return VALID
        return VALID if len(text) >= length else failure

    return Rule("min_length", msg, check)


def max_length(length: int, message: str | None = None) -> Rule:
    _require_count("length", length)
    msg = message or f"Must be at most {length} characters"
    failure = Outcome.invalid(msg)

    def check(value: Any) -> Outcome:
        if not isinstance(value, str):
            return VALID
        return VALID if len(value) <= length else failure

    return Rule("max_length", msg, check)


def length_range(minimum: int, maximum: int, message: str | None = None) -> Rule:
    _require_count("minimum", minimum)
    _require_count("maximum", maximum)
    if minimum > maximum:
        raise InvalidRuleParameterException(
            f"length_range minimum {minimum} exceeds maximum {maximum}",
            code="INVALID_RULE_PARAMETER",
            context={"minimum": minimum, "maximum": maximum},
        )
    msg = message or f"Must be between {minimum} and {maximum} characters"
    failure = Outcome.invalid(msg)

    def check(value: Any) -> Outcome:
        text = _non_empty_string(value)
        if text is None:
            return VALID
        return VALID if minimum <= len(text) <= maximum else failure

    return Rule("length_range", msg, check)


# ── format ─────────────────────────────────────────────────────


def pattern(regex: str | re.Pattern[str], message: str = "Invalid format") -> Rule:
    """Full-string regular expression match.

    Raises:
        InvalidPatternException: If ``regex`` does not compile.
    """
    try:
        compiled = regex if isinstance(regex, re.Pattern) else re.compile(regex)
    except (re.error, TypeError) as exc:
        raise InvalidPatternException(
            f"Invalid regular expression {regex!r}: {exc}",
            code="INVALID_PATTERN",
            context={"pattern": str(regex)},
        ) from exc
    failure = Outcome.invalid(message)

    def check(value: Any) -> Outcome:
        text = _non_empty_string(value)
        if text is None:
            return VALID
        return VALID if compiled.fullmatch(text) else failure

    return Rule("pattern", message, check)


def email(message: str = "Please enter a valid email address") -> Rule:
    return predicate_rule(
        "email",
        message,
        lambda value: _non_empty_string(value) is None or _EMAIL_RE.fullmatch(value) is not None,
    )


def url(message: str = "Please enter a valid URL", *, require_https: bool = False) -> Rule:
    """http(s) URL with a host; ``require_https`` rejects plain http."""
    failure = Outcome.invalid(message)
    https_failure = Outcome.invalid("URL must use HTTPS")

    def check(value: Any) -> Outcome:
        text = _non_empty_string(value)
        if text is None:
            return VALID
        if _URL_RE.fullmatch(text) is None:
            return failure
        if require_https and not text.lower().startswith("https://"):
            return https_failure
        return VALID

    return Rule("url", message, check)


def phone(message: str = "Please enter a valid phone number") -> Rule:
    """7-15 significant characters in an international-ish layout."""
    failure = Outcome.invalid(message)

    def check(value: Any) -> Outcome:
        text = _non_empty_string(value)
        if text is None:
            return VALID
        stripped = _PHONE_STRIP_RE.sub("", text)
        if not 7 <= len(stripped) <= 15:
            return failure
        return VALID if _PHONE_RE.fullmatch(text) else failure

    return Rule("phone", message, check)


def credit_card(
    message: str = "Please enter a valid card number",
    *,
    accepted_brands: Iterable[CardBrand] | None = None,
) -> Rule:
    """Card number check: digits (spaces and dashes allowed), 12-19 long, Luhn.

    With ``accepted_brands`` the number must also belong to one of those
    brands and have a length that brand issues.
    """
    brands = frozenset(accepted_brands) if accepted_brands is not None else None
    failure = Outcome.invalid(message)

    def check(value: Any) -> Outcome:
        text = _non_empty_string(value)
        if text is None:
            return VALID
        digits = text.replace(" ", "").replace("-", "")
        if not digits.isascii() or not digits.isdigit():
            return failure
        if not 12 <= len(digits) <= 19:
            return failure
        if brands is not None:
            brand = detect_card_brand(digits)
            if brand is None or brand not in brands or len(digits) not in brand.valid_lengths:
                return failure
        return VALID if luhn_check(digits) else failure

    return Rule("credit_card", message, check)


def numeric(message: str = "Must contain only numbers") -> Rule:
    return predicate_rule(
        "numeric",
        message,
        lambda value: _non_empty_string(value) is None or value.isdigit(),
    )


# ── numbers ────────────────────────────────────────────────────


def min_value(minimum: float, message: str | None = None) -> Rule:
    """Numeric lower bound; numeric strings are coerced, anything else passes."""
    msg = message or f"Must be at least {minimum:g}"
    failure = Outcome.invalid(msg)

    def check(value: Any) -> Outcome:
        number = _as_number(value)
        if number is None:
            return VALID
        return VALID if number >= minimum else failure

    return Rule("min", msg, check)


def max_value(maximum: float, message: str | None = None) -> Rule:
    """Numeric upper bound; numeric strings are coerced, anything else passes."""
    msg = message or f"Must be at most {maximum:g}"
    failure = Outcome.invalid(msg)

    def check(value: Any) -> Outcome:
        number = _as_number(value)
        if number is None:
            return VALID
        return VALID if number <= maximum else failure

    return Rule("max", msg, check)


# ── equality and membership ────────────────────────────────────


def equals(expected: Any, message: str = "Values do not match") -> Rule:
    return predicate_rule("equals", message, lambda value: value == expected)


def one_of(choices: Collection[Any], message: str = "Invalid selection") -> Rule:
    options = tuple(choices)
    return predicate_rule("one_of", message, lambda value: value in options)


# ── escape hatch ───────────────────────────────────────────────


def custom(
    predicate: Callable[[Any], bool],
    message: str = DEFAULT_FAILURE_MESSAGE,
    *,
    identifier: str = "custom",
) -> Rule:
    """Invalid iff ``predicate(value)`` is falsy."""
    return predicate_rule(identifier, message, lambda value: bool(predicate(value)))
