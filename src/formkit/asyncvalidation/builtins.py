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
"""Built-in async validators.

Remote lookups (domain existence, username availability, URL reachability)
are injected as async callables; nothing here performs network I/O itself.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, ClassVar
from urllib.parse import urlsplit

from formkit.asyncvalidation.types import AsyncOutcome
from formkit.validation.cards import CardBrand, detect_card_brand, digits_only, luhn_check

logger = logging.getLogger(__name__)

AsyncPredicate = Callable[[str], Awaitable[bool]]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


# =============================================================================
# Email
# =============================================================================

_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

DISPOSABLE_EMAIL_DOMAINS = frozenset({"tempmail.com", "throwaway.com", "fakeemail.com"})


class EmailValidator:
    """Email format, disposable-domain block list and an optional domain lookup."""

    def __init__(
        self,
        *,
        priority: int = 0,
        blocked_domains: Iterable[str] = DISPOSABLE_EMAIL_DOMAINS,
        domain_exists: AsyncPredicate | None = None,
    ) -> None:
        self._priority = priority
        self._blocked = frozenset(domain.lower() for domain in blocked_domains)
        self._domain_exists = domain_exists

    @property
    def name(self) -> str:
        return "email"

    @property
    def priority(self) -> int:
        return self._priority

    async def validate(self, value: Any) -> AsyncOutcome:
        text = _text(value)
        if not text:
            return AsyncOutcome.valid()
        if _EMAIL_RE.fullmatch(text) is None:
            return AsyncOutcome.invalid("Please enter a valid email address")
        domain = text.rsplit("@", 1)[1].lower()
        if domain in self._blocked:
            return AsyncOutcome.invalid("Temporary email addresses are not allowed")
        if self._domain_exists is not None and not await self._domain_exists(domain):
            return AsyncOutcome.invalid("Email domain does not exist")
        return AsyncOutcome.valid()


# =============================================================================
# Username
# =============================================================================


class UsernameValidator:
    """Length, charset and leading-letter checks, then an optional availability lookup."""

    def __init__(
        self,
        *,
        priority: int = 0,
        min_length: int = 3,
        max_length: int = 20,
        is_available: AsyncPredicate | None = None,
    ) -> None:
        self._priority = priority
        self._min_length = min_length
        self._max_length = max_length
        self._is_available = is_available

    @property
    def name(self) -> str:
        return "username"

    @property
    def priority(self) -> int:
        return self._priority

    async def validate(self, value: Any) -> AsyncOutcome:
        text = _text(value)
        if not text:
            return AsyncOutcome.invalid("Username is required")
        if len(text) < self._min_length:
            return AsyncOutcome.invalid(f"Username must be at least {self._min_length} characters")
        if len(text) > self._max_length:
            return AsyncOutcome.invalid(f"Username cannot exceed {self._max_length} characters")
        if not all(ch.isalnum() or ch == "_" for ch in text):
            return AsyncOutcome.invalid("Username can only contain letters, numbers, and underscores")
        if not text[0].isalpha():
            return AsyncOutcome.invalid("Username must start with a letter")
        if self._is_available is not None and not await self._is_available(text):
            return AsyncOutcome.invalid("This username is already taken")
        return AsyncOutcome.valid()


# =============================================================================
# Password
# =============================================================================

SPECIAL_CHARACTERS = frozenset("!@#$%^&*()_+-=[]{}|;':\",./<>?")

COMMON_PASSWORDS = frozenset(
    {
        "password", "123456", "12345678", "qwerty", "abc123",
        "monkey", "1234567", "letmein", "trustno1", "dragon",
        "baseball", "iloveyou", "master", "sunshine", "ashley",
        "football", "shadow", "123123", "654321", "superman",
    }
)


@dataclass(frozen=True)
class PasswordRequirements:
    """What a password must contain. Presets: STANDARD, STRICT, RELAXED."""

    min_length: int = 8
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numbers: bool = True
    require_special_chars: bool = True
    check_common_passwords: bool = True
    min_strength_score: int = 3

    STANDARD: ClassVar[PasswordRequirements]
    STRICT: ClassVar[PasswordRequirements]
    RELAXED: ClassVar[PasswordRequirements]


PasswordRequirements.STANDARD = PasswordRequirements()
PasswordRequirements.STRICT = PasswordRequirements(min_length=12, min_strength_score=4)
PasswordRequirements.RELAXED = PasswordRequirements(
    min_length=6, require_special_chars=False, min_strength_score=2
)


def strength_label(score: int) -> str:
    if score <= 2:
        return "Weak"
    if score <= 4:
        return "Fair"
    if score <= 6:
        return "Good"
    return "Strong"


class PasswordValidator:
    """Password strength check.

    Scores one point for meeting the minimum length (plus one each at 12 and
    16 characters) and one per satisfied character-class requirement. A
    passing password yields an INFO outcome whose metadata carries
    ``strength`` and ``score``.
    """

    def __init__(
        self,
        *,
        priority: int = 0,
        requirements: PasswordRequirements = PasswordRequirements.STANDARD,
    ) -> None:
        self._priority = priority
        self._requirements = requirements

    @property
    def name(self) -> str:
        return "password"

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def requirements(self) -> PasswordRequirements:
        return self._requirements

    async def validate(self, value: Any) -> AsyncOutcome:
        text = _text(value)
        if not text:
            return AsyncOutcome.invalid("Password is required")

        req = self._requirements
        score = 0
        issues: list[str] = []

        if len(text) < req.min_length:
            issues.append(f"at least {req.min_length} characters")
        else:
            score += 1 + (len(text) >= 12) + (len(text) >= 16)

        checks = (
            (req.require_uppercase, any(ch.isupper() for ch in text), "at least one uppercase letter"),
            (req.require_lowercase, any(ch.islower() for ch in text), "at least one lowercase letter"),
            (req.require_numbers, any(ch.isdigit() for ch in text), "at least one number"),
            (req.require_special_chars, any(ch in SPECIAL_CHARACTERS for ch in text), "at least one special character"),
        )
        for wanted, present, issue in checks:
            if not wanted:
                continue
            if present:
                score += 1
            else:
                issues.append(issue)

        if req.check_common_passwords and text.lower() in COMMON_PASSWORDS:
            return AsyncOutcome.invalid("This password is too common. Please choose a stronger password.")
        if issues:
            return AsyncOutcome.invalid(f"Password must contain {', '.join(issues)}")
        if score < req.min_strength_score:
            return AsyncOutcome.invalid("Password is too weak. Add more variety to make it stronger.")

        strength = strength_label(score)
        return AsyncOutcome.info(
            f"Password strength: {strength}",
            metadata={"strength": strength, "score": str(score)},
        )


# =============================================================================
# URL
# =============================================================================


class URLValidator:
    """Scheme and host checks; an optional reachability probe reports warnings only."""

    def __init__(
        self,
        *,
        priority: int = 0,
        allowed_schemes: Iterable[str] = ("http", "https"),
        is_reachable: AsyncPredicate | None = None,
    ) -> None:
        self._priority = priority
        self._schemes = tuple(scheme.lower() for scheme in allowed_schemes)
        self._is_reachable = is_reachable

    @property
    def name(self) -> str:
        return "url"

    @property
    def priority(self) -> int:
        return self._priority

    async def validate(self, value: Any) -> AsyncOutcome:
        text = _text(value).strip()
        if not text:
            return AsyncOutcome.valid()
        try:
            parts = urlsplit(text)
        except ValueError:
            return AsyncOutcome.invalid("Please enter a valid URL")
        if parts.scheme.lower() not in self._schemes:
            return AsyncOutcome.invalid(f"URL must start with {' or '.join(self._schemes)}")
        if not parts.hostname:
            return AsyncOutcome.invalid("URL must have a valid domain")
        if self._is_reachable is not None:
            return await self._probe(self._is_reachable, text)
        return AsyncOutcome.valid()

    @staticmethod
    async def _probe(is_reachable: AsyncPredicate, url: str) -> AsyncOutcome:
        try:
            reachable = await is_reachable(url)
        except OSError as exc:
            logger.debug("Reachability probe for %s failed: %s", url, exc)
            return AsyncOutcome.warning(f"Could not reach URL: {exc}")
        if not reachable:
            return AsyncOutcome.warning("Could not verify URL reachability")
        return AsyncOutcome.valid()


# =============================================================================
# Phone
# =============================================================================

_REGION_LENGTHS: dict[str, tuple[int, int]] = {
    "US": (10, 11),
    "CA": (10, 11),
    "UK": (10, 11),
    "DE": (10, 15),
    "FR": (10, 10),
    "TR": (10, 10),
}
_DEFAULT_LENGTHS = (8, 15)

_REGION_PATTERNS: dict[str, re.Pattern[str]] = {
    "US": re.compile(r"1?[2-9]\d{9}"),
    "CA": re.compile(r"1?[2-9]\d{9}"),
    "UK": re.compile(r"(0|44)?[1-9]\d{9}"),
    "TR": re.compile(r"(0|90)?5\d{9}"),
}
_DEFAULT_PATTERN = re.compile(r"\d{8,15}")


class PhoneValidator:
    """Digit count and national pattern for a region (US, CA, UK, DE, FR, TR, other)."""

    def __init__(self, *, priority: int = 0, region: str = "US", validate_format: bool = True) -> None:
        self._priority = priority
        self._region = region.upper()
        self._validate_format = validate_format

    @property
    def name(self) -> str:
        return "phone"

    @property
    def priority(self) -> int:
        return self._priority

    async def validate(self, value: Any) -> AsyncOutcome:
        text = _text(value)
        if not text:
            return AsyncOutcome.valid()
        digits = digits_only(text)
        low, high = _REGION_LENGTHS.get(self._region, _DEFAULT_LENGTHS)
        if len(digits) < low:
            return AsyncOutcome.invalid("Phone number is too short")
        if len(digits) > high:
            return AsyncOutcome.invalid("Phone number is too long")
        if self._validate_format:
            regex = _REGION_PATTERNS.get(self._region, _DEFAULT_PATTERN)
            if regex.fullmatch(digits) is None:
                return AsyncOutcome.invalid("Please enter a valid phone number")
        return AsyncOutcome.valid()


# =============================================================================
# Credit card
# =============================================================================


class CreditCardValidator:
    """Brand detection, accepted brands, brand length table and Luhn.

    A valid outcome carries the detected brand in ``metadata["cardType"]``.
    """

    def __init__(self, *, priority: int = 0, accepted_brands: Iterable[CardBrand] = tuple(CardBrand)) -> None:
        self._priority = priority
        self._accepted = frozenset(accepted_brands)

    @property
    def name(self) -> str:
        return "credit_card"

    @property
    def priority(self) -> int:
        return self._priority

    async def validate(self, value: Any) -> AsyncOutcome:
        text = _text(value)
        if not text:
            return AsyncOutcome.valid()
        digits = digits_only(text)
        brand = detect_card_brand(digits)
        if brand is None:
            return AsyncOutcome.invalid("Unrecognized card type")
        if brand not in self._accepted:
            return AsyncOutcome.invalid(f"{brand.value} cards are not accepted")
        if len(digits) not in brand.valid_lengths:
            return AsyncOutcome.invalid("Invalid card number length")
        if not luhn_check(digits):
            return AsyncOutcome.invalid("Invalid card number")
        return AsyncOutcome.valid(metadata={"cardType": brand.value})
