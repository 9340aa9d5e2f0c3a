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
"""Payment card number helpers: brand detection and the Luhn checksum."""

from __future__ import annotations

from enum import Enum


class CardBrand(str, Enum):
    """Card brands recognised by prefix. Detection follows declaration order."""

    VISA = "Visa"
    MASTERCARD = "Mastercard"
    AMEX = "American Express"
    DISCOVER = "Discover"
    DINERS_CLUB = "Diners Club"
    JCB = "JCB"

    @property
    def prefixes(self) -> tuple[str, ...]:
        return _PREFIXES[self]

    @property
    def valid_lengths(self) -> frozenset[int]:
        return _LENGTHS[self]


_PREFIXES: dict[CardBrand, tuple[str, ...]] = {
    CardBrand.VISA: ("4",),
    CardBrand.MASTERCARD: ("51", "52", "53", "54", "55", "22", "23", "24", "25", "26", "27"),
    CardBrand.AMEX: ("34", "37"),
    CardBrand.DISCOVER: ("6011", "644", "645", "646", "647", "648", "649", "65"),
    CardBrand.DINERS_CLUB: ("300", "301", "302", "303", "304", "305", "36", "38"),
    CardBrand.JCB: ("35",),
}

_LENGTHS: dict[CardBrand, frozenset[int]] = {
    CardBrand.VISA: frozenset({13, 16, 19}),
    CardBrand.MASTERCARD: frozenset({16}),
    CardBrand.AMEX: frozenset({15}),
    CardBrand.DISCOVER: frozenset({16, 19}),
    CardBrand.DINERS_CLUB: frozenset({14, 16}),
    CardBrand.JCB: frozenset({16, 19}),
}


def digits_only(number: str) -> str:
    return "".join(ch for ch in number if "0" <= ch <= "9")


def detect_card_brand(number: str) -> CardBrand | None:
    """Return the brand whose prefix matches ``number``, or None."""
    digits = digits_only(number)
    for brand in CardBrand:
        if digits.startswith(brand.prefixes):
            return brand
    return None


def luhn_check(number: str) -> bool:
    """Luhn mod-10 checksum over the digits of ``number``."""
    digits = digits_only(number)
    if not digits:
        return False
    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0
