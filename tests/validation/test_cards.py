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
"""Tests for card brand detection and the Luhn checksum."""

import pytest

from formkit.validation.cards import CardBrand, detect_card_brand, digits_only, luhn_check


class TestDetectCardBrand:
    @pytest.mark.parametrize(
        ("number", "brand"),
        [
            ("4111 1111 1111 1111", CardBrand.VISA),
            ("5555555555554444", CardBrand.MASTERCARD),
            ("2221000000000009", CardBrand.MASTERCARD),
            ("378282246310005", CardBrand.AMEX),
            ("6011111111111117", CardBrand.DISCOVER),
            ("30569309025904", CardBrand.DINERS_CLUB),
            ("3530111333300000", CardBrand.JCB),
        ],
    )
    def test_known_brands(self, number, brand):
        assert detect_card_brand(number) is brand

    def test_unknown_prefix(self):
        assert detect_card_brand("9999999999999999") is None
        assert detect_card_brand("") is None

    def test_brand_metadata(self):
        assert CardBrand.AMEX.value == "American Express"
        assert CardBrand.AMEX.valid_lengths == frozenset({15})
        assert "34" in CardBrand.AMEX.prefixes


class TestLuhn:
    @pytest.mark.parametrize("number", ["4111111111111111", "378282246310005", "6011111111111117", "79927398713"])
    def test_valid(self, number):
        assert luhn_check(number)

    @pytest.mark.parametrize("number", ["4111111111111112", "79927398710", ""])
    def test_invalid(self, number):
        assert not luhn_check(number)

    def test_digits_only_ignores_separators(self):
        assert digits_only("4111-1111 1111/1111") == "4111111111111111"
