"""Tests for identifier generation and shared validators."""

import re
from datetime import datetime, timezone

import pytest

from gleamy.shared.identifiers import (
    CODE_ALPHABET,
    generate_booking_number,
    generate_employee_code,
)
from gleamy.shared.validators import validate_email, validate_phone, validate_time_of_day


def test_booking_number_format():
    number = generate_booking_number("GLM", now=datetime(2026, 1, 18, tzinfo=timezone.utc))
    assert re.fullmatch(r"GLM-20260118-[A-Z2-9]{8}", number)
    assert all(c in CODE_ALPHABET for c in number.rsplit("-", 1)[1])


def test_booking_numbers_do_not_repeat():
    numbers = {generate_booking_number() for _ in range(2000)}
    assert len(numbers) == 2000


def test_code_alphabet_skips_ambiguous_characters():
    for c in "01IO":
        assert c not in CODE_ALPHABET


def test_employee_code_format():
    assert re.fullmatch(r"EMP-\d{4}-[A-Z2-9]{5}", generate_employee_code())


def test_validate_phone_normalizes():
    assert validate_phone("(077) 123-4567") == "+0771234567"
    assert validate_phone(None) is None
    with pytest.raises(ValueError):
        validate_phone("12")


def test_validate_email():
    assert validate_email("  Jane@Example.COM ") == "jane@example.com"
    with pytest.raises(ValueError):
        validate_email("not-an-email")


@pytest.mark.parametrize("value", ["00:00", "09:30", "23:59"])
def test_validate_time_of_day_accepts(value):
    assert validate_time_of_day(value) == value


@pytest.mark.parametrize("value", ["24:00", "9:30", "12:60", "noon"])
def test_validate_time_of_day_rejects(value):
    with pytest.raises(ValueError):
        validate_time_of_day(value)
