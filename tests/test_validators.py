import math
import time

import pytest

from formguard.errors import UnknownRuleError
from formguard.rules.outcome import VALID, Outcome, Reason
from formguard.rules.validators import (
    RULES,
    get_rule,
    run_rule,
    to_number,
    validate_email,
    validate_id_card_easy,
    validate_id_card_strict,
    validate_image_code,
    validate_number,
    validate_number_by_max,
    validate_number_by_min,
    validate_password,
    validate_phone,
    validate_phone_code,
    validate_positive_number,
)


def test_outcome_truthiness():
    assert VALID
    assert not Outcome.invalid(Reason.FORMAT_ERROR)
    assert Outcome.valid() is VALID
    assert Outcome.invalid(Reason.ABOVE_MAX, detail="").detail is None


@pytest.mark.parametrize("value", ["13812345678", "19912345678", "010-12345678", "0755-1234567"])
def test_phone_ok(value):
    assert validate_phone(value).ok


@pytest.mark.parametrize("value", ["12812345678", "1381234567", "010-123456", "13812345678\n", "+8613812345678"])
def test_phone_bad_format(value):
    assert validate_phone(value).reason is Reason.FORMAT_ERROR


@pytest.mark.parametrize("value", [None, ""])
def test_phone_empty(value):
    assert validate_phone(value).reason is Reason.EMPTY_INPUT


def test_email():
    assert validate_email("alice@example.com").ok
    assert validate_email("a.b-c@mail.example.cn").ok
    assert validate_email("alice@example").reason is Reason.FORMAT_ERROR
    assert validate_email("alice.example.com").reason is Reason.FORMAT_ERROR
    assert validate_email("").reason is Reason.EMPTY_INPUT


@pytest.mark.parametrize(
    "value",
    [
        "a" * 5000 + "!",
        "a." * 2500 + "!",
        "a@" + "b" * 5000 + "!",
        "a@" + "b-" * 2500 + "c",
    ],
)
def test_email_long_failing_value_is_fast(value):
    started = time.perf_counter()
    assert validate_email(value).reason is Reason.FORMAT_ERROR
    assert time.perf_counter() - started < 0.5


def test_email_multi_label_domains():
    assert validate_email("bob@mail.example.co.uk").ok
    assert validate_email("bob@a-b.cn").ok
    assert validate_email("bob@example.comx").reason is Reason.FORMAT_ERROR
    assert validate_email("bob@example..com").reason is Reason.FORMAT_ERROR


def test_password_and_codes():
    assert validate_password("abcdef").ok
    assert validate_password("a" * 20).ok
    assert validate_password("abc").reason is Reason.FORMAT_ERROR
    assert validate_password("a" * 21).reason is Reason.FORMAT_ERROR
    assert validate_phone_code("123456").ok
    assert validate_phone_code("12345a").reason is Reason.FORMAT_ERROR
    assert validate_image_code("ab1Z").ok
    assert validate_image_code("abc").reason is Reason.FORMAT_ERROR


class TestToNumber:
    def test_strings(self):
        assert to_number("  12 ") == 12.0
        assert to_number("-3.5") == -3.5
        assert to_number("1e3") == 1000.0

    def test_blank_counts_as_zero(self):
        assert to_number("") == 0.0
        assert to_number("   ") == 0.0
        assert to_number(None) == 0.0

    def test_not_numbers(self):
        assert to_number("abc") is None
        assert to_number("nan") is None
        assert to_number(math.nan) is None
        assert to_number("1_000") is None

    def test_only_exact_infinity_spelling(self):
        assert to_number("Infinity") == math.inf
        assert to_number("+Infinity") == math.inf
        assert to_number("-Infinity") == -math.inf
        for spelling in ("inf", "-inf", "INF", "infinity", "Inf"):
            assert to_number(spelling) is None

    def test_radix_literals(self):
        assert to_number("0x10") == 16.0
        assert to_number("0b101") == 5.0
        assert to_number("0o17") == 15.0
        assert to_number("-0x10") is None

    def test_partial_decimals(self):
        assert to_number("1.") == 1.0
        assert to_number(".5") == 0.5
        assert to_number("1.2.3") is None

    def test_numbers(self):
        assert to_number(7) == 7.0
        assert to_number(True) == 1.0


class TestPositiveNumber:
    @pytest.mark.parametrize("value", ["10", "0", 0, 5, 5.0])
    def test_ok(self, value):
        assert validate_positive_number(value).ok

    @pytest.mark.parametrize("value", ["-1", "1.5", "007"])
    def test_not_integer(self, value):
        assert validate_positive_number(value).reason is Reason.NOT_INTEGER

    def test_not_a_number(self):
        assert validate_positive_number("abc").reason is Reason.NOT_A_NUMBER

    def test_empty(self):
        assert validate_positive_number("").reason is Reason.EMPTY_INPUT
        assert validate_positive_number(None, allow_empty=True) is VALID


class TestNumber:
    @pytest.mark.parametrize("value", ["12.5", "-3.5", "0.5", "12345678.12345", 0, 12.5])
    def test_ok(self, value):
        assert validate_number(value).ok

    @pytest.mark.parametrize("value", ["123456789", "1.123456", "00", "-0.5", "abc", "1."])
    def test_format_error(self, value):
        assert validate_number(value).reason is Reason.FORMAT_ERROR

    def test_empty(self):
        assert validate_number("").reason is Reason.EMPTY_INPUT
        assert validate_number("", allow_empty=True).ok


class TestBounds:
    def test_min(self):
        assert validate_number_by_min("5").ok
        assert validate_number_by_min("0.5").reason is Reason.BELOW_MIN
        assert validate_number_by_min("-2").reason is Reason.NEGATIVE
        assert validate_number_by_min("2", minimum=3).reason is Reason.BELOW_MIN

    def test_min_blank_coerces_to_zero(self):
        assert validate_number_by_min("").reason is Reason.BELOW_MIN
        assert validate_number_by_min("", minimum=0).reason is Reason.EMPTY_INPUT

    def test_min_non_number_falls_through_to_format(self):
        assert validate_number_by_min("abc").reason is Reason.FORMAT_ERROR

    def test_max(self):
        assert validate_number_by_max("50").ok
        assert validate_number_by_max("-1").reason is Reason.NEGATIVE
        out = validate_number_by_max("101")
        assert out.reason is Reason.ABOVE_MAX and out.detail is None
        assert validate_number_by_max("1e3").reason is Reason.ABOVE_MAX

    def test_inf_spelling_skips_bounds(self):
        assert validate_number_by_max("inf").reason is Reason.FORMAT_ERROR
        assert validate_number_by_min("-inf").reason is Reason.FORMAT_ERROR
        assert validate_number_by_max("Infinity").reason is Reason.ABOVE_MAX

    def test_max_tip_is_carried(self):
        out = validate_number_by_max("11", maximum=10, tip="Ten at most")
        assert out.detail == "Ten at most"


class TestIdCardEasy:
    @pytest.mark.parametrize(
        "value", ["110101199003076113", "11010119900307611X", "11010119900307611x", "110101900307611"]
    )
    def test_shape_only(self, value):
        assert validate_id_card_easy(value).ok

    def test_bad_shape(self):
        assert validate_id_card_easy("1101011990030761").reason is Reason.FORMAT_ERROR

    def test_empty(self):
        assert validate_id_card_easy("").reason is Reason.EMPTY_INPUT
        assert validate_id_card_easy("", allow_empty=True).ok


def test_id_card_strict_accepts_numbers():
    assert validate_id_card_strict(110101199003076114).ok
    assert validate_id_card_strict("110101199003076113").reason is Reason.CHECKSUM_ERROR


class TestRegistry:
    def test_names(self):
        assert set(RULES) >= {"phone", "email", "number", "id_card_strict", "number_max"}

    def test_unknown_rule(self):
        with pytest.raises(UnknownRuleError):
            get_rule("iban")
        with pytest.raises(KeyError):
            run_rule("iban", "x")

    def test_allow_empty_for_rules_without_it(self):
        assert run_rule("phone", "", allow_empty=True) is VALID
        assert run_rule("number_max", None, allow_empty=True) is VALID
        assert run_rule("phone", "").reason is Reason.EMPTY_INPUT

    def test_options_are_filtered(self):
        assert run_rule("email", "a@b.com", minimum=3, tip="x").ok
        assert run_rule("number_max", "150", maximum=200, minimum=500).ok
        assert run_rule("id_card_strict", "", allow_empty=True, maximum=1).ok
