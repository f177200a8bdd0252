from decimal import Decimal

import pytest
from hypothesis import given, strategies

from amm_quoter.exceptions import AmmQuoterTypeError, AmmQuoterValueError, EVMRevertError
from amm_quoter.exceptions.fixed_point import InvalidAmountString
from amm_quoter.fixed_point import FixedPointAmount, integer_sqrt


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1", 10**18),
        ("1.5", 1_500_000_000_000_000_000),
        ("0.1", 100_000_000_000_000_000),
        ("0.3", 300_000_000_000_000_000),
        ("0.000000000000000001", 1),
        (".5", 500_000_000_000_000_000),
        ("5.", 5 * 10**18),
        ("-0.5", -500_000_000_000_000_000),
        ("+2", 2 * 10**18),
        (" 1_000.25 ", 1_000_250_000_000_000_000_000),
        ("1.0000000000000000000000", 10**18),
        ("123456789.123456789123456789", 123456789_123456789123456789),
    ],
)
def test_parse_string(text: str, expected: int) -> None:
    amount = FixedPointAmount.parse(text)
    assert amount == expected
    assert isinstance(amount, FixedPointAmount)


def test_parse_decimal_and_int() -> None:
    assert FixedPointAmount.parse(Decimal("2.25")) == 2_250_000_000_000_000_000
    assert FixedPointAmount.parse(Decimal("1E-18")) == 1
    assert FixedPointAmount.parse(3) == 3 * 10**18


def test_parse_with_custom_decimals() -> None:
    assert FixedPointAmount.parse("1.5", decimals=6) == 1_500_000
    assert FixedPointAmount.parse(7, decimals=0) == 7


@pytest.mark.parametrize(
    "text",
    [
        "",
        ".",
        "abc",
        "1e18",
        "1.2.3",
        "--1",
        "0x10",
        "1.0000000000000000001",
    ],
)
def test_parse_rejects_invalid_strings(text: str) -> None:
    with pytest.raises(InvalidAmountString):
        FixedPointAmount.parse(text)


def test_parse_rejects_non_finite_decimals() -> None:
    with pytest.raises(InvalidAmountString):
        FixedPointAmount.parse(Decimal("NaN"))
    with pytest.raises(InvalidAmountString):
        FixedPointAmount.parse(Decimal("Infinity"))


def test_parse_rejects_float_and_bool() -> None:
    with pytest.raises(AmmQuoterTypeError):
        FixedPointAmount.parse(1.5)  # type: ignore[arg-type]
    with pytest.raises(AmmQuoterTypeError):
        FixedPointAmount.parse(True)


def test_invalid_amount_string_is_a_value_error() -> None:
    with pytest.raises(AmmQuoterValueError, match="more than 18 decimal places"):
        FixedPointAmount.parse("0.0000000000000000001")


def test_from_wei() -> None:
    assert FixedPointAmount.from_wei(12345).wei == 12345
    with pytest.raises(AmmQuoterTypeError):
        FixedPointAmount.from_wei(False)
    with pytest.raises(AmmQuoterTypeError):
        FixedPointAmount.from_wei("12345")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("wei", "expected"),
    [
        (0, "0.0"),
        (1, "0.000000000000000001"),
        (10**18, "1.0"),
        (1_500_000_000_000_000_000, "1.5"),
        (-500_000_000_000_000_000, "-0.5"),
        (123456789_123456789123456789, "123456789.123456789123456789"),
    ],
)
def test_to_decimal_string(wei: int, expected: str) -> None:
    assert FixedPointAmount(wei).to_decimal_string() == expected
    assert str(FixedPointAmount(wei)) == expected


def test_to_decimal_string_truncates_display_places() -> None:
    amount = FixedPointAmount.parse("1.99999")
    assert amount.to_decimal_string(places=4) == "1.9999"
    assert amount.to_decimal_string(places=0) == "1"
    assert amount.to_decimal_string(places=8) == "1.99999000"
    assert FixedPointAmount.parse("-1.99999").to_decimal_string(places=2) == "-1.99"


def test_repr() -> None:
    assert repr(FixedPointAmount.parse("1.5")) == "FixedPointAmount('1.5')"


@pytest.mark.parametrize(
    "text",
    [
        "0.0",
        "1.0",
        "0.000000000000000001",
        "98765.4321",
        "1000000000000.000000000000000001",
    ],
)
def test_formatting_is_lossless(text: str) -> None:
    assert FixedPointAmount.parse(text).to_decimal_string() == text


@given(wei=strategies.integers(min_value=-(2**256), max_value=2**256))
def test_formatting_and_parsing_preserve_every_wei(wei: int) -> None:
    assert FixedPointAmount.parse(FixedPointAmount(wei).to_decimal_string()) == wei


def test_mul_down() -> None:
    assert FixedPointAmount.parse("1.5").mul_down(FixedPointAmount.parse("2")) == (
        FixedPointAmount.parse("3")
    )
    assert FixedPointAmount(1).mul_down(1) == 0


def test_div_down() -> None:
    assert FixedPointAmount.parse("1").div_down(FixedPointAmount.parse("3")) == 333333333333333333
    assert FixedPointAmount.parse("3").div_down(FixedPointAmount.parse("2")) == (
        FixedPointAmount.parse("1.5")
    )


def test_div_down_by_zero_reverts() -> None:
    with pytest.raises(EVMRevertError, match="ZERO_DIVISION"):
        FixedPointAmount.parse("1").div_down(0)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, 0),
        (1, 1),
        (3, 1),
        (4, 2),
        (15, 3),
        (16, 4),
        (17, 4),
        (36, 6),
        (10**36, 10**18),
        (36 * 10**36, 6 * 10**18),
    ],
)
def test_integer_sqrt(value: int, expected: int) -> None:
    assert integer_sqrt(value) == expected


def test_integer_sqrt_is_exact_beyond_float_precision() -> None:
    root = 10**30 + 7
    assert integer_sqrt(root * root) == root
    assert integer_sqrt(root * root - 1) == root - 1


def test_integer_sqrt_rejects_negative_values() -> None:
    with pytest.raises(AmmQuoterValueError):
        integer_sqrt(-1)


@given(value=strategies.integers(min_value=0, max_value=2**512))
def test_integer_sqrt_is_floor(value: int) -> None:
    root = integer_sqrt(value)
    assert root * root <= value < (root + 1) * (root + 1)
