import re
from decimal import Decimal
from typing import Self

from amm_quoter.constants import DECIMALS, WAD
from amm_quoter.exceptions import AmmQuoterTypeError, AmmQuoterValueError, EVMRevertError
from amm_quoter.exceptions.fixed_point import InvalidAmountString

_AMOUNT_PATTERN = re.compile(r"^(?P<sign>[+-]?)(?P<whole>\d*)(?:\.(?P<fraction>\d*))?$")


def integer_sqrt(value: int) -> int:
    """
    Calculate the floor of the square root of a non-negative integer using Newton's method.

    The result is exact for integers of any size, unlike a floating point square root which loses
    precision once the product of two 18-decimal amounts exceeds 2**53.
    """

    if value < 0:
        raise AmmQuoterValueError(message=f"Cannot take the square root of {value}")
    if value == 0:
        return 0

    x = value
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + value // x) // 2
    return x


class FixedPointAmount(int):
    """
    An amount expressed as an integer scaled by 10**18.

    Because this is an `int`, instances can be passed anywhere a wei value is expected and all
    integer arithmetic works unchanged. Results of plain arithmetic are `int`; the quoting functions
    wrap their results back into `FixedPointAmount`.
    """

    @classmethod
    def from_wei(cls, wei: int) -> Self:
        if isinstance(wei, bool) or not isinstance(wei, int):
            raise AmmQuoterTypeError(message=f"Expected an integer wei value, got {type(wei)}")
        return cls(wei)

    @classmethod
    def parse(cls, value: str | Decimal | int, decimals: int = DECIMALS) -> Self:
        """
        Parse a human-readable decimal amount, e.g. "1.5", into a scaled integer.

        The conversion is performed on the digit groups of the string, never via `float`. Fractional
        digits beyond `decimals` are accepted only if they are all zero, since the contract could not
        represent them.
        """

        match value:
            case bool():
                raise AmmQuoterTypeError(message="Cannot parse a boolean as an amount")
            case int():
                return cls(value * 10**decimals)
            case Decimal():
                if not value.is_finite():
                    raise InvalidAmountString(str(value), "not a finite number")
                text = f"{value:f}"
            case str():
                text = value.strip().replace("_", "")
            case _:
                raise AmmQuoterTypeError(
                    message=f"Amounts must be parsed from str, Decimal or int, not {type(value)}"
                )

        parsed = _AMOUNT_PATTERN.match(text)
        if parsed is None:
            raise InvalidAmountString(text, "not a plain decimal number")

        whole = parsed["whole"]
        fraction = parsed["fraction"] or ""
        if not whole and not fraction:
            raise InvalidAmountString(text, "no digits")

        if len(fraction) > decimals:
            if fraction[decimals:].strip("0"):
                raise InvalidAmountString(text, f"more than {decimals} decimal places")
            fraction = fraction[:decimals]

        scaled = int(whole or "0") * 10**decimals + int(fraction.ljust(decimals, "0") or "0")
        return cls(-scaled if parsed["sign"] == "-" else scaled)

    @property
    def wei(self) -> int:
        return int(self)

    def to_decimal_string(self, decimals: int = DECIMALS, places: int | None = None) -> str:
        """
        Format the amount as a decimal string.

        By default the result is lossless, with trailing zeros removed but at least one fractional
        digit kept, e.g. "1.0" or "0.000000000000000001". If `places` is given, the fractional part
        is truncated (never rounded) to exactly that many digits for display.
        """

        sign = "-" if self < 0 else ""
        whole, fraction = divmod(abs(int(self)), 10**decimals)
        fraction_digits = str(fraction).rjust(decimals, "0") if decimals else ""

        if places is None:
            fraction_digits = fraction_digits.rstrip("0") or "0"
        elif places == 0:
            return f"{sign}{whole}"
        else:
            fraction_digits = fraction_digits[:places].ljust(places, "0")

        return f"{sign}{whole}.{fraction_digits}"

    def mul_down(self, other: int) -> "FixedPointAmount":
        """
        Multiply two fixed point values, truncating the result.
        """

        return FixedPointAmount((int(self) * int(other)) // WAD)

    def div_down(self, other: int) -> "FixedPointAmount":
        """
        Divide two fixed point values, truncating the result.
        """

        if other == 0:
            raise EVMRevertError(error="ZERO_DIVISION")
        return FixedPointAmount((int(self) * WAD) // int(other))

    def __repr__(self) -> str:
        return f"FixedPointAmount('{self.to_decimal_string()}')"

    def __str__(self) -> str:
        return self.to_decimal_string()
