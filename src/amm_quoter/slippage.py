from decimal import ROUND_FLOOR, Decimal, InvalidOperation

from amm_quoter import config
from amm_quoter.constants import BASIS_POINTS_DENOMINATOR
from amm_quoter.exceptions import AmmQuoterTypeError, AmmQuoterValueError
from amm_quoter.fixed_point import FixedPointAmount
from amm_quoter.types import SlippageBound


def _default_tolerance_bps() -> int:
    return config.settings.slippage.default_tolerance_bps


def _validate_tolerance(tolerance_bps: int) -> None:
    if isinstance(tolerance_bps, bool) or not isinstance(tolerance_bps, int):
        raise AmmQuoterTypeError(
            message=f"Slippage tolerance must be an integer number of basis points, got {tolerance_bps!r}"  # noqa:E501
        )
    if not 0 <= tolerance_bps <= BASIS_POINTS_DENOMINATOR:
        raise AmmQuoterValueError(
            message=f"Slippage tolerance must be between 0 and {BASIS_POINTS_DENOMINATOR} basis points, got {tolerance_bps}"  # noqa:E501
        )


def percent_to_bps(percent: str | Decimal | int) -> int:
    """
    Convert a percentage, e.g. "0.5", into basis points using exact decimal arithmetic.

    Fractions of a basis point are discarded from the retained share of the amount, so the minimum
    never exceeds what the stated tolerance allows. Floats are rejected.
    """

    if isinstance(percent, (bool, float)):
        raise AmmQuoterTypeError(
            message=f"Percentages must be given as str, Decimal or int, not {type(percent)}"
        )

    try:
        value = Decimal(percent)
    except InvalidOperation as exc:
        raise AmmQuoterValueError(message=f"{percent!r} is not a valid percentage") from exc

    if not value.is_finite():
        raise AmmQuoterValueError(message=f"{percent!r} is not a valid percentage")

    retained_bps = int(((100 - value) * 100).to_integral_value(rounding=ROUND_FLOOR))
    tolerance_bps = BASIS_POINTS_DENOMINATOR - retained_bps
    _validate_tolerance(tolerance_bps)
    return tolerance_bps


def minimum_acceptable(
    expected_amount: int,
    tolerance_bps: int | None = None,
) -> FixedPointAmount:
    """
    Calculate the minimum amount to accept for an expected amount, given a slippage tolerance in
    basis points. The default tolerance is read from the configuration (50 bps, 0.5%).

    The result is passed to the contract, which reverts if the realized amount falls below it.
    """

    if tolerance_bps is None:
        tolerance_bps = _default_tolerance_bps()
    _validate_tolerance(tolerance_bps)

    if expected_amount <= 0:
        return FixedPointAmount(0)

    return FixedPointAmount(
        (expected_amount * (BASIS_POINTS_DENOMINATOR - tolerance_bps)) // BASIS_POINTS_DENOMINATOR
    )


def slippage_bound(
    expected_amount: int,
    tolerance_bps: int | None = None,
) -> SlippageBound:
    if tolerance_bps is None:
        tolerance_bps = _default_tolerance_bps()

    return SlippageBound(
        min_amount=minimum_acceptable(expected_amount, tolerance_bps),
        tolerance_bps=tolerance_bps,
    )
