from fractions import Fraction

from amm_quoter.constants import FEE_DENOMINATOR, FEE_NUMERATOR
from amm_quoter.fixed_point import FixedPointAmount
from amm_quoter.types import PoolState, Quote, SwapDirection

_ZERO = FixedPointAmount(0)


def quote_swap_output(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
) -> FixedPointAmount:
    """
    Calculate the amount out for an exact input swap through the constant product (x*y=k) pool.

    The 0.3% fee is taken from the input first, truncating, then the constant product formula is
    applied with a second truncating division. Both steps match the contract's integer math. Zero is
    returned when there is no input or no liquidity.
    """

    if amount_in <= 0 or reserve_in <= 0 or reserve_out <= 0:
        return _ZERO

    amount_in_with_fee = (amount_in * FEE_NUMERATOR) // FEE_DENOMINATOR
    return FixedPointAmount(
        (reserve_out * amount_in_with_fee) // (reserve_in + amount_in_with_fee)
    )


def quote_swap_input(
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
) -> FixedPointAmount:
    """
    Calculate the amount in needed to receive an exact output from the constant product pool.

    This is an approximate inverse of `quote_swap_output`: truncation in both directions means that
    feeding the result back into `quote_swap_output` may return slightly less than `amount_out`.
    Zero is returned for invalid inputs and for outputs the pool cannot deliver.
    """

    if amount_out <= 0 or reserve_in <= 0 or reserve_out <= 0:
        return _ZERO

    if not is_output_achievable(amount_out, reserve_out):
        return _ZERO

    return FixedPointAmount(
        (reserve_in * amount_out * FEE_DENOMINATOR)
        // ((reserve_out - amount_out) * FEE_NUMERATOR)
    )


def is_output_achievable(amount_out: int, reserve_out: int) -> bool:
    """
    Check if an exact output is strictly less than the output reserve. A pool can never be drained
    completely by a swap.
    """

    return amount_out < reserve_out


def exchange_rate(reserve_in: int, reserve_out: int) -> Fraction | None:
    """
    Get the exchange rate for a unit of input, expressed in units of the output, as a ratio of the
    reserves. No fee or price impact is included.

    Returns `None` if either reserve is empty, since no rate exists yet.
    """

    if reserve_in <= 0 or reserve_out <= 0:
        return None

    return Fraction(reserve_out, reserve_in)


def select_reserves(
    direction: SwapDirection,
    pool_state: PoolState,
) -> tuple[FixedPointAmount, FixedPointAmount]:
    """
    Return the (input, output) reserves for a swap in the given direction.
    """

    match direction:
        case SwapDirection.ETH_TO_TOKEN:
            return pool_state.reserve_eth, pool_state.reserve_token
        case SwapDirection.TOKEN_TO_ETH:
            return pool_state.reserve_token, pool_state.reserve_eth


def quote_swap(
    direction: SwapDirection,
    amount_in: int,
    pool_state: PoolState,
) -> Quote:
    reserve_in, reserve_out = select_reserves(direction, pool_state)
    return Quote(
        amount_out=quote_swap_output(
            amount_in=amount_in,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
        )
    )
