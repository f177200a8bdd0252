from amm_quoter.fixed_point import FixedPointAmount, integer_sqrt
from amm_quoter.types import LiquidityQuote, RedemptionQuote

_ZERO = FixedPointAmount(0)


def required_counter_amount(
    amount_x: int,
    reserve_x: int,
    reserve_y: int,
) -> FixedPointAmount:
    """
    Calculate the amount of asset Y that keeps a deposit of `amount_x` at the pool's current ratio.

    The calculation is symmetric, so it works for either side of the pool by swapping the reserve
    arguments. Zero is returned when the pool is empty, in which case no ratio exists yet and both
    deposit amounts must be chosen independently.
    """

    if amount_x <= 0 or reserve_x <= 0 or reserve_y <= 0:
        return _ZERO

    return FixedPointAmount((amount_x * reserve_y) // reserve_x)


def quote_lp_issuance(
    amount_token: int,
    amount_eth: int,
    reserve_eth: int,
    reserve_token: int,
    total_lp_supply: int,
) -> FixedPointAmount:
    """
    Calculate the LP tokens minted for a deposit. Arguments are ordered as the contract's
    `getLiquidityOutput(amountToken, amountEth)` view and its `reserveETH`/`reserveSimplest`
    accessors.

    The first deposit into an empty pool mints the geometric mean of the two amounts, which fixes
    the pool's initial price at the depositor's ratio. Later deposits mint the lesser of the two
    proportional shares, so a deposit away from the pool ratio is credited only for its
    weaker-matched side.
    """

    if amount_token <= 0 or amount_eth <= 0 or total_lp_supply < 0:
        return _ZERO

    if total_lp_supply == 0:
        return FixedPointAmount(integer_sqrt(amount_token * amount_eth))

    if reserve_eth <= 0 or reserve_token <= 0:
        return _ZERO

    return FixedPointAmount(
        min(
            (amount_token * total_lp_supply) // reserve_token,
            (amount_eth * total_lp_supply) // reserve_eth,
        )
    )


def quote_add_liquidity(
    amount_x: int,
    reserve_x: int,
    reserve_y: int,
    total_lp_supply: int,
    amount_y: int | None = None,
) -> LiquidityQuote:
    """
    Quote a deposit of `amount_x`, returning the matching amount of Y and the LP tokens issued.

    For an existing pool the counter amount is derived from the pool ratio. An empty pool has no
    ratio, so the depositor must supply `amount_y`, which is then used as the counter amount.
    """

    if total_lp_supply == 0 or reserve_x <= 0 or reserve_y <= 0:
        counter_amount = FixedPointAmount(amount_y) if amount_y is not None else _ZERO
    else:
        counter_amount = required_counter_amount(
            amount_x=amount_x,
            reserve_x=reserve_x,
            reserve_y=reserve_y,
        )

    return LiquidityQuote(
        counter_amount=counter_amount,
        # Issuance is symmetric in the two (amount, reserve) pairs, so X maps onto either side
        lp_tokens_issued=quote_lp_issuance(
            amount_token=counter_amount,
            amount_eth=amount_x,
            reserve_eth=reserve_x,
            reserve_token=reserve_y,
            total_lp_supply=total_lp_supply,
        ),
    )


def quote_redemption(
    lp_token_amount: int,
    reserve_x: int,
    reserve_y: int,
    total_lp_supply: int,
) -> RedemptionQuote:
    """
    Calculate the proportional share of both reserves returned for burning `lp_token_amount`.
    """

    if lp_token_amount <= 0 or total_lp_supply <= 0 or reserve_x < 0 or reserve_y < 0:
        return RedemptionQuote(amount_x=_ZERO, amount_y=_ZERO)

    return RedemptionQuote(
        amount_x=FixedPointAmount((lp_token_amount * reserve_x) // total_lp_supply),
        amount_y=FixedPointAmount((lp_token_amount * reserve_y) // total_lp_supply),
    )
