from decimal import Decimal

import pytest

from amm_quoter.exceptions import AmmQuoterValueError
from amm_quoter.fixed_point import FixedPointAmount
from amm_quoter.types import PoolState, SlippageBound

ONE = 10**18


def test_pool_state_coerces_amounts() -> None:
    pool_state = PoolState(reserve_eth=10 * ONE, reserve_token=20 * ONE, total_lp_supply=10 * ONE)
    assert isinstance(pool_state.reserve_eth, FixedPointAmount)
    assert isinstance(pool_state.total_lp_supply, FixedPointAmount)
    assert pool_state.k == 200 * ONE * ONE
    assert not pool_state.is_empty


def test_empty_pool_state() -> None:
    pool_state = PoolState.empty()
    assert pool_state.is_empty
    assert pool_state.k == 0


@pytest.mark.parametrize(
    ("reserve_eth", "reserve_token", "total_lp_supply"),
    [
        (-1, 20, 10),
        (10, -1, 10),
        (10, 20, -1),
    ],
)
def test_pool_state_rejects_negative_amounts(
    reserve_eth: int, reserve_token: int, total_lp_supply: int
) -> None:
    with pytest.raises(AmmQuoterValueError, match="cannot be negative"):
        PoolState(
            reserve_eth=reserve_eth,
            reserve_token=reserve_token,
            total_lp_supply=total_lp_supply,
        )


@pytest.mark.parametrize(
    ("reserve_eth", "reserve_token", "total_lp_supply"),
    [
        (10, 20, 0),
        (0, 0, 10),
    ],
)
def test_pool_state_rejects_inconsistent_supply(
    reserve_eth: int, reserve_token: int, total_lp_supply: int
) -> None:
    with pytest.raises(AmmQuoterValueError, match="inconsistent"):
        PoolState(
            reserve_eth=reserve_eth,
            reserve_token=reserve_token,
            total_lp_supply=total_lp_supply,
        )


def test_pool_state_is_immutable() -> None:
    pool_state = PoolState.empty()
    with pytest.raises(AttributeError):
        pool_state.reserve_eth = FixedPointAmount(1)  # type: ignore[misc]


def test_slippage_bound_percent() -> None:
    assert SlippageBound(min_amount=FixedPointAmount(0), tolerance_bps=125).tolerance_percent == (
        Decimal("1.25")
    )
