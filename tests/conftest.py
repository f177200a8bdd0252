import logging
from collections.abc import Callable
from typing import Any

import eth_abi.abi
import pytest

from amm_quoter.constants import ZERO_ADDRESS
from amm_quoter.fixed_point import FixedPointAmount
from amm_quoter.functions import function_selector
from amm_quoter.liquidity import quote_lp_issuance, quote_redemption
from amm_quoter.logging import logger
from amm_quoter.swap import quote_swap_output
from amm_quoter.types import PoolState


@pytest.fixture(scope="session", autouse=True)
def _set_amm_quoter_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


class FakeEth:
    """
    Answers `eth_call` requests for the pool contract's read-only functions from an in-memory pool
    state, decoding the ABI-encoded arguments and encoding the results as the contract would.
    """

    def __init__(self, contract: "FakePoolContract") -> None:
        self.contract = contract
        self.calls: list[bytes] = []
        self.failures: list[Exception] = []

    def call(self, transaction: dict[str, Any], block_identifier: Any = None) -> bytes:
        if self.failures:
            raise self.failures.pop(0)

        data = bytes(transaction["data"])
        self.calls.append(data)
        selector, arguments = data[:4], data[4:]
        return_types, types, handler = self.contract.handlers[selector]
        return eth_abi.abi.encode(
            return_types,
            handler(*eth_abi.abi.decode(types, arguments)),
        )

    def get_balance(self, account: str, block_identifier: Any = None) -> int:
        return self.contract.native_balances.get(account, 0)


class FakePoolContract:
    def __init__(self, pool_state: PoolState) -> None:
        self.pool_state = pool_state
        self.lp_balances: dict[str, int] = {}
        self.native_balances: dict[str, int] = {}
        # Added to the contract's quoting views, to simulate a contract that disagrees
        self.quote_skew = 0

        self.handlers: dict[bytes, tuple[list[str], list[str], Callable[..., tuple[Any, ...]]]] = {
            function_selector("reserveETH()"): (
                ["uint256"],
                [],
                lambda: (self.pool_state.reserve_eth,),
            ),
            function_selector("reserveSimplest()"): (
                ["uint256"],
                [],
                lambda: (self.pool_state.reserve_token,),
            ),
            function_selector("totalLPTokens()"): (
                ["uint256"],
                [],
                lambda: (self.pool_state.total_lp_supply,),
            ),
            function_selector("lpTokens(address)"): (
                ["uint256"],
                ["address"],
                lambda account: (self.lp_balances.get(account.lower(), 0),),
            ),
            function_selector("getSwapOutput(address,uint256)"): (
                ["uint256"],
                ["address", "uint256"],
                self._swap_output,
            ),
            function_selector("getLiquidityOutput(uint256,uint256)"): (
                ["uint256"],
                ["uint256", "uint256"],
                self._liquidity_output,
            ),
            function_selector("getRemoveLiquidityOutput(uint256)"): (
                ["uint256", "uint256"],
                ["uint256"],
                self._remove_liquidity_output,
            ),
        }

    def _swap_output(self, token_in: str, amount_in: int) -> tuple[int]:
        if token_in == ZERO_ADDRESS:
            reserve_in, reserve_out = self.pool_state.reserve_eth, self.pool_state.reserve_token
        else:
            reserve_in, reserve_out = self.pool_state.reserve_token, self.pool_state.reserve_eth
        return (quote_swap_output(amount_in, reserve_in, reserve_out) + self.quote_skew,)

    def _liquidity_output(self, amount_token: int, amount_eth: int) -> tuple[int]:
        return (
            quote_lp_issuance(
                amount_token,
                amount_eth,
                self.pool_state.reserve_eth,
                self.pool_state.reserve_token,
                self.pool_state.total_lp_supply,
            )
            + self.quote_skew,
        )

    def _remove_liquidity_output(self, lp_amount: int) -> tuple[int, int]:
        redemption = quote_redemption(
            lp_amount,
            self.pool_state.reserve_eth,
            self.pool_state.reserve_token,
            self.pool_state.total_lp_supply,
        )
        return redemption.amount_y + self.quote_skew, redemption.amount_x


class FakeWeb3:
    def __init__(self, contract: FakePoolContract) -> None:
        self.eth = FakeEth(contract)


@pytest.fixture
def pool_state() -> PoolState:
    return PoolState(
        reserve_eth=FixedPointAmount.parse("10"),
        reserve_token=FixedPointAmount.parse("20"),
        total_lp_supply=FixedPointAmount.parse("10"),
    )


@pytest.fixture
def fake_pool_contract(pool_state: PoolState) -> FakePoolContract:
    return FakePoolContract(pool_state)


@pytest.fixture
def fake_w3(fake_pool_contract: FakePoolContract) -> FakeWeb3:
    return FakeWeb3(fake_pool_contract)
