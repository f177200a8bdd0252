import dataclasses
import enum
import threading

from amm_quoter.exceptions import (
    InsufficientLiquidity,
    InvalidAmount,
    InvalidAmounts,
    OracleError,
    OracleNotInitialized,
    OracleOwnershipError,
    StateMismatch,
)
from amm_quoter.fixed_point import FixedPointAmount
from amm_quoter.liquidity import quote_lp_issuance, quote_redemption, required_counter_amount
from amm_quoter.logging import logger
from amm_quoter.swap import (
    is_output_achievable,
    quote_swap_input,
    quote_swap_output,
    select_reserves,
)
from amm_quoter.types import PoolState, SwapDirection, WalletBalanceSnapshot


class OracleStatus(enum.Enum):
    UNINITIALIZED = enum.auto()
    SEEDED = enum.auto()
    ACTIVE = enum.auto()


@dataclasses.dataclass(slots=True, frozen=True)
class AppliedOperation:
    """
    A record of an operation applied to the oracle, with the state that resulted from it.
    """

    operation: str
    pool_state: PoolState
    wallet_balances: WalletBalanceSnapshot


class PoolStateOracle:
    """
    An independent mirror of a pool and the wallet under test, used to predict the state that a
    sequence of on-chain operations should produce.

    Every operation applies the same formulas as the quoting functions. The oracle is owned by the
    thread that creates it: one instance per test scenario, never shared between concurrently
    running scenarios. Using it from another thread, or before `initialize`, raises an
    `OracleError`.
    """

    def __init__(self) -> None:
        self._owner_thread = threading.get_ident()
        self._status = OracleStatus.UNINITIALIZED
        self._reserve_eth = 0
        self._reserve_token = 0
        self._total_lp_supply = 0
        self._eth_balance = 0
        self._token_balance = 0
        self._lp_balance = 0
        self._history: list[AppliedOperation] = []

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"{self.__class__.__name__}(status={self._status.name}, "
            f"reserve_eth={self._reserve_eth}, reserve_token={self._reserve_token}, "
            f"total_lp_supply={self._total_lp_supply})"
        )

    def _check_access(self, operation: str, *, require_initialized: bool = True) -> None:
        calling_thread = threading.get_ident()
        if calling_thread != self._owner_thread:
            raise OracleOwnershipError(
                owner_thread=self._owner_thread,
                calling_thread=calling_thread,
            )
        if require_initialized and self._status is OracleStatus.UNINITIALIZED:
            raise OracleNotInitialized(operation=operation)

    def _record(self, operation: str) -> None:
        record = AppliedOperation(
            operation=operation,
            pool_state=self._pool_snapshot(),
            wallet_balances=self._wallet_snapshot(),
        )
        self._history.append(record)
        logger.debug(
            f"Oracle applied {operation}: reserves ({self._reserve_eth}, {self._reserve_token}), "
            f"LP supply {self._total_lp_supply}"
        )

    def _pool_snapshot(self) -> PoolState:
        return PoolState(
            reserve_eth=FixedPointAmount(self._reserve_eth),
            reserve_token=FixedPointAmount(self._reserve_token),
            total_lp_supply=FixedPointAmount(self._total_lp_supply),
        )

    def _wallet_snapshot(self) -> WalletBalanceSnapshot:
        return WalletBalanceSnapshot(
            eth_balance=self._eth_balance,
            token_balance=self._token_balance,
            lp_balance=self._lp_balance,
        )

    @property
    def status(self) -> OracleStatus:
        self._check_access("status", require_initialized=False)
        return self._status

    @property
    def pool_state(self) -> PoolState:
        self._check_access("pool_state")
        return self._pool_snapshot()

    @property
    def wallet_balances(self) -> WalletBalanceSnapshot:
        self._check_access("wallet_balances")
        return self._wallet_snapshot()

    @property
    def history(self) -> tuple[AppliedOperation, ...]:
        self._check_access("history", require_initialized=False)
        return tuple(self._history)

    def initialize(self, starting_balances: WalletBalanceSnapshot) -> None:
        """
        Seed the wallet balances and start from an empty pool.

        The starting balances should be read from the node rather than assumed, so that deployment
        costs paid by the account do not need to be predicted.
        """

        self._check_access("initialize", require_initialized=False)
        if self._status is not OracleStatus.UNINITIALIZED:
            raise OracleError(
                message="Oracle is already initialized, create a new instance for a new scenario."
            )

        self._eth_balance = starting_balances.eth_balance
        self._token_balance = starting_balances.token_balance
        self._lp_balance = starting_balances.lp_balance
        self._reserve_eth = 0
        self._reserve_token = 0
        self._total_lp_supply = 0
        self._status = OracleStatus.SEEDED
        logger.debug(f"Oracle seeded with balances {starting_balances}")
        self._record("initialize")

    def expected_swap_output(self, direction: SwapDirection, amount_in: int) -> FixedPointAmount:
        self._check_access("expected_swap_output")
        reserve_in, reserve_out = select_reserves(direction, self._pool_snapshot())
        return quote_swap_output(
            amount_in=amount_in,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
        )

    def expected_swap_input(self, direction: SwapDirection, amount_out: int) -> FixedPointAmount:
        self._check_access("expected_swap_input")
        reserve_in, reserve_out = select_reserves(direction, self._pool_snapshot())
        return quote_swap_input(
            amount_out=amount_out,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
        )

    def required_token_amount(self, amount_eth: int) -> FixedPointAmount:
        """
        The token amount that keeps a deposit of `amount_eth` at the current pool ratio.
        """

        self._check_access("required_token_amount")
        return required_counter_amount(
            amount_x=amount_eth,
            reserve_x=self._reserve_eth,
            reserve_y=self._reserve_token,
        )

    def required_eth_amount(self, amount_token: int) -> FixedPointAmount:
        """
        The ETH amount that keeps a deposit of `amount_token` at the current pool ratio.
        """

        self._check_access("required_eth_amount")
        return required_counter_amount(
            amount_x=amount_token,
            reserve_x=self._reserve_token,
            reserve_y=self._reserve_eth,
        )

    def apply_add_liquidity(
        self,
        amount_eth: int,
        amount_token: int,
        actual_fee_cost: int,
    ) -> FixedPointAmount:
        """
        Apply a deposit by the wallet under test and return the LP tokens minted.
        """

        self._check_access("apply_add_liquidity")
        if amount_eth <= 0 or amount_token <= 0:
            raise InvalidAmounts

        lp_tokens = quote_lp_issuance(
            amount_token=amount_token,
            amount_eth=amount_eth,
            reserve_eth=self._reserve_eth,
            reserve_token=self._reserve_token,
            total_lp_supply=self._total_lp_supply,
        )

        self._eth_balance -= amount_eth + actual_fee_cost
        self._token_balance -= amount_token
        self._lp_balance += lp_tokens
        self._reserve_eth += amount_eth
        self._reserve_token += amount_token
        self._total_lp_supply += lp_tokens
        self._status = OracleStatus.ACTIVE
        self._record("add_liquidity")
        return lp_tokens

    def apply_remove_liquidity(
        self,
        lp_amount: int,
        actual_fee_cost: int,
    ) -> tuple[FixedPointAmount, FixedPointAmount]:
        """
        Apply a withdrawal by the wallet under test and return the (ETH, token) amounts received.
        """

        self._check_access("apply_remove_liquidity")
        if lp_amount <= 0 or lp_amount > self._lp_balance or lp_amount > self._total_lp_supply:
            raise InsufficientLiquidity(
                requested=lp_amount,
                available=min(self._lp_balance, self._total_lp_supply),
            )

        redemption = quote_redemption(
            lp_token_amount=lp_amount,
            reserve_x=self._reserve_eth,
            reserve_y=self._reserve_token,
            total_lp_supply=self._total_lp_supply,
        )

        self._eth_balance += redemption.amount_x - actual_fee_cost
        self._token_balance += redemption.amount_y
        self._lp_balance -= lp_amount
        self._reserve_eth -= redemption.amount_x
        self._reserve_token -= redemption.amount_y
        self._total_lp_supply -= lp_amount
        self._record("remove_liquidity")
        return redemption.amount_x, redemption.amount_y

    def _settle_swap(
        self,
        direction: SwapDirection,
        amount_in: int,
        amount_out: int,
        actual_fee_cost: int,
    ) -> None:
        # The transaction fee is always paid in the native asset
        match direction:
            case SwapDirection.ETH_TO_TOKEN:
                self._eth_balance -= amount_in + actual_fee_cost
                self._token_balance += amount_out
                self._reserve_eth += amount_in
                self._reserve_token -= amount_out
            case SwapDirection.TOKEN_TO_ETH:
                self._token_balance -= amount_in
                self._eth_balance += amount_out - actual_fee_cost
                self._reserve_token += amount_in
                self._reserve_eth -= amount_out

    def _require_liquidity(self, amount: int) -> None:
        if self._reserve_eth == 0 or self._reserve_token == 0:
            raise InsufficientLiquidity(requested=amount, available=0)

    def apply_swap(
        self,
        direction: SwapDirection,
        amount_in: int,
        actual_fee_cost: int,
    ) -> FixedPointAmount:
        """
        Apply an exact input swap by the wallet under test and return the amount received.
        """

        self._check_access("apply_swap")
        if amount_in <= 0:
            raise InvalidAmount
        self._require_liquidity(amount_in)

        reserve_in, reserve_out = select_reserves(direction, self._pool_snapshot())
        amount_out = quote_swap_output(
            amount_in=amount_in,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
        )

        self._settle_swap(direction, amount_in, amount_out, actual_fee_cost)
        self._record(f"swap ({direction.value})")
        return amount_out

    def apply_swap_exact_output(
        self,
        direction: SwapDirection,
        amount_out: int,
        actual_fee_cost: int,
    ) -> FixedPointAmount:
        """
        Apply a swap sized to receive `amount_out`, returning the input amount paid. The input is
        derived from the inverse formula, as the caller would have submitted it.
        """

        self._check_access("apply_swap_exact_output")
        if amount_out <= 0:
            raise InvalidAmount
        self._require_liquidity(amount_out)

        reserve_in, reserve_out = select_reserves(direction, self._pool_snapshot())
        if not is_output_achievable(amount_out, reserve_out):
            raise InvalidAmount

        amount_in = quote_swap_input(
            amount_out=amount_out,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
        )
        # The contract rejects a zero input, which truncation produces for tiny outputs
        if amount_in <= 0:
            raise InvalidAmount

        self._settle_swap(direction, amount_in, amount_out, actual_fee_cost)
        self._record(f"swap exact output ({direction.value})")
        return amount_in

    def apply_external_swap(
        self,
        amount_in: int,
        amount_out: int,
        direction: SwapDirection = SwapDirection.ETH_TO_TOKEN,
    ) -> None:
        """
        Apply a swap made by a third party. Only the reserves change; the wallet under test is not
        affected.

        Use this to reproduce a price move between quoting and execution.
        """

        self._check_access("apply_external_swap")
        if amount_in <= 0 or amount_out < 0:
            raise InvalidAmount

        _, reserve_out = select_reserves(direction, self._pool_snapshot())
        if amount_out >= reserve_out:
            raise InsufficientLiquidity(requested=amount_out, available=reserve_out)

        match direction:
            case SwapDirection.ETH_TO_TOKEN:
                self._reserve_eth += amount_in
                self._reserve_token -= amount_out
            case SwapDirection.TOKEN_TO_ETH:
                self._reserve_token += amount_in
                self._reserve_eth -= amount_out
        self._record(f"external swap ({direction.value})")

    def apply_failed_transaction(self, actual_fee_cost: int) -> None:
        """
        Apply the fee paid for a transaction that reverted. Nothing else changes.
        """

        self._check_access("apply_failed_transaction")
        self._eth_balance -= actual_fee_cost
        self._record("failed transaction")

    def verify(
        self,
        observed_pool_state: PoolState,
        observed_wallet_balances: WalletBalanceSnapshot | None = None,
    ) -> None:
        """
        Compare observed state against the prediction, raising `StateMismatch` with every differing
        field if they disagree.
        """

        self._check_access("verify")

        expected: dict[str, int] = {
            "reserve_eth": self._reserve_eth,
            "reserve_token": self._reserve_token,
            "total_lp_supply": self._total_lp_supply,
        }
        observed: dict[str, int] = {
            "reserve_eth": observed_pool_state.reserve_eth,
            "reserve_token": observed_pool_state.reserve_token,
            "total_lp_supply": observed_pool_state.total_lp_supply,
        }
        if observed_wallet_balances is not None:
            expected |= {
                "eth_balance": self._eth_balance,
                "token_balance": self._token_balance,
                "lp_balance": self._lp_balance,
            }
            observed |= {
                "eth_balance": observed_wallet_balances.eth_balance,
                "token_balance": observed_wallet_balances.token_balance,
                "lp_balance": observed_wallet_balances.lp_balance,
            }

        differences = {
            field: (int(expected[field]), int(observed[field]))
            for field in expected
            if expected[field] != observed[field]
        }
        if differences:
            logger.warning(f"Oracle prediction mismatch: {differences}")
            raise StateMismatch(differences=differences)
