import dataclasses
import enum
from decimal import Decimal

from amm_quoter.exceptions import AmmQuoterValueError
from amm_quoter.fixed_point import FixedPointAmount


class SwapDirection(enum.Enum):
    ETH_TO_TOKEN = "eth-to-token"
    TOKEN_TO_ETH = "token-to-eth"

    @property
    def reversed(self) -> "SwapDirection":
        return (
            SwapDirection.TOKEN_TO_ETH
            if self is SwapDirection.ETH_TO_TOKEN
            else SwapDirection.ETH_TO_TOKEN
        )


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class PoolState:
    """
    Reserves and LP token supply for a two-asset pool pairing the native asset with a token.
    """

    reserve_eth: FixedPointAmount
    reserve_token: FixedPointAmount
    total_lp_supply: FixedPointAmount

    def __post_init__(self) -> None:
        for field in ("reserve_eth", "reserve_token", "total_lp_supply"):
            value = getattr(self, field)
            if value < 0:
                raise AmmQuoterValueError(message=f"{field} cannot be negative, got {value}")
            if not isinstance(value, FixedPointAmount):
                object.__setattr__(self, field, FixedPointAmount(value))

        if (self.total_lp_supply == 0) != (self.reserve_eth == 0 and self.reserve_token == 0):
            raise AmmQuoterValueError(
                message=f"LP supply {self.total_lp_supply} is inconsistent with reserves "
                f"({self.reserve_eth}, {self.reserve_token})"
            )

    @classmethod
    def empty(cls) -> "PoolState":
        return cls(
            reserve_eth=FixedPointAmount(0),
            reserve_token=FixedPointAmount(0),
            total_lp_supply=FixedPointAmount(0),
        )

    @property
    def is_empty(self) -> bool:
        return self.total_lp_supply == 0

    @property
    def k(self) -> int:
        """
        The constant product invariant.
        """

        return self.reserve_eth * self.reserve_token


@dataclasses.dataclass(slots=True, frozen=True)
class Quote:
    amount_out: FixedPointAmount


@dataclasses.dataclass(slots=True, frozen=True)
class LiquidityQuote:
    counter_amount: FixedPointAmount
    lp_tokens_issued: FixedPointAmount


@dataclasses.dataclass(slots=True, frozen=True)
class RedemptionQuote:
    amount_x: FixedPointAmount
    amount_y: FixedPointAmount


@dataclasses.dataclass(slots=True, frozen=True)
class SlippageBound:
    min_amount: FixedPointAmount
    tolerance_bps: int

    @property
    def tolerance_percent(self) -> Decimal:
        return Decimal(self.tolerance_bps) / 100

    def permits(self, realized_amount: int) -> bool:
        """
        Predict whether the contract would accept a realized amount against this bound.

        Enforcement belongs to the contract, which reverts when the realized amount is lower than
        the minimum.
        """

        return realized_amount >= self.min_amount


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class WalletBalanceSnapshot:
    eth_balance: int
    token_balance: int
    lp_balance: int = 0


__all__ = (
    "LiquidityQuote",
    "PoolState",
    "Quote",
    "RedemptionQuote",
    "SlippageBound",
    "SwapDirection",
    "WalletBalanceSnapshot",
)
