from .config import settings
from .version import __version__

# isort: split

from .fixed_point import FixedPointAmount, integer_sqrt
from .liquidity import (
    quote_add_liquidity,
    quote_lp_issuance,
    quote_redemption,
    required_counter_amount,
)
from .logging import logger
from .oracle import AppliedOperation, OracleStatus, PoolStateOracle
from .parameters import (
    AddLiquidityParameters,
    RemoveLiquidityParameters,
    SwapParameters,
    add_liquidity_parameters,
    remove_liquidity_parameters,
    swap_parameters,
)
from .slippage import minimum_acceptable, percent_to_bps, slippage_bound
from .swap import (
    exchange_rate,
    is_output_achievable,
    quote_swap,
    quote_swap_input,
    quote_swap_output,
    select_reserves,
)
from .types import (
    LiquidityQuote,
    PoolState,
    Quote,
    RedemptionQuote,
    SlippageBound,
    SwapDirection,
    WalletBalanceSnapshot,
)

__all__ = (
    "AddLiquidityParameters",
    "AppliedOperation",
    "FixedPointAmount",
    "LiquidityQuote",
    "OracleStatus",
    "PoolState",
    "PoolStateOracle",
    "Quote",
    "RedemptionQuote",
    "RemoveLiquidityParameters",
    "SlippageBound",
    "SwapDirection",
    "SwapParameters",
    "WalletBalanceSnapshot",
    "__version__",
    "add_liquidity_parameters",
    "exchange_rate",
    "integer_sqrt",
    "is_output_achievable",
    "logger",
    "minimum_acceptable",
    "percent_to_bps",
    "quote_add_liquidity",
    "quote_lp_issuance",
    "quote_redemption",
    "quote_swap",
    "quote_swap_input",
    "quote_swap_output",
    "remove_liquidity_parameters",
    "required_counter_amount",
    "select_reserves",
    "settings",
    "slippage_bound",
    "swap_parameters",
)
