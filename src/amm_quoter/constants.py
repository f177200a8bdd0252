from fractions import Fraction

from eth_typing import ChecksumAddress
from eth_utils.address import to_checksum_address

# Amounts are integers scaled by 10**18, matching the token and native asset precision
DECIMALS = 18
WAD = 10**DECIMALS

# A 0.3% swap fee, applied to the input as amount * 997 // 1000
AMM_FEE = Fraction(3, 1000)
FEE_DENOMINATOR = AMM_FEE.denominator
FEE_NUMERATOR = AMM_FEE.denominator - AMM_FEE.numerator

# Percentage: basis points with 4 digits of precision (100.00%)
BASIS_POINTS_DENOMINATOR = 10_000
DEFAULT_SLIPPAGE_TOLERANCE_BPS = 50

MIN_UINT256 = 0
MAX_UINT256 = 2**256 - 1

# The pool contract accepts the zero address as the `tokenIn` argument for native asset swaps
ZERO_ADDRESS: ChecksumAddress = to_checksum_address("0x0000000000000000000000000000000000000000")

__all__ = (
    "AMM_FEE",
    "BASIS_POINTS_DENOMINATOR",
    "DECIMALS",
    "DEFAULT_SLIPPAGE_TOLERANCE_BPS",
    "FEE_DENOMINATOR",
    "FEE_NUMERATOR",
    "MAX_UINT256",
    "MIN_UINT256",
    "WAD",
    "ZERO_ADDRESS",
)
