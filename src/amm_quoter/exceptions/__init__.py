from amm_quoter.exceptions.base import AmmQuoterError, AmmQuoterTypeError, AmmQuoterValueError
from amm_quoter.exceptions.contract import ContractError, FetchingError, QuoteMismatch
from amm_quoter.exceptions.evm import (
    EVMRevertError,
    InsufficientLiquidity,
    InvalidAmount,
    InvalidAmounts,
    InvalidUint256,
)
from amm_quoter.exceptions.fixed_point import InvalidAmountString
from amm_quoter.exceptions.oracle import (
    OracleError,
    OracleNotInitialized,
    OracleOwnershipError,
    StateMismatch,
)

from . import contract, evm, fixed_point, oracle

__all__ = (
    "AmmQuoterError",
    "AmmQuoterTypeError",
    "AmmQuoterValueError",
    "ContractError",
    "EVMRevertError",
    "FetchingError",
    "InsufficientLiquidity",
    "InvalidAmount",
    "InvalidAmountString",
    "InvalidAmounts",
    "InvalidUint256",
    "OracleError",
    "OracleNotInitialized",
    "OracleOwnershipError",
    "QuoteMismatch",
    "StateMismatch",
    "contract",
    "evm",
    "fixed_point",
    "oracle",
)
