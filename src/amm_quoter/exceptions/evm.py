from typing import Any

from amm_quoter.exceptions.base import AmmQuoterError


class EVMRevertError(AmmQuoterError):
    """
    Raised when a simulated contract operation would revert.
    """

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(message=f"EVM Revert: {error}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.error,)


class InvalidAmount(EVMRevertError):
    """
    A swap was requested with a non-positive input, or for an output the pool cannot deliver.
    """

    def __init__(self) -> None:
        super().__init__(error="InvalidAmount")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class InvalidAmounts(EVMRevertError):
    """
    A liquidity deposit was requested with a non-positive amount on either side.
    """

    def __init__(self) -> None:
        super().__init__(error="InvalidAmounts")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class InsufficientLiquidity(EVMRevertError):
    """
    A withdrawal was requested for zero LP tokens, or for more than are outstanding or held.
    """

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(error="InsufficientLiquidity")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.requested, self.available)


class InvalidUint256(EVMRevertError):
    """
    A contract argument falls outside the uint256 range and cannot be ABI-encoded.
    """

    def __init__(self) -> None:
        super().__init__(error="Not a valid uint256")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()
