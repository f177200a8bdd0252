from typing import Any

from amm_quoter.exceptions.base import AmmQuoterError


class ContractError(AmmQuoterError):
    """
    Exception raised by helpers that read from the deployed pool contract.
    """


class FetchingError(ContractError):
    """
    Raised when a read from the pool contract fails after all retries are exhausted.
    """


class QuoteMismatch(ContractError):
    """
    Raised when a locally computed quote differs from the contract's own quoting view.
    """

    def __init__(self, function: str, local: Any, contract: Any) -> None:
        self.function = function
        self.local = local
        self.contract = contract
        super().__init__(
            message=f"Local quote for {function} ({local}) does not match the contract ({contract})"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.function, self.local, self.contract)
