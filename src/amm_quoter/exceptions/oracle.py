from typing import Any

from amm_quoter.exceptions.base import AmmQuoterError


class OracleError(AmmQuoterError):
    """
    Exception raised inside the pool state oracle. These indicate a test harness driving the oracle
    incorrectly and should not be caught and ignored.
    """


class OracleNotInitialized(OracleError):
    """
    Raised when an operation is attempted before `initialize` has seeded the oracle.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(message=f"Oracle must be initialized before calling {operation}.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.operation,)


class OracleOwnershipError(OracleError):
    """
    Raised when an oracle instance is used from a thread other than the one that created it.
    """

    def __init__(self, owner_thread: int, calling_thread: int) -> None:
        self.owner_thread = owner_thread
        self.calling_thread = calling_thread
        super().__init__(
            message=f"Oracle is owned by thread {owner_thread}, but was called from thread {calling_thread}."  # noqa:E501
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.owner_thread, self.calling_thread)


class StateMismatch(OracleError):
    """
    Raised when observed state differs from the state predicted by the oracle. The differing fields
    are available from the `.differences` attribute as a mapping of field name to a tuple of
    (expected, observed) values.
    """

    def __init__(self, differences: dict[str, tuple[int, int]]) -> None:
        self.differences = differences
        details = ", ".join(
            f"{field}: expected {expected}, observed {observed}"
            for field, (expected, observed) in differences.items()
        )
        super().__init__(message=f"Observed state does not match prediction ({details})")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.differences,)
