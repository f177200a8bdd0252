from typing import Any

from amm_quoter.exceptions.base import AmmQuoterValueError


class InvalidAmountString(AmmQuoterValueError):
    """
    Raised when a human-readable amount cannot be converted to a scaled integer without loss.
    """

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(message=f"Cannot parse amount {text!r}: {reason}")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.text, self.reason)
