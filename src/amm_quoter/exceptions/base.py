class AmmQuoterError(Exception):
    """
    Root of every exception raised by `amm_quoter`.

    Catch the specific subclasses first, then `AmmQuoterError` for anything else raised by the
    package. Errors from web3, pydantic and other dependencies are not wrapped unless noted.

    Exceptions created with a message expose it through the `.message` attribute, which is `None`
    otherwise.
    """

    message: str | None = None

    def __init__(self, message: str | None = None) -> None:
        if message:
            self.message = message
            super().__init__(message)


class AmmQuoterValueError(AmmQuoterError): ...


class AmmQuoterTypeError(AmmQuoterError): ...
