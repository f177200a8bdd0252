import pickle

import pytest

from amm_quoter.exceptions import (
    AmmQuoterError,
    EVMRevertError,
    FetchingError,
    InsufficientLiquidity,
    InvalidAmount,
    InvalidAmounts,
    InvalidAmountString,
    InvalidUint256,
    OracleNotInitialized,
    OracleOwnershipError,
    QuoteMismatch,
    StateMismatch,
)


def test_base_exception_pickling() -> None:
    """
    Test that an exception with a custom message can be pickled and unpickled correctly.
    """

    original_exception = FetchingError(message="eth_call failed")

    unpickled_exception = pickle.loads(pickle.dumps(original_exception))

    assert type(unpickled_exception) is FetchingError
    assert unpickled_exception.message == "eth_call failed"
    assert str(unpickled_exception) == "eth_call failed"


def test_exception_without_message_pickling() -> None:
    unpickled_exception = pickle.loads(pickle.dumps(AmmQuoterError()))

    assert type(unpickled_exception) is AmmQuoterError
    assert unpickled_exception.message is None


@pytest.mark.parametrize(
    "original_exception",
    [
        EVMRevertError(error="ZERO_DIVISION"),
        InvalidAmount(),
        InvalidAmounts(),
        InvalidUint256(),
        InsufficientLiquidity(requested=10, available=5),
        InvalidAmountString("1.2.3", "not a plain decimal number"),
        OracleNotInitialized(operation="apply_swap"),
        OracleOwnershipError(owner_thread=1, calling_thread=2),
        QuoteMismatch(function="getSwapOutput", local=1813, contract=1814),
        StateMismatch(differences={"reserve_eth": (10, 11)}),
    ],
)
def test_exceptions_with_arguments_pickling(original_exception: AmmQuoterError) -> None:
    """
    Test that each exception's `__reduce__` method rebuilds an equivalent exception.
    """

    unpickled_exception = pickle.loads(pickle.dumps(original_exception))

    assert type(unpickled_exception) is type(original_exception)
    assert unpickled_exception.message == original_exception.message
    assert str(unpickled_exception) == str(original_exception)
    assert vars(unpickled_exception) == vars(original_exception)


def test_revert_errors_share_a_parent() -> None:
    for exception in (
        InvalidAmount(),
        InvalidAmounts(),
        InvalidUint256(),
        InsufficientLiquidity(1, 0),
    ):
        assert isinstance(exception, EVMRevertError)
        assert exception.message == f"EVM Revert: {exception.error}"
