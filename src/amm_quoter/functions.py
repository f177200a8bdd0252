from collections.abc import Sequence
from typing import Any

import eth_abi.abi
from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak
from requests.exceptions import RequestException
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)
from web3 import Web3
from web3.exceptions import ContractLogicError, Web3Exception
from web3.types import BlockIdentifier, TxParams

from amm_quoter.constants import MAX_UINT256, MIN_UINT256
from amm_quoter.exceptions.contract import FetchingError
from amm_quoter.exceptions.evm import InvalidUint256
from amm_quoter.logging import logger


def encode_function_calldata(
    function_prototype: str, function_arguments: Sequence[Any] | None
) -> bytes:
    """
    Build calldata for a function prototype such as "swap(address,uint256,uint256)": the 4-byte
    selector followed by the ABI-encoded arguments, in order.
    """

    if function_arguments is None:
        function_arguments = ()

    return function_selector(function_prototype) + eth_abi.abi.encode(
        types=extract_argument_types_from_function_prototype(function_prototype),
        args=function_arguments,
    )


def raise_if_invalid_uint256(number: int) -> None:
    if (MIN_UINT256 <= number <= MAX_UINT256) is False:
        raise InvalidUint256


def function_selector(function_prototype: str) -> bytes:
    return keccak(text=function_prototype)[:4]


def extract_argument_types_from_function_prototype(function_prototype: str) -> list[str]:
    """
    Split the argument list out of a prototype, e.g. "getSwapOutput(address,uint256)" gives
    ["address", "uint256"].
    """

    _, _, arguments = function_prototype.partition("(")
    arguments = arguments.removesuffix(")").replace(" ", "")
    return arguments.split(",") if arguments else []


def raw_call(
    w3: Web3,
    address: ChecksumAddress,
    calldata: bytes,
    return_types: list[str],
    block_identifier: BlockIdentifier | None = None,
    max_retries: int = 5,
) -> tuple[Any, ...]:
    """
    Perform an eth_call at the given address and return the decoded response.

    Transient RPC failures are retried with exponential backoff. If every attempt fails, a
    `FetchingError` is raised from the last underlying exception.
    """

    retrier = Retrying(
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential_jitter(),
        retry=retry_if_exception_type(
            (TimeoutError, Web3Exception, RequestException),
        )
        # Reverts are not retried
        & retry_if_not_exception_type(ContractLogicError),
        before_sleep=lambda retry_state: logger.warning(
            f"eth_call to {address} failed (attempt {retry_state.attempt_number}), retrying"
        ),
    )

    try:
        for attempt in retrier:
            with attempt:
                result = w3.eth.call(
                    transaction=TxParams(
                        to=address,
                        data=calldata,
                    ),
                    block_identifier=block_identifier,
                )
    except RetryError as exc:
        raise FetchingError(
            message=f"eth_call to {address} failed after {max_retries} attempts"
        ) from exc.last_attempt.exception()

    return eth_abi.abi.decode(
        types=return_types,
        data=result,
    )
