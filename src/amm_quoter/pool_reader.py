"""
Read-only helpers for the deployed pool contract.

Every helper performs an `eth_call` against the pool and decodes the result. Nothing here signs or
sends transactions. The `verify_*` helpers compare the contract's own quoting views against the
local formulas, which must agree to the wei.
"""

from eth_typing import ChecksumAddress
from eth_utils.address import to_checksum_address
from web3 import Web3
from web3.types import BlockIdentifier

from amm_quoter.constants import ZERO_ADDRESS
from amm_quoter.exceptions.contract import QuoteMismatch
from amm_quoter.fixed_point import FixedPointAmount
from amm_quoter.functions import encode_function_calldata, raw_call
from amm_quoter.liquidity import quote_lp_issuance, quote_redemption
from amm_quoter.logging import logger
from amm_quoter.swap import quote_swap_output, select_reserves
from amm_quoter.types import PoolState, RedemptionQuote, SwapDirection


def _call_uint(
    w3: Web3,
    pool_address: ChecksumAddress,
    function_prototype: str,
    function_arguments: list[object] | None = None,
    block_identifier: BlockIdentifier | None = None,
) -> FixedPointAmount:
    (value,) = raw_call(
        w3=w3,
        address=pool_address,
        calldata=encode_function_calldata(
            function_prototype=function_prototype,
            function_arguments=function_arguments,
        ),
        return_types=["uint256"],
        block_identifier=block_identifier,
    )
    return FixedPointAmount(value)


def fetch_pool_state(
    w3: Web3,
    pool_address: ChecksumAddress | str,
    block_identifier: BlockIdentifier | None = None,
) -> PoolState:
    """
    Fetch the reserves and LP token supply of the pool.
    """

    pool_address = to_checksum_address(pool_address)

    return PoolState(
        reserve_eth=_call_uint(w3, pool_address, "reserveETH()", None, block_identifier),
        reserve_token=_call_uint(w3, pool_address, "reserveSimplest()", None, block_identifier),
        total_lp_supply=_call_uint(w3, pool_address, "totalLPTokens()", None, block_identifier),
    )


def fetch_lp_balance(
    w3: Web3,
    pool_address: ChecksumAddress | str,
    account: ChecksumAddress | str,
    block_identifier: BlockIdentifier | None = None,
) -> FixedPointAmount:
    return _call_uint(
        w3,
        to_checksum_address(pool_address),
        "lpTokens(address)",
        [to_checksum_address(account)],
        block_identifier,
    )


def fetch_native_balance(
    w3: Web3,
    account: ChecksumAddress | str,
    block_identifier: BlockIdentifier | None = None,
) -> FixedPointAmount:
    return FixedPointAmount(
        w3.eth.get_balance(
            to_checksum_address(account),
            block_identifier=block_identifier,
        )
    )


def fetch_swap_output(
    w3: Web3,
    pool_address: ChecksumAddress | str,
    token_in: ChecksumAddress | str,
    amount_in: int,
    block_identifier: BlockIdentifier | None = None,
) -> FixedPointAmount:
    """
    Get the contract's quote for a swap. Pass the zero address as `token_in` for a native asset
    input.
    """

    return _call_uint(
        w3,
        to_checksum_address(pool_address),
        "getSwapOutput(address,uint256)",
        [to_checksum_address(token_in), amount_in],
        block_identifier,
    )


def fetch_liquidity_output(
    w3: Web3,
    pool_address: ChecksumAddress | str,
    amount_token: int,
    amount_eth: int,
    block_identifier: BlockIdentifier | None = None,
) -> FixedPointAmount:
    return _call_uint(
        w3,
        to_checksum_address(pool_address),
        "getLiquidityOutput(uint256,uint256)",
        [amount_token, amount_eth],
        block_identifier,
    )


def fetch_remove_liquidity_output(
    w3: Web3,
    pool_address: ChecksumAddress | str,
    lp_amount: int,
    block_identifier: BlockIdentifier | None = None,
) -> RedemptionQuote:
    """
    Get the contract's quote for burning LP tokens. The contract returns the token amount first,
    the result is reordered to (ETH, token) to match `quote_redemption`.
    """

    amount_token, amount_eth = raw_call(
        w3=w3,
        address=to_checksum_address(pool_address),
        calldata=encode_function_calldata(
            function_prototype="getRemoveLiquidityOutput(uint256)",
            function_arguments=[lp_amount],
        ),
        return_types=["uint256", "uint256"],
        block_identifier=block_identifier,
    )
    return RedemptionQuote(
        amount_x=FixedPointAmount(amount_eth),
        amount_y=FixedPointAmount(amount_token),
    )


def verify_swap_quote(
    w3: Web3,
    pool_address: ChecksumAddress | str,
    token_address: ChecksumAddress | str,
    direction: SwapDirection,
    amount_in: int,
    block_identifier: BlockIdentifier | None = None,
) -> FixedPointAmount:
    """
    Compare the local swap quote against the contract's `getSwapOutput` view at the same block.

    Returns the agreed amount, or raises `QuoteMismatch`.
    """

    pool_state = fetch_pool_state(w3, pool_address, block_identifier)
    reserve_in, reserve_out = select_reserves(direction, pool_state)
    local = quote_swap_output(
        amount_in=amount_in,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
    )
    contract = fetch_swap_output(
        w3,
        pool_address,
        ZERO_ADDRESS if direction is SwapDirection.ETH_TO_TOKEN else token_address,
        amount_in,
        block_identifier,
    )

    if local != contract:
        logger.warning(f"Swap quote mismatch: local {local}, contract {contract}")
        raise QuoteMismatch(function="getSwapOutput", local=local, contract=contract)
    return local


def verify_liquidity_quote(
    w3: Web3,
    pool_address: ChecksumAddress | str,
    amount_token: int,
    amount_eth: int,
    block_identifier: BlockIdentifier | None = None,
) -> FixedPointAmount:
    """
    Compare the local LP issuance quote against the contract's `getLiquidityOutput` view.
    """

    pool_state = fetch_pool_state(w3, pool_address, block_identifier)
    local = quote_lp_issuance(
        amount_token=amount_token,
        amount_eth=amount_eth,
        reserve_eth=pool_state.reserve_eth,
        reserve_token=pool_state.reserve_token,
        total_lp_supply=pool_state.total_lp_supply,
    )
    contract = fetch_liquidity_output(
        w3, pool_address, amount_token, amount_eth, block_identifier
    )

    if local != contract:
        logger.warning(f"Liquidity quote mismatch: local {local}, contract {contract}")
        raise QuoteMismatch(function="getLiquidityOutput", local=local, contract=contract)
    return local


def verify_redemption_quote(
    w3: Web3,
    pool_address: ChecksumAddress | str,
    lp_amount: int,
    block_identifier: BlockIdentifier | None = None,
) -> RedemptionQuote:
    """
    Compare the local redemption quote against the contract's `getRemoveLiquidityOutput` view.
    """

    pool_state = fetch_pool_state(w3, pool_address, block_identifier)
    local = quote_redemption(
        lp_token_amount=lp_amount,
        reserve_x=pool_state.reserve_eth,
        reserve_y=pool_state.reserve_token,
        total_lp_supply=pool_state.total_lp_supply,
    )
    contract = fetch_remove_liquidity_output(w3, pool_address, lp_amount, block_identifier)

    if local != contract:
        logger.warning(f"Redemption quote mismatch: local {local}, contract {contract}")
        raise QuoteMismatch(function="getRemoveLiquidityOutput", local=local, contract=contract)
    return local
