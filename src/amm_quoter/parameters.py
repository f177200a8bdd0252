import dataclasses

from eth_typing import ChecksumAddress
from eth_utils.address import to_checksum_address

from amm_quoter.constants import ZERO_ADDRESS
from amm_quoter.fixed_point import FixedPointAmount
from amm_quoter.functions import encode_function_calldata, raise_if_invalid_uint256
from amm_quoter.liquidity import quote_lp_issuance, quote_redemption
from amm_quoter.slippage import minimum_acceptable
from amm_quoter.swap import quote_swap_output, select_reserves
from amm_quoter.types import PoolState, SwapDirection


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class SwapParameters:
    token_in: ChecksumAddress
    amount_in: FixedPointAmount
    min_amount_out: FixedPointAmount
    value: FixedPointAmount
    expected_amount_out: FixedPointAmount


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class AddLiquidityParameters:
    amount_token: FixedPointAmount
    min_lp: FixedPointAmount
    value: FixedPointAmount
    expected_lp: FixedPointAmount


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class RemoveLiquidityParameters:
    lp_amount: FixedPointAmount
    min_token: FixedPointAmount
    min_eth: FixedPointAmount
    expected_token: FixedPointAmount
    expected_eth: FixedPointAmount


def swap_parameters(
    direction: SwapDirection,
    amount_in: int,
    pool_state: PoolState,
    token_address: ChecksumAddress | str,
    tolerance_bps: int | None = None,
) -> SwapParameters:
    """
    Build the arguments for `swap(tokenIn, amountIn, minAmountOut)`.

    A native asset input is sent as the transaction value, with the zero address as `tokenIn` and
    an `amountIn` of zero.
    """

    reserve_in, reserve_out = select_reserves(direction, pool_state)
    expected = quote_swap_output(
        amount_in=amount_in,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
    )
    minimum = minimum_acceptable(expected, tolerance_bps)

    match direction:
        case SwapDirection.ETH_TO_TOKEN:
            return SwapParameters(
                token_in=ZERO_ADDRESS,
                amount_in=FixedPointAmount(0),
                min_amount_out=minimum,
                value=FixedPointAmount(amount_in),
                expected_amount_out=expected,
            )
        case SwapDirection.TOKEN_TO_ETH:
            return SwapParameters(
                token_in=to_checksum_address(token_address),
                amount_in=FixedPointAmount(amount_in),
                min_amount_out=minimum,
                value=FixedPointAmount(0),
                expected_amount_out=expected,
            )


def add_liquidity_parameters(
    amount_token: int,
    amount_eth: int,
    pool_state: PoolState,
    tolerance_bps: int | None = None,
) -> AddLiquidityParameters:
    """
    Build the arguments for `addLiquidity(amountToken, minLP)`, with the native asset amount sent
    as the transaction value.
    """

    expected = quote_lp_issuance(
        amount_token=amount_token,
        amount_eth=amount_eth,
        reserve_eth=pool_state.reserve_eth,
        reserve_token=pool_state.reserve_token,
        total_lp_supply=pool_state.total_lp_supply,
    )
    return AddLiquidityParameters(
        amount_token=FixedPointAmount(amount_token),
        min_lp=minimum_acceptable(expected, tolerance_bps),
        value=FixedPointAmount(amount_eth),
        expected_lp=expected,
    )


def remove_liquidity_parameters(
    lp_amount: int,
    pool_state: PoolState,
    tolerance_bps: int | None = None,
) -> RemoveLiquidityParameters:
    """
    Build the arguments for `removeLiquidity(lpAmount, minToken, minEth)`.
    """

    redemption = quote_redemption(
        lp_token_amount=lp_amount,
        reserve_x=pool_state.reserve_eth,
        reserve_y=pool_state.reserve_token,
        total_lp_supply=pool_state.total_lp_supply,
    )
    return RemoveLiquidityParameters(
        lp_amount=FixedPointAmount(lp_amount),
        min_token=minimum_acceptable(redemption.amount_y, tolerance_bps),
        min_eth=minimum_acceptable(redemption.amount_x, tolerance_bps),
        expected_token=redemption.amount_y,
        expected_eth=redemption.amount_x,
    )


def encode_swap_call(parameters: SwapParameters) -> bytes:
    amounts = [int(parameters.amount_in), int(parameters.min_amount_out)]
    for amount in amounts:
        raise_if_invalid_uint256(amount)
    return encode_function_calldata(
        function_prototype="swap(address,uint256,uint256)",
        function_arguments=[parameters.token_in, *amounts],
    )


def encode_add_liquidity_call(parameters: AddLiquidityParameters) -> bytes:
    amounts = [int(parameters.amount_token), int(parameters.min_lp)]
    for amount in amounts:
        raise_if_invalid_uint256(amount)
    return encode_function_calldata(
        function_prototype="addLiquidity(uint256,uint256)",
        function_arguments=amounts,
    )


def encode_remove_liquidity_call(parameters: RemoveLiquidityParameters) -> bytes:
    amounts = [
        int(parameters.lp_amount),
        int(parameters.min_token),
        int(parameters.min_eth),
    ]
    for amount in amounts:
        raise_if_invalid_uint256(amount)
    return encode_function_calldata(
        function_prototype="removeLiquidity(uint256,uint256,uint256)",
        function_arguments=amounts,
    )
