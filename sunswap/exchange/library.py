"""
Sunswap V2 Library

Pure helpers for integrators, matching the pair's own math:
  - canonical token ordering and off-line pair address computation
  - reserve lookup in caller token order
  - quotes with and without the 0.30% swap fee
"""

from typing import Tuple

from ..chain import Chain
from ..constants import PAIR_INIT_CODE_HASH, SWAP_FEE_DENOMINATOR, SWAP_FEE_NUMERATOR
from ..crypto import address as addr
from ..exceptions import (
    IdenticalAddresses,
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    ValidationError,
    ZeroAddress,
)

FEE_MULTIPLIER = SWAP_FEE_DENOMINATOR - SWAP_FEE_NUMERATOR  # 997


def sort_tokens(token_a: str, token_b: str) -> Tuple[str, str]:
    """Return the two tokens in the order the pair stores them."""
    try:
        return addr.sort_tokens(token_a, token_b)
    except IdenticalAddresses:
        raise IdenticalAddresses("SunswapV2Library: IDENTICAL_ADDRESSES") from None
    except ZeroAddress:
        raise ZeroAddress("SunswapV2Library: ZERO_ADDRESS") from None


def pair_for(
    factory: str,
    token_a: str,
    token_b: str,
    init_code_hash: bytes = PAIR_INIT_CODE_HASH,
) -> str:
    """Pair address for {token_a, token_b}, computed without any lookup."""
    token0, token1 = sort_tokens(token_a, token_b)
    return addr.compute_pair_address(factory, token0, token1, init_code_hash)


def get_reserves(chain: Chain, factory: str, token_a: str, token_b: str) -> Tuple[int, int]:
    """Reserves of the {token_a, token_b} pair, ordered as the arguments."""
    token0, _ = sort_tokens(token_a, token_b)
    pair = chain.get_contract(pair_for(factory, token_a, token_b))
    if pair is None:
        raise ValidationError("SunswapV2Library: PAIR_NOT_FOUND")
    reserve0, reserve1, _ = pair.get_reserves()
    if addr.normalize_address(token_a) == token0:
        return reserve0, reserve1
    return reserve1, reserve0


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Equivalent amount of the other asset at the current spot price, no fee."""
    if amount_a <= 0:
        raise InsufficientInputAmount("SunswapV2Library: INSUFFICIENT_AMOUNT")
    if reserve_a <= 0 or reserve_b <= 0:
        raise InsufficientLiquidity("SunswapV2Library: INSUFFICIENT_LIQUIDITY")
    return amount_a * reserve_b // reserve_a


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """
    Maximum output for an exact input, net of the swap fee.

    Swapping exactly this amount passes the pair's K check; one unit
    more does not.
    """
    if amount_in <= 0:
        raise InsufficientInputAmount("SunswapV2Library: INSUFFICIENT_INPUT_AMOUNT")
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidity("SunswapV2Library: INSUFFICIENT_LIQUIDITY")
    amount_in_with_fee = amount_in * FEE_MULTIPLIER
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * SWAP_FEE_DENOMINATOR + amount_in_with_fee
    return numerator // denominator


def get_amount_in(amount_out: int, reserve_in: int, reserve_out: int) -> int:
    """Minimum input, fee included, needed to take out exactly *amount_out*."""
    if amount_out <= 0:
        raise InsufficientOutputAmount("SunswapV2Library: INSUFFICIENT_OUTPUT_AMOUNT")
    if reserve_in <= 0 or reserve_out <= 0 or amount_out >= reserve_out:
        raise InsufficientLiquidity("SunswapV2Library: INSUFFICIENT_LIQUIDITY")
    numerator = reserve_in * amount_out * SWAP_FEE_DENOMINATOR
    denominator = (reserve_out - amount_out) * FEE_MULTIPLIER
    return numerator // denominator + 1
