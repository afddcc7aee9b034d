"""
Test suite for the integrator library helpers
"""

import pytest

from sunswap.constants import ZERO_ADDRESS
from sunswap.exceptions import (
    IdenticalAddresses,
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    ValidationError,
    ZeroAddress,
)
from sunswap.exchange import library

from utilities import BANKER, expand_to_18_decimals as e18

TOKEN_A = "0x2000000000000000000000000000000000000000"
TOKEN_B = "0x1000000000000000000000000000000000000000"


class TestSortTokens:

    def test_sorted_numerically(self):
        assert library.sort_tokens(TOKEN_A, TOKEN_B) == (TOKEN_B, TOKEN_A)
        assert library.sort_tokens(TOKEN_B, TOKEN_A) == (TOKEN_B, TOKEN_A)

    def test_identical(self):
        with pytest.raises(IdenticalAddresses, match="SunswapV2Library: IDENTICAL_ADDRESSES"):
            library.sort_tokens(TOKEN_A, TOKEN_A.lower())

    def test_zero(self):
        with pytest.raises(ZeroAddress, match="SunswapV2Library: ZERO_ADDRESS"):
            library.sort_tokens(TOKEN_A, ZERO_ADDRESS)


class TestPairFor:

    def test_matches_factory(self, factory):
        pair = factory.create_pair(TOKEN_A, TOKEN_B)
        assert library.pair_for(factory.address, TOKEN_A, TOKEN_B) == pair
        assert library.pair_for(factory.address, TOKEN_B, TOKEN_A) == pair

    def test_get_reserves_in_argument_order(self, pair_fixture, add_liquidity):
        fx = pair_fixture
        add_liquidity(e18(1), e18(4))
        assert library.get_reserves(fx.chain, fx.factory.address, fx.token0.address, fx.token1.address) == (
            e18(1), e18(4))
        assert library.get_reserves(fx.chain, fx.factory.address, fx.token1.address, fx.token0.address) == (
            e18(4), e18(1))

    def test_get_reserves_missing_pair(self, chain, factory):
        with pytest.raises(ValidationError):
            library.get_reserves(chain, factory.address, TOKEN_A, TOKEN_B)


class TestQuotes:

    def test_quote(self):
        assert library.quote(1, 100, 200) == 2
        assert library.quote(2, 200, 100) == 1
        with pytest.raises(InsufficientInputAmount, match="SunswapV2Library: INSUFFICIENT_AMOUNT"):
            library.quote(0, 100, 200)
        with pytest.raises(InsufficientLiquidity, match="SunswapV2Library: INSUFFICIENT_LIQUIDITY"):
            library.quote(1, 0, 200)

    def test_get_amount_out(self):
        assert library.get_amount_out(2, 100, 100) == 1
        with pytest.raises(InsufficientInputAmount, match="SunswapV2Library: INSUFFICIENT_INPUT_AMOUNT"):
            library.get_amount_out(0, 100, 100)
        with pytest.raises(InsufficientLiquidity):
            library.get_amount_out(2, 0, 100)

    def test_get_amount_in(self):
        assert library.get_amount_in(1, 100, 100) == 2
        with pytest.raises(InsufficientOutputAmount, match="SunswapV2Library: INSUFFICIENT_OUTPUT_AMOUNT"):
            library.get_amount_in(0, 100, 100)
        with pytest.raises(InsufficientLiquidity):
            library.get_amount_in(1, 100, 0)
        with pytest.raises(InsufficientLiquidity):
            library.get_amount_in(100, 100, 100)

    def test_amount_in_covers_amount_out(self):
        amount_in = library.get_amount_in(e18(1), e18(5), e18(5))
        assert amount_in == 1253761283851554664
        assert library.get_amount_out(amount_in, e18(5), e18(5)) >= e18(1)

    def test_quoted_swap_passes_pair(self, pair_fixture, add_liquidity):
        fx = pair_fixture
        add_liquidity(e18(5), e18(10))
        amount_out = library.get_amount_out(e18(1), e18(5), e18(10))
        fx.token0.transfer(BANKER, fx.pair.address, e18(1))
        fx.pair.swap(BANKER, 0, amount_out, BANKER)
        assert fx.pair.reserve1 == e18(10) - amount_out
