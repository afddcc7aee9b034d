"""
Shared fixtures: a fresh chain, a factory, two traded tokens and their pair.
"""

from types import SimpleNamespace

import pytest

from sunswap.chain import Chain
from sunswap.exchange import SunswapV2Factory
from sunswap.tokens import ERC20

from utilities import BANKER, START_TIME, TOTAL_SUPPLY


@pytest.fixture
def chain():
    return Chain(chain_id=1, timestamp=START_TIME)


@pytest.fixture
def factory(chain):
    return SunswapV2Factory(chain, BANKER)


@pytest.fixture
def pair_fixture(chain, factory):
    """Factory plus a pair of two 10000e18-supply tokens, all held by BANKER."""
    token_a = ERC20(chain, BANKER, TOTAL_SUPPLY)
    token_b = ERC20(chain, BANKER, TOTAL_SUPPLY)

    pair_address = factory.create_pair(token_a.address, token_b.address)
    pair = chain.get_contract(pair_address)

    token0 = token_a if pair.token0 == token_a.address else token_b
    token1 = token_b if token0 is token_a else token_a
    return SimpleNamespace(chain=chain, factory=factory, pair=pair, token0=token0, token1=token1)


@pytest.fixture
def add_liquidity(pair_fixture):
    """Deposit amounts into the pair and mint the shares to BANKER."""

    def _add_liquidity(token0_amount: int, token1_amount: int) -> int:
        fx = pair_fixture
        fx.token0.transfer(BANKER, fx.pair.address, token0_amount)
        fx.token1.transfer(BANKER, fx.pair.address, token1_amount)
        return fx.pair.mint(BANKER, BANKER)

    return _add_liquidity
