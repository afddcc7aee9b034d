"""
Sunswap Exchange Core

Provides:
  - SunswapV2Pair     : Constant-product reserve engine with flash swaps
  - SunswapV2Factory  : Deterministic-address pair registry
  - PriceAccumulator  : In-pair TWAP accumulators
  - Observation       : Off-line accumulator samples and average prices
  - library           : Quote and address helpers for integrators
"""

from . import library
from .factory import SunswapV2Factory
from .oracle import Observation, PriceAccumulator, average_price, average_price_decimal
from .pair import SunswapV2Pair

__all__ = [
    "SunswapV2Pair",
    "SunswapV2Factory",
    "PriceAccumulator",
    "Observation",
    "average_price",
    "average_price_decimal",
    "library",
]
