"""
Sunswap Token Layer

Provides:
  - SunswapV2ERC20 : Liquidity-share ledger with EIP-2612 permit
  - ERC20          : Fixed-supply fungible token used as a traded asset
  - Asset          : Capability set a pair needs from a traded asset
  - SunswapV2Callee: Flash-swap recipient interface
"""

from .erc20 import ERC20, SunswapV2ERC20
from .interfaces import Asset, SunswapV2Callee

__all__ = [
    "ERC20",
    "SunswapV2ERC20",
    "Asset",
    "SunswapV2Callee",
]
