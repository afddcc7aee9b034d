"""
Capabilities the exchange core consumes from other contracts.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Asset(Protocol):
    """A fungible token a pair can hold in custody."""

    address: str

    def balance_of(self, holder: str) -> int: ...

    def transfer(self, sender: str, to: str, value: int) -> bool: ...

    def transfer_from(self, sender: str, from_: str, to: str, value: int) -> bool: ...


@runtime_checkable
class SunswapV2Callee(Protocol):
    """Recipient of a flash swap; called mid-swap when data is non-empty."""

    def sunswap_v2_call(self, sender: str, amount0: int, amount1: int, data: bytes) -> None: ...
