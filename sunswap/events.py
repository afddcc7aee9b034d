"""
Sunswap Events

Observable log records emitted by the share ledger, the pairs and the
factory. Field order is part of the interface: ``args`` returns the
values in declaration order, after the emitting contract's address.
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Tuple


@dataclass(frozen=True)
class Event:
    """Base event; ``address`` is the emitting contract."""
    name: ClassVar[str] = "Event"
    address: str

    @property
    def args(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, f.name) for f in fields(self) if f.name != "address")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"event": self.name, "address": self.address}
        for f in fields(self):
            if f.name == "address":
                continue
            value = getattr(self, f.name)
            data[f.name] = str(value) if isinstance(value, int) else value
        return data


# ══════════════════════════════════════════════════════════════════════
#  LEDGER
# ══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Transfer(Event):
    name: ClassVar[str] = "Transfer"
    sender: str
    recipient: str
    value: int


@dataclass(frozen=True)
class Approval(Event):
    name: ClassVar[str] = "Approval"
    owner: str
    spender: str
    value: int


# ══════════════════════════════════════════════════════════════════════
#  PAIR
# ══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Mint(Event):
    name: ClassVar[str] = "Mint"
    sender: str
    amount0: int
    amount1: int


@dataclass(frozen=True)
class Burn(Event):
    name: ClassVar[str] = "Burn"
    sender: str
    amount0: int
    amount1: int
    to: str


@dataclass(frozen=True)
class Swap(Event):
    name: ClassVar[str] = "Swap"
    sender: str
    amount0_in: int
    amount1_in: int
    amount0_out: int
    amount1_out: int
    to: str


@dataclass(frozen=True)
class Sync(Event):
    name: ClassVar[str] = "Sync"
    reserve0: int
    reserve1: int


# ══════════════════════════════════════════════════════════════════════
#  FACTORY
# ══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PairCreated(Event):
    name: ClassVar[str] = "PairCreated"
    token0: str
    token1: str
    pair: str
    pair_count: int
