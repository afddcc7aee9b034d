"""
Sunswap Price Accumulator

Time-weighted cumulative price tracking for a pair:
  - priceX_cumulative += (reserveY / reserveX as UQ112x112) * seconds elapsed
  - Advanced on the first reserve update of each block
  - Accumulators wrap at 2^224 and the timestamp at 2^32

Consumers never read a single accumulator value as a price. They take two
samples and divide the accumulator difference by the elapsed time, which
stays correct across wraparound as long as samples are closer together
than one wrap period (about 136 years for the timestamp).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from ..constants import UINT32_MODULUS, UINT224_MODULUS
from ..exceptions import ValidationError
from .. import uint as uq

ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# In-pair accumulator
# ---------------------------------------------------------------------------

@dataclass
class PriceAccumulator:
    """Cumulative prices and the timestamp of the last update."""
    price0_cumulative_last: int = 0
    price1_cumulative_last: int = 0
    block_timestamp_last: int = 0

    def update(self, reserve0: int, reserve1: int, timestamp: int) -> int:
        """
        Advance both accumulators for the time since the last update.

        Uses the reserves as they stood before the current update, so a
        price only starts counting once it has survived to a later block.

        Args:
            reserve0: reserve of token0 before this update
            reserve1: reserve of token1 before this update
            timestamp: current block timestamp (any width, truncated here)

        Returns:
            Seconds elapsed (mod 2^32) since the last update
        """
        block_timestamp = timestamp % UINT32_MODULUS
        time_elapsed = (block_timestamp - self.block_timestamp_last) % UINT32_MODULUS
        if time_elapsed > 0 and reserve0 != 0 and reserve1 != 0:
            self.price0_cumulative_last = (
                self.price0_cumulative_last + uq.uqdiv(uq.encode(reserve1), reserve0) * time_elapsed
            ) % UINT224_MODULUS
            self.price1_cumulative_last = (
                self.price1_cumulative_last + uq.uqdiv(uq.encode(reserve0), reserve1) * time_elapsed
            ) % UINT224_MODULUS
        self.block_timestamp_last = block_timestamp
        return time_elapsed


# ---------------------------------------------------------------------------
# Off-line consumers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Observation:
    """A sample of a pair's accumulators at a point in time."""
    timestamp: int
    price0_cumulative: int
    price1_cumulative: int

    @classmethod
    def from_pair(cls, pair, timestamp: Optional[int] = None) -> "Observation":
        """
        Sample *pair* as of *timestamp* (default: the pair's chain time).

        Extends the stored accumulators with the time elapsed since the
        pair's last update, so a sample taken between updates is exact.
        """
        now = pair.chain.timestamp if timestamp is None else timestamp
        acc = PriceAccumulator(
            pair.price0_cumulative_last,
            pair.price1_cumulative_last,
            pair.block_timestamp_last,
        )
        reserve0, reserve1, _ = pair.get_reserves()
        acc.update(reserve0, reserve1, now)
        return cls(
            timestamp=now % UINT32_MODULUS,
            price0_cumulative=acc.price0_cumulative_last,
            price1_cumulative=acc.price1_cumulative_last,
        )


def average_price(start: Observation, end: Observation) -> Tuple[int, int]:
    """
    Time-weighted average prices between two samples, as UQ112x112.

    Returns:
        (average price of token0 in token1, average price of token1 in token0)

    Raises:
        ValidationError: both samples share a timestamp
    """
    elapsed = (end.timestamp - start.timestamp) % UINT32_MODULUS
    if elapsed == 0:
        raise ValidationError("Observations must be taken at different times")
    price0 = ((end.price0_cumulative - start.price0_cumulative) % UINT224_MODULUS) // elapsed
    price1 = ((end.price1_cumulative - start.price1_cumulative) % UINT224_MODULUS) // elapsed
    return price0, price1


def average_price_decimal(start: Observation, end: Observation) -> Tuple[Decimal, Decimal]:
    """average_price() decoded to Decimals."""
    price0, price1 = average_price(start, end)
    return uq.decode(price0), uq.decode(price1)
