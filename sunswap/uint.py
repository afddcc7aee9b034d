"""
Fixed-width integer helpers.

Checked uint256 arithmetic, integer square root and UQ112x112 fixed-point
encoding. Python ints are unbounded, so every width limit the pair relies
on is enforced here explicitly.
"""

import math
from decimal import Decimal

from .constants import Q112, UINT112_MAX, UINT224_MODULUS, UINT256_MAX
from .exceptions import MathError


def add(x: int, y: int) -> int:
    z = x + y
    if z > UINT256_MAX:
        raise MathError("ds-math-add-overflow")
    return z


def sub(x: int, y: int) -> int:
    z = x - y
    if z < 0:
        raise MathError("ds-math-sub-underflow")
    return z


def mul(x: int, y: int) -> int:
    z = x * y
    if z > UINT256_MAX:
        raise MathError("ds-math-mul-overflow")
    return z


def sqrt(y: int) -> int:
    """floor(sqrt(y)) for a non-negative integer."""
    if y < 0:
        raise MathError("ds-math-sqrt-negative")
    return math.isqrt(y)


def require_int(value: int, name: str = "value") -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise MathError(f"{name} must be an integer, got {type(value).__name__}")
    return value


def require_uint(value: int, name: str = "value") -> int:
    require_int(value, name)
    if value < 0 or value > UINT256_MAX:
        raise MathError(f"{name} out of uint256 range: {value}")
    return value


# ---------------------------------------------------------------------------
# UQ112x112: 224-bit unsigned fixed point, 112 fractional bits
# ---------------------------------------------------------------------------

def encode(y: int) -> int:
    """uint112 → UQ112x112."""
    if y < 0 or y > UINT112_MAX:
        raise MathError(f"Value does not fit in 112 bits: {y}")
    return y * Q112


def uqdiv(x: int, y: int) -> int:
    """UQ112x112 divided by a uint112, truncating."""
    if y == 0:
        raise MathError("Division by zero")
    return (x // y) % UINT224_MODULUS


def decode(x: int) -> Decimal:
    """UQ112x112 → Decimal, for display and off-line consumers."""
    return Decimal(x) / Decimal(Q112)
