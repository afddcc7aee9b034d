"""
Sunswap Exceptions

Every rejected call raises a subclass of SunswapError. The message
defaults to the class's reason string (e.g. "SunswapV2: K") so callers
can tell failures apart without matching on class names.
"""

from typing import Optional


class SunswapError(Exception):
    """Base exception for Sunswap."""

    reason = "SunswapV2: ERROR"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.reason)

    @property
    def message(self) -> str:
        return str(self)


class MathError(SunswapError):
    """Checked uint256 arithmetic left its range."""
    reason = "ds-math-error"


class Locked(SunswapError):
    """A nested call tried to enter a pair that is already in a call."""
    reason = "SunswapV2: LOCKED"


class DeploymentError(SunswapError):
    """A contract could not be placed at its address."""
    reason = "SunswapV2: DEPLOYMENT_FAILED"


# ---------------------------------------------------------------------------
# Validation errors: rejected before any state mutation
# ---------------------------------------------------------------------------

class ValidationError(SunswapError):
    """Malformed request."""
    reason = "SunswapV2: INVALID"


class IdenticalAddresses(ValidationError):
    reason = "SunswapV2: IDENTICAL_ADDRESSES"


class ZeroAddress(ValidationError):
    reason = "SunswapV2: ZERO_ADDRESS"


class PairExists(ValidationError):
    reason = "SunswapV2: PAIR_EXISTS"


class Expired(ValidationError):
    reason = "SunswapV2: EXPIRED"


class InvalidRecipient(ValidationError):
    reason = "SunswapV2: INVALID_TO"


class InvalidCallee(ValidationError):
    """Callback data was supplied but no contract lives at the recipient."""
    reason = "SunswapV2: INVALID_CALLEE"


class InvalidAsset(ValidationError):
    """No token contract lives at one of the pair's asset addresses."""
    reason = "SunswapV2: INVALID_TOKEN"


# ---------------------------------------------------------------------------
# Invariant errors: economically unsound requests
# ---------------------------------------------------------------------------

class InvariantError(SunswapError):
    """Request would break a pool invariant."""
    reason = "SunswapV2: INVARIANT"


class InsufficientLiquidity(InvariantError):
    reason = "SunswapV2: INSUFFICIENT_LIQUIDITY"


class InsufficientOutputAmount(InsufficientLiquidity):
    reason = "SunswapV2: INSUFFICIENT_OUTPUT_AMOUNT"


class TransferFailed(InsufficientLiquidity):
    """An asset refused to move funds out of the pair."""
    reason = "SunswapV2: TRANSFER_FAILED"


class InsufficientInputAmount(InvariantError):
    reason = "SunswapV2: INSUFFICIENT_INPUT_AMOUNT"


class InsufficientLiquidityMinted(InvariantError):
    reason = "SunswapV2: INSUFFICIENT_LIQUIDITY_MINTED"


class InsufficientLiquidityBurned(InvariantError):
    reason = "SunswapV2: INSUFFICIENT_LIQUIDITY_BURNED"


class InvariantViolation(InvariantError):
    """The fee-adjusted constant product decreased."""
    reason = "SunswapV2: K"


class Overflow(InvariantError):
    """A balance no longer fits in a 112-bit reserve."""
    reason = "SunswapV2: OVERFLOW"


# ---------------------------------------------------------------------------
# Authorization errors
# ---------------------------------------------------------------------------

class AuthorizationError(SunswapError):
    """Caller is not allowed to do this."""
    reason = "SunswapV2: UNAUTHORIZED"


class Forbidden(AuthorizationError):
    reason = "SunswapV2: FORBIDDEN"


class ForbiddenInit(Forbidden):
    """initialize() called twice or by someone other than the factory."""


class InvalidSignature(AuthorizationError):
    reason = "SunswapV2: INVALID_SIGNATURE"
