"""
Sunswap V2 Pair

Constant-product reserve engine for one unordered pair of assets:
  - Balance inference: callers transfer assets in first, then call
    mint / swap; the pair diffs custody balances against its reserves
  - 0.30% swap fee, left in the pool for liquidity providers
  - Optional protocol fee: 1/(d+1) of fee growth minted to ``fee_to``
  - Flash swaps: outputs go out before the inputs are checked
  - TWAP accumulators advanced on the first update of each block

Security features:
  - Reentrancy lock on mint / burn / swap / skim / sync
  - Every public mutation runs in a chain transaction, so a rejected
    call leaves no partial effects
  - Reserves capped at 112 bits
"""

from typing import Tuple

from ..chain import Chain, atomic
from ..constants import (
    MINIMUM_LIQUIDITY,
    PAIR_CODE,
    PAIR_INIT_CODE_HASH,
    SWAP_FEE_DENOMINATOR,
    SWAP_FEE_NUMERATOR,
    UINT112_MAX,
    ZERO_ADDRESS,
)
from ..crypto.address import normalize_address
from ..events import Burn, Mint, Swap, Sync
from ..exceptions import (
    ForbiddenInit,
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    InsufficientOutputAmount,
    InvalidAsset,
    InvalidCallee,
    InvalidRecipient,
    InvariantViolation,
    Locked,
    Overflow,
    SunswapError,
    TransferFailed,
)
from ..logger import get_logger
from ..tokens.erc20 import SunswapV2ERC20
from ..tokens.interfaces import Asset, SunswapV2Callee
from .. import uint
from .oracle import PriceAccumulator

logger = get_logger(__name__)


class SunswapV2Pair(SunswapV2ERC20):
    """
    Reserve engine for {token0, token1}.

    The pair is its own share ledger: liquidity shares live in the
    inherited SunswapV2ERC20 balances, and burn() redeems the shares the
    pair itself holds.
    """

    code = PAIR_CODE
    init_code_hash = PAIR_INIT_CODE_HASH

    def __init__(self, chain: Chain, address: str, factory: str):
        super().__init__(chain, address)
        self.factory = normalize_address(factory)
        self.token0 = ZERO_ADDRESS
        self.token1 = ZERO_ADDRESS
        self.reserve0 = 0
        self.reserve1 = 0
        self.k_last = 0  # reserve0 * reserve1, as of immediately after the most recent liquidity event
        self._oracle = PriceAccumulator()
        self._locked: bool = False   # reentrancy guard

    # -- Reentrancy guard ---------------------------------------------------

    def _acquire_lock(self) -> None:
        if self._locked:
            raise Locked()
        self._locked = True

    def _release_lock(self) -> None:
        self._locked = False

    # -- Views --------------------------------------------------------------

    @property
    def price0_cumulative_last(self) -> int:
        return self._oracle.price0_cumulative_last

    @property
    def price1_cumulative_last(self) -> int:
        return self._oracle.price1_cumulative_last

    @property
    def block_timestamp_last(self) -> int:
        return self._oracle.block_timestamp_last

    def get_reserves(self) -> Tuple[int, int, int]:
        """(reserve0, reserve1, block_timestamp_last)"""
        return self.reserve0, self.reserve1, self._oracle.block_timestamp_last

    # -- Setup --------------------------------------------------------------

    @atomic
    def initialize(self, sender: str, token0: str, token1: str) -> None:
        """Bind the pair to its assets; callable once, by the factory only."""
        if normalize_address(sender) != self.factory or self.token0 != ZERO_ADDRESS:
            raise ForbiddenInit()
        self.token0 = normalize_address(token0)
        self.token1 = normalize_address(token1)

    # -- Internals ----------------------------------------------------------

    def _asset(self, token: str) -> Asset:
        asset = self.chain.get_contract(token)
        if not isinstance(asset, Asset):
            raise InvalidAsset(f"{InvalidAsset.reason} ({token})")
        return asset

    def _balance_of(self, token: str) -> int:
        return self._asset(token).balance_of(self.address)

    def _safe_transfer(self, token: str, to: str, value: int) -> None:
        asset = self._asset(token)
        try:
            ok = asset.transfer(self.address, to, value)
        except SunswapError as exc:
            raise TransferFailed() from exc
        if not ok:
            raise TransferFailed()

    def _update(self, balance0: int, balance1: int, reserve0: int, reserve1: int) -> None:
        """Overwrite reserves with balances, advancing the accumulators first."""
        if balance0 > UINT112_MAX or balance1 > UINT112_MAX:
            raise Overflow()
        self._oracle.update(reserve0, reserve1, self.chain.timestamp)
        self.reserve0 = balance0
        self.reserve1 = balance1
        self.chain.emit(Sync(self.address, balance0, balance1))

    def _mint_fee(self, reserve0: int, reserve1: int) -> bool:
        """
        Mint the protocol's share of fee growth since the last liquidity event.

        The fee is 1/(d+1) of the growth in sqrt(k), paid out as new shares
        to ``fee_to``. With the fee off, a stale ``k_last`` is cleared.

        Returns:
            True if the protocol fee is on
        """
        factory = self.chain.get_contract(self.factory)
        fee_to = factory.fee_to
        fee_on = fee_to != ZERO_ADDRESS
        k_last = self.k_last
        if fee_on:
            if k_last != 0:
                root_k = uint.sqrt(uint.mul(reserve0, reserve1))
                root_k_last = uint.sqrt(k_last)
                if root_k > root_k_last:
                    numerator = uint.mul(self.total_supply, uint.sub(root_k, root_k_last))
                    denominator = uint.add(
                        uint.mul(root_k, factory.protocol_fee_divisor), root_k_last
                    )
                    liquidity = numerator // denominator
                    if liquidity > 0:
                        self._mint(fee_to, liquidity)
                        logger.info(f"Protocol fee: {liquidity} shares of {self.address} to {fee_to}")
        elif k_last != 0:
            self.k_last = 0
        return fee_on

    # -- Liquidity ----------------------------------------------------------

    @atomic
    def mint(self, sender: str, to: str) -> int:
        """
        Mint shares for the assets transferred in since the last update.

        Args:
            sender: account making the call
            to: recipient of the new shares

        Returns:
            Shares minted to *to*

        Raises:
            InsufficientLiquidityMinted: nothing deposited on one side, or
                the deposit is too small to be worth a share
            Locked: called from within another call on this pair
        """
        sender = normalize_address(sender)
        to = normalize_address(to)
        self._acquire_lock()
        try:
            reserve0, reserve1, _ = self.get_reserves()
            balance0 = self._balance_of(self.token0)
            balance1 = self._balance_of(self.token1)
            amount0 = uint.sub(balance0, reserve0)
            amount1 = uint.sub(balance1, reserve1)
            if amount0 == 0 or amount1 == 0:
                raise InsufficientLiquidityMinted()

            fee_on = self._mint_fee(reserve0, reserve1)
            total_supply = self.total_supply  # read after _mint_fee, which can change it
            if total_supply == 0:
                root = uint.sqrt(uint.mul(amount0, amount1))
                if root <= MINIMUM_LIQUIDITY:
                    raise InsufficientLiquidityMinted()
                liquidity = root - MINIMUM_LIQUIDITY
                self._mint(ZERO_ADDRESS, MINIMUM_LIQUIDITY)  # permanently lock the first MINIMUM_LIQUIDITY shares
            else:
                liquidity = min(
                    uint.mul(amount0, total_supply) // reserve0,
                    uint.mul(amount1, total_supply) // reserve1,
                )
            if liquidity <= 0:
                raise InsufficientLiquidityMinted()
            self._mint(to, liquidity)

            self._update(balance0, balance1, reserve0, reserve1)
            if fee_on:
                self.k_last = uint.mul(self.reserve0, self.reserve1)
            self.chain.emit(Mint(self.address, sender, amount0, amount1))
        finally:
            self._release_lock()

        logger.info(f"Mint: {liquidity} shares of {self.address} to {to} for {amount0}/{amount1}")
        return liquidity

    @atomic
    def burn(self, sender: str, to: str) -> Tuple[int, int]:
        """
        Redeem the shares held by the pair itself for a pro-rata cut of
        both balances.

        Returns:
            (amount0, amount1) sent to *to*

        Raises:
            InsufficientLiquidityBurned: either side would pay out nothing
            TransferFailed: an asset refused to pay out
            Locked: called from within another call on this pair
        """
        sender = normalize_address(sender)
        to = normalize_address(to)
        self._acquire_lock()
        try:
            reserve0, reserve1, _ = self.get_reserves()
            token0, token1 = self.token0, self.token1
            balance0 = self._balance_of(token0)
            balance1 = self._balance_of(token1)
            liquidity = self._balances.get(self.address, 0)

            fee_on = self._mint_fee(reserve0, reserve1)
            total_supply = self.total_supply
            if total_supply == 0:
                raise InsufficientLiquidityBurned()
            amount0 = uint.mul(liquidity, balance0) // total_supply  # pro-rata distribution
            amount1 = uint.mul(liquidity, balance1) // total_supply
            if amount0 == 0 or amount1 == 0:
                raise InsufficientLiquidityBurned()

            self._burn(self.address, liquidity)
            self._safe_transfer(token0, to, amount0)
            self._safe_transfer(token1, to, amount1)
            balance0 = self._balance_of(token0)
            balance1 = self._balance_of(token1)

            self._update(balance0, balance1, reserve0, reserve1)
            if fee_on:
                self.k_last = uint.mul(self.reserve0, self.reserve1)
            self.chain.emit(Burn(self.address, sender, amount0, amount1, to))
        finally:
            self._release_lock()

        logger.info(f"Burn: {liquidity} shares of {self.address} for {amount0}/{amount1} to {to}")
        return amount0, amount1

    # -- Swap ---------------------------------------------------------------

    @atomic
    def swap(
        self,
        sender: str,
        amount0_out: int,
        amount1_out: int,
        to: str,
        data: bytes = b"",
    ) -> None:
        """
        Pay out the requested amounts, then require the pair to have been
        paid enough to keep the fee-adjusted constant product.

        If *data* is non-empty the contract at *to* is called back through
        ``sunswap_v2_call`` between the payout and the check, which is how
        flash swaps repay.

        Raises:
            MathError: an output amount is not an integer
            InsufficientOutputAmount: no positive output requested
            InsufficientLiquidity: an output is not below its reserve
            InvalidRecipient: *to* is one of the pair's assets
            InvalidCallee: *data* given but *to* cannot be called back
            InsufficientInputAmount: nothing was paid in
            InvariantViolation: the product of adjusted balances fell
            Locked: called from within another call on this pair
        """
        sender = normalize_address(sender)
        to = normalize_address(to)
        self._acquire_lock()
        try:
            uint.require_int(amount0_out, "amount0_out")
            uint.require_int(amount1_out, "amount1_out")
            if amount0_out < 0 or amount1_out < 0 or (amount0_out == 0 and amount1_out == 0):
                raise InsufficientOutputAmount()
            reserve0, reserve1, _ = self.get_reserves()
            if amount0_out >= reserve0 or amount1_out >= reserve1:
                raise InsufficientLiquidity()

            token0, token1 = self.token0, self.token1
            if to == token0 or to == token1:
                raise InvalidRecipient()
            if amount0_out > 0:
                self._safe_transfer(token0, to, amount0_out)  # optimistically transfer tokens
            if amount1_out > 0:
                self._safe_transfer(token1, to, amount1_out)
            if data:
                callee = self.chain.get_contract(to)
                if not isinstance(callee, SunswapV2Callee):
                    raise InvalidCallee()
                callee.sunswap_v2_call(sender, amount0_out, amount1_out, data)
            balance0 = self._balance_of(token0)
            balance1 = self._balance_of(token1)

            amount0_in = balance0 - (reserve0 - amount0_out) if balance0 > reserve0 - amount0_out else 0
            amount1_in = balance1 - (reserve1 - amount1_out) if balance1 > reserve1 - amount1_out else 0
            if amount0_in == 0 and amount1_in == 0:
                raise InsufficientInputAmount()

            balance0_adjusted = uint.sub(
                uint.mul(balance0, SWAP_FEE_DENOMINATOR), uint.mul(amount0_in, SWAP_FEE_NUMERATOR)
            )
            balance1_adjusted = uint.sub(
                uint.mul(balance1, SWAP_FEE_DENOMINATOR), uint.mul(amount1_in, SWAP_FEE_NUMERATOR)
            )
            if uint.mul(balance0_adjusted, balance1_adjusted) < uint.mul(
                uint.mul(reserve0, reserve1), SWAP_FEE_DENOMINATOR ** 2
            ):
                raise InvariantViolation()

            self._update(balance0, balance1, reserve0, reserve1)
            self.chain.emit(
                Swap(self.address, sender, amount0_in, amount1_in, amount0_out, amount1_out, to)
            )
        finally:
            self._release_lock()

        logger.debug(
            f"Swap on {self.address}: in={amount0_in}/{amount1_in} "
            f"out={amount0_out}/{amount1_out} to {to}"
        )

    # -- Reconciliation -----------------------------------------------------

    @atomic
    def skim(self, to: str) -> None:
        """Send any balance above the reserves to *to*."""
        to = normalize_address(to)
        self._acquire_lock()
        try:
            token0, token1 = self.token0, self.token1
            self._safe_transfer(token0, to, uint.sub(self._balance_of(token0), self.reserve0))
            self._safe_transfer(token1, to, uint.sub(self._balance_of(token1), self.reserve1))
        finally:
            self._release_lock()

    @atomic
    def sync(self) -> None:
        """Force reserves to match balances."""
        self._acquire_lock()
        try:
            self._update(
                self._balance_of(self.token0),
                self._balance_of(self.token1),
                self.reserve0,
                self.reserve1,
            )
        finally:
            self._release_lock()
        logger.debug(f"Sync on {self.address}: reserves={self.reserve0}/{self.reserve1}")

    # -- Serialization ------------------------------------------------------

    def to_dict(self):
        data = super().to_dict()
        data.update({
            "factory": self.factory,
            "token0": self.token0,
            "token1": self.token1,
            "reserve0": str(self.reserve0),
            "reserve1": str(self.reserve1),
            "blockTimestampLast": self.block_timestamp_last,
            "price0CumulativeLast": str(self.price0_cumulative_last),
            "price1CumulativeLast": str(self.price1_cumulative_last),
            "kLast": str(self.k_last),
        })
        return data

    def __repr__(self) -> str:
        return f"<SunswapV2Pair {self.address} {self.token0}/{self.token1}>"
