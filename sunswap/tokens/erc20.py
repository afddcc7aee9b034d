"""
Sunswap V2 share token

EIP-20 ledger of a pair's liquidity shares, with:
  - transfer, approve, transferFrom, balanceOf, allowance
  - an allowance of 2^256 - 1 treated as unlimited
  - EIP-2612 permit: approvals authorized by an EIP-712 signature,
    guarded by a per-owner nonce and a deadline

The same ledger, minted up-front, serves as the plain ERC20 asset used in
tests and local simulations.
"""

from typing import Any, Dict, Optional, Tuple

from ..chain import Chain, Contract, atomic
from ..constants import (
    LEDGER_DECIMALS,
    LEDGER_NAME,
    LEDGER_SYMBOL,
    PERMIT_TYPEHASH,
    UINT256_MAX,
    ZERO_ADDRESS,
)
from ..crypto.address import normalize_address
from ..crypto.signing import domain_separator, permit_digest, recover_signer
from ..events import Approval, Transfer
from ..exceptions import Expired, InvalidSignature
from .. import uint
from ..logger import get_logger

logger = get_logger(__name__)


class SunswapV2ERC20(Contract):
    """
    Share ledger.

    Mirrors ERC-20 semantics:
        - balance_of(address) → int
        - transfer(sender, to, value)
        - approve(owner, spender, value)
        - transfer_from(spender, from_, to, value)
        - permit(owner, spender, value, deadline, v, r, s)

    ``sender`` is always the account making the call; there is no
    implicit caller.
    """

    name = LEDGER_NAME
    symbol = LEDGER_SYMBOL
    decimals = LEDGER_DECIMALS
    PERMIT_TYPEHASH = PERMIT_TYPEHASH

    def __init__(self, chain: Chain, address: str):
        super().__init__(chain, address)
        self.total_supply = 0
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}  # (owner, spender)
        self._nonces: Dict[str, int] = {}
        self.DOMAIN_SEPARATOR = domain_separator(self.name, chain.chain_id, self.address)

    # ── Read-only views ───────────────────────────────────────────────

    def balance_of(self, holder: str) -> int:
        return self._balances.get(normalize_address(holder), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def nonces(self, owner: str) -> int:
        return self._nonces.get(normalize_address(owner), 0)

    # ── Internal ledger moves ─────────────────────────────────────────

    def _mint(self, to: str, value: int) -> None:
        self.total_supply = uint.add(self.total_supply, value)
        self._balances[to] = uint.add(self._balances.get(to, 0), value)
        self.chain.emit(Transfer(self.address, ZERO_ADDRESS, to, value))

    def _burn(self, from_: str, value: int) -> None:
        self._balances[from_] = uint.sub(self._balances.get(from_, 0), value)
        self.total_supply = uint.sub(self.total_supply, value)
        self.chain.emit(Transfer(self.address, from_, ZERO_ADDRESS, value))

    def _approve(self, owner: str, spender: str, value: int) -> None:
        self._allowances[(owner, spender)] = value
        self.chain.emit(Approval(self.address, owner, spender, value))

    def _transfer(self, from_: str, to: str, value: int) -> None:
        self._balances[from_] = uint.sub(self._balances.get(from_, 0), value)
        self._balances[to] = uint.add(self._balances.get(to, 0), value)
        self.chain.emit(Transfer(self.address, from_, to, value))

    # ── EIP-20 ────────────────────────────────────────────────────────

    @atomic
    def approve(self, sender: str, spender: str, value: int) -> bool:
        uint.require_uint(value, "value")
        self._approve(normalize_address(sender), normalize_address(spender), value)
        return True

    @atomic
    def transfer(self, sender: str, to: str, value: int) -> bool:
        uint.require_uint(value, "value")
        self._transfer(normalize_address(sender), normalize_address(to), value)
        return True

    @atomic
    def transfer_from(self, sender: str, from_: str, to: str, value: int) -> bool:
        """
        Move *value* from *from_* to *to* using *sender*'s allowance.

        An allowance of 2^256 - 1 is never decremented.
        """
        uint.require_uint(value, "value")
        sender = normalize_address(sender)
        from_ = normalize_address(from_)
        allowed = self._allowances.get((from_, sender), 0)
        if allowed != UINT256_MAX:
            self._allowances[(from_, sender)] = uint.sub(allowed, value)
        self._transfer(from_, normalize_address(to), value)
        return True

    # ── EIP-2612 ──────────────────────────────────────────────────────

    @atomic
    def permit(
        self,
        owner: str,
        spender: str,
        value: int,
        deadline: int,
        v: int,
        r: int,
        s: int,
    ) -> None:
        """
        Set *spender*'s allowance over *owner*'s shares from a signature.

        Raises:
            Expired: the block timestamp is past *deadline*
            InvalidSignature: the signer is not *owner*, or the signature
                was made for another nonce, value, spender or domain
        """
        if deadline < self.chain.timestamp:
            raise Expired()
        uint.require_uint(value, "value")
        owner = normalize_address(owner)
        spender = normalize_address(spender)

        nonce = self._nonces.get(owner, 0)
        digest = permit_digest(self.DOMAIN_SEPARATOR, owner, spender, value, nonce, deadline)
        recovered = recover_signer(digest, v, r, s)
        if recovered == ZERO_ADDRESS or recovered != owner:
            raise InvalidSignature()

        self._nonces[owner] = nonce + 1
        self._approve(owner, spender, value)
        logger.debug(f"Permit: {owner} → {spender} allowance={value} nonce={nonce}")

    # ── Serialization ─────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "totalSupply": str(self.total_supply),
            "holders": len([b for b in self._balances.values() if b > 0]),
        }


class ERC20(SunswapV2ERC20):
    """
    Plain fungible token with a fixed supply minted to its deployer.

    Stands in for the traded assets; pairs only ever touch it through
    balance_of / transfer / transfer_from.
    """

    def __init__(
        self,
        chain: Chain,
        deployer: str,
        total_supply: int,
        *,
        address: Optional[str] = None,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
    ):
        deployer = normalize_address(deployer)
        uint.require_uint(total_supply, "total_supply")
        if name is not None:
            self.name = name
        if symbol is not None:
            self.symbol = symbol
        super().__init__(chain, address or chain.create_address(deployer))
        if total_supply > 0:
            self._mint(deployer, total_supply)
        logger.info(f"Token deployed: {self.symbol} at {self.address}, supply={total_supply}")

    def __repr__(self) -> str:
        return f"<ERC20 {self.symbol} {self.address} supply={self.total_supply}>"
