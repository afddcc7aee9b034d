"""
Sunswap V2 Factory

Registry of pairs, one per unordered asset pair:
  - Pairs are deployed at their CREATE2 address, so anyone can compute
    a pair's address off-line from the factory address and the assets
  - Lookup works in either token order
  - Creation order is kept for enumeration
  - Holds the protocol-fee recipient and the account allowed to change it
"""

from typing import Dict, List, Optional, Tuple

from ..chain import Chain, Contract, atomic
from ..constants import PROTOCOL_FEE_DIVISOR, ZERO_ADDRESS
from ..crypto.address import compute_pair_address, normalize_address, sort_tokens
from ..events import PairCreated
from ..exceptions import Forbidden, PairExists, ValidationError
from ..logger import get_logger
from .pair import SunswapV2Pair

logger = get_logger(__name__)


class SunswapV2Factory(Contract):
    """
    Pair registry.

    Handles:
      - Permissionless pair creation
      - Pair lookup by assets / index
      - Protocol fee configuration (``fee_to``, ``fee_to_setter``)
    """

    def __init__(
        self,
        chain: Chain,
        fee_to_setter: str,
        *,
        deployer: Optional[str] = None,
        protocol_fee_divisor: int = PROTOCOL_FEE_DIVISOR,
    ):
        fee_to_setter = normalize_address(fee_to_setter)
        if protocol_fee_divisor <= 0:
            raise ValidationError(f"Protocol fee divisor must be positive, got {protocol_fee_divisor}")
        super().__init__(chain, chain.create_address(deployer or fee_to_setter))
        self.fee_to = ZERO_ADDRESS
        self.fee_to_setter = fee_to_setter
        self.protocol_fee_divisor = int(protocol_fee_divisor)
        self._pairs: Dict[Tuple[str, str], str] = {}  # (tokenA, tokenB) → pair, both orders
        self._all_pairs: List[str] = []
        logger.info(f"Factory deployed at {self.address}, fee_to_setter={fee_to_setter}")

    # -- Pairs --------------------------------------------------------------

    @atomic
    def create_pair(self, token_a: str, token_b: str) -> str:
        """
        Deploy the pair for {token_a, token_b}.

        Returns:
            The new pair's address

        Raises:
            IdenticalAddresses: token_a == token_b
            ZeroAddress: either token is the zero address
            PairExists: the pair was already created, in either order
        """
        token0, token1 = sort_tokens(token_a, token_b)
        if (token0, token1) in self._pairs:
            raise PairExists()

        address = compute_pair_address(self.address, token0, token1, SunswapV2Pair.init_code_hash)
        pair = SunswapV2Pair(self.chain, address, self.address)
        pair.initialize(self.address, token0, token1)

        self._pairs[(token0, token1)] = address
        self._pairs[(token1, token0)] = address  # populate mapping in the reverse direction
        self._all_pairs.append(address)
        self.chain.emit(PairCreated(self.address, token0, token1, address, len(self._all_pairs)))

        logger.info(f"Pair {address} created: {token0}/{token1} (#{len(self._all_pairs)})")
        return address

    def get_pair(self, token_a: str, token_b: str) -> str:
        """Pair address for the two assets, or the zero address."""
        key = (normalize_address(token_a), normalize_address(token_b))
        return self._pairs.get(key, ZERO_ADDRESS)

    def get_pair_contract(self, token_a: str, token_b: str) -> Optional[SunswapV2Pair]:
        address = self.get_pair(token_a, token_b)
        if address == ZERO_ADDRESS:
            return None
        return self.chain.get_contract(address)

    def all_pairs(self, index: int) -> str:
        if index < 0 or index >= len(self._all_pairs):
            raise ValidationError(f"Pair index out of range: {index}")
        return self._all_pairs[index]

    def all_pairs_length(self) -> int:
        return len(self._all_pairs)

    # -- Fee configuration --------------------------------------------------

    @atomic
    def set_fee_to(self, sender: str, fee_to: str) -> None:
        if normalize_address(sender) != self.fee_to_setter:
            raise Forbidden()
        self.fee_to = normalize_address(fee_to)
        logger.info(f"Factory {self.address}: fee_to set to {self.fee_to}")

    @atomic
    def set_fee_to_setter(self, sender: str, fee_to_setter: str) -> None:
        if normalize_address(sender) != self.fee_to_setter:
            raise Forbidden()
        self.fee_to_setter = normalize_address(fee_to_setter)
        logger.info(f"Factory {self.address}: fee_to_setter set to {self.fee_to_setter}")

    def to_dict(self):
        return {
            "address": self.address,
            "feeTo": self.fee_to,
            "feeToSetter": self.fee_to_setter,
            "protocolFeeDivisor": self.protocol_fee_divisor,
            "allPairsLength": len(self._all_pairs),
        }
