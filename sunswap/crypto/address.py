"""
Contract Address Generation

Ethereum-compatible address handling for Sunswap: checksum normalization,
canonical token ordering, and CREATE / CREATE2 address derivation.
"""

from typing import Tuple, Union

import rlp
from eth_utils import is_address, keccak, to_canonical_address, to_checksum_address

from ..constants import PAIR_INIT_CODE_HASH, ZERO_ADDRESS
from ..exceptions import IdenticalAddresses, ValidationError, ZeroAddress


def normalize_address(address: Union[str, bytes]) -> str:
    """
    Convert an address to EIP-55 checksum form.

    Args:
        address: Hex string (any casing, with 0x prefix) or 20 raw bytes

    Returns:
        Checksum address

    Raises:
        ValidationError: if the value is not a 20-byte address
    """
    if isinstance(address, bytes):
        if len(address) != 20:
            raise ValidationError(f"Address must be 20 bytes, got {len(address)}")
        return to_checksum_address(address)
    if not is_address(address):
        raise ValidationError(f"Invalid address: {address!r}")
    return to_checksum_address(address)


def is_zero_address(address: str) -> bool:
    return normalize_address(address) == ZERO_ADDRESS


def sort_tokens(token_a: str, token_b: str) -> Tuple[str, str]:
    """
    Return the two token addresses in ascending numeric order.

    Raises:
        IdenticalAddresses: token_a == token_b
        ZeroAddress: the lower token is the zero address
    """
    token_a = normalize_address(token_a)
    token_b = normalize_address(token_b)
    if token_a == token_b:
        raise IdenticalAddresses()
    if int(token_a, 16) < int(token_b, 16):
        token0, token1 = token_a, token_b
    else:
        token0, token1 = token_b, token_a
    if token0 == ZERO_ADDRESS:
        raise ZeroAddress()
    return token0, token1


def generate_contract_address(sender: str, nonce: int) -> str:
    """
    Generate contract address using CREATE opcode logic.

    Address = keccak256(rlp([sender, nonce]))[-20:]

    Args:
        sender: Deployer address
        nonce: Deployer nonce

    Returns:
        Contract address (checksum format)
    """
    rlp_encoded = rlp.encode([to_canonical_address(sender), nonce])
    return to_checksum_address(keccak(rlp_encoded)[-20:])


def generate_contract_address_create2(sender: str, salt: bytes, code_hash: bytes) -> str:
    """
    Generate contract address using CREATE2 opcode logic.

    Address = keccak256(0xff + sender + salt + code_hash)[-20:]

    Args:
        sender: Deployer address
        salt: 32-byte salt
        code_hash: keccak256 of the contract init code

    Returns:
        Contract address (checksum format)
    """
    if len(salt) != 32:
        raise ValidationError(f"Salt must be 32 bytes, got {len(salt)}")
    if len(code_hash) != 32:
        raise ValidationError(f"Code hash must be 32 bytes, got {len(code_hash)}")

    data = b'\xff' + to_canonical_address(sender) + salt + code_hash
    return to_checksum_address(keccak(data)[-20:])


def pair_salt(token0: str, token1: str) -> bytes:
    """keccak256(abi.encodePacked(token0, token1)) for an already-sorted pair."""
    return keccak(to_canonical_address(token0) + to_canonical_address(token1))


def compute_pair_address(
    factory: str,
    token_a: str,
    token_b: str,
    init_code_hash: bytes = PAIR_INIT_CODE_HASH,
) -> str:
    """
    Deterministic address of the pair for {token_a, token_b} under *factory*.

    A pure function of the factory address, the canonical token pair and
    the pair code hash: the factory deploys at this address and any
    integrator can compute it off-line.
    """
    token0, token1 = sort_tokens(token_a, token_b)
    return generate_contract_address_create2(
        normalize_address(factory),
        pair_salt(token0, token1),
        init_code_hash,
    )
