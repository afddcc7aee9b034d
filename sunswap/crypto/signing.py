"""
Sunswap Typed-Data Signing

EIP-712 domain separators and the EIP-2612 permit digest used by the
share ledger, plus helpers to sign and recover such digests.
"""

from eth_abi import encode
from eth_utils import keccak

from ..constants import EIP712_DOMAIN_TYPEHASH, LEDGER_VERSION, PERMIT_TYPEHASH
from .address import normalize_address
from .keys import PrivateKey, Signature


def domain_separator(name: str, chain_id: int, verifying_contract: str, version: str = LEDGER_VERSION) -> bytes:
    """
    EIP-712 domain separator.

    keccak256(abi.encode(EIP712_DOMAIN_TYPEHASH, keccak256(name),
    keccak256(version), chainId, verifyingContract))
    """
    return keccak(
        encode(
            ["bytes32", "bytes32", "bytes32", "uint256", "address"],
            [
                EIP712_DOMAIN_TYPEHASH,
                keccak(text=name),
                keccak(text=version),
                chain_id,
                normalize_address(verifying_contract),
            ],
        )
    )


def permit_struct_hash(owner: str, spender: str, value: int, nonce: int, deadline: int) -> bytes:
    return keccak(
        encode(
            ["bytes32", "address", "address", "uint256", "uint256", "uint256"],
            [
                PERMIT_TYPEHASH,
                normalize_address(owner),
                normalize_address(spender),
                value,
                nonce,
                deadline,
            ],
        )
    )


def typed_data_digest(domain: bytes, struct_hash: bytes) -> bytes:
    """EIP-712: keccak256(0x19 0x01 domainSeparator structHash)."""
    return keccak(b'\x19\x01' + domain + struct_hash)


def permit_digest(
    domain: bytes,
    owner: str,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
) -> bytes:
    return typed_data_digest(domain, permit_struct_hash(owner, spender, value, nonce, deadline))


def sign_typed_data(private_key: PrivateKey, domain: bytes, struct_hash: bytes) -> Signature:
    """
    Sign typed data (EIP-712 style).

    Args:
        private_key: PrivateKey to sign with
        domain: EIP-712 domain separator
        struct_hash: Hash of the struct to sign

    Returns:
        Signature
    """
    return private_key.sign_msg_hash(typed_data_digest(domain, struct_hash))


def sign_permit(
    private_key: PrivateKey,
    domain: bytes,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
) -> Signature:
    """Sign a permit for the key's own address as owner."""
    struct_hash = permit_struct_hash(private_key.address, spender, value, nonce, deadline)
    return sign_typed_data(private_key, domain, struct_hash)


def recover_signer(msg_hash: bytes, v: int, r: int, s: int) -> str:
    """
    Recover the signer address of a 32-byte hash, ecrecover style.

    Raises:
        InvalidSignature: malformed components or no recoverable key
    """
    return Signature.from_vrs(v, r, s).recover_address(msg_hash)
