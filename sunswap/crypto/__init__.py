"""
Sunswap Crypto Module

Cryptographic primitives for the exchange core:
- secp256k1 keys and (v, r, s) signatures
- EIP-712 typed-data digests for permits
- Address normalization and CREATE / CREATE2 derivation
"""

from .keys import PrivateKey, Signature, generate_keypair
from .signing import (
    domain_separator,
    permit_digest,
    permit_struct_hash,
    recover_signer,
    sign_permit,
    sign_typed_data,
    typed_data_digest,
)
from .address import (
    compute_pair_address,
    generate_contract_address,
    generate_contract_address_create2,
    is_zero_address,
    normalize_address,
    pair_salt,
    sort_tokens,
)

__all__ = [
    # Keys
    "PrivateKey",
    "Signature",
    "generate_keypair",
    # Typed data
    "domain_separator",
    "permit_digest",
    "permit_struct_hash",
    "recover_signer",
    "sign_permit",
    "sign_typed_data",
    "typed_data_digest",
    # Address
    "compute_pair_address",
    "generate_contract_address",
    "generate_contract_address_create2",
    "is_zero_address",
    "normalize_address",
    "pair_salt",
    "sort_tokens",
]
