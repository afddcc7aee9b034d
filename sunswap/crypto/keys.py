"""
Sunswap Crypto Keys Module

secp256k1 keys and (v, r, s) signatures, wrapping eth-keys. Used to
produce and check off-line-signed approvals.
"""

import secrets
from typing import Tuple

from eth_keys.datatypes import PrivateKey as EthPrivateKey, Signature as EthSignature
from eth_keys.exceptions import BadSignature, ValidationError as EthValidationError
from eth_utils import decode_hex

from ..exceptions import InvalidSignature, ValidationError


class PrivateKey:
    """
    secp256k1 private key for signing message hashes.
    """

    def __init__(self, key_bytes: bytes):
        if len(key_bytes) != 32:
            raise ValidationError(f"Private key must be 32 bytes, got {len(key_bytes)}")
        try:
            self._key = EthPrivateKey(key_bytes)
        except EthValidationError as e:
            raise ValidationError(f"Invalid private key: {e}") from e

    @classmethod
    def from_hex(cls, hex_str: str) -> "PrivateKey":
        """Create from a hex string (with or without 0x prefix)."""
        return cls(decode_hex(hex_str))

    @classmethod
    def generate(cls) -> "PrivateKey":
        return cls(secrets.token_bytes(32))

    @property
    def address(self) -> str:
        """Checksum address of the matching public key."""
        return self._key.public_key.to_checksum_address()

    def to_bytes(self) -> bytes:
        return self._key.to_bytes()

    def sign_msg_hash(self, msg_hash: bytes) -> "Signature":
        """
        Sign a 32-byte message hash (no prefix is added).

        Args:
            msg_hash: 32-byte hash to sign

        Returns:
            Signature instance
        """
        if len(msg_hash) != 32:
            raise ValidationError(f"Message hash must be 32 bytes, got {len(msg_hash)}")
        return Signature(self._key.sign_msg_hash(msg_hash))

    def __repr__(self) -> str:
        return f"PrivateKey({self.address})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PrivateKey):
            return False
        return self._key == other._key


class Signature:
    """
    ECDSA signature (v, r, s format).

    ``v`` is the raw recovery id (0 or 1); ``eth_v`` is the 27/28 form
    the on-chain ``ecrecover`` convention uses.
    """

    def __init__(self, signature: EthSignature):
        self._signature = signature

    @classmethod
    def from_vrs(cls, v: int, r: int, s: int) -> "Signature":
        """
        Create from v, r, s components.

        Args:
            v: Recovery parameter (27 or 28, or 0/1)
            r: R component
            s: S component

        Raises:
            InvalidSignature: components out of range
        """
        # Normalize v to 0/1
        if v >= 27:
            v -= 27
        try:
            return cls(EthSignature(vrs=(v, r, s)))
        except (BadSignature, EthValidationError) as e:
            raise InvalidSignature() from e

    @property
    def v(self) -> int:
        return self._signature.v

    @property
    def eth_v(self) -> int:
        return self._signature.v + 27

    @property
    def r(self) -> int:
        return self._signature.r

    @property
    def s(self) -> int:
        return self._signature.s

    @property
    def vrs(self) -> Tuple[int, int, int]:
        """(v, r, s) with v in 27/28 form, ready for permit()."""
        return (self.eth_v, self.r, self.s)

    def to_bytes(self) -> bytes:
        """65 bytes: r[32] + s[32] + v[1]."""
        return self.r.to_bytes(32, "big") + self.s.to_bytes(32, "big") + bytes([self.v])

    def recover_address(self, msg_hash: bytes) -> str:
        """
        Recover the signer's checksum address.

        Raises:
            InvalidSignature: no public key can be recovered
        """
        try:
            public_key = self._signature.recover_public_key_from_msg_hash(msg_hash)
        except (BadSignature, EthValidationError) as e:
            raise InvalidSignature() from e
        return public_key.to_checksum_address()

    def __repr__(self) -> str:
        return f"Signature(v={self.v}, r={hex(self.r)[:10]}..., s={hex(self.s)[:10]}...)"


def generate_keypair() -> Tuple[PrivateKey, str]:
    """Generate a new key and its address."""
    private_key = PrivateKey.generate()
    return private_key, private_key.address
