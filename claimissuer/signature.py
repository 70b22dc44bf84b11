"""
Signer recovery for claim signatures.

The default scheme is secp256k1 with recoverable 65-byte signatures
(``r || s || v``) over the EIP-191 personal-message hash of the raw 32-byte
claim digest. Recovery never raises: any malformed or unrecoverable signature
yields ``None``.
"""

import logging
from typing import Optional, Protocol

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys import keys
from eth_utils import keccak

from .commitment import BytesLike, IdentityLike, claim_digest

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 65
PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n32"

SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_HALF_N = SECP256K1_N // 2


class SignatureVerifier(Protocol):
    """Recovers the signing identity from a digest and signature."""

    signature_length: int

    def recover_signer(self, digest: bytes, signature: bytes) -> Optional[str]:
        ...  # pragma: no cover - interface placeholder


def personal_message_hash(digest: bytes) -> bytes:
    """Hash actually signed for a 32-byte digest under EIP-191 version 0x45."""
    return keccak(PERSONAL_MESSAGE_PREFIX + digest)


class Secp256k1Verifier:
    """Recoverable ECDSA verifier matching ``ecrecover`` semantics.

    Rejects signatures whose ``v`` is not 27/28 and high-s signatures. The
    revocation ledger is keyed on signature bytes, so accepting the malleable
    ``(r, n - s, v ^ 1)`` twin would let a revoked claim validate again.
    """

    signature_length = SIGNATURE_LENGTH

    def recover_signer(self, digest: bytes, signature: bytes) -> Optional[str]:
        if len(digest) != 32 or len(signature) != self.signature_length:
            return None
        r = int.from_bytes(signature[0:32], "big")
        s = int.from_bytes(signature[32:64], "big")
        v = signature[64]
        if v not in (27, 28):
            return None
        if not (0 < r < SECP256K1_N and 0 < s <= SECP256K1_HALF_N):
            return None
        try:
            sig = keys.Signature(vrs=(v - 27, r, s))
            public_key = sig.recover_public_key_from_msg_hash(personal_message_hash(digest))
        except Exception as e:
            logger.debug(f"Signature recovery failed: {e}")
            return None
        return public_key.to_checksum_address()


def new_signer():
    """Create a fresh random local account for off-system signing."""
    return Account.create()


def sign_digest(private_key, digest: bytes) -> bytes:
    """Sign a claim digest the way wallets sign a 32-byte personal message."""
    signed = Account.sign_message(encode_defunct(primitive=digest), private_key=private_key)
    return bytes(signed.signature)


def sign_claim(private_key, subject: IdentityLike, topic: int, data: BytesLike) -> bytes:
    """Produce the 65-byte signature a trusted key issues for a claim."""
    return sign_digest(private_key, claim_digest(subject, topic, data))


__all__ = [
    "SIGNATURE_LENGTH",
    "SignatureVerifier",
    "Secp256k1Verifier",
    "new_signer",
    "personal_message_hash",
    "sign_claim",
    "sign_digest",
]
