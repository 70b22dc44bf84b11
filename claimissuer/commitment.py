"""
Hash commitments over claims and signer identities.

Claims are committed as ``keccak256(abi.encode(address, uint256, bytes))`` and
signer identities as ``keccak256(abi.encode(address))``. ABI encoding is
positional and length-prefixed, so two distinct ``(subject, topic, data)``
tuples never share pre-image bytes.
"""

from dataclasses import dataclass
from typing import Union

from eth_abi import encode as abi_encode
from eth_utils import is_address, keccak, to_bytes, to_checksum_address

from .errors import InvalidClaim, InvalidCommitment, InvalidIdentity

IdentityLike = Union[str, bytes]
BytesLike = Union[bytes, bytearray, str]

CLAIM_ABI_TYPES = ["address", "uint256", "bytes"]
SIGNER_ABI_TYPES = ["address"]

DIGEST_LENGTH = 32
UINT256_MAX = 2**256 - 1


def normalize_identity(value: IdentityLike) -> str:
    """Return the EIP-55 checksum form of an address given as hex or 20 raw bytes."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise InvalidIdentity(f"identity must be 20 bytes, got {len(value)}")
        return to_checksum_address(bytes(value))
    if not isinstance(value, str) or not is_address(value):
        raise InvalidIdentity(f"invalid identity: {value!r}")
    return to_checksum_address(value)


def as_bytes(value: BytesLike) -> bytes:
    """Coerce raw bytes or a 0x-prefixed hex string to bytes."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return to_bytes(hexstr=value)
    raise TypeError(f"expected bytes or hex string, got {type(value).__name__}")


def normalize_commitment(value: BytesLike) -> bytes:
    """Return a signer commitment as exactly 32 raw bytes."""
    try:
        raw = as_bytes(value)
    except (TypeError, ValueError) as e:
        raise InvalidCommitment(f"invalid commitment: {e}")
    if len(raw) != DIGEST_LENGTH:
        raise InvalidCommitment(f"commitment must be {DIGEST_LENGTH} bytes, got {len(raw)}")
    return raw


def claim_digest(subject: IdentityLike, topic: int, data: BytesLike) -> bytes:
    """Compute the 32-byte digest a signer signs for a claim.

    Args:
        subject: Identity the claim is about
        topic: Unsigned 256-bit topic code
        data: Opaque claim payload (bytes or hex string)

    Returns:
        keccak256 of the ABI-encoded ``(subject, topic, data)`` tuple

    Raises:
        InvalidClaim: If any field cannot be encoded
    """
    try:
        subject = normalize_identity(subject)
    except InvalidIdentity as e:
        raise InvalidClaim(str(e))
    if isinstance(topic, bool) or not isinstance(topic, int):
        raise InvalidClaim(f"topic must be an integer, got {type(topic).__name__}")
    if not 0 <= topic <= UINT256_MAX:
        raise InvalidClaim(f"topic out of uint256 range: {topic}")
    try:
        payload = as_bytes(data)
    except (TypeError, ValueError) as e:
        raise InvalidClaim(f"invalid claim data: {e}")
    return keccak(abi_encode(CLAIM_ABI_TYPES, [subject, topic, payload]))


def signer_commitment(identity: IdentityLike) -> bytes:
    """Compute the registry key for a signer identity."""
    return keccak(abi_encode(SIGNER_ABI_TYPES, [normalize_identity(identity)]))


@dataclass(frozen=True)
class Claim:
    """An attestation about a subject. Never persisted."""
    subject: str
    topic: int
    data: bytes = b""

    def digest(self) -> bytes:
        return claim_digest(self.subject, self.topic, self.data)


__all__ = [
    "Claim",
    "CLAIM_ABI_TYPES",
    "DIGEST_LENGTH",
    "as_bytes",
    "claim_digest",
    "normalize_commitment",
    "normalize_identity",
    "signer_commitment",
]
