"""
Storage interface for a single authority's trust state.

A store holds exactly three durable fields: the owner identity, the set of
trusted signer commitments, and the set of revoked signatures. Every method is
atomic on its own; ``claim_status`` reads both sets from one snapshot.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

OWNER_FIELD = "owner"
SIGNATURE_KEYS_FIELD = "signature_keys"
REVOKED_SIGNATURES_FIELD = "revoked_signatures"

# Persisted layout, in declaration order. Never rename, reorder or extend in
# place: stores written by an earlier release must stay readable.
STORAGE_FIELDS = (OWNER_FIELD, SIGNATURE_KEYS_FIELD, REVOKED_SIGNATURES_FIELD)


class ClaimIssuerStore(ABC):
    """Abstract persistence backend for owner, trusted keys and revocations."""

    @abstractmethod
    def get_owner(self) -> Optional[str]:
        """Return the owner identity, or None before initialization."""

    @abstractmethod
    def initialize(self, owner: str, commitment: bytes) -> bool:
        """Atomically record the owner and trust the first key.

        Returns False, leaving state untouched, if an owner already exists.
        """

    @abstractmethod
    def set_owner(self, owner: str) -> None:
        """Replace the owner identity."""

    @abstractmethod
    def add_key(self, commitment: bytes) -> None:
        pass

    @abstractmethod
    def remove_key(self, commitment: bytes) -> None:
        pass

    @abstractmethod
    def is_key_allowed(self, commitment: bytes) -> bool:
        pass

    @abstractmethod
    def revoke(self, signature: bytes) -> None:
        pass

    @abstractmethod
    def is_revoked(self, signature: bytes) -> bool:
        pass

    @abstractmethod
    def claim_status(self, commitment: bytes, signature: bytes) -> Tuple[bool, bool]:
        """Return ``(trusted, revoked)`` read from a single consistent snapshot."""

    def is_initialized(self) -> bool:
        return self.get_owner() is not None

    def close(self) -> None:
        """Release backend resources (no-op by default)."""


__all__ = [
    "ClaimIssuerStore",
    "OWNER_FIELD",
    "SIGNATURE_KEYS_FIELD",
    "REVOKED_SIGNATURES_FIELD",
    "STORAGE_FIELDS",
]
