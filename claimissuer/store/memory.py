"""
In-memory claim issuer store.
"""

import threading
from typing import Optional, Set, Tuple

from .base import ClaimIssuerStore


class MemoryClaimStore(ClaimIssuerStore):
    """Thread-safe store keeping trust state in process memory.
    It is suitable for tests or single-process deployments. State does not survive restarts.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._owner: Optional[str] = None
        self._signature_keys: Set[bytes] = set()
        self._revoked_signatures: Set[bytes] = set()

    def get_owner(self) -> Optional[str]:
        with self._lock:
            return self._owner

    def initialize(self, owner: str, commitment: bytes) -> bool:
        with self._lock:
            if self._owner is not None:
                return False
            self._owner = owner
            self._signature_keys.add(commitment)
            return True

    def set_owner(self, owner: str) -> None:
        with self._lock:
            self._owner = owner

    def add_key(self, commitment: bytes) -> None:
        with self._lock:
            self._signature_keys.add(commitment)

    def remove_key(self, commitment: bytes) -> None:
        with self._lock:
            self._signature_keys.discard(commitment)

    def is_key_allowed(self, commitment: bytes) -> bool:
        with self._lock:
            return commitment in self._signature_keys

    def revoke(self, signature: bytes) -> None:
        with self._lock:
            self._revoked_signatures.add(signature)

    def is_revoked(self, signature: bytes) -> bool:
        with self._lock:
            return signature in self._revoked_signatures

    def claim_status(self, commitment: bytes, signature: bytes) -> Tuple[bool, bool]:
        with self._lock:
            return commitment in self._signature_keys, signature in self._revoked_signatures


__all__ = ["MemoryClaimStore"]
