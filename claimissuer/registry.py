"""
Registry of signer commitments trusted to issue claims.
"""

import logging
from typing import Tuple

from .access import AccessGuard
from .commitment import BytesLike, normalize_commitment
from .store.base import ClaimIssuerStore

logger = logging.getLogger(__name__)


class KeyRegistry:
    """Set of trusted signer commitments. Reads are public, writes owner-only."""

    def __init__(self, store: ClaimIssuerStore, guard: AccessGuard):
        self._store = store
        self._guard = guard

    def add_key(self, caller, commitment: BytesLike) -> Tuple[str, bytes]:
        """Trust a signer commitment. Adding an already trusted key is a no-op.

        Returns the normalized caller and the stored key.
        """
        caller = self._guard.require_owner(caller, "add_signature_key")
        key = normalize_commitment(commitment)
        self._store.add_key(key)
        logger.info(f"Signature key 0x{key.hex()} added")
        return caller, key

    def remove_key(self, caller, commitment: BytesLike) -> Tuple[str, bytes]:
        """Stop trusting a signer commitment. Removing an unknown key is a no-op."""
        caller = self._guard.require_owner(caller, "remove_signature_key")
        key = normalize_commitment(commitment)
        self._store.remove_key(key)
        logger.info(f"Signature key 0x{key.hex()} removed")
        return caller, key

    def is_trusted(self, commitment: BytesLike) -> bool:
        return self._store.is_key_allowed(normalize_commitment(commitment))


__all__ = ["KeyRegistry"]
