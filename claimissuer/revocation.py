"""
Ledger of revoked claim signatures.

Revocation is keyed on the signature bytes themselves, so revoking one
signature disables exactly that proof and nothing else signed by the same key.
Revocation is permanent: no un-revoke operation exists.
"""

import logging
from typing import Tuple

from .access import AccessGuard
from .commitment import BytesLike, as_bytes
from .store.base import ClaimIssuerStore

logger = logging.getLogger(__name__)


class RevocationLedger:
    """Monotonic set of revoked signatures."""

    def __init__(self, store: ClaimIssuerStore, guard: AccessGuard):
        self._store = store
        self._guard = guard

    def revoke(self, caller, signature: BytesLike) -> Tuple[str, bytes]:
        """Mark a signature as revoked. Revoking twice is a no-op."""
        caller = self._guard.require_owner(caller, "revoke_signature")
        raw = as_bytes(signature)
        self._store.revoke(raw)
        logger.info(f"Signature 0x{raw.hex()} revoked")
        return caller, raw

    def is_revoked(self, signature: BytesLike) -> bool:
        return self._store.is_revoked(as_bytes(signature))


__all__ = ["RevocationLedger"]
