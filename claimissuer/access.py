"""
Single-owner authorization gate.
"""

import logging

from .commitment import normalize_identity
from .errors import InvalidIdentity, NotAuthorized
from .store.base import ClaimIssuerStore

logger = logging.getLogger(__name__)


class AccessGuard:
    """Gates every mutating operation on the caller being the recorded owner."""

    def __init__(self, store: ClaimIssuerStore):
        self._store = store

    def owner(self):
        return self._store.get_owner()

    def require_owner(self, caller, operation: str = "mutate") -> str:
        """Return the normalized caller if it is the owner.

        Raises:
            NotAuthorized: If the caller is not the owner, is malformed, or no
                owner has been set yet
        """
        try:
            normalized = normalize_identity(caller)
        except InvalidIdentity:
            normalized = None
        owner = self._store.get_owner()
        if owner is None or normalized != owner:
            logger.warning(f"Rejected {operation} from non-owner {caller!r}")
            raise NotAuthorized(caller, operation)
        return normalized


__all__ = ["AccessGuard"]
