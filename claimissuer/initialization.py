"""
One-time bootstrap of an authority's owner and first trusted key.

Issuers are constructed without arguments and configured afterwards, so the
same code can back many authorities, each over its own store. The bootstrap
may succeed at most once per store.
"""

import logging
from typing import Tuple

from .commitment import IdentityLike, normalize_identity, signer_commitment
from .errors import AlreadyInitialized
from .store.base import ClaimIssuerStore

logger = logging.getLogger(__name__)


class InitializationGate:
    def __init__(self, store: ClaimIssuerStore):
        self._store = store

    def initialize(self, owner: IdentityLike, first_signer: IdentityLike) -> Tuple[str, bytes]:
        """Record the owner and trust ``first_signer`` without the owner gate.

        Returns:
            The normalized owner and the first signer's commitment

        Raises:
            InvalidIdentity: If either identity is malformed
            AlreadyInitialized: If the store already has an owner
        """
        if self._store.is_initialized():
            logger.error("Initialization rejected: store already initialized")
            raise AlreadyInitialized("claim issuer is already initialized")
        owner = normalize_identity(owner)
        commitment = signer_commitment(first_signer)
        if not self._store.initialize(owner, commitment):
            logger.error("Initialization rejected: store already initialized")
            raise AlreadyInitialized("claim issuer is already initialized")
        logger.info(f"Claim issuer initialized with owner {owner}")
        return owner, commitment


__all__ = ["InitializationGate"]
