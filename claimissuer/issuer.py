"""
Claim issuer authority.

This module provides the caller-facing ``ClaimIssuer`` that coordinates the
access guard, key registry, revocation ledger and claim validator over a
single store.
"""

import logging
from dataclasses import replace
from typing import Any, Optional

from .access import AccessGuard
from .audit import (
    AuditTrail,
    EVENT_INITIALIZED,
    EVENT_OWNERSHIP_TRANSFERRED,
    EVENT_SIGNATURE_KEY_ADDED,
    EVENT_SIGNATURE_KEY_REMOVED,
    EVENT_SIGNATURE_REVOKED,
)
from .commitment import BytesLike, IdentityLike, normalize_identity
from .config import ClaimIssuerConfig
from .errors import NotAuthorized
from .initialization import InitializationGate
from .monitoring.metrics_exporter import MetricsRegistry, get_registry
from .registry import KeyRegistry
from .revocation import RevocationLedger
from .signature import SignatureVerifier
from .store.base import ClaimIssuerStore
from .store.memory import MemoryClaimStore
from .store.redis import RedisClaimStore
from .validator import ClaimCheck, ClaimValidator

logger = logging.getLogger(__name__)


class ClaimIssuer:
    """
    One authority's trust state and the operations exposed on it.

    Mutations require the owner as ``caller`` and raise ``NotAuthorized``
    otherwise, with no state change. Reads are public. ``is_claim_valid``
    never raises for malformed input.
    """

    def __init__(
        self,
        store: Optional[ClaimIssuerStore] = None,
        verifier: Optional[SignatureVerifier] = None,
        metrics: Optional[MetricsRegistry] = None,
        audit: Optional[AuditTrail] = None,
    ):
        """Attach to ``store`` (a fresh memory store by default) without initializing it."""
        self.store = store if store is not None else MemoryClaimStore()
        self.guard = AccessGuard(self.store)
        self.keys = KeyRegistry(self.store, self.guard)
        self.revocations = RevocationLedger(self.store, self.guard)
        self.validator = ClaimValidator(self.store, verifier)
        self._gate = InitializationGate(self.store)
        self.metrics = metrics
        self.audit = audit

    # Setup

    def initialize(self, owner: IdentityLike, first_signer: IdentityLike) -> None:
        """Bootstrap the owner and first trusted signer. Succeeds at most once per store."""
        owner, commitment = self._gate.initialize(owner, first_signer)
        self._observe_mutation("initialize")
        self._record(EVENT_INITIALIZED, owner, signature_key=f"0x{commitment.hex()}")

    def is_initialized(self) -> bool:
        return self.store.is_initialized()

    # Ownership

    def owner(self) -> Optional[str]:
        return self.guard.owner()

    def transfer_ownership(self, caller: IdentityLike, new_owner: IdentityLike) -> None:
        """Hand mutation rights to ``new_owner``. There is always exactly one owner."""
        previous = self._guarded("transfer_ownership", self.guard.require_owner, caller, "transfer_ownership")
        new_owner = normalize_identity(new_owner)
        self.store.set_owner(new_owner)
        logger.info(f"Ownership transferred from {previous} to {new_owner}")
        self._observe_mutation("transfer_ownership")
        self._record(EVENT_OWNERSHIP_TRANSFERRED, previous, new_owner=new_owner)

    # Signature keys

    def add_signature_key(self, caller: IdentityLike, commitment: BytesLike) -> None:
        actor, key = self._guarded("add_signature_key", self.keys.add_key, caller, commitment)
        self._observe_mutation("add_signature_key")
        self._record(EVENT_SIGNATURE_KEY_ADDED, actor, signature_key=f"0x{key.hex()}")

    def remove_signature_key(self, caller: IdentityLike, commitment: BytesLike) -> None:
        actor, key = self._guarded("remove_signature_key", self.keys.remove_key, caller, commitment)
        self._observe_mutation("remove_signature_key")
        self._record(EVENT_SIGNATURE_KEY_REMOVED, actor, signature_key=f"0x{key.hex()}")

    def is_signature_key_allowed(self, commitment: BytesLike) -> bool:
        return self.keys.is_trusted(commitment)

    # Signatures

    def revoke_signature(self, caller: IdentityLike, signature: BytesLike) -> None:
        actor, raw = self._guarded("revoke_signature", self.revocations.revoke, caller, signature)
        self._observe_mutation("revoke_signature")
        self._record(EVENT_SIGNATURE_REVOKED, actor, signature=f"0x{raw.hex()}")

    def is_signature_revoked(self, signature: BytesLike) -> bool:
        return self.revocations.is_revoked(signature)

    # Claims

    def check_claim(self, subject: Any, topic: Any, data: Any, signature: Any) -> ClaimCheck:
        result = self.validator.check(subject, topic, data, signature)
        logger.debug(f"Claim check for subject {subject!r} topic {topic!r}: {result.status.value}")
        if self.metrics:
            self.metrics.observe_claim_check(result.status.value)
        return result

    def is_claim_valid(self, subject: Any, topic: Any, data: Any, signature: Any) -> bool:
        return self.check_claim(subject, topic, data, signature).valid

    # Internal helpers

    def _guarded(self, operation: str, func, *args):
        try:
            return func(*args)
        except NotAuthorized:
            if self.metrics:
                self.metrics.observe_authorization_failure(operation)
            raise

    def _observe_mutation(self, operation: str) -> None:
        if self.metrics:
            self.metrics.observe_mutation(operation)

    def _record(self, event_type: str, actor: Optional[str], **details: Any) -> None:
        if self.audit:
            self.audit.record(event_type, actor, **details)


def create_store(config: ClaimIssuerConfig) -> ClaimIssuerStore:
    if config.store_backend == "redis":
        return RedisClaimStore(url=config.redis_url, prefix=config.redis_prefix)
    return MemoryClaimStore()


def create_claim_issuer(
    config: Optional[ClaimIssuerConfig] = None,
    verifier: Optional[SignatureVerifier] = None,
    **overrides: Any,
) -> ClaimIssuer:
    """
    Create a claim issuer from configuration.

    Args:
        config: Issuer configuration (defaults to ``ClaimIssuerConfig.from_env()``)
        verifier: Signature verifier (defaults to secp256k1 recovery)
        **overrides: Config fields to override

    Returns:
        An uninitialized ``ClaimIssuer``, or an already-initialized one when
        the configured store holds prior state
    """
    config = config or ClaimIssuerConfig.from_env()
    if overrides:
        config = replace(config, **overrides)
    return ClaimIssuer(
        store=create_store(config),
        verifier=verifier,
        metrics=get_registry() if config.enable_metrics else None,
        audit=AuditTrail() if config.enable_audit else None,
    )


__all__ = ["ClaimIssuer", "create_claim_issuer", "create_store"]
