"""Claim validity checks.

``ClaimValidator.is_claim_valid`` is total: it never raises for any input and
folds every failure into ``False``. Checks run cheapest first and stop at the
first failure:

 1. signature length matches the verifier's fixed length
 2. claim fields encode into a digest
 3. the signer recovers from ``(digest, signature)``
 4. the signer's commitment is trusted
 5. the signature is not revoked
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .commitment import as_bytes, claim_digest, signer_commitment
from .errors import InvalidClaim
from .signature import Secp256k1Verifier, SignatureVerifier
from .store.base import ClaimIssuerStore

logger = logging.getLogger(__name__)


class ClaimStatus(str, Enum):
    VALID = "valid"
    INVALID_SIGNATURE_LENGTH = "invalid_signature_length"
    MALFORMED_CLAIM = "malformed_claim"
    RECOVERY_FAILED = "recovery_failed"
    UNTRUSTED_SIGNER = "untrusted_signer"
    REVOKED = "revoked"


@dataclass
class ClaimCheck:
    status: ClaimStatus
    signer: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.status is ClaimStatus.VALID


class ClaimValidator:
    """Answers "is this claim valid right now?" against a store snapshot."""

    def __init__(self, store: ClaimIssuerStore, verifier: Optional[SignatureVerifier] = None):
        self._store = store
        self.verifier = verifier or Secp256k1Verifier()

    def check(self, subject: Any, topic: Any, data: Any, signature: Any) -> ClaimCheck:
        """Run the validity checks and report which one failed, if any."""
        try:
            sig = as_bytes(signature)
        except (TypeError, ValueError):
            return ClaimCheck(ClaimStatus.INVALID_SIGNATURE_LENGTH)
        if len(sig) != self.verifier.signature_length:
            return ClaimCheck(ClaimStatus.INVALID_SIGNATURE_LENGTH)

        try:
            digest = claim_digest(subject, topic, data)
        except InvalidClaim as e:
            logger.debug(f"Malformed claim: {e}")
            return ClaimCheck(ClaimStatus.MALFORMED_CLAIM)

        try:
            signer = self.verifier.recover_signer(digest, sig)
            commitment = signer_commitment(signer) if signer is not None else None
        except Exception as e:
            logger.debug(f"Signer recovery failed: {e}")
            return ClaimCheck(ClaimStatus.RECOVERY_FAILED)
        if commitment is None:
            return ClaimCheck(ClaimStatus.RECOVERY_FAILED)

        trusted, revoked = self._store.claim_status(commitment, sig)
        if not trusted:
            return ClaimCheck(ClaimStatus.UNTRUSTED_SIGNER, signer)
        if revoked:
            return ClaimCheck(ClaimStatus.REVOKED, signer)
        return ClaimCheck(ClaimStatus.VALID, signer)

    def is_claim_valid(self, subject: Any, topic: Any, data: Any, signature: Any) -> bool:
        return self.check(subject, topic, data, signature).valid


__all__ = ["ClaimStatus", "ClaimCheck", "ClaimValidator"]
