"""
Exception hierarchy for the claim issuer.

Authorization and setup failures are raised to the caller. Malformed input to
claim validation is never an error: the validator folds it into ``False``.
"""

from typing import Any, Dict, Optional


class ClaimIssuerError(Exception):
    """Base class for all claim issuer errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:  # convenience for logging / JSON
        return {
            "error": self.__class__.__name__,
            "message": str(self),
            "details": self.details,
        }


class NotAuthorized(ClaimIssuerError):
    """Raised when a non-owner attempts a mutating operation."""

    def __init__(self, caller: Any, operation: str):
        self.caller = caller
        self.operation = operation
        super().__init__(
            f"caller {caller!r} is not authorized to {operation}",
            {"caller": str(caller), "operation": operation},
        )


class AlreadyInitialized(ClaimIssuerError):
    """Raised when the bootstrap step runs a second time on the same storage."""


class InvalidIdentity(ClaimIssuerError, ValueError):
    """Raised when an identity is not a valid 20-byte address."""


class InvalidCommitment(ClaimIssuerError, ValueError):
    """Raised when a signer commitment is not exactly 32 bytes."""


class InvalidClaim(ClaimIssuerError, ValueError):
    """Raised when claim fields cannot be encoded for hashing."""


class StoreError(ClaimIssuerError):
    """Raised when the persistence backend fails."""


__all__ = [
    "ClaimIssuerError",
    "NotAuthorized",
    "AlreadyInitialized",
    "InvalidIdentity",
    "InvalidCommitment",
    "InvalidClaim",
    "StoreError",
]
