"""
Storage backends for claim issuer trust state.

Two implementations share the ``ClaimIssuerStore`` interface: a process-local
memory store and a Redis store that survives restarts and code upgrades.
"""

from .base import (
    ClaimIssuerStore,
    OWNER_FIELD,
    SIGNATURE_KEYS_FIELD,
    REVOKED_SIGNATURES_FIELD,
    STORAGE_FIELDS,
)
from .memory import MemoryClaimStore
from .redis import RedisClaimStore

__all__ = [
    "ClaimIssuerStore",
    "OWNER_FIELD",
    "SIGNATURE_KEYS_FIELD",
    "REVOKED_SIGNATURES_FIELD",
    "STORAGE_FIELDS",
    "MemoryClaimStore",
    "RedisClaimStore",
]
