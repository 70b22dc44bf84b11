"""Redis-backed claim issuer store.

Keys (``prefix`` defaults to ``claimissuer``):
 - ``{prefix}:owner``               string, checksum address of the owner
 - ``{prefix}:signature_keys``      set of 32-byte trusted signer commitments
 - ``{prefix}:revoked_signatures``  set of raw revoked signature bytes

Bootstrap runs as a Lua script so the "no owner yet" check and the two writes
happen atomically. Snapshot reads use MULTI/EXEC pipelines.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import redis
from redis.exceptions import RedisError

from ..errors import StoreError
from .base import (
    ClaimIssuerStore,
    OWNER_FIELD,
    REVOKED_SIGNATURES_FIELD,
    SIGNATURE_KEYS_FIELD,
)

logger = logging.getLogger(__name__)


class RedisClaimStore(ClaimIssuerStore):
    """Durable store for one authority, shared by every process using the same prefix."""

    _LUA_INITIALIZE = """
    local owner_key = KEYS[1]
    local keys_key = KEYS[2]
    if redis.call('EXISTS', owner_key) == 1 then
        return 0
    end
    redis.call('SET', owner_key, ARGV[1])
    redis.call('SADD', keys_key, ARGV[2])
    return 1
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        prefix: str = "claimissuer",
        client: Optional[redis.Redis] = None,
    ):
        self.url = url
        self.prefix = prefix.rstrip(":")
        self._client = client
        self._init_script = None

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(self.url)
        return self._client

    # Key helpers
    def _key(self, field: str) -> str:
        return f"{self.prefix}:{field}"

    @property
    def owner_key(self) -> str:
        return self._key(OWNER_FIELD)

    @property
    def signature_keys_key(self) -> str:
        return self._key(SIGNATURE_KEYS_FIELD)

    @property
    def revoked_signatures_key(self) -> str:
        return self._key(REVOKED_SIGNATURES_FIELD)

    def _fail(self, operation: str, error: Exception) -> StoreError:
        logger.error(f"Redis {operation} failed for prefix {self.prefix}: {error}")
        return StoreError(f"redis {operation} failed: {error}", {"prefix": self.prefix})

    def get_owner(self) -> Optional[str]:
        try:
            raw = self._get_client().get(self.owner_key)
        except RedisError as e:
            raise self._fail("get_owner", e)
        if raw is None:
            return None
        return raw.decode("ascii") if isinstance(raw, bytes) else raw

    def initialize(self, owner: str, commitment: bytes) -> bool:
        try:
            if self._init_script is None:
                self._init_script = self._get_client().register_script(self._LUA_INITIALIZE)
            result = self._init_script(
                keys=[self.owner_key, self.signature_keys_key],
                args=[owner, commitment],
            )
        except RedisError as e:
            raise self._fail("initialize", e)
        return int(result) == 1

    def set_owner(self, owner: str) -> None:
        try:
            self._get_client().set(self.owner_key, owner)
        except RedisError as e:
            raise self._fail("set_owner", e)

    def add_key(self, commitment: bytes) -> None:
        try:
            self._get_client().sadd(self.signature_keys_key, commitment)
        except RedisError as e:
            raise self._fail("add_key", e)

    def remove_key(self, commitment: bytes) -> None:
        try:
            self._get_client().srem(self.signature_keys_key, commitment)
        except RedisError as e:
            raise self._fail("remove_key", e)

    def is_key_allowed(self, commitment: bytes) -> bool:
        try:
            return bool(self._get_client().sismember(self.signature_keys_key, commitment))
        except RedisError as e:
            raise self._fail("is_key_allowed", e)

    def revoke(self, signature: bytes) -> None:
        try:
            self._get_client().sadd(self.revoked_signatures_key, signature)
        except RedisError as e:
            raise self._fail("revoke", e)

    def is_revoked(self, signature: bytes) -> bool:
        try:
            return bool(self._get_client().sismember(self.revoked_signatures_key, signature))
        except RedisError as e:
            raise self._fail("is_revoked", e)

    def claim_status(self, commitment: bytes, signature: bytes) -> Tuple[bool, bool]:
        try:
            pipe = self._get_client().pipeline(transaction=True)
            pipe.sismember(self.signature_keys_key, commitment)
            pipe.sismember(self.revoked_signatures_key, signature)
            trusted, revoked = pipe.execute()
        except RedisError as e:
            raise self._fail("claim_status", e)
        return bool(trusted), bool(revoked)

    def clear(self) -> int:
        """Delete this authority's keys. Intended for tests."""
        try:
            return self._get_client().delete(
                self.owner_key, self.signature_keys_key, self.revoked_signatures_key
            )
        except RedisError as e:
            raise self._fail("clear", e)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


__all__ = ["RedisClaimStore"]
