"""
Configuration for building claim issuers.
"""

import os
from dataclasses import dataclass, replace
from typing import Any

STORE_BACKENDS = ("memory", "redis")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class ClaimIssuerConfig:
    """Configuration for a claim issuer instance."""
    store_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    redis_prefix: str = "claimissuer"
    enable_metrics: bool = True
    enable_audit: bool = True

    def __post_init__(self):
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"Unknown store backend '{self.store_backend}', expected one of {STORE_BACKENDS}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClaimIssuerConfig":
        """Build a config from CLAIMISSUER_* environment variables."""
        config = cls(
            store_backend=os.getenv("CLAIMISSUER_STORE_BACKEND", cls.store_backend),
            redis_url=os.getenv("CLAIMISSUER_REDIS_URL", cls.redis_url),
            redis_prefix=os.getenv("CLAIMISSUER_REDIS_PREFIX", cls.redis_prefix),
            enable_metrics=_env_flag("CLAIMISSUER_METRICS", cls.enable_metrics),
            enable_audit=_env_flag("CLAIMISSUER_AUDIT", cls.enable_audit),
        )
        return replace(config, **overrides) if overrides else config


__all__ = ["ClaimIssuerConfig", "STORE_BACKENDS"]
