"""Prometheus metrics for claim validation and trust-state mutations.

A single process-wide ``MetricsRegistry`` owns the collectors so that several
issuers in one process do not register duplicate metric names.
"""
from __future__ import annotations

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, REGISTRY


class MetricsRegistry:
    def __init__(self, registry: CollectorRegistry = REGISTRY):
        self.claim_checks = Counter(
            "claimissuer_claim_checks_total",
            "Claim validity checks by outcome",
            ["status"],
            registry=registry,
        )
        self.mutations = Counter(
            "claimissuer_mutations_total",
            "Successful trust-state mutations",
            ["operation"],
            registry=registry,
        )
        self.authorization_failures = Counter(
            "claimissuer_authorization_failures_total",
            "Mutations rejected with NotAuthorized",
            ["operation"],
            registry=registry,
        )

    def observe_claim_check(self, status: str) -> None:
        self.claim_checks.labels(status=status).inc()

    def observe_mutation(self, operation: str) -> None:
        self.mutations.labels(operation=operation).inc()

    def observe_authorization_failure(self, operation: str) -> None:
        self.authorization_failures.labels(operation=operation).inc()


_registry: Optional[MetricsRegistry] = None


def get_registry() -> MetricsRegistry:
    global _registry
    if _registry is None:
        _registry = MetricsRegistry()
    return _registry


__all__ = ["get_registry", "MetricsRegistry"]
