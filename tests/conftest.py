import pytest
from eth_account import Account
from prometheus_client import CollectorRegistry

from claimissuer import ClaimIssuer
from claimissuer.audit import AuditTrail
from claimissuer.monitoring.metrics_exporter import MetricsRegistry


@pytest.fixture
def owner():
    return Account.create()


@pytest.fixture
def other_account():
    return Account.create()


@pytest.fixture
def signature_key():
    return Account.create()


@pytest.fixture
def subject():
    return Account.create().address


@pytest.fixture
def collector():
    return CollectorRegistry()


@pytest.fixture
def metrics(collector):
    return MetricsRegistry(registry=collector)


@pytest.fixture
def issuer(owner, signature_key, metrics):
    """Issuer bootstrapped with ``owner`` and ``signature_key`` as first trusted key."""
    claim_issuer = ClaimIssuer(metrics=metrics, audit=AuditTrail())
    claim_issuer.initialize(owner.address, signature_key.address)
    return claim_issuer
