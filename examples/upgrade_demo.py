"""Upgrading a claim issuer in place.

A new ``ClaimIssuer`` attached to an authority's existing Redis storage picks
up the owner, trusted keys and revocations written by the previous release.
Storage must keep the same prefix and field layout across upgrades.

Usage:
    CLAIMISSUER_REDIS_PREFIX=<authority prefix> python examples/upgrade_demo.py
"""

import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from claimissuer import ClaimIssuerConfig, create_claim_issuer
from claimissuer.store import STORAGE_FIELDS


def main():
    logging.basicConfig(level=logging.INFO)

    config = ClaimIssuerConfig.from_env(store_backend="redis")
    issuer = create_claim_issuer(config)

    if not issuer.is_initialized():
        print(f"No claim issuer found at prefix '{config.redis_prefix}'; nothing to upgrade.")
        return 1

    print(f"ClaimIssuer upgraded at {config.redis_url} (prefix '{config.redis_prefix}').")
    print(f"   Storage fields: {', '.join(STORAGE_FIELDS)}")
    print(f"   Owner: {issuer.owner()}")
    issuer.store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
