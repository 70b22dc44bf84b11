"""
Cross-implementation parity fixtures for claim digests and signer commitments.

Writes deterministic vectors that any other implementation of the claim
issuer (including on-chain verifiers) must reproduce byte for byte.
"""

import json
import os
import sys

# Add parent directories to path so we can import claimissuer
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from claimissuer.commitment import claim_digest, signer_commitment
from claimissuer.signature import personal_message_hash

FIXTURE_SUBJECT = "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"
FIXTURE_SIGNER = "0xAb8483F64d9C6d1EcF9b849Ae677dD3315835cb2"

FIXTURE_CLAIMS = [
    {"topic": 42, "data": "0x0010402304"},
    {"topic": 0, "data": "0x"},
    {"topic": 2**256 - 1, "data": "0x" + "ff" * 33},
]


def main():
    vectors = []
    for claim in FIXTURE_CLAIMS:
        digest = claim_digest(FIXTURE_SUBJECT, claim["topic"], claim["data"])
        vectors.append({
            "subject": FIXTURE_SUBJECT,
            "topic": str(claim["topic"]),
            "data": claim["data"],
            "digest": "0x" + digest.hex(),
            "signed_hash": "0x" + personal_message_hash(digest).hex(),
        })

    fixture = {
        "signer": FIXTURE_SIGNER,
        "signer_commitment": "0x" + signer_commitment(FIXTURE_SIGNER).hex(),
        "claims": vectors,
    }

    out_dir = os.path.dirname(os.path.abspath(__file__))
    out_file = os.path.join(out_dir, "vectors.json")
    with open(out_file, "w") as f:
        json.dump(fixture, f, indent=2, sort_keys=True)

    print(f"✅ Generated claim fixtures: {out_file}")
    print(f"   🔍 Signer commitment: {fixture['signer_commitment']}")
    print(f"   📏 Claims: {len(vectors)}")


if __name__ == "__main__":
    main()
