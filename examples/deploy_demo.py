"""
Example: Bootstrapping a Claim Issuer

This example demonstrates:
- Creating an issuer from environment configuration
- One-time initialization with an owner and a random signature key
- Issuing (signing) a claim off-system and validating it
- Revoking that single claim
"""

import logging
import os
import sys

# Add parent directory to path so we can import claimissuer
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from claimissuer import (
    ClaimIssuerConfig,
    create_claim_issuer,
    new_signer,
    sign_claim,
    signer_commitment,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    print("🔐 Claim Issuer Deployment Demo")
    print("=" * 50)

    owner = new_signer()
    signature_key = new_signer()

    issuer = create_claim_issuer(ClaimIssuerConfig.from_env())
    issuer.initialize(owner.address, signature_key.address)

    print(f"\nClaimIssuer deployed with owner {owner.address}")
    print(f"   Signature key: {signature_key.address}")
    print(f"   Signature key private key: 0x{signature_key.key.hex().removeprefix('0x')}")
    print(f"   Key allowed: {issuer.is_signature_key_allowed(signer_commitment(signature_key.address))}")

    subject = new_signer().address
    topic = 42
    data = bytes.fromhex("0010402304")
    signature = sign_claim(signature_key.key, subject, topic, data)

    print(f"\nClaim about {subject} (topic {topic})")
    print(f"   Signature: 0x{signature.hex()}")
    print(f"   Valid: {issuer.is_claim_valid(subject, topic, data, signature)}")

    issuer.revoke_signature(owner.address, signature)
    print("\nAfter revoking the signature:")
    print(f"   Valid: {issuer.is_claim_valid(subject, topic, data, signature)}")
    print(f"   Key still allowed: {issuer.is_signature_key_allowed(signer_commitment(signature_key.address))}")


if __name__ == "__main__":
    main()
