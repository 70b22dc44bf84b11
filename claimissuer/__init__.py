"""
claimissuer Python Package

Claim-issuance authority core: trusted signing-key registry, signature
revocation ledger and claim validity checks.
"""

__version__ = "0.1.0"

from .commitment import Claim, claim_digest, signer_commitment
from .config import ClaimIssuerConfig
from .errors import (
    ClaimIssuerError,
    NotAuthorized,
    AlreadyInitialized,
    InvalidIdentity,
    InvalidCommitment,
    InvalidClaim,
    StoreError,
)
from .issuer import ClaimIssuer, create_claim_issuer
from .signature import Secp256k1Verifier, SignatureVerifier, new_signer, sign_claim
from .store import MemoryClaimStore, RedisClaimStore
from .validator import ClaimCheck, ClaimStatus

__all__ = [
    "ClaimIssuer",
    "ClaimIssuerConfig",
    "create_claim_issuer",
    "Claim",
    "claim_digest",
    "signer_commitment",
    "ClaimCheck",
    "ClaimStatus",
    "SignatureVerifier",
    "Secp256k1Verifier",
    "new_signer",
    "sign_claim",
    "MemoryClaimStore",
    "RedisClaimStore",
    "ClaimIssuerError",
    "NotAuthorized",
    "AlreadyInitialized",
    "InvalidIdentity",
    "InvalidCommitment",
    "InvalidClaim",
    "StoreError",
]
