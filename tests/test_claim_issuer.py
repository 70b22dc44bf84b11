"""
Tests for the ClaimIssuer authority: deployment, key management, revocation
and claim validity.
"""

import threading

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from claimissuer import (
    AlreadyInitialized,
    ClaimIssuer,
    InvalidCommitment,
    InvalidIdentity,
    NotAuthorized,
    claim_digest,
    sign_claim,
    signer_commitment,
)
from claimissuer.store import MemoryClaimStore

CLAIM_DATA = bytes.fromhex("0010402304")


class TestDeployment:

    def test_sets_owner(self, issuer, owner):
        assert issuer.owner() == owner.address
        assert issuer.is_initialized()

    def test_sets_first_signature_key(self, issuer, signature_key):
        assert issuer.is_signature_key_allowed(signer_commitment(signature_key.address))

    def test_second_initialize_fails_without_state_change(self, issuer, owner, other_account):
        with pytest.raises(AlreadyInitialized):
            issuer.initialize(other_account.address, other_account.address)
        assert issuer.owner() == owner.address
        assert not issuer.is_signature_key_allowed(signer_commitment(other_account.address))

    def test_uninitialized_issuer_rejects_mutations(self, other_account):
        fresh = ClaimIssuer()
        assert fresh.owner() is None
        assert not fresh.is_initialized()
        with pytest.raises(NotAuthorized):
            fresh.add_signature_key(other_account.address, signer_commitment(other_account.address))
        with pytest.raises(NotAuthorized):
            fresh.revoke_signature(other_account.address, "0x0010")

    def test_second_initialize_with_malformed_identity_reports_already_initialized(self, issuer, owner):
        with pytest.raises(AlreadyInitialized):
            issuer.initialize("not-an-address", "also-not-an-address")
        assert issuer.owner() == owner.address

    def test_initialize_rejects_malformed_owner(self, signature_key):
        fresh = ClaimIssuer()
        with pytest.raises(InvalidIdentity):
            fresh.initialize("not-an-address", signature_key.address)
        assert not fresh.is_initialized()

    def test_independent_authorities_do_not_share_state(self, issuer, other_account, signature_key):
        second = ClaimIssuer()
        second.initialize(other_account.address, other_account.address)
        assert not second.is_signature_key_allowed(signer_commitment(signature_key.address))
        assert issuer.is_signature_key_allowed(signer_commitment(signature_key.address))

    def test_new_issuer_over_existing_store_keeps_state(self, owner, signature_key):
        store = MemoryClaimStore()
        first = ClaimIssuer(store=store)
        first.initialize(owner.address, signature_key.address)
        first.revoke_signature(owner.address, "0x0010")

        upgraded = ClaimIssuer(store=store)
        assert upgraded.owner() == owner.address
        assert upgraded.is_signature_key_allowed(signer_commitment(signature_key.address))
        assert upgraded.is_signature_revoked("0x0010")
        with pytest.raises(AlreadyInitialized):
            upgraded.initialize(owner.address, signature_key.address)


class TestManagingSignatureKeys:

    def test_non_owner_add_is_rejected(self, issuer, other_account):
        new_key = signer_commitment(Account.create().address)
        with pytest.raises(NotAuthorized):
            issuer.add_signature_key(other_account.address, new_key)
        assert not issuer.is_signature_key_allowed(new_key)

    def test_non_owner_remove_is_rejected(self, issuer, other_account, signature_key):
        key = signer_commitment(signature_key.address)
        with pytest.raises(NotAuthorized):
            issuer.remove_signature_key(other_account.address, key)
        assert issuer.is_signature_key_allowed(key)

    def test_owner_adds_key(self, issuer, owner):
        new_key = signer_commitment(Account.create().address)
        issuer.add_signature_key(owner.address, new_key)
        assert issuer.is_signature_key_allowed(new_key)

    def test_owner_removes_key(self, issuer, owner, signature_key):
        key = signer_commitment(signature_key.address)
        issuer.remove_signature_key(owner.address, key)
        assert not issuer.is_signature_key_allowed(key)

    def test_add_and_remove_are_idempotent(self, issuer, owner):
        new_key = signer_commitment(Account.create().address)
        issuer.add_signature_key(owner.address, new_key)
        issuer.add_signature_key(owner.address, new_key)
        assert issuer.is_signature_key_allowed(new_key)
        issuer.remove_signature_key(owner.address, new_key)
        issuer.remove_signature_key(owner.address, new_key)
        assert not issuer.is_signature_key_allowed(new_key)

    def test_owner_match_ignores_address_case(self, issuer, owner):
        new_key = signer_commitment(Account.create().address)
        issuer.add_signature_key(owner.address.lower(), new_key)
        assert issuer.is_signature_key_allowed(new_key)

    def test_hex_commitment_accepted(self, issuer, owner):
        new_key = signer_commitment(Account.create().address)
        issuer.add_signature_key(owner.address, "0x" + new_key.hex())
        assert issuer.is_signature_key_allowed(new_key)

    def test_wrong_width_commitment_rejected_after_auth(self, issuer, owner, other_account):
        with pytest.raises(NotAuthorized):
            issuer.add_signature_key(other_account.address, b"\x01" * 20)
        with pytest.raises(InvalidCommitment):
            issuer.add_signature_key(owner.address, b"\x01" * 20)

    def test_malformed_caller_is_not_authorized(self, issuer):
        with pytest.raises(NotAuthorized):
            issuer.add_signature_key("0x1234", b"\x01" * 32)


class TestManagingSignatures:

    def test_non_owner_revoke_is_rejected(self, issuer, other_account):
        with pytest.raises(NotAuthorized):
            issuer.revoke_signature(other_account.address, "0x0010")
        assert not issuer.is_signature_revoked("0x0010")

    def test_owner_revokes_signature(self, issuer, owner):
        issuer.revoke_signature(owner.address, "0x0010")
        assert issuer.is_signature_revoked("0x0010")
        assert issuer.is_signature_revoked(b"\x00\x10")

    def test_revocation_is_idempotent_and_monotonic(self, issuer, owner, other_account):
        issuer.revoke_signature(owner.address, "0x0010")
        issuer.revoke_signature(owner.address, "0x0010")
        issuer.add_signature_key(owner.address, signer_commitment(other_account.address))
        issuer.transfer_ownership(owner.address, other_account.address)
        assert issuer.is_signature_revoked("0x0010")


class TestOwnership:

    def test_transfer_moves_mutation_rights(self, issuer, owner, other_account):
        issuer.transfer_ownership(owner.address, other_account.address)
        assert issuer.owner() == other_account.address
        with pytest.raises(NotAuthorized):
            issuer.revoke_signature(owner.address, "0x0010")
        issuer.revoke_signature(other_account.address, "0x0010")
        assert issuer.is_signature_revoked("0x0010")

    def test_non_owner_cannot_transfer(self, issuer, owner, other_account):
        with pytest.raises(NotAuthorized):
            issuer.transfer_ownership(other_account.address, other_account.address)
        assert issuer.owner() == owner.address

    def test_transfer_to_malformed_identity_rejected(self, issuer, owner):
        with pytest.raises(InvalidIdentity):
            issuer.transfer_ownership(owner.address, "0x00")
        assert issuer.owner() == owner.address


class TestCheckingClaimValidity:

    def test_wrong_signature_length(self, issuer, subject):
        assert issuer.is_claim_valid(subject, 42, b"", "0x0010") is False

    def test_signature_from_unknown_key(self, issuer, subject):
        unknown = Account.create()
        signature = Account.sign_message(encode_defunct(text="0x0000"), unknown.key).signature
        assert issuer.is_claim_valid(subject, 42, b"", bytes(signature)) is False

    def test_revoked_claim(self, issuer, owner, signature_key, subject):
        signature = sign_claim(signature_key.key, subject, 42, CLAIM_DATA)
        issuer.revoke_signature(owner.address, signature)
        assert issuer.is_claim_valid(subject, 42, CLAIM_DATA, signature) is False
        assert issuer.is_signature_key_allowed(signer_commitment(signature_key.address))

    def test_valid_claim(self, issuer, signature_key, subject):
        signature = sign_claim(signature_key.key, subject, 42, CLAIM_DATA)
        assert issuer.is_claim_valid(subject, 42, CLAIM_DATA, signature) is True
        assert issuer.is_claim_valid(subject, 42, "0x0010402304", "0x" + signature.hex()) is True

    def test_claim_invalid_after_key_removed(self, issuer, owner, signature_key, subject):
        signature = sign_claim(signature_key.key, subject, 42, CLAIM_DATA)
        issuer.remove_signature_key(owner.address, signer_commitment(signature_key.address))
        assert issuer.is_claim_valid(subject, 42, CLAIM_DATA, signature) is False

    def test_claim_from_added_key(self, issuer, owner, subject):
        new_key = Account.create()
        signature = sign_claim(new_key.key, subject, 7, b"")
        assert issuer.is_claim_valid(subject, 7, b"", signature) is False
        issuer.add_signature_key(owner.address, signer_commitment(new_key.address))
        assert issuer.is_claim_valid(subject, 7, b"", signature) is True

    def test_signature_over_hex_string_digest_rejected(self, issuer, signature_key, subject):
        digest = claim_digest(subject, 42, CLAIM_DATA)
        signed = Account.sign_message(encode_defunct(text="0x" + digest.hex()), signature_key.key)
        assert issuer.is_claim_valid(subject, 42, CLAIM_DATA, bytes(signed.signature)) is False

    def test_signature_does_not_transfer_to_other_claim(self, issuer, signature_key, subject):
        signature = sign_claim(signature_key.key, subject, 42, CLAIM_DATA)
        assert issuer.is_claim_valid(subject, 43, CLAIM_DATA, signature) is False
        assert issuer.is_claim_valid(subject, 42, CLAIM_DATA + b"\x00", signature) is False
        assert issuer.is_claim_valid(Account.create().address, 42, CLAIM_DATA, signature) is False


def test_concrete_scenario(owner, other_account, signature_key):
    issuer = ClaimIssuer()
    issuer.initialize(owner.address, signature_key.address)
    assert issuer.is_signature_key_allowed(signer_commitment(signature_key.address))

    outsider_key = signer_commitment(Account.create().address)
    with pytest.raises(NotAuthorized):
        issuer.add_signature_key(other_account.address, outsider_key)
    assert issuer.is_signature_key_allowed(outsider_key) is False

    issuer.revoke_signature(owner.address, "0x0010")
    assert issuer.is_signature_revoked("0x0010") is True


def test_concurrent_readers_see_consistent_answers(issuer, owner, signature_key, subject):
    signature = sign_claim(signature_key.key, subject, 42, CLAIM_DATA)
    key = signer_commitment(signature_key.address)
    errors = []
    results = []

    def reader():
        try:
            for _ in range(200):
                results.append(issuer.is_claim_valid(subject, 42, CLAIM_DATA, signature))
        except Exception as e:
            errors.append(e)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for thread in readers:
        thread.start()
    for _ in range(50):
        issuer.remove_signature_key(owner.address, key)
        issuer.add_signature_key(owner.address, key)
    issuer.revoke_signature(owner.address, signature)
    for thread in readers:
        thread.join()

    assert errors == []
    assert len(results) == 800
    assert all(isinstance(result, bool) for result in results)
    assert issuer.is_claim_valid(subject, 42, CLAIM_DATA, signature) is False
