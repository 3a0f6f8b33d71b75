from __future__ import annotations

import re

import pytest

from plinkofair.services import fairness
from plinkofair.services.errors import InvalidInput

from .conftest import CLIENT_SEED, COMBINED_SEED, COMMIT_HEX, NONCE, SERVER_SEED

HEX64 = re.compile(r"^[0-9a-f]{64}$")


def test_commitment_matches_published_vector():
    assert fairness.create_commitment(SERVER_SEED, NONCE) == COMMIT_HEX


def test_combined_seed_matches_published_vector():
    assert fairness.combine_seed(SERVER_SEED, CLIENT_SEED, NONCE) == COMBINED_SEED


def test_extract_seed_reexported():
    assert fairness.extract_prng_seed(COMBINED_SEED) == 0xE1DDDF77


def test_server_secrets_are_fresh_hex():
    a, b = fairness.generate_server_secret(), fairness.generate_server_secret()
    assert HEX64.match(a) and HEX64.match(b)
    assert a != b


def test_nonces_are_unique():
    nonces = {fairness.generate_nonce() for _ in range(100)}
    assert len(nonces) == 100
    assert all(nonces)


def test_digests_are_pure():
    assert fairness.combine_seed("s", "c", "n") == fairness.combine_seed("s", "c", "n")
    assert fairness.create_commitment("s", "n") == fairness.create_commitment("s", "n")


@pytest.mark.parametrize("secret, client, nonce", [
    (SERVER_SEED[:-1] + "d", CLIENT_SEED, NONCE),
    (SERVER_SEED, "candidate-hellp", NONCE),
    (SERVER_SEED, CLIENT_SEED, "43"),
])
def test_any_changed_input_changes_combined_seed(secret, client, nonce):
    assert fairness.combine_seed(secret, client, nonce) != COMBINED_SEED


def test_verify_commitment():
    assert fairness.verify_commitment(SERVER_SEED, NONCE, COMMIT_HEX)
    assert not fairness.verify_commitment(SERVER_SEED, "43", COMMIT_HEX)
    assert not fairness.verify_commitment(SERVER_SEED, NONCE, "wrong_hash")


@pytest.mark.parametrize("commitment", ["", "é" * 64, None, 12345, COMMIT_HEX.upper()])
def test_verify_commitment_malformed_is_false_not_error(commitment):
    assert fairness.verify_commitment(SERVER_SEED, NONCE, commitment) is False


@pytest.mark.parametrize("secret, nonce", [("", NONCE), (SERVER_SEED, ""), (None, NONCE), (SERVER_SEED, None)])
def test_missing_secret_or_nonce_is_rejected(secret, nonce):
    with pytest.raises(InvalidInput):
        fairness.verify_commitment(secret, nonce, COMMIT_HEX)
    with pytest.raises(InvalidInput):
        fairness.create_commitment(secret, nonce)


def test_empty_client_seed_is_rejected():
    with pytest.raises(InvalidInput):
        fairness.combine_seed(SERVER_SEED, "", NONCE)
