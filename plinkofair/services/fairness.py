"""Commit-reveal protocol.

The operator publishes ``commitment = sha256(secret:nonce)`` before a round,
the player adds a client seed, and ``sha256(secret:client_seed:nonce)`` drives
every random draw of the round. Revealing the secret lets anyone recompute both.
"""
import hmac, secrets, time

from .errors import InvalidInput
from .rng import extract_prng_seed, sha256_hex

__all__ = [
    "generate_server_secret",
    "generate_nonce",
    "create_commitment",
    "combine_seed",
    "extract_prng_seed",
    "verify_commitment",
]


def _require(name: str, value) -> str:
    if value is None or not isinstance(value, str) or value == "":
        raise InvalidInput(f"{name} is required")
    return value


def generate_server_secret() -> str:
    return secrets.token_hex(32)


def generate_nonce() -> str:
    # millisecond prefix keeps nonces sortable; the random tail keeps them unique
    return f"{time.time_ns() // 1_000_000}{secrets.token_hex(6)}"


def create_commitment(secret: str, nonce: str) -> str:
    _require("server secret", secret)
    _require("nonce", nonce)
    return sha256_hex(f"{secret}:{nonce}")


def combine_seed(secret: str, client_seed: str, nonce: str) -> str:
    _require("server secret", secret)
    _require("client seed", client_seed)
    _require("nonce", nonce)
    return sha256_hex(f"{secret}:{client_seed}:{nonce}")


def verify_commitment(secret: str, nonce: str, commitment) -> bool:
    """True when ``commitment`` is the digest published for (secret, nonce).

    Malformed commitments simply do not match; only a missing secret or nonce raises.
    """
    expected = create_commitment(secret, nonce)
    if not isinstance(commitment, str):
        return False
    return hmac.compare_digest(expected.encode(), commitment.encode(errors="replace"))
