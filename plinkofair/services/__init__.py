from .engine import GameResult, VerificationReport, play_round, verify_round
from .errors import DrawBudgetExceeded, InvalidInput, PlinkoError, RoundNotFound, RoundStateError
from .fairness import combine_seed, create_commitment, generate_nonce, generate_server_secret, verify_commitment

__all__ = [
    "GameResult",
    "VerificationReport",
    "play_round",
    "verify_round",
    "DrawBudgetExceeded",
    "InvalidInput",
    "PlinkoError",
    "RoundNotFound",
    "RoundStateError",
    "combine_seed",
    "create_commitment",
    "generate_nonce",
    "generate_server_secret",
    "verify_commitment",
]
