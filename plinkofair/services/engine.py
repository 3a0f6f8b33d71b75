import logging

from pydantic import BaseModel, ConfigDict

from .errors import DrawBudgetExceeded, InvalidInput
from .fairness import combine_seed, create_commitment, verify_commitment
from .plinko import PathStep, PegMap, generate_peg_map, multipliers, payout, peg_map_hash, simulate_drop
from .rng import RoundRandomSource, draw_count

logger = logging.getLogger(__name__)


class GameResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    peg_map: PegMap
    peg_map_hash: str
    path: tuple[PathStep, ...]
    bin_index: int
    payout_multiplier: float
    payout_cents: int
    rows: int
    combined_seed: str


class VerificationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    server_seed: str
    client_seed: str
    nonce: str
    drop_column: int
    rows: int
    commit_hex: str
    combined_seed: str
    peg_map_hash: str
    bin_index: int
    payout_multiplier: float
    peg_map: PegMap
    path: tuple[PathStep, ...]
    commit_valid: bool | None = None
    peg_map_valid: bool | None = None

    @property
    def ok(self) -> bool:
        return self.commit_valid is not False and self.peg_map_valid is not False


def validate_round_input(drop_column: int, rows: int, stake: int) -> None:
    if isinstance(rows, bool) or not isinstance(rows, int) or rows <= 0:
        raise InvalidInput("row count must be a positive integer")
    if isinstance(drop_column, bool) or not isinstance(drop_column, int) or not 0 <= drop_column <= rows:
        raise InvalidInput(f"drop column must be between 0 and {rows}")
    if isinstance(stake, bool) or not isinstance(stake, int) or stake <= 0:
        raise InvalidInput("stake must be a positive number of minor units")


def play_round(server_secret: str, client_seed: str, nonce: str, drop_column: int, rows: int, stake: int) -> GameResult:
    """Play one round as a pure function of its inputs.

    Order is fixed: combined seed, one random source, peg map, path on the same
    source, then payout. Replaying the same arguments reproduces every draw.
    """
    validate_round_input(drop_column, rows, stake)
    combined = combine_seed(server_secret, client_seed, nonce)

    budget = draw_count(rows)
    rng = RoundRandomSource(combined, max_draws=budget)
    peg_map = generate_peg_map(rng, rows)
    map_hash = peg_map_hash(peg_map)
    path = simulate_drop(rng, peg_map, drop_column, rows)
    if rng.call_count() != budget:
        raise DrawBudgetExceeded(f"round consumed {rng.call_count()} draws, expected {budget}")

    bin_index = path[-1].column
    multiplier = multipliers(rows + 1)[bin_index]
    logger.debug("round played rows=%d draws=%d peg_map_hash=%s bin=%d", rows, budget, map_hash, bin_index)
    return GameResult(
        peg_map=peg_map,
        peg_map_hash=map_hash,
        path=path,
        bin_index=bin_index,
        payout_multiplier=multiplier,
        payout_cents=payout(stake, multiplier),
        rows=rows,
        combined_seed=combined,
    )


def verify_round(
    server_seed: str,
    client_seed: str,
    nonce: str,
    drop_column: int,
    rows: int,
    commitment: str | None = None,
    published_peg_map_hash: str | None = None,
) -> VerificationReport:
    """Replay a revealed round and compare it with what was published."""
    # the stake never changes the outcome, any positive value replays the same path
    result = play_round(server_seed, client_seed, nonce, drop_column, rows, 100)
    commit_valid = None
    if commitment is not None:
        commit_valid = verify_commitment(server_seed, nonce, commitment)
    peg_map_valid = None
    if published_peg_map_hash is not None:
        peg_map_valid = published_peg_map_hash == result.peg_map_hash
    return VerificationReport(
        server_seed=server_seed,
        client_seed=client_seed,
        nonce=nonce,
        drop_column=drop_column,
        rows=rows,
        commit_hex=create_commitment(server_seed, nonce),
        combined_seed=result.combined_seed,
        peg_map_hash=result.peg_map_hash,
        bin_index=result.bin_index,
        payout_multiplier=result.payout_multiplier,
        peg_map=result.peg_map,
        path=result.path,
        commit_valid=commit_valid,
        peg_map_valid=peg_map_valid,
    )
