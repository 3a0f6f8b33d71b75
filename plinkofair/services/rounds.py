import logging, uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, Field

from .engine import GameResult, play_round, validate_round_input
from .errors import RoundNotFound, RoundStateError
from .fairness import create_commitment, generate_nonce, generate_server_secret, verify_commitment
from .plinko import PathStep, payout

logger = logging.getLogger(__name__)


class RoundStatus(str, Enum):
    CREATED = "CREATED"
    STARTED = "STARTED"
    REVEALED = "REVEALED"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RoundRecord(BaseModel):
    id: str
    status: RoundStatus = RoundStatus.CREATED
    nonce: str
    commit_hex: str
    server_seed: str
    client_seed: str = ""
    combined_seed: str = ""
    peg_map_hash: str = ""
    rows: int
    drop_column: int = 0
    bin_index: int = 0
    payout_multiplier: float = 0.0
    bet_cents: int = 0
    path: list[PathStep] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    revealed_at: datetime | None = None


class RoundStore(Protocol):
    def insert(self, record: RoundRecord) -> None: ...

    def get(self, round_id: str) -> RoundRecord | None: ...

    def replace(self, record: RoundRecord, expected: RoundStatus) -> bool:
        """Store ``record`` only if the stored round is still in ``expected``."""
        ...


def commit_round(store: RoundStore, rows: int) -> RoundRecord:
    secret = generate_server_secret()
    nonce = generate_nonce()
    record = RoundRecord(
        id=uuid.uuid4().hex,
        nonce=nonce,
        commit_hex=create_commitment(secret, nonce),
        server_seed=secret,
        rows=rows,
    )
    store.insert(record)
    logger.info("round %s committed rows=%d", record.id, rows)
    return record


def get_round(store: RoundStore, round_id: str) -> RoundRecord:
    record = store.get(round_id)
    if record is None:
        raise RoundNotFound(f"round {round_id} not found")
    return record


def start_round(store: RoundStore, round_id: str, client_seed: str, drop_column: int, bet_cents: int) -> tuple[RoundRecord, GameResult]:
    record = get_round(store, round_id)
    validate_round_input(drop_column, record.rows, bet_cents)
    if record.status is not RoundStatus.CREATED:
        raise RoundStateError(f"round {round_id} has already been started")

    result = play_round(record.server_seed, client_seed, record.nonce, drop_column, record.rows, bet_cents)
    started = record.model_copy(update={
        "status": RoundStatus.STARTED,
        "client_seed": client_seed,
        "combined_seed": result.combined_seed,
        "peg_map_hash": result.peg_map_hash,
        "drop_column": drop_column,
        "bin_index": result.bin_index,
        "payout_multiplier": result.payout_multiplier,
        "bet_cents": bet_cents,
        "path": list(result.path),
    })
    if not store.replace(started, expected=RoundStatus.CREATED):
        raise RoundStateError(f"round {round_id} has already been started")
    logger.info("round %s started bin=%d multiplier=%s", round_id, result.bin_index, result.payout_multiplier)
    return started, result


def reveal_round(store: RoundStore, round_id: str) -> tuple[RoundRecord, bool]:
    record = get_round(store, round_id)
    if record.status is not RoundStatus.STARTED:
        raise RoundStateError(f"round {round_id} must be started before revealing")
    revealed = record.model_copy(update={"status": RoundStatus.REVEALED, "revealed_at": _now()})
    if not store.replace(revealed, expected=RoundStatus.STARTED):
        raise RoundStateError(f"round {round_id} must be started before revealing")
    logger.info("round %s revealed", round_id)
    return revealed, verify_commitment(revealed.server_seed, revealed.nonce, revealed.commit_hex)


def public_view(record: RoundRecord) -> dict:
    """What may be disclosed for a round in its current status."""
    view = {
        "id": record.id,
        "created_at": record.created_at,
        "status": record.status.value,
        "nonce": record.nonce,
        "commit_hex": record.commit_hex,
        "rows": record.rows,
    }
    if record.status in (RoundStatus.STARTED, RoundStatus.REVEALED):
        view.update(
            client_seed=record.client_seed,
            combined_seed=record.combined_seed,
            peg_map_hash=record.peg_map_hash,
            drop_column=record.drop_column,
            bin_index=record.bin_index,
            payout_multiplier=record.payout_multiplier,
            bet_cents=record.bet_cents,
            path=[step.model_dump() for step in record.path],
            win_amount=payout(record.bet_cents, record.payout_multiplier),
        )
    if record.status is RoundStatus.REVEALED:
        view.update(server_seed=record.server_seed, revealed_at=record.revealed_at)
    return view
