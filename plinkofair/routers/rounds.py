from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from .. import config
from ..deps.store import get_store
from ..services import rounds as lifecycle
from ..services.rounds import RoundStore

router = APIRouter(prefix="/rounds", tags=["rounds"])


class CommitIn(BaseModel):
    rows: int = Field(default=config.PLINKO_ROWS, gt=0, le=config.PLINKO_MAX_ROWS)


class StartIn(BaseModel):
    client_seed: str = Field(min_length=1, max_length=256)
    bet_cents: int = Field(gt=0)
    drop_column: int = Field(ge=0)


@router.post("/commit")
def commit_round(data: CommitIn | None = None, store: RoundStore = Depends(get_store)):
    rows = data.rows if data is not None else config.PLINKO_ROWS
    record = lifecycle.commit_round(store, rows)
    # the server seed stays in the store until reveal
    return {"round_id": record.id, "commit_hex": record.commit_hex, "nonce": record.nonce, "rows": record.rows}


@router.post("/{round_id}/start")
def start_round(round_id: str, data: StartIn, store: RoundStore = Depends(get_store)):
    record, result = lifecycle.start_round(store, round_id, data.client_seed, data.drop_column, data.bet_cents)
    body = lifecycle.public_view(record)
    body["round_id"] = record.id
    body["peg_map"] = result.peg_map
    body["path"] = [step.model_dump() for step in result.path]
    body["win_amount"] = result.payout_cents
    return body


@router.post("/{round_id}/reveal")
def reveal_round(round_id: str, store: RoundStore = Depends(get_store)):
    record, is_valid = lifecycle.reveal_round(store, round_id)
    return {
        "round_id": record.id,
        "server_seed": record.server_seed,
        "nonce": record.nonce,
        "client_seed": record.client_seed,
        "combined_seed": record.combined_seed,
        "commit_hex": record.commit_hex,
        "is_valid": is_valid,
        "revealed_at": record.revealed_at,
    }


@router.get("/{round_id}")
def get_round(round_id: str, store: RoundStore = Depends(get_store)):
    return lifecycle.public_view(lifecycle.get_round(store, round_id))
