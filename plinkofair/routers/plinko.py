from fastapi import APIRouter, Query

from .. import config
from ..services.engine import VerificationReport, verify_round
from ..services.plinko import multipliers

router = APIRouter(tags=["plinko"])


@router.get("/plinko/paytable")
def paytable(rows: int = Query(default=config.PLINKO_ROWS, gt=0, le=config.PLINKO_MAX_ROWS)):
    return {"rows": rows, "bins": rows + 1, "multipliers": multipliers(rows + 1)}


@router.get("/verify", response_model=VerificationReport)
def verify(
    server_seed: str = Query(min_length=1),
    client_seed: str = Query(min_length=1),
    nonce: str = Query(min_length=1),
    drop_column: int = Query(ge=0),
    rows: int = Query(default=config.PLINKO_ROWS, gt=0, le=config.PLINKO_MAX_ROWS),
    commitment: str | None = None,
    peg_map_hash: str | None = None,
):
    return verify_round(server_seed, client_seed, nonce, drop_column, rows, commitment, peg_map_hash)
