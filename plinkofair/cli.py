"""Replay a revealed round offline and check it against the published values.

    plinkofair-verify --server-seed S --client-seed C --nonce N --drop-column 6 \
        --commitment <commit hex> --peg-map-hash <peg map hash>
"""
from __future__ import annotations

import argparse
import logging
import sys

from . import config
from .services.engine import verify_round
from .services.errors import InvalidInput

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="plinkofair-verify", description=__doc__.splitlines()[0])
    p.add_argument("--server-seed", required=True, help="revealed server secret")
    p.add_argument("--client-seed", required=True)
    p.add_argument("--nonce", required=True)
    p.add_argument("--drop-column", type=int, required=True)
    p.add_argument("--rows", type=int, default=config.PLINKO_ROWS)
    p.add_argument("--commitment", help="commit hex published before the round")
    p.add_argument("--peg-map-hash", help="peg map hash published when the round started")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL)
    if not 0 < args.rows <= config.PLINKO_MAX_ROWS:
        print(f"error: --rows must be between 1 and {config.PLINKO_MAX_ROWS}", file=sys.stderr)
        return 2
    try:
        report = verify_round(
            args.server_seed,
            args.client_seed,
            args.nonce,
            args.drop_column,
            args.rows,
            commitment=args.commitment,
            published_peg_map_hash=args.peg_map_hash,
        )
    except InvalidInput as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(report.model_dump_json(indent=2))
    if not report.ok:
        logger.warning("published values do not match the replay")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
