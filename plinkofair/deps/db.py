import json, pyodbc
from contextlib import contextmanager
from datetime import datetime, timezone

from ..services.plinko import PathStep
from ..services.rounds import RoundRecord, RoundStatus

SCHEMA_SQL = """
IF OBJECT_ID(N'dbo.PlinkoRounds', N'U') IS NULL
CREATE TABLE dbo.PlinkoRounds (
  Id               CHAR(32)       NOT NULL PRIMARY KEY,
  Status           NVARCHAR(16)   NOT NULL,
  Nonce            NVARCHAR(128)  NOT NULL,
  CommitHex        CHAR(64)       NOT NULL,
  ServerSeed       NVARCHAR(256)  NOT NULL,
  ClientSeed       NVARCHAR(256)  NOT NULL,
  CombinedSeed     NVARCHAR(64)   NOT NULL,
  PegMapHash       NVARCHAR(64)   NOT NULL,
  BoardRows        INT            NOT NULL,
  DropColumn       INT            NOT NULL,
  BinIndex         INT            NOT NULL,
  PayoutMultiplier FLOAT          NOT NULL,
  BetCents         BIGINT         NOT NULL,
  PathJson         NVARCHAR(MAX)  NOT NULL,
  CreatedAt        DATETIME2      NOT NULL,
  RevealedAt       DATETIME2      NULL
);
"""

COLUMNS = (
    "Id", "Status", "Nonce", "CommitHex", "ServerSeed", "ClientSeed", "CombinedSeed",
    "PegMapHash", "BoardRows", "DropColumn", "BinIndex", "PayoutMultiplier", "BetCents",
    "PathJson", "CreatedAt", "RevealedAt",
)


@contextmanager
def get_conn(dsn: str, connect=pyodbc.connect):
    conn = connect(dsn, autocommit=False)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def exec_tsql(conn, sql: str, params: tuple = ()):
    cur = conn.cursor()
    cur.execute(sql, params)
    try:
        rows = cur.fetchall()
    except pyodbc.ProgrammingError:
        rows = []
    return rows


def exec_update(conn, sql: str, params: tuple = ()) -> int:
    cur = conn.cursor()
    cur.execute(sql, params)
    return cur.rowcount


def _utc_naive(value: datetime | None):
    # DATETIME2 has no offset; rounds are stored in UTC
    if value is None:
        return None
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _params(r: RoundRecord) -> tuple:
    path = json.dumps([step.model_dump() for step in r.path], separators=(",", ":"))
    return (
        r.id, r.status.value, r.nonce, r.commit_hex, r.server_seed, r.client_seed, r.combined_seed,
        r.peg_map_hash, r.rows, r.drop_column, r.bin_index, r.payout_multiplier, r.bet_cents,
        path, _utc_naive(r.created_at), _utc_naive(r.revealed_at),
    )


def _record(row) -> RoundRecord:
    values = dict(zip(COLUMNS, row))
    revealed = values["RevealedAt"]
    return RoundRecord(
        id=values["Id"].strip(),
        status=RoundStatus(values["Status"]),
        nonce=values["Nonce"],
        commit_hex=values["CommitHex"].strip(),
        server_seed=values["ServerSeed"],
        client_seed=values["ClientSeed"],
        combined_seed=values["CombinedSeed"],
        peg_map_hash=values["PegMapHash"],
        rows=values["BoardRows"],
        drop_column=values["DropColumn"],
        bin_index=values["BinIndex"],
        payout_multiplier=values["PayoutMultiplier"],
        bet_cents=values["BetCents"],
        path=[PathStep(**step) for step in json.loads(values["PathJson"])],
        created_at=values["CreatedAt"].replace(tzinfo=timezone.utc),
        revealed_at=None if revealed is None else revealed.replace(tzinfo=timezone.utc),
    )


class SqlRoundStore:
    """Rounds in ``dbo.PlinkoRounds``; status changes are guarded in the WHERE clause."""

    def __init__(self, dsn: str, connect=pyodbc.connect):
        self.dsn = dsn
        self._connect = connect

    def create_schema(self) -> None:
        with get_conn(self.dsn, self._connect) as conn:
            exec_tsql(conn, SCHEMA_SQL)

    def insert(self, record: RoundRecord) -> None:
        marks = ", ".join("?" for _ in COLUMNS)
        sql = f"INSERT INTO dbo.PlinkoRounds ({', '.join(COLUMNS)}) VALUES ({marks});"
        with get_conn(self.dsn, self._connect) as conn:
            exec_update(conn, sql, _params(record))

    def get(self, round_id: str) -> RoundRecord | None:
        sql = f"SELECT {', '.join(COLUMNS)} FROM dbo.PlinkoRounds WHERE Id = ?;"
        with get_conn(self.dsn, self._connect) as conn:
            rows = exec_tsql(conn, sql, (round_id,))
        if not rows:
            return None
        return _record(rows[0])

    def replace(self, record: RoundRecord, expected: RoundStatus) -> bool:
        assignments = ", ".join(f"{c} = ?" for c in COLUMNS[1:])
        sql = f"UPDATE dbo.PlinkoRounds SET {assignments} WHERE Id = ? AND Status = ?;"
        params = _params(record)[1:] + (record.id, expected.value)
        with get_conn(self.dsn, self._connect) as conn:
            return exec_update(conn, sql, params) == 1
