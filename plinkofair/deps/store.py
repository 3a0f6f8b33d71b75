import logging, threading
from functools import lru_cache

from .. import config
from ..services.rounds import RoundRecord, RoundStatus, RoundStore

logger = logging.getLogger(__name__)


class MemoryRoundStore:
    """Rounds kept in process memory; one lock serialises every write."""

    def __init__(self):
        self._rounds: dict[str, RoundRecord] = {}
        self._lock = threading.Lock()

    def insert(self, record: RoundRecord) -> None:
        with self._lock:
            if record.id in self._rounds:
                raise KeyError(f"round {record.id} already exists")
            self._rounds[record.id] = record.model_copy(deep=True)

    def get(self, round_id: str) -> RoundRecord | None:
        with self._lock:
            record = self._rounds.get(round_id)
            return None if record is None else record.model_copy(deep=True)

    def replace(self, record: RoundRecord, expected: RoundStatus) -> bool:
        with self._lock:
            current = self._rounds.get(record.id)
            if current is None or current.status is not expected:
                return False
            self._rounds[record.id] = record.model_copy(deep=True)
            return True


@lru_cache(maxsize=1)
def get_store() -> RoundStore:
    if config.DB_DSN:
        from .db import SqlRoundStore  # needs the ODBC driver manager at import time
        logger.info("using SQL Server round store")
        store = SqlRoundStore(config.DB_DSN)
        store.create_schema()
        return store
    logger.info("DB_DSN not set; rounds are kept in memory")
    return MemoryRoundStore()
