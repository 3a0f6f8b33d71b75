import os, logging
from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s=%r must be positive; using %d", name, raw, default)
        return default
    return value


PLINKO_ROWS = _int_env("PLINKO_ROWS", 12)
PLINKO_MAX_ROWS = max(_int_env("PLINKO_MAX_ROWS", 32), PLINKO_ROWS)
DB_DSN = os.getenv("DB_DSN") or None
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
if not isinstance(logging.getLevelName(LOG_LEVEL), int):
    logger.warning("unknown LOG_LEVEL %r; using INFO", LOG_LEVEL)
    LOG_LEVEL = "INFO"
