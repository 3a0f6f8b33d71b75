import hashlib, re

from .errors import DrawBudgetExceeded, InvalidInput

MASK32 = 0xFFFF_FFFF
TWO_32 = float(0x1_0000_0000)
HEX8 = re.compile(r"[0-9a-fA-F]{8}")


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode()).hexdigest()


def extract_prng_seed(combined_seed: str) -> int:
    """First 4 bytes of the hex digest, big-endian, as an unsigned 32-bit seed."""
    head = combined_seed[:8] if isinstance(combined_seed, str) else ""
    if not HEX8.fullmatch(head):
        raise InvalidInput(f"combined seed must start with 8 hex characters, got {head!r}")
    return int(head, 16)


def draw_count(rows: int) -> int:
    """Draws one round consumes: the whole peg map, then one per row for the path."""
    return rows * (rows + 1) // 2 + rows


class XorShift32:
    """xorshift32 (13, 17, 5) returning floats in [0, 1).

    A zero seed is coerced to 1, otherwise the stream would stay at zero forever.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int):
        self._state = (seed & MASK32) or 1

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        s = self._state
        s ^= (s << 13) & MASK32
        s ^= s >> 17
        s ^= (s << 5) & MASK32
        self._state = s
        return s / TWO_32


class RoundRandomSource:
    """The single random stream of one round.

    Every draw of a round (peg map first, then the path) comes from here in
    call order. Instances refuse to be copied or pickled: a replay rebuilds
    the stream from the combined seed with ``reset``.
    """

    def __init__(self, combined_seed: str, max_draws: int | None = None):
        self._max_draws = max_draws
        self.reset(combined_seed)

    def reset(self, combined_seed: str) -> None:
        self._prng = XorShift32(extract_prng_seed(combined_seed))
        self._calls = 0

    def next(self) -> float:
        if self._max_draws is not None and self._calls >= self._max_draws:
            raise DrawBudgetExceeded(f"round stream exhausted after {self._calls} draws")
        self._calls += 1
        return self._prng.next()

    def call_count(self) -> int:
        return self._calls

    @property
    def state(self) -> int:
        return self._prng.state

    def __copy__(self):
        raise TypeError("a round random source cannot be copied; rebuild it from the combined seed")

    def __deepcopy__(self, memo):
        raise TypeError("a round random source cannot be copied; rebuild it from the combined seed")

    def __reduce__(self):
        raise TypeError("a round random source cannot be pickled")
