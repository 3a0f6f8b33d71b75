import json, logging, math
from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict

from .errors import InvalidInput
from .rng import RoundRandomSource, sha256_hex

logger = logging.getLogger(__name__)

PegMap = tuple[tuple[float, ...], ...]

BIAS_SPREAD = 0.2
COLUMN_STEP = 0.01


def round_half_up(value: float, digits: int) -> float:
    # floor(x * 10^d + 0.5) / 10^d, the exact float steps every verifier repeats
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


class PathStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    column: int
    direction: Literal["left", "right"]
    peg_bias: float
    random_value: float
    adjusted_bias: float


def generate_peg_map(rng: RoundRandomSource, rows: int) -> PegMap:
    """Row r holds r+1 left-biases in [0.4, 0.6], drawn row-major, left to right."""
    peg_map = []
    for row in range(rows):
        pegs = []
        for _ in range(row + 1):
            u = rng.next()
            bias = 0.5 + (u - 0.5) * BIAS_SPREAD
            pegs.append(round_half_up(bias, 6))
        peg_map.append(tuple(pegs))
    return tuple(peg_map)


def canonical_peg_map(peg_map: Sequence[Sequence[float]]) -> str:
    # compact JSON arrays; floats use the shortest round-trip repr
    return json.dumps([list(row) for row in peg_map], separators=(",", ":"))


def peg_map_hash(peg_map: Sequence[Sequence[float]]) -> str:
    return sha256_hex(canonical_peg_map(peg_map))


def simulate_drop(rng: RoundRandomSource, peg_map: PegMap, drop_column: int, rows: int) -> tuple[PathStep, ...]:
    """Walk the ball down ``rows`` rows, one draw per row.

    ``position`` counts right moves so far and is the final bin. The drop column
    shifts every peg's left-bias by the same amount; the peg map itself is untouched.
    """
    if len(peg_map) < rows:
        raise InvalidInput(f"peg map has {len(peg_map)} rows, {rows} needed")
    adjustment = (drop_column - rows // 2) * COLUMN_STEP
    position = 0
    path = []
    for row in range(rows):
        peg_bias = peg_map[row][min(position, row)]
        adjusted = max(0.0, min(1.0, peg_bias + adjustment))
        u = rng.next()
        if u < adjusted:
            direction = "left"
        else:
            direction = "right"
            position += 1
        path.append(PathStep(
            row=row,
            column=position,
            direction=direction,
            peg_bias=peg_bias,
            random_value=u,
            adjusted_bias=adjusted,
        ))
    return tuple(path)


def multipliers(bins: int) -> tuple[float, ...]:
    """Symmetric paytable: 0.5x at the centre bin, +0.3x per bin of distance.

    For odd bin counts the centre is bins // 2; for even counts it falls between
    the two middle bins, which keeps the table mirror-symmetric.
    """
    if bins <= 0:
        raise InvalidInput("bin count must be positive")
    # distance from the midpoint (bins - 1) / 2, equal to |i - bins // 2| for odd bins
    return tuple(round_half_up(0.5 + abs(2 * i - (bins - 1)) / 2 * 0.3, 2) for i in range(bins))


def payout(stake: int, multiplier: float) -> int:
    """Stake in minor units (cents) times multiplier, rounded half up."""
    return math.floor(stake * multiplier + 0.5)
