# provably_fair/outcomes.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from .exceptions import ConfigurationError
from .hashing import combine, sha256_hex
from .seeds import validate_client_seed, validate_nonce, validate_server_seed

MAX_DRAW = 0xFFFFFFFF
DICE_SCALE = 100


def _check_inputs(server_seed: str, client_seed: str, nonce: int) -> None:
    validate_server_seed(server_seed)
    validate_client_seed(client_seed)
    validate_nonce(nonce)


def round_hash(server_seed: str, client_seed: str, nonce: int) -> str:
    return sha256_hex(combine(server_seed, client_seed, nonce))


def draw(server_seed: str, client_seed: str, nonce: int) -> int:
    """
    First 32 bits of sha256("server:client:nonce") as an unsigned int.
    """
    return int(round_hash(server_seed, client_seed, nonce)[:8], 16)


def draw_to_float(value: int) -> float:
    """
    Map a 32-bit draw to [0, 1).

    The divisor is 0xFFFFFFFF, so the top draw would give exactly 1.0; it is
    folded onto the value below it to keep the interval half-open.
    """
    return min(value, MAX_DRAW - 1) / MAX_DRAW


def random_float(server_seed: str, client_seed: str, nonce: int) -> float:
    return draw_to_float(draw(server_seed, client_seed, nonce))


# ======================================================
# DICE
# ======================================================

@dataclass(frozen=True)
class DiceOutcome:
    roll: float  # [0, 100)
    draw: int
    hash: str
    combined: str

    def to_dict(self) -> dict:
        return {
            "roll": self.roll,
            "draw": self.draw,
            "hash": self.hash,
            "combined": self.combined,
        }


def roll_dice(server_seed: str, client_seed: str, nonce: int) -> DiceOutcome:
    _check_inputs(server_seed, client_seed, nonce)
    combined = combine(server_seed, client_seed, nonce)
    digest = sha256_hex(combined)
    value = int(digest[:8], 16)
    return DiceOutcome(
        roll=draw_to_float(value) * DICE_SCALE,
        draw=value,
        hash=digest,
        combined=combined,
    )


# ======================================================
# MINESWEEPER
# ======================================================

@dataclass(frozen=True)
class BoardConfig:
    width: int
    height: int
    mine_count: int

    def __post_init__(self):
        for name in ("width", "height", "mine_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError("Board dimensions must be positive")
        if self.mine_count < 1:
            raise ConfigurationError("Board needs at least one mine")
        if self.mine_count >= self.total_cells:
            raise ConfigurationError(
                "Mine count cannot be greater than or equal to total cells"
            )

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.mine_count

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "mine_count": self.mine_count,
        }


@dataclass(frozen=True)
class MinePosition:
    x: int
    y: int

    @property
    def sort_key(self):
        return (self.y, self.x)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


def sorted_positions(positions) -> List[MinePosition]:
    return sorted(positions, key=lambda p: p.sort_key)


def generate_mine_positions(
    server_seed: str, client_seed: str, nonce: int, board: BoardConfig
) -> List[MinePosition]:
    """
    Partial Fisher-Yates over the cell indices. Mine ``i`` is drawn from
    nonce ``nonce + i`` and picks from the cells still available, so the
    result never repeats a cell and needs no retries.

    Returned in draw order.
    """
    _check_inputs(server_seed, client_seed, nonce)
    available = list(range(board.total_cells))
    picked = []

    for i in range(board.mine_count):
        f = random_float(server_seed, client_seed, nonce + i)
        index = math.floor(f * len(available))
        picked.append(available.pop(index))

    return [MinePosition(x=cell % board.width, y=cell // board.width) for cell in picked]
