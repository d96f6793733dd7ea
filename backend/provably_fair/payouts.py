# provably_fair/payouts.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List

from .defaults import (
    DEFAULT_HOUSE_EDGE,
    DICE_TARGET_STEP,
    MINESWEEPER_CURVE,
    MULTIPLIER_PLACES,
    PAYOUT_PLACES,
)
from .exceptions import ConfigurationError
from .outcomes import DICE_SCALE, BoardConfig

UNDER = "under"
OVER = "over"
DIRECTIONS = (UNDER, OVER)

D0 = Decimal("0")
D1 = Decimal("1")
D100 = Decimal(DICE_SCALE)


def to_decimal(value, name: str) -> Decimal:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number")
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number") from None
    if not d.is_finite():
        raise ConfigurationError(f"{name} must be finite")
    return d


def q4(x: Decimal) -> Decimal:
    return x.quantize(MULTIPLIER_PLACES, rounding=ROUND_HALF_UP)


def q2(x: Decimal) -> Decimal:
    return x.quantize(PAYOUT_PLACES, rounding=ROUND_HALF_UP)


def validate_house_edge(house_edge) -> Decimal:
    e = to_decimal(house_edge, "house_edge")
    if e < D0 or e >= D1:
        raise ConfigurationError("House edge must be in [0, 1)")
    return e


def validate_bet_amount(bet_amount) -> Decimal:
    amount = to_decimal(bet_amount, "bet_amount")
    if amount <= D0:
        raise ConfigurationError("Bet amount must be positive")
    return amount


def validate_target(target) -> Decimal:
    t = to_decimal(target, "target")
    if t <= D0 or t >= D100:
        raise ConfigurationError("Target must be strictly between 0 and 100")
    return t


def validate_direction(direction) -> str:
    if direction not in DIRECTIONS:
        raise ConfigurationError("Direction must be 'under' or 'over'")
    return direction


@dataclass(frozen=True)
class Settlement:
    won: bool
    multiplier: Decimal
    payout: Decimal

    def to_dict(self) -> dict:
        return {
            "won": self.won,
            "multiplier": self.multiplier,
            "payout": self.payout,
        }


# ======================================================
# DICE
# ======================================================

def win_probability(target, direction: str) -> Decimal:
    t = validate_target(target)
    validate_direction(direction)
    if direction == UNDER:
        return t / D100
    return (D100 - t) / D100


def payout_multiplier(probability, house_edge=DEFAULT_HOUSE_EDGE) -> Decimal:
    """
    Fair multiplier is 1/p; the house keeps ``house_edge`` of it.
    """
    p = to_decimal(probability, "probability")
    if p <= D0 or p >= D1:
        raise ConfigurationError("Win probability must be strictly between 0 and 1")
    e = validate_house_edge(house_edge)
    return q4((D1 - e) / p)


def is_winning_roll(roll: float, target, direction: str) -> bool:
    """
    Strict comparison on both sides: a roll equal to the target loses.
    """
    t = float(validate_target(target))
    validate_direction(direction)
    if direction == UNDER:
        return roll < t
    return roll > t


def settle_dice(
    roll: float, bet_amount, target, direction: str, house_edge=DEFAULT_HOUSE_EDGE
) -> Settlement:
    """
    ``multiplier`` is the bet's multiplier whether or not it won; ``payout``
    is zero on a loss.
    """
    amount = validate_bet_amount(bet_amount)
    multiplier = payout_multiplier(win_probability(target, direction), house_edge)
    won = is_winning_roll(roll, target, direction)
    payout = q2(amount * multiplier) if won else q2(D0)
    return Settlement(won=won, multiplier=multiplier, payout=payout)


def dice_lookup_table(direction: str, bet_amount, house_edge=DEFAULT_HOUSE_EDGE) -> List[dict]:
    """
    Multiplier and payout for every target from 0.01 to 99.99.
    """
    amount = validate_bet_amount(bet_amount)
    e = validate_house_edge(house_edge)
    validate_direction(direction)

    table = []
    for i in range(1, 10000):
        target = DICE_TARGET_STEP * i
        probability = win_probability(target, direction)
        multiplier = payout_multiplier(probability, e)
        table.append({
            "target": target,
            "probability": probability,
            "multiplier": multiplier,
            "payout": q2(amount * multiplier),
        })
    return table


def effective_house_edge(probability, payout, bet_amount) -> Decimal:
    """
    Percentage of the stake the house expects to keep for a given payout.
    """
    p = to_decimal(probability, "probability")
    amount = validate_bet_amount(bet_amount)
    expected = p * to_decimal(payout, "payout")
    return (amount - expected) / amount * D100


# ======================================================
# MINESWEEPER
# ======================================================

@dataclass(frozen=True)
class MinesweeperPayoutCurve:
    base: Decimal = MINESWEEPER_CURVE["base"]
    cleared_scale: Decimal = MINESWEEPER_CURVE["cleared_scale"]
    bonus_factor: Decimal = MINESWEEPER_CURVE["bonus_factor"]


DEFAULT_CURVE = MinesweeperPayoutCurve()


def validate_cleared_tiles(cleared_tiles, board: BoardConfig) -> int:
    if isinstance(cleared_tiles, bool) or not isinstance(cleared_tiles, int):
        raise ConfigurationError("cleared_tiles must be an integer")
    if cleared_tiles < 0 or cleared_tiles > board.safe_cells:
        raise ConfigurationError(
            f"cleared_tiles must be between 0 and {board.safe_cells}"
        )
    return cleared_tiles


def minesweeper_multiplier(
    cleared_tiles: int,
    board: BoardConfig,
    house_edge=DEFAULT_HOUSE_EDGE,
    curve: MinesweeperPayoutCurve = DEFAULT_CURVE,
) -> Decimal:
    cleared = validate_cleared_tiles(cleared_tiles, board)
    e = validate_house_edge(house_edge)

    cleared_fraction = Decimal(cleared) / Decimal(board.total_cells)
    multiplier = curve.base + curve.cleared_scale * cleared_fraction

    if cleared > board.mine_count:
        multiplier *= curve.bonus_factor

    return q4(multiplier * (D1 - e))


def settle_minesweeper(
    bet_amount,
    cleared_tiles: int,
    board: BoardConfig,
    hit_mine: bool = False,
    house_edge=DEFAULT_HOUSE_EDGE,
    curve: MinesweeperPayoutCurve = DEFAULT_CURVE,
) -> Settlement:
    """
    A cash-out only counts as ``won`` when it returns more than the stake;
    cashing out early below the stake keeps its payout but is not a win.
    """
    amount = validate_bet_amount(bet_amount)
    validate_cleared_tiles(cleared_tiles, board)

    if hit_mine:
        validate_house_edge(house_edge)
        return Settlement(won=False, multiplier=q4(D0), payout=q2(D0))

    multiplier = minesweeper_multiplier(cleared_tiles, board, house_edge, curve)
    payout = q2(amount * multiplier)
    return Settlement(won=payout > amount, multiplier=multiplier, payout=payout)
