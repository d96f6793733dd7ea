# provably_fair/defaults.py
from decimal import Decimal

GAME_DICE = "dice"
GAME_MINESWEEPER = "minesweeper"

GAMES = (GAME_DICE, GAME_MINESWEEPER)

DEFAULT_HOUSE_EDGE = Decimal("0.01")

# Game-design knobs for the minesweeper payout curve. Not part of the
# cryptographic protocol; changing them changes payouts, never outcomes.
MINESWEEPER_CURVE = {
    "base": Decimal("1"),
    "cleared_scale": Decimal("10"),
    "bonus_factor": Decimal("1.5"),
}

MULTIPLIER_PLACES = Decimal("0.0001")
PAYOUT_PLACES = Decimal("0.01")

DICE_TARGET_STEP = Decimal("0.01")
