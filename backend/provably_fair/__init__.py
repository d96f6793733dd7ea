"""Provably fair outcome generation for dice and minesweeper.

Pure functions only: no I/O, no database, no Django. Everything here can be
run by a third party to audit a published round.
"""
from .exceptions import ConfigurationError, EntropyError, FairnessError
from .hashing import canonical_json, combine, hash_server_seed, result_hash, sha256_hex
from .outcomes import (
    BoardConfig,
    DiceOutcome,
    MinePosition,
    draw,
    draw_to_float,
    generate_mine_positions,
    random_float,
    roll_dice,
)
from .payouts import (
    OVER,
    UNDER,
    MinesweeperPayoutCurve,
    Settlement,
    dice_lookup_table,
    effective_house_edge,
    is_winning_roll,
    minesweeper_multiplier,
    payout_multiplier,
    settle_dice,
    settle_minesweeper,
    win_probability,
)
from .rounds import DiceRound, MinesweeperRound, deal_minesweeper, play_dice
from .seeds import SeedPair, generate_client_seed, generate_server_seed
from .verification import VerificationResult, verify, verify_dice, verify_many, verify_minesweeper
