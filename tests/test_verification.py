import pytest

from provably_fair.exceptions import ConfigurationError
from provably_fair.outcomes import BoardConfig, roll_dice
from provably_fair.verification import (
    board_from_config,
    verify,
    verify_dice,
    verify_many,
    verify_minesweeper,
)

from conftest import CLIENT_SEED, SERVER_SEED, SERVER_SEED_HASH
from test_hashing import DICE_HASH, MINES_HASH

OTHER_SEED = "cd" * 32
BOARD = BoardConfig(5, 5, 5)
MINES = [(2, 0), (3, 0), (4, 0), (3, 1), (4, 1)]


# ======================================================
# DICE
# ======================================================

def test_dice_round_trip_by_roll():
    roll = roll_dice(SERVER_SEED, CLIENT_SEED, 0).roll
    result = verify_dice(SERVER_SEED, CLIENT_SEED, 0, roll)
    assert result.match
    assert result.recomputed_outcome == roll


def test_dice_round_trip_by_hash_with_commitment():
    result = verify_dice(
        SERVER_SEED, CLIENT_SEED, 0,
        claimed_hash=DICE_HASH.upper(),
        server_seed_hash=SERVER_SEED_HASH,
    )
    assert result.match
    assert result.commitment_match is True
    assert result.recomputed_hash == DICE_HASH


def test_tampered_roll_is_detected():
    roll = roll_dice(SERVER_SEED, CLIENT_SEED, 0).roll
    result = verify_dice(SERVER_SEED, CLIENT_SEED, 0, roll + 0.01)
    assert not result.match
    assert "MISMATCH" in result.describe()


def test_tolerance_absorbs_display_rounding():
    roll = roll_dice(SERVER_SEED, CLIENT_SEED, 0).roll
    assert verify_dice(SERVER_SEED, CLIENT_SEED, 0, round(roll, 2), tolerance=0.01).match


def test_swapped_server_seed_is_detected():
    assert not verify_dice(OTHER_SEED, CLIENT_SEED, 0, claimed_hash=DICE_HASH).match


def test_other_nonce_is_detected():
    assert not verify_dice(SERVER_SEED, CLIENT_SEED, 1, claimed_hash=DICE_HASH).match


def test_broken_commitment_fails_even_if_outcome_matches():
    roll = roll_dice(OTHER_SEED, CLIENT_SEED, 0).roll
    result = verify_dice(OTHER_SEED, CLIENT_SEED, 0, roll, server_seed_hash=SERVER_SEED_HASH)
    assert result.commitment_match is False
    assert not result.match


def test_dice_needs_a_claim():
    with pytest.raises(ConfigurationError):
        verify_dice(SERVER_SEED, CLIENT_SEED, 0)


def test_bad_claimed_hash_is_rejected():
    with pytest.raises(ConfigurationError):
        verify_dice(SERVER_SEED, CLIENT_SEED, 0, claimed_hash="nope")


# ======================================================
# MINESWEEPER
# ======================================================

def test_minesweeper_positions_in_any_order():
    result = verify_minesweeper(SERVER_SEED, CLIENT_SEED, 0, BOARD, list(reversed(MINES)))
    assert result.match
    assert result.recomputed_outcome[0] == {"x": 2, "y": 0}


def test_minesweeper_positions_as_dicts():
    claimed = [{"x": x, "y": y} for x, y in MINES]
    assert verify_minesweeper(SERVER_SEED, CLIENT_SEED, 0, BOARD, claimed).match


def test_moved_mine_is_detected():
    claimed = MINES[:-1] + [(0, 4)]
    assert not verify_minesweeper(SERVER_SEED, CLIENT_SEED, 0, BOARD, claimed).match


def test_minesweeper_by_hash():
    assert verify_minesweeper(SERVER_SEED, CLIENT_SEED, 0, BOARD, claimed_hash=MINES_HASH).match
    other = BoardConfig(5, 5, 4)
    assert not verify_minesweeper(SERVER_SEED, CLIENT_SEED, 0, other, claimed_hash=MINES_HASH).match


def test_malformed_positions_are_rejected():
    with pytest.raises(ConfigurationError):
        verify_minesweeper(SERVER_SEED, CLIENT_SEED, 0, BOARD, [(1, 2, 3)])


def test_board_from_config():
    assert board_from_config({"width": 5, "height": 5, "mine_count": 5}) == BOARD
    with pytest.raises(ConfigurationError):
        board_from_config({"width": 5, "height": 5})
    with pytest.raises(ConfigurationError):
        board_from_config(None)


# ======================================================
# DISPATCH AND BATCH
# ======================================================

def test_verify_treats_hex_digest_claim_as_hash():
    result = verify("dice", SERVER_SEED, CLIENT_SEED, 0, DICE_HASH)
    assert result.match
    assert result.claimed_hash == DICE_HASH
    assert result.claimed_outcome is None


def test_verify_minesweeper_dispatch():
    config = {"width": 5, "height": 5, "mine_count": 5}
    assert verify("minesweeper", SERVER_SEED, CLIENT_SEED, 0, MINES, config).match
    assert verify("minesweeper", SERVER_SEED, CLIENT_SEED, 0, MINES_HASH, config).match


def test_verify_unknown_game():
    with pytest.raises(ConfigurationError):
        verify("roulette", SERVER_SEED, CLIENT_SEED, 0, DICE_HASH)


def test_verify_many_keeps_going_after_bad_record():
    results = verify_many([
        {"game": "dice", "server_seed": SERVER_SEED, "client_seed": CLIENT_SEED, "nonce": 0, "claim": DICE_HASH},
        {"game": "dice", "server_seed": "bad", "client_seed": CLIENT_SEED, "nonce": 0, "claim": DICE_HASH},
        {"game": "minesweeper", "server_seed": SERVER_SEED, "client_seed": CLIENT_SEED, "nonce": 0,
         "claim": MINES_HASH, "game_config": {"width": 5, "height": 5, "mine_count": 5}},
    ])
    assert [r.match for r in results] == [True, False, True]
    assert results[1].error
    assert "could not verify" in results[1].describe()


def test_verify_outcome_and_hash_together():
    roll = roll_dice(SERVER_SEED, CLIENT_SEED, 0).roll
    assert verify("dice", SERVER_SEED, CLIENT_SEED, 0, roll, claimed_hash=DICE_HASH).match
    assert not verify("dice", SERVER_SEED, CLIENT_SEED, 0, roll + 1, claimed_hash=DICE_HASH).match

    config = {"width": 5, "height": 5, "mine_count": 5}
    moved = MINES[:-1] + [(0, 4)]
    assert not verify("minesweeper", SERVER_SEED, CLIENT_SEED, 0, moved, config,
                      claimed_hash=MINES_HASH).match


def test_verify_rejects_two_hashes():
    with pytest.raises(ConfigurationError):
        verify("dice", SERVER_SEED, CLIENT_SEED, 0, DICE_HASH, claimed_hash=DICE_HASH)


def test_verify_many_reports_non_mapping_records():
    good = {"game": "dice", "server_seed": SERVER_SEED, "client_seed": CLIENT_SEED,
            "nonce": 0, "claim": DICE_HASH}
    results = verify_many([None, ["dice", SERVER_SEED], good])
    assert [r.match for r in results] == [False, False, True]
    assert "mapping" in results[0].error
    assert "mapping" in results[1].error
