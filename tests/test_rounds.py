from decimal import Decimal

import pytest

from provably_fair.exceptions import ConfigurationError
from provably_fair.outcomes import BoardConfig
from provably_fair.rounds import deal_minesweeper, play_dice

from conftest import CLIENT_SEED, SERVER_SEED, SERVER_SEED_HASH
from test_hashing import DICE_HASH, MINES_HASH


def test_play_dice_golden():
    result = play_dice(SERVER_SEED, CLIENT_SEED, 0, 10, 50, "under", Decimal("0.01"))
    assert result.server_seed_hash == SERVER_SEED_HASH
    assert result.outcome.draw == 1428471495
    assert result.settlement.won is True
    assert result.settlement.payout == Decimal("19.80")
    assert result.result_hash == DICE_HASH


def test_play_dice_checks_bet_before_seeds():
    with pytest.raises(ConfigurationError, match="Target"):
        play_dice("not-a-seed", CLIENT_SEED, 0, 10, 100, "under")


def test_dice_round_dict():
    data = play_dice(SERVER_SEED, CLIENT_SEED, 0, 10, 50, "over").to_dict()
    assert data["game"] == "dice"
    assert data["won"] is False
    assert data["payout"] == Decimal("0.00")
    assert "server_seed" not in data


def test_deal_minesweeper_golden():
    round_ = deal_minesweeper(SERVER_SEED, CLIENT_SEED, 0, BoardConfig(5, 5, 5))
    assert round_.result_hash == MINES_HASH
    assert round_.is_mine(3, 1)
    assert not round_.is_mine(0, 0)


def test_minesweeper_round_hides_mines_until_revealed():
    round_ = deal_minesweeper(SERVER_SEED, CLIENT_SEED, 0, BoardConfig(5, 5, 5))
    assert "mine_positions" not in round_.to_dict()
    assert round_.to_dict(reveal=True)["mine_positions"] == [
        {"x": 2, "y": 0},
        {"x": 3, "y": 0},
        {"x": 4, "y": 0},
        {"x": 3, "y": 1},
        {"x": 4, "y": 1},
    ]


def test_minesweeper_round_settle():
    round_ = deal_minesweeper(SERVER_SEED, CLIENT_SEED, 0, BoardConfig(5, 5, 5))
    assert round_.settle(10, 3, house_edge=Decimal("0.01")).payout == Decimal("21.78")
    assert round_.settle(10, 3, hit_mine=True).payout == Decimal("0.00")
