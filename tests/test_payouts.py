from decimal import Decimal

import pytest

from provably_fair.exceptions import ConfigurationError
from provably_fair.outcomes import BoardConfig
from provably_fair.payouts import (
    OVER,
    UNDER,
    MinesweeperPayoutCurve,
    dice_lookup_table,
    effective_house_edge,
    is_winning_roll,
    minesweeper_multiplier,
    payout_multiplier,
    q2,
    q4,
    settle_dice,
    settle_minesweeper,
    win_probability,
)

EDGE = Decimal("0.01")
BOARD = BoardConfig(5, 5, 5)


# ======================================================
# DICE
# ======================================================

def test_even_money_multiplier():
    assert payout_multiplier(win_probability(50, UNDER), EDGE) == Decimal("1.9800")


def test_winning_bet_pays_stake_times_multiplier():
    s = settle_dice(49.5, 10, 50, UNDER, EDGE)
    assert s.won is True
    assert s.multiplier == Decimal("1.9800")
    assert s.payout == Decimal("19.80")


def test_losing_bet_keeps_multiplier_pays_nothing():
    s = settle_dice(75.0, 10, 50, UNDER, EDGE)
    assert s.won is False
    assert s.multiplier == Decimal("1.9800")
    assert s.payout == Decimal("0.00")


@pytest.mark.parametrize("direction", [UNDER, OVER])
def test_roll_equal_to_target_loses(direction):
    assert not is_winning_roll(50.0, 50, direction)
    assert settle_dice(50.0, 10, 50, direction, EDGE).won is False


def test_over_wins_above_target():
    assert is_winning_roll(50.01, 50, OVER)
    assert not is_winning_roll(49.99, 50, OVER)


def test_win_probability_by_direction():
    assert win_probability(25, UNDER) == Decimal("0.25")
    assert win_probability(25, OVER) == Decimal("0.75")


def test_zero_house_edge_is_fair():
    assert payout_multiplier(Decimal("0.5"), 0) == Decimal("2.0000")


def test_multiplier_rounds_to_four_places():
    # 0.99 / 0.7 = 1.414285...
    assert payout_multiplier(win_probability(70, UNDER), EDGE) == Decimal("1.4143")
    assert settle_dice(1.0, 3, 70, UNDER, EDGE).payout == Decimal("4.24")


def test_rounding_is_half_up():
    assert q2(Decimal("0.125")) == Decimal("0.13")
    assert q4(Decimal("1.00005")) == Decimal("1.0001")


@pytest.mark.parametrize("target", [0, 100, -5, 150, "abc", None])
def test_targets_outside_open_interval_are_rejected(target):
    with pytest.raises(ConfigurationError):
        settle_dice(10.0, 10, target, UNDER, EDGE)


def test_extreme_targets_are_allowed():
    assert payout_multiplier(win_probability("0.01", UNDER), EDGE) == Decimal("9900.0000")
    assert payout_multiplier(win_probability("99.99", OVER), EDGE) == Decimal("9900.0000")


@pytest.mark.parametrize("edge", [1, Decimal("1.5"), -0.01, "nan"])
def test_bad_house_edge_is_rejected(edge):
    with pytest.raises(ConfigurationError):
        payout_multiplier(Decimal("0.5"), edge)


@pytest.mark.parametrize("bet", [0, -1, "ten", True])
def test_bad_bet_amount_is_rejected(bet):
    with pytest.raises(ConfigurationError):
        settle_dice(10.0, bet, 50, UNDER, EDGE)


def test_bad_direction_is_rejected():
    with pytest.raises(ConfigurationError):
        settle_dice(10.0, 10, 50, "sideways", EDGE)


def test_lookup_table_covers_every_target():
    table = dice_lookup_table(UNDER, 10, EDGE)
    assert len(table) == 9999
    assert table[0]["target"] == Decimal("0.01")
    assert table[-1]["target"] == Decimal("99.99")

    row = table[4999]
    assert row["target"] == Decimal("50.00")
    assert row["multiplier"] == Decimal("1.9800")
    assert row["payout"] == Decimal("19.80")


def test_effective_house_edge_matches_configured_edge():
    assert effective_house_edge(Decimal("0.5"), Decimal("19.80"), 10) == Decimal("1")


# ======================================================
# MINESWEEPER
# ======================================================

@pytest.mark.parametrize("cleared, expected", [
    (0, "0.9900"),
    (3, "2.1780"),
    (5, "2.9700"),
    (6, "5.0490"),
    (20, "13.3650"),
])
def test_minesweeper_curve(cleared, expected):
    assert minesweeper_multiplier(cleared, BOARD, EDGE) == Decimal(expected)


def test_cash_out_pays_stake_times_multiplier():
    s = settle_minesweeper(10, 3, BOARD, house_edge=EDGE)
    assert s.won is True
    assert s.multiplier == Decimal("2.1780")
    assert s.payout == Decimal("21.78")


def test_early_cash_out_below_stake_is_not_a_win():
    s = settle_minesweeper(10, 0, BOARD, house_edge=EDGE)
    assert s.won is False
    assert s.multiplier == Decimal("0.9900")
    assert s.payout == Decimal("9.90")

    assert settle_minesweeper(10, 1, BOARD, house_edge=EDGE).won is True


def test_hitting_a_mine_pays_nothing():
    s = settle_minesweeper(10, 12, BOARD, hit_mine=True, house_edge=EDGE)
    assert s.won is False
    assert s.multiplier == Decimal("0")
    assert s.payout == Decimal("0.00")


@pytest.mark.parametrize("cleared", [-1, 21, 2.0, True])
def test_cleared_tiles_must_fit_the_board(cleared):
    with pytest.raises(ConfigurationError):
        minesweeper_multiplier(cleared, BOARD, EDGE)


def test_custom_payout_curve():
    curve = MinesweeperPayoutCurve(
        base=Decimal("1"), cleared_scale=Decimal("5"), bonus_factor=Decimal("1")
    )
    assert minesweeper_multiplier(5, BOARD, 0, curve) == Decimal("2.0000")
