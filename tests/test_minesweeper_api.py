from decimal import Decimal

import pytest

from minesweeper.models import MinesweeperGame
from provably_fair.outcomes import generate_mine_positions
from seeds.models import AuditLog, HouseEdgeConfig, SeedPair

pytestmark = pytest.mark.django_db

START = {"bet_amount": "10.00", "board_width": 5, "board_height": 5, "mines_count": 5}


def _start(client, **overrides):
    res = client.post("/api/minesweeper/start/", {**START, **overrides}, format="json")
    assert res.status_code == 201
    return MinesweeperGame.objects.get(id=res.data["game_id"]), res.data


def _safe_cells(game):
    mines = {(p["x"], p["y"]) for p in game.mine_positions}
    return [
        (x, y)
        for y in range(game.board_height)
        for x in range(game.board_width)
        if (x, y) not in mines
    ]


def _reveal(client, game, x, y):
    return client.post(
        "/api/minesweeper/reveal/", {"game_id": game.id, "row": y, "col": x}, format="json"
    )


def test_start_deals_from_committed_seed(api_client, user):
    game, data = _start(api_client)
    pair = SeedPair.objects.get(user=user)

    assert "mine_positions" not in data
    assert data["nonce"] == 0
    assert data["server_seed_hash"] == pair.server_seed_hash
    assert data["board"] == {"width": 5, "height": 5, "mine_count": 5}

    expected = generate_mine_positions(pair.server_seed, pair.client_seed, 0, game.board)
    assert game.mine_positions == [p.to_dict() for p in expected]
    assert pair.next_nonce == 5
    assert AuditLog.objects.filter(action="MINES_DEALT").count() == 1


def test_games_reserve_one_nonce_per_mine(api_client):
    _start(api_client)
    _, second = _start(api_client, mines_count=3)
    _, third = _start(api_client)
    assert second["nonce"] == 5
    assert third["nonce"] == 8


@pytest.mark.parametrize("overrides", [
    {"mines_count": 25},
    {"mines_count": 0},
    {"board_width": 4},
    {"board_height": 51},
    {"bet_amount": "0"},
])
def test_start_rejects_bad_boards(api_client, overrides):
    res = api_client.post("/api/minesweeper/start/", {**START, **overrides}, format="json")
    assert res.status_code == 400
    assert MinesweeperGame.objects.count() == 0


def test_reveal_safe_cells(api_client):
    game, _ = _start(api_client)
    x, y = _safe_cells(game)[0]

    res = _reveal(api_client, game, x, y)
    assert res.status_code == 200
    assert res.data["hit_mine"] is False
    assert res.data["multiplier"] == "1.3860"

    # revealing the same cell again does not count twice
    res = _reveal(api_client, game, x, y)
    assert len(res.data["revealed_cells"]) == 1


def test_reveal_mine_loses(api_client):
    game, _ = _start(api_client)
    mine = game.mine_positions[0]

    res = _reveal(api_client, game, mine["x"], mine["y"])
    assert res.status_code == 200
    assert res.data["hit_mine"] is True
    assert res.data["status"] == "lost"
    assert res.data["win_amount"] == "0.00"
    assert len(res.data["mine_positions"]) == 5

    # finished games cannot be played on
    x, y = _safe_cells(game)[0]
    assert _reveal(api_client, game, x, y).status_code == 404


def test_reveal_outside_board(api_client):
    game, _ = _start(api_client)
    assert _reveal(api_client, game, 5, 0).status_code == 400


def test_cash_out_pays_curve(api_client):
    game, _ = _start(api_client)
    for x, y in _safe_cells(game)[:3]:
        _reveal(api_client, game, x, y)

    res = api_client.post("/api/minesweeper/cash-out/", {"game_id": game.id}, format="json")
    assert res.status_code == 200
    assert res.data["status"] == "cashed_out"
    assert res.data["multiplier"] == "2.1780"
    assert res.data["win_amount"] == "21.78"
    assert res.data["mine_positions"] is not None

    game.refresh_from_db()
    assert game.win_amount == Decimal("21.78")
    assert game.finished_at is not None
    assert AuditLog.objects.filter(action="MINES_SETTLED").count() == 1


def test_cash_out_uses_edge_from_start(api_client):
    game, _ = _start(api_client)
    HouseEdgeConfig.objects.filter(game="minesweeper").update(house_edge=Decimal("0.2"))

    res = api_client.post("/api/minesweeper/cash-out/", {"game_id": game.id}, format="json")
    assert res.data["multiplier"] == "0.9900"


def test_other_users_cannot_play_my_game(api_client, admin_client):
    game, _ = _start(api_client)
    res = admin_client.post("/api/minesweeper/cash-out/", {"game_id": game.id}, format="json")
    assert res.status_code == 404


def test_round_log_reveals_progressively(api_client, anon_client):
    game, _ = _start(api_client)

    log = anon_client.get(f"/api/minesweeper/round-log/{game.id}/").data
    assert log["mine_positions"] is None
    assert log["server_seed"] is None

    api_client.post("/api/minesweeper/cash-out/", {"game_id": game.id}, format="json")
    log = anon_client.get(f"/api/minesweeper/round-log/{game.id}/").data
    assert len(log["mine_positions"]) == 5
    assert log["server_seed"] is None

    api_client.post("/api/seeds/rotate/", {}, format="json")
    log = anon_client.get(f"/api/minesweeper/round-log/{game.id}/").data
    assert log["server_seed"] == game.seed_pair.server_seed


def test_seed_stays_secret_while_a_game_is_open(api_client, anon_client, user):
    game, _ = _start(api_client)

    res = api_client.post("/api/seeds/rotate/", {}, format="json")
    assert res.status_code == 409

    pair = SeedPair.objects.get(id=game.seed_pair_id)
    assert pair.is_active
    assert SeedPair.objects.filter(user=user).count() == 1
    assert anon_client.get(f"/api/minesweeper/round-log/{game.id}/").data["server_seed"] is None
    assert anon_client.get(f"/api/seeds/{pair.id}/").data["server_seed"] is None

    # play continues on the committed board
    x, y = _safe_cells(game)[0]
    assert _reveal(api_client, game, x, y).data["hit_mine"] is False

    api_client.post("/api/minesweeper/cash-out/", {"game_id": game.id}, format="json")
    res = api_client.post("/api/seeds/rotate/", {}, format="json")
    assert res.status_code == 200
    assert res.data["revealed"]["id"] == pair.id

def test_verify_finished_game(api_client, anon_client):
    game, start = _start(api_client)
    api_client.post("/api/minesweeper/cash-out/", {"game_id": game.id}, format="json")
    revealed = api_client.post("/api/seeds/rotate/", {}, format="json").data["revealed"]
    log = anon_client.get(f"/api/minesweeper/round-log/{game.id}/").data

    res = anon_client.post("/api/minesweeper/verify/", {
        "server_seed": revealed["server_seed"],
        "client_seed": start["client_seed"],
        "nonce": start["nonce"],
        "board_width": 5,
        "board_height": 5,
        "mines_count": 5,
        "mine_positions": log["mine_positions"],
        "result_hash": start["result_hash"],
        "server_seed_hash": start["server_seed_hash"],
    }, format="json")

    assert res.status_code == 200
    assert res.data["match"] is True
    assert res.data["commitment_match"] is True


def test_verify_detects_moved_mine(anon_client):
    server_seed = "ab" * 32
    res = anon_client.post("/api/minesweeper/verify/", {
        "server_seed": server_seed,
        "client_seed": "player-seed",
        "nonce": 0,
        "board_width": 5,
        "board_height": 5,
        "mines_count": 5,
        "mine_positions": [{"x": 0, "y": 0}, {"x": 3, "y": 0}, {"x": 4, "y": 0},
                           {"x": 3, "y": 1}, {"x": 4, "y": 1}],
    }, format="json")
    assert res.status_code == 200
    assert res.data["match"] is False


def test_verify_rejects_impossible_board(anon_client):
    res = anon_client.post("/api/minesweeper/verify/", {
        "server_seed": "ab" * 32,
        "client_seed": "player-seed",
        "nonce": 0,
        "board_width": 2,
        "board_height": 2,
        "mines_count": 4,
        "result_hash": "0" * 64,
    }, format="json")
    assert res.status_code == 400
