# minesweeper/views.py
import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from provably_fair.defaults import GAME_MINESWEEPER
from provably_fair.exceptions import ConfigurationError
from provably_fair.outcomes import BoardConfig
from provably_fair.payouts import minesweeper_multiplier, settle_minesweeper
from provably_fair.rounds import deal_minesweeper
from provably_fair.verification import verify_minesweeper
from seeds.services import SeedStateError, get_active_pair, house_edge_for, issue_nonce, record_audit
from .models import MinesweeperGame
from .serializers import CashOutIn, GameOut, RevealIn, StartIn, VerifyIn

logger = logging.getLogger(__name__)


def _finish(game, settlement, status_value):
    game.status = status_value
    game.multiplier = settlement.multiplier
    game.win_amount = settlement.payout
    game.finished_at = timezone.now()
    game.save()

    record_audit(
        "MINES_SETTLED",
        user=game.user,
        game_id=game.id,
        seed_pair_id=game.seed_pair_id,
        status=game.status,
        cleared=len(game.revealed_cells),
        payout=str(game.win_amount),
    )
    logger.info(
        f"Minesweeper game {game.id} {game.status} | cleared {len(game.revealed_cells)} | "
        f"multiplier {game.multiplier} | payout {game.win_amount}"
    )


def _playing_game(request, game_id):
    return get_object_or_404(
        MinesweeperGame.objects.select_for_update(),
        id=game_id,
        user=request.user,
        status=MinesweeperGame.STATUS_PLAYING,
    )


# ======================================================
# START
# ======================================================

@api_view(["POST"])
@permission_classes([IsAuthenticated])
def start_minesweeper(request):
    serializer = StartIn(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        board = BoardConfig(data["board_width"], data["board_height"], data["mines_count"])
    except ConfigurationError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

    house_edge = house_edge_for(GAME_MINESWEEPER)

    try:
        with transaction.atomic():
            pair = get_active_pair(request.user)
            # one nonce per mine
            pair, nonce = issue_nonce(pair.id, span=board.mine_count)

            round_ = deal_minesweeper(pair.server_seed, pair.client_seed, nonce, board)

            game = MinesweeperGame.objects.create(
                user=request.user,
                seed_pair=pair,
                nonce=nonce,
                bet_amount=data["bet_amount"],
                board_width=board.width,
                board_height=board.height,
                mines_count=board.mine_count,
                house_edge=house_edge,
                mine_positions=[p.to_dict() for p in round_.mine_positions],
                result_hash=round_.result_hash,
            )

            record_audit(
                "MINES_DEALT",
                user=request.user,
                game_id=game.id,
                seed_pair_id=pair.id,
                nonce=nonce,
                result_hash=round_.result_hash,
            )
    except SeedStateError as e:
        return Response({"error": str(e)}, status=status.HTTP_409_CONFLICT)

    logger.info(
        f"Minesweeper game {game.id} dealt | user {request.user.pk} | nonce {nonce} | "
        f"board {board.width}x{board.height} with {board.mine_count} mines"
    )

    return Response({
        "game_id": game.id,
        "server_seed_hash": pair.server_seed_hash,
        "client_seed": pair.client_seed,
        "nonce": nonce,
        "board": board.to_dict(),
        "result_hash": game.result_hash,
        "status": game.status,
    }, status=status.HTTP_201_CREATED)


# ======================================================
# REVEAL
# ======================================================

@api_view(["POST"])
@permission_classes([IsAuthenticated])
def reveal_cell(request):
    serializer = RevealIn(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    x, y = data["col"], data["row"]

    with transaction.atomic():
        game = _playing_game(request, data["game_id"])
        board = game.board

        if not board.contains(x, y):
            return Response({"error": "Cell is outside the board"}, status=status.HTTP_400_BAD_REQUEST)

        if {"x": x, "y": y} in game.mine_positions:
            settlement = settle_minesweeper(
                game.bet_amount,
                len(game.revealed_cells),
                board,
                hit_mine=True,
                house_edge=game.house_edge,
            )
            _finish(game, settlement, MinesweeperGame.STATUS_LOST)
            return Response({"hit_mine": True, **GameOut(game).data})

        revealed = game.revealed_cells or []
        if {"x": x, "y": y} not in revealed:
            revealed.append({"x": x, "y": y})
            game.revealed_cells = revealed

        game.multiplier = minesweeper_multiplier(len(revealed), board, game.house_edge)
        game.save(update_fields=["revealed_cells", "multiplier"])

    return Response({
        "hit_mine": False,
        "revealed_cells": revealed,
        "multiplier": str(game.multiplier),
        "status": game.status,
    })


# ======================================================
# CASH OUT
# ======================================================

@api_view(["POST"])
@permission_classes([IsAuthenticated])
def cash_out(request):
    serializer = CashOutIn(data=request.data)
    serializer.is_valid(raise_exception=True)

    with transaction.atomic():
        game = _playing_game(request, serializer.validated_data["game_id"])
        settlement = settle_minesweeper(
            game.bet_amount,
            len(game.revealed_cells),
            game.board,
            house_edge=game.house_edge,
        )
        _finish(game, settlement, MinesweeperGame.STATUS_CASHED)

    return Response(GameOut(game).data)


# ======================================================
# PUBLIC VERIFICATION
# ======================================================

@api_view(["POST"])
@permission_classes([AllowAny])
def verify(request):
    serializer = VerifyIn(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        board = BoardConfig(data["board_width"], data["board_height"], data["mines_count"])
        result = verify_minesweeper(
            data["server_seed"],
            data["client_seed"],
            data["nonce"],
            board,
            data.get("mine_positions"),
            claimed_hash=data.get("result_hash"),
            server_seed_hash=data.get("server_seed_hash"),
        )
    except ConfigurationError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if not result.match:
        logger.warning(f"Minesweeper verification mismatch\n{result.describe()}")

    return Response(result.to_dict())


@api_view(["GET"])
@permission_classes([AllowAny])
def round_log(request, game_id):
    """
    Everything a player needs to re-derive the board. Mines are shown once
    the game is over and the server seed once its pair is retired.
    """
    game = get_object_or_404(MinesweeperGame.objects.select_related("seed_pair"), id=game_id)
    return Response(GameOut(game).data)
