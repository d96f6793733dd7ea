# minesweeper/serializers.py
from django.conf import settings
from rest_framework import serializers

from provably_fair.seeds import CLIENT_SEED_MAX_LENGTH
from .models import MinesweeperGame

LIMITS = settings.MINESWEEPER_LIMITS


class StartIn(serializers.Serializer):
    bet_amount = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=LIMITS["min_stake"],
        max_value=LIMITS["max_stake"],
    )
    board_width = serializers.IntegerField(
        min_value=LIMITS["min_board_size"], max_value=LIMITS["max_board_size"], default=5
    )
    board_height = serializers.IntegerField(
        min_value=LIMITS["min_board_size"], max_value=LIMITS["max_board_size"], default=5
    )
    mines_count = serializers.IntegerField(min_value=1, default=5)


class RevealIn(serializers.Serializer):
    game_id = serializers.IntegerField()
    row = serializers.IntegerField(min_value=0)
    col = serializers.IntegerField(min_value=0)


class CashOutIn(serializers.Serializer):
    game_id = serializers.IntegerField()


class PositionField(serializers.DictField):
    child = serializers.IntegerField(min_value=0)


class VerifyIn(serializers.Serializer):
    server_seed = serializers.CharField(max_length=64)
    client_seed = serializers.CharField(max_length=CLIENT_SEED_MAX_LENGTH, trim_whitespace=False)
    nonce = serializers.IntegerField(min_value=0)
    board_width = serializers.IntegerField(min_value=1)
    board_height = serializers.IntegerField(min_value=1)
    mines_count = serializers.IntegerField(min_value=1)
    mine_positions = serializers.ListField(child=PositionField(), required=False)
    result_hash = serializers.CharField(max_length=64, required=False)
    server_seed_hash = serializers.CharField(max_length=64, required=False)

    def validate(self, attrs):
        if "mine_positions" not in attrs and "result_hash" not in attrs:
            raise serializers.ValidationError("Provide mine_positions or a result_hash to verify")
        return attrs


class GameOut(serializers.ModelSerializer):
    server_seed_hash = serializers.CharField(source="seed_pair.server_seed_hash", read_only=True)
    client_seed = serializers.CharField(source="seed_pair.client_seed", read_only=True)
    server_seed = serializers.CharField(source="seed_pair.revealed_server_seed", read_only=True)
    mine_positions = serializers.SerializerMethodField()

    class Meta:
        model = MinesweeperGame
        fields = [
            "id",
            "seed_pair",
            "server_seed_hash",
            "server_seed",
            "client_seed",
            "nonce",
            "bet_amount",
            "board_width",
            "board_height",
            "mines_count",
            "house_edge",
            "revealed_cells",
            "mine_positions",
            "multiplier",
            "win_amount",
            "status",
            "result_hash",
            "created_at",
            "finished_at",
        ]

    def get_mine_positions(self, game):
        if not game.is_finished:
            return None
        return sorted(game.mine_positions, key=lambda p: (p["y"], p["x"]))
