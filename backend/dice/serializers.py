# dice/serializers.py
from decimal import Decimal
from django.conf import settings
from rest_framework import serializers

from provably_fair.payouts import DIRECTIONS
from provably_fair.seeds import CLIENT_SEED_MAX_LENGTH
from .models import DiceBet


class RollIn(serializers.Serializer):
    bet_amount = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=settings.DICE_LIMITS["min_stake"],
        max_value=settings.DICE_LIMITS["max_stake"],
    )
    target = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal("0.01"),
        max_value=Decimal("99.99"),
    )
    direction = serializers.ChoiceField(choices=DIRECTIONS)


class DiceBetSerializer(serializers.ModelSerializer):
    server_seed_hash = serializers.CharField(source="seed_pair.server_seed_hash", read_only=True)
    client_seed = serializers.CharField(source="seed_pair.client_seed", read_only=True)

    class Meta:
        model = DiceBet
        fields = [
            "id",
            "seed_pair",
            "server_seed_hash",
            "client_seed",
            "nonce",
            "bet_amount",
            "target",
            "direction",
            "house_edge",
            "roll",
            "won",
            "multiplier",
            "payout",
            "result_hash",
            "created_at",
        ]


class VerifyIn(serializers.Serializer):
    server_seed = serializers.CharField(max_length=64)
    client_seed = serializers.CharField(max_length=CLIENT_SEED_MAX_LENGTH, trim_whitespace=False)
    nonce = serializers.IntegerField(min_value=0)
    roll = serializers.FloatField(required=False)
    result_hash = serializers.CharField(max_length=64, required=False)
    server_seed_hash = serializers.CharField(max_length=64, required=False)
    tolerance = serializers.FloatField(min_value=0, default=0.0)

    def validate(self, attrs):
        if "roll" not in attrs and "result_hash" not in attrs:
            raise serializers.ValidationError("Provide a roll or a result_hash to verify")
        return attrs


class LookupTableIn(serializers.Serializer):
    direction = serializers.ChoiceField(choices=DIRECTIONS, default="under")
    bet_amount = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=settings.DICE_LIMITS["min_stake"],
        max_value=settings.DICE_LIMITS["max_stake"],
        default=Decimal("1.00"),
    )
