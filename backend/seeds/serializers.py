# seeds/serializers.py
from rest_framework import serializers

from provably_fair.seeds import CLIENT_SEED_MAX_LENGTH
from .models import AuditLog, HouseEdgeConfig, SeedPair


class SeedPairSerializer(serializers.ModelSerializer):
    server_seed = serializers.CharField(source="revealed_server_seed", read_only=True)

    class Meta:
        model = SeedPair
        fields = [
            "id",
            "server_seed_hash",
            "server_seed",
            "client_seed",
            "next_nonce",
            "status",
            "created_at",
            "retired_at",
        ]


class RotateIn(serializers.Serializer):
    client_seed = serializers.CharField(
        max_length=CLIENT_SEED_MAX_LENGTH, required=False, trim_whitespace=False
    )


class HouseEdgeSerializer(serializers.ModelSerializer):
    class Meta:
        model = HouseEdgeConfig
        fields = ["game", "house_edge", "updated_at"]


class AuditLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = AuditLog
        fields = ["id", "user", "action", "details", "created_at"]
