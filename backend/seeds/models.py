# seeds/models.py
from __future__ import annotations

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.db.models import Q

from provably_fair.defaults import DEFAULT_HOUSE_EDGE, GAME_DICE, GAME_MINESWEEPER

User = settings.AUTH_USER_MODEL


class HouseEdgeConfig(models.Model):
    GAME_CHOICES = [
        (GAME_DICE, "Dice"),
        (GAME_MINESWEEPER, "Minesweeper"),
    ]

    game = models.CharField(max_length=32, choices=GAME_CHOICES, unique=True)
    house_edge = models.DecimalField(
        max_digits=5, decimal_places=4,
        validators=[MinValueValidator(Decimal("0.0000")), MaxValueValidator(Decimal("0.5000"))],
        default=DEFAULT_HOUSE_EDGE,
    )
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.game} (edge={self.house_edge})"

    @staticmethod
    def get(game: str) -> "HouseEdgeConfig":
        default = getattr(settings, "HOUSE_EDGE", {}).get(game, DEFAULT_HOUSE_EDGE)
        obj, _ = HouseEdgeConfig.objects.get_or_create(game=game, defaults={"house_edge": default})
        return obj


class SeedPair(models.Model):
    STATUS_ACTIVE = "active"
    STATUS_RETIRED = "retired"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_RETIRED, "Retired"),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="seed_pairs")
    server_seed = models.CharField(max_length=64)  # secret until retired
    server_seed_hash = models.CharField(max_length=64, db_index=True)  # sha256(server_seed)
    client_seed = models.CharField(max_length=128)
    next_nonce = models.PositiveBigIntegerField(default=0)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    retired_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=Q(status="active"),
                name="one_active_seed_pair_per_user",
            ),
        ]

    def __str__(self):
        return f"SeedPair {self.id} ({self.status})"

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    @property
    def revealed_server_seed(self):
        return None if self.is_active else self.server_seed


class AuditLog(models.Model):
    ACTION_TYPES = [
        ("SEED_CREATED", "Server seed created"),
        ("SEED_REVEALED", "Server seed revealed"),
        ("DICE_ROLLED", "Dice rolled"),
        ("MINES_DEALT", "Minesweeper board dealt"),
        ("MINES_SETTLED", "Minesweeper game settled"),
    ]
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    action = models.CharField(max_length=32, choices=ACTION_TYPES)
    details = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        indexes = [models.Index(fields=["action", "created_at"], name="seeds_audit_action_idx")]
