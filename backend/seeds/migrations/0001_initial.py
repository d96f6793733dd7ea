from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="HouseEdgeConfig",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("game", models.CharField(choices=[("dice", "Dice"), ("minesweeper", "Minesweeper")], max_length=32, unique=True)),
                ("house_edge", models.DecimalField(
                    decimal_places=4,
                    default=Decimal("0.01"),
                    max_digits=5,
                    validators=[
                        django.core.validators.MinValueValidator(Decimal("0.0000")),
                        django.core.validators.MaxValueValidator(Decimal("0.5000")),
                    ],
                )),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="SeedPair",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("server_seed", models.CharField(max_length=64)),
                ("server_seed_hash", models.CharField(db_index=True, max_length=64)),
                ("client_seed", models.CharField(max_length=128)),
                ("next_nonce", models.PositiveBigIntegerField(default=0)),
                ("status", models.CharField(choices=[("active", "Active"), ("retired", "Retired")], default="active", max_length=16)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("retired_at", models.DateTimeField(blank=True, null=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="seed_pairs", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-id"],
            },
        ),
        migrations.AddConstraint(
            model_name="seedpair",
            constraint=models.UniqueConstraint(
                condition=models.Q(("status", "active")),
                fields=("user",),
                name="one_active_seed_pair_per_user",
            ),
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(choices=[
                    ("SEED_CREATED", "Server seed created"),
                    ("SEED_REVEALED", "Server seed revealed"),
                    ("DICE_ROLLED", "Dice rolled"),
                    ("MINES_DEALT", "Minesweeper board dealt"),
                    ("MINES_SETTLED", "Minesweeper game settled"),
                ], max_length=32)),
                ("details", models.JSONField(default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["id"],
                "indexes": [models.Index(fields=["action", "created_at"], name="seeds_audit_action_idx")],
            },
        ),
    ]
