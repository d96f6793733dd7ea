import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("seeds", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="MinesweeperGame",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nonce", models.PositiveBigIntegerField()),
                ("bet_amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("board_width", models.IntegerField(default=5)),
                ("board_height", models.IntegerField(default=5)),
                ("mines_count", models.IntegerField(default=5)),
                ("house_edge", models.DecimalField(decimal_places=4, max_digits=5)),
                ("mine_positions", models.JSONField(default=list)),
                ("revealed_cells", models.JSONField(default=list)),
                ("multiplier", models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ("win_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("status", models.CharField(choices=[("playing", "Playing"), ("lost", "Lost"), ("cashed_out", "Cashed Out")], default="playing", max_length=20)),
                ("result_hash", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("finished_at", models.DateTimeField(blank=True, null=True)),
                ("seed_pair", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="minesweeper_games", to="seeds.seedpair")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-id"],
                "unique_together": {("seed_pair", "nonce")},
            },
        ),
    ]
