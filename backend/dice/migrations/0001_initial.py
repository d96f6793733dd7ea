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
            name="DiceBet",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nonce", models.PositiveBigIntegerField()),
                ("bet_amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("target", models.DecimalField(decimal_places=2, max_digits=5)),
                ("direction", models.CharField(choices=[("under", "Roll under"), ("over", "Roll over")], max_length=8)),
                ("house_edge", models.DecimalField(decimal_places=4, max_digits=5)),
                ("roll", models.FloatField()),
                ("multiplier", models.DecimalField(decimal_places=4, max_digits=12)),
                ("payout", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("won", models.BooleanField(default=False)),
                ("result_hash", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("seed_pair", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="dice_bets", to="seeds.seedpair")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-id"],
                "indexes": [models.Index(fields=["user", "created_at"], name="dice_bet_user_created_idx")],
                "unique_together": {("seed_pair", "nonce")},
            },
        ),
    ]
