from django.conf import settings
from django.db import models

from seeds.models import SeedPair


class DiceBet(models.Model):
    DIRECTION_CHOICES = [
        ("under", "Roll under"),
        ("over", "Roll over"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    seed_pair = models.ForeignKey(SeedPair, on_delete=models.PROTECT, related_name="dice_bets")
    nonce = models.PositiveBigIntegerField()
    bet_amount = models.DecimalField(max_digits=14, decimal_places=2)
    target = models.DecimalField(max_digits=5, decimal_places=2)
    direction = models.CharField(max_length=8, choices=DIRECTION_CHOICES)
    house_edge = models.DecimalField(max_digits=5, decimal_places=4)
    roll = models.FloatField()  # [0, 100)
    multiplier = models.DecimalField(max_digits=12, decimal_places=4)
    payout = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    won = models.BooleanField(default=False)
    result_hash = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-id"]
        unique_together = [("seed_pair", "nonce")]
        indexes = [
            models.Index(fields=["user", "created_at"], name="dice_bet_user_created_idx"),
        ]

    def __str__(self):
        return f"DiceBet {self.id} roll={self.roll:.2f} {self.direction} {self.target}"
