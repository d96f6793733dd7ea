from django.db import models
from django.conf import settings

from provably_fair.outcomes import BoardConfig
from seeds.models import SeedPair


class MinesweeperGame(models.Model):
    STATUS_PLAYING = "playing"
    STATUS_LOST = "lost"
    STATUS_CASHED = "cashed_out"

    STATUS_CHOICES = [
        (STATUS_PLAYING, "Playing"),
        (STATUS_LOST, "Lost"),
        (STATUS_CASHED, "Cashed Out"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    seed_pair = models.ForeignKey(SeedPair, on_delete=models.PROTECT, related_name="minesweeper_games")
    nonce = models.PositiveBigIntegerField()  # first of mines_count reserved nonces
    bet_amount = models.DecimalField(max_digits=14, decimal_places=2)
    board_width = models.IntegerField(default=5)
    board_height = models.IntegerField(default=5)
    mines_count = models.IntegerField(default=5)
    house_edge = models.DecimalField(max_digits=5, decimal_places=4)
    mine_positions = models.JSONField(default=list)  # [{"x":..,"y":..}] in draw order, never sent while playing
    revealed_cells = models.JSONField(default=list)
    multiplier = models.DecimalField(max_digits=12, decimal_places=4, default=0)
    win_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PLAYING)
    result_hash = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)
    finished_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-id"]
        unique_together = [("seed_pair", "nonce")]

    def __str__(self):
        return f"MinesweeperGame {self.id} ({self.status})"

    @property
    def board(self) -> BoardConfig:
        return BoardConfig(self.board_width, self.board_height, self.mines_count)

    @property
    def is_finished(self) -> bool:
        return self.status != self.STATUS_PLAYING
