# minesweeper/admin.py
from django.contrib import admin
from .models import MinesweeperGame


@admin.register(MinesweeperGame)
class MinesweeperGameAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "bet_amount", "board_width", "board_height", "mines_count", "status", "win_amount", "created_at")
    list_filter = ("status",)
    exclude = ("mine_positions",)
    readonly_fields = ("seed_pair", "nonce", "result_hash", "finished_at")
