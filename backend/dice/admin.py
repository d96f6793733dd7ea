from django.contrib import admin
from .models import DiceBet


@admin.register(DiceBet)
class DiceBetAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "nonce", "bet_amount", "target", "direction", "roll", "won", "payout", "created_at")
    list_filter = ("direction", "won")
    readonly_fields = ("seed_pair", "nonce", "house_edge", "roll", "multiplier", "payout", "won", "result_hash", "created_at")
