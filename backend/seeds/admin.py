# seeds/admin.py
from django.contrib import admin
from .models import AuditLog, HouseEdgeConfig, SeedPair


@admin.register(HouseEdgeConfig)
class HouseEdgeConfigAdmin(admin.ModelAdmin):
    list_display = ("game", "house_edge", "updated_at")
    list_editable = ("house_edge",)


@admin.register(SeedPair)
class SeedPairAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "server_seed_hash", "client_seed", "next_nonce", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("server_seed_hash", "user__username")
    exclude = ("server_seed",)
    readonly_fields = ("server_seed_hash", "client_seed", "next_nonce", "created_at", "retired_at")


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("id", "action", "user", "created_at")
    list_filter = ("action",)
