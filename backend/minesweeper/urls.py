from django.urls import path
from . import views

urlpatterns = [
    path("start/", views.start_minesweeper, name="minesweeper-start"),
    path("reveal/", views.reveal_cell, name="minesweeper-reveal"),
    path("cash-out/", views.cash_out, name="minesweeper-cash-out"),
    path("verify/", views.verify, name="minesweeper-verify"),
    path("round-log/<int:game_id>/", views.round_log, name="minesweeper-round-log"),
]
