from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path('admin-panel/', admin.site.urls),

    # Seeds / commitments
    path('api/seeds/', include('seeds.urls')),

    # Provably fair games
    path('api/dice/', include('dice.urls')),
    path('api/minesweeper/', include('minesweeper.urls')),
]
