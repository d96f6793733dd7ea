from django.urls import path
from . import views

urlpatterns = [
    path("active/", views.active_seed, name="seed-active"),
    path("rotate/", views.rotate_seed, name="seed-rotate"),
    path("house-edge/", views.house_edges, name="seed-house-edge"),
    path("audit-export/", views.audit_export, name="seed-audit-export"),
    path("<int:pk>/", views.SeedPairDetailView.as_view(), name="seed-detail"),
]
