from django.urls import path
from . import views

urlpatterns = [
    path("roll/", views.roll, name="dice-roll"),
    path("verify/", views.verify, name="dice-verify"),
    path("lookup-table/", views.lookup_table, name="dice-lookup-table"),
    path("history/", views.history, name="dice-history"),
]
