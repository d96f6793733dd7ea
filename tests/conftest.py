import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

SERVER_SEED = "ab" * 32
SERVER_SEED_HASH = "271a413bd339c5709fdceaec41f14f11e9fbfb5042d72d331c65f32b284cd09a"
CLIENT_SEED = "player-seed"


@pytest.fixture
def server_seed():
    return SERVER_SEED


@pytest.fixture
def client_seed():
    return CLIENT_SEED


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(username="player", password="pass1234")


@pytest.fixture
def admin_user(db):
    return get_user_model().objects.create_superuser(
        username="admin", email="admin@example.com", password="pass1234"
    )


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
