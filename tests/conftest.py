import pytest
from fastapi.testclient import TestClient

from gyatt_api.app.core.config import Settings
from gyatt_api.app.core.store import MemoryBackend, RecordStore
from gyatt_api.app.main import create_app

ADMIN_EMAIL = "founder@test.local"
ADMIN_PASSWORD = "founder-pass"
SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings():
    return Settings(
        secret_key=SECRET,
        bcrypt_rounds=4,
        storage_backend="memory",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def store():
    return RecordStore(MemoryBackend())


@pytest.fixture
def client(settings, store):
    app = create_app(settings, store=store)
    # Entering the context runs startup, which creates the founder account.
    with TestClient(app) as c:
        yield c


def login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    return bearer(login(client, ADMIN_EMAIL, ADMIN_PASSWORD)["token"])


@pytest.fixture
def member_headers(client):
    return bearer(login(client, "member@test.local", "member-pass")["token"])
