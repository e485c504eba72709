import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import inspect
from sqlmodel import Session, SQLModel

from lostfound import errors
from lostfound.db.db import build_engine, create_db_and_tables, get_session
from lostfound.main import app
from lostfound.utils.sms_service import get_notifier

fake = Faker()


class RecordingNotifier:
    def __init__(self):
        self.items = []
        self.pending_at_dispatch = []

    def item_reported(self, item):
        self.items.append(item)
        self.pending_at_dispatch.append(inspect(item).pending)


class FailingNotifier(RecordingNotifier):
    def item_reported(self, item):
        super().item_reported(item)
        raise errors.UpstreamError("SMS provider unavailable")


def mock_admin_request():
    return {
        "username": fake.unique.user_name(),
        "password": fake.password(),
        "email": fake.unique.email(),
        "firstName": fake.first_name(),
        "lastName": fake.last_name(),
        "phoneNumber": fake.random_int(1000000, 9999999),
    }


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(engine, notifier):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_notifier] = lambda: notifier

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def admin_account(client):
    original_request = mock_admin_request()

    response = client.post("/api/admin/create", json=original_request)
    assert response.status_code == 200

    body = response.json()
    return {
        "account": body["account"],
        "token": body["token"],
        "original_request": original_request,
    }


@pytest.fixture
def auth_headers(admin_account):
    return {"Authorization": f"Bearer {admin_account['token']}"}
