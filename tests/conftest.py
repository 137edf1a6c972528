import os

# Point the app at SQLite before anything imports the engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("APP_ENV", "test")

import pytest
from fastapi import HTTPException, Request
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from spendwise.core.security import get_current_user_id
from spendwise.db.session import Base, get_db
from spendwise.main import app, rate_limiter
from spendwise.services.periods import today

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

USER_ID = "user_test_1"
OTHER_USER_ID = "user_test_2"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def override_current_user(request: Request) -> str:
    # Tests pass the owner id itself as the bearer token
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return auth[len("Bearer "):]


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user_id] = override_current_user
    rate_limiter.reset()
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        c.headers.update({"Authorization": f"Bearer {USER_ID}"})
        yield c


@pytest.fixture
def other_client():
    with TestClient(app) as c:
        c.headers.update({"Authorization": f"Bearer {OTHER_USER_ID}"})
        yield c


@pytest.fixture
def anonymous_client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_account(client):
    def _make(**overrides):
        payload = {"name": "Wallet", "type": "cash", "initialBalance": 1000}
        payload.update(overrides)
        response = client.post("/api/accounts", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_category(client):
    def _make(**overrides):
        payload = {"name": "Food", "type": "expense"}
        payload.update(overrides)
        response = client.post("/api/categories", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_transaction(client):
    def _make(account_id, **overrides):
        payload = {
            "accountId": account_id,
            "amount": 100,
            "type": "expense",
            "txnDate": today().isoformat(),
        }
        payload.update(overrides)
        response = client.post("/api/transactions", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make
