import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fritter.core.db import Base, get_db
from fritter.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    # no context manager: the lifespan would create tables on the configured DATABASE_URL
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Sign up and log in a user, returning the Authorization headers."""

    def _make(username: str, password: str = "password123") -> dict:
        res = client.post("/auth/signup", json={"username": username, "password": password})
        assert res.status_code == 201, res.text
        res = client.post("/auth/login", json={"username": username, "password": password})
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['accessToken']}"}

    return _make


@pytest.fixture
def add_fritter_pay(client):
    def _add(headers: dict, payment_username: str = "alice_venmo", payment_type: str = "Venmo") -> dict:
        res = client.post(
            "/api/payment-profiles",
            json={"paymentType": payment_type, "paymentUsername": payment_username, "paymentLink": ""},
            headers=headers,
        )
        assert res.status_code == 201, res.text
        return res.json()["fritterPay"]

    return _add
