import os
from collections.abc import Iterator

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_db, make_engine
from main import app
from migrate import run_migrations
from models import Base


@pytest.fixture
def engine():
    # one shared in-memory connection so every session sees the same tables
    engine = make_engine("sqlite://", poolclass=StaticPool)
    run_migrations(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine) -> Iterator[TestClient]:
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db_override():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_product(client):
    def _make(name="Widget", price="10.00", description=None):
        body = {"name": name, "price": price}
        if description is not None:
            body["description"] = description
        response = client.post("/api/products", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_order(client):
    def _make(product_id, quantity=1):
        response = client.post("/api/orders", json={"product_id": product_id, "quantity": quantity})
        assert response.status_code == 201, response.text
        return response.json()

    return _make
