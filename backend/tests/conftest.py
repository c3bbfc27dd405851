from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from marketplace.config import Settings
from marketplace.main import create_app

SELLER = "seller-uid"
BUYER = "buyer-uid"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        org_id="test-org",
        app_id="test-app",
        auth_secret_key="test-secret",
        s3_bucket="test-bucket",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    with patch("marketplace.main.get_s3_client", return_value=MagicMock()):
        return create_app(settings)


@pytest.fixture
def client(app):
    # entering the client runs startup, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session(app, client):
    with Session(app.state.engine) as s:
        yield s


@pytest.fixture
def auth(app):
    def _headers(uid):
        token = app.state.token_verifier.create_access_token({"sub": uid})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_product(client, auth):
    def _make(uid=SELLER, **overrides):
        body = {"title": "Oak desk", "price": 120, "category": "furniture"}
        body.update(overrides)
        response = client.post("/products", json=body, headers=auth(uid))
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _make
