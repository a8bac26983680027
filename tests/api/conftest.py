from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from cruddemo.api import create_app
from cruddemo.config import AppConfig, DbConfig


@pytest.fixture(params=["sql", "memory"])
def client(request: pytest.FixtureRequest, db_url: str) -> Iterator[TestClient]:
    """Client for an app on each storage backend."""
    if request.param == "sql":
        engine = request.getfixturevalue("schema")
        app = create_app(AppConfig(db=DbConfig(url=db_url)), engine=engine)
    else:
        app = create_app(AppConfig(storage="memory"))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def strict_client() -> Iterator[TestClient]:
    app = create_app(AppConfig(storage="memory", reject_unknown_patch_fields=True))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def daffy(client: TestClient) -> dict:
    resp = client.post(
        "/api/employees",
        json={"firstName": "Daffy", "lastName": "Duck", "email": "daffy@luv2code.com"},
    )
    assert resp.status_code == 201
    return resp.json()
