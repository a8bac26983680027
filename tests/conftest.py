from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from sqlalchemy.engine import Engine

from cruddemo.config import DbConfig
from cruddemo.db import create_schema, drop_schema, make_engine


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """
    Database URL for SQL-backed tests.

    Set CRUDDEMO_TEST_DB_URL to run against MySQL (or any other SQLAlchemy
    URL). If not set, we use a throwaway SQLite file.
    """
    url = os.environ.get("CRUDDEMO_TEST_DB_URL")
    if url:
        return url
    return f"sqlite:///{tmp_path_factory.mktemp('db') / 'cruddemo.db'}"


@pytest.fixture(scope="session")
def engine(db_url: str) -> Iterator[Engine]:
    """
    Session-scoped SQLAlchemy engine for tests.

    We fail fast if the database is unreachable, so failures are actionable.
    """
    eng = make_engine(DbConfig(url=db_url))
    try:
        with eng.connect() as conn:
            conn.exec_driver_sql("SELECT 1")
    except Exception as exc:  # pragma: no cover
        pytest.fail(
            "Test database is not reachable.\n"
            f"- CRUDDEMO_TEST_DB_URL={db_url!r}\n"
            f"- Underlying error: {exc}",
            pytrace=False,
        )

    yield eng
    eng.dispose()


@pytest.fixture
def schema(engine: Engine) -> Iterator[Engine]:
    """Fresh employee/student tables for each test."""
    drop_schema(engine)
    create_schema(engine)
    yield engine
    drop_schema(engine)
