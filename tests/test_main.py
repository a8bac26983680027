from __future__ import annotations

import pytest

from cruddemo import __main__ as cli


@pytest.fixture
def uvicorn_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    for var in (
        "CRUDDEMO_DB_URL",
        "CRUDDEMO_STORAGE",
        "CRUDDEMO_API_PREFIX",
        "CRUDDEMO_REJECT_UNKNOWN_PATCH_FIELDS",
        "CRUDDEMO_COACH",
        "CRUDDEMO_ANOTHER_COACH",
    ):
        monkeypatch.delenv(var, raising=False)

    calls: list[dict] = []

    def fake_run(app, **kwargs) -> None:
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    return calls


def test_main_parses_arguments_and_runs_app(uvicorn_calls: list[dict]) -> None:
    cli.main(["--host", "0.0.0.0", "--port", "9000", "--storage", "memory", "--log-level", "debug"])

    (call,) = uvicorn_calls
    assert call["host"] == "0.0.0.0"
    assert call["port"] == 9000
    assert call["log_level"] == "debug"
    assert call["app"].state.config.storage == "memory"


def test_main_passes_db_url_to_sql_backend(uvicorn_calls: list[dict]) -> None:
    cli.main(["--db-url", "sqlite://", "--storage", "sql"])

    (call,) = uvicorn_calls
    config = call["app"].state.config
    assert config.storage == "sql"
    assert config.db.url == "sqlite://"
    assert call["host"] == "127.0.0.1"
    assert call["port"] == 8080


def test_main_defaults_come_from_environment(
    uvicorn_calls: list[dict], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CRUDDEMO_STORAGE", "memory")
    monkeypatch.setenv("CRUDDEMO_COACH", "tennisCoach")

    cli.main([])

    config = uvicorn_calls[0]["app"].state.config
    assert config.storage == "memory"
    assert config.coach == "tennisCoach"


def test_main_rejects_unknown_storage(uvicorn_calls: list[dict]) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--storage", "redis"])

    assert uvicorn_calls == []
