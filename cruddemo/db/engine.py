from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from ..config import DbConfig


def is_sqlite_memory_url(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def make_engine(db_config: DbConfig) -> Engine:
    """
    Create the process-wide engine for the configured database URL.

    In-memory SQLite databases exist per connection, so they are served
    from a single shared connection (StaticPool).
    """
    kwargs: dict = {}
    if db_config.url.startswith("sqlite"):
        # request handlers run on a thread pool; pooled connections move between threads
        kwargs["connect_args"] = {"check_same_thread": False}
        if is_sqlite_memory_url(db_config.url):
            kwargs["poolclass"] = StaticPool
    return create_engine(
        db_config.url,
        echo=db_config.echo,
        pool_pre_ping=db_config.pool_pre_ping,
        **kwargs,
    )
