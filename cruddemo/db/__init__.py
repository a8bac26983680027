from .engine import make_engine
from .repository import SqlRepository
from .schema import create_schema, drop_schema
from .session import DbSession

__all__ = [
    "DbSession",
    "SqlRepository",
    "create_schema",
    "drop_schema",
    "make_engine",
]
