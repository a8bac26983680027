from __future__ import annotations

import logging

from sqlalchemy import Column, Integer, MetaData, String, Table
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

metadata = MetaData()

employee_table = Table(
    "employee",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("first_name", String(45), nullable=False),
    Column("last_name", String(45), nullable=False),
    Column("email", String(45), nullable=True),
)

student_table = Table(
    "student",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("first_name", String(45), nullable=False),
    Column("last_name", String(45), nullable=False),
    Column("email", String(45), nullable=True),
)


def create_schema(engine: Engine) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    metadata.create_all(engine)
    logger.info("Schema ready: %s", ", ".join(sorted(metadata.tables)))


def drop_schema(engine: Engine) -> None:
    metadata.drop_all(engine)
