from __future__ import annotations

import logging
import time
from typing import Any, Generic, Mapping, TypeVar

from sqlalchemy.engine import Engine
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from ..entities import Entity
from ..errors import NotFoundError, RepositoryError, ValidationError
from .helpers import build_where, validate_identifier
from .metrics import observe_db_write
from .session import DbSession

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

# widest integer key any supported backend can bind (signed 64-bit)
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def _in_key_range(entity_id: int) -> bool:
    return MIN_ID <= entity_id <= MAX_ID


class SqlRepository(Generic[E]):
    """
    Repository over a SQLAlchemy engine.

    Every call runs in its own DbSession, so each operation is one short
    transaction. Reads followed by writes (the patch flow) are not isolated
    from each other; concurrent writers to the same id are last-write-wins.

    Store failures are translated at this boundary:
    - IntegrityError / DataError -> ValidationError (value cannot be persisted)
    - any other SQLAlchemyError  -> RepositoryError
    """

    def __init__(self, engine: Engine, entity_type: type[E]) -> None:
        self.engine = engine
        self.entity_type = entity_type
        self.table = validate_identifier(entity_type.table_name, "table")
        self.columns = [validate_identifier(c, "column name") for c in entity_type.columns()]
        self._select = f"SELECT {', '.join(self.columns)} FROM {self.table}"

    def find_all(self) -> list[E]:
        return self.find_all_by({})

    def find_all_by(self, criteria: Mapping[str, Any]) -> list[E]:
        for col in criteria:
            if col not in self.columns:
                raise ValueError(f"Unknown {self.entity_type.entity_name} column: {col!r}")
        where_sql, params = build_where(criteria)
        sql = f"{self._select} {where_sql} ORDER BY id" if where_sql else f"{self._select} ORDER BY id"
        try:
            with DbSession(self.engine) as session:
                rows = session.fetch_all(sql, params)
        except SQLAlchemyError as exc:
            raise RepositoryError(str(exc)) from exc
        return [self.entity_type.from_row(row) for row in rows]

    def find_by_id(self, entity_id: int) -> E | None:
        if not _in_key_range(entity_id):
            return None
        try:
            with DbSession(self.engine) as session:
                row = session.fetch_one(f"{self._select} WHERE id = :id", {"id": entity_id})
        except SQLAlchemyError as exc:
            raise RepositoryError(str(exc)) from exc
        return None if row is None else self.entity_type.from_row(row)

    def save(self, entity: E) -> E:
        if entity.id:
            if not _in_key_range(entity.id):
                raise NotFoundError(self.entity_type.entity_name, entity.id)
            return self._write("update", self._update, entity)
        return self._write("insert", self._insert, entity)

    def delete_by_id(self, entity_id: int) -> bool:
        if not _in_key_range(entity_id):
            return False
        return self._write("delete", self._delete, entity_id)

    def _write(self, op_type: str, fn, arg):
        start_time = time.monotonic()
        status = "success"
        try:
            with DbSession(self.engine) as session:
                return fn(session, arg)
        except (IntegrityError, DataError) as exc:
            status = "error"
            raise ValidationError(
                f"Could not persist {self.entity_type.entity_name}: {exc.orig}"
            ) from exc
        except SQLAlchemyError as exc:
            status = "error"
            raise RepositoryError(str(exc)) from exc
        except Exception:
            status = "error"
            raise
        finally:
            latency = time.monotonic() - start_time
            observe_db_write(self.table, op_type, status, latency)

    def _insert(self, session: DbSession, entity: E) -> E:
        row = entity.to_row()
        # id is assigned by the store
        cols = [c for c in self.columns if c != "id"]
        col_names = ", ".join(cols)
        placeholders = ", ".join(f":{c}" for c in cols)
        new_id = session.execute_insert(
            f"INSERT INTO {self.table} ({col_names}) VALUES ({placeholders})",
            {c: row[c] for c in cols},
        )
        logger.info("Inserted %s with id=%s", self.entity_type.entity_name, new_id)
        return entity.model_copy(update={"id": new_id})

    def _update(self, session: DbSession, entity: E) -> E:
        row = entity.to_row()
        cols = [c for c in self.columns if c != "id"]
        set_clause = ", ".join(f"{c} = :{c}" for c in cols)
        rc = session.execute(
            f"UPDATE {self.table} SET {set_clause} WHERE id = :id",
            {c: row[c] for c in self.columns},
        )
        if rc == 0:
            raise NotFoundError(self.entity_type.entity_name, entity.id)
        logger.info("Updated %s with id=%s", self.entity_type.entity_name, entity.id)
        return entity

    def _delete(self, session: DbSession, entity_id: int) -> bool:
        rc = session.execute(f"DELETE FROM {self.table} WHERE id = :id", {"id": entity_id})
        if rc:
            logger.info("Deleted %s with id=%s", self.entity_type.entity_name, entity_id)
        return rc > 0
