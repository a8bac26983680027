from __future__ import annotations

import itertools
import threading
from typing import Any, Generic, Mapping, Protocol, TypeVar

from .entities import Entity
from .errors import NotFoundError

E = TypeVar("E", bound=Entity)


class Repository(Protocol[E]):
    """
    Persistence gateway for one entity type.

    Implementations: SqlRepository (SQLAlchemy engine) and InMemoryRepository.
    """

    entity_type: type[E]

    def find_all(self) -> list[E]:
        """Return every entity ordered by id."""
        ...

    def find_all_by(self, criteria: Mapping[str, Any]) -> list[E]:
        """Return entities whose columns equal every value in criteria, ordered by id."""
        ...

    def find_by_id(self, entity_id: int) -> E | None:
        """Return the entity with this id, or None."""
        ...

    def save(self, entity: E) -> E:
        """
        Insert the entity when its id is 0, otherwise replace the stored row.

        Returns the persisted entity carrying its (possibly generated) id.
        Raises NotFoundError when replacing an id the store does not hold.
        """
        ...

    def delete_by_id(self, entity_id: int) -> bool:
        """Delete the entity with this id. Returns False if it was absent."""
        ...


class InMemoryRepository(Generic[E]):
    """
    Dict-backed repository. Ids are assigned from a monotonically increasing
    counter and never reused, even after deletes.
    """

    def __init__(self, entity_type: type[E]) -> None:
        self.entity_type = entity_type
        self._rows: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_all(self) -> list[E]:
        with self._lock:
            rows = [self._rows[k] for k in sorted(self._rows)]
        return [self.entity_type.from_row(row) for row in rows]

    def find_all_by(self, criteria: Mapping[str, Any]) -> list[E]:
        columns = set(self.entity_type.columns())
        for col in criteria:
            if col not in columns:
                raise ValueError(f"Unknown {self.entity_type.entity_name} column: {col!r}")
        return [
            entity
            for entity in self.find_all()
            if all(getattr(entity, col) == val for col, val in criteria.items())
        ]

    def find_by_id(self, entity_id: int) -> E | None:
        with self._lock:
            row = self._rows.get(entity_id)
        return None if row is None else self.entity_type.from_row(row)

    def save(self, entity: E) -> E:
        row = entity.to_row()
        with self._lock:
            if not entity.id:
                row["id"] = next(self._ids)
            elif entity.id not in self._rows:
                raise NotFoundError(self.entity_type.entity_name, entity.id)
            self._rows[row["id"]] = row
        return self.entity_type.from_row(row)

    def delete_by_id(self, entity_id: int) -> bool:
        with self._lock:
            return self._rows.pop(entity_id, None) is not None
