from __future__ import annotations

import logging
from typing import Any, Generic, Mapping, TypeVar

from .entities import Entity, parse_entity
from .errors import NotFoundError, ValidationError
from .patch import ID_FIELD, apply_patch
from .repository import Repository

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class CrudService(Generic[E]):
    """
    Facade over a Repository.

    Adds not-found checks and the patch flow; everything else forwards to
    the repository unchanged.
    """

    def __init__(self, repository: Repository[E], *, reject_unknown_patch_fields: bool = False) -> None:
        self.repository = repository
        self.entity_type = repository.entity_type
        self.reject_unknown_patch_fields = reject_unknown_patch_fields

    @property
    def entity_name(self) -> str:
        return self.entity_type.entity_name

    def find_all(self) -> list[E]:
        return self.repository.find_all()

    def find_all_by(self, criteria: Mapping[str, Any]) -> list[E]:
        if not criteria:
            return self.repository.find_all()
        return self.repository.find_all_by(criteria)

    def find_by_id(self, entity_id: int) -> E:
        entity = self.repository.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    def create(self, payload: Mapping[str, Any]) -> E:
        """
        Insert a new entity. A client-supplied id is discarded so the store
        always assigns a fresh one.
        """
        data = {k: v for k, v in payload.items() if k != ID_FIELD}
        entity = parse_entity(self.entity_type, data)
        saved = self.repository.save(entity)
        logger.info("Created %s id=%s", self.entity_name, saved.id)
        return saved

    def replace(self, payload: Mapping[str, Any]) -> E:
        entity = parse_entity(self.entity_type, payload)
        if not entity.id:
            raise ValidationError(
                f"{self.entity_name.capitalize()} id is required in the request body",
                [{"field": ID_FIELD, "message": "required"}],
            )
        saved = self.repository.save(entity)
        logger.info("Replaced %s id=%s", self.entity_name, saved.id)
        return saved

    def patch(self, entity_id: int, patch: Mapping[str, Any]) -> E:
        existing = self.find_by_id(entity_id)
        patched = apply_patch(existing, patch, reject_unknown=self.reject_unknown_patch_fields)
        saved = self.repository.save(patched)
        logger.info("Patched %s id=%s fields=%s", self.entity_name, entity_id, sorted(patch))
        return saved

    def delete_by_id(self, entity_id: int) -> None:
        if not self.repository.delete_by_id(entity_id):
            raise NotFoundError(self.entity_name, entity_id)
        logger.info("Deleted %s id=%s", self.entity_name, entity_id)
