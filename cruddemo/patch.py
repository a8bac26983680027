from __future__ import annotations

import logging
from typing import Any, Mapping, TypeVar

from .entities import Entity, parse_entity
from .errors import ForbiddenFieldError, UnknownFieldError, ValidationError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

ID_FIELD = "id"


def _accepted_keys(entity_type: type[Entity]) -> dict[str, str]:
    """Map every accepted patch key (alias or attribute name) to its JSON alias."""
    keys: dict[str, str] = {}
    for name, info in entity_type.model_fields.items():
        alias = info.alias or name
        keys[name] = alias
        keys[alias] = alias
    return keys


def apply_patch(existing: E, patch: Mapping[str, Any], *, reject_unknown: bool = False) -> E:
    """
    Merge a sparse update into an entity and return a new, validated entity.

    The entity is turned into a field-value mapping keyed by JSON alias, each
    declared field named in the patch overwrites its entry, and the merged
    mapping is validated back into an entity of the same type. The existing
    entity is never mutated.

    Patch keys may use either the JSON alias (firstName) or the attribute
    name (first_name). Keys the entity does not declare are dropped, or
    rejected with UnknownFieldError when reject_unknown is set. Naming one
    field under both spellings is a ValidationError.

    Raises:
        ForbiddenFieldError: If the patch contains the id key
        UnknownFieldError: If reject_unknown is set and the patch names undeclared fields
        ValidationError: If a patched value cannot be coerced to its field type,
            or one field is named under both spellings
    """
    entity_type = type(existing)
    if ID_FIELD in patch:
        raise ForbiddenFieldError(
            f"{entity_type.entity_name.capitalize()} id not allowed in request body - {existing.id}"
        )

    accepted = _accepted_keys(entity_type)
    unknown = sorted(key for key in patch if key not in accepted)
    if unknown:
        if reject_unknown:
            raise UnknownFieldError(
                f"Unknown {entity_type.entity_name} field(s): {', '.join(unknown)}",
                [{"field": key, "message": "unknown field"} for key in unknown],
            )
        logger.debug("Dropping undeclared %s patch keys: %s", entity_type.entity_name, unknown)

    updates: dict[str, Any] = {}
    duplicated = set()
    for key, value in patch.items():
        if key not in accepted:
            continue
        alias = accepted[key]
        if alias in updates:
            duplicated.add(alias)
        updates[alias] = value
    if duplicated:
        raise ValidationError(
            f"{entity_type.entity_name.capitalize()} field(s) named more than once: "
            f"{', '.join(sorted(duplicated))}",
            [{"field": alias, "message": "named more than once"} for alias in sorted(duplicated)],
        )

    merged = existing.model_dump(by_alias=True)
    merged.update(updates)

    return parse_entity(entity_type, merged)
