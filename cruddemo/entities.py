from __future__ import annotations

from typing import Any, ClassVar, Mapping, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .errors import ValidationError


class Entity(BaseModel):
    """
    A persisted record with an integer primary key.

    id == 0 means "not yet persisted"; saving such an entity inserts it and
    the store assigns the key. Attribute names double as column names, JSON
    uses their camelCase aliases.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    table_name: ClassVar[str]
    entity_name: ClassVar[str]

    id: int = 0

    @classmethod
    def columns(cls) -> list[str]:
        return list(cls.model_fields)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Entity":
        return cls.model_validate(row)

    def to_row(self) -> dict[str, Any]:
        return self.model_dump()

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def parse_entity(entity_type: type[Entity], payload: Mapping[str, Any]) -> Entity:
    """
    Validate a JSON payload into an entity, raising cruddemo's ValidationError.
    """
    try:
        return entity_type.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(entity_type, exc), _errors(exc)) from exc


def _errors(exc: PydanticValidationError) -> list[dict]:
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def _describe(entity_type: type[Entity], exc: PydanticValidationError) -> str:
    details = "; ".join(f"{e['field']}: {e['message']}" for e in _errors(exc))
    return f"Invalid {entity_type.entity_name}: {details}"


class Employee(Entity):
    table_name: ClassVar[str] = "employee"
    entity_name: ClassVar[str] = "employee"

    first_name: str
    last_name: str
    email: Optional[str] = None


class Student(Entity):
    table_name: ClassVar[str] = "student"
    entity_name: ClassVar[str] = "student"

    first_name: str
    last_name: str
    email: Optional[str] = None
