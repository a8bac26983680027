class CruddemoError(Exception):
    """Base exception for cruddemo errors."""


class NotFoundError(CruddemoError):
    """The requested id is not present in the store."""

    def __init__(self, entity_name: str, entity_id: int) -> None:
        super().__init__(f"{entity_name.capitalize()} id not found - {entity_id}")
        self.entity_name = entity_name
        self.entity_id = entity_id


class ForbiddenFieldError(CruddemoError):
    """A client tried to set a field that may not be patched (the id)."""


class ValidationError(CruddemoError):
    """A value cannot be coerced to its field type or persisted."""

    def __init__(self, message: str, errors: list[dict] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class UnknownFieldError(ValidationError):
    """A patch names fields the entity does not declare."""


class RepositoryError(CruddemoError):
    """Any other failure raised by the backing store."""
