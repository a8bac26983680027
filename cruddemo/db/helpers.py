from __future__ import annotations

import re
from typing import Any, Mapping

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def validate_identifier(name: str, identifier_type: str = "identifier") -> str:
    """
    Validate that an identifier (table/column name) is safe for SQL interpolation.

    Table and column names come from entity declarations, never from request
    data, but they are still interpolated into SQL text so the format is
    checked before use.

    Returns:
        The validated identifier (unchanged if valid)

    Raises:
        TypeError: If identifier is not a string
        ValueError: If identifier contains unsafe characters or is invalid

    Example:
        >>> validate_identifier("employee", "table")
        'employee'
        >>> validate_identifier("'; DROP TABLE--", "table")
        ValueError: Invalid table '; DROP TABLE--': ...
    """
    if not isinstance(name, str):
        raise TypeError(f"{identifier_type} must be a string, got {type(name).__name__}")

    if not name:
        raise ValueError(f"{identifier_type} cannot be empty")

    if not _IDENTIFIER_RE.match(name):
        raise ValueError(
            f"Invalid {identifier_type} {name!r}: "
            "must start with letter/underscore and contain only alphanumeric characters and underscores"
        )

    # MySQL's limit is the tightest of the supported backends
    if len(name) > 64:
        raise ValueError(f"{identifier_type} {name!r} exceeds the 64-character limit")

    return name


def build_where(criteria: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
    """
    Build an AND-joined equality WHERE clause with bound parameters.

    Keys are sorted so the generated SQL is deterministic. Returns an empty
    clause for empty criteria.

    Example:
        >>> build_where({"last_name": "Duck"})
        ('WHERE last_name = :where_0', {'where_0': 'Duck'})
    """
    clauses = []
    params: dict[str, Any] = {}
    for i, (col, val) in enumerate(sorted(criteria.items())):
        col = validate_identifier(col, "column name")
        param_name = f"where_{i}"
        clauses.append(f"{col} = :{param_name}")
        params[param_name] = val

    if not clauses:
        return "", params
    return "WHERE " + " AND ".join(clauses), params
