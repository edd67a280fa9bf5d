# identifiers.py
# Normalizing and quoting of table/column names.

from typing import Union

import config
from errors import ErrorKind, GenerationError
from models import Dialect, IdentifierQuoting

QUOTE_PAIRS = ("'", '"', "`")

DIALECT_QUOTE_CHAR = {
    Dialect.POSTGRESQL: '"',
    Dialect.MYSQL: "`",
}


def normalize_identifier(raw) -> str:
    """Trim, and drop one matching pair of outer quotes if present."""
    trimmed = str(raw).strip()
    for q in QUOTE_PAIRS:
        if len(trimmed) >= 2 and trimmed.startswith(q) and trimmed.endswith(q):
            return trimmed[1:-1].strip()
    return trimmed


def resolve_quoting(quoting: Union[IdentifierQuoting, str, None]) -> IdentifierQuoting:
    if quoting is None:
        return IdentifierQuoting.parse(config.IDENTIFIER_QUOTING)
    return IdentifierQuoting.parse(quoting)


def format_identifier(name: str, dialect: Dialect = Dialect.POSTGRESQL,
                      quoting: Union[IdentifierQuoting, str, None] = None) -> str:
    normalized = normalize_identifier(name)
    if resolve_quoting(quoting) is IdentifierQuoting.PASSTHROUGH:
        return normalized
    q = DIALECT_QUOTE_CHAR[dialect]
    return q + normalized.replace(q, q + q) + q


def quote_table_name(table_name: str, dialect: Dialect = Dialect.POSTGRESQL,
                     quoting: Union[IdentifierQuoting, str, None] = None) -> str:
    """
    Quote a possibly schema-qualified table name, segment by segment.
    e.g. public.users -> "public"."users"
    """
    name = (table_name or "").strip()
    if not name:
        raise GenerationError(ErrorKind.EMPTY_INPUT, "Table name is required.")
    parts = []
    for part in name.split("."):
        if not normalize_identifier(part):
            raise GenerationError(ErrorKind.INVALID_STRUCTURE, f"Invalid table name: {name}")
        parts.append(format_identifier(part, dialect, quoting))
    return ".".join(parts)
