# value_formatter.py
# Render one row value as a SQL literal, aware of the column type and dialect.

import json
import math
import re
from decimal import Decimal
from typing import Any

from errors import ErrorKind, GenerationError
from models import ColumnDescriptor, Dialect

NUMERIC_TYPE_RE = re.compile(r"(int|serial|numeric|decimal|real|double|float|money)", re.I)
NUMERIC_TEXT_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")


def escape_sql_string(value: Any) -> str:
    return str(value).replace("'", "''")


def is_numeric_type(column_type: str) -> bool:
    return bool(NUMERIC_TYPE_RE.search(column_type or ""))


def _format_number(value, column: ColumnDescriptor) -> str:
    if isinstance(value, float) and not math.isfinite(value):
        raise GenerationError(ErrorKind.INVALID_NUMERIC, f'Invalid numeric value for column "{column.name}".')
    if isinstance(value, float):
        # plain decimal text: 2.0 -> 2, 1e16 -> 10000000000000000, 1e-07 -> 0.0000001
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return str(value)


def _format_structured(value, column: ColumnDescriptor, dialect: Dialect) -> str:
    # compact separators match what a browser JSON.stringify would emit
    json_text = escape_sql_string(json.dumps(value, separators=(",", ":"), ensure_ascii=False))
    if dialect is Dialect.POSTGRESQL and "jsonb" in column.type:
        return f"'{json_text}'::jsonb"
    if dialect is Dialect.POSTGRESQL and "json" in column.type:
        return f"'{json_text}'::json"
    return f"'{json_text}'"


def format_value(value: Any, column: ColumnDescriptor, dialect: Dialect = Dialect.POSTGRESQL) -> str:
    """
    Return SQL literal text for value.

    - None -> NULL, bool -> TRUE/FALSE, finite number -> decimal text
    - dict/list -> quoted JSON, with ::jsonb / ::json cast on postgresql json columns
    - numeric-looking string in a numeric column -> unquoted
    - anything else -> single-quoted with apostrophes doubled

    Raises GenerationError(InvalidNumeric) for NaN/Infinity.
    """
    if value is None:
        return "NULL"
    # bool before int: True is an int in Python
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return _format_number(value, column)
    if isinstance(value, (dict, list)):
        return _format_structured(value, column, dialect)
    if isinstance(value, str) and is_numeric_type(column.type):
        numeric_text = value.strip()
        if NUMERIC_TEXT_RE.fullmatch(numeric_text):
            return numeric_text
    return f"'{escape_sql_string(value)}'"
