# structure_parser.py
# Turns the user's table structure text into ColumnDescriptors.
# Accepted shapes:
#   - JSON array:  [{"name": "id", "type": "bigint", "pk": true}, ...]
#   - line format: id:bigint:pk\nname:text
#   - bare names:  id name email   (or comma separated)

import json
import logging
import re
from typing import Any, Dict, List

import config
from errors import ErrorKind, GenerationError
from identifiers import normalize_identifier
from models import ColumnDescriptor

LOG = logging.getLogger(__name__)

PK_MARKERS = ("pk", "primary")
PK_FLAGS = ("primaryKey", "pk", "isPrimaryKey")
BARE_NAME_SPLIT_RE = re.compile(r"[\s,]+")


def _column_type(raw) -> str:
    return str(raw or config.DEFAULT_COLUMN_TYPE).lower()


def _parse_json_structure(text: str) -> List[ColumnDescriptor]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise GenerationError(ErrorKind.INVALID_STRUCTURE, f"Table structure is not valid JSON: {e.msg}.")
    except RecursionError:
        raise GenerationError(ErrorKind.INVALID_STRUCTURE, "Table structure JSON is nested too deeply.")
    if not isinstance(parsed, list) or not parsed:
        raise GenerationError(ErrorKind.INVALID_STRUCTURE, "Table structure JSON must be a non-empty array.")

    columns = []
    for index, column in enumerate(parsed):
        if not isinstance(column, dict) or not column.get("name"):
            raise GenerationError(ErrorKind.INVALID_COLUMN_AT_INDEX,
                                  f"Invalid column at index {index} in table structure.")
        name = normalize_identifier(column["name"])
        if not name:
            raise GenerationError(ErrorKind.INVALID_COLUMN_AT_INDEX,
                                  f"Invalid column at index {index} in table structure.")
        columns.append(ColumnDescriptor(
            name=name,
            type=_column_type(column.get("type")),
            primary_key=_is_primary_key(column),
        ))
    return columns


def _is_primary_key(column: Dict[str, Any]) -> bool:
    return any(bool(column.get(flag)) for flag in PK_FLAGS)


def _parse_bare_names(text: str) -> List[ColumnDescriptor]:
    names = [normalize_identifier(n) for n in BARE_NAME_SPLIT_RE.split(text) if n.strip()]
    if not names:
        raise GenerationError(ErrorKind.INVALID_STRUCTURE,
                              "Table structure must include at least one column name.")
    if not all(names):
        raise GenerationError(ErrorKind.INVALID_STRUCTURE, "Table structure contains an empty column name.")
    return [ColumnDescriptor(name=n, type=config.DEFAULT_COLUMN_TYPE, primary_key=False) for n in names]


def _parse_typed_lines(lines: List[str]) -> List[ColumnDescriptor]:
    columns = []
    for index, line in enumerate(lines):
        parts = [p.strip() for p in line.split(":")]
        name = normalize_identifier(parts[0])
        if not name:
            raise GenerationError(ErrorKind.INVALID_STRUCTURE,
                                  f"Missing column name in structure line {index + 1}.")
        col_type = parts[1] if len(parts) > 1 else ""
        marker = parts[2] if len(parts) > 2 else ""
        columns.append(ColumnDescriptor(
            name=name,
            type=_column_type(col_type),
            # marker is case-sensitive: "PK" is not a primary key marker
            primary_key=marker in PK_MARKERS,
        ))
    return columns


def parse_structure(structure_text: str) -> List[ColumnDescriptor]:
    """
    Parse structure text into an ordered list of ColumnDescriptor.
    Declaration order is kept; it drives the INSERT column order.
    Raises GenerationError (EmptyInput / InvalidStructure / InvalidColumnAtIndex).
    """
    trimmed = (structure_text or "").strip()
    if not trimmed:
        raise GenerationError(ErrorKind.EMPTY_INPUT, "Table structure is required.")

    if trimmed.startswith("["):
        columns = _parse_json_structure(trimmed)
        LOG.debug("structure parsed as JSON array (%d columns)", len(columns))
        return columns

    lines = [line.strip() for line in trimmed.splitlines()]
    lines = [line for line in lines if line]

    if not any(":" in line for line in lines):
        columns = _parse_bare_names(trimmed)
        LOG.debug("structure parsed as bare names (%d columns)", len(columns))
        return columns

    columns = _parse_typed_lines(lines)
    LOG.debug("structure parsed as name:type lines (%d columns)", len(columns))
    return columns
