# row_parser.py
# Turns free-form row input into row dicts keyed by column name.
# Strategies are tried in order; the first that fits wins:
#   json              whole text is a JSON array of objects or one object
#   ndjson            every non-empty line is a JSON object
#   blank-line-groups one value per line, records separated by blank lines
#   tab-separated     one record per line, values split on tabs
#   flat              one value per line, chunked by column count

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from errors import ErrorKind, GenerationError
from models import ColumnDescriptor

LOG = logging.getLogger(__name__)

Row = Dict[str, Any]

NULL_RE = re.compile(r"^null$", re.I)
TRUE_RE = re.compile(r"^true$", re.I)
FALSE_RE = re.compile(r"^false$", re.I)


def parse_plain_value(raw: str) -> Any:
    """Decode one plain-text token: null/true/false (any case) or the trimmed string."""
    value = raw.strip()
    if NULL_RE.match(value):
        return None
    if TRUE_RE.match(value):
        return True
    if FALSE_RE.match(value):
        return False
    return value


def map_values_to_row(values: List[str], structure: List[ColumnDescriptor]) -> Row:
    row = {}
    for index, column in enumerate(structure):
        raw = values[index] if index < len(values) else ""
        row[column.name] = parse_plain_value(raw)
    return row


def _try_json(text: str) -> Optional[List[Row]]:
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None

    if isinstance(parsed, list):
        if not parsed:
            raise GenerationError(ErrorKind.EMPTY_ROWS_ARRAY, "Rows array must contain at least one object.")
        for index, item in enumerate(parsed):
            if not isinstance(item, dict):
                raise GenerationError(ErrorKind.ROWS_MUST_BE_JSON,
                                      f"Row {index + 1} must be a JSON object.", row_index=index + 1)
        return parsed

    if isinstance(parsed, dict):
        return [parsed]

    # scalars fall through to the plain-text strategies
    return None


def _try_ndjson(lines: List[str]) -> Optional[List[Row]]:
    rows = []
    for line in lines:
        if not line.startswith("{"):
            return None
        try:
            obj = json.loads(line)
        except (json.JSONDecodeError, RecursionError):
            return None
        if not isinstance(obj, dict):
            return None
        rows.append(obj)
    return rows


def _group_by_blank_lines(lines: List[str]) -> List[List[str]]:
    groups: List[List[str]] = []
    current: List[str] = []
    for line in lines:
        if not line:
            if current:
                groups.append(current)
                current = []
            continue
        current.append(line)
    if current:
        groups.append(current)
    return groups


def parse_rows_with_format(rows_text: str, structure: List[ColumnDescriptor]) -> Tuple[List[Row], str]:
    """
    Parse rows input and report which strategy matched.

    Args:
        rows_text: raw user input.
        structure: parsed columns; only the count and names are used here,
                   value typing happens later in the value formatter.

    Returns:
        (rows, format_name)

    Raises:
        GenerationError: EmptyInput, EmptyRowsArray, RowsMustBeJson, MisalignedRows.
    """
    trimmed = (rows_text or "").strip()
    if not trimmed:
        raise GenerationError(ErrorKind.EMPTY_INPUT, "Rows input is required.")

    rows = _try_json(trimmed)
    if rows is not None:
        return rows, "json"

    lines = [line.strip() for line in trimmed.splitlines()]
    non_empty = [line for line in lines if line]

    rows = _try_ndjson(non_empty)
    if rows is not None:
        return rows, "ndjson"

    width = len(structure)
    if width == 0:
        raise GenerationError(ErrorKind.INVALID_STRUCTURE, "Table structure must include at least one column.")

    groups = _group_by_blank_lines(lines)
    if len(groups) > 1 and all(len(g) == width for g in groups):
        return [map_values_to_row(g, structure) for g in groups], "blank-line-groups"

    tab_rows = [[part.strip() for part in line.split("\t")] for line in non_empty]
    if all(len(parts) == width for parts in tab_rows):
        return [map_values_to_row(parts, structure) for parts in tab_rows], "tab-separated"

    if len(non_empty) % width != 0:
        raise GenerationError(
            ErrorKind.MISALIGNED_ROWS,
            f"Rows input does not align with table structure. Expected values in multiples of {width}.",
        )
    rows = [map_values_to_row(non_empty[i:i + width], structure)
            for i in range(0, len(non_empty), width)]
    return rows, "flat"


def parse_rows(rows_text: str, structure: List[ColumnDescriptor]) -> List[Row]:
    rows, row_format = parse_rows_with_format(rows_text, structure)
    LOG.debug("rows parsed as %s (%d rows)", row_format, len(rows))
    return rows
