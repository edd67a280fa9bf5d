# query_builder.py
# Assemble INSERT / UPDATE statement text from structure + parsed rows.

import re
from typing import Any, Dict, List, Union

from errors import ErrorKind, GenerationError
from identifiers import format_identifier, quote_table_name
from models import ColumnDescriptor, Dialect, IdentifierQuoting
from value_formatter import format_value

Row = Dict[str, Any]
Quoting = Union[IdentifierQuoting, str, None]

ID_SUFFIX_RE = re.compile(r"id$", re.I)


def get_available_columns(structure: List[ColumnDescriptor], row: Row) -> List[ColumnDescriptor]:
    """Structure columns (in structure order) that appear as keys in row."""
    return [c for c in structure if c.name in row]


def pick_key_columns(structure: List[ColumnDescriptor], row: Row) -> List[ColumnDescriptor]:
    """
    Choose the WHERE columns for an UPDATE of this row. First non-empty wins:
      1. primary key columns present in the row
      2. a column named "id"
      3. a column whose name ends in "id"
      4. the first available column
    Step 4 does not guarantee uniqueness: if the chosen column is not unique
    in the real table the statement can touch more than one row.
    """
    available = get_available_columns(structure, row)

    pk_columns = [c for c in available if c.primary_key]
    if pk_columns:
        return pk_columns

    for column in available:
        if column.name.strip().lower() == "id":
            return [column]

    for column in available:
        if ID_SUFFIX_RE.search(column.name.strip()):
            return [column]

    return available[:1]


def _assignment(column: ColumnDescriptor, row: Row, dialect: Dialect, quoting: Quoting) -> str:
    return f"{format_identifier(column.name, dialect, quoting)} = {format_value(row[column.name], column, dialect)}"


def build_insert_query(table_name: str, structure: List[ColumnDescriptor], rows: List[Row],
                       dialect: Dialect = Dialect.POSTGRESQL, quoting: Quoting = None) -> str:
    """
    One multi-row INSERT. Columns are the structure columns that appear in at
    least one row; rows missing such a column get NULL.
    """
    table = quote_table_name(table_name, dialect, quoting)
    present = [c for c in structure if any(c.name in row for row in rows)]
    if not present:
        raise GenerationError(ErrorKind.NO_MATCHING_COLUMNS, "No row columns match the provided table structure.")

    column_sql = ", ".join(format_identifier(c.name, dialect, quoting) for c in present)

    tuples = []
    for row in rows:
        values = [format_value(row.get(c.name), c, dialect) for c in present]
        tuples.append("(" + ", ".join(values) + ")")

    return f"INSERT INTO {table} ({column_sql}) VALUES\n" + ",\n".join(tuples) + ";"


def build_update_query(table_name: str, structure: List[ColumnDescriptor], rows: List[Row],
                       dialect: Dialect = Dialect.POSTGRESQL, quoting: Quoting = None) -> str:
    """One UPDATE per row, joined by newlines."""
    table = quote_table_name(table_name, dialect, quoting)
    statements = []
    for index, row in enumerate(rows):
        row_no = index + 1
        available = get_available_columns(structure, row)
        if not available:
            raise GenerationError(ErrorKind.NO_COLUMNS_IN_ROW,
                                  f"Row {row_no}: no columns from table structure found.", row_index=row_no)

        key_columns = pick_key_columns(structure, row)
        if not key_columns:
            raise GenerationError(
                ErrorKind.MISSING_KEY_COLUMN,
                f'Row {row_no}: missing key column. Add primaryKey in structure or include "id".',
                row_index=row_no,
            )

        key_names = {c.name for c in key_columns}
        set_columns = [c for c in available if c.name not in key_names]
        if not set_columns:
            raise GenerationError(ErrorKind.NO_UPDATABLE_COLUMNS,
                                  f"Row {row_no}: no updatable column found besides key column.",
                                  row_index=row_no)

        set_sql = ", ".join(_assignment(c, row, dialect, quoting) for c in set_columns)
        where_sql = " AND ".join(_assignment(c, row, dialect, quoting) for c in key_columns)
        statements.append(f"UPDATE {table} SET {set_sql} WHERE {where_sql};")

    return "\n".join(statements)
