# generator.py
"""
Single entry point: structure text + rows text -> SQL statement text.

Exports:
  - generate_statement(query_type, dialect, table_name, structure_text, rows_text, quoting=None)

The call is all-or-nothing: any bad input raises GenerationError and no
partial SQL is returned.
"""

import logging

from errors import ErrorKind, GenerationError
from identifiers import normalize_identifier, resolve_quoting
from models import Dialect, GenerationResult, QueryType
from query_builder import build_insert_query, build_update_query
from row_parser import parse_rows_with_format
from structure_parser import parse_structure

LOG = logging.getLogger(__name__)


def generate_statement(query_type, dialect, table_name: str, structure_text: str,
                       rows_text: str, quoting=None) -> GenerationResult:
    qtype = QueryType.parse(query_type)
    sql_dialect = Dialect.parse(dialect)
    policy = resolve_quoting(quoting)

    table = (table_name or "").strip()
    if not normalize_identifier(table):
        raise GenerationError(ErrorKind.EMPTY_INPUT, "Table name is required.")

    structure = parse_structure(structure_text)
    rows, row_format = parse_rows_with_format(rows_text, structure)

    if qtype is QueryType.UPDATE:
        sql = build_update_query(table, structure, rows, sql_dialect, policy)
    else:
        sql = build_insert_query(table, structure, rows, sql_dialect, policy)

    LOG.info("generated %s for %s (%s, %d rows from %s input)",
             qtype.value, table, sql_dialect.value, len(rows), row_format)
    return GenerationResult(sql=sql, query_type=qtype, dialect=sql_dialect,
                            row_count=len(rows), row_format=row_format)
