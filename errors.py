# errors.py
"""
Error types raised while turning structure/rows input into SQL.

Every parser and builder raises GenerationError for bad input. It is a
ValueError so the web layer can keep mapping ValueError to a 400 response.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    EMPTY_INPUT = "EmptyInput"
    INVALID_STRUCTURE = "InvalidStructure"
    INVALID_COLUMN_AT_INDEX = "InvalidColumnAtIndex"
    ROWS_MUST_BE_JSON = "RowsMustBeJson"
    EMPTY_ROWS_ARRAY = "EmptyRowsArray"
    MISALIGNED_ROWS = "MisalignedRows"
    NO_MATCHING_COLUMNS = "NoMatchingColumns"
    NO_COLUMNS_IN_ROW = "NoColumnsInRow"
    MISSING_KEY_COLUMN = "MissingKeyColumn"
    NO_UPDATABLE_COLUMNS = "NoUpdatableColumns"
    INVALID_NUMERIC = "InvalidNumeric"


class GenerationError(ValueError):
    """
    Raised when input cannot be turned into a statement.

    Attributes:
        kind: ErrorKind identifying the failure.
        message: Human readable explanation (what the user sees).
        row_index: 1-based row number for per-row failures, else None.
    """

    def __init__(self, kind: ErrorKind, message: str, row_index: Optional[int] = None):
        self.kind = kind
        self.message = message
        self.row_index = row_index
        super().__init__(message)


class ClipboardError(Exception):
    """Raised by a clipboard collaborator when text could not be written."""
