# workflow.py
# What the form buttons do: generate (and remember inputs) / copy to clipboard.
import logging
from typing import Optional, Protocol

from errors import ClipboardError, GenerationError
from generator import generate_statement
from history import HistoryStore
from identifiers import resolve_quoting
from models import Status

LOG = logging.getLogger(__name__)

GENERATED_MESSAGE = "Query generated successfully."
COPIED_MESSAGE = "Query copied to clipboard."
NOTHING_TO_COPY_MESSAGE = "Generate a query before copying."
CLIPBOARD_DENIED_MESSAGE = "Clipboard permission denied. Copy manually from output box."


class Clipboard(Protocol):
    def write_text(self, text: str) -> None:
        """Write text; raise ClipboardError on failure."""
        ...


class SqlGeneratorWorkflow:
    def __init__(self, history: HistoryStore, clipboard: Optional[Clipboard] = None, quoting=None):
        self.history = history
        self.clipboard = clipboard
        # fail at startup, not on every request
        self.quoting = resolve_quoting(quoting)

    def generate(self, query_type, dialect, table_name: str, structure_text: str, rows_text: str) -> Status:
        """
        Generate SQL and, only on success, remember table name + structure.
        Input errors come back as an error Status with empty SQL.
        """
        try:
            result = generate_statement(query_type, dialect, table_name, structure_text, rows_text,
                                        quoting=self.quoting)
        except GenerationError as e:
            LOG.info("generation rejected (%s): %s", e.kind.value, e.message)
            return Status(message=e.message, is_error=True, sql="", error_kind=e.kind)

        self.history.remember_table_name(table_name)
        self.history.remember_structure(structure_text)
        return Status(message=GENERATED_MESSAGE, sql=result.sql)

    def copy(self, sql: str) -> Status:
        query = (sql or "").strip()
        if not query:
            return Status(message=NOTHING_TO_COPY_MESSAGE, is_error=True)
        if self.clipboard is None:
            return Status(message=CLIPBOARD_DENIED_MESSAGE, is_error=True, sql=query)
        try:
            self.clipboard.write_text(query)
        except ClipboardError as e:
            LOG.warning("clipboard write failed: %s", e)
            return Status(message=CLIPBOARD_DENIED_MESSAGE, is_error=True, sql=query)
        return Status(message=COPIED_MESSAGE, sql=query)
