# config.py
# Edit these values directly or override them via env

import os

# Storage keys for remembered inputs (same keys the browser tool used)
TABLE_NAME_HISTORY_KEY = "sqlGenerator.tableNameHistory"
TABLE_STRUCTURE_HISTORY_KEY = "sqlGenerator.tableStructureHistory"

# History limits
MAX_TABLE_NAME_HISTORY = 10
MAX_TABLE_STRUCTURE_HISTORY = 10
MAX_TABLE_STRUCTURE_SUGGESTIONS = 5
MAX_TABLE_STRUCTURE_LABEL_LENGTH = 50

DEFAULT_COLUMN_TYPE = "text"
DEFAULT_QUERY_TYPE = "insert"
DEFAULT_DIALECT = os.getenv("SQLGEN_DIALECT", "postgresql")

# "quote" wraps identifiers in the dialect quote char, "passthrough" emits them as typed
IDENTIFIER_QUOTING = os.getenv("SQLGEN_IDENTIFIER_QUOTING", "quote")

# JSON file backing the input history
HISTORY_FILE = os.getenv("SQLGEN_HISTORY_FILE", "sqlgen_history.json")

HOST = os.getenv("SQLGEN_HOST", "0.0.0.0")
PORT = int(os.getenv("SQLGEN_PORT", "8000"))
LOG_LEVEL = os.getenv("SQLGEN_LOG_LEVEL", "INFO")
