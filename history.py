# history.py
# Remembered table names / structures, newest first.
# Backed by a plain key-value string store (localStorage-like), injected by the caller.
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

import config

LOG = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """In-process store (useful for tests)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    One JSON object on disk: { key: string_value }.
    A missing or corrupt file reads as empty. Write failures are logged and
    dropped; history is a convenience and must never break generation.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            LOG.warning("could not read history file %s: %s", self.path, e)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOG.warning("ignoring corrupt history file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            LOG.warning("could not write history file %s: %s", self.path, e)


def truncate_label(value: str, max_length: int = config.MAX_TABLE_STRUCTURE_LABEL_LENGTH) -> str:
    if len(value) <= max_length:
        return value
    return value[:max_length] + "..."


class HistoryStore:
    """Ordered, de-duplicated, capped lists of recent inputs."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _read_list(self, key: str, cap: int) -> List[str]:
        raw = self.store.get(key)
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            LOG.warning("history entry %s is not valid JSON, starting fresh", key)
            return []
        if not isinstance(parsed, list):
            return []
        values = [str(v).strip() if v else "" for v in parsed]
        return [v for v in values if v][:cap]

    def _remember(self, key: str, cap: int, value: str) -> List[str]:
        normalized = (value or "").strip()
        current = self._read_list(key, cap)
        if not normalized:
            return current
        # read-then-write, last writer wins
        deduped = [normalized] + [item for item in current if item != normalized]
        deduped = deduped[:cap]
        self.store.set(key, json.dumps(deduped, ensure_ascii=False))
        return deduped

    def table_names(self) -> List[str]:
        return self._read_list(config.TABLE_NAME_HISTORY_KEY, config.MAX_TABLE_NAME_HISTORY)

    def remember_table_name(self, table_name: str) -> List[str]:
        return self._remember(config.TABLE_NAME_HISTORY_KEY, config.MAX_TABLE_NAME_HISTORY, table_name)

    def structures(self) -> List[str]:
        return self._read_list(config.TABLE_STRUCTURE_HISTORY_KEY, config.MAX_TABLE_STRUCTURE_HISTORY)

    def remember_structure(self, structure_text: str) -> List[str]:
        return self._remember(config.TABLE_STRUCTURE_HISTORY_KEY, config.MAX_TABLE_STRUCTURE_HISTORY,
                              structure_text)

    def structure_suggestions(self) -> List[Tuple[str, str]]:
        """(label, full_value) pairs for the suggestion chips."""
        recent = self.structures()[:config.MAX_TABLE_STRUCTURE_SUGGESTIONS]
        return [(truncate_label(s), s) for s in recent]
