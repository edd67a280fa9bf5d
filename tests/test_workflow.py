import pytest

from errors import ClipboardError, ErrorKind
from workflow import (
    CLIPBOARD_DENIED_MESSAGE,
    COPIED_MESSAGE,
    GENERATED_MESSAGE,
    NOTHING_TO_COPY_MESSAGE,
    SqlGeneratorWorkflow,
)


class FakeClipboard:
    def __init__(self, fail=False):
        self.fail = fail
        self.written = []

    def write_text(self, text):
        if self.fail:
            raise ClipboardError("denied")
        self.written.append(text)


def test_generate_success_remembers_inputs(history):
    wf = SqlGeneratorWorkflow(history)
    status = wf.generate("insert", "postgresql", "users", "id:int:pk\nname", '{"id": 1, "name": "a"}')
    assert not status.is_error
    assert status.message == GENERATED_MESSAGE
    assert status.sql.startswith('INSERT INTO "users"')
    assert history.table_names() == ["users"]
    assert history.structures() == ["id:int:pk\nname"]


def test_generate_failure_leaves_history_untouched(history):
    wf = SqlGeneratorWorkflow(history)
    status = wf.generate("update", "postgresql", "users", "id:int:pk\nname", '{"id": 1}')
    assert status.is_error
    assert status.sql == ""
    assert status.error_kind is ErrorKind.NO_UPDATABLE_COLUMNS
    assert history.table_names() == []
    assert history.structures() == []


def test_copy_writes_to_clipboard(history):
    clipboard = FakeClipboard()
    status = SqlGeneratorWorkflow(history, clipboard).copy("  SELECT 1;  ")
    assert status.message == COPIED_MESSAGE
    assert clipboard.written == ["SELECT 1;"]


def test_copy_nothing(history):
    status = SqlGeneratorWorkflow(history, FakeClipboard()).copy("   ")
    assert status.is_error
    assert status.message == NOTHING_TO_COPY_MESSAGE


def test_copy_failure_keeps_sql(history):
    status = SqlGeneratorWorkflow(history, FakeClipboard(fail=True)).copy("UPDATE t SET a = 1 WHERE b = 2;")
    assert status.is_error
    assert status.message == CLIPBOARD_DENIED_MESSAGE
    assert status.sql == "UPDATE t SET a = 1 WHERE b = 2;"


def test_copy_without_clipboard(history):
    status = SqlGeneratorWorkflow(history).copy("X")
    assert status.message == CLIPBOARD_DENIED_MESSAGE


def test_bad_quoting_policy_rejected_up_front(history):
    with pytest.raises(ValueError):
        SqlGeneratorWorkflow(history, quoting="brackets")


def test_bad_quoting_from_config_rejected_up_front(history, monkeypatch):
    import config
    monkeypatch.setattr(config, "IDENTIFIER_QUOTING", "brackets")
    with pytest.raises(ValueError):
        SqlGeneratorWorkflow(history)
