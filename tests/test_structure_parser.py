import pytest

from errors import ErrorKind, GenerationError
from models import ColumnDescriptor
from structure_parser import parse_structure


def test_bare_names():
    cols = parse_structure("a b c")
    assert cols == [
        ColumnDescriptor("a", "text", False),
        ColumnDescriptor("b", "text", False),
        ColumnDescriptor("c", "text", False),
    ]


def test_bare_names_commas_and_lines():
    cols = parse_structure("id, \"name\"\nemail")
    assert [c.name for c in cols] == ["id", "name", "email"]


def test_typed_lines():
    cols = parse_structure("id:BIGINT:pk\nname:text\n\ncreated_at")
    assert cols == [
        ColumnDescriptor("id", "bigint", True),
        ColumnDescriptor("name", "text", False),
        ColumnDescriptor("created_at", "text", False),
    ]


def test_typed_lines_primary_marker_is_case_sensitive():
    cols = parse_structure("a:int:primary\nb:int:PK\nc:int:yes")
    assert [c.primary_key for c in cols] == [True, False, False]


def test_typed_line_missing_name():
    with pytest.raises(GenerationError) as exc:
        parse_structure("id:int\n:text")
    assert exc.value.kind is ErrorKind.INVALID_STRUCTURE
    assert "line 2" in exc.value.message


def test_json_structure():
    cols = parse_structure(
        '[{"name": "id", "type": "Integer", "pk": true},'
        ' {"name": "payload", "type": "JSONB"},'
        ' {"name": "tenant", "isPrimaryKey": 1},'
        ' {"name": "note"}]'
    )
    assert cols == [
        ColumnDescriptor("id", "integer", True),
        ColumnDescriptor("payload", "jsonb", False),
        ColumnDescriptor("tenant", "text", True),
        ColumnDescriptor("note", "text", False),
    ]


def test_json_structure_column_without_name():
    with pytest.raises(GenerationError) as exc:
        parse_structure('[{"name": "id"}, {"type": "text"}]')
    assert exc.value.kind is ErrorKind.INVALID_COLUMN_AT_INDEX
    assert "index 1" in exc.value.message


@pytest.mark.parametrize("text", ["[]", "[1, 2", "[{}]"])
def test_json_structure_invalid(text):
    with pytest.raises(GenerationError) as exc:
        parse_structure(text)
    assert exc.value.kind in (ErrorKind.INVALID_STRUCTURE, ErrorKind.INVALID_COLUMN_AT_INDEX)


def test_empty_structure():
    with pytest.raises(GenerationError) as exc:
        parse_structure("  \n ")
    assert exc.value.kind is ErrorKind.EMPTY_INPUT


def test_deeply_nested_json_structure():
    with pytest.raises(GenerationError) as exc:
        parse_structure("[" * 100000)
    assert exc.value.kind is ErrorKind.INVALID_STRUCTURE
