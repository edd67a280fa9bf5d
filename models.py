# models.py
# simple containers shared by the parsers, the builder and the web layer
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from errors import ErrorKind


class Dialect(Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"

    @classmethod
    def parse(cls, value) -> "Dialect":
        # form semantics: anything that isn't mysql is postgresql
        if isinstance(value, Dialect):
            return value
        if str(value or "").strip().lower() == cls.MYSQL.value:
            return cls.MYSQL
        return cls.POSTGRESQL


class QueryType(Enum):
    INSERT = "insert"
    UPDATE = "update"

    @classmethod
    def parse(cls, value) -> "QueryType":
        if isinstance(value, QueryType):
            return value
        if str(value or "").strip().lower() == cls.UPDATE.value:
            return cls.UPDATE
        return cls.INSERT


class IdentifierQuoting(Enum):
    QUOTE = "quote"
    PASSTHROUGH = "passthrough"

    @classmethod
    def parse(cls, value) -> "IdentifierQuoting":
        if isinstance(value, IdentifierQuoting):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown identifier quoting policy: {value}")


@dataclass(frozen=True)
class ColumnDescriptor:
    name: str
    type: str = "text"
    primary_key: bool = False


@dataclass(frozen=True)
class GenerationResult:
    sql: str
    query_type: QueryType
    dialect: Dialect
    row_count: int
    row_format: str


@dataclass(frozen=True)
class Status:
    message: str
    is_error: bool = False
    sql: str = ""
    error_kind: Optional[ErrorKind] = None
