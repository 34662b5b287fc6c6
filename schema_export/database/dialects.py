"""Per-dialect DSN construction, table listing and DDL retrieval.

Each supported database type is one ``Dialect`` subclass. The dialect is
looked up once when a connection is opened; everything after that calls
through the chosen instance.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from sqlalchemy import text
from sqlalchemy.engine import URL, Connection
from sqlalchemy.exc import SQLAlchemyError

from schema_export.errors import QueryError, UnsupportedDialectError
from schema_export.models import DatabaseProfile

logger = logging.getLogger(__name__)

POSTGRES_SCHEMA = "public"

# numeric_precision/numeric_scale are also reported for integer and float
# columns, where "(32,0)" would not be valid DDL
_PRECISION_TYPES = frozenset({"numeric", "decimal"})

_POSTGRES_COLUMNS_QUERY = text(
    """
    SELECT
        column_name,
        data_type,
        is_nullable,
        column_default,
        character_maximum_length,
        numeric_precision,
        numeric_scale
    FROM information_schema.columns
    WHERE table_name = :table_name AND table_schema = :schema
    ORDER BY ordinal_position
    """
)


class Dialect(ABC):
    """Database-specific operations used by the exporter"""

    name: ClassVar[str]
    driver: ClassVar[str]

    @abstractmethod
    def build_dsn(self, profile: DatabaseProfile) -> str:
        """Return the driver-native DSN for a profile."""

    @abstractmethod
    def build_url(self, profile: DatabaseProfile) -> URL:
        """Return the SQLAlchemy URL used to open the connection."""

    @abstractmethod
    def list_tables(self, conn: Connection) -> list[str]:
        """Return table names in the order the database reports them."""

    @abstractmethod
    def get_ddl(self, conn: Connection, table_name: str) -> str:
        """Return the CREATE TABLE statement for one table."""


class MySQLDialect(Dialect):
    name = "mysql"
    driver = "mysql+pymysql"

    def build_dsn(self, profile: DatabaseProfile) -> str:
        return (
            f"{profile.username}:{profile.password}@tcp({profile.host}:{profile.port})/{profile.database}"
            "?charset=utf8mb4&parseTime=True&loc=Local"
        )

    def build_url(self, profile: DatabaseProfile) -> URL:
        return URL.create(
            self.driver,
            username=profile.username,
            password=profile.password,
            host=profile.host,
            port=profile.port,
            database=profile.database,
            query={"charset": "utf8mb4"},
        )

    def list_tables(self, conn: Connection) -> list[str]:
        try:
            return [row[0] for row in conn.execute(text("SHOW TABLES"))]
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to list tables: {e}") from e

    def get_ddl(self, conn: Connection, table_name: str) -> str:
        # text() treats ":name" as a bind parameter
        quoted = table_name.replace("`", "``").replace(":", r"\:")
        try:
            row = conn.execute(text(f"SHOW CREATE TABLE `{quoted}`")).one()
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to fetch DDL for MySQL table {table_name}: {e}") from e
        return str(row[1])


class PostgresDialect(Dialect):
    """PostgreSQL has no SHOW CREATE TABLE, so DDL is rebuilt from
    ``information_schema.columns``.

    The rebuilt statement only carries column names, types, NOT NULL and
    DEFAULT. Primary keys, indexes, foreign keys, check constraints and
    storage options are not reproduced.
    """

    name = "postgres"
    driver = "postgresql+psycopg"

    def sslmode(self, profile: DatabaseProfile) -> str:
        return profile.sslmode or "disable"

    def build_dsn(self, profile: DatabaseProfile) -> str:
        return (
            f"host={profile.host} port={profile.port} user={profile.username} "
            f"password={profile.password} dbname={profile.database} sslmode={self.sslmode(profile)}"
        )

    def build_url(self, profile: DatabaseProfile) -> URL:
        return URL.create(
            self.driver,
            username=profile.username,
            password=profile.password,
            host=profile.host,
            port=profile.port,
            database=profile.database,
            query={"sslmode": self.sslmode(profile)},
        )

    def list_tables(self, conn: Connection) -> list[str]:
        query = text("SELECT tablename FROM pg_tables WHERE schemaname = :schema")
        try:
            return [row[0] for row in conn.execute(query, {"schema": POSTGRES_SCHEMA})]
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to list tables: {e}") from e

    def get_ddl(self, conn: Connection, table_name: str) -> str:
        try:
            result = conn.execute(_POSTGRES_COLUMNS_QUERY, {"table_name": table_name, "schema": POSTGRES_SCHEMA})
            columns = result.mappings().all()
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to query PostgreSQL table structure for {table_name}: {e}") from e

        if not columns:
            raise QueryError(f"Table '{table_name}' not found in schema '{POSTGRES_SCHEMA}'")

        return build_postgres_ddl(table_name, columns)


def format_postgres_column(column: Mapping[str, Any]) -> str:
    """Format one ``information_schema.columns`` row as a column definition.

    Args:
        column: Mapping with column_name, data_type, is_nullable, column_default,
            character_maximum_length, numeric_precision and numeric_scale

    Returns:
        Definition like ``name varchar(255) NOT NULL DEFAULT 'x'``
    """
    definition = f"{column['column_name']} {column['data_type']}"

    length = column.get("character_maximum_length")
    precision = column.get("numeric_precision")
    scale = column.get("numeric_scale")
    if length is not None:
        definition += f"({length})"
    elif precision is not None and scale is not None and column["data_type"] in _PRECISION_TYPES:
        definition += f"({precision},{scale})"

    if column.get("is_nullable") == "NO":
        definition += " NOT NULL"

    default = column.get("column_default")
    if default is not None:
        definition += f" DEFAULT {default}"

    return definition


def build_postgres_ddl(table_name: str, columns: list[Mapping[str, Any]]) -> str:
    """Assemble a CREATE TABLE statement from column rows."""
    body = ",\n".join(f"    {format_postgres_column(column)}" for column in columns)
    return f"CREATE TABLE {table_name} (\n{body}\n);"


DIALECTS: dict[str, Dialect] = {
    MySQLDialect.name: MySQLDialect(),
    PostgresDialect.name: PostgresDialect(),
}


def get_dialect(name: str) -> Dialect:
    """Return the dialect implementation for a database type.

    Raises:
        UnsupportedDialectError: If the type is not mysql or postgres
    """
    try:
        return DIALECTS[name]
    except KeyError:
        supported = ", ".join(sorted(DIALECTS))
        raise UnsupportedDialectError(f"Unsupported database type: {name!r} (supported: {supported})") from None


def build_dsn(profile: DatabaseProfile) -> str:
    """Return the DSN for a profile, or an empty string for unknown types."""
    dialect = DIALECTS.get(profile.dialect)
    if dialect is None:
        return ""
    return dialect.build_dsn(profile)


def sanitize_dsn(dsn: str) -> str:
    """Mask the password in a DSN for logging.

    Handles both ``user:pass@tcp(...)`` and ``key=value`` forms.
    """
    sanitized = re.sub(r"\bpassword=\S*", "password=***", dsn)
    sanitized = re.sub(r"^([^:@\s]*):([^@]*)@", r"\1:***@", sanitized)
    return sanitized
