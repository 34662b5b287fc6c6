"""Database connections and per-dialect schema introspection."""

from schema_export.database.dialects import (
    DIALECTS,
    Dialect,
    MySQLDialect,
    PostgresDialect,
    build_dsn,
    build_postgres_ddl,
    format_postgres_column,
    get_dialect,
    sanitize_dsn,
)
from schema_export.database.engine import DatabaseConnection, connect

__all__ = [
    # Dialects
    "DIALECTS",
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "build_dsn",
    "build_postgres_ddl",
    "format_postgres_column",
    "get_dialect",
    "sanitize_dsn",
    # Connections
    "DatabaseConnection",
    "connect",
]
