"""Tests for per-dialect DSN building and DDL retrieval."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from schema_export.database.dialects import (
    MySQLDialect,
    PostgresDialect,
    build_dsn,
    build_postgres_ddl,
    format_postgres_column,
    get_dialect,
    sanitize_dsn,
)
from schema_export.errors import QueryError, UnsupportedDialectError
from schema_export.models import DatabaseProfile


def column(name: str, data_type: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "column_name": name,
        "data_type": data_type,
        "is_nullable": "YES",
        "column_default": None,
        "character_maximum_length": None,
        "numeric_precision": None,
        "numeric_scale": None,
    }
    row.update(overrides)
    return row


def test_mysql_dsn(mysql_profile: DatabaseProfile) -> None:
    assert build_dsn(mysql_profile) == "u:p@tcp(h:3306)/d?charset=utf8mb4&parseTime=True&loc=Local"


def test_postgres_dsn_defaults_sslmode(postgres_profile: DatabaseProfile) -> None:
    dsn = build_dsn(postgres_profile)

    assert dsn == "host=h port=5432 user=u password=p dbname=d sslmode=disable"


def test_postgres_dsn_keeps_sslmode(postgres_profile: DatabaseProfile) -> None:
    profile = postgres_profile.model_copy(update={"sslmode": "require"})

    assert build_dsn(profile).endswith("sslmode=require")


def test_unknown_dialect_dsn_is_empty(mysql_profile: DatabaseProfile) -> None:
    profile = mysql_profile.model_copy(update={"dialect": "oracle"})

    assert build_dsn(profile) == ""


def test_get_dialect() -> None:
    assert isinstance(get_dialect("mysql"), MySQLDialect)
    assert isinstance(get_dialect("postgres"), PostgresDialect)
    with pytest.raises(UnsupportedDialectError, match="sqlite"):
        get_dialect("sqlite")


def test_build_urls(mysql_profile: DatabaseProfile, postgres_profile: DatabaseProfile) -> None:
    mysql_url = MySQLDialect().build_url(mysql_profile)
    assert mysql_url.drivername == "mysql+pymysql"
    assert mysql_url.query["charset"] == "utf8mb4"

    pg_url = PostgresDialect().build_url(postgres_profile)
    assert pg_url.drivername == "postgresql+psycopg"
    assert pg_url.database == "d"
    assert pg_url.query["sslmode"] == "disable"


def test_sanitize_dsn(mysql_profile: DatabaseProfile, postgres_profile: DatabaseProfile) -> None:
    assert sanitize_dsn(build_dsn(mysql_profile)) == "u:***@tcp(h:3306)/d?charset=utf8mb4&parseTime=True&loc=Local"
    assert "password=***" in sanitize_dsn(build_dsn(postgres_profile))
    assert "password=p " not in sanitize_dsn(build_dsn(postgres_profile))


def test_postgres_ddl_single_nullable_column() -> None:
    ddl = build_postgres_ddl("t", [column("col", "integer")])

    assert ddl == "CREATE TABLE t (\n    col integer\n);"


def test_postgres_integer_precision_not_rendered() -> None:
    assert format_postgres_column(column("id", "integer", numeric_precision=32, numeric_scale=0)) == "id integer"


def test_postgres_column_details() -> None:
    columns = [
        column(
            "id",
            "integer",
            is_nullable="NO",
            column_default="nextval('users_id_seq'::regclass)",
            numeric_precision=32,
            numeric_scale=0,
        ),
        column("email", "character varying", is_nullable="NO", character_maximum_length=255),
        column("balance", "numeric", numeric_precision=10, numeric_scale=2, column_default="0"),
    ]

    ddl = build_postgres_ddl("users", columns)

    assert ddl == (
        "CREATE TABLE users (\n"
        "    id integer NOT NULL DEFAULT nextval('users_id_seq'::regclass),\n"
        "    email character varying(255) NOT NULL,\n"
        "    balance numeric(10,2) DEFAULT 0\n"
        ");"
    )


def test_mysql_get_ddl_takes_second_column() -> None:
    conn = MagicMock()
    conn.execute.return_value.one.return_value = ("users", "CREATE TABLE `users` (\n  `id` int\n)")

    ddl = MySQLDialect().get_ddl(conn, "users")

    assert ddl == "CREATE TABLE `users` (\n  `id` int\n)"
    statement = conn.execute.call_args.args[0]
    assert str(statement) == "SHOW CREATE TABLE `users`"


def test_mysql_list_tables_keeps_order() -> None:
    conn = MagicMock()
    conn.execute.return_value = iter([("zeta",), ("alpha",), ("mid",)])

    assert MySQLDialect().list_tables(conn) == ["zeta", "alpha", "mid"]


def test_mysql_query_failure_raises_query_error() -> None:
    conn = MagicMock()
    conn.execute.side_effect = OperationalError("SHOW TABLES", {}, Exception("gone away"))

    with pytest.raises(QueryError, match="Failed to list tables"):
        MySQLDialect().list_tables(conn)


def test_postgres_get_ddl() -> None:
    conn = MagicMock()
    conn.execute.return_value.mappings.return_value.all.return_value = [column("col", "integer")]

    ddl = PostgresDialect().get_ddl(conn, "t")

    assert ddl == "CREATE TABLE t (\n    col integer\n);"
    params = conn.execute.call_args.args[1]
    assert params == {"table_name": "t", "schema": "public"}


def test_postgres_get_ddl_missing_table() -> None:
    conn = MagicMock()
    conn.execute.return_value.mappings.return_value.all.return_value = []

    with pytest.raises(QueryError, match="not found"):
        PostgresDialect().get_ddl(conn, "missing")


def test_postgres_list_tables_public_schema() -> None:
    conn = MagicMock()
    conn.execute.return_value = iter([("orders",), ("customers",)])

    assert PostgresDialect().list_tables(conn) == ["orders", "customers"]
    assert conn.execute.call_args.args[1] == {"schema": "public"}


def test_mysql_get_ddl_table_name_with_colon() -> None:
    conn = MagicMock()
    conn.execute.return_value.one.return_value = ("a:b", "CREATE TABLE `a:b` ()")

    MySQLDialect().get_ddl(conn, "a:b")

    statement = conn.execute.call_args.args[0]
    assert str(statement) == "SHOW CREATE TABLE `a:b`"
    assert statement.compile().params == {}
