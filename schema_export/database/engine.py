"""Database connection management."""

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from schema_export.database.dialects import Dialect, get_dialect, sanitize_dsn
from schema_export.errors import DatabaseConnectionError, QueryError
from schema_export.models import DatabaseProfile

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DatabaseConnection:
    """An open, pinged connection bound to one profile and its dialect"""

    def __init__(self, profile: DatabaseProfile, dialect: Dialect, engine: Engine, conn: Connection):
        self.profile = profile
        self.dialect = dialect
        self.engine = engine
        self.conn: Connection | None = conn

    def _require_open(self) -> Connection:
        if self.conn is None:
            raise DatabaseConnectionError(f"Connection to {self.profile.name} is closed")
        return self.conn

    def _run(self, operation: Callable[..., T], *args: Any) -> T:
        conn = self._require_open()
        try:
            return operation(conn, *args)
        except QueryError:
            # A failed statement leaves PostgreSQL's transaction aborted
            if conn.in_transaction():
                try:
                    conn.rollback()
                except SQLAlchemyError as e:
                    logger.warning(f"Rollback after failed query on {self.profile.name} failed: {e}")
            raise

    def list_tables(self) -> list[str]:
        """Return all table names in database order.

        Raises:
            QueryError: If the listing query fails
        """
        tables = self._run(self.dialect.list_tables)
        logger.debug(f"Found {len(tables)} tables in {self.profile.database}")
        return tables

    def get_ddl(self, table_name: str) -> str:
        """Return the CREATE TABLE statement for a table.

        Raises:
            QueryError: If the DDL cannot be fetched
        """
        return self._run(self.dialect.get_ddl, table_name)

    def close(self) -> None:
        """Release the connection and dispose of the engine. Safe to call twice."""
        if self.conn is not None:
            try:
                self.conn.close()
            finally:
                self.conn = None
                self.engine.dispose()
                logger.debug(f"Closed connection to {self.profile.name}")

    def __enter__(self) -> "DatabaseConnection":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def connect(profile: DatabaseProfile) -> DatabaseConnection:
    """Open and ping a connection for a profile.

    Args:
        profile: Database profile to connect to

    Returns:
        Open database connection

    Raises:
        UnsupportedDialectError: If the profile's type is not supported
        DatabaseConnectionError: If the connection or ping fails
    """
    dialect = get_dialect(profile.dialect)
    logger.debug(f"Connecting to {profile.name}: {sanitize_dsn(dialect.build_dsn(profile))}")

    try:
        engine = create_engine(dialect.build_url(profile), echo=False)
    except (SQLAlchemyError, ImportError) as e:
        raise DatabaseConnectionError(f"Failed to connect to database {profile.name}: {e}") from e

    try:
        conn = engine.connect()
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseConnectionError(f"Failed to connect to database {profile.name}: {e}") from e

    try:
        conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        conn.close()
        engine.dispose()
        raise DatabaseConnectionError(f"Database connection test failed for {profile.name}: {e}") from e

    logger.info(f"Connected to {profile.describe()}")
    return DatabaseConnection(profile, dialect, engine, conn)
