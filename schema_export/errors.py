"""Exception taxonomy for schema export."""


class SchemaExportError(Exception):
    """Base class for all schema export errors"""


class ConfigError(SchemaExportError):
    """Configuration file is unreadable or malformed"""


class DatabaseConnectionError(SchemaExportError):
    """Connecting to or pinging the database failed"""


class UnsupportedDialectError(DatabaseConnectionError):
    """Profile names a database type other than mysql or postgres"""


class QueryError(SchemaExportError):
    """Listing tables or fetching a table's DDL failed"""


class InputError(SchemaExportError):
    """Interactive input stream was closed or unreadable"""


class UserCancelledError(SchemaExportError):
    """User declined the export confirmation"""


class WriteError(SchemaExportError):
    """Creating the output directory or writing an output file failed"""
