"""Schema export: table DDL extraction from MySQL and PostgreSQL.

This package loads database profiles, connects through SQLAlchemy, fetches
per-table DDL and writes it to SQL files.
"""

from schema_export.config import load_config
from schema_export.database import DatabaseConnection, build_dsn, connect
from schema_export.models import DatabaseProfile, ExportConfig, OutputSpec
from schema_export.selector import InteractiveSelector
from schema_export.writer import SchemaWriter, generate_filename, render_export

__all__ = [
    "DatabaseConnection",
    "DatabaseProfile",
    "ExportConfig",
    "InteractiveSelector",
    "OutputSpec",
    "SchemaWriter",
    "build_dsn",
    "connect",
    "generate_filename",
    "load_config",
    "render_export",
]
