"""Rendering and writing exported DDL files."""

import logging
from datetime import datetime
from pathlib import Path

from schema_export.errors import WriteError
from schema_export.models import OutputSpec

logger = logging.getLogger(__name__)

TOOL_NAME = "export-table-ddl"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
SECTION_RULE = "-- " + "=" * 44


def generate_filename(filename_format: str, database: str, table: str | None = None) -> str:
    """Build an output file name from the configured template.

    Args:
        filename_format: Template containing ``{database}`` and optionally ``{table}``
        database: Database name to substitute
        table: Table name to substitute (per-table files only)

    Returns:
        File name ending in ``.sql``
    """
    filename = filename_format.replace("{database}", database)
    if table is not None:
        filename = filename.replace("{table}", table)
    if not filename.endswith(".sql"):
        filename += ".sql"
    return filename


def render_export(database: str, tables_ddl: dict[str, str], exported_at: datetime | None = None) -> str:
    """Render the aggregate SQL file for a set of tables.

    Tables appear in ascending name order in both the table of contents and
    the body, regardless of the order they were selected in.
    """
    exported_at = exported_at or datetime.now()
    table_names = sorted(tables_ddl)

    lines = [
        f"-- 数据库: {database}",
        f"-- 导出时间: {exported_at.strftime(TIMESTAMP_FORMAT)}",
        f"-- 表数量: {len(table_names)}",
        f"-- 生成工具: {TOOL_NAME}",
        "",
        "-- 目录:",
    ]
    lines.extend(f"--   {index}. {name}" for index, name in enumerate(table_names, start=1))

    for name in table_names:
        lines.extend(
            [
                "",
                SECTION_RULE,
                f"-- 表名: {name}",
                SECTION_RULE,
                "",
                tables_ddl[name],
            ]
        )

    return "\n".join(lines) + "\n"


def render_table(database: str, table: str, ddl: str, exported_at: datetime | None = None) -> str:
    """Render a single-table SQL file."""
    exported_at = exported_at or datetime.now()
    return (
        f"-- 数据库: {database}\n"
        f"-- 表名: {table}\n"
        f"-- 导出时间: {exported_at.strftime(TIMESTAMP_FORMAT)}\n"
        f"-- 生成工具: {TOOL_NAME}\n"
        "\n"
        f"{ddl}\n"
    )


class SchemaWriter:
    """Writes exported DDL under the configured output directory"""

    def __init__(self, output: OutputSpec):
        self.output = output
        self.directory = Path(output.directory)

    def ensure_output_directory(self) -> None:
        if self.directory.is_dir():
            return
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(f"创建输出目录失败: {self.directory}: {e}") from e
        logger.info(f"Created output directory {self.directory}")

    def _write(self, path: Path, content: str) -> Path:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"保存DDL文件失败: {path}: {e}") from e
        logger.info(f"Wrote {path}")
        return path

    def save_all_tables(self, database: str, tables_ddl: dict[str, str]) -> Path:
        """Write every table's DDL into one file and return its path.

        Raises:
            WriteError: If the directory or file cannot be written
        """
        self.ensure_output_directory()
        filename = generate_filename(self.output.filename_format, database, table="all_tables")
        return self._write(self.directory / filename, render_export(database, tables_ddl))

    def save_table(self, database: str, table: str, ddl: str) -> Path:
        """Write one table's DDL into its own file and return its path.

        A ``filename_format`` without ``{table}`` gets ``_<table>`` appended so
        tables do not overwrite each other.

        Raises:
            WriteError: If the directory or file cannot be written
        """
        self.ensure_output_directory()
        filename_format = self.output.filename_format
        if "{table}" not in filename_format:
            filename_format = filename_format.removesuffix(".sql") + "_{table}"
        filename = generate_filename(filename_format, database, table=table)
        return self._write(self.directory / filename, render_table(database, table, ddl))
