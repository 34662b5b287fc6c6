"""Main entry point for ddl-export CLI tool."""

import logging
from enum import Enum
from pathlib import Path

import typer

from cli import __version__
from cli.output import error_message, print_sql, setup_logging, success_message, warning_message
from schema_export.config import DEFAULT_CONFIG_PATH, load_config
from schema_export.database import connect
from schema_export.errors import (
    ConfigError,
    DatabaseConnectionError,
    InputError,
    QueryError,
    UserCancelledError,
    WriteError,
)
from schema_export.selector import InteractiveSelector
from schema_export.writer import SchemaWriter, render_export

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


app = typer.Typer(
    name="ddl-export",
    help="Export table DDL from MySQL and PostgreSQL databases into SQL files",
    add_completion=False,
)


def version_callback(show_version: bool) -> None:
    """Show version and exit.

    Args:
        show_version: Whether to show version
    """
    if show_version:
        typer.echo(f"ddl-export version {__version__}")
        raise typer.Exit()


@app.command(context_settings={"help_option_names": ["--help", "-help", "-h"]})
def export(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-config",
        "-c",
        envvar="DDL_EXPORT_CONFIG",
        help="Path to the YAML config file",
        dir_okay=False,
    ),
    split: bool = typer.Option(False, "--split", help="Write one file per table instead of a single file"),
    to_stdout: bool = typer.Option(False, "--stdout", help="Print the SQL to the terminal instead of writing a file"),
    log_level: LogLevel = typer.Option(LogLevel.WARNING, "--log-level", case_sensitive=False, help="Logging level"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Interactively export CREATE TABLE statements.

    Pick one of the configured databases, then pick tables by number or name
    (or 0 for all of them). The DDL is written to one SQL file under the
    configured output directory.

    Examples:

        ddl-export                      # uses ./config.yaml

        ddl-export --config db.yaml     # uses the given config file
    """
    setup_logging(log_level.value)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        error_message(f"加载配置失败: {e}", hint="Check the config file path and YAML syntax")
        raise typer.Exit(1) from e

    if not config.databases:
        error_message("配置文件中没有找到数据库配置", hint="Add at least one entry under 'databases'")
        raise typer.Exit(1)

    selector = InteractiveSelector()

    try:
        profile = selector.select_database(config.databases)
    except InputError as e:
        error_message(f"选择数据库失败: {e}")
        raise typer.Exit(1) from e

    typer.echo(f"\n正在连接数据库: {profile.name}")
    try:
        db = connect(profile)
    except DatabaseConnectionError as e:
        error_message(f"连接数据库失败: {e}")
        raise typer.Exit(1) from e

    with db:
        success_message("数据库连接成功!")

        typer.echo("正在获取表列表...")
        try:
            all_tables = db.list_tables()
        except QueryError as e:
            error_message(f"获取表列表失败: {e}")
            raise typer.Exit(1) from e

        if not all_tables:
            typer.echo("数据库中没有找到任何表")
            return

        try:
            selected_tables = selector.select_tables(all_tables)
        except (InputError, UserCancelledError) as e:
            error_message(f"选择表失败: {e}")
            raise typer.Exit(1) from e

        typer.echo(f"\n开始导出 {len(selected_tables)} 个表的建表语句...")
        tables_ddl: dict[str, str] = {}
        for index, table_name in enumerate(selected_tables, start=1):
            selector.show_progress(index, len(selected_tables), table_name)
            try:
                tables_ddl[table_name] = db.get_ddl(table_name)
            except QueryError as e:
                logger.warning(f"Skipping table {table_name}: {e}")
                warning_message(f"获取表 {table_name} 的DDL失败: {e}")

    exported = len(tables_ddl)
    if tables_ddl:
        writer = SchemaWriter(config.output)
        try:
            if to_stdout:
                print_sql(render_export(profile.database, tables_ddl))
            elif split:
                for table_name, ddl in tables_ddl.items():
                    path = writer.save_table(profile.database, table_name, ddl)
                    typer.echo(f"已保存: {path}")
                success_message(f"成功保存 {exported} 个表的建表语句")
            else:
                path = writer.save_all_tables(profile.database, tables_ddl)
                typer.echo(f"已保存所有表DDL: {path}")
                success_message(f"成功保存 {exported} 个表的建表语句")
        except WriteError as e:
            error_message(f"保存DDL文件失败: {e}")

    selector.show_summary(exported, len(selected_tables), config.output.directory)


if __name__ == "__main__":
    app()
