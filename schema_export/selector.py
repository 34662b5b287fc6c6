"""Interactive database and table selection on a text console."""

import sys
from collections.abc import Sequence
from typing import TextIO

from schema_export.errors import InputError, UserCancelledError
from schema_export.models import DatabaseProfile

TABLES_PER_ROW = 3


def _split_entry(entry: str) -> list[str]:
    return [part.strip() for part in entry.split(",") if part.strip()]


def parse_table_numbers(entry: str, tables: Sequence[str]) -> list[str] | None:
    """Resolve comma-separated 1-based indexes to table names.

    Duplicates collapse to their first occurrence. Any non-numeric part or
    out-of-range index rejects the whole entry.

    Returns:
        Selected table names, or None if the entry is not a valid index list
    """
    selected: dict[str, None] = {}
    for part in _split_entry(entry):
        try:
            number = int(part)
        except ValueError:
            return None
        if number < 1 or number > len(tables):
            return None
        selected.setdefault(tables[number - 1])
    return list(selected) or None


def parse_table_names(entry: str, tables: Sequence[str]) -> list[str] | None:
    """Validate comma-separated table names against the known tables.

    Returns:
        Selected table names, or None if any name is unknown
    """
    known = set(tables)
    selected: dict[str, None] = {}
    for name in _split_entry(entry):
        if name not in known:
            return None
        selected.setdefault(name)
    return list(selected) or None


class InteractiveSelector:
    """Prompts for a database profile and a set of tables.

    Reads answers line by line from ``input_stream`` and writes prompts to
    ``output_stream``. Running out of input raises ``InputError``.
    """

    def __init__(self, input_stream: TextIO | None = None, output_stream: TextIO | None = None):
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output_stream = output_stream if output_stream is not None else sys.stdout

    def _print(self, message: str = "", end: str = "\n") -> None:
        self.output_stream.write(message + end)
        self.output_stream.flush()

    def _read(self, prompt: str) -> str:
        self._print(prompt, end="")
        try:
            line = self.input_stream.readline()
        except (OSError, ValueError) as e:
            raise InputError(f"读取输入失败: {e}") from e
        if not line:
            raise InputError("读取输入失败")
        return line.strip()

    def select_database(self, profiles: Sequence[DatabaseProfile]) -> DatabaseProfile:
        """Ask the user to pick one profile by its 1-based number."""
        self._print("\n=== 可用的数据库配置 ===")
        for index, profile in enumerate(profiles, start=1):
            self._print(f"[{index}] {profile.name} ({profile.describe()})")

        while True:
            answer = self._read("\n请选择数据库配置 (输入序号): ")
            try:
                choice = int(answer)
            except ValueError:
                choice = 0
            if 1 <= choice <= len(profiles):
                return profiles[choice - 1]
            self._print(f"无效选择，请输入 1-{len(profiles)} 之间的数字")

    def show_tables(self, tables: Sequence[str]) -> None:
        self._print(f"\n=== 数据库中的表 (共{len(tables)}个) ===")
        row: list[str] = []
        for index, table in enumerate(tables, start=1):
            row.append(f"[{index}] {table:<20}")
            if len(row) == TABLES_PER_ROW:
                self._print("".join(row).rstrip())
                row = []
        if row:
            self._print("".join(row).rstrip())

        self._print("\n=== 选择要导出的表 ===")
        self._print("输入选项:")
        self._print("  0 - 导出所有表")
        self._print("  表序号 - 导出指定表 (多个表用逗号分隔，如: 1,3,5)")
        self._print("  表名 - 直接输入表名 (多个表用逗号分隔)")

    def select_tables(self, tables: Sequence[str]) -> list[str]:
        """Ask the user which tables to export.

        ``0`` selects every table without confirmation. Index or name lists
        must be confirmed; declining raises ``UserCancelledError``.
        """
        self.show_tables(tables)

        while True:
            entry = self._read("\n请输入选择: ")
            if not entry:
                self._print("输入不能为空，请重新输入")
                continue

            if entry == "0":
                self._print(f"已选择导出所有 {len(tables)} 个表")
                return list(tables)

            selected = parse_table_numbers(entry, tables) or parse_table_names(entry, tables)
            if selected:
                self._print(f"已选择 {len(selected)} 个表: {', '.join(selected)}")
                return self.confirm_export(selected)

            self._print("无效输入，请重新输入")
            self._print("提示: 输入0选择全部，或输入表序号/表名 (用逗号分隔)")

    def confirm_export(self, tables: list[str]) -> list[str]:
        answer = self._read("\n确认导出? (y/n): ").lower()
        if answer in ("y", "yes"):
            return tables
        raise UserCancelledError("用户取消导出")

    def show_progress(self, current: int, total: int, table_name: str) -> None:
        self._print(f"正在导出 [{current}/{total}]: {table_name}")

    def show_summary(self, success_count: int, total_count: int, output_dir: str) -> None:
        self._print("\n=== 导出完成 ===")
        self._print(f"成功导出: {success_count}/{total_count} 个表")
        self._print(f"输出目录: {output_dir}")
        if success_count < total_count:
            self._print(f"失败: {total_count - success_count} 个表导出失败")
