"""Pydantic models for export configuration"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_OUTPUT_DIRECTORY = "output"
DEFAULT_FILENAME_FORMAT = "{database}_all_tables_ddl"


class DatabaseProfile(BaseModel):
    """One configured database connection target"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    name: str = Field(description="Display name shown in the selection menu")
    dialect: str = Field(alias="type", description="Database type: mysql or postgres")
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(description="Database port")
    username: str = Field(default="", description="Login user")
    password: str = Field(default="", description="Login password")
    database: str = Field(description="Database name")
    sslmode: str | None = Field(default=None, description="PostgreSQL sslmode (default: disable)")

    @field_validator("host", "username", "password", mode="before")
    @classmethod
    def empty_value_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat a key written without a value (YAML null) as unset."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def describe(self) -> str:
        """Return a one-line description like ``mysql://host:3306/db``."""
        return f"{self.dialect}://{self.host}:{self.port}/{self.database}"


class OutputSpec(BaseModel):
    """Where and under which name exported DDL is written"""

    model_config = ConfigDict(frozen=True)

    directory: str = Field(default=DEFAULT_OUTPUT_DIRECTORY, description="Output directory")
    filename_format: str = Field(
        default=DEFAULT_FILENAME_FORMAT,
        description="File name template with {database} (and optionally {table}) placeholders",
    )


class ExportConfig(BaseModel):
    """Top-level configuration file contents"""

    databases: list[DatabaseProfile] = Field(default_factory=list, description="Database profiles")
    output: OutputSpec = Field(default_factory=OutputSpec, description="Output settings")
