"""Pytest configuration and shared fixtures"""

from pathlib import Path

import pytest
import yaml

from schema_export.models import DatabaseProfile, OutputSpec


@pytest.fixture
def mysql_profile() -> DatabaseProfile:
    """Return a sample MySQL profile"""
    return DatabaseProfile(
        name="shop-mysql",
        type="mysql",
        host="h",
        port=3306,
        username="u",
        password="p",
        database="d",
    )


@pytest.fixture
def postgres_profile() -> DatabaseProfile:
    """Return a sample PostgreSQL profile"""
    return DatabaseProfile(
        name="shop-pg",
        type="postgres",
        host="h",
        port=5432,
        username="u",
        password="p",
        database="d",
        sslmode="",
    )


@pytest.fixture
def output_spec(tmp_path: Path) -> OutputSpec:
    """Return an output spec pointing into a temporary directory"""
    return OutputSpec(directory=str(tmp_path / "out"), filename_format="{database}_schema")


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a config file with two profiles and return its path"""
    config_path = tmp_path / "config.yaml"
    data = {
        "databases": [
            {
                "name": "shop-mysql",
                "type": "mysql",
                "host": "localhost",
                "port": 3306,
                "username": "root",
                "password": "secret",
                "database": "shop",
            },
            {
                "name": "shop-pg",
                "type": "postgres",
                "host": "localhost",
                "port": 5432,
                "username": "postgres",
                "password": "secret",
                "database": "shop",
                "sslmode": "require",
            },
        ],
        "output": {"directory": str(tmp_path / "out"), "filename_format": "{database}_schema"},
    }
    config_path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_path
