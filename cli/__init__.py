"""Command-line interface for ddl-export."""

__version__ = "0.1.0"
