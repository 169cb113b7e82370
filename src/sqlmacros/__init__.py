"""Dialect-aware SQL fragment macros for PostgreSQL, Snowflake and BigQuery."""

__version__ = "0.1.0"

from .errors import (
    ConfigError,
    ExitCode,
    MacroException,
    MacroProblem,
    UnsupportedDialect,
    UnsupportedValidationType,
)
from .resolver import resolve, supports
from .types import Dialect, MacroSession, MaskType, Operation, RenderContext, ValidationType

__all__ = [
    "ConfigError",
    "Dialect",
    "ExitCode",
    "MacroException",
    "MacroProblem",
    "MacroSession",
    "MaskType",
    "Operation",
    "RenderContext",
    "UnsupportedDialect",
    "UnsupportedValidationType",
    "ValidationType",
    "resolve",
    "supports",
]
