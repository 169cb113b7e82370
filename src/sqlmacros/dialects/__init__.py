"""Dialect template tables. Importing this package registers every built-in dialect."""

from . import bigquery, postgres, snowflake  # noqa: F401  (registration side effect)
from .base import SQLDialect, TemplateDialect
from .registry import available, get, register

__all__ = ["SQLDialect", "TemplateDialect", "available", "get", "register"]
