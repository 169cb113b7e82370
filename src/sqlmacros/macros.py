"""
Named macro functions.

Each function renders one operation for the dialect of a `MacroSession`,
mirroring the macro call sites of a transformation project:

    >>> session = MacroSession(Dialect.SNOWFLAKE)
    >>> format_date(session, "created_at")
    "to_varchar(created_at, 'YYYY-MM-DD')"
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from .audit import date_dimension_columns, model_dependencies
from .resolver import resolve
from .types import MacroSession, Operation


def _render(session: MacroSession, operation: Operation, *args: Any, **kwargs: Any) -> str:
    return resolve(operation, session.dialect, *args, context=session.context, **kwargs)


def format_date(session: MacroSession, date_column: str, format: Optional[str] = None) -> str:
    return _render(session, Operation.FORMAT_DATE, date_column, format)


def get_date_range(session: MacroSession, start_date: str, end_date: str, interval: Optional[str] = None) -> str:
    """Date series between two SQL expressions, e.g. ("'2023-01-01'", "'2023-12-31'", "month")."""
    return _render(session, Operation.GENERATE_DATE_RANGE, start_date, end_date, interval)


def is_business_day(session: MacroSession, date_column: str) -> str:
    return _render(session, Operation.BUSINESS_DAY_CHECK, date_column)


def get_fiscal_year_start(session: MacroSession, date_column: str, start_month: Optional[int] = None) -> str:
    return _render(session, Operation.FISCAL_YEAR_START, date_column, start_month)


def clean_string(session: MacroSession, string_column: str) -> str:
    return _render(session, Operation.CLEAN_STRING, string_column)


def extract_email_domain(session: MacroSession, email_column: str) -> str:
    return _render(session, Operation.EXTRACT_EMAIL_DOMAIN, email_column)


def mask_sensitive_data(session: MacroSession, column: str, mask_type: Optional[str] = None) -> str:
    return _render(session, Operation.MASK_SENSITIVE_DATA, column, mask_type)


def is_valid_email(session: MacroSession, email_column: str) -> str:
    return _render(session, Operation.VALIDATE_EMAIL, email_column)


def generate_slug(session: MacroSession, text_column: str) -> str:
    return _render(session, Operation.GENERATE_SLUG, text_column)


def validate_data_quality(
    session: MacroSession,
    table: str,
    column: str,
    validation_type: str = "not_null",
    accepted_values: Optional[Union[str, Sequence[Any]]] = None,
) -> str:
    return _render(session, Operation.VALIDATE_DATA_QUALITY, table, column, validation_type, accepted_values)


def get_table_row_count(session: MacroSession, table: str) -> str:
    return _render(session, Operation.ROW_COUNT, table)


def compare_table_sizes(session: MacroSession, table1: str, table2: str) -> str:
    return _render(session, Operation.COMPARE_SIZES, table1, table2)


def add_audit_columns(session: MacroSession) -> str:
    return _render(session, Operation.AUDIT_COLUMNS)


def log_model_execution(session: MacroSession, model_name: str, status: str = "started") -> str:
    return _render(session, Operation.LOG_MODEL_EXECUTION, model_name, status)


__all__ = [
    "add_audit_columns",
    "clean_string",
    "compare_table_sizes",
    "date_dimension_columns",
    "extract_email_domain",
    "format_date",
    "generate_slug",
    "get_date_range",
    "get_fiscal_year_start",
    "get_table_row_count",
    "is_business_day",
    "is_valid_email",
    "log_model_execution",
    "mask_sensitive_data",
    "model_dependencies",
    "validate_data_quality",
]
