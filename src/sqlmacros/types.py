from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional


class Dialect(str, Enum):
    POSTGRES = "postgres"
    SNOWFLAKE = "snowflake"
    BIGQUERY = "bigquery"


class Operation(str, Enum):
    FORMAT_DATE = "format-date"
    GENERATE_DATE_RANGE = "generate-date-range"
    BUSINESS_DAY_CHECK = "business-day-check"
    FISCAL_YEAR_START = "fiscal-year-start"
    CLEAN_STRING = "clean-string"
    EXTRACT_EMAIL_DOMAIN = "extract-email-domain"
    MASK_SENSITIVE_DATA = "mask-sensitive-data"
    VALIDATE_EMAIL = "validate-email"
    VALIDATE_DATA_QUALITY = "validate-data-quality"
    ROW_COUNT = "row-count"
    COMPARE_SIZES = "compare-sizes"
    GENERATE_SLUG = "generate-slug"
    AUDIT_COLUMNS = "audit-columns"
    LOG_MODEL_EXECUTION = "log-model-execution"

    @classmethod
    def parse(cls, name: "str | Operation") -> "Operation":
        """
        Accepts the canonical hyphenated name, the underscore spelling
        ("format_date") and the short aliases used in macro call sites.
        """
        if isinstance(name, Operation):
            return name
        key = str(name).strip().lower().replace("_", "-")
        key = _OPERATION_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            known = ", ".join(op.value for op in cls)
            raise ValueError(f"Unknown operation '{name}'. Known: {known}") from None


_OPERATION_ALIASES: Dict[str, str] = {
    "business-day": "business-day-check",
    "is-business-day": "business-day-check",
    "date-range": "generate-date-range",
    "get-date-range": "generate-date-range",
    "get-fiscal-year-start": "fiscal-year-start",
    "get-table-row-count": "row-count",
    "compare-table-sizes": "compare-sizes",
    "is-valid-email": "validate-email",
    "add-audit-columns": "audit-columns",
}


class MaskType(str, Enum):
    EMAIL = "email"
    PHONE = "phone"


class ValidationType(str, Enum):
    NOT_NULL = "not_null"
    UNIQUE = "unique"
    ACCEPTED_VALUES = "accepted_values"


# operations whose SQL is the same on every dialect
DIALECT_INDEPENDENT = frozenset(
    {
        Operation.VALIDATE_DATA_QUALITY,
        Operation.ROW_COUNT,
        Operation.COMPARE_SIZES,
        Operation.AUDIT_COLUMNS,
        Operation.LOG_MODEL_EXECUTION,
    }
)

DIALECT_SPECIFIC = frozenset(op for op in Operation if op not in DIALECT_INDEPENDENT)


def identity_ref(name: str) -> str:
    return name


@dataclass(frozen=True)
class RenderContext:
    """
    Host environment for a render call.

    ref: maps a logical table name to the physical identifier embedded in SQL.
    run_id / model_name: identify the current run and model for audit columns.
    The remaining fields are the keyword defaults used when a caller omits them.
    """
    ref: Callable[[str], str] = identity_ref
    run_id: Optional[str] = None
    model_name: Optional[str] = None
    date_format: str = "YYYY-MM-DD"
    date_interval: str = "day"
    fiscal_year_start_month: int = 7
    mask_type: str = "email"
    audit_prefix: str = "dbt"
    execution_log_table: str = "dbt_execution_log"


@dataclass(frozen=True)
class MacroSession:
    """A dialect bound to a render context; what the named macro functions take."""
    dialect: Dialect
    context: RenderContext = field(default_factory=RenderContext)
