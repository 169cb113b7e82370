"""
Dialect template resolver.

`resolve` turns (operation, dialect, arguments) into a SQL fragment:
- Lookup table: every operation maps to one handler; dialect-specific
  handlers pick the template registered for the dialect.
- Verbatim substitution: column, table and literal tokens are inserted
  as given. Nothing is escaped or validated beyond the dialect and the
  data-quality validation type.
- Pure: no state survives a call, so identical requests render
  byte-identical SQL.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from . import audit
from .dialects import SQLDialect
from .dialects import get as get_dialect
from .errors import UnsupportedDialect
from .log import get_logger
from .types import DIALECT_SPECIFIC, MaskType, Operation, RenderContext

logger = get_logger(__name__)

_DEFAULT_CONTEXT = RenderContext()

Handler = Callable[..., str]


# =============================================================================
# Dialect-specific handlers
# =============================================================================

def _format_date(d: SQLDialect, ctx: RenderContext, column: str, format: Optional[str] = None) -> str:
    return d.render(Operation.FORMAT_DATE, column=column, format=ctx.date_format if format is None else format)


def _generate_date_range(
    d: SQLDialect, ctx: RenderContext, start_date: str, end_date: str, interval: Optional[str] = None
) -> str:
    return d.render(
        Operation.GENERATE_DATE_RANGE,
        start_date=start_date,
        end_date=end_date,
        interval=ctx.date_interval if interval is None else interval,
    )


def _business_day_check(d: SQLDialect, ctx: RenderContext, column: str) -> str:
    return d.render(Operation.BUSINESS_DAY_CHECK, column=column)


def fiscal_offsets(start_month: int) -> Dict[str, int]:
    """
    Month shifts that move a date into the calendar year named after its fiscal year start.

    On or after the start month the date is pushed forward by (12 - start_month)
    months; before it, pulled back by (start_month - 1) months. Truncating the
    shifted date to the year gives the fiscal-year boundary.
    """
    start_month = int(start_month)
    return {"start_month": start_month, "lead_months": 12 - start_month, "lag_months": start_month - 1}


def _fiscal_year_start(d: SQLDialect, ctx: RenderContext, column: str, start_month: Optional[int] = None) -> str:
    month = ctx.fiscal_year_start_month if start_month is None else start_month
    return d.render(Operation.FISCAL_YEAR_START, column=column, **fiscal_offsets(month))


def _clean_string(d: SQLDialect, ctx: RenderContext, column: str) -> str:
    return d.render(Operation.CLEAN_STRING, column=column)


def _extract_email_domain(d: SQLDialect, ctx: RenderContext, column: str) -> str:
    return d.render(Operation.EXTRACT_EMAIL_DOMAIN, column=column)


def _mask_sensitive_data(d: SQLDialect, ctx: RenderContext, column: str, mask_type: Optional[str] = None) -> str:
    requested = ctx.mask_type if mask_type is None else mask_type
    try:
        mt = MaskType(str(getattr(requested, "value", requested)).strip().lower())
    except ValueError:
        # unrecognised mask types must not fail a pipeline
        logger.warning("Mask type %r not recognised; %s left unmasked", requested, column)
        return column
    return d.render_mask(mt, column=column)


def _validate_email(d: SQLDialect, ctx: RenderContext, column: str) -> str:
    return d.render(Operation.VALIDATE_EMAIL, column=column)


def _generate_slug(d: SQLDialect, ctx: RenderContext, column: str) -> str:
    return d.render(Operation.GENERATE_SLUG, column=column)


# =============================================================================
# Dialect-independent handlers
# =============================================================================

def _validate_data_quality(
    d: SQLDialect,
    ctx: RenderContext,
    table: str,
    column: str,
    validation_type: Any = "not_null",
    accepted_values: Any = None,
) -> str:
    return audit.validate_data_quality_sql(table, column, validation_type, accepted_values, context=ctx)


def _row_count(d: SQLDialect, ctx: RenderContext, table: str) -> str:
    return audit.row_count_sql(table, context=ctx)


def _compare_sizes(d: SQLDialect, ctx: RenderContext, table1: str, table2: str) -> str:
    return audit.compare_sizes_sql(table1, table2, context=ctx)


def _audit_columns(d: SQLDialect, ctx: RenderContext) -> str:
    return audit.audit_columns_sql(context=ctx)


def _log_model_execution(d: SQLDialect, ctx: RenderContext, model_name: str, status: str = "started") -> str:
    return audit.execution_log_sql(model_name, status, context=ctx)


HANDLERS: Dict[Operation, Handler] = {
    Operation.FORMAT_DATE: _format_date,
    Operation.GENERATE_DATE_RANGE: _generate_date_range,
    Operation.BUSINESS_DAY_CHECK: _business_day_check,
    Operation.FISCAL_YEAR_START: _fiscal_year_start,
    Operation.CLEAN_STRING: _clean_string,
    Operation.EXTRACT_EMAIL_DOMAIN: _extract_email_domain,
    Operation.MASK_SENSITIVE_DATA: _mask_sensitive_data,
    Operation.VALIDATE_EMAIL: _validate_email,
    Operation.GENERATE_SLUG: _generate_slug,
    Operation.VALIDATE_DATA_QUALITY: _validate_data_quality,
    Operation.ROW_COUNT: _row_count,
    Operation.COMPARE_SIZES: _compare_sizes,
    Operation.AUDIT_COLUMNS: _audit_columns,
    Operation.LOG_MODEL_EXECUTION: _log_model_execution,
}


def resolve(
    operation: "str | Operation",
    dialect: Any,
    *args: Any,
    context: Optional[RenderContext] = None,
    **kwargs: Any,
) -> str:
    """
    Render one SQL fragment.

    Raises:
    - ValueError for an unknown operation name
    - UnsupportedDialect when the dialect is not registered
    - UnsupportedValidationType for an unknown data-quality check
    - TypeError when the arguments do not fit the operation
    """
    op = Operation.parse(operation)
    d = get_dialect(dialect, op)
    ctx = context or _DEFAULT_CONTEXT
    sql = HANDLERS[op](d, ctx, *args, **kwargs)
    logger.debug("Resolved %s for %s (%d chars)", op.value, d.name, len(sql))
    return sql


def supports(operation: "str | Operation", dialect: Any) -> bool:
    op = Operation.parse(operation)
    try:
        d = get_dialect(dialect, op)
    except UnsupportedDialect:
        return False
    if op is Operation.MASK_SENSITIVE_DATA:
        return all(mt in d.mask_templates for mt in MaskType)
    if op in DIALECT_SPECIFIC:
        return op in d.templates
    return True
