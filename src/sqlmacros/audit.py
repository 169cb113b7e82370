"""
Audit and data-quality queries.

These fragments read the same on every supported dialect; only table names
differ, and those go through the caller's `ref` resolver.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .errors import UnsupportedValidationType
from .types import RenderContext, ValidationType


VALIDATION_TEMPLATES: Dict[ValidationType, str] = {
    ValidationType.NOT_NULL: (
        "select count(*) as failed_rows\n"
        "from {table}\n"
        "where {column} is null"
    ),
    ValidationType.UNIQUE: (
        "select count(*) as failed_rows\n"
        "from (\n"
        "    select {column}, count(*) as cnt\n"
        "    from {table}\n"
        "    group by {column}\n"
        "    having count(*) > 1\n"
        ") duplicates"
    ),
    ValidationType.ACCEPTED_VALUES: (
        "select count(*) as failed_rows\n"
        "from {table}\n"
        "where {column} not in ({accepted_values})"
    ),
}

ROW_COUNT_TEMPLATE = (
    "select count(*) as row_count\n"
    "from {table}"
)

_LABELLED_COUNT = (
    "select\n"
    "    '{label}' as table_name,\n"
    "    count(*) as row_count\n"
    "from {table}"
)

AUDIT_COLUMNS_TEMPLATE = (
    "current_timestamp as {prefix}_updated_at,\n"
    "'{run_id}' as {prefix}_run_id,\n"
    "'{model_name}' as {prefix}_model_name"
)

EXECUTION_LOG_TEMPLATE = (
    "insert into {log_table} (\n"
    "    model_name,\n"
    "    execution_time,\n"
    "    run_id,\n"
    "    status\n"
    ") values (\n"
    "    '{model_name}',\n"
    "    current_timestamp,\n"
    "    '{run_id}',\n"
    "    '{status}'\n"
    ")"
)

DATE_DIMENSION_COLUMNS = (
    "date_id",
    "date",
    "year",
    "quarter",
    "month",
    "week",
    "day_of_week",
    "day_of_month",
    "day_of_year",
    "is_weekend",
    "is_month_end",
    "is_quarter_end",
    "is_year_end",
)


def _parse_validation_type(validation_type: Any) -> ValidationType:
    if isinstance(validation_type, ValidationType):
        return validation_type
    try:
        return ValidationType(str(validation_type).strip().lower())
    except ValueError:
        raise UnsupportedValidationType(
            validation_type, supported=[v.value for v in ValidationType]
        ) from None


def _render_allow_list(accepted_values: Union[str, Sequence[Any]]) -> str:
    # a string is taken as an already-rendered SQL list; anything else is quoted item by item
    if isinstance(accepted_values, str):
        return accepted_values
    return ", ".join(f"'{v}'" for v in accepted_values)


def validate_data_quality_sql(
    table: str,
    column: str,
    validation_type: Any = ValidationType.NOT_NULL,
    accepted_values: Optional[Union[str, Sequence[Any]]] = None,
    *,
    context: RenderContext,
) -> str:
    """
    Count the rows of `table` failing a column check.

    - not_null: rows where the column is null
    - unique: value groups that occur more than once
    - accepted_values: rows outside `accepted_values`, which every call site
      must supply; there is no default allow-list.
    """
    vt = _parse_validation_type(validation_type)
    slots = {"table": context.ref(table), "column": column}
    if vt is ValidationType.ACCEPTED_VALUES:
        if accepted_values is None or (not isinstance(accepted_values, str) and len(accepted_values) == 0):
            raise ValueError("accepted_values validation requires an explicit, non-empty allow-list")
        slots["accepted_values"] = _render_allow_list(accepted_values)
    return VALIDATION_TEMPLATES[vt].format(**slots)


def row_count_sql(table: str, *, context: RenderContext) -> str:
    return ROW_COUNT_TEMPLATE.format(table=context.ref(table))


def compare_sizes_sql(table1: str, table2: str, *, context: RenderContext) -> str:
    parts = [_LABELLED_COUNT.format(label=t, table=context.ref(t)) for t in (table1, table2)]
    return "\n\nunion all\n\n".join(parts)


def _require(value: Optional[str], what: str) -> str:
    if not value:
        raise ValueError(f"{what} is required; set it on the RenderContext")
    return value


def audit_columns_sql(*, context: RenderContext) -> str:
    return AUDIT_COLUMNS_TEMPLATE.format(
        prefix=context.audit_prefix,
        run_id=_require(context.run_id, "run_id"),
        model_name=_require(context.model_name, "model_name"),
    )


def execution_log_sql(model_name: str, status: str = "started", *, context: RenderContext) -> str:
    return EXECUTION_LOG_TEMPLATE.format(
        log_table=context.ref(context.execution_log_table),
        model_name=model_name,
        run_id=_require(context.run_id, "run_id"),
        status=status,
    )


def date_dimension_columns() -> List[str]:
    return list(DATE_DIMENSION_COLUMNS)


def model_dependencies(nodes: Iterable[Mapping[str, Any]]) -> List[str]:
    """
    Names of model nodes that depend on at least one other node, in input order.

    Nodes are mappings shaped like a manifest graph entry:
    {"name": ..., "resource_type": "model", "depends_on": {"nodes": [...]}}.
    """
    names: List[str] = []
    for node in nodes:
        if node.get("resource_type") != "model":
            continue
        depends_on = node.get("depends_on") or {}
        if depends_on.get("nodes"):
            names.append(node["name"])
    return names
