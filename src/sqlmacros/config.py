"""
Project config loading for sqlmacros.

Loads a YAML/JSON file describing the target warehouse and the run, and turns
it into a `MacroSession` that can be passed to every macro call.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from .dialects import get as get_dialect
from .errors import ConfigError, UnsupportedDialect
from .types import Dialect, MacroSession, RenderContext


def qualify_ref(
    name: str,
    *,
    database: Optional[str] = None,
    schema: Optional[str] = None,
    quote: Optional[Callable[[str], str]] = None,
) -> str:
    """Resolve a logical table name to database.schema.table; already-dotted names pass through."""
    if "." in name:
        physical = name
    else:
        physical = ".".join(p for p in (database, schema, name) if p)
    return quote(physical) if quote else physical


@dataclass(frozen=True)
class RenderDefaultsConfig:
    """Keyword defaults applied when a macro call omits them."""

    date_format: str = "YYYY-MM-DD"
    date_interval: str = "day"
    fiscal_year_start_month: int = 7
    mask_type: str = "email"


@dataclass(frozen=True)
class AuditConfig:
    prefix: str = "dbt"
    execution_log_table: str = "dbt_execution_log"


@dataclass(frozen=True)
class MacroConfig:
    """Loaded project configuration."""

    raw: Dict[str, Any]
    dialect: Dialect
    run_id: Optional[str]
    model_name: Optional[str]
    database: Optional[str]
    schema: Optional[str]
    quote_identifiers: bool
    defaults: RenderDefaultsConfig
    audit: AuditConfig

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> MacroConfig:
        dialect_name = d.get("dialect")
        if not dialect_name:
            raise ConfigError(
                "SQLMACROS_CONFIG_MISSING_DIALECT",
                "Config is missing required key: dialect",
                details={"keys": sorted(d.keys())},
                remediation="Add 'dialect: postgres|snowflake|bigquery' to the config.",
            )
        try:
            dialect = Dialect(str(dialect_name).strip().lower())
        except ValueError as e:
            raise UnsupportedDialect(dialect_name, "config", supported=[x.value for x in Dialect]) from e

        df = _section(d, "defaults")
        au = _section(d, "audit")
        try:
            defaults = RenderDefaultsConfig(
                date_format=str(df.get("date_format", "YYYY-MM-DD")),
                date_interval=str(df.get("date_interval", "day")),
                fiscal_year_start_month=int(df.get("fiscal_year_start_month", 7)),
                mask_type=str(df.get("mask_type", "email")),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(
                "SQLMACROS_CONFIG_BAD_VALUE",
                "Config 'defaults' has a value of the wrong type",
                details={"defaults": df, "error": repr(e)},
                remediation="fiscal_year_start_month must be an integer month (1-12).",
                cause=e,
            )
        audit = AuditConfig(
            prefix=str(au.get("prefix", "dbt")),
            execution_log_table=str(au.get("execution_log_table", "dbt_execution_log")),
        )
        return cls(
            raw=d,
            dialect=dialect,
            run_id=_opt_str(d.get("run_id")),
            model_name=_opt_str(d.get("model_name")),
            database=_opt_str(d.get("database")),
            schema=_opt_str(d.get("schema")),
            quote_identifiers=bool(d.get("quote_identifiers", False)),
            defaults=defaults,
            audit=audit,
        )

    def ref_resolver(self) -> Callable[[str], str]:
        quote = get_dialect(self.dialect).quote_ident if self.quote_identifiers else None
        return partial(qualify_ref, database=self.database, schema=self.schema, quote=quote)

    def to_context(self) -> RenderContext:
        return RenderContext(
            ref=self.ref_resolver(),
            run_id=self.run_id,
            model_name=self.model_name,
            date_format=self.defaults.date_format,
            date_interval=self.defaults.date_interval,
            fiscal_year_start_month=self.defaults.fiscal_year_start_month,
            mask_type=self.defaults.mask_type,
            audit_prefix=self.audit.prefix,
            execution_log_table=self.audit.execution_log_table,
        )

    def to_session(self) -> MacroSession:
        return MacroSession(dialect=self.dialect, context=self.to_context())


def _opt_str(v: Any) -> Optional[str]:
    return None if v is None else str(v)


def _section(d: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = d.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(
            "SQLMACROS_CONFIG_SECTION_NOT_OBJECT",
            f"Config section '{key}' must be a mapping",
            details={"section": key, "type": type(section).__name__},
            remediation=f"Write '{key}:' as a YAML mapping of key: value pairs.",
        )
    return section


def load_macro_config(path: str) -> MacroConfig:
    """
    Load a project configuration from a YAML or JSON file.

    The file must contain a mapping with at least a 'dialect' key.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(
            "SQLMACROS_CONFIG_NOT_FOUND",
            f"Config not found: {path}",
            details={"path": str(path)},
            remediation="Verify the path is correct and the file exists.",
        )
    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(
            "SQLMACROS_CONFIG_PARSE_ERROR",
            f"Failed to parse YAML: {path}",
            details={"path": str(path), "error": repr(e)},
            remediation="Ensure the file is valid YAML or JSON encoded in UTF-8.",
            cause=e,
        )
    if not isinstance(obj, dict):
        raise ConfigError(
            "SQLMACROS_CONFIG_TOPLEVEL_NOT_OBJECT",
            f"Config must be a YAML/JSON object, got {type(obj).__name__}",
            details={"path": str(path), "type": type(obj).__name__},
            remediation="Wrap the config in a mapping at the top level.",
        )
    return MacroConfig.from_dict(obj)
