from pathlib import Path

import pytest

from sqlmacros import ConfigError, Dialect, UnsupportedDialect, resolve
from sqlmacros.config import MacroConfig, load_macro_config, qualify_ref


def _write(tmp_path: Path, text: str) -> str:
    p = tmp_path / "sqlmacros.yml"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_load_full_config(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
dialect: Snowflake
run_id: 2f1c
model_name: customers
database: analytics
schema: marts
defaults:
  date_format: DD/MM/YYYY
  fiscal_year_start_month: 10
audit:
  prefix: etl
""",
    )
    cfg = load_macro_config(path)
    assert cfg.dialect is Dialect.SNOWFLAKE
    assert cfg.defaults.fiscal_year_start_month == 10
    assert cfg.defaults.mask_type == "email"
    assert cfg.audit.prefix == "etl"
    assert cfg.audit.execution_log_table == "dbt_execution_log"

    session = cfg.to_session()
    ctx = session.context
    assert session.dialect is Dialect.SNOWFLAKE
    assert ctx.ref("orders") == "analytics.marts.orders"
    assert resolve("format-date", session.dialect, "d", context=ctx) == "to_varchar(d, 'DD/MM/YYYY')"
    assert "'2f1c' as etl_run_id" in resolve("audit-columns", session.dialect, context=ctx)


def test_json_config_is_accepted(tmp_path: Path) -> None:
    cfg = load_macro_config(_write(tmp_path, '{"dialect": "bigquery", "quote_identifiers": true, "schema": "ds"}'))
    assert cfg.to_context().ref("orders") == "`ds.orders`"


def test_quoted_postgres_refs():
    cfg = MacroConfig.from_dict({"dialect": "postgres", "database": "dw", "quote_identifiers": True})
    assert cfg.to_context().ref("orders") == '"dw"."orders"'


def test_qualify_ref_keeps_dotted_names():
    assert qualify_ref("other.orders", database="dw", schema="s") == "other.orders"
    assert qualify_ref("orders") == "orders"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as ei:
        load_macro_config(str(tmp_path / "nope.yml"))
    assert ei.value.problem.code == "SQLMACROS_CONFIG_NOT_FOUND"


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="object"):
        load_macro_config(_write(tmp_path, "- postgres\n"))


def test_unparseable_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as ei:
        load_macro_config(_write(tmp_path, "dialect: [postgres\n"))
    assert ei.value.problem.code == "SQLMACROS_CONFIG_PARSE_ERROR"


def test_missing_dialect():
    with pytest.raises(ConfigError, match="dialect"):
        MacroConfig.from_dict({"run_id": "x"})


def test_unsupported_dialect_in_config():
    with pytest.raises(UnsupportedDialect, match="duckdb"):
        MacroConfig.from_dict({"dialect": "duckdb"})


def test_bad_sections():
    with pytest.raises(ConfigError) as ei:
        MacroConfig.from_dict({"dialect": "postgres", "defaults": ["x"]})
    assert ei.value.problem.code == "SQLMACROS_CONFIG_SECTION_NOT_OBJECT"
    with pytest.raises(ConfigError) as ei:
        MacroConfig.from_dict({"dialect": "postgres", "defaults": {"fiscal_year_start_month": "July"}})
    assert ei.value.problem.code == "SQLMACROS_CONFIG_BAD_VALUE"
