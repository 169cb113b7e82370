from sqlmacros import Dialect, MacroSession, RenderContext
from sqlmacros import macros


def test_named_macros_follow_session_dialect():
    pg = MacroSession(Dialect.POSTGRES)
    bq = MacroSession(Dialect.BIGQUERY)
    assert macros.format_date(pg, "created_at") == "to_char(created_at, 'YYYY-MM-DD')"
    assert macros.format_date(bq, "created_at", "%Y-%m") == "format_date('%Y-%m', created_at)"
    assert macros.is_business_day(bq, "d").endswith("not in (1, 7)")


def test_named_macros_use_context_defaults():
    session = MacroSession(Dialect.SNOWFLAKE, RenderContext(mask_type="phone", date_interval="week"))
    assert "***-***-" in macros.mask_sensitive_data(session, "phone_number")
    assert "'week'" in macros.get_date_range(session, "a", "b")


def test_named_audit_macros():
    session = MacroSession(
        Dialect.POSTGRES,
        RenderContext(ref=lambda n: f"raw.{n}", run_id="abc", model_name="orders"),
    )
    assert "from raw.orders" in macros.get_table_row_count(session, "orders")
    assert "'abc' as dbt_run_id" in macros.add_audit_columns(session)
    assert "raw.dbt_execution_log" in macros.log_model_execution(session, "orders")
    assert "where id is null" in macros.validate_data_quality(session, "orders", "id")
    assert "union all" in macros.compare_table_sizes(session, "a", "b")


def test_string_macros():
    session = MacroSession(Dialect.POSTGRES)
    assert macros.clean_string(session, "n").startswith("trim(")
    assert macros.extract_email_domain(session, "e") == "split_part(e, '@', 2)"
    assert macros.is_valid_email(session, "e").startswith("e ~* ")
    assert macros.generate_slug(session, "title").startswith("lower(")
    assert "date_trunc('year'" in macros.get_fiscal_year_start(session, "d", 10)
