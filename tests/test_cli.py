import json
from pathlib import Path

from sqlmacros.cli import main
from sqlmacros.errors import ExitCode


def test_render_text(capsys):
    rc = main(["render", "format-date", "created_at", "--dialect", "bigquery"])
    assert rc == 0
    assert capsys.readouterr().out == "format_date('YYYY-MM-DD', created_at)\n"


def test_render_with_kwargs(capsys):
    rc = main(["render", "fiscal-year-start", "d", "--dialect", "postgres", "--kw", "start_month=4"])
    assert rc == 0
    assert "interval '8 months'" in capsys.readouterr().out


def test_render_json_payload(capsys):
    rc = main(["render", "business-day", "d", "--dialect", "snowflake", "--format", "json"])
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is True
    assert payload["metadata"]["operation"] == "business-day-check"
    assert "not in (1, 7)" in payload["sql"]


def test_render_to_file_with_config(tmp_path: Path, capsys):
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("dialect: postgres\nschema: marts\n", encoding="utf-8")
    out = tmp_path / "sql" / "count.sql"
    rc = main(["render", "row-count", "orders", "--config", str(cfg), "--header", "--out", str(out)])
    assert rc == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("-- sqlmacros:")
    assert "from marts.orders" in text
    assert "Wrote SQL" in capsys.readouterr().out


def test_unsupported_dialect_exit_code(capsys):
    rc = main(["render", "format-date", "d", "--dialect", "oracle"])
    assert rc == int(ExitCode.UNSUPPORTED)
    err = capsys.readouterr().err
    assert "ERROR[SQLMACROS_UNSUPPORTED_DIALECT]" in err
    assert "oracle" in err


def test_unsupported_validation_type_json(capsys):
    rc = main([
        "render", "validate-data-quality", "t", "c", "bogus", "--dialect", "postgres", "--format", "json",
    ])
    assert rc == int(ExitCode.UNSUPPORTED)
    payload = json.loads(capsys.readouterr().out)
    assert payload["error"]["code"] == "SQLMACROS_UNSUPPORTED_VALIDATION_TYPE"
    assert payload["exit_code"] == int(ExitCode.UNSUPPORTED)


def test_usage_errors(capsys):
    assert main(["render", "format-date", "d"]) == int(ExitCode.USAGE_ERROR)
    assert main(["render", "explode", "d", "--dialect", "postgres"]) == int(ExitCode.USAGE_ERROR)
    assert main(["render", "format-date", "d", "--dialect", "postgres", "--kw", "oops"]) == int(ExitCode.USAGE_ERROR)
    assert "SQLMACROS_USAGE_ERROR" in capsys.readouterr().err


def test_missing_config_exit_code(tmp_path: Path):
    rc = main(["render", "row-count", "t", "--config", str(tmp_path / "missing.yml")])
    assert rc == int(ExitCode.CONFIG_INVALID)


def test_list(capsys):
    assert main(["list", "--format", "json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["dialects"] == ["bigquery", "postgres", "snowflake"]
    assert "generate-slug" in out["operations"]
    assert out["validation_types"] == ["not_null", "unique", "accepted_values"]


def test_no_command_prints_help(capsys):
    assert main([]) == int(ExitCode.USAGE_ERROR)
    assert "usage" in capsys.readouterr().out


def test_dialect_flag_overrides_config_quoting(tmp_path: Path, capsys):
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("dialect: postgres\nschema: marts\nquote_identifiers: true\n", encoding="utf-8")
    rc = main(["render", "row-count", "orders", "--config", str(cfg), "--dialect", "bigquery", "--format", "json"])
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["sql"] == "select count(*) as row_count\nfrom `marts.orders`\n"
    assert payload["metadata"]["dialect"] == "bigquery"


def test_unknown_dialect_flag_with_config(tmp_path: Path):
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("dialect: postgres\n", encoding="utf-8")
    rc = main(["render", "row-count", "orders", "--config", str(cfg), "--dialect", "oracle"])
    assert rc == int(ExitCode.UNSUPPORTED)


def test_tokens_are_passed_verbatim(capsys):
    assert main(["render", "format-date", "d", "--dialect", "postgres", "--kw", "format=0101"]) == 0
    assert capsys.readouterr().out == "to_char(d, '0101')\n"
    assert main(["render", "format-date", "d", "007", "--dialect", "snowflake"]) == 0
    assert capsys.readouterr().out == "to_varchar(d, '007')\n"
