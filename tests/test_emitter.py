import json

from sqlmacros.emitter import emit_fragment, request_fingerprint
from sqlmacros.types import Operation


def test_emit_without_header():
    out = emit_fragment("row-count", "postgres", "orders")
    assert out["sql"] == "select count(*) as row_count\nfrom orders\n"
    assert out["metadata"]["dialect"] == "postgres"
    assert out["metadata"]["operation"] == "row-count"


def test_emit_with_header_is_single_line_json():
    out = emit_fragment("clean-string", "BIGQUERY", "name", header=True)
    header, body = out["sql"].split("\n", 1)
    assert header.startswith("-- sqlmacros:")
    meta = json.loads(header[len("-- sqlmacros:"):])
    assert meta == out["metadata"]
    assert meta["dialect"] == "bigquery"
    assert body == "trim(regexp_replace(name, r'\\s+', ' '))\n"


def test_fingerprint_is_deterministic_and_order_insensitive():
    a = request_fingerprint(Operation.FORMAT_DATE, "postgres", ("d",), {"format": "YYYY", "x": 1})
    b = request_fingerprint(Operation.FORMAT_DATE, "postgres", ("d",), {"x": 1, "format": "YYYY"})
    c = request_fingerprint(Operation.FORMAT_DATE, "snowflake", ("d",), {"format": "YYYY", "x": 1})
    assert a == b
    assert a != c


def test_emit_is_repeatable():
    first = emit_fragment("fiscal-year-start", "snowflake", "d", 4, header=True)
    second = emit_fragment("fiscal-year-start", "snowflake", "d", 4, header=True)
    assert first == second
