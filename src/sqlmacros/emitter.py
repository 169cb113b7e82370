from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Optional

from .dialects import get as get_dialect
from .resolver import resolve
from .types import Operation, RenderContext


def _canonical_json_bytes(obj: Any) -> bytes:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str).encode("utf-8")


def request_fingerprint(operation: Operation, dialect_name: str, args: Any, kwargs: Dict[str, Any]) -> str:
    """
    Deterministic fingerprint of a render request (keyword order does not matter).
    """
    req = {"operation": operation.value, "dialect": dialect_name, "args": list(args), "kwargs": kwargs}
    return hashlib.sha256(_canonical_json_bytes(req)).hexdigest()


def _header_comment(meta: Dict[str, Any]) -> str:
    # single-line JSON so the header survives log scraping
    meta_json = json.dumps(meta, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return f"-- sqlmacros:{meta_json}"


def emit_fragment(
    operation: "str | Operation",
    dialect: Any,
    *args: Any,
    context: Optional[RenderContext] = None,
    header: bool = False,
    **kwargs: Any,
) -> Dict[str, Any]:
    op = Operation.parse(operation)
    d = get_dialect(dialect, op)
    sql = resolve(op, d.name, *args, context=context, **kwargs).strip()
    meta = {
        "dialect": d.name,
        "operation": op.value,
        "fingerprint": request_fingerprint(op, d.name, args, kwargs),
    }
    if header:
        sql = _header_comment(meta) + "\n" + sql
    return {"sql": sql + "\n", "metadata": meta}
