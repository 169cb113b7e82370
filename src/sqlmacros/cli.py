# src/sqlmacros/cli.py
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from . import __version__
from .audit import date_dimension_columns
from .config import load_macro_config
from .dialects import available
from .dialects import get as get_dialect
from .emitter import emit_fragment
from .errors import ExitCode, MacroException, problem_to_dict
from .log import get_logger, setup_logging
from .types import Dialect, MaskType, Operation, RenderContext, ValidationType

logger = get_logger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def _print_payload(payload: Dict[str, Any], fmt: str) -> None:
    if fmt == "json":
        print(json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True, default=str))
    elif fmt == "jsonl":
        print(json.dumps(payload, ensure_ascii=False, sort_keys=True, default=str))


def _write_text(path: str | Path, text: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


def _parse_kwargs(pairs: List[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"--kw expects key=value, got {pair!r}")
        out[key.strip().replace("-", "_")] = value
    return out


def _resolve_target(args: argparse.Namespace) -> Tuple[str, Optional[RenderContext]]:
    if args.config:
        cfg = load_macro_config(args.config)
        if args.dialect:
            # the override must also drive identifier quoting in ref()
            cfg = replace(cfg, dialect=Dialect(get_dialect(args.dialect).name))
        dialect = cfg.dialect.value
        return dialect, cfg.to_context()
    if not args.dialect:
        raise argparse.ArgumentTypeError("--dialect is required when no --config is given")
    return args.dialect, None


# =============================================================================
# Commands
# =============================================================================

def cmd_render(args: argparse.Namespace) -> int:
    dialect, context = _resolve_target(args)
    kwargs = _parse_kwargs(args.kw)
    result = emit_fragment(args.operation, dialect, *args.args, context=context, header=args.header, **kwargs)
    logger.info("Rendered %s", result["metadata"])

    if args.out:
        _write_text(args.out, result["sql"])

    if args.format in ("json", "jsonl"):
        payload = {"ok": True, **result}
        if args.out:
            payload["out"] = str(args.out)
        _print_payload(payload, args.format)
    elif args.out:
        print(f"Wrote SQL: {args.out}")
    else:
        sys.stdout.write(result["sql"])
    return int(ExitCode.OK)


def cmd_list(args: argparse.Namespace) -> int:
    out = {
        "operations": [op.value for op in Operation],
        "dialects": sorted(available().keys()),
        "mask_types": [m.value for m in MaskType],
        "validation_types": [v.value for v in ValidationType],
        "date_dimension_columns": date_dimension_columns(),
    }
    if args.format in ("json", "jsonl"):
        _print_payload(out, args.format)
    else:
        for key, values in out.items():
            print(f"{key}: {', '.join(values)}")
    return int(ExitCode.OK)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sqlmacros", description="Render dialect-aware SQL fragments.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)

    sub = parser.add_subparsers(dest="cmd")

    p_render = sub.add_parser("render", help="Render one operation for one dialect")
    p_render.add_argument("operation", help="Operation name, e.g. format-date")
    p_render.add_argument("args", nargs="*", help="Positional arguments (column/table tokens, literals)")
    p_render.add_argument("--dialect", default=None, help="postgres | snowflake | bigquery")
    p_render.add_argument("--config", default=None, help="YAML/JSON project config")
    p_render.add_argument("--kw", action="append", default=[], metavar="KEY=VALUE", help="Keyword argument")
    p_render.add_argument("--header", action="store_true", help="Prefix a -- sqlmacros:{...} comment")
    p_render.add_argument("--out", default=None, help="Write SQL to this file")
    p_render.add_argument("--format", default="text", choices=["text", "json", "jsonl"])
    p_render.set_defaults(func=cmd_render)

    p_list = sub.add_parser("list", help="List operations, dialects and option values")
    p_list.add_argument("--format", default="text", choices=["text", "json", "jsonl"])
    p_list.set_defaults(func=cmd_list)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point used by the console script: `from sqlmacros.cli import main`.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(log_level=args.log_level, log_file=args.log_file)

    if not getattr(args, "cmd", None):
        parser.print_help()
        return int(ExitCode.USAGE_ERROR)

    fmt = getattr(args, "format", "text")
    try:
        return int(args.func(args))
    except MacroException as e:
        payload = {"ok": False, "error": problem_to_dict(e.problem), "exit_code": int(e.exit_code)}
        if fmt in ("json", "jsonl"):
            _print_payload(payload, fmt)
        else:
            err = payload["error"]
            print(f"ERROR[{err['code']}]: {err['message']}", file=sys.stderr)
            if err.get("remediation"):
                print(f"REMEDIATION: {err['remediation']}", file=sys.stderr)
            print(f"DETAILS: {err.get('details', {})}", file=sys.stderr)
        return int(e.exit_code)
    except (argparse.ArgumentTypeError, TypeError, ValueError) as e:
        # bad call site: unknown operation, wrong arity, missing allow-list
        if fmt in ("json", "jsonl"):
            _print_payload({"ok": False, "error": {"code": "SQLMACROS_USAGE_ERROR", "message": str(e)}}, fmt)
        else:
            print(f"ERROR[SQLMACROS_USAGE_ERROR]: {e}", file=sys.stderr)
        return int(ExitCode.USAGE_ERROR)


if __name__ == "__main__":
    sys.exit(main())
