"""Command line interface for the Scientific Calculator plugin."""

from __future__ import annotations

import argparse
import json
import math
import sys
from typing import Any, TextIO

from .core import evaluate, list_constants, list_functions
from .core.engine import DEFAULT_MAX_DEPTH


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _result_payload(expression: str, args: argparse.Namespace) -> dict[str, Any]:
    result = evaluate(expression, max_depth=args.max_depth, max_length=args.max_length)
    payload: dict[str, Any] = {"expression": expression, "display": result.display, "ok": result.ok}
    if result.ok:
        payload["value"] = result.value if math.isfinite(result.value) else None
    elif args.verbose:
        payload["error"] = result.error
    return payload


def command_eval(args: argparse.Namespace) -> int:
    results = [_result_payload(expression, args) for expression in args.expressions]
    _print({"results": results})
    return 0 if all(item["ok"] for item in results) else 1


def command_functions(args: argparse.Namespace) -> int:
    _print({"functions": list_functions(), "constants": list_constants()})
    return 0


def run_repl(args: argparse.Namespace, stream: TextIO | None = None) -> int:
    stream = stream or sys.stdin
    for line in stream:
        expression = line.rstrip("\n")
        if not expression.strip():
            continue
        result = evaluate(expression, max_depth=args.max_depth, max_length=args.max_length)
        print(result.display)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scientific Calculator CLI")
    parser.add_argument("--max-depth", dest="max_depth", type=int, default=DEFAULT_MAX_DEPTH, help="Nesting limit")
    parser.add_argument("--max-length", dest="max_length", type=int, default=None, help="Input length limit (unlimited by default)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    eval_parser = subparsers.add_parser("eval", help="Evaluate one or more expressions")
    eval_parser.add_argument("expressions", nargs="+", help="Expression text, e.g. '2+3*4'")
    eval_parser.add_argument("--verbose", action="store_true", help="Include the failure reason")
    eval_parser.set_defaults(func=command_eval)

    functions_parser = subparsers.add_parser("functions", help="List function and constant names")
    functions_parser.set_defaults(func=command_functions)

    repl_parser = subparsers.add_parser("repl", help="Evaluate expressions read from stdin")
    repl_parser.set_defaults(func=run_repl)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
