"""Command-line interface for cmfuncs."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

import yaml

from cmfuncs import functions  # noqa: F401  (registers the function library)
from cmfuncs.logging import get_logger, set_global_log_level
from cmfuncs.manifest import load_manifest_yaml, run_manifest
from cmfuncs.registry import call_function, list_functions
from cmfuncs.scope import Scope

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Clip longer cells with ``...``

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = [
        max(max(len(row[i]) for row in all_data), min_width)
        for i in range(len(clipped_headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in clipped_rows)
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.1f} ms"
    return f"{seconds:.2f} s"


def _parse_yaml_args(raw: List[str]) -> List[Any]:
    """Parse each CLI argument as a YAML scalar or collection."""
    return [yaml.safe_load(arg) if arg != "" else "" for arg in raw]


def _call(name: str, raw_args: List[str], yaml_args: bool) -> None:
    """Call one function and print its result as JSON."""
    try:
        args = _parse_yaml_args(raw_args) if yaml_args else list(raw_args)
        logger.info(f"Calling {name} with {len(args)} argument(s)")
        result = call_function(name, *args, scope=Scope())
        print(json.dumps(result, indent=2, default=str))
    except Exception as e:
        logger.error(f"Failed to call {name}: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to call {name}: {type(e).__name__}: {e}")
        sys.exit(1)


def _run_manifest(path: Path, results_path: Optional[Path], stdout: bool) -> None:
    """Run a manifest file and export call results as JSON.

    Args:
        path: Manifest YAML file.
        results_path: Where to write the JSON results. When ``None`` the JSON
            is printed instead.
        stdout: Also print the JSON when writing to ``results_path``.
    """
    logger.info(f"Loading manifest from: {path}")
    start = perf_counter()

    try:
        data = load_manifest_yaml(path.read_text(encoding="utf-8"))
        results = run_manifest(data)
        json_str = json.dumps(
            {"calls": [r.to_dict() for r in results]}, indent=2, default=str
        )

        if results_path is not None:
            results_path.parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Writing results to: {results_path}")
            results_path.write_text(json_str, encoding="utf-8")
            print(f"✅ Results written to: {results_path}")
            if stdout:
                print(json_str)
        else:
            print(json_str)

        logger.info(
            f"Manifest run completed successfully in "
            f"{_format_duration(perf_counter() - start)}"
        )
    except FileNotFoundError:
        logger.error(f"Manifest file not found: {path}")
        print(f"❌ ERROR: Manifest file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to run manifest: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to run manifest: {type(e).__name__}: {e}")
        sys.exit(1)


def _list_functions(group: Optional[str]) -> None:
    functions_found = list_functions(group)
    if not functions_found:
        print(f"No functions registered in group: {group}")
        return
    rows = [[f.name, f.group, f.signature, f.summary] for f in functions_found]
    print(
        _format_table(
            ["Function", "Group", "Signature", "Description"], rows, max_col_width=60
        )
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``cmfuncs`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="cmfuncs",
        description="Call configuration-management DSL functions.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress console output (logs only)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{call,run,list}",
        help="Available commands",
    )

    # Call command
    call_parser = subparsers.add_parser("call", help="Call a single function")
    call_parser.add_argument("function", help="DSL function name")
    call_parser.add_argument("args", nargs="*", help="Function arguments")
    call_parser.add_argument(
        "--yaml-args",
        "-y",
        action="store_true",
        help="Parse each argument as YAML (numbers, booleans, lists, mappings)",
    )

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a manifest")
    run_parser.add_argument("manifest", type=Path, help="Path to manifest YAML")
    run_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Export results to this JSON file (default: print to stdout)",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Also print results to stdout when --results is given",
    )

    # List command
    list_parser = subparsers.add_parser("list", help="List registered functions")
    list_parser.add_argument(
        "--group", "-g", default=None, help="Only show functions in this group"
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "call":
        _call(args.function, args.args, args.yaml_args)
    elif args.command == "run":
        _run_manifest(args.manifest, args.results, args.stdout)
    elif args.command == "list":
        _list_functions(args.group)


if __name__ == "__main__":
    main()
