"""CLI entry point for proc-canonicalize."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .canonical import default_canonicalizer
from .config import ResolverConfig, _get_config_path, load_config
from .errors import classify_error

console = Console(stderr=True)


def _displayable(text: str) -> str:
    # Undecodable file names arrive as lone surrogates; show them escaped.
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


def _write_path(path: str) -> None:
    """Write *path* to stdout as the original file-system bytes."""
    data = os.fsencode(path) + b"\n"
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(data.decode("utf-8", "backslashreplace"))
        return
    sys.stdout.flush()
    buffer.write(data)
    buffer.flush()


def _load_config_or_exit(config_path: Path | None) -> ResolverConfig:
    try:
        return load_config(config_path)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(2)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proc-canonicalize",
        description="Canonicalize paths, preserving /proc/PID/root and /proc/PID/cwd boundaries",
    )
    parser.add_argument("paths", nargs="+", metavar="PATH", help="Paths to canonicalize")
    parser.add_argument(
        "-c", "--config", dest="config_path", type=Path,
        default=None, help=f"Config file (default: {_get_config_path()})",
    )
    parser.add_argument(
        "--max-symlinks", type=int, default=None,
        help="Symlinks to follow while looking for indirect boundaries",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log resolution steps to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = _load_config_or_exit(args.config_path)
    if args.max_symlinks is not None:
        if args.max_symlinks < 1:
            console.print("[red]Configuration error:[/red] --max-symlinks must be at least 1")
            sys.exit(2)
        config = replace(config, max_symlink_follows=args.max_symlinks)

    canonicalizer = default_canonicalizer(config)
    results: list[dict[str, object]] = []
    failed = False

    for raw in args.paths:
        try:
            canonical = canonicalizer.canonicalize(raw)
        except OSError as e:
            failed = True
            kind = classify_error(e)
            results.append({"path": raw, "canonical": None, "error": {"kind": kind.value, "message": str(e)}})
            if not args.json:
                console.print(
                    f"[red]{escape(_displayable(raw))}:[/red] {escape(_displayable(str(e)))} ({kind.value})",
                    soft_wrap=True,
                )
            continue
        results.append({"path": raw, "canonical": canonical, "error": None})
        if not args.json:
            _write_path(canonical)

    if args.json:
        print(json.dumps(results, indent=2))

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
