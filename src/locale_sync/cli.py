"""Command line interface for checking and repairing locale files."""

from __future__ import annotations

import argparse
import sys
import typing as t
from pathlib import Path
from typing import Self

from locale_sync import config as config_mod
from locale_sync.config import ConfigError
from locale_sync.discovery import DiscoveryError
from locale_sync.pipeline import FileReport, FileStatus, RunResult, run
from locale_sync.utils import NEWLINES, configure_logging, resolve_newline

EXIT_OK = 0
EXIT_OUT_OF_SYNC = 1
EXIT_USAGE = 2


class CliError(RuntimeError):
    """Raised when CLI arguments cannot be processed."""

    @classmethod
    def invalid_root(cls, reason: str) -> Self:
        return cls(f"invalid root: {reason}")

    @classmethod
    def invalid_config(cls, path: Path, reason: str) -> Self:
        return cls(f"invalid configuration in {path}: {reason}")

    @classmethod
    def negative_indent(cls, value: int) -> Self:
        return cls(f"indent must be zero or greater, got {value}")


def main(argv: t.Sequence[str] | None = None) -> int:
    """Parse *argv*, check the tree and return the process exit status."""
    parser = _create_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - argparse handles usage exits  # locale-sync: delegate help/usage exit codes to argparse | issue:-
        code = exc.code
        return code if isinstance(code, int) else EXIT_USAGE

    try:
        options = _resolve_options(args)
        configure_logging(options["log_level"])
        result = run(
            args.root,
            fix=args.fix,
            indent_width=options["indent_width"],
            newline=resolve_newline(options["newline"]),
            exclude=options["exclude_dirs"],
        )
    except CliError as exc:
        _write_line(sys.stderr, str(exc))
        return EXIT_USAGE
    except DiscoveryError as exc:
        _write_line(sys.stderr, str(CliError.invalid_root(str(exc))))
        return EXIT_USAGE

    root = Path(args.root).resolve()
    _write_lines(sys.stdout, _format_run(result, root=root, fix=args.fix, quiet=args.quiet))
    return EXIT_OK if result.ok else EXIT_OUT_OF_SYNC


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locale-sync",
        description=(
            "Check that locale-suffixed JSON translation files match their base "
            "file's keys and canonical formatting."
        ),
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Directory to scan recursively (default: current directory).",
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Add missing keys, drop superfluous keys and rewrite files in canonical form.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Spaces per nesting level in written files (default from config: 2).",
    )
    parser.add_argument(
        "--newline",
        choices=sorted(NEWLINES),
        default=None,
        help="Line terminator for written files (default from config: platform).",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="DIR",
        help="Directory name to skip; may be repeated. Replaces the configured list.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file to use instead of the user config file.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level such as DEBUG or WARNING.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the summary.",
    )
    return parser


def _resolve_options(args: argparse.Namespace) -> dict[str, t.Any]:
    """Merge the configuration file with command line overrides."""
    path = args.config if args.config is not None else config_mod.CONFIG_PATH
    overrides: dict[str, t.Any] = {}
    if args.indent is not None:
        if args.indent < 0:
            raise CliError.negative_indent(args.indent)
        overrides["indent_width"] = args.indent
    if args.newline is not None:
        overrides["newline"] = args.newline
    if args.exclude is not None:
        overrides["exclude_dirs"] = list(args.exclude)
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    try:
        options = config_mod.load_config_at(path)
        options.update(overrides)
        return config_mod.validate_config(options)
    except ConfigError as exc:
        raise CliError.invalid_config(path, str(exc)) from exc


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _format_report(report: FileReport, root: Path) -> list[str]:
    lines = [_display_path(report.path, root)]
    comparison = report.comparison
    if comparison is not None and comparison.missing_keys:
        lines.append("  Missing Keys: " + ", ".join(comparison.missing_keys))
    if comparison is not None and comparison.superfluous_keys:
        lines.append("  Superfluous Keys: " + ", ".join(comparison.superfluous_keys))
    if report.formatting_drift and report.keys_in_sync:
        lines.append("  Formatting differs from canonical form")
    if report.error:
        lines.append(f"  Error: {report.error}")
    if report.status is FileStatus.FIXED:
        lines.append("  Fixed")
    return lines


def _format_run(result: RunResult, *, root: Path, fix: bool, quiet: bool) -> list[str]:
    lines: list[str] = []
    if not quiet:
        for report in result.reports:
            if report.status is not FileStatus.OK:
                lines.extend(_format_report(report, root))
    failures = len(result.failures)
    fixed = len(result.fixed)
    if fix and fixed:
        lines.append(f"Fixed {fixed} file(s).")
    if failures:
        lines.append(f"Out of sync: {failures} file(s).")
    elif not fixed:
        lines.append("All files in sync.")
    lines.append("Result: success" if result.ok else "Result: failure")
    return lines


def _write_line(stream: t.TextIO, text: str) -> None:
    stream.write(f"{text}\n")


def _write_lines(stream: t.TextIO, lines: t.Iterable[str]) -> None:
    collected = list(lines)
    if not collected:
        return
    stream.write("\n".join(collected) + "\n")


__all__ = ["CliError", "main"]
