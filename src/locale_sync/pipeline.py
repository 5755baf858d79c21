"""Check base/translation file pairs and restore their canonical form.

Each file ends in one of the :class:`FileStatus` states. A pair is processed
as follows:

1. parse the base file;
2. for every translation: parse, compare keys with the base, reconcile them
   when fixing, then render the sorted document and compare it with the text
   on disk;
3. render the sorted base document and compare it the same way.

Files are rewritten only in fix mode and only once the complete canonical
text is in memory. Failures are confined to the file that caused them.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from locale_sync.compare import ComparisonResult, compare
from locale_sync.discovery import DEFAULT_EXCLUDE, FilePair, discover
from locale_sync.document import OrderedDocument, parse
from locale_sync.pretty import render
from locale_sync.utils import logger, read_text, write_text

FILE_INDENT = 2

ERR_BASE_UNUSABLE = "base file {base} could not be loaded"


class FileStatus(enum.Enum):
    """Terminal state of a single file."""

    OK = "ok"
    FIXED = "fixed"
    REPORTED = "reported"
    ERROR = "error"


@dataclass
class FileReport:
    """Outcome of checking one file."""

    path: Path
    status: FileStatus
    comparison: ComparisonResult | None = None
    formatting_drift: bool = False
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.status in {FileStatus.REPORTED, FileStatus.ERROR}

    @property
    def keys_in_sync(self) -> bool:
        return self.comparison is None or self.comparison.in_sync


@dataclass
class RunResult:
    """All file reports of a run, in processing order."""

    reports: list[FileReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(report.failed for report in self.reports)

    @property
    def failures(self) -> list[FileReport]:
        return [report for report in self.reports if report.failed]

    @property
    def fixed(self) -> list[FileReport]:
        return [report for report in self.reports if report.status is FileStatus.FIXED]

    def extend(self, reports: Iterable[FileReport]) -> None:
        self.reports.extend(reports)


def canonicalize(
    document: OrderedDocument,
    indent_width: int = FILE_INDENT,
    newline: str = os.linesep,
) -> str:
    """Return the canonical on-disk text for ``document``."""
    return render(document.sorted_by_key().to_json(), indent_width, newline)


def _load(path: Path) -> tuple[str, OrderedDocument]:
    text = read_text(path)
    return text, parse(text)


def _error_report(path: Path, exc: Exception) -> FileReport:
    logger.debug("failed to process %s: %s", path, exc)
    return FileReport(path=path, status=FileStatus.ERROR, error=str(exc))


def _settle(
    path: Path,
    original: str,
    document: OrderedDocument,
    *,
    fix: bool,
    indent_width: int,
    newline: str,
    comparison: ComparisonResult | None = None,
) -> FileReport:
    """Compare the canonical text with ``original`` and rewrite if asked."""
    canonical = canonicalize(document, indent_width, newline)
    drift = canonical != original
    keys_ok = comparison is None or comparison.in_sync
    if not drift and keys_ok:
        return FileReport(path=path, status=FileStatus.OK, comparison=comparison)
    if not fix:
        return FileReport(
            path=path,
            status=FileStatus.REPORTED,
            comparison=comparison,
            formatting_drift=drift,
        )
    try:
        write_text(path, canonical)
    except OSError as exc:
        report = _error_report(path, exc)
        report.comparison = comparison
        return report
    logger.debug("rewrote %s", path)
    return FileReport(
        path=path,
        status=FileStatus.FIXED,
        comparison=comparison,
        formatting_drift=drift,
    )


def _check_translation(
    path: Path,
    base: OrderedDocument,
    *,
    fix: bool,
    indent_width: int,
    newline: str,
) -> FileReport:
    try:
        original, candidate = _load(path)
    except (OSError, ValueError) as exc:
        return _error_report(path, exc)
    comparison = compare(base, candidate)
    if not comparison.in_sync and fix:
        for key in comparison.missing_keys:
            logger.info("%s: seeded %r with the base value", path, key)
        comparison.apply(candidate, base)
    return _settle(
        path,
        original,
        candidate,
        fix=fix,
        indent_width=indent_width,
        newline=newline,
        comparison=comparison,
    )


def check_pair(
    pair: FilePair,
    *,
    fix: bool = False,
    indent_width: int = FILE_INDENT,
    newline: str = os.linesep,
) -> list[FileReport]:
    """Check one base file and its translations.

    Returns one report per translation followed by the report for the base.
    When the base cannot be loaded its translations are left untouched and
    reported as errors.
    """
    try:
        base_text, base = _load(pair.base)
    except (OSError, ValueError) as exc:
        reports = [_error_report(pair.base, exc)]
        reason = ERR_BASE_UNUSABLE.format(base=pair.base.name)
        reports.extend(
            FileReport(path=path, status=FileStatus.ERROR, error=reason)
            for path in pair.translations
        )
        return reports

    reports = [
        _check_translation(
            path, base, fix=fix, indent_width=indent_width, newline=newline
        )
        for path in pair.translations
    ]
    reports.append(
        _settle(
            pair.base,
            base_text,
            base,
            fix=fix,
            indent_width=indent_width,
            newline=newline,
        )
    )
    return reports


def run(
    root: str | Path,
    *,
    fix: bool = False,
    indent_width: int = FILE_INDENT,
    newline: str = os.linesep,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
) -> RunResult:
    """Check every base/translation pair below ``root``.

    Raises :class:`locale_sync.discovery.DiscoveryError` when ``root`` is not
    a directory; everything else is captured in the returned reports.
    """
    result = RunResult()
    pairs = discover(root, exclude)
    logger.debug("checking %d base file(s) below %s", len(pairs), root)
    for pair in pairs:
        result.extend(
            check_pair(pair, fix=fix, indent_width=indent_width, newline=newline)
        )
    return result


__all__ = [
    "FILE_INDENT",
    "FileReport",
    "FileStatus",
    "RunResult",
    "canonicalize",
    "check_pair",
    "run",
]
