"""Keep localized JSON files in sync with their base file."""

import sys

from locale_sync.compare import ComparisonResult, compare
from locale_sync.document import DocumentShapeError, OrderedDocument, ParseError, parse
from locale_sync.pipeline import FileReport, FileStatus, RunResult, canonicalize, run
from locale_sync.pretty import render
from locale_sync.utils import configure_logging, logger

# integers in locale files are re-serialized at full length
sys.set_int_max_str_digits(0)

__all__ = [
    "ComparisonResult",
    "DocumentShapeError",
    "FileReport",
    "FileStatus",
    "OrderedDocument",
    "ParseError",
    "RunResult",
    "canonicalize",
    "compare",
    "configure_logging",
    "logger",
    "parse",
    "render",
    "run",
]
