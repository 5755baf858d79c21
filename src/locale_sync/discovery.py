"""Find base JSON files and their locale-suffixed translations."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from locale_sync.utils import logger

DEFAULT_EXCLUDE: tuple[str, ...] = (".git", "node_modules", ".venv", "__pycache__")

# strings.en.json, strings.en-us.json, strings.pt_BR.json, strings.es-419.json
_TRANSLATION_RE = re.compile(
    r"^(?P<base>.+)\.(?P<locale>[a-z]{2}(?:[-_][a-z0-9]{2,4})?)\.json$", re.IGNORECASE
)

ERR_ROOT_MISSING = "root directory does not exist: {path}"
ERR_ROOT_NOT_DIR = "root must be a directory, not a file: {path}"
ERR_NULL_BYTES = "path contains null bytes"


class DiscoveryError(ValueError):
    """Raised when the directory to scan is unusable."""


@dataclass(frozen=True)
class FilePair:
    """A base file and the translation files derived from its name."""

    base: Path
    translations: tuple[Path, ...] = ()


def resolve_root(path: str | Path) -> Path:
    """Return ``path`` as an absolute directory, validating it exists."""
    p = Path(path)
    if "\x00" in str(p):
        raise DiscoveryError(ERR_NULL_BYTES)
    candidate = p.resolve()
    if not candidate.exists():
        raise DiscoveryError(ERR_ROOT_MISSING.format(path=path))
    if not candidate.is_dir():
        raise DiscoveryError(ERR_ROOT_NOT_DIR.format(path=path))
    return candidate


def locale_of(path: str | Path) -> str | None:
    """Return the locale suffix of a translation file name, else ``None``."""
    match = _TRANSLATION_RE.match(Path(path).name)
    return match.group("locale") if match else None


def is_translation(path: str | Path) -> bool:
    """Return ``True`` when ``path`` is named like ``<base>.<locale>.json``."""
    return locale_of(path) is not None


def is_base(path: str | Path) -> bool:
    p = Path(path)
    return p.suffix.lower() == ".json" and not is_translation(p)


def translations_for(base: str | Path) -> tuple[Path, ...]:
    """Return translation files beside ``base``, sorted by name.

    A translation of ``strings.json`` lives in the same directory and is named
    ``strings.<locale>.json``.
    """
    base_path = Path(base)
    stem = base_path.stem
    found: list[Path] = []
    for candidate in base_path.parent.glob("*.json"):
        match = _TRANSLATION_RE.match(candidate.name)
        if match and match.group("base") == stem and candidate.is_file():
            found.append(candidate)
    return tuple(sorted(found))


def _excluded(path: Path, root: Path, exclude: set[str]) -> bool:
    return any(part in exclude for part in path.relative_to(root).parts[:-1])


def discover(root: str | Path, exclude: Iterable[str] = DEFAULT_EXCLUDE) -> list[FilePair]:
    """Return every base file below ``root`` paired with its translations.

    Directories named in ``exclude`` are skipped at any depth. Pairs are
    sorted by base path.
    """
    root_path = resolve_root(root)
    skip = set(exclude)
    pairs: list[FilePair] = []
    for path in sorted(root_path.rglob("*.json")):
        if not path.is_file() or _excluded(path, root_path, skip):
            continue
        if not is_base(path):
            continue
        translations = translations_for(path)
        logger.debug("found %s with %d translation(s)", path, len(translations))
        pairs.append(FilePair(base=path, translations=translations))
    return pairs


__all__ = [
    "DEFAULT_EXCLUDE",
    "DiscoveryError",
    "FilePair",
    "discover",
    "is_base",
    "is_translation",
    "locale_of",
    "resolve_root",
    "translations_for",
]
