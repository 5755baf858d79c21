"""Top-level key-set comparison between a base and a translation document."""

from __future__ import annotations

from dataclasses import dataclass

from locale_sync.document import OrderedDocument


@dataclass(frozen=True)
class ComparisonResult:
    """Keys that differ between a base document and a candidate.

    ``missing_keys`` follow the base document's order and
    ``superfluous_keys`` the candidate's.
    """

    missing_keys: tuple[str, ...] = ()
    superfluous_keys: tuple[str, ...] = ()

    @property
    def in_sync(self) -> bool:
        return not self.missing_keys and not self.superfluous_keys

    def apply(self, candidate: OrderedDocument, base: OrderedDocument) -> None:
        """Reconcile ``candidate`` in place.

        Missing keys are seeded with the base document's value and
        superfluous keys are dropped. Key order is left to the caller.
        """
        for key in self.missing_keys:
            candidate.set(key, base.get(key))
        for key in self.superfluous_keys:
            if candidate.contains(key):
                candidate.remove(key)


def compare(base: OrderedDocument, candidate: OrderedDocument) -> ComparisonResult:
    """Return the keys missing from and superfluous in ``candidate``."""
    missing = tuple(key for key in base if not candidate.contains(key))
    superfluous = tuple(key for key in candidate if not base.contains(key))
    return ComparisonResult(missing_keys=missing, superfluous_keys=superfluous)


__all__ = ["ComparisonResult", "compare"]
