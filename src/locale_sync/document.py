"""Ordered in-memory model of a JSON object document."""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Iterator
from typing import Any, Self

ERR_MALFORMED = "Invalid JSON: {msg} (line {line}, column {col})"
ERR_DUPLICATE_KEY = "Duplicate key {key!r}"
ERR_NOT_OBJECT = "Top-level JSON value must be an object, got {kind}"
ERR_CONSTANT = "Invalid JSON: {name} is not a JSON value"
ERR_NUMBER_RANGE = "Number out of range: {text}"

_BOM = "\ufeff"

_JSON_KINDS: dict[type, str] = {
    list: "array",
    str: "string",
    bool: "boolean",
    int: "number",
    float: "number",
    type(None): "null",
}


class ParseError(ValueError):
    """Raised when a document is not well-formed JSON."""

    def __init__(self, message: str, *, line: int | None = None, col: int | None = None):
        super().__init__(message)
        self.line = line
        self.col = col

    @classmethod
    def from_decode_error(cls, exc: json.JSONDecodeError) -> Self:
        return cls(
            ERR_MALFORMED.format(msg=exc.msg, line=exc.lineno, col=exc.colno),
            line=exc.lineno,
            col=exc.colno,
        )

    @classmethod
    def duplicate_key(cls, key: str) -> Self:
        return cls(ERR_DUPLICATE_KEY.format(key=key))

    @classmethod
    def non_json_constant(cls, name: str) -> Self:
        return cls(ERR_CONSTANT.format(name=name))

    @classmethod
    def number_out_of_range(cls, text: str) -> Self:
        return cls(ERR_NUMBER_RANGE.format(text=text))


class DocumentShapeError(ParseError):
    """Raised when valid JSON does not have an object at the top level."""

    @classmethod
    def not_an_object(cls, value: Any) -> Self:
        kind = _JSON_KINDS.get(type(value), type(value).__name__)
        return cls(ERR_NOT_OBJECT.format(kind=kind))


class OrderedDocument:
    """A JSON object whose keys keep a defined order.

    Keys are kept in insertion order as loaded; :meth:`sorted_by_key` yields
    the canonical ordering. Values are stored as decoded by :mod:`json` and
    are never modified by re-ordering.
    """

    __slots__ = ("_items",)

    def __init__(self, entries: Iterable[tuple[str, Any]] = ()) -> None:
        self._items: dict[str, Any] = {}
        for key, value in entries:
            if key in self._items:
                raise ParseError.duplicate_key(key)
            self._items[key] = value

    def contains(self, key: str) -> bool:
        return key in self._items

    def get(self, key: str, default: Any = None) -> Any:
        return self._items.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set ``key`` to ``value``; new keys are appended at the end."""
        self._items[key] = value

    def remove(self, key: str) -> None:
        """Delete ``key``; raises ``KeyError`` when it is absent."""
        del self._items[key]

    def keys(self) -> list[str]:
        return list(self._items)

    def entries(self) -> list[tuple[str, Any]]:
        return list(self._items.items())

    def sorted_by_key(self) -> OrderedDocument:
        """Return a copy ordered by key, ascending by exact code point order."""
        return OrderedDocument(sorted(self._items.items(), key=lambda item: item[0]))

    def to_json(self) -> str:
        """Serialize to compact single-line JSON text in the current key order."""
        return json.dumps(self._items, ensure_ascii=False, allow_nan=False)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedDocument):
            return NotImplemented
        return self.entries() == other.entries()

    def __repr__(self) -> str:
        return f"OrderedDocument({self.entries()!r})"


def _reject_duplicates(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ParseError.duplicate_key(key)
        result[key] = value
    return result


def _reject_constant(name: str) -> Any:
    raise ParseError.non_json_constant(name)


def _finite_float(text: str) -> float:
    # 1e400 decodes to inf, which has no JSON spelling
    value = float(text)
    if not math.isfinite(value):
        raise ParseError.number_out_of_range(text)
    return value


def loads(json_text: str) -> Any:
    """Decode ``json_text`` with duplicate-key detection at every level.

    ``NaN``, ``Infinity`` and numbers too large for a float are rejected.
    """
    try:
        return json.loads(
            json_text.lstrip(_BOM),
            object_pairs_hook=_reject_duplicates,
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except json.JSONDecodeError as exc:
        raise ParseError.from_decode_error(exc) from exc


def parse(json_text: str) -> OrderedDocument:
    """Parse ``json_text`` into an :class:`OrderedDocument`.

    Raises :class:`ParseError` for malformed JSON or duplicate keys and
    :class:`DocumentShapeError` when the top-level value is not an object.
    """
    data = loads(json_text)
    if not isinstance(data, dict):
        raise DocumentShapeError.not_an_object(data)
    return OrderedDocument(data.items())


__all__ = ["DocumentShapeError", "OrderedDocument", "ParseError", "loads", "parse"]
