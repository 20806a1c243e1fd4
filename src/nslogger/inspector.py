"""
Classification and inspection of log arguments.

Every argument of a log call is one of three kinds:

- scalar: rendered with ``str()`` (strings, numbers, None, enums, paths, ...)
- sequence: lists, tuples, sets, deques
- record: mappings, dataclass instances, exceptions and plain objects
  carrying an instance ``__dict__``

Records are expanded by ``inspect_value``, a depth-first serializer with no
depth limit. Private (underscore) attributes are included. A value that is
already being serialized further up the current path renders as
``<Circular ...>`` instead of recursing.
"""

from __future__ import annotations

import dataclasses
import os
import traceback
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from types import FunctionType, MethodType, ModuleType
from typing import Any

SCALAR = "scalar"
SEQUENCE = "sequence"
RECORD = "record"

_TEXT_TYPES = (str, bytes, bytearray, memoryview)
_OPAQUE_TYPES = (type, FunctionType, MethodType, ModuleType, Enum, os.PathLike)


def classify(value: Any) -> str:
    """Return the kind of a log argument: ``SCALAR``, ``SEQUENCE`` or ``RECORD``."""
    if value is None or isinstance(value, _TEXT_TYPES + _OPAQUE_TYPES):
        return SCALAR
    if isinstance(value, Mapping):
        return RECORD
    if isinstance(value, (Sequence, Set)):
        return SEQUENCE
    if isinstance(value, BaseException):
        return RECORD
    if dataclasses.is_dataclass(value):
        return RECORD
    if hasattr(value, "__dict__"):
        return RECORD
    return SCALAR


def is_structured(value: Any) -> bool:
    return classify(value) != SCALAR


def inspect_value(value: Any, *, indent_width: int = 2) -> str:
    """Serialize a value into an indented, multi-line representation."""
    return _Inspector(indent_width).render(value, 0, set())


class _Inspector:
    def __init__(self, indent_width: int) -> None:
        self._indent_width = indent_width

    def render(self, value: Any, depth: int, ancestors: set[int]) -> str:
        kind = classify(value)
        if kind == SCALAR:
            return repr(value)
        if isinstance(value, BaseException):
            return self._render_exception(value, depth)

        marker = id(value)
        if marker in ancestors:
            return f"<Circular {type(value).__name__}>"

        ancestors.add(marker)
        try:
            if isinstance(value, Mapping):
                entries = [f"{self.render(k, depth + 1, ancestors)}: {self.render(v, depth + 1, ancestors)}" for k, v in value.items()]
                return self._block(entries, "{", "}", depth, label=_label(value, dict))
            if kind == SEQUENCE:
                entries = [self.render(item, depth + 1, ancestors) for item in value]
                opening, closing = ("(", ")") if isinstance(value, tuple) else ("[", "]")
                return self._block(entries, opening, closing, depth, label=_label(value, list, tuple))
            entries = [f"{name}: {self.render(attr, depth + 1, ancestors)}" for name, attr in _attributes(value)]
            return self._block(entries, "{", "}", depth, label=type(value).__name__)
        finally:
            ancestors.discard(marker)

    def _block(self, entries: list[str], opening: str, closing: str, depth: int, *, label: str = "") -> str:
        head = f"{label} {opening}" if label else opening
        if not entries:
            return f"{head}{closing}"
        inner = " " * (self._indent_width * (depth + 1))
        outer = " " * (self._indent_width * depth)
        body = f",\n{inner}".join(entries)
        return f"{head}\n{inner}{body}\n{outer}{closing}"

    def _render_exception(self, exc: BaseException, depth: int) -> str:
        text = "".join(traceback.format_exception(exc)).rstrip()
        outer = " " * (self._indent_width * depth)
        return text.replace("\n", f"\n{outer}")


def _label(value: Any, *plain: type) -> str:
    # Builtin containers render bare, anything else is prefixed with its type name.
    return "" if type(value) in plain else type(value).__name__


def _attributes(value: Any) -> list[tuple[str, Any]]:
    if dataclasses.is_dataclass(value):
        names = [field.name for field in dataclasses.fields(value)]
        extra = [name for name in getattr(value, "__dict__", {}) if name not in names]
        return [(name, getattr(value, name)) for name in names + extra]
    return list(vars(value).items())
