"""Parameter extraction for loosely structured per-call parameter lists.

Purpose
-------
Actions receive their arguments as a sequence of ``ParameterSpec``-shaped
entries (``{"key": ..., "value": [...]}``). This module turns that sequence
into plain values:

- :func:`get_param` performs the lookup: linear scan by key equality, first
  element of the value sequence, strings trimmed, ``default`` on absence.
- :class:`ActionArgs` validates the whole bundle once at the action boundary
  against the action's declared fields and raises
  ``MISSING_REQUIRED_PARAMS`` naming every missing required key, every value
  that cannot be placed in a URL path, or the malformed bag itself.

Failure modes
-------------
Extraction never raises; absence is the default. Required-ness is enforced by
``ActionArgs.parse`` only.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from .errors import ErrorCode, ProviderError
from .models import CallOptions, ParameterSpec

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})

# Values of fields declaring a ``segment`` kind end up inside request paths.
SEGMENT_NAME = "name"
SEGMENT_REF = "ref"
SEGMENT_PATH = "path"
_FORBIDDEN_IN_PATH = ("?", "#", "\\")


def _entry_key(entry: Any) -> Optional[str]:
    if isinstance(entry, Mapping):
        return entry.get("key")
    return getattr(entry, "key", None)


def _entry_values(entry: Any) -> Sequence[Any]:
    raw = entry.get("value") if isinstance(entry, Mapping) else getattr(entry, "value", None)
    if raw is None:
        return ()
    if isinstance(raw, (list, tuple)):
        return raw
    return (raw,)


def get_param(params: Optional[Iterable[Any]], key: str, default: Any = "") -> Any:
    """Return the first value of the entry named ``key``.

    Parameters:
        params: Sequence of ``ParameterSpec`` instances or plain mappings.
        key: Parameter key to look up.
        default: Returned when no entry matches or its value list is empty.

    Returns:
        The first raw value (trimmed when a string), or ``default``.
    """
    for entry in params or ():
        if _entry_key(entry) != key:
            continue
        values = _entry_values(entry)
        if not values:
            return default
        value = values[0]
        if value is None:
            return default
        return value.strip() if isinstance(value, str) else value
    return default


def get_bool_param(params: Optional[Iterable[Any]], key: str, default: bool = False) -> bool:
    """Return a boolean parameter; strings like ``"false"`` or ``"0"`` are False."""
    value = get_param(params, key, None)
    if value is None:
        return default
    return as_bool(value)


def get_int_param(params: Optional[Iterable[Any]], key: str, default: int) -> int:
    """Return an integer parameter, falling back to ``default`` when unparsable."""
    value = get_param(params, key, None)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def unsafe_segment(value: Any, kind: Optional[str]) -> bool:
    """Return True when ``value`` cannot be placed in a path as a ``kind`` segment.

    ``name`` values must be one segment; ``ref`` and ``path`` values may span
    several. No kind accepts ``.``/``..`` segments, ``?``, ``#`` or ``\\``.
    """
    if kind is None or _is_blank(value):
        return False
    text = str(value)
    if any(ch in text for ch in _FORBIDDEN_IN_PATH):
        return True
    parts = text.split("/")
    if kind == SEGMENT_NAME and len(parts) > 1:
        return True
    return any(part in (".", "..") for part in parts)


class ActionArgs(Mapping[str, Any]):
    """Validated, read-only argument mapping handed to an action handler.

    Only declared fields are present. Optional fields that were absent map to
    their declared default (the empty string unless the field carries a
    ``default`` extra attribute).
    """

    def __init__(self, values: Dict[str, Any]) -> None:
        self._values = dict(values)

    @classmethod
    def parse(
        cls,
        options: Any,
        fields: Sequence[ParameterSpec],
        *,
        provider: str = "unknown",
        action: Optional[str] = None,
    ) -> "ActionArgs":
        """Extract every declared field and enforce required ones.

        Raises:
            ProviderError: ``MISSING_REQUIRED_PARAMS`` (400) listing the
                required keys that were absent or empty, or the keys whose
                value is not a safe path segment; also raised when the
                parameter bag itself is malformed.
        """

        def reject(message: str, raw: Optional[BaseException] = None) -> ProviderError:
            return ProviderError(
                code=ErrorCode.MISSING_REQUIRED_PARAMS,
                message=message,
                status_code=400,
                provider=provider,
                action=action,
                raw=raw,
            )

        try:
            params = CallOptions.coerce(options).params
        except ValidationError as exc:
            raise reject("Malformed parameters: expected configs.params entries with a key", exc) from exc
        values: Dict[str, Any] = {}
        missing: List[str] = []
        invalid: List[str] = []
        for spec in fields:
            fallback = getattr(spec, "default", "")
            value = get_param(params, spec.key, fallback)
            if spec.attr.required and _is_blank(value):
                missing.append(spec.key)
            elif unsafe_segment(value, getattr(spec, "segment", None)):
                invalid.append(spec.key)
            values[spec.key] = value
        if missing:
            raise reject(f"Missing required parameters: {', '.join(missing)}")
        if invalid:
            raise reject(f"Invalid parameters: {', '.join(invalid)}")
        return cls(values)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def text(self, key: str) -> str:
        """Return the value as a string ("" when absent)."""
        value = self._values.get(key, "")
        return "" if value is None else str(value)

    def flag(self, key: str) -> bool:
        return as_bool(self._values.get(key, False))

    def integer(self, key: str, default: int) -> int:
        value = self._values.get(key)
        if _is_blank(value):
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"ActionArgs({self._values!r})"


__all__ = [
    "ActionArgs",
    "SEGMENT_NAME",
    "SEGMENT_PATH",
    "SEGMENT_REF",
    "as_bool",
    "get_bool_param",
    "get_int_param",
    "get_param",
    "unsafe_segment",
]
