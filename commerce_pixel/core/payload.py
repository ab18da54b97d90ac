"""
Canonical event value object and the optional-field payload builder.

Canonical payloads only carry a key when the source data has a value for
it, so nothing serialises as null. PayloadBuilder makes that explicit
instead of mutating a half-built dict at every call site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Sequence


def dig(obj: Any, *path: Any) -> Any:
    """Walk nested mappings/sequences, returning None at the first gap.

    String keys index mappings, integer keys index lists and tuples.
    """
    cur = obj
    for key in path:
        if cur is None:
            return None
        if isinstance(key, int):
            if not isinstance(cur, (list, tuple)) or not -len(cur) <= key < len(cur):
                return None
            cur = cur[key]
        elif isinstance(cur, Mapping):
            cur = cur.get(key)
        else:
            return None
    return cur


def first_of(seq: Any) -> Any:
    """First element of a list/tuple, or None when empty or not a sequence."""
    if isinstance(seq, (list, tuple)) and seq:
        return seq[0]
    return None


class PayloadBuilder:
    """Accumulates payload fields, skipping optional ones without a value."""

    def __init__(self, **fields: Any):
        self._fields: Dict[str, Any] = dict(fields)

    def put(self, key: str, value: Any) -> "PayloadBuilder":
        """Always set ``key``."""
        self._fields[key] = value
        return self

    def put_if(
        self,
        key: str,
        value: Any,
        convert: Optional[Callable[[Any], Any]] = None,
    ) -> "PayloadBuilder":
        """Set ``key`` only when ``value`` is truthy, optionally converted."""
        if value:
            self._fields[key] = convert(value) if convert is not None else value
        return self

    def put_each(self, keys: Sequence[str], values: Sequence[Any]) -> "PayloadBuilder":
        """Positional put_if: ``keys[i]`` gets ``values[i]`` when present."""
        for key, value in zip(keys, values):
            self.put_if(key, value)
        return self

    def build(self) -> Dict[str, Any]:
        return dict(self._fields)


@dataclass(frozen=True)
class CanonicalEvent:
    """A normalized analytics event ready for a sink."""

    name: str
    payload: Dict[str, Any] = field(default_factory=dict)
    client_id: Optional[str] = None
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view used by the CLI and debug logging."""
        data: Dict[str, Any] = {"event": self.name, "params": self.payload}
        if self.client_id is not None:
            data["client_id"] = self.client_id
        return data
