"""
cursors.py - Concrete cursors over caller-owned storage

Three cursors conform to the sequence protocol. They differ only in how the
end of the sequence is detected:

- PointerCursor: unbounded; ends only when its position is null
- CountedCursor: ends when its remaining count reaches zero
- SpanCursor:    ends when its start position meets its stop position

Cursors never copy or own their storage. Any object with __getitem__ and
__len__ works (list, tuple, numpy.ndarray). The caller keeps the storage
alive and unmodified while cursors traverse it.

Equality compares storage identity and positions, never element values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .sequence import CursorMixin


# Marker for "no sentinel configured"; None is a legitimate sentinel value.
_NO_SENTINEL = object()


# ============================================================================
# POINTER CURSOR
# ============================================================================

@dataclass(frozen=True, slots=True, eq=False)
class PointerCursor(CursorMixin):
    """
    Unsafe cursor from a bare position.

    has_more() is True while the position is not null. Advancing never checks
    bounds: the storage must be terminated by the caller, either by bounding
    the cursor with take() or by configuring a sentinel element. Landing on
    the sentinel nulls the position. Reading past the storage raises the
    storage's own IndexError.
    """
    data: Optional[Sequence[Any]] = field(default=None, repr=False)
    index: Optional[int] = 0
    sentinel: Any = field(default=_NO_SENTINEL, repr=False)

    def __post_init__(self):
        if self.data is None or self.index is None:
            object.__setattr__(self, "data", None)
            object.__setattr__(self, "index", None)
            object.__setattr__(self, "sentinel", _NO_SENTINEL)
        elif self.index < 0:
            raise ValueError(f"pointer index must be non-negative, got {self.index}")
        elif self._at_sentinel():
            object.__setattr__(self, "data", None)
            object.__setattr__(self, "index", None)
            object.__setattr__(self, "sentinel", _NO_SENTINEL)

    def _at_sentinel(self) -> bool:
        if self.sentinel is _NO_SENTINEL:
            return False
        return bool(self.data[self.index] == self.sentinel)

    def has_more(self) -> bool:
        return self.index is not None

    def current(self) -> Any:
        if self.index is None:
            raise IndexError("dereferenced a null pointer cursor")
        return self.data[self.index]

    def advance(self) -> "PointerCursor":
        if not self.has_more():
            return self
        return PointerCursor(self.data, self.index + 1, self.sentinel)

    def end(self) -> "PointerCursor":
        return PointerCursor()

    def __eq__(self, other):
        if not isinstance(other, PointerCursor):
            return NotImplemented
        return (
            self.data is other.data
            and self.index == other.index
            and self.sentinel is other.sentinel
        )

    def __hash__(self):
        return hash((PointerCursor, id(self.data), self.index))


# ============================================================================
# COUNTED CURSOR
# ============================================================================

@dataclass(frozen=True, slots=True, eq=False)
class CountedCursor(CursorMixin):
    """
    Cursor over count elements of data starting at index.

    has_more() is True while count > 0. Always safe given a correct count,
    which is checked against len(data) on construction.
    """
    data: Sequence[Any] = field(repr=False)
    count: int
    index: int = 0

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")
        if self.index < 0:
            raise ValueError(f"index must be non-negative, got {self.index}")
        if self.index + self.count > len(self.data):
            raise ValueError(
                f"count {self.count} from index {self.index} exceeds storage of length {len(self.data)}"
            )

    @classmethod
    def over(cls, data: Sequence[Any]) -> "CountedCursor":
        """Cursor over every element of data."""
        return cls(data, len(data))

    def has_more(self) -> bool:
        return self.count > 0

    def current(self) -> Any:
        if self.count == 0:
            raise IndexError("dereferenced an exhausted counted cursor")
        return self.data[self.index]

    def advance(self) -> "CountedCursor":
        if not self.has_more():
            return self
        return CountedCursor(self.data, self.count - 1, self.index + 1)

    def end(self) -> "CountedCursor":
        return CountedCursor(self.data, 0, self.index + self.count)

    def __eq__(self, other):
        if not isinstance(other, CountedCursor):
            return NotImplemented
        return (
            self.data is other.data
            and self.index == other.index
            and self.count == other.count
        )

    def __hash__(self):
        return hash((CountedCursor, id(self.data), self.index, self.count))


# ============================================================================
# SPAN CURSOR
# ============================================================================

@dataclass(frozen=True, slots=True, eq=False)
class SpanCursor(CursorMixin):
    """
    Cursor over data[start:stop].

    has_more() is True while start != stop. Equality with stop is the only
    termination condition, so the cursor cannot overrun its storage.
    """
    data: Sequence[Any] = field(repr=False)
    start: int
    stop: int

    def __post_init__(self):
        if not 0 <= self.start <= self.stop <= len(self.data):
            raise ValueError(
                f"span bounds must satisfy 0 <= start <= stop <= {len(self.data)}, "
                f"got start={self.start}, stop={self.stop}"
            )

    def has_more(self) -> bool:
        return self.start != self.stop

    def current(self) -> Any:
        if self.start == self.stop:
            raise IndexError("dereferenced an exhausted span cursor")
        return self.data[self.start]

    def advance(self) -> "SpanCursor":
        if not self.has_more():
            return self
        return SpanCursor(self.data, self.start + 1, self.stop)

    def end(self) -> "SpanCursor":
        return SpanCursor(self.data, self.stop, self.stop)

    def __eq__(self, other):
        if not isinstance(other, SpanCursor):
            return NotImplemented
        return (
            self.data is other.data
            and self.start == other.start
            and self.stop == other.stop
        )

    def __hash__(self):
        return hash((SpanCursor, id(self.data), self.start, self.stop))
