"""
sequence.py - Lazy single-pass cursors and generic algorithms

A cursor is a forward-only position over some data with an explicit liveness
test. Unlike Python iterators, a cursor is an immutable value: advancing
returns the successor cursor and leaves the original untouched, so a cursor
can be copied, compared and restarted freely.

Protocol:
- has_more() -> bool   True iff current() is valid
- current()            Element at the present position
- advance()            Successor cursor (same cursor once exhausted)

Algorithms (work on any conforming cursor, never change the caller's cursor):
- accumulate(s, seed)  Sum of the remaining elements
- size(s, n)           Number of remaining elements
- drop(n, s)           Skip at most n elements
- take(n, s)           Independent bound of at most n elements
- span(data, b, e)     Cursor over data[b:e]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Protocol, Sequence, runtime_checkable


# ============================================================================
# PROTOCOL
# ============================================================================

@runtime_checkable
class Cursor(Protocol):
    """Forward-only cursor with an explicit end-of-sequence test."""

    def has_more(self) -> bool:
        """Return True while current() refers to a valid element."""
        ...

    def current(self) -> Any:
        """Return the element at the present position without advancing."""
        ...

    def advance(self) -> "Cursor":
        """Return the successor position. Exhausted cursors return themselves."""
        ...


class CursorMixin:
    """
    Python iteration hooks shared by the concrete cursors.

    Iterating a cursor walks the remaining elements from its present position.
    The cursor itself is not consumed, so it can be iterated again.
    """

    __slots__ = ()

    def __iter__(self) -> Iterator[Any]:
        cursor = self
        while cursor.has_more():
            yield cursor.current()
            cursor = cursor.advance()

    def begin(self):
        return self


# ============================================================================
# BOUNDED VIEW
# ============================================================================

@dataclass(frozen=True, slots=True)
class Take(CursorMixin):
    """
    A cursor bounded by its own remaining count.

    The wrapped cursor is never shortened: advancing a Take advances a new
    inner position, so several Take views over one source are independent.
    The inner cursor is never advanced past the last taken element, so a
    bound pointer cursor does not read beyond its storage.
    """
    inner: Any
    remaining: int

    def __post_init__(self):
        if self.remaining < 0:
            raise ValueError(f"take count must be non-negative, got {self.remaining}")

    def has_more(self) -> bool:
        return self.remaining > 0 and self.inner.has_more()

    def current(self) -> Any:
        return self.inner.current()

    def advance(self) -> "Take":
        if not self.has_more():
            return self
        if self.remaining == 1:
            return Take(self.inner, 0)
        return Take(self.inner.advance(), self.remaining - 1)

    def end(self) -> "Take":
        return drop(self.remaining, self)


# ============================================================================
# GENERIC ALGORITHMS
# ============================================================================

def accumulate(s: Cursor, seed: Any = 0) -> Any:
    """
    Add the remaining elements of a cursor to seed.

    Returns seed unchanged for an exhausted cursor.
    """
    total = seed
    while s.has_more():
        total = total + s.current()
        s = s.advance()
    return total


def size(s: Cursor, n: int = 0) -> int:
    """
    Number of remaining elements in a cursor, plus n.

    size(i, size(j)) == size(i) + size(j)
    """
    while s.has_more():
        n += 1
        s = s.advance()
    return n


def drop(n: int, s: Cursor) -> Cursor:
    """Advance at most n times, stopping early if the cursor is exhausted."""
    if n < 0:
        raise ValueError(f"drop count must be non-negative, got {n}")
    while n > 0 and s.has_more():
        s = s.advance()
        n -= 1
    return s


def take(n: int, s: Cursor) -> Take:
    """Bound a cursor to at most n elements."""
    return Take(s, n)


def span(data: Sequence[Any], begin: int = 0, end: Optional[int] = None):
    """Cursor over data[begin:end]; end defaults to len(data)."""
    from .cursors import SpanCursor

    if end is None:
        end = len(data)
    return SpanCursor(data, begin, end)


def to_list(s: Cursor) -> List[Any]:
    """Materialize the remaining elements of a cursor."""
    out = []
    while s.has_more():
        out.append(s.current())
        s = s.advance()
    return out
