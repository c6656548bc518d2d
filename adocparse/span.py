"""Source spans with line/column tracking, plus match and warning containers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_INLINE_WHITESPACE = " \t"


@dataclass(frozen=True)
class Span:
    """A slice of source text that remembers where it starts."""

    data: str
    line: int = 1
    col: int = 1
    offset: int = 0

    def __len__(self) -> int:
        return len(self.data)

    def _advance(self, n: int) -> Span:
        consumed = self.data[:n]
        newlines = consumed.count("\n")
        if newlines:
            line = self.line + newlines
            col = n - consumed.rfind("\n")
        else:
            line = self.line
            col = self.col + n
        return Span(self.data[n:], line, col, self.offset + n)

    def discard(self, n: int) -> Span:
        """Drop up to `n` characters from the front."""
        return self._advance(min(n, len(self.data)))

    def discard_all(self) -> Span:
        """Return the empty span at the end of this one."""
        return self._advance(len(self.data))

    def slice(self, start: int, end: Optional[int] = None) -> Span:
        """Return the sub-span covering `start:end` of this span."""
        moved = self._advance(start)
        length = None if end is None else max(end - start, 0)
        data = moved.data if length is None else moved.data[:length]
        return Span(data, moved.line, moved.col, moved.offset)

    def trim_remainder(self, after: Span) -> Span:
        """Truncate this span so it ends where `after` begins."""
        return self.slice(0, after.offset - self.offset)

    def take_prefix(self, prefix: str) -> Optional[MatchedItem[Span]]:
        if not self.data.startswith(prefix):
            return None
        n = len(prefix)
        return MatchedItem(self.slice(0, n), self._advance(n))

    def take_while(self, predicate: Callable[[str], bool]) -> MatchedItem[Span]:
        n = len(self.data)
        for i, c in enumerate(self.data):
            if not predicate(c):
                n = i
                break
        return MatchedItem(self.slice(0, n), self._advance(n))

    def take_whitespace(self) -> MatchedItem[Span]:
        return self.take_while(lambda c: c in _INLINE_WHITESPACE)

    def take_required_whitespace(self) -> Optional[MatchedItem[Span]]:
        mi = self.take_whitespace()
        return mi if mi.item.data else None

    def take_ident(self) -> Optional[MatchedItem[Span]]:
        """Take an identifier: a letter or underscore, then letters, digits, `_` or `-`."""
        first = self.data[:1]
        if not first or not (first.isalpha() or first == "_"):
            return None
        return self.take_while(lambda c: c.isalnum() or c in "_-")

    def take_line(self) -> MatchedItem[Span]:
        """Take one line; the line ending is consumed but not returned."""
        idx = self.data.find("\n")
        if idx < 0:
            return MatchedItem(self, self.discard_all())
        end = idx - 1 if idx > 0 and self.data[idx - 1] == "\r" else idx
        return MatchedItem(self.slice(0, end), self._advance(idx + 1))

    def take_normalized_line(self) -> MatchedItem[Span]:
        """Take one line with trailing spaces removed."""
        mi = self.take_line()
        stripped = mi.item.data.rstrip(_INLINE_WHITESPACE)
        return MatchedItem(mi.item.slice(0, len(stripped)), mi.after)

    def take_non_empty_line(self) -> Optional[MatchedItem[Span]]:
        mi = self.take_normalized_line()
        return mi if mi.item.data else None

    def take_empty_line(self) -> Optional[MatchedItem[Span]]:
        mi = self.take_line()
        if mi.item.data.strip(_INLINE_WHITESPACE):
            return None
        return mi

    def discard_empty_lines(self) -> Span:
        span = self
        while span.data:
            mi = span.take_empty_line()
            if mi is None:
                break
            span = mi.after
        return span

    def take_line_with_continuation(self) -> Optional[MatchedItem[Span]]:
        """Take a line, joining following lines while it ends with a backslash."""
        mi = self.take_non_empty_line()
        if mi is None:
            return None
        last, after = mi.item, mi.after
        while last.data.endswith("\\") and after.data:
            nxt = after.take_normalized_line()
            last, after = nxt.item, nxt.after
        end = last.offset + len(last.data) - self.offset
        return MatchedItem(self.slice(0, end), after)


@dataclass(frozen=True)
class MatchedItem(Generic[T]):
    """A parsed item and the span that follows it."""

    item: T
    after: Span


class WarningType(enum.Enum):
    ATTRIBUTE_VALUE_MISSING_TERMINATING_QUOTE = "attribute value missing terminating quote"
    EMPTY_ATTRIBUTE_VALUE = "empty attribute value"
    EMPTY_SHORTHAND_ITEM = "empty shorthand item"
    MISSING_COMMA_AFTER_QUOTED_ATTRIBUTE_VALUE = "missing comma after quoted attribute value"
    INVALID_MACRO_NAME = "invalid macro name"
    MACRO_MISSING_DOUBLE_COLON = "macro missing double colon"
    MACRO_MISSING_ATTRIBUTE_LIST = "macro missing attribute list"
    UNTERMINATED_DELIMITED_BLOCK = "unterminated delimited block"
    DOCUMENT_HEADER_NOT_TERMINATED = "document header not terminated"


@dataclass(frozen=True)
class Warning:
    """A problem found while parsing, with the span where it was found."""

    source: Span
    warning: WarningType


class WarningsPresentError(ValueError):
    """Raised when a result is unwrapped although warnings were reported."""


@dataclass
class MatchAndWarnings(Generic[T]):
    """A parse result together with any warnings produced."""

    item: T
    warnings: list = field(default_factory=list)

    def unwrap_if_no_warnings(self) -> T:
        if self.warnings:
            raise WarningsPresentError(f"unexpected warnings: {self.warnings!r}")
        return self.item