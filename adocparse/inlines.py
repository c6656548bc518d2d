"""Inline content: uninterpreted text, sequences and inline macros."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .span import MatchedItem, Span


class Inline:
    """Base type for inline content; `span` is the source it covers."""

    span: Span

    @classmethod
    def parse(cls, source: Span) -> Optional[MatchedItem]:
        """Parse a single line of inline content."""
        line = source.take_non_empty_line()
        if line is None:
            return None
        macro = InlineMacro.parse(line.item)
        if macro is not None and not macro.after.data:
            return MatchedItem(macro.item, line.after)
        return MatchedItem(UninterpretedInline(line.item), line.after)

    @classmethod
    def parse_lines(cls, source: Span) -> Optional[MatchedItem]:
        """Parse consecutive non-empty lines of inline content."""
        first = Inline.parse(source)
        if first is None:
            return None
        items = [first.item]
        after = first.after
        while (nxt := Inline.parse(after)) is not None:
            items.append(nxt.item)
            after = nxt.after
        if len(items) == 1:
            return first
        return MatchedItem(InlineSequence(items, source.trim_remainder(after)), after)


@dataclass
class UninterpretedInline(Inline):
    """Text that is not interpreted further."""

    span: Span


@dataclass
class InlineSequence(Inline):
    """Several inlines, one after another."""

    items: list
    span: Span


@dataclass
class InlineMacro(Inline):
    """An inline macro of the form `name:target[attrlist]`."""

    name: Span
    target: Optional[Span]
    attrlist: Optional[Span]
    source: Span

    @property
    def span(self) -> Span:  # type: ignore[override]
        return self.source

    @classmethod
    def parse(cls, source: Span) -> Optional[MatchedItem]:
        name = source.take_ident()
        if name is None:
            return None
        colon = name.after.take_prefix(":")
        if colon is None:
            return None
        target = colon.after.take_while(lambda c: c != "[")
        open_bracket = target.after.take_prefix("[")
        if open_bracket is None:
            return None
        attrlist = open_bracket.after.take_while(lambda c: c != "]")
        close = attrlist.after.take_prefix("]")
        if close is None:
            return None
        macro = cls(
            name=name.item,
            target=target.item if target.item.data else None,
            attrlist=attrlist.item if attrlist.item.data else None,
            source=source.trim_remainder(close.after),
        )
        return MatchedItem(macro, close.after)