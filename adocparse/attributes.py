"""Element attributes and attribute lists."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from .span import MatchAndWarnings, MatchedItem, Span, Warning, WarningType

_SHORTHAND_DELIMITERS = "#.%"
_SHORTHAND_ITEM = re.compile(r"[#.%]?[^#.%]*")


def _is_name_char(c: str) -> bool:
    return c.isalnum() or c in "_-"


def _parse_value(span: Span) -> MatchAndWarnings:
    quote = span.data[:1]
    if quote in ('"', "'"):
        escaped = False
        for i, c in enumerate(span.data[1:], start=1):
            if escaped:
                escaped = False
            elif c == "\\":
                escaped = True
            elif c == quote:
                return MatchAndWarnings(MatchedItem(span.slice(1, i), span.discard(i + 1)), [])
        return MatchAndWarnings(
            None, [Warning(span, WarningType.ATTRIBUTE_VALUE_MISSING_TERMINATING_QUOTE)]
        )
    mi = span.take_while(lambda c: c != ",")
    return MatchAndWarnings(mi if mi.item.data else None, [])


def _parse_shorthand(value: Span) -> tuple[list, list]:
    items: list = []
    warnings: list = []
    for m in _SHORTHAND_ITEM.finditer(value.data):
        if not m.group():
            continue
        piece = value.slice(m.start(), m.end())
        if piece.data in _SHORTHAND_DELIMITERS:
            warnings.append(Warning(piece, WarningType.EMPTY_SHORTHAND_ITEM))
        else:
            items.append(piece)
    return items, warnings


@dataclass
class ElementAttribute:
    """One attribute from an attribute list, named or positional."""

    name: Optional[Span]
    shorthand_items: list
    value: Span
    source: Span

    @property
    def span(self) -> Span:
        return self.source

    @classmethod
    def parse(cls, source: Span) -> MatchAndWarnings:
        return cls._parse(source, with_shorthand=False)

    @classmethod
    def parse_with_shorthand(cls, source: Span) -> MatchAndWarnings:
        return cls._parse(source, with_shorthand=True)

    @classmethod
    def _parse(cls, source: Span, with_shorthand: bool) -> MatchAndWarnings:
        name_mi = source.take_while(_is_name_char)
        if name_mi.item.data:
            eq = name_mi.after.take_whitespace().after.take_prefix("=")
            if eq is not None:
                named = _parse_value(eq.after.take_whitespace().after)
                if named.warnings:
                    return named
                if named.item is not None:
                    after = named.item.after
                    attr = cls(name_mi.item, [], named.item.item, source.trim_remainder(after))
                    return MatchAndWarnings(MatchedItem(attr, after), [])

        positional = _parse_value(source)
        if positional.item is None:
            return positional
        value, after = positional.item.item, positional.item.after
        warnings: list = []
        shorthand: list = []
        if with_shorthand:
            shorthand, warnings = _parse_shorthand(value)
        attr = cls(None, shorthand, value, source.trim_remainder(after))
        return MatchAndWarnings(MatchedItem(attr, after), warnings)

    def block_style(self) -> Optional[Span]:
        first = self.shorthand_items[0] if self.shorthand_items else None
        if first is None or first.data[:1] in _SHORTHAND_DELIMITERS:
            return None
        return first

    def _with_marker(self, marker: str) -> list:
        return [s.discard(1) for s in self.shorthand_items if s.data.startswith(marker)]

    def id(self) -> Optional[Span]:
        ids = self._with_marker("#")
        return ids[0] if ids else None

    def roles(self) -> list:
        return self._with_marker(".")

    def options(self) -> list:
        return self._with_marker("%")


@dataclass
class Attrlist:
    """A comma-separated list of element attributes."""

    attributes: list = field(default_factory=list)
    source: Span = field(default_factory=lambda: Span(""))

    @property
    def span(self) -> Span:
        return self.source

    @classmethod
    def parse(cls, source: Span) -> MatchAndWarnings:
        attributes: list = []
        warnings: list = []
        after = source
        last_comma: Optional[Span] = None
        while True:
            after = after.take_whitespace().after
            if not after.data:
                break
            maw = ElementAttribute._parse(after, with_shorthand=not attributes)
            warnings.extend(maw.warnings)
            if maw.item is None:
                if maw.warnings:
                    break
                comma = after.take_prefix(",")
                if comma is None:
                    break
                warnings.append(
                    Warning(last_comma or comma.item, WarningType.EMPTY_ATTRIBUTE_VALUE)
                )
                last_comma, after = comma.item, comma.after
                continue
            attributes.append(maw.item.item)
            after = maw.item.after.take_whitespace().after
            if not after.data:
                break
            comma = after.take_prefix(",")
            if comma is None:
                warnings.append(
                    Warning(after, WarningType.MISSING_COMMA_AFTER_QUOTED_ATTRIBUTE_VALUE)
                )
                break
            last_comma, after = comma.item, comma.after
        return MatchAndWarnings(
            MatchedItem(cls(attributes, source), source.discard_all()), warnings
        )