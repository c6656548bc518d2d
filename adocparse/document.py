"""Document structure: header, document attributes and the top-level document."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .blocks import ContentModel, parse_blocks_until
from .span import MatchAndWarnings, MatchedItem, Span, Warning, WarningType


class ValueKind(enum.Enum):
    """Whether an attribute carries a value, is merely set, or is unset."""

    VALUE = "value"
    SET = "set"
    UNSET = "unset"


@dataclass(frozen=True)
class AttributeValue:
    """The interpreted value of an attribute, with continuations resolved."""

    kind: ValueKind
    text: Optional[str] = None

    SET: ClassVar[AttributeValue]
    UNSET: ClassVar[AttributeValue]


AttributeValue.SET = AttributeValue(ValueKind.SET)
AttributeValue.UNSET = AttributeValue(ValueKind.UNSET)


@dataclass(frozen=True)
class RawAttributeValue:
    """The raw value of an attribute; a textual value keeps continuation markers."""

    kind: ValueKind
    span: Optional[Span] = None

    SET: ClassVar[RawAttributeValue]
    UNSET: ClassVar[RawAttributeValue]

    def as_attribute_value(self) -> AttributeValue:
        """Resolve continuation markers into an interpreted value."""
        if self.kind is not ValueKind.VALUE or self.span is None:
            return AttributeValue(self.kind)
        data = self.span.data
        if "\n" not in data:
            return AttributeValue(ValueKind.VALUE, data)

        raw_lines = data.split("\n")
        parts = []
        for index, line in enumerate(raw_lines):
            if index < len(raw_lines) - 1 and line.endswith("\r"):
                line = line[:-1]
            if index > 0:
                line = line.lstrip(" ")
            parts.append(line.lstrip("\r").rstrip(" ").rstrip("\\").rstrip(" "))
        return AttributeValue(ValueKind.VALUE, " ".join(parts))


RawAttributeValue.SET = RawAttributeValue(ValueKind.SET)
RawAttributeValue.UNSET = RawAttributeValue(ValueKind.UNSET)


@dataclass
class Attribute:
    """A document attribute entry such as `:name: value`."""

    name: Span
    raw_value: RawAttributeValue
    source: Span

    @property
    def span(self) -> Span:
        return self.source

    @classmethod
    def parse(cls, source: Span) -> Optional[MatchedItem]:
        """Parse one attribute entry, or return None if the source holds none."""
        attr_line = source.take_line_with_continuation()
        if attr_line is None:
            return None
        colon = attr_line.item.take_prefix(":")
        if colon is None:
            return None

        unset = False
        line = colon.after
        if line.data.startswith("!"):
            unset = True
            line = line.discard(1)

        name = line.take_ident()
        if name is None:
            return None

        line = name.after
        if line.data.startswith("!") and not unset:
            unset = True
            line = line.discard(1)

        closing = line.take_prefix(":")
        if closing is None:
            return None

        if unset:
            value = RawAttributeValue.UNSET
        elif not closing.after.data:
            value = RawAttributeValue.SET
        else:
            text = closing.after.take_whitespace().after
            value = RawAttributeValue(ValueKind.VALUE, text)

        attribute = cls(
            name=name.item,
            raw_value=value,
            source=source.trim_remainder(attr_line.after),
        )
        return MatchedItem(attribute, attr_line.after)

    def value(self) -> AttributeValue:
        """Return the attribute's interpreted value."""
        return self.raw_value.as_attribute_value()


def _parse_title(source: Span) -> Optional[MatchedItem]:
    line = source.take_non_empty_line()
    if line is None:
        return None
    equal = line.item.take_prefix("=")
    if equal is None:
        return None
    ws = equal.after.take_required_whitespace()
    if ws is None:
        return None
    return MatchedItem(ws.after, line.after)


@dataclass
class Header:
    """The document header: an optional title and document attributes."""

    title: Optional[Span]
    attributes: list
    source: Span

    @property
    def span(self) -> Span:
        return self.source

    @classmethod
    def parse(cls, source: Span) -> MatchAndWarnings:
        """Parse a document header; the result always holds a header."""
        original = source
        warnings: list = []
        attributes: list = []

        source = source.discard_empty_lines()

        title_mi = _parse_title(source)
        if title_mi is not None:
            title: Optional[Span] = title_mi.item
            after = title_mi.after
        else:
            title = None
            after = source

        while (attr := Attribute.parse(after)) is not None:
            attributes.append(attr.item)
            after = attr.after

        header_source = source.trim_remainder(after)

        if title is None and not attributes:
            header = cls(None, attributes, original.slice(0, 0))
            return MatchAndWarnings(MatchedItem(header, after), warnings)

        empty = after.take_empty_line()
        if empty is not None:
            after = empty.after.discard_empty_lines()
        else:
            warnings.append(
                Warning(after.take_line().item, WarningType.DOCUMENT_HEADER_NOT_TERMINATED)
            )

        header = cls(title, attributes, header_source)
        return MatchAndWarnings(MatchedItem(header, after), warnings)


@dataclass
class Document:
    """The top-level block: an optional header followed by blocks."""

    header: Header
    blocks: list
    source: Span
    warnings: list = field(default_factory=list)

    content_model: ClassVar[ContentModel] = ContentModel.COMPOUND
    context: ClassVar[str] = "document"
    title: ClassVar[Optional[Span]] = None
    attrlist: ClassVar[None] = None

    @property
    def span(self) -> Span:
        return self.source

    @property
    def nested_blocks(self) -> list:
        return self.blocks

    @classmethod
    def parse(cls, source: str) -> Document:
        """Parse text as a document; problems are reported through `warnings`."""
        span = Span(source)
        start = span.discard_empty_lines()
        if not start.data:
            start = span

        header_maw = Header.parse(start)
        header = header_maw.item.item
        warnings = list(header_maw.warnings)

        blocks_maw = parse_blocks_until(header_maw.item.after, lambda _: False)
        warnings.extend(blocks_maw.warnings)

        return cls(header, blocks_maw.item.item, span, warnings)