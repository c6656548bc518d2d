"""Block elements: paragraphs, raw delimited blocks, block macros and sections."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, ClassVar, Optional

from .attributes import Attrlist
from .inlines import Inline
from .span import MatchAndWarnings, MatchedItem, Span, Warning, WarningType


class ContentModel(enum.Enum):
    """What kind of content a block may hold and how it is processed."""

    COMPOUND = "compound"
    SIMPLE = "simple"
    VERBATIM = "verbatim"
    RAW = "raw"
    EMPTY = "empty"
    TABLE = "table"


_RAW_DELIMITERS = {
    "////": (ContentModel.RAW, "comment"),
    "----": (ContentModel.VERBATIM, "listing"),
    "....": (ContentModel.VERBATIM, "literal"),
    "++++": (ContentModel.RAW, "pass"),
}

# Characters that may start a line needing the full (slow) block parse.
_SLOW_PATH_STARTS = (".", "[", "=", "/", "-", "+")


class _BlockBase:
    """Behaviour shared by all block types."""

    source: Span

    @property
    def span(self) -> Span:
        return self.source

    @property
    def nested_blocks(self) -> list:
        return []


@dataclass
class Preamble:
    """Optional title and attribute list that precede a block."""

    title: Optional[Span]
    attrlist: Optional[Attrlist]
    source: Span
    block_start: Span

    @classmethod
    def parse(cls, source: Span) -> MatchAndWarnings:
        """Parse the title and attribute list for a block, if any."""
        warnings: list = []
        source = source.discard_empty_lines()

        title: Optional[Span] = None
        block_start = source
        maybe_title = source.take_normalized_line()
        line_data = maybe_title.item.data
        if line_data.startswith(".") and not line_data.startswith(".."):
            candidate = maybe_title.item.discard(1)
            if not candidate.take_whitespace().item.data:
                title = candidate
                block_start = maybe_title.after

        attrlist: Optional[Attrlist] = None
        maybe_attrlist = _parse_maybe_attrlist_line(block_start)
        if maybe_attrlist is not None:
            warnings.extend(maybe_attrlist.warnings)
            attrlist = maybe_attrlist.item.item
            block_start = maybe_attrlist.item.after

        return MatchAndWarnings(cls(title, attrlist, source, block_start), warnings)

    def is_empty(self) -> bool:
        """Return True if there is neither a title nor an attribute list."""
        return self.title is None and self.attrlist is None


def _parse_maybe_attrlist_line(source: Span) -> Optional[MatchAndWarnings]:
    if not source.data.startswith("["):
        return None
    line = source.take_normalized_line()
    if not line.item.data.endswith("]"):
        return None
    inner = line.item.slice(1, len(line.item) - 1)
    maw = Attrlist.parse(inner)
    return MatchAndWarnings(MatchedItem(maw.item.item, line.after), maw.warnings)


@dataclass
class SimpleBlock(_BlockBase):
    """Contiguous lines of paragraph text."""

    inline: Inline
    source: Span
    title: Optional[Span] = None
    attrlist: Optional[Attrlist] = None

    content_model: ClassVar[ContentModel] = ContentModel.SIMPLE
    context: ClassVar[str] = "paragraph"

    @classmethod
    def parse(cls, preamble: Preamble) -> Optional[MatchedItem]:
        inline = Inline.parse_lines(preamble.block_start)
        if inline is None:
            return None
        block = cls(
            inline=inline.item,
            source=preamble.source.trim_remainder(inline.after),
            title=preamble.title,
            attrlist=preamble.attrlist,
        )
        return MatchedItem(block, inline.after.discard_empty_lines())

    @classmethod
    def parse_fast(cls, source: Span) -> Optional[MatchedItem]:
        """Parse a paragraph known to have no title or attribute list."""
        inline = Inline.parse_lines(source)
        if inline is None:
            return None
        block = cls(inline=inline.item, source=source.trim_remainder(inline.after))
        return MatchedItem(block, inline.after.discard_empty_lines())


@dataclass
class RawDelimitedBlock(_BlockBase):
    """A delimited block whose content is not parsed for block syntax."""

    lines: list
    content_model: ContentModel
    context: str
    source: Span
    title: Optional[Span] = None
    attrlist: Optional[Attrlist] = None

    @classmethod
    def is_valid_delimiter(cls, line: Span) -> bool:
        data = line.data
        if len(data) < 4 or data[:4] not in _RAW_DELIMITERS:
            return False
        return data == data[0] * len(data)

    @classmethod
    def parse(cls, preamble: Preamble) -> Optional[MatchAndWarnings]:
        delimiter = preamble.block_start.take_normalized_line()
        data = delimiter.item.data
        if len(data) < 4:
            return None
        kind = _RAW_DELIMITERS.get(data[:4])
        if kind is None or not cls.is_valid_delimiter(delimiter.item):
            return None
        content_model, context = kind

        lines: list = []
        pending_empty: list = []
        rest = delimiter.after.discard_empty_lines()
        while rest.data:
            line = rest.take_normalized_line()
            if line.item.data == data:
                block = cls(
                    lines=lines,
                    content_model=content_model,
                    context=context,
                    source=preamble.source.trim_remainder(line.after),
                    title=preamble.title,
                    attrlist=preamble.attrlist,
                )
                return MatchAndWarnings(MatchedItem(block, line.after), [])
            if line.item.data:
                lines.extend(pending_empty)
                pending_empty.clear()
                lines.append(line.item)
            else:
                pending_empty.append(line.item)
            rest = line.after

        return MatchAndWarnings(
            None, [Warning(delimiter.item, WarningType.UNTERMINATED_DELIMITED_BLOCK)]
        )


@dataclass
class MacroBlock(_BlockBase):
    """The block form of a named macro: `name::target[attrlist]`."""

    name: Span
    target: Optional[Span]
    macro_attrlist: Attrlist
    source: Span
    title: Optional[Span] = None
    attrlist: Optional[Attrlist] = None

    content_model: ClassVar[ContentModel] = ContentModel.SIMPLE
    context: ClassVar[str] = "paragraph"

    @classmethod
    def parse(cls, preamble: Preamble) -> MatchAndWarnings:
        line = preamble.block_start.take_normalized_line()
        if not line.item.data.endswith("]"):
            return MatchAndWarnings(None, [])

        name = line.item.take_ident()
        if name is None:
            return MatchAndWarnings(None, [Warning(line.item, WarningType.INVALID_MACRO_NAME)])

        colons = name.after.take_prefix("::")
        if colons is None:
            return MatchAndWarnings(
                None, [Warning(name.after, WarningType.MACRO_MISSING_DOUBLE_COLON)]
            )

        target = colons.after.take_while(lambda c: c != "[")
        open_bracket = target.after.take_prefix("[")
        if open_bracket is None:
            return MatchAndWarnings(
                None, [Warning(target.after, WarningType.MACRO_MISSING_ATTRIBUTE_LIST)]
            )

        inner = open_bracket.after.slice(0, len(open_bracket.after) - 1)
        macro_attrlist = Attrlist.parse(inner)

        source = preamble.source.trim_remainder(line.after)
        source = source.slice(0, len(source.data.strip()))

        block = cls(
            name=name.item,
            target=target.item if target.item.data else None,
            macro_attrlist=macro_attrlist.item.item,
            source=source,
            title=preamble.title,
            attrlist=preamble.attrlist,
        )
        return MatchAndWarnings(
            MatchedItem(block, line.after.discard_empty_lines()), macro_attrlist.warnings
        )


@dataclass
class SectionBlock(_BlockBase):
    """A section: a title line and the blocks up to the next peer or ancestor."""

    level: int
    section_title: Span
    blocks: list
    source: Span
    title: Optional[Span] = None
    attrlist: Optional[Attrlist] = None

    content_model: ClassVar[ContentModel] = ContentModel.COMPOUND
    context: ClassVar[str] = "section"

    @property
    def nested_blocks(self) -> list:
        return self.blocks

    @classmethod
    def parse(cls, preamble: Preamble) -> Optional[MatchAndWarnings]:
        source = preamble.block_start.discard_empty_lines()
        heading = _parse_title_line(source)
        if heading is None:
            return None
        level, section_title = heading.item

        maw = parse_blocks_until(
            heading.after, lambda s: _peer_or_ancestor_section(s, level)
        )
        blocks = maw.item
        block = cls(
            level=level,
            section_title=section_title,
            blocks=blocks.item,
            source=preamble.source.trim_remainder(blocks.after),
            title=preamble.title,
            attrlist=preamble.attrlist,
        )
        return MatchAndWarnings(MatchedItem(block, blocks.after), maw.warnings)


def _parse_title_line(source: Span) -> Optional[MatchedItem]:
    mi = source.take_non_empty_line()
    if mi is None:
        return None
    line = mi.item
    count = 0
    while (marker := line.take_prefix("=")) is not None:
        count += 1
        line = marker.after
    if count == 0:
        return None
    ws = line.take_required_whitespace()
    if ws is None:
        return None
    return MatchedItem((count - 1, ws.after), mi.after)


def _peer_or_ancestor_section(source: Span, level: int) -> bool:
    mi = _parse_title_line(source)
    return mi is not None and mi.item[0] <= level


def parse_block(source: Span) -> MatchAndWarnings:
    """Parse one block of any supported kind."""
    source = source.discard_empty_lines()
    first_line = source.take_line().item.data
    if not first_line.startswith(_SLOW_PATH_STARTS) and "::" not in first_line:
        return MatchAndWarnings(SimpleBlock.parse_fast(source), [])

    pre = Preamble.parse(source)
    preamble = pre.item
    warnings = list(pre.warnings)

    raw = RawDelimitedBlock.parse(preamble)
    if raw is not None:
        warnings.extend(raw.warnings)
        if raw.item is not None:
            return MatchAndWarnings(raw.item, warnings)

    block_line = preamble.block_start.take_normalized_line().item.data
    if block_line.startswith("="):
        section = SectionBlock.parse(preamble)
        if section is not None:
            warnings.extend(section.warnings)
            return MatchAndWarnings(section.item, warnings)

    if "::" in block_line:
        macro = MacroBlock.parse(preamble)
        warnings.extend(macro.warnings)
        if macro.item is not None:
            return MatchAndWarnings(macro.item, warnings)

    return MatchAndWarnings(SimpleBlock.parse(preamble), warnings)


def parse_blocks_until(source: Span, stop: Callable[[Span], bool]) -> MatchAndWarnings:
    """Parse blocks until end of input or until `stop` is true for the remainder."""
    blocks: list = []
    warnings: list = []
    source = source.discard_empty_lines()
    while source.data and not stop(source):
        maw = parse_block(source)
        warnings.extend(maw.warnings)
        if maw.item is None:
            break
        blocks.append(maw.item.item)
        source = maw.item.after
    return MatchAndWarnings(MatchedItem(blocks, source), warnings)