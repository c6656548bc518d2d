# adocparse

A parser for AsciiDoc documents. Every element in the parsed model records
the exact piece of source it came from: its text, line, column and offset.
Parsing a document never fails. Anything ambiguous or malformed is reported
as a warning alongside the result.

The package has no dependencies beyond the Python standard library and
supports Python 3.10 and later.

## Installation

```
pip install adocparse
```

## Parsing a document

```python
from adocparse.document import Document

doc = Document.parse("= My Title\n:toc:\n:author: Jane Doe\n\n== Intro\n\nHello, world.\n")

print(doc.header.title.data)   # "My Title"

for attr in doc.header.attributes:
    value = attr.value()
    print(attr.name.data, value.kind, value.text)

for block in doc.nested_blocks:
    print(block.context)       # "section"

for warning in doc.warnings:
    print(warning.warning, warning.source.line, warning.source.col)
```

`Document.parse` takes a string and returns a `Document` with:

* `header`: a `Header` with an optional `title` span and a list of
  `attributes`
* `blocks` (also available as `nested_blocks`): the top-level blocks
* `warnings`: a list of `Warning` values
* `content_model` (`ContentModel.COMPOUND`) and `context` (`"document"`)

### Document attributes

Header attribute entries such as `:name: value`, `:name:`, `:!name:` and
`:name!:` are parsed by `Attribute.parse`. An `Attribute` has a `name` span,
a `raw_value` (`RawAttributeValue`) and a `value()` method that returns an
`AttributeValue`. Both value types carry a `kind` from `ValueKind`
(`VALUE`, `SET` or `UNSET`). An interpreted value joins lines continued with
a trailing backslash into a single line of `text`.

A header that is not followed by an empty line or the end of the input
produces a `DOCUMENT_HEADER_NOT_TERMINATED` warning.

## Blocks

`adocparse.blocks` parses the block structure of a document. It covers:

* paragraphs (`SimpleBlock`)
* raw delimited blocks: comment `////`, listing `----`, literal `....` and
  passthrough `++++` (`RawDelimitedBlock`)
* block macros such as `image::sunset.jpg[alt=Sunset]` (`MacroBlock`)
* nested sections, which end at the next section of the same or a higher
  level (`SectionBlock`)

Any block may be preceded by an optional title line (`.Title`) and an
attribute list line (`[style#id.role%option]`), parsed by `Preamble.parse`.

Each block has:

* `content_model`, a `ContentModel` value
* `context`, such as `"paragraph"`, `"section"`, `"listing"` or `"comment"`
* `title` and `attrlist`, taken from the preceding lines
* `span`, the source it was parsed from
* `nested_blocks`, which is non-empty only for sections

`parse_block` parses a single block; `parse_blocks_until` parses blocks until
the input ends or a given predicate is true for the remaining source.

```python
from adocparse.blocks import parse_block
from adocparse.span import Span

result = parse_block(Span("== Section\n\nSome text."))
block = result.item.item
print(block.context, block.level, block.section_title.data)   # section 1 Section
```

## Attribute lists

`adocparse.attributes` provides `Attrlist.parse` for a comma-separated list
and `ElementAttribute` for a single entry, named (`alt=Sunset`) or
positional, quoted or unquoted. The first positional attribute may use
shorthand syntax; `block_style()`, `id()`, `roles()` and `options()` read it
back. Empty values, empty shorthand items and unterminated quotes are
reported as warnings.

## Inline content

`adocparse.inlines` parses paragraph lines. `Inline.parse_lines` returns an
`UninterpretedInline` for a single line or an `InlineSequence` for several.
A line consisting only of an inline macro (`name:target[attrs]`) becomes an
`InlineMacro`.

## Spans and results

`adocparse.span.Span` is an immutable view into the source text. It carries
`data`, `line`, `col` and `offset`, and has helpers for taking lines
(`take_line`, `take_normalized_line`, `take_non_empty_line`,
`take_empty_line`, `take_line_with_continuation`), prefixes, identifiers and
whitespace, and for discarding empty lines.

Parse functions return a `MatchedItem` (the parsed `item` and the span
`after` it) and, where warnings can arise, wrap it in `MatchAndWarnings`.
`MatchAndWarnings.unwrap_if_no_warnings()` returns the item or raises
`WarningsPresentError`.

## What it does not do

* It builds a parsed model only; it does not convert documents to HTML or
  any other output format, and it has no command-line tool.
* Lists, tables, example/sidebar/quote blocks and other block types are not
  recognised; such lines are parsed as paragraphs.
* Inline text is not interpreted beyond whole-line inline macros: no
  formatting marks, substitutions or attribute references are applied.
* Include directives and conditional preprocessing are not handled.

## Running the tests

```
pip install -e ".[test]"
pytest
```