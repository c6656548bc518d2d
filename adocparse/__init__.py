"""Parse AsciiDoc documents into a block model with precise source spans."""

__version__ = "0.1.0"

__all__ = ["attributes", "blocks", "document", "inlines", "span"]