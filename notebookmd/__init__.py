"""Markdown syntax-highlighting tokenizer, colour schemes and preview rendering."""

__version__ = "0.1.0"

__all__ = ["styles", "tokenizer", "preview"]