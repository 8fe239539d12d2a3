"""
Parsers for JES spool listings.

This package contains the line grammars and the entry parsers that build
domain objects from listing text.
"""

from .entry_parser import (
    PARSER_MODE_DEBUG,
    PARSER_MODE_JES,
    DebuggingEntryParser,
    EntryParser,
    JesEntryParser,
    create_entry_parser,
)

__all__ = [
    "PARSER_MODE_DEBUG",
    "PARSER_MODE_JES",
    "DebuggingEntryParser",
    "EntryParser",
    "JesEntryParser",
    "create_entry_parser",
]
