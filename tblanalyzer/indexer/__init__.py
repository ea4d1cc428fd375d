"""Table discovery and schema extraction.

Public API:
    TableFileWalker - lists candidate files below configured directories
    DirectiveSchemaExtractor - reads declared indexes and column keys
    stat_file, table_name, is_supported_table - per-file helpers
"""

from .core import TABLE_NAME_RULES, TableFileWalker, is_supported_table, stat_file, table_name
from .extractor import BaseSchemaExtractor, DirectiveSchemaExtractor, parse_directive

__all__ = [
    "TABLE_NAME_RULES",
    "TableFileWalker",
    "is_supported_table",
    "stat_file",
    "table_name",
    "BaseSchemaExtractor",
    "DirectiveSchemaExtractor",
    "parse_directive",
]
