"""Schema extraction for generic table files.

A generic table file (``.fac``, ``.txt`` or ``.csv``) may open with a
directive preamble that declares its indexes and column keys:

    # orders table, exported nightly
    #index PK_ORDERS: order_id
    #index IX_ORDERS_CUSTOMER: customer_id, created_at
    #key order_id
    order_id,customer_id,created_at
    1,42,2024-01-01

The preamble is every leading blank or ``#`` line. Reading stops at the first
other line (the header row), so data rows are never touched no matter how
large the file is.
"""

import re
from abc import ABC, abstractmethod

from tblanalyzer.exceptions import ExtractionFailedError
from tblanalyzer.models import TableSchema

DIRECTIVE_PREFIX = "#"
INDEX_DIRECTIVE = "index"
KEY_DIRECTIVE = "key"

# The keyword touches the prefix ("# index orders" is prose) and ends at
# whitespace, a colon or the end of the line
DIRECTIVE_RE = re.compile(r"(?P<keyword>[A-Za-z]+)(?:[\s:]+(?P<name>.*))?$")


class BaseSchemaExtractor(ABC):
    """Turns a table file into its declared indexes and column keys.

    Implementations must be safe to call from several worker threads at once.
    """

    @abstractmethod
    def extract(self, path: str) -> TableSchema:
        """Extract the schema declared in a file.

        Raises:
            ExtractionFailedError: If the file cannot be read or parsed.
        """


def _dedupe(values: list[str]) -> tuple[str, ...]:
    """Drop repeated values, keeping the first occurrence."""
    return tuple(dict.fromkeys(values))


def parse_directive(line: str) -> tuple[str, str] | None:
    """Split a ``#<keyword> <name>`` or ``#<keyword>:<name>`` line into (keyword, name).

    Returns None for plain comment lines. The keyword is lower-cased; the name
    is trimmed and otherwise kept as written. For index directives anything
    after the first ``:`` (the column list) is dropped.
    """
    match = DIRECTIVE_RE.match(line[len(DIRECTIVE_PREFIX):])
    if match is None:
        return None

    keyword = match.group("keyword").lower()
    if keyword not in (INDEX_DIRECTIVE, KEY_DIRECTIVE):
        return None

    name = match.group("name") or ""
    if keyword == INDEX_DIRECTIVE:
        name = name.split(":", 1)[0]
    return keyword, name.strip()


class DirectiveSchemaExtractor(BaseSchemaExtractor):
    """Reads ``#index`` / ``#key`` directives from the file preamble."""

    def __init__(self, encoding: str = "utf-8-sig"):
        self.encoding = encoding

    def extract(self, path: str) -> TableSchema:
        indexes: list[str] = []
        col_keys: list[str] = []

        try:
            with open(path, encoding=self.encoding, newline="") as f:
                for lineno, raw in enumerate(f, start=1):
                    line = raw.strip()
                    if not line:
                        continue
                    if not line.startswith(DIRECTIVE_PREFIX):
                        break

                    directive = parse_directive(line)
                    if directive is None:
                        continue
                    keyword, name = directive
                    if not name:
                        raise ExtractionFailedError(
                            path, f"line {lineno}: '#{keyword}' directive without a name"
                        )
                    if keyword == INDEX_DIRECTIVE:
                        indexes.append(name)
                    else:
                        col_keys.append(name)
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractionFailedError(path, e) from e

        return TableSchema(indexes=_dedupe(indexes), col_keys=_dedupe(col_keys))
