"""
Table Parser
============
Delimited text (tab or comma) → ordered list of Row.

Header cells are matched case-insensitively:
    - "name", "results", "cpr": exact match
    - link column: first cell containing both "video" and "link"

A missing column never raises: the field is read as missing for
every row (None for text fields, NaN for numeric fields).
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import List, Optional

from .models.row import Row

logger = logging.getLogger("ig_gallery.parser")

_LINE_SPLIT = re.compile(r"\r?\n")
_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


@dataclass(frozen=True)
class ColumnIndex:
    """Header column positions (-1 = column not present)."""

    name: int = -1
    results: int = -1
    cpr: int = -1
    link: int = -1

    @classmethod
    def from_header(cls, cells: List[str]) -> "ColumnIndex":
        def find(predicate) -> int:
            for i, cell in enumerate(cells):
                if predicate(cell):
                    return i
            return -1

        return cls(
            name=find(lambda c: c == "name"),
            results=find(lambda c: c == "results"),
            cpr=find(lambda c: c == "cpr"),
            link=find(lambda c: "video" in c and "link" in c),
        )

    @property
    def missing(self) -> List[str]:
        return [k for k in ("name", "results", "cpr", "link") if getattr(self, k) < 0]


def detect_delimiter(header: str) -> str:
    """Tab if the header line contains one, else comma."""
    return "\t" if "\t" in header else ","


def to_number(cell: Optional[str]) -> float:
    """
    Numeric conversion of a table cell.

    Missing cell → NaN, blank cell → 0.0, anything that is not
    plain decimal text → NaN. Never raises.
    """
    if cell is None:
        return math.nan
    text = cell.strip()
    if not text:
        return 0.0
    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf
    if not _DECIMAL.match(text):
        return math.nan
    return float(text)


def _cell(parts: List[str], idx: int) -> Optional[str]:
    if idx < 0 or idx >= len(parts):
        return None
    return parts[idx]


def _text(cell: Optional[str]) -> Optional[str]:
    return cell.strip() if cell is not None else None


class TableParser:
    """
    Parses a pasted spreadsheet block into rows.

    Usage:
        rows = TableParser().parse("Name\\tResults\\tCPR\\tVideo Link\\n...")
    """

    def parse(self, text: str) -> List[Row]:
        lines = [line for line in _LINE_SPLIT.split(text or "") if line.strip()]
        if not lines:
            return []

        header, body = lines[0], lines[1:]
        delim = detect_delimiter(header)
        cells = [c.strip().lower() for c in header.split(delim)]
        idx = ColumnIndex.from_header(cells)

        if idx.missing:
            logger.warning(
                "Header %r is missing column(s): %s", header, ", ".join(idx.missing)
            )

        rows = []
        for line in body:
            parts = line.split(delim)
            rows.append(Row(
                name=_text(_cell(parts, idx.name)),
                results=to_number(_cell(parts, idx.results)),
                cpr=to_number(_cell(parts, idx.cpr)),
                link=_text(_cell(parts, idx.link)),
            ))

        logger.debug("Parsed %d row(s), delimiter=%r", len(rows), delim)
        return rows


def parse_table(text: str) -> List[Row]:
    """Shortcut for TableParser().parse(text)."""
    return TableParser().parse(text)
