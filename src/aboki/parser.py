"""HTML parsing utilities for extracting the market rates table."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

from bs4 import BeautifulSoup

log = logging.getLogger(__name__)

ROW_SELECTOR = ".lagos-market-rates table > tr"
NOISE_SENTINELS = ("NGN", "Buy / Sell")

# Date, rate pair with optional time-of-day markers, decimal, plain word.
TOKEN_PATTERN = re.compile(r"\w+/\w+/\w+|\w+\s/\s\w+\**|\w+\.\w*|\w+", re.ASCII)

Row = List[str]


class StructuralExtractionError(ValueError):
    """Raised when the page no longer has the shape the extractor expects."""


@dataclass
class ExtractedTable:
    """Page title plus the data rows of the market rates table, newest first."""

    title: str
    rows: List[Row] = field(default_factory=list)


def normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", (text or "").strip())


def tokenize(row_text: str) -> Row:
    """Split a row's text into tokens, skipping characters no token shape matches."""
    return TOKEN_PATTERN.findall(row_text or "")


def is_noise_row(row: Row) -> bool:
    """Header rows carry either the "NGN" label or the "Buy / Sell" legend."""
    return any(token in NOISE_SENTINELS for token in row)


def extract(html: str) -> ExtractedTable:
    """Parse ``html`` and return the title and tokenized data rows.

    A page without the market rates table yields an empty ``rows`` list.
    """
    soup = BeautifulSoup(html, "html.parser")
    title = normalize_text(soup.title.get_text()) if soup.title else ""

    body = soup.body or soup
    rows: List[Row] = []
    for elem in body.select(ROW_SELECTOR):
        row = tokenize(normalize_text(elem.get_text(" ")))
        if is_noise_row(row):
            continue
        rows.append(row)

    if not rows:
        log.warning("No rate rows found for selector %r", ROW_SELECTOR)
    log.debug("Extracted %d rows from %r", len(rows), title)
    return ExtractedTable(title=title, rows=rows)


def assemble(table: ExtractedTable) -> Dict[str, Any]:
    """Package an extracted table the way the presentation layer consumes it."""
    return {"title": table.title, "rows": [list(row) for row in table.rows]}
