# -*- coding: utf-8 -*-
"""extractors.py
The two independent field extractors of the GCash parser.

* Numeric fields (debit, credit, balance) come from column geometry: every
  clustered row that looks like a transaction line has its right-hand
  fragments assigned to the amount columns by x coordinate.
* Header fields (date/time, description, reference number) come from a single
  regex scan over the reconstructed document text, where the statement renders
  them separated by exactly three spaces.

The k-th numeric record belongs to the k-th header record; pairing happens in
``merge.py``.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from .columns import ColumnModel
from .fragments import Fragment
from .models import HeaderRecord, NumericRecord
from .rows import row_text

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants & regex helpers
# ---------------------------------------------------------------------------
# ASCII digits only
DATE_TIME_PATTERN = r"[0-9]{4}-[0-9]{2}-[0-9]{2}\s+[0-9]{1,2}:[0-9]{2}\s+[AP]M"
DATE_TIME_RE = re.compile(DATE_TIME_PATTERN)

# <date time>   <description>   <13-digit reference>
HEADER_ENTRY_RE = re.compile(rf"({DATE_TIME_PATTERN})\s{{3}}(.+?)\s{{3}}([0-9]{{13}})")

# Header and summary lines that must never become numeric records
SKIP_MARKERS = (
    "Date and Time",
    "STARTING BALANCE",
    "ENDING BALANCE",
    "Total Debit",
    "Total Credit",
)

AMOUNT_COLUMNS = ("Debit", "Credit", "Balance")

# Split point between text and amount fragments when the model has no Debit column
DEFAULT_DEBIT_X = 500.0


def is_transaction_row(text: str) -> bool:
    """True if *text* is a transaction line rather than a header/summary line."""
    if not text.strip():
        return False
    if any(marker in text for marker in SKIP_MARKERS):
        return False
    return DATE_TIME_RE.search(text) is not None


# ---------------------------------------------------------------------------
# Numeric fields
# ---------------------------------------------------------------------------

def extract_numeric_fields(
    row: Sequence[Fragment], columns: ColumnModel
) -> Optional[Tuple[str, str, str]]:
    """Return ``(debit, credit, balance)`` for a clustered row, or ``None``.

    *row* must already be ordered left to right.  ``None`` means the row is
    not a transaction line or carries no amount at all.
    """
    if not is_transaction_row(row_text(row)):
        return None

    debit_col = columns.get("Debit")
    debit_x = debit_col.min_x if debit_col is not None else DEFAULT_DEBIT_X

    values = {name: [] for name in AMOUNT_COLUMNS}
    for frag in row:
        if frag.x < debit_x or not frag.text.strip():
            continue  # date / description / reference side, or a gap
        col = columns.locate(frag.x, AMOUNT_COLUMNS)
        if col is not None:
            values[col.name].append(frag.text)

    debit, credit, balance = (" ".join(values[name]).strip() for name in AMOUNT_COLUMNS)
    if not (debit or credit or balance):
        return None
    return debit, credit, balance


class NumericExtractor:
    """Accumulates numeric records across pages with a document-wide ordinal."""

    def __init__(self):
        self.records: List[NumericRecord] = []

    def reset(self):
        self.records = []

    def feed(self, rows: Sequence[Sequence[Fragment]], columns: ColumnModel) -> int:
        """Extract records from one page's rows; return how many were added."""
        added = 0
        for row in rows:
            fields = extract_numeric_fields(row, columns)
            if fields is None:
                continue
            debit, credit, balance = fields
            self.records.append(
                NumericRecord(
                    ordinal=len(self.records) + 1,
                    debit=debit,
                    credit=credit,
                    balance=balance,
                )
            )
            added += 1
        return added


# ---------------------------------------------------------------------------
# Header fields
# ---------------------------------------------------------------------------

def extract_header_records(text: str) -> List[HeaderRecord]:
    """Scan the whole-document text for date/description/reference triples."""
    records = [
        HeaderRecord(
            ordinal=idx,
            date_time=m.group(1).strip(),
            description=m.group(2).strip(),
            reference_no=m.group(3).strip(),
        )
        for idx, m in enumerate(HEADER_ENTRY_RE.finditer(text), start=1)
    ]
    logger.info(f"Extracted {len(records)} header entries from page texts")
    return records
