"""Records produced while parsing a GCash statement."""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class NumericRecord:
  """Debit / credit / balance recovered from one table row by column geometry."""
  ordinal: int
  debit: str
  credit: str
  balance: str


@dataclass
class HeaderRecord:
  """Date/time, description and reference number recovered from page text."""
  ordinal: int
  date_time: str
  description: str
  reference_no: str


@dataclass
class Transaction:
  date_time: str
  description: str
  reference_no: str
  debit: str
  credit: str
  balance: str

  def to_dict(self) -> Dict[str, str]:
    return {
      'dateTime': self.date_time,
      'description': self.description,
      'referenceNo': self.reference_no,
      'debit': self.debit,
      'credit': self.credit,
      'balance': self.balance,
    }


@dataclass
class ParseResult:
  """Outcome of one parse session.

  ``header_count`` and ``numeric_count`` are the lengths of the two extracted
  streams before merging; when they differ the transaction list was truncated
  to the shorter one.
  """
  transactions: List[Transaction] = field(default_factory=list)
  header_count: int = 0
  numeric_count: int = 0
  page_texts: List[str] = field(default_factory=list)
  used_fallback_columns: bool = False

  @property
  def count_mismatch(self) -> bool:
    return self.header_count != self.numeric_count

  def __len__(self):
    return len(self.transactions)

  def __iter__(self):
    return iter(self.transactions)
