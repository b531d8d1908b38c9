"""Parses GCash transaction-history PDFs into transactions.

Pages are processed in order. The column model comes from page 1 only; every
page is clustered into rows for the amount columns and appended to a
whole-document text buffer. Once all pages are read, the buffer is scanned for
the textual fields and both streams are zipped by position.
"""

import logging
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from .columns import ColumnModel, build_column_model
from .config import ParserOptions
from .exceptions import PasswordError, PDFParseError
from .extractors import NumericExtractor, extract_header_records
from .fragments import Fragment, iter_page_fragments, page_text
from .merge import merge_records
from .models import ParseResult, Transaction
from .rows import cluster_rows
from .sink import OutputSink

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Date and Time", "Description", "Reference No", "Debit", "Credit", "Balance"]
NO_TRANSACTIONS = "No transactions found"
PAGE_BREAK = "\n\n--- PAGE BREAK ---\n\n"


class GCashPDFParser:
  def __init__(self, pdf_data: bytes, password: str, options: Optional[ParserOptions] = None):
    self.pdf_data = pdf_data
    self.password = password
    self.options = options or ParserOptions()
    self.sink = OutputSink(self.options.output_dir)
    self._numeric = NumericExtractor()
    self._reset()

  def _reset(self):
    self.transactions: List[Transaction] = []
    self.page_texts: List[str] = []
    self.column_model: Optional[ColumnModel] = None
    self.result: Optional[ParseResult] = None
    self._numeric.reset()

  def parse(self) -> ParseResult:
    """Decode the PDF and extract its transactions.

    Any decode or extraction failure is raised as ``PDFParseError``; nothing
    is kept from a failed parse.
    """
    try:
      pages = iter_page_fragments(self.pdf_data, self.password, self.options.backend)
      return self.parse_pages(pages)
    except PasswordError:
      self._reset()
      raise
    except Exception as e:
      self._reset()
      raise PDFParseError(f"Failed to parse PDF: {e}") from e

  def parse_pages(self, pages: Iterable[Sequence[Fragment]]) -> ParseResult:
    """Run the extraction pipeline over already extracted fragment pages."""
    self._reset()
    debug = self.options.debug

    for page_num, fragments in enumerate(pages, start=1):
      fragments = list(fragments)
      logger.info(f"Processing page {page_num} ({len(fragments)} fragments)")

      if debug:
        self.sink.write_json('debug', f'page_{page_num}_raw_items.json',
                             [f.to_dict() for f in fragments])

      if page_num == 1:
        self.column_model = build_column_model(fragments, self.options.header_tolerance)
        if debug:
          self.sink.write_json('debug', 'column_positions.json', self.column_model.to_dicts())

      text = page_text(fragments)
      self.page_texts.append(text)
      if debug:
        self.sink.write_text('txt', f'page_{page_num}.txt', text)

      rows = cluster_rows(fragments, self.options.row_tolerance)
      added = self._numeric.feed(rows, self.column_model)
      logger.info(f"Page {page_num}: {len(rows)} rows, {added} numeric entries")

    if debug:
      self.sink.write_text('txt', 'all_pages.txt', PAGE_BREAK.join(self.page_texts))

    headers = extract_header_records("\n".join(self.page_texts))
    numerics = self._numeric.records
    self.transactions, _ = merge_records(headers, numerics)

    self.result = ParseResult(
      transactions=self.transactions,
      header_count=len(headers),
      numeric_count=len(numerics),
      page_texts=list(self.page_texts),
      used_fallback_columns=bool(self.column_model and self.column_model.used_fallback),
    )
    logger.info(f"Extracted {len(self.transactions)} transactions from {len(self.page_texts)} pages")
    return self.result

  def get_transactions(self) -> List[Transaction]:
    return self.transactions

  def get_page_texts(self) -> List[str]:
    return self.page_texts

  def to_csv(self) -> str:
    """Serialize transactions as CSV with every field double-quoted.

    Quotes inside fields are not escaped. An empty result serializes to
    ``"No transactions found"`` instead of a header-only CSV.
    """
    if not self.transactions:
      return NO_TRANSACTIONS

    lines = [",".join(CSV_HEADERS)]
    for t in self.transactions:
      fields = [t.date_time, t.description, t.reference_no, t.debit, t.credit, t.balance]
      lines.append(",".join(f'"{value}"' for value in fields))
    return "\n".join(lines)

  def to_dataframe(self) -> pd.DataFrame:
    rows = [
      [t.date_time, t.description, t.reference_no, t.debit, t.credit, t.balance]
      for t in self.transactions
    ]
    return pd.DataFrame(rows, columns=CSV_HEADERS)

  def save_csv(self, filename: str = "transactions.csv") -> str:
    path = self.sink.write_text('csv', filename, self.to_csv())
    logger.info(f"CSV saved ➜ {path}")
    return path

  def save_excel(self, filename: str = "transactions.xlsx") -> str:
    path = self.sink.path_for('csv', filename)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
      self.to_dataframe().to_excel(writer, sheet_name="Transactions", index=False)
    logger.info(f"Excel saved ➜ {path}")
    return path


def parse_gcash_pdf(pdf_data: bytes, password: str, options: Optional[ParserOptions] = None) -> List[Transaction]:
  """Parse a GCash PDF and return its transactions."""
  parser = GCashPDFParser(pdf_data, password, options)
  parser.parse()
  return parser.get_transactions()


def parse_gcash_pdf_to_csv(pdf_data: bytes, password: str, options: Optional[ParserOptions] = None) -> str:
  """Parse a GCash PDF and return its transactions as a CSV string."""
  parser = GCashPDFParser(pdf_data, password, options)
  parser.parse()
  return parser.to_csv()
