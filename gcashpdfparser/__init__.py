"""
GCash PDF Parser Package

Extracts transactions from password-protected GCash transaction-history PDFs.
"""

from .config import ParserOptions
from .exceptions import PasswordError, PDFParseError
from .models import ParseResult, Transaction
from .parser import GCashPDFParser, parse_gcash_pdf, parse_gcash_pdf_to_csv

__version__ = "1.0.7"

__all__ = [
  "GCashPDFParser",
  "ParserOptions",
  "ParseResult",
  "Transaction",
  "PDFParseError",
  "PasswordError",
  "parse_gcash_pdf",
  "parse_gcash_pdf_to_csv",
]
