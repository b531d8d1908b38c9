# -*- coding: utf-8 -*-
"""fragments.py
Turn a PDF's per-page text content into positioned ``Fragment`` objects.

Two backends are available:
  • ``pymupdf``    – runs of characters (``page.get_text('rawdict')``), split
                     wherever the horizontal gap exceeds ``GAP_TOLERANCE``
  • ``pdfplumber`` – one fragment per *word* (``page.extract_words()``)

Both report ``y`` in page space with the origin at the bottom-left corner, so
sorting fragments by ``y`` descending always walks the page top to bottom.
Fragments are yielded page by page in the order the backend emits them.

Between two consecutive fragments on the same baseline that are separated by
a visible gap, a whitespace-only ``Fragment(' ', ...)`` is emitted.  Joining a
page's fragments with single spaces therefore renders such a gap as three
spaces, which is what separates the fields of a statement line.
"""
from __future__ import annotations

import io
import logging
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, List, Optional

import pdfplumber
import pymupdf as fitz

from .exceptions import PasswordError, PDFParseError

logger = logging.getLogger(__name__)

BACKENDS = ("pymupdf", "pdfplumber")

# Horizontal gap (pt) that separates two runs of text; matches pdfplumber's x_tolerance
GAP_TOLERANCE = 3.0
# Fragments whose baselines differ by no more than this share a line
BASELINE_TOLERANCE = 1.0


@dataclass(frozen=True)
class Fragment:
    """One positioned run of text as emitted by the PDF content stream."""

    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Whitespace fragments
# ---------------------------------------------------------------------------

def with_gap_spaces(fragments: List[Fragment], min_gap: float = GAP_TOLERANCE) -> List[Fragment]:
    """Insert a ``' '`` fragment between same-baseline neighbours more than *min_gap* apart."""
    out: List[Fragment] = []
    for frag in fragments:
        if out:
            prev = out[-1]
            right = prev.x + prev.width
            gap = frag.x - right
            if (
                prev.text.strip()
                and frag.text.strip()
                and abs(frag.y - prev.y) <= BASELINE_TOLERANCE
                and gap > min_gap
            ):
                out.append(Fragment(" ", right, prev.y, gap, prev.height))
        out.append(frag)
    return out


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

class _Run:
    """Characters of one line collected until the next wide gap."""

    def __init__(self, char, baseline: float):
        x0, y0, x1, y1 = char["bbox"]
        self.text = char["c"]
        self.x0, self.x1 = x0, x1
        self.top, self.bottom = y0, y1
        self.baseline = baseline
        self.pending = ""

    def add(self, char):
        x0, y0, x1, y1 = char["bbox"]
        self.text += self.pending + char["c"]
        self.pending = ""
        self.x1 = max(self.x1, x1)
        self.top = min(self.top, y0)
        self.bottom = max(self.bottom, y1)

    def to_fragment(self, page_height: float) -> Fragment:
        return Fragment(
            text=self.text,
            x=float(self.x0),
            y=float(page_height - self.baseline),
            width=float(self.x1 - self.x0),
            height=float(self.bottom - self.top),
        )


def _line_runs(line) -> Iterator[_Run]:
    run: Optional[_Run] = None
    for span in line["spans"]:
        for char in span["chars"]:
            if not char["c"].strip():
                # spaces are kept only when they sit between two characters of a run
                if run is not None:
                    run.pending += char["c"]
                continue
            x0 = char["bbox"][0]
            baseline = char["origin"][1]
            if (
                run is not None
                and x0 - run.x1 <= GAP_TOLERANCE + len(run.pending) * 0.6 * span["size"]
                and abs(baseline - run.baseline) <= BASELINE_TOLERANCE
            ):
                run.add(char)
                continue
            if run is not None:
                yield run
            run = _Run(char, baseline)
    if run is not None:
        yield run


def _pymupdf_pages(pdf_data: bytes, password: Optional[str]) -> Iterator[List[Fragment]]:
    with fitz.open(stream=pdf_data, filetype="pdf") as doc:
        if doc.needs_pass and not doc.authenticate(password or ""):
            raise PasswordError("Incorrect password for encrypted PDF")
        if doc.page_count == 0:
            raise PDFParseError("PDF contains no pages")
        logger.info(f"Opened PDF with PyMuPDF: {doc.page_count} pages")
        for page in doc:
            page_height = page.rect.height
            fragments: List[Fragment] = []
            for block in page.get_text("rawdict")["blocks"]:
                if block.get("type", 0) != 0:
                    continue  # image block
                for line in block["lines"]:
                    fragments.extend(run.to_fragment(page_height) for run in _line_runs(line))
            yield with_gap_spaces(fragments)


def _is_password_error(exc: Exception) -> bool:
    messages = [str(exc), repr(exc)]
    if exc.__cause__ is not None:
        messages.append(repr(exc.__cause__))
    text = " ".join(messages).lower()
    return "password" in text


def _pdfplumber_pages(pdf_data: bytes, password: Optional[str]) -> Iterator[List[Fragment]]:
    try:
        pdf = pdfplumber.open(io.BytesIO(pdf_data), password=password or "")
    except Exception as e:
        if _is_password_error(e):
            raise PasswordError(f"Incorrect password for encrypted PDF: {e!r}") from e
        raise

    with pdf:
        if not pdf.pages:
            raise PDFParseError("PDF contains no pages")
        logger.info(f"Opened PDF with pdfplumber: {len(pdf.pages)} pages")
        for page in pdf.pages:
            page_height = float(page.height)
            fragments = [
                Fragment(
                    text=word["text"],
                    x=float(word["x0"]),
                    y=page_height - float(word["bottom"]),
                    width=float(word["x1"]) - float(word["x0"]),
                    height=float(word["bottom"]) - float(word["top"]),
                )
                for word in page.extract_words(keep_blank_chars=True, x_tolerance=GAP_TOLERANCE)
            ]
            yield with_gap_spaces(fragments)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def iter_page_fragments(
    pdf_data: bytes, password: Optional[str] = None, backend: str = "pymupdf"
) -> Iterator[List[Fragment]]:
    """Yield the fragment list of every page, in document order.

    Decode failures (bad password, corrupt or non-PDF data, broken pages) are
    not caught here; they surface from the generator as soon as they happen.
    """
    if backend == "pymupdf":
        return _pymupdf_pages(pdf_data, password)
    if backend == "pdfplumber":
        return _pdfplumber_pages(pdf_data, password)
    raise ValueError(f"Unknown backend {backend!r}, expected one of {BACKENDS}")


def page_text(fragments: List[Fragment]) -> str:
    """Concatenate a page's fragment texts in emission order."""
    return " ".join(f.text for f in fragments)
