"""Parser options."""

from dataclasses import dataclass

from .fragments import BACKENDS


@dataclass
class ParserOptions:
  # Root for csv/, txt/ and debug/ output
  output_dir: str = "output"
  # Dump raw fragments, page texts and the column model
  debug: bool = False
  # Max vertical distance between a fragment and the first member of its row
  row_tolerance: float = 5.0
  # Max vertical distance between header cells and the header anchor (exclusive)
  header_tolerance: float = 2.0
  backend: str = "pymupdf"

  def __post_init__(self):
    if self.backend not in BACKENDS:
      raise ValueError(f"Unknown backend {self.backend!r}, expected one of {BACKENDS}")
    if self.row_tolerance < 0 or self.header_tolerance < 0:
      raise ValueError("Tolerances must be non-negative")
