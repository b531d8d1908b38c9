"""Column model inferred from the statement's table header row."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from .fragments import Fragment

logger = logging.getLogger(__name__)

COLUMN_NAMES = [
  "Date and Time",
  "Description",
  "Reference No",
  "Debit",
  "Credit",
  "Balance",
]

# (name, x, width) used when the header row cannot be found on page 1
FALLBACK_COLUMNS = [
  ("Date and Time", 0, 150),
  ("Description", 150, 250),
  ("Reference No", 400, 100),
  ("Debit", 500, 80),
  ("Credit", 580, 80),
  ("Balance", 660, 80),
]


@dataclass
class Column:
  name: str
  center_x: float
  width: float = 0.0
  min_x: float = 0.0
  max_x: float = math.inf

  def contains(self, x: float) -> bool:
    return self.min_x <= x < self.max_x

  def to_dict(self) -> Dict[str, object]:
    return {
      'name': self.name,
      'x': self.center_x,
      'width': self.width,
      'minX': self.min_x,
      # JSON has no infinity
      'maxX': None if math.isinf(self.max_x) else self.max_x,
    }


class ColumnModel:
  """Ordered columns whose ``[min_x, max_x)`` intervals partition the x axis."""

  def __init__(self, columns: List[Column], used_fallback: bool = False):
    self.columns = compute_column_boundaries(columns)
    self.used_fallback = used_fallback

  def __len__(self):
    return len(self.columns)

  def __iter__(self):
    return iter(self.columns)

  def get(self, name: str) -> Optional[Column]:
    for col in self.columns:
      if col.name == name:
        return col
    return None

  def locate(self, x: float, names: Optional[Iterable[str]] = None) -> Optional[Column]:
    """Return the column whose interval contains ``x``, optionally restricted to ``names``."""
    candidates = self.columns
    if names is not None:
      wanted = set(names)
      candidates = [c for c in self.columns if c.name in wanted]
    for col in candidates:
      if col.contains(x):
        return col
    return None

  def to_dicts(self) -> List[Dict[str, object]]:
    return [col.to_dict() for col in self.columns]


def compute_column_boundaries(columns: Sequence[Column]) -> List[Column]:
  """Sort columns by center and split the axis at the midpoints between them."""
  ordered = sorted(columns, key=lambda c: c.center_x)
  boundaries = [
    current.center_x + (following.center_x - current.center_x) / 2
    for current, following in zip(ordered, ordered[1:])
  ]
  for idx, col in enumerate(ordered):
    col.min_x = 0.0 if idx == 0 else boundaries[idx - 1]
    col.max_x = math.inf if idx == len(ordered) - 1 else boundaries[idx]
  return ordered


def fallback_column_model() -> ColumnModel:
  columns = [Column(name, float(x), float(width)) for name, x, width in FALLBACK_COLUMNS]
  return ColumnModel(columns, used_fallback=True)


def _mentions_column(text: str) -> bool:
  return any(name in text for name in COLUMN_NAMES)


def build_column_model(fragments: Sequence[Fragment], tolerance: float = 2.0) -> ColumnModel:
  """Build the column model from the first page's fragments.

  The first fragment naming any column anchors the header row; every fragment
  within ``tolerance`` of its y that also names a column becomes a column.
  Fused header cells (e.g. "Credit Balance") yield fewer columns; the model
  still partitions the axis over whatever was found.
  """
  anchor = next((f for f in fragments if _mentions_column(f.text)), None)
  if anchor is None:
    logger.warning("Could not identify column header row. Using default positions.")
    return fallback_column_model()

  header_items = [
    f for f in fragments
    if abs(f.y - anchor.y) < tolerance and _mentions_column(f.text)
  ]
  logger.debug(f"Identified header items: {[(f.text, f.x) for f in header_items]}")

  columns = [Column(f.text.strip(), f.x, f.width or 0.0) for f in header_items]
  model = ColumnModel(columns)
  logger.info(f"Column model built from header row: {[c.name for c in model]}")
  return model
