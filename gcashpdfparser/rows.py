# -*- coding: utf-8 -*-
"""rows.py
Cluster a page's fragments into physical table rows.

Fragments are walked top to bottom; each one joins the first cluster whose
*first* member lies within ``tolerance`` vertically, otherwise it opens a new
cluster.  Membership is tested against the first member only, never a running
centroid, so a row may not span more than ``tolerance`` vertically.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from .fragments import Fragment

logger = logging.getLogger(__name__)

Row = List[Fragment]


def cluster_rows(fragments: Sequence[Fragment], tolerance: float = 5.0) -> List[Row]:
    """Group *fragments* into rows, each ordered left to right."""
    ordered = sorted(fragments, key=lambda f: -f.y)
    clusters: List[Row] = []

    for frag in ordered:
        for cluster in clusters:
            if abs(frag.y - cluster[0].y) <= tolerance:
                cluster.append(frag)
                break
        else:
            clusters.append([frag])

    rows = [sorted(cluster, key=lambda f: f.x) for cluster in clusters]
    logger.debug(f"Clustered {len(fragments)} fragments into {len(rows)} rows")
    return rows


def row_text(row: Sequence[Fragment]) -> str:
    return " ".join(f.text for f in row)
