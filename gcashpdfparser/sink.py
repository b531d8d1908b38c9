"""Writes CSV, text and debug artifacts under an output directory."""

import json
import logging
import os

logger = logging.getLogger(__name__)

SUBDIRS = ("csv", "txt", "debug")


class OutputSink:
  def __init__(self, output_dir: str = "output"):
    self.output_dir = output_dir

  def path_for(self, subdir: str, filename: str) -> str:
    """Return the target path, creating ``<output_dir>/<subdir>`` if needed."""
    if subdir not in SUBDIRS:
      raise ValueError(f"Unknown output subdirectory {subdir!r}")
    directory = os.path.join(self.output_dir, subdir)
    os.makedirs(directory, exist_ok=True)
    return os.path.join(directory, filename)

  def write_text(self, subdir: str, filename: str, content: str) -> str:
    path = self.path_for(subdir, filename)
    with open(path, 'w', encoding='utf-8') as f:
      f.write(content)
    logger.debug(f"Wrote {path}")
    return path

  def write_json(self, subdir: str, filename: str, data) -> str:
    return self.write_text(subdir, filename, json.dumps(data, indent=2))
