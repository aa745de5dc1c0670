"""
Delivery sinks for exported documents.

  - ``FileSink``           saves the document under a directory ("save as")
  - ``download_response``  wraps it in an HTTP attachment for browsers
"""
from __future__ import annotations

import re
from pathlib import Path

from fastapi import Response

from src.core.config import get_settings
from src.core.logging import get_logger

logger = get_logger(__name__)

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    """Strip directories and characters that do not belong in a filename."""
    name = _UNSAFE_FILENAME_RE.sub("_", Path(filename).name).strip("._")
    return name or get_settings().export_filename


class FileSink:
    """Writes exports into *directory* (created on first use)."""

    def __init__(self, directory: str | Path | None = None):
        self.directory = Path(directory or get_settings().export_dir)

    def deliver(self, content: str, filename: str | None = None) -> Path:
        target = self.directory / safe_filename(filename or get_settings().export_filename)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.info("Export written to %s (%d bytes)", target, len(content.encode("utf-8")))
        return target


def download_response(content: str, filename: str | None = None) -> Response:
    """An attachment response the browser saves as *filename*."""
    name = safe_filename(filename or get_settings().export_filename)
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )
