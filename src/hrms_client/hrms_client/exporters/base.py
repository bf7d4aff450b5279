from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExportFile:
    """A rendered download: what the controller hands to ``send_file``."""

    filename: str
    mimetype: str
    content: bytes
