from __future__ import annotations

import io

from flask import request, send_file

from ..exporters.base import ExportFile


def send_export(export: ExportFile):
    """Stream a rendered export as a download."""
    return send_file(
        io.BytesIO(export.content),
        mimetype=export.mimetype,
        as_attachment=True,
        download_name=export.filename,
    )


def wants_json() -> bool:
    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    return best == "application/json" or request.is_json
