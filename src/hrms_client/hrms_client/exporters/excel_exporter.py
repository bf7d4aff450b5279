from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from ..attendance.model import AttendanceRecord
from .base import ExportFile
from .csv_exporter import ATTENDANCE_COLUMNS, attendance_rows

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def attendance_report_xlsx(records: Sequence[AttendanceRecord], *, month: str) -> ExportFile:
    df = pd.DataFrame(attendance_rows(records), columns=ATTENDANCE_COLUMNS)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Attendance")
    return ExportFile(filename=f"attendance-report-{month}.xlsx", mimetype=XLSX_MIMETYPE, content=out.getvalue())
