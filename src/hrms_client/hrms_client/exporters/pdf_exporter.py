"""Salary slip PDF, rendered with reportlab platypus.

Layout: a coloured header band drawn on the canvas, then the identity block,
the attendance / earnings / deductions tables and the net salary callout.
The slip is the server's authoritative document; nothing is recomputed here.
"""

from __future__ import annotations

import io
from datetime import date
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..payroll.model import SalarySlip
from .base import ExportFile

BRAND = colors.HexColor("#2563EB")
DEDUCTION_RED = colors.HexColor("#DC2626")
LIGHT_GREY = colors.HexColor("#F3F4F6")
BAND_HEIGHT = 32 * mm

PDF_MIMETYPE = "application/pdf"


def _amount(value) -> str:
    # Base-14 fonts have no rupee glyph.
    return f"{value:,.2f}"


def salary_slip_filename(slip: SalarySlip) -> str:
    return f"SalarySlip_{slip.period.month_name}_{slip.period.year}.pdf"


def _header_band(title: str, subtitle: str):
    def draw(canvas, doc):
        width, height = doc.pagesize
        canvas.saveState()
        canvas.setFillColor(BRAND)
        canvas.rect(0, height - BAND_HEIGHT, width, BAND_HEIGHT, fill=1, stroke=0)
        canvas.setFillColor(colors.white)
        canvas.setFont("Helvetica-Bold", 20)
        canvas.drawCentredString(width / 2, height - 15 * mm, title)
        canvas.setFont("Helvetica", 12)
        canvas.drawCentredString(width / 2, height - 23 * mm, subtitle)
        canvas.restoreState()

    return draw


def _table(rows, header_color, *, bold_rows=()):
    table = Table(rows, colWidths=[110 * mm, 60 * mm])
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), header_color),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#D1D5DB")),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
        ("TOPPADDING", (0, 0), (-1, -1), 5),
    ]
    for i in bold_rows:
        style.append(("FONTNAME", (0, i), (-1, i), "Helvetica-Bold"))
        style.append(("BACKGROUND", (0, i), (-1, i), LIGHT_GREY))
    table.setStyle(TableStyle(style))
    return table


def salary_slip_pdf(slip: SalarySlip, *, generated_on: Optional[date] = None) -> ExportFile:
    generated_on = generated_on or date.today()
    styles = getSampleStyleSheet()
    section = ParagraphStyle("Section", parent=styles["Heading3"], textColor=colors.HexColor("#111827"))
    net_style = ParagraphStyle(
        "Net", parent=styles["Heading2"], alignment=TA_CENTER, textColor=BRAND, spaceBefore=6
    )

    out = io.BytesIO()
    doc = SimpleDocTemplate(
        out,
        pagesize=A4,
        topMargin=BAND_HEIGHT + 10 * mm,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        title=f"Salary Slip {slip.period.month_name} {slip.period.year}",
    )

    identity = Table(
        [
            [f"Name: {slip.employee('name')}", f"Designation: {slip.employee('designation')}"],
            [f"Employee ID: {slip.employee('employee_id')}", f"Date: {generated_on.strftime('%d/%m/%Y')}"],
            [f"Department: {slip.employee('department')}", ""],
        ],
        colWidths=[85 * mm, 85 * mm],
    )
    identity.setStyle(
        TableStyle(
            [
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
            ]
        )
    )

    attendance = _table(
        [
            ["Attendance", "Days"],
            ["Total Days", str(slip.attendance("total_days"))],
            ["Working Days", str(slip.attendance("working_days"))],
            ["Present Days", str(slip.attendance("present_days"))],
            ["Half Days", str(slip.attendance("half_days"))],
            ["Absent Days", str(slip.attendance("absent_days"))],
            ["Leave Days", str(slip.attendance("leave_days"))],
        ],
        BRAND,
    )
    earnings = _table(
        [
            ["Earnings", "Amount (INR)"],
            ["Basic Salary", _amount(slip.earning("basic"))],
            ["HRA", _amount(slip.earning("hra"))],
            ["Conveyance", _amount(slip.earning("conveyance"))],
            ["Medical", _amount(slip.earning("medical"))],
            ["Special Allowance", _amount(slip.earning("special_allowance"))],
            ["Gross Salary", _amount(slip.earning("gross_salary"))],
            ["Earned Salary", _amount(slip.earning("earned_salary"))],
        ],
        BRAND,
        bold_rows=(6, 7),
    )
    deductions = _table(
        [
            ["Deductions", "Amount (INR)"],
            ["Provident Fund", _amount(slip.deduction("pf"))],
            ["Professional Tax", _amount(slip.deduction("professional_tax"))],
            ["TDS", _amount(slip.deduction("tds"))],
            ["Total Deductions", _amount(slip.deduction("total_deductions"))],
        ],
        DEDUCTION_RED,
        bold_rows=(4,),
    )

    story = [
        identity,
        Spacer(1, 6 * mm),
        Paragraph("Attendance Summary", section),
        attendance,
        Spacer(1, 4 * mm),
        Paragraph("Earnings", section),
        earnings,
        Spacer(1, 4 * mm),
        Paragraph("Deductions", section),
        deductions,
        Spacer(1, 6 * mm),
        Paragraph(f"Net Salary: INR {_amount(slip.net_salary)}", net_style),
    ]
    band = _header_band("SALARY SLIP", f"{slip.period.month_name} {slip.period.year}")
    doc.build(story, onFirstPage=band, onLaterPages=band)

    return ExportFile(filename=salary_slip_filename(slip), mimetype=PDF_MIMETYPE, content=out.getvalue())
