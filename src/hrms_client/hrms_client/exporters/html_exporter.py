from __future__ import annotations

from datetime import date
from typing import Optional

from jinja2 import Environment, select_autoescape

from ..common.coerce import format_money
from ..payroll.model import SalarySlip
from .base import ExportFile

_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))
_env.filters["money"] = format_money

# Self-contained so the file prints the same when opened offline.
SLIP_TEMPLATE = _env.from_string(
    """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Salary Slip - {{ slip.employee('name') }} - {{ slip.period.month_name }} {{ slip.period.year }}</title>
<style>
  body { font-family: Arial, sans-serif; margin: 24px; color: #111827; }
  .band { background: #2563EB; color: #fff; text-align: center; padding: 16px; border-radius: 6px; }
  .band h1 { margin: 0; font-size: 24px; }
  .identity { display: flex; justify-content: space-between; margin: 16px 0; }
  table { width: 100%; border-collapse: collapse; margin-bottom: 16px; }
  th, td { border: 1px solid #D1D5DB; padding: 6px 10px; text-align: left; }
  td.amount { text-align: right; }
  th { background: #2563EB; color: #fff; }
  th.deduction { background: #DC2626; }
  tr.total td { font-weight: bold; background: #F3F4F6; }
  .net { text-align: center; font-size: 20px; font-weight: bold; color: #2563EB;
         border: 2px solid #2563EB; padding: 10px; border-radius: 6px; }
  @media print { body { margin: 0; } }
</style>
</head>
<body>
<div class="band">
  <h1>SALARY SLIP</h1>
  <div>{{ slip.period.month_name }} {{ slip.period.year }}</div>
</div>
<div class="identity">
  <div>
    <div><strong>Name:</strong> {{ slip.employee('name') }}</div>
    <div><strong>Employee ID:</strong> {{ slip.employee('employee_id') }}</div>
    <div><strong>Department:</strong> {{ slip.employee('department') }}</div>
  </div>
  <div>
    <div><strong>Designation:</strong> {{ slip.employee('designation') }}</div>
    <div><strong>Date:</strong> {{ generated_on.strftime('%d/%m/%Y') }}</div>
  </div>
</div>
<table>
  <tr><th>Attendance</th><th>Days</th></tr>
  {% for label, key in attendance_rows %}
  <tr><td>{{ label }}</td><td class="amount">{{ slip.attendance(key) }}</td></tr>
  {% endfor %}
</table>
<table>
  <tr><th>Earnings</th><th>Amount</th></tr>
  {% for label, key in earning_rows %}
  <tr{% if key in ('gross_salary', 'earned_salary') %} class="total"{% endif %}>
    <td>{{ label }}</td><td class="amount">{{ slip.earning(key) | money }}</td>
  </tr>
  {% endfor %}
</table>
<table>
  <tr><th class="deduction">Deductions</th><th class="deduction">Amount</th></tr>
  {% for label, key in deduction_rows %}
  <tr{% if key == 'total_deductions' %} class="total"{% endif %}>
    <td>{{ label }}</td><td class="amount">{{ slip.deduction(key) | money }}</td>
  </tr>
  {% endfor %}
</table>
<div class="net">Net Salary: {{ slip.net_salary | money }}</div>
</body>
</html>
"""
)

ATTENDANCE_ROWS = [
    ("Total Days", "total_days"),
    ("Working Days", "working_days"),
    ("Present Days", "present_days"),
    ("Half Days", "half_days"),
    ("Absent Days", "absent_days"),
    ("Leave Days", "leave_days"),
]
EARNING_ROWS = [
    ("Basic Salary", "basic"),
    ("HRA", "hra"),
    ("Conveyance", "conveyance"),
    ("Medical", "medical"),
    ("Special Allowance", "special_allowance"),
    ("Gross Salary", "gross_salary"),
    ("Earned Salary", "earned_salary"),
]
DEDUCTION_ROWS = [
    ("Provident Fund", "pf"),
    ("Professional Tax", "professional_tax"),
    ("TDS", "tds"),
    ("Total Deductions", "total_deductions"),
]


def salary_slip_html(
    slip: SalarySlip, *, employee_code: Optional[str] = None, generated_on: Optional[date] = None
) -> ExportFile:
    code = employee_code or slip.employee("employee_id")
    html = SLIP_TEMPLATE.render(
        slip=slip,
        generated_on=generated_on or date.today(),
        attendance_rows=ATTENDANCE_ROWS,
        earning_rows=EARNING_ROWS,
        deduction_rows=DEDUCTION_ROWS,
    )
    return ExportFile(
        filename=f"salary-slip-{code}-{slip.period.yyyy_mm}.html",
        mimetype="text/html",
        content=html.encode("utf-8"),
    )
