"""
PDF report generator using fpdf2.

Produces a multi-page PDF report containing:
  - Title page with project info and optional chart image
  - One block per calculator card added on the dashboard
  - Financial summary with the monthly production table
  - User notes
"""

import base64
import os
import tempfile
from datetime import datetime

from fpdf import FPDF

from solarjo.engine.financial import format_payback
from solarjo.models.financial import FinancialViabilityResult
from solarjo.models.report import ReportCard, ReportInput


# Monthly production table columns
_MONTH_COLS = [
    ("Month", 40),
    ("Sun-hours kWh/m²/d", 45),
    ("Production kWh", 45),
    ("Revenue JOD", 45),
]


class SolarReport(FPDF):
    """Custom FPDF subclass with header/footer."""

    def __init__(self, title: str):
        super().__init__(orientation="P", unit="mm", format="A4")
        self._report_title = _latin1(title)
        self.set_auto_page_break(auto=True, margin=15)

    def header(self):
        self.set_font("Helvetica", "B", 9)
        self.set_text_color(100, 100, 100)
        self.cell(0, 6, self._report_title, align="L")
        self.cell(0, 6, datetime.now().strftime("%Y-%m-%d %H:%M"), align="R", new_x="LMARGIN", new_y="NEXT")
        self.set_draw_color(200, 200, 200)
        self.line(10, self.get_y(), self.w - 10, self.get_y())
        self.ln(3)

    def footer(self):
        self.set_y(-12)
        self.set_font("Helvetica", "I", 7)
        self.set_text_color(150, 150, 150)
        self.cell(0, 8, f"Page {self.page_no()}/{{nb}}", align="C")


def generate_report(inp: ReportInput) -> bytes:
    """Generate a PDF report and return the bytes."""
    pdf = SolarReport(inp.title)
    pdf.alias_nb_pages()

    # ── Page 1: Title + Chart ──
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 18)
    pdf.cell(0, 12, _latin1(inp.title), align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(2)

    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(60, 60, 60)
    info_lines = [f"Generated: {datetime.now().strftime('%B %d, %Y at %H:%M')}"]
    if inp.project_name:
        info_lines.insert(0, f"Project: {inp.project_name}")
    for line in info_lines:
        pdf.cell(0, 6, _latin1(line), align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    if "chart" in inp.include_sections and inp.chart_image_base64:
        _add_chart_image(pdf, inp.chart_image_base64)

    # ── Calculator cards ──
    if "cards" in inp.include_sections and inp.cards:
        pdf.add_page()
        _add_section_heading(pdf, "Calculations")
        for card in inp.cards:
            _add_card(pdf, card)

    # ── Financial summary ──
    if "financial" in inp.include_sections and inp.financial:
        pdf.add_page()
        _add_section_heading(pdf, "Financial Viability")
        _add_financial_summary(pdf, inp.financial)
        _add_monthly_table(pdf, inp.financial)

    # ── Notes ──
    if "notes" in inp.include_sections and inp.notes:
        pdf.add_page()
        _add_section_heading(pdf, "Notes")
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(40, 40, 40)
        pdf.multi_cell(0, 5, _latin1(inp.notes))

    return bytes(pdf.output())


def _add_chart_image(pdf: FPDF, b64_data: str) -> None:
    """Decode base64 PNG and add to PDF."""
    # Strip data URI prefix if present
    if "," in b64_data:
        b64_data = b64_data.split(",", 1)[1]

    img_bytes = base64.b64decode(b64_data)

    tmp = tempfile.NamedTemporaryFile(suffix=".png", delete=False)
    try:
        tmp.write(img_bytes)
        tmp.flush()
        tmp.close()

        available_width = pdf.w - 20
        available_height = pdf.h - pdf.get_y() - 20

        pdf.image(tmp.name, x=10, w=available_width, h=min(available_height, 110))
    finally:
        os.unlink(tmp.name)


def _add_section_heading(pdf: FPDF, text: str) -> None:
    pdf.set_font("Helvetica", "B", 14)
    pdf.set_text_color(30, 30, 30)
    pdf.cell(0, 10, text, new_x="LMARGIN", new_y="NEXT")
    pdf.ln(2)


def _add_card(pdf: FPDF, card: ReportCard) -> None:
    """Card title, summary line and a two-column key/value table."""
    pdf.set_font("Helvetica", "B", 11)
    pdf.set_text_color(30, 30, 30)
    pdf.cell(0, 7, _latin1(card.type), new_x="LMARGIN", new_y="NEXT")

    if card.summary:
        pdf.set_font("Helvetica", "", 9)
        pdf.set_text_color(60, 60, 60)
        pdf.multi_cell(0, 5, _latin1(card.summary))

    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(40, 40, 40)
    for key, value in card.values.items():
        pdf.cell(70, 5, _latin1(key), border=1)
        pdf.cell(0, 5, _latin1(value), border=1, new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)


def _add_financial_summary(pdf: FPDF, fin: FinancialViabilityResult) -> None:
    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(40, 40, 40)
    lines = [
        f"Location: {fin.location.title()}",
        f"Total Investment: {_fv(fin.total_investment, 0)} JOD",
        f"Annual Production (first year): {_fv(fin.total_annual_production, 0)} kWh",
        f"Annual Revenue (first year): {_fv(fin.annual_revenue, 0)} JOD",
        f"Payback Period: {format_payback(fin)}",
        f"Net Profit over 25 years: {_fv(fin.net_profit_25_years, 0)} JOD",
    ]
    for line in lines:
        pdf.cell(0, 6, _latin1(line), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(3)


def _add_monthly_table(pdf: FPDF, fin: FinancialViabilityResult) -> None:
    """Render the monthly production table with a totals row."""
    pdf.set_font("Helvetica", "B", 8)
    pdf.set_fill_color(230, 230, 230)
    pdf.set_text_color(30, 30, 30)
    for label, width in _MONTH_COLS:
        pdf.cell(width, 6, _latin1(label), border=1, fill=True, align="C")
    pdf.ln()

    pdf.set_font("Helvetica", "", 8)
    pdf.set_text_color(40, 40, 40)
    rows = [
        [m.month, _fv(m.sun_hours), _fv(m.production_kwh, 1), _fv(m.revenue)]
        for m in fin.monthly_breakdown
    ]
    rows.append(["Total", "-", _fv(fin.total_annual_production, 1), _fv(fin.annual_revenue)])
    for vals in rows:
        for i, (_, width) in enumerate(_MONTH_COLS):
            align = "L" if i == 0 else "C"
            pdf.cell(width, 5, vals[i], border=1, align=align)
        pdf.ln()


def _latin1(text: str) -> str:
    """Core PDF fonts are Latin-1 only; unsupported characters become '?'."""
    return text.encode("latin-1", "replace").decode("latin-1")


def _fv(val, decimals: int = 2) -> str:
    """Format a value for display, handling None gracefully."""
    if val is None:
        return "-"
    if isinstance(val, float):
        return f"{val:,.{decimals}f}"
    return str(val)
