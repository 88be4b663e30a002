"""
Tests for the PDF report generator engine and API route.
"""

import base64
import struct
import zlib

from fastapi.testclient import TestClient

from solarjo.config import Location
from solarjo.engine.financial import compute_financial_viability
from solarjo.engine.report_generator import generate_report
from solarjo.main import app
from solarjo.models.financial import SystemSpec
from solarjo.models.report import ReportCard, ReportInput


client = TestClient(app)


def _minimal_png_b64() -> str:
    """Create a minimal valid 1x1 PNG image encoded as base64."""
    def _chunk(chunk_type: bytes, data: bytes) -> bytes:
        c = chunk_type + data
        crc = struct.pack(">I", zlib.crc32(c) & 0xFFFFFFFF)
        return struct.pack(">I", len(data)) + c + crc

    signature = b"\x89PNG\r\n\x1a\n"
    ihdr = _chunk(b"IHDR", struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0))
    idat = _chunk(b"IDAT", zlib.compress(b"\x00\xff\xff\xff"))
    iend = _chunk(b"IEND", b"")
    return base64.b64encode(signature + ihdr + idat + iend).decode()


def _financial():
    return compute_financial_viability(SystemSpec(size_kw=5.0), Location.AMMAN, 700.0, 0.12)


def _wire_card() -> ReportCard:
    return ReportCard(
        type="Wire Sizing",
        summary="25 A over 30 m at 600 V",
        values={"Wire size": "2.5 mm²", "Voltage drop": "10.32 V"},
    )


class TestGenerateReport:
    def test_minimal(self):
        pdf = generate_report(ReportInput())
        assert isinstance(pdf, bytes)
        assert pdf[:5] == b"%PDF-"

    def test_all_sections(self):
        pdf = generate_report(ReportInput(
            project_name="Villa roof",
            chart_image_base64="data:image/png;base64," + _minimal_png_b64(),
            cards=[_wire_card()],
            financial=_financial(),
            notes="Check the roof load before installation.",
        ))
        assert pdf[:5] == b"%PDF-"
        assert len(pdf) > len(generate_report(ReportInput()))

    def test_arabic_text_does_not_fail(self):
        card = ReportCard(type="حاسبة الأسلاك", summary="شرح", values={"المقطع": "2.5"})
        pdf = generate_report(ReportInput(cards=[card], notes="ملاحظات"))
        assert pdf[:5] == b"%PDF-"

    def test_unreachable_payback(self):
        fin = compute_financial_viability(
            SystemSpec(size_kw=5.0), Location.AMMAN, 700.0, 0.12, sun_hours=[0.0] * 12,
        )
        pdf = generate_report(ReportInput(financial=fin))
        assert pdf[:5] == b"%PDF-"

    def test_excluded_sections(self):
        full = generate_report(ReportInput(cards=[_wire_card()], financial=_financial()))
        trimmed = generate_report(ReportInput(
            cards=[_wire_card()], financial=_financial(), include_sections=["notes"],
        ))
        assert len(trimmed) < len(full)


class TestReportEndpoint:
    def test_returns_pdf(self):
        body = ReportInput(project_name="Villa roof", cards=[_wire_card()], financial=_financial())
        resp = client.post("/api/v1/report/generate", json=body.model_dump(mode="json"))
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert 'filename="Villa roof.pdf"' in resp.headers["content-disposition"]
        assert resp.content[:5] == b"%PDF-"

    def test_arabic_project_name(self):
        resp = client.post("/api/v1/report/generate", json={"project_name": "مشروع"})
        assert resp.status_code == 200
        assert resp.content[:5] == b"%PDF-"

    def test_invalid_body(self):
        resp = client.post("/api/v1/report/generate", json={"cards": [{"summary": "no type"}]})
        assert resp.status_code == 422
