from datetime import datetime

import pytest

from temple_reports.canvas_backend import ReportLabCanvas, ReportLabFont
from temple_reports.layout_engine import LANDSCAPE_SIZE, TableLayoutEngine
from temple_reports.table_templates import get_template


def _bookings(n):
    return [
        {"date": "2025-01-14", "session": "12:45 PM - 1:30 PM", "name": f"Devotee {i}",
         "email": f"devotee{i}@example.org", "phone": "+1 555 010 0000"}
        for i in range(n)
    ]


def test_reportlab_font_measures_standard_metrics():
    font = ReportLabFont("Helvetica")
    assert font.measure_width("", 10) == 0
    assert font.measure_width("MMMM", 10) > font.measure_width("iiii", 10)
    assert font.measure_width("abc", 20) == pytest.approx(2 * font.measure_width("abc", 10))


def test_bold_font_variant():
    assert ReportLabCanvas().embed_font(bold=True).name == "Helvetica-Bold"
    assert ReportLabCanvas(font_family="Times-Roman").embed_font(bold=True).name == "Times-Bold"


def test_only_last_page_is_drawable():
    doc = ReportLabCanvas()
    first = doc.add_page()
    second = doc.add_page()
    font = doc.embed_font()
    second.draw_text("ok", x=10, y=10, size=10, font=font)
    with pytest.raises(RuntimeError):
        first.draw_text("late", x=10, y=10, size=10, font=font)


def test_add_page_uses_requested_size():
    doc = ReportLabCanvas()
    assert doc.add_page().size() == (612, 792)
    assert doc.add_page(LANDSCAPE_SIZE).size() == LANDSCAPE_SIZE


def test_engine_writes_real_pdf():
    canvases = []

    def factory():
        c = ReportLabCanvas()
        canvases.append(c)
        return c

    template = get_template("annadanam")
    engine = TableLayoutEngine(canvas_factory=factory, clock=lambda: datetime(2025, 1, 14, 9, 0))
    doc = engine.generate(template.title, "2025-01-14", template.columns, _bookings(100), "annadanam")

    assert doc.content.startswith(b"%PDF")
    assert doc.content.rstrip().endswith(b"%%EOF")
    # 32 rows fit on a letter page with the default style
    assert doc.page_count == 4
    assert canvases[0].page_count == 4


def test_default_engine_builds_reportlab_document():
    template = get_template("pooja")
    doc = TableLayoutEngine(pagesize=LANDSCAPE_SIZE).generate(
        template.title, None, template.columns, _bookings(3), "pooja-bookings")
    assert doc.filename == "pooja-bookings.pdf"
    assert doc.content.startswith(b"%PDF")
    assert doc.page_count == 1
