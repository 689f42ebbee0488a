"""Drawing collaborator for the table layout engine, backed by ReportLab."""

from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple

from reportlab.lib.colors import Color, black
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .table_style import get_bold_font


Point = Tuple[float, float]


class FontHandle:
    """An embedded font that can measure text."""

    name: str

    def measure_width(self, text: str, size: float) -> float:
        raise NotImplementedError


class Page:
    """A single page accepting drawing primitives."""

    def size(self) -> Tuple[float, float]:
        raise NotImplementedError

    def draw_text(self, text: str, x: float, y: float, size: float,
                  font: FontHandle, color: Color = black) -> None:
        raise NotImplementedError

    def draw_rectangle(self, x: float, y: float, width: float, height: float,
                       color: Color) -> None:
        raise NotImplementedError

    def draw_line(self, start: Point, end: Point, thickness: float,
                  color: Color) -> None:
        raise NotImplementedError


class DocumentCanvas:
    """A document under construction.

    One instance per generation. Pages are appended in order and the whole
    document is turned into bytes once by ``serialize``.
    """

    def add_page(self, size: Optional[Tuple[float, float]] = None) -> Page:
        raise NotImplementedError

    def embed_font(self, bold: bool = False) -> FontHandle:
        raise NotImplementedError

    def serialize(self) -> bytes:
        raise NotImplementedError


@dataclass
class ReportLabFont(FontHandle):
    """One of the 14 standard PDF fonts."""
    name: str

    def measure_width(self, text: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, self.name, size)


class ReportLabPage(Page):
    """A page of a ReportLab canvas.

    ReportLab draws sequentially, so only the most recently added page
    accepts drawing calls.
    """

    def __init__(self, document: "ReportLabCanvas", index: int, size: Tuple[float, float]):
        self._document = document
        self.index = index
        self._size = size

    def size(self) -> Tuple[float, float]:
        return self._size

    @property
    def _canvas(self) -> canvas.Canvas:
        if self._document.page_count - 1 != self.index:
            raise RuntimeError(f"Page {self.index} is closed; only the last page is drawable")
        return self._document.canvas

    def draw_text(self, text, x, y, size, font, color=black):
        c = self._canvas
        c.setFillColor(color)
        c.setFont(font.name, size)
        c.drawString(x, y, text)

    def draw_rectangle(self, x, y, width, height, color):
        c = self._canvas
        c.setFillColor(color)
        c.rect(x, y, width, height, stroke=0, fill=1)

    def draw_line(self, start, end, thickness, color):
        c = self._canvas
        c.setStrokeColor(color)
        c.setLineWidth(thickness)
        c.line(start[0], start[1], end[0], end[1])


class ReportLabCanvas(DocumentCanvas):
    """DocumentCanvas writing a PDF into memory."""

    def __init__(self, pagesize: Tuple[float, float] = LETTER,
                 font_family: str = "Helvetica"):
        self.pagesize = pagesize
        self.font_family = font_family
        self._buffer = BytesIO()
        self.canvas = canvas.Canvas(self._buffer, pagesize=pagesize)
        self.page_count = 0

    def add_page(self, size=None):
        size = tuple(size) if size else self.pagesize
        # The canvas opens on a blank first page; later pages need showPage()
        if self.page_count > 0:
            self.canvas.showPage()
        self.canvas.setPageSize(size)
        page = ReportLabPage(self, self.page_count, size)
        self.page_count += 1
        return page

    def embed_font(self, bold=False):
        name = get_bold_font(self.font_family) if bold else self.font_family
        return ReportLabFont(name)

    def serialize(self):
        self.canvas.save()
        return self._buffer.getvalue()
