"""Shared fixtures: an in-memory DocumentCanvas that records every drawing call."""
from datetime import datetime

import pytest

from temple_reports.canvas_backend import DocumentCanvas, FontHandle, Page
from temple_reports.layout_engine import TableLayoutEngine

FIXED_NOW = datetime(2025, 1, 14, 18, 30, 5)


class FixedWidthFont(FontHandle):
    """Every character is ``char_width * size`` points wide."""

    def __init__(self, name: str, char_width: float = 0.5):
        self.name = name
        self.char_width = char_width

    def measure_width(self, text, size):
        return len(text) * size * self.char_width


class RecordingPage(Page):
    def __init__(self, size):
        self._size = size
        self.texts = []
        self.rects = []
        self.lines = []

    def size(self):
        return self._size

    def draw_text(self, text, x, y, size, font, color=None):
        self.texts.append({"text": text, "x": x, "y": y, "size": size, "font": font.name})

    def draw_rectangle(self, x, y, width, height, color):
        self.rects.append({"x": x, "y": y, "width": width, "height": height})

    def draw_line(self, start, end, thickness, color):
        self.lines.append({"start": start, "end": end, "thickness": thickness})

    def horizontal_lines(self, thickness):
        return [ln for ln in self.lines
                if ln["start"][1] == ln["end"][1] and ln["thickness"] == thickness]


class RecordingCanvas(DocumentCanvas):
    def __init__(self, pagesize=(612, 792)):
        self.pagesize = pagesize
        self.pages = []
        self.page_sizes_requested = []

    def add_page(self, size=None):
        self.page_sizes_requested.append(size)
        page = RecordingPage(tuple(size) if size else self.pagesize)
        self.pages.append(page)
        return page

    def embed_font(self, bold=False):
        return FixedWidthFont("Bold" if bold else "Regular")

    def serialize(self):
        return f"recorded:{len(self.pages)}".encode()


@pytest.fixture
def make_engine():
    """Build an engine drawing onto RecordingCanvas; returns (engine, canvases)."""
    def _make(pagesize=(612, 792), **kwargs):
        canvases = []

        def factory():
            c = RecordingCanvas(pagesize)
            canvases.append(c)
            return c

        engine = TableLayoutEngine(canvas_factory=factory, clock=lambda: FIXED_NOW, **kwargs)
        return engine, canvases

    return _make


@pytest.fixture
def regular_font():
    return FixedWidthFont("Regular")
