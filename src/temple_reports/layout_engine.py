"""Layout engine for paginated table exports."""

import logging
import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from reportlab.lib.pagesizes import LETTER, A4, landscape

from .canvas_backend import DocumentCanvas, FontHandle, Page, ReportLabCanvas
from .exporters import PDF_MEDIA_TYPE, ExportedDocument, cell_text, ensure_extension
from .table_style import TableStyle, get_table_style
from .table_templates import Alignment, ColumnSpec

logger = logging.getLogger(__name__)


# Page dimensions
PORTRAIT_SIZE = LETTER  # 612 x 792 points
LANDSCAPE_SIZE = landscape(LETTER)  # 792 x 612 points
PAGE_SIZES = {"letter": LETTER, "a4": A4}

MIN_COLUMN_WIDTH = 40
ELLIPSIS = "…"
TITLE_SEPARATOR = " — "
DEFAULT_TIMESTAMP_FORMAT = "%m/%d/%Y, %I:%M:%S %p"


def page_size(name: str = "letter", orientation: str = "portrait") -> Tuple[float, float]:
    """Resolve a named paper size and orientation to (width, height)."""
    size = PAGE_SIZES[name.lower()]
    return landscape(size) if orientation.lower() == "landscape" else size


@dataclass(frozen=True)
class ScaledColumn:
    """A column with its width fitted to the page."""
    key: str
    label: str
    width: float
    alignment: Alignment
    requested_width: float


@dataclass(frozen=True)
class PageState:
    """The page being drawn and the baseline of the next row."""
    page: Page
    width: float
    height: float
    y: float

    def advance(self, row_height: float) -> "PageState":
        return replace(self, y=self.y - row_height)


@dataclass(frozen=True)
class TableRun:
    """Everything fixed for one generation: header text, columns and fonts."""
    heading: str
    meta: str
    columns: Tuple[ScaledColumn, ...]
    regular: FontHandle
    bold: FontHandle

    @property
    def width(self) -> float:
        return sum(c.width for c in self.columns)


def scale_columns(columns: Sequence[ColumnSpec], available_width: float) -> List[ScaledColumn]:
    """
    Shrink columns proportionally when they exceed ``available_width``.

    Each scaled width is floored and never drops below MIN_COLUMN_WIDTH, so
    many narrow columns may still overflow the available width.
    """
    requested_total = sum(c.width for c in columns)
    scale = None
    if requested_total > available_width:
        scale = available_width / requested_total

    scaled = []
    for c in columns:
        width = c.width
        if scale is not None:
            width = max(MIN_COLUMN_WIDTH, math.floor(c.width * scale))
        scaled.append(ScaledColumn(
            key=c.key,
            label=c.label,
            width=width,
            alignment=c.alignment,
            requested_width=c.width,
        ))
    return scaled


def fit_text(text: str, cell_width: float, font: FontHandle, size: float, padding: float = 8) -> str:
    """Truncate text with a trailing ellipsis so it fits inside a cell.

    Binary-searches the longest prefix whose width plus the ellipsis fits
    ``cell_width - padding``. If nothing fits, only the ellipsis is returned.
    """
    limit = cell_width - padding
    if font.measure_width(text, size) <= limit:
        return text

    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if font.measure_width(text[:mid] + ELLIPSIS, size) <= limit:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo] + ELLIPSIS


def aligned_x(x: float, width: float, text: str, alignment: Alignment,
              font: FontHandle, size: float, inset: float) -> float:
    """Left edge for drawing ``text`` inside the cell starting at ``x``."""
    if alignment == Alignment.CENTER:
        return x + (width - font.measure_width(text, size)) / 2
    if alignment == Alignment.RIGHT:
        return x + width - font.measure_width(text, size) - inset
    return x + inset


class TableLayoutEngine:
    """Lays out a titled table over as many pages as the rows need."""

    def __init__(
        self,
        style: Optional[TableStyle] = None,
        pagesize: Tuple[float, float] = PORTRAIT_SIZE,
        canvas_factory: Optional[Callable[[], DocumentCanvas]] = None,
        clock: Callable[[], datetime] = datetime.now,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ):
        self.style = style or get_table_style("DEFAULT")
        self.pagesize = pagesize
        self.canvas_factory = canvas_factory or self._reportlab_canvas
        self.clock = clock
        self.timestamp_format = timestamp_format

    def _reportlab_canvas(self) -> DocumentCanvas:
        return ReportLabCanvas(pagesize=self.pagesize, font_family=self.style.font_family)

    def generate(
        self,
        title: str,
        subtitle: Optional[str],
        columns: Sequence[ColumnSpec],
        rows: Sequence[Mapping[str, Any]],
        output_name: str,
    ) -> ExportedDocument:
        """
        Render ``rows`` as a paginated PDF table.

        Args:
            title: Report title drawn on every page
            subtitle: Optional qualifier appended to the title
            columns: Column specification, left to right
            rows: Row records keyed by column key
            output_name: Suggested file name; ``.pdf`` is appended if missing

        Returns:
            ExportedDocument holding the serialized PDF
        """
        style = self.style
        rows = list(rows)
        document = self.canvas_factory()
        first_page = document.add_page()
        width, _ = first_page.size()
        run = TableRun(
            heading=f"{title}{TITLE_SEPARATOR}{subtitle}" if subtitle else title,
            meta=f"Exported: {self.clock().strftime(self.timestamp_format)}  |  Total: {len(rows)}",
            columns=tuple(scale_columns(columns, width - 2 * style.margin)),
            regular=document.embed_font(),
            bold=document.embed_font(bold=True),
        )

        state = self.start_page(first_page, run)
        page_count = 1
        for index, row in enumerate(rows):
            if not self.row_fits(state):
                state = self.start_page(document.add_page((state.width, state.height)), run)
                page_count += 1
                logger.debug("Page break before row %d of %d", index + 1, len(rows))
            state = self.draw_row(state, row, run)

        content = document.serialize()
        filename = ensure_extension(output_name, ".pdf")
        logger.info("Rendered %s: %d rows on %d page(s)", filename, len(rows), page_count)
        return ExportedDocument(
            filename=filename,
            content=content,
            media_type=PDF_MEDIA_TYPE,
            row_count=len(rows),
            page_count=page_count,
        )

    def row_fits(self, state: PageState) -> bool:
        """Check if one more row fits above the bottom margin."""
        return state.y >= self.style.margin + self.style.row_height

    def start_page(self, page: Page, run: TableRun) -> PageState:
        """Draw the header block on a fresh page and return its state."""
        width, height = page.size()
        y = self.draw_header(page, height - self.style.margin, run)
        return PageState(page=page, width=width, height=height, y=y)

    def draw_header(self, page: Page, top: float, run: TableRun) -> float:
        """
        Draw title, meta line and the column header bar.

        Returns the baseline of the first row below the bar.
        """
        style = self.style
        margin = style.margin

        page.draw_text(run.heading, x=margin, y=top - style.title_font_size,
                       size=style.title_font_size, font=run.bold, color=style.title_color)
        y = top - style.title_font_size - 6
        page.draw_text(run.meta, x=margin, y=y - style.meta_font_size,
                       size=style.meta_font_size, font=run.regular, color=style.meta_color)
        y -= style.meta_font_size + 10

        bar_y = y - style.header_height
        page.draw_rectangle(x=margin, y=bar_y, width=run.width,
                            height=style.header_height, color=style.header_bg_color)

        label_y = bar_y + (style.header_height - style.header_font_size) / 2 + 2
        x = margin
        for column in run.columns:
            draw_x = aligned_x(x, column.width, column.label, column.alignment,
                               run.bold, style.header_font_size, style.label_inset)
            page.draw_text(column.label, x=draw_x, y=label_y, size=style.header_font_size,
                           font=run.bold, color=style.header_text_color)
            page.draw_line((x, bar_y), (x, bar_y + style.header_height),
                           thickness=style.header_separator_width, color=style.header_line_color)
            x += column.width

        page.draw_line((x, bar_y), (x, bar_y + style.header_height),
                       thickness=style.header_separator_width, color=style.header_line_color)
        page.draw_line((margin, bar_y), (x, bar_y),
                       thickness=style.header_bottom_width, color=style.header_line_color)

        return bar_y - 8

    def draw_row(self, state: PageState, row: Mapping[str, Any], run: TableRun) -> PageState:
        """Draw one row at the state's baseline and move the cursor down."""
        style = self.style
        page, y = state.page, state.y
        font, size = run.regular, style.font_size

        x = style.margin
        for column in run.columns:
            content = fit_text(cell_text(row, column.key), column.width, font, size, style.fit_padding)
            draw_x = aligned_x(x, column.width, content, column.alignment, font, size, style.label_inset)
            page.draw_text(content, x=draw_x, y=y, size=size, font=font, color=style.text_color)
            page.draw_line((x, y - 6), (x, y + 14),
                           thickness=style.column_line_width, color=style.column_line_color)
            x += column.width

        page.draw_line((x, y - 6), (x, y + 14),
                       thickness=style.column_line_width, color=style.column_line_color)
        page.draw_line((style.margin, y - 6), (x, y - 6),
                       thickness=style.row_line_width, color=style.row_line_color)

        return state.advance(style.row_height)
