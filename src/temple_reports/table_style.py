"""Visual style profiles for exported tables."""

from dataclasses import dataclass
from typing import Dict
from reportlab.lib.colors import Color, black, white, HexColor


@dataclass
class TableStyle:
    """Fonts, sizes and colors used when laying out a table."""
    name: str
    font_family: str  # Base font name (Helvetica, Times-Roman, Courier)
    title_font_size: int
    meta_font_size: int
    header_font_size: int
    font_size: int
    row_height: float
    header_height: float
    margin: float
    fit_padding: float  # Horizontal room reserved when fitting cell text (both sides)
    label_inset: float  # Distance of left/right aligned text from the cell edge
    title_color: Color
    meta_color: Color
    header_bg_color: Color
    header_text_color: Color
    header_line_color: Color
    text_color: Color
    column_line_color: Color
    row_line_color: Color
    header_separator_width: float = 0.3
    header_bottom_width: float = 0.6
    column_line_width: float = 0.2
    row_line_width: float = 0.3


TABLE_STYLES: Dict[str, TableStyle] = {
    # Dark header bar with hairline grid; matches the admin export pages
    "DEFAULT": TableStyle(
        name="DEFAULT",
        font_family="Helvetica",
        title_font_size=20,
        meta_font_size=10,
        header_font_size=11,
        font_size=10,
        row_height=20.0,
        header_height=24.0,
        margin=36.0,
        fit_padding=8.0,
        label_inset=6.0,
        title_color=black,
        meta_color=Color(0.25, 0.25, 0.25),
        header_bg_color=Color(0.20, 0.20, 0.20),
        header_text_color=white,
        header_line_color=black,
        text_color=black,
        column_line_color=Color(0.85, 0.85, 0.85),
        row_line_color=Color(0.75, 0.75, 0.75),
    ),
    "COMPACT": TableStyle(
        name="COMPACT",
        font_family="Helvetica",
        title_font_size=14,
        meta_font_size=8,
        header_font_size=9,
        font_size=8,
        row_height=14.0,
        header_height=18.0,
        margin=28.0,
        fit_padding=8.0,
        label_inset=4.0,
        title_color=black,
        meta_color=Color(0.25, 0.25, 0.25),
        header_bg_color=HexColor("#3182CE"),
        header_text_color=white,
        header_line_color=HexColor("#2C5282"),
        text_color=black,
        column_line_color=HexColor("#DDDDDD"),
        row_line_color=HexColor("#CCCCCC"),
    ),
    "PRINT": TableStyle(
        name="PRINT",
        font_family="Times-Roman",
        title_font_size=18,
        meta_font_size=10,
        header_font_size=11,
        font_size=10,
        row_height=18.0,
        header_height=22.0,
        margin=36.0,
        fit_padding=8.0,
        label_inset=6.0,
        title_color=black,
        meta_color=black,
        header_bg_color=HexColor("#E8E8E8"),
        header_text_color=black,
        header_line_color=black,
        text_color=black,
        column_line_color=HexColor("#999999"),
        row_line_color=HexColor("#999999"),
        header_bottom_width=1.0,
    ),
}


def get_table_style(style_name: str) -> TableStyle:
    """Get a table style by name, falling back to DEFAULT."""
    return TABLE_STYLES.get(style_name.upper(), TABLE_STYLES["DEFAULT"])


def get_bold_font(font_family: str) -> str:
    """Get the bold variant of a font family."""
    if font_family == "Times-Roman":
        return "Times-Bold"
    elif font_family == "Courier":
        return "Courier-Bold"
    else:
        return f"{font_family}-Bold"
