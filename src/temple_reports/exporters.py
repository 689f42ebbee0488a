"""CSV and JSON exports, and delivery of finished exports to disk."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Sequence

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
JSON_MEDIA_TYPE = "application/json"


@dataclass
class ExportedDocument:
    """A finished export ready to hand to the user."""
    filename: str
    content: bytes
    media_type: str
    row_count: int
    page_count: int = 1


def ensure_extension(name: str, extension: str) -> str:
    """Append ``extension`` (e.g. ``.pdf``) unless ``name`` already ends with it."""
    return name if name.endswith(extension) else f"{name}{extension}"


def cell_text(row: Mapping[str, Any], key: str) -> str:
    """Display text for one field; missing and None become empty."""
    value = row.get(key)
    if value is None:
        return ""
    return str(value)


def csv_field(value: str) -> str:
    """Quote a field holding a quote, comma or newline; double inner quotes."""
    if any(ch in value for ch in '",\n'):
        return '"' + value.replace('"', '""') + '"'
    return value


def rows_to_csv(rows: Sequence[Mapping[str, Any]], headers: List[str]) -> str:
    """
    Render rows as CSV text.

    Empty fields stay empty, so a one-column row with no value is an empty
    line. Lines are joined with ``\\n`` and there is no trailing newline.
    """
    lines = [",".join(csv_field(h) for h in headers)]
    for row in rows:
        lines.append(",".join(csv_field(cell_text(row, h)) for h in headers))
    return "\n".join(lines)


def rows_to_json(rows: Any) -> str:
    """Render rows as indented JSON."""
    return json.dumps(rows, indent=2, ensure_ascii=False, default=str)


def export_csv(rows: Sequence[Mapping[str, Any]], headers: List[str], output_name: str) -> ExportedDocument:
    """Build a CSV export of ``rows``."""
    text = rows_to_csv(rows, headers)
    return ExportedDocument(
        filename=ensure_extension(output_name, ".csv"),
        content=text.encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        row_count=len(rows),
    )


def export_json(rows: Sequence[Mapping[str, Any]], output_name: str) -> ExportedDocument:
    """Build a JSON export of ``rows``."""
    text = rows_to_json(list(rows))
    return ExportedDocument(
        filename=ensure_extension(output_name, ".json"),
        content=text.encode("utf-8"),
        media_type=JSON_MEDIA_TYPE,
        row_count=len(rows),
    )


def deliver(document: ExportedDocument, out_dir: Path) -> Path:
    """Write an export to ``out_dir`` under its suggested file name."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / document.filename
    with open(path, "wb") as f:
        f.write(document.content)
    logger.info("Wrote %s (%d bytes, %d rows)", path, len(document.content), document.row_count)
    return path
