"""Command-line interface for exporting admin listings."""

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np
import yaml

from .config import FORMATS, ExportConfig, load_config
from .exporters import PDF_MEDIA_TYPE, ExportedDocument, cell_text, deliver, export_csv, export_json
from .layout_engine import TableLayoutEngine, page_size
from .sample_data import generate_bookings
from .table_style import get_table_style
from .table_templates import TEMPLATES, ReportTemplate, build_filename, get_template


def load_rows(path: Path) -> List[dict]:
    """
    Read row records from a JSON or CSV file.

    JSON may be a list of objects or an object with a ``rows`` list.
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("rows", [])
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a list of rows")
        return data
    if suffix == ".csv":
        with open(path, "r", encoding="utf-8", newline="") as f:
            return list(csv.DictReader(f))
    raise ValueError(f"Unsupported input file type: {path.suffix or path.name}")


def filter_rows(
    rows: List[dict],
    booking_date: Optional[str] = None,
    session: Optional[str] = None,
) -> List[dict]:
    """Keep rows booked on ``booking_date`` and in ``session``; "all" matches every session."""
    if booking_date:
        rows = [r for r in rows if cell_text(r, "date") == booking_date]
    if session and session.lower() != "all":
        rows = [r for r in rows if cell_text(r, "session") == session]
    return rows


def export_rows(
    template: ReportTemplate,
    rows: List[dict],
    config: ExportConfig,
    subtitle: Optional[str] = None,
    formats: Optional[List[str]] = None,
) -> List[ExportedDocument]:
    """Build every requested export for one listing."""
    output_name = build_filename(template, subtitle)
    documents = []
    for fmt in formats or config.formats:
        if fmt == "pdf":
            engine = TableLayoutEngine(
                style=get_table_style(config.style),
                pagesize=page_size(config.page_size, config.orientation),
                timestamp_format=config.timestamp_format,
            )
            documents.append(engine.generate(template.title, subtitle, template.columns, rows, output_name))
        elif fmt == "csv":
            documents.append(export_csv(rows, template.headers(), output_name))
        elif fmt == "json":
            documents.append(export_json(rows, output_name))
        else:
            raise ValueError(f"Unknown export format: {fmt}")
    return documents


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Export temple admin listings as PDF, CSV or JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--template",
        default="annadanam",
        help=f"Report template ({', '.join(sorted(TEMPLATES))})",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        type=Path,
        help="JSON or CSV file with the rows to export",
    )
    source.add_argument(
        "--demo",
        type=int,
        metavar="N",
        help="Export N synthetic rows instead of reading a file",
    )
    parser.add_argument(
        "--date",
        help="Only export rows booked on this date (YYYY-MM-DD); also the default subtitle",
    )
    parser.add_argument(
        "--session",
        help="Only export rows for this timing, e.g. \"12:45 PM - 1:30 PM\" (\"all\" for every timing)",
    )
    parser.add_argument(
        "--subtitle",
        help="Qualifier shown after the title and appended to file names (defaults to --date)",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS + ["all"],
        help="Export format (overrides config)",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        help="Output directory (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for --demo (overrides config)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log page breaks and written files",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Load config
    try:
        config = load_config(args.config)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        parser.error(f"Could not load config: {e}")

    # Override with CLI args
    if args.out_dir:
        config.out_dir = args.out_dir
    if args.seed is not None:
        config.seed = args.seed
    if args.format:
        config.formats = list(FORMATS) if args.format == "all" else [args.format]

    try:
        template = get_template(args.template)
    except KeyError as e:
        parser.error(e.args[0])

    if args.demo is not None:
        rng = np.random.default_rng(config.seed)
        rows = generate_bookings(template, args.demo, rng, config.sample_start, config.sample_days)
    else:
        try:
            rows = load_rows(args.input)
        except (OSError, ValueError) as e:
            parser.error(str(e))

    rows = filter_rows(rows, args.date, args.session)
    if not rows:
        print("Nothing to export: no rows found.", file=sys.stderr)
        return 1

    documents = export_rows(template, rows, config, args.subtitle or args.date)

    print(f"Exporting {template.title} ({len(rows)} rows)")
    for document in documents:
        path = deliver(document, config.out_dir)
        if document.media_type == PDF_MEDIA_TYPE:
            print(f"  {path} ({document.page_count} page(s))")
        else:
            print(f"  {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
