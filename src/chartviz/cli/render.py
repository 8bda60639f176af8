"""Headless render CLI.

Renders a CSV file straight to PNG, JPEG or PDF without opening the editor,
using the same parser, configuration clamping, chart description and
matplotlib backend as the GUI.

Exit codes: 0 on success, 1 when drawing or the export fails, 2 when the input
cannot be read or an option is invalid.

Example:
  chartviz-render sales.csv -o sales.png --kind line --title "Sales" --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict

from chartviz.config import settings
from chartviz.domain.errors import ConfigurationError
from chartviz.domain.models import ChartKind, LineStyle
from chartviz.domain.state import ChartState
from chartviz.gui.charting import MatplotlibChartBackend, describe
from chartviz.gui.services.export_service import ExportFormat, ExportService
from chartviz.gui.services.file_dialogs import read_text_file
from chartviz.parsing import ParseMode, parse_with_stats

log = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render CSV data to a chart image or PDF")
    p.add_argument("input", help="CSV file (first row is a header)")
    p.add_argument("-o", "--output", required=True, help="Destination file path")
    p.add_argument(
        "--format",
        choices=[f.value for f in ExportFormat],
        default=None,
        help="Output format (default: inferred from the output extension, else png)",
    )
    p.add_argument("--mode", choices=[m.value for m in ParseMode], default=ParseMode.MULTI.value)
    p.add_argument("--kind", choices=[k.value for k in ChartKind], default=ChartKind.BAR.value)
    p.add_argument("--line-style", choices=[s.value for s in LineStyle], default=None)
    p.add_argument("--title", default=None)
    p.add_argument("--x-label", default=None)
    p.add_argument("--y-label", default=None)
    p.add_argument("--color", default=None, help="Primary color as #rrggbb")
    p.add_argument("--opacity", type=float, default=None)
    p.add_argument("--bar-width", type=float, default=None)
    p.add_argument("--corner-radius", type=float, default=None)
    p.add_argument("--horizontal", action="store_true", help="Horizontal bars")
    p.add_argument("--no-legend", action="store_true")
    p.add_argument("--hide-x-axis", action="store_true")
    p.add_argument("--hide-y-axis", action="store_true")
    p.add_argument("--dpi", type=int, default=settings.EXPORT_DPI)
    p.add_argument("--json", action="store_true", help="Emit a JSON summary")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    return p.parse_args(argv)


def _infer_format(output: str, explicit: str | None) -> ExportFormat:
    if explicit:
        return ExportFormat(explicit)
    suffix = output.rsplit(".", 1)[-1].lower() if "." in output else ""
    if suffix in ("jpg", "jpeg"):
        return ExportFormat.JPEG
    if suffix == "pdf":
        return ExportFormat.PDF
    return ExportFormat.PNG


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    values: Dict[str, Any] = {
        "chart_kind": args.kind,
        "title": args.title,
        "x_axis_label": args.x_label,
        "y_axis_label": args.y_label,
        "primary_color": args.color,
        "opacity": args.opacity,
        "bar_width": args.bar_width,
        "corner_radius": args.corner_radius,
        "line_style": args.line_style,
    }
    values = {k: v for k, v in values.items() if v is not None}
    if args.horizontal:
        values["orientation"] = "horizontal"
    if args.no_legend:
        values["show_legend"] = False
    if args.hide_x_axis:
        values["show_x_axis"] = False
    if args.hide_y_axis:
        values["show_y_axis"] = False
    return values


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )
    text = read_text_file(args.input)
    if text is None:
        print(f"Could not read input file: {args.input}", file=sys.stderr)
        return 2

    state = ChartState()
    try:
        state.update(**_overrides(args))
    except ConfigurationError as exc:
        print(f"Invalid option: {exc}", file=sys.stderr)
        return 2
    points, stats = parse_with_stats(text, args.mode)
    state.replace_points(points)
    log.debug("Parsed %d points from %s (%s mode)", len(points), args.input, args.mode)

    backend = MatplotlibChartBackend()
    try:
        result = backend.draw(describe(state.snapshot()))
    except ValueError as exc:
        print(f"Rendering failed: {exc}", file=sys.stderr)
        return 1
    fmt = _infer_format(args.output, args.format)
    outcome = ExportService(dpi=args.dpi).export(result.figure, args.output, fmt)

    summary = {
        "points": len(points),
        "series": len(state.series_names),
        "skipped_rows": stats.skipped_rows,
        "skipped_fields": stats.skipped_fields,
        "format": fmt.value,
        "output": outcome.path,
        "ok": outcome.ok,
        "error": outcome.error.value if outcome.error else None,
    }
    if args.json:
        print(json.dumps(summary, ensure_ascii=False, indent=2))
    elif outcome.ok:
        print(f"Wrote {summary['points']} points ({summary['series']} series) to {outcome.path}")
    else:
        print(f"Export failed ({summary['error']}): {outcome.detail}", file=sys.stderr)
    return 0 if outcome.ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
