# tilelabel/core/runner.py
"""
CLI entrypoint: load WKT lines, shape the label, place anchors per line, export anchors.json.
Usage: python -m tilelabel.core.runner --geometry lines.wkt --text "Main St"
"""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

from tilelabel.core.anchors import get_anchors, get_center_anchor
from tilelabel.core.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_GLYPH_SIZE,
    DEFAULT_MAX_ANGLE_DEG,
    DEFAULT_OVERSCALING,
    DEFAULT_SPACING,
    DEFAULT_TEXT_SIZE_PT,
    DEFAULT_TILE_EXTENT,
    LOG_LEVEL,
    REPORTS_DIR,
)
from tilelabel.core.io import load_lines
from tilelabel.core.reporting import anchors_to_dict, ensure_report_dir, write_anchors_json
from tilelabel.core.text_metrics import shape_label
from tilelabel.core.types import ShapedLabel

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Place repeated label anchors along WKT lines.")
    p.add_argument("--geometry", type=str, required=True, help="Line WKT path")
    p.add_argument("--text", type=str, default="", help="Label text (empty: icon-only / no angle check)")
    p.add_argument("--icon-width", type=float, default=0.0, dest="icon_width", help="Icon width (glyph units)")
    p.add_argument("--font-family", type=str, default=DEFAULT_FONT_FAMILY, dest="font_family", help="Font family")
    p.add_argument("--text-size", type=float, default=DEFAULT_TEXT_SIZE_PT, dest="text_size", help="Text size")
    p.add_argument("--glyph-size", type=float, default=DEFAULT_GLYPH_SIZE, dest="glyph_size", help="Glyph em size")
    p.add_argument("--spacing", type=float, default=DEFAULT_SPACING, help="Label spacing (tile units)")
    p.add_argument("--max-angle", type=float, default=DEFAULT_MAX_ANGLE_DEG, dest="max_angle", help="Max bend (deg)")
    p.add_argument("--overscaling", type=float, default=DEFAULT_OVERSCALING, help="Tile overscale factor")
    p.add_argument("--tile-extent", type=float, default=DEFAULT_TILE_EXTENT, dest="tile_extent", help="Tile extent")
    p.add_argument("--center", action="store_true", help="Place a single center anchor per line")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> Path:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    lines = load_lines(args.geometry, repo_root=repo_root)
    # Shape at glyph size; box_scale maps glyph units to the requested text size
    shaped_text = shape_label(args.text, args.font_family, args.glyph_size)
    shaped_icon = None
    if args.icon_width > 0:
        shaped_icon = ShapedLabel(left=-args.icon_width / 2, right=args.icon_width / 2)
    box_scale = args.text_size / args.glyph_size
    max_angle = math.radians(args.max_angle)

    anchors_per_line = []
    for line in lines:
        if args.center:
            anchor = get_center_anchor(line, max_angle, shaped_text, shaped_icon, args.glyph_size, box_scale)
            anchors_per_line.append([anchor] if anchor is not None else [])
        else:
            anchors_per_line.append(
                get_anchors(
                    line,
                    args.spacing,
                    max_angle,
                    shaped_text,
                    shaped_icon,
                    args.glyph_size,
                    box_scale,
                    args.overscaling,
                    args.tile_extent,
                )
            )

    payload = anchors_to_dict(
        anchors_per_line,
        geometry_source=args.geometry,
        parameters={
            "text": args.text,
            "text_size": args.text_size,
            "glyph_size": args.glyph_size,
            "spacing": args.spacing,
            "max_angle_deg": args.max_angle,
            "overscaling": args.overscaling,
            "tile_extent": args.tile_extent,
            "center": args.center,
        },
    )
    report_dir = ensure_report_dir(repo_root, args.run_name, reports_dir=args.output_dir)
    out_path = write_anchors_json(report_dir, payload)
    logger.info("Placed %d anchor(s) on %d line(s) -> %s", payload["anchor_count"], len(lines), out_path)
    return out_path


if __name__ == "__main__":
    main()
