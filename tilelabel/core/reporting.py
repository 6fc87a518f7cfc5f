# tilelabel/core/reporting.py
"""
Create reports/<run_name>/ and write anchors.json.
"""

from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from tilelabel.core.config import ANCHORS_SCHEMA_VERSION, REPORTS_DIR
from tilelabel.core.types import Anchor


def anchor_to_dict(anchor: Anchor) -> dict:
    return {
        "x": anchor.x,
        "y": anchor.y,
        "angle_rad": anchor.angle,
        "angle_deg": math.degrees(anchor.angle),
        "segment": anchor.segment,
    }


def anchors_to_dict(
    anchors_per_line: Sequence[Sequence[Anchor]],
    geometry_source: str,
    parameters: dict,
) -> dict:
    """JSON-ready structure: one anchor list per input line, plus run parameters."""
    return {
        "schema_version": ANCHORS_SCHEMA_VERSION,
        "input": {"geometry_source": geometry_source},
        "parameters": dict(parameters),
        "lines": [
            {"line_index": i, "anchors": [anchor_to_dict(a) for a in anchors]}
            for i, anchors in enumerate(anchors_per_line)
        ],
        "anchor_count": sum(len(a) for a in anchors_per_line),
        "created_at": datetime.now(timezone.utc).isoformat(),
    }


def ensure_report_dir(repo_root: Path, run_name: str, reports_dir: str = REPORTS_DIR) -> Path:
    """Create reports/<run_name>/ under repo_root and return it."""
    out = (repo_root / reports_dir / run_name).resolve()
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_anchors_json(report_dir: Path, payload: dict) -> Path:
    """Write anchors.json into report_dir."""
    path = report_dir / "anchors.json"
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path
