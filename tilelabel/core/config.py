# tilelabel/core/config.py
"""
Central configuration for line label anchor placement and spline fitting.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Tile -----
DEFAULT_TILE_EXTENT: int = 8192
"""Side length of the tile-local coordinate square."""

# ----- Layout defaults -----
DEFAULT_SPACING: float = 250.0
"""Requested distance between repeated labels along a line (tile units)."""

DEFAULT_MAX_ANGLE_DEG: float = 45.0
"""Maximum summed bend inside one angle window, in degrees."""

DEFAULT_GLYPH_SIZE: float = 24.0
"""Em size of shaped glyphs; box_scale = text_size / glyph_size."""

DEFAULT_TEXT_SIZE_PT: float = 16.0
DEFAULT_OVERSCALING: float = 1.0

DEFAULT_FONT_FAMILY: str = "DejaVu Sans"

# ----- Anchor resampling -----
ANGLE_WINDOW_GLYPH_RATIO: float = 3.0 / 5.0
"""Angle window size = ratio * glyph_size * box_scale (text labels only)."""

FIXED_EXTRA_OFFSET_GLYPHS: float = 2.0
"""Extra offset (in glyphs) for lines that start inside the tile; avoids T intersections."""

SUBSPACING_RATIO: float = 0.25
"""Sampling step along the line as a fraction of spacing."""

MIN_LABEL_GAP_RATIO: float = 0.25
"""Minimum gap between label edges as a fraction of spacing."""

SPACING_EPSILON: float = 1e-5
"""Tolerance subtracted from spacing before the too-close check."""

MAX_SPACING_FACTOR: float = 2.0
"""Pending best candidate is committed once the gap reaches factor * spacing."""

# ----- Curved glyph placement -----
CURVE_SAMPLE_STEP: float = 4.0
"""Arc-length step when resampling a spline-smoothed line."""

CURVE_MIN_SEGMENT_LENGTH: float = 1e-9
"""Segments shorter than this are dropped before fitting arc-length splines."""

# ----- Reporting -----
ANCHORS_SCHEMA_VERSION: str = "1.0"

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Log level for the CLI. Set env LOG_LEVEL=DEBUG for development."""
