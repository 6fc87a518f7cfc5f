# tilelabel/core/io.py
"""
Load line features from WKT.
Supports LineString, MultiLineString, GeometryCollection (lines extracted).
"""

from __future__ import annotations

from pathlib import Path

from shapely import wkt
from shapely.geometry import GeometryCollection, LineString, MultiLineString
from shapely.geometry.base import BaseGeometry

from tilelabel.core.error_codes import NO_LINE_GEOMETRY, user_message


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def load_wkt(path: str | Path, repo_root: Path | None = None) -> str:
    """Read WKT string from a file."""
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Geometry file not found: {resolved}")
    return resolved.read_text(encoding="utf-8").strip()


def _first_wkt_only(wkt_string: str) -> str:
    """Return the first complete WKT geometry, stripping trailing text."""
    s = wkt_string.strip()
    for prefix in ("MULTILINESTRING", "LINESTRING", "GEOMETRYCOLLECTION"):
        if s.upper().startswith(prefix):
            depth = 0
            for i in range(len(prefix), len(s)):
                c = s[i]
                if c == "(":
                    depth += 1
                elif c == ")":
                    depth -= 1
                    if depth == 0:
                        return s[: i + 1].strip()
            break
    return s


def parse_wkt(wkt_string: str) -> BaseGeometry:
    """Parse WKT into a Shapely geometry; only the first geometry is parsed."""
    return wkt.loads(_first_wkt_only(wkt_string))


def extract_lines(geom: BaseGeometry) -> list[list[tuple[float, float]]]:
    """All line parts as coordinate lists; parts with fewer than two points are dropped."""
    if geom is None or geom.is_empty:
        return []
    if isinstance(geom, LineString):
        coords = [(float(c[0]), float(c[1])) for c in geom.coords]
        return [coords] if len(coords) >= 2 else []
    if isinstance(geom, (MultiLineString, GeometryCollection)):
        out: list[list[tuple[float, float]]] = []
        for g in geom.geoms:
            out.extend(extract_lines(g))
        return out
    return []


def load_lines(path: str | Path, repo_root: Path | None = None) -> list[list[tuple[float, float]]]:
    """
    Load WKT from file and return its line parts.
    Raises FileNotFoundError if path is missing, ValueError if it holds no lines.
    """
    lines = extract_lines(parse_wkt(load_wkt(path, repo_root)))
    if not lines:
        raise ValueError(user_message(NO_LINE_GEOMETRY))
    return lines
