from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import trimesh
from shapely import geometry as sg

Solid = trimesh.Trimesh
Vec3 = Tuple[float, float, float]

# segments used for circular edges; multiple of 4 so that the extreme points
# on X and Y are real vertices and bounding boxes stay exact
SEGMENTS = 64
ENGINE = "manifold"


class GeometryError(ValueError):
    """A solid could not be constructed or combined."""


class DimensionError(GeometryError):
    """A primitive was asked for a non-positive or inconsistent dimension."""


class PolygonError(GeometryError):
    """A polygon outline is degenerate, open or self-intersecting."""


# ---------------------- Primitives ----------------------

def _positive(name: str, value: float) -> float:
    v = float(value)
    if not v > 0.0:
        raise DimensionError(f"{name} must be positive, got {value}")
    return v


def _rounding(value: float) -> float:
    r = float(value or 0.0)
    if r < 0.0:
        raise DimensionError(f"rounding radius must not be negative, got {value}")
    return r


def _sphere_directions(sections: int) -> np.ndarray:
    # longitudes at k*2pi/sections, latitudes from pole to pole through the equator
    lon = np.arange(sections) * (2.0 * math.pi / sections)
    lat = np.linspace(-math.pi / 2, math.pi / 2, sections // 2 + 1)
    lo, la = np.meshgrid(lon, lat)
    return np.column_stack([
        (np.cos(la) * np.cos(lo)).ravel(),
        (np.cos(la) * np.sin(lo)).ravel(),
        np.sin(la).ravel(),
    ])


def box(size: Sequence[float], rounding: float = 0.0) -> Solid:
    """Box centered at the origin with bounding box exactly `size`.

    With `rounding > 0` every edge is rounded with that radius; the result is
    the convex hull of eight corner spheres, so the extents are unchanged.
    A radius larger than half an extent is clamped on that axis only.
    """
    sx, sy, sz = (_positive(axis, v) for axis, v in zip("xyz", size))
    r = _rounding(rounding)
    if r == 0.0:
        return trimesh.creation.box(extents=(sx, sy, sz))

    half = np.array([sx, sy, sz]) / 2.0
    radii = np.minimum(r, half)
    dirs = _sphere_directions(SEGMENTS // 2) * radii
    points = [dirs + (half - radii) * np.array(corner)
              for corner in np.array(np.meshgrid([-1, 1], [-1, 1], [-1, 1])).T.reshape(-1, 3)]
    return trimesh.convex.convex_hull(np.vstack(points))


def cylinder(height: float, radius: float, rounding: float = 0.0) -> Solid:
    """Cylinder along Z, centered at the origin."""
    h = _positive("height", height)
    r = _positive("radius", radius)
    rr = _rounding(rounding)
    if rr == 0.0:
        return trimesh.creation.cylinder(radius=r, height=h, sections=SEGMENTS)

    rr_r, rr_z = min(rr, r), min(rr, h / 2.0)
    lon = np.arange(SEGMENTS) * (2.0 * math.pi / SEGMENTS)
    arc = np.linspace(0.0, math.pi / 2, SEGMENTS // 8 + 1)
    points = []
    for sign in (-1.0, 1.0):
        for b in arc:
            radial = r - rr_r + rr_r * math.cos(b)
            z = sign * (h / 2.0 - rr_z + rr_z * math.sin(b))
            points.append(np.column_stack([
                radial * np.cos(lon), radial * np.sin(lon), np.full(lon.shape, z)]))
    return trimesh.convex.convex_hull(np.vstack(points))


class Polygon:
    """Outline builder: add vertices in order, then close."""

    def __init__(self) -> None:
        self._points: List[Tuple[float, float]] = []
        self.closed = False

    def add(self, x: float, y: float) -> "Polygon":
        if self.closed:
            raise PolygonError("cannot add a vertex to a closed polygon")
        self._points.append((float(x), float(y)))
        return self

    def close(self) -> "Polygon":
        self.closed = True
        return self

    def vertices(self) -> List[Tuple[float, float]]:
        if not self.closed:
            raise PolygonError("polygon is not closed")
        return list(self._points)


def extrude_polygon(vertices: Iterable[Sequence[float]], height: float) -> Solid:
    """Prism along Z with cross-section `vertices`, centered in Z at the origin."""
    pts = [(float(p[0]), float(p[1])) for p in vertices]
    if len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    if len(pts) < 3:
        raise PolygonError(f"polygon needs at least 3 vertices, got {len(pts)}")
    h = _positive("height", height)

    outline = sg.Polygon(pts)
    if not outline.is_valid:
        raise PolygonError("polygon outline is self-intersecting")
    if outline.area <= 0.0:
        raise PolygonError("polygon outline has zero area")

    solid = trimesh.creation.extrude_polygon(outline, height=h)
    solid.apply_translation((0.0, 0.0, -h / 2.0))
    return solid


# ---------------------- Transforms ----------------------

def translate(v: Sequence[float]) -> np.ndarray:
    return trimesh.transformations.translation_matrix([float(c) for c in v])


def rotate_x(deg: float) -> np.ndarray:
    return trimesh.transformations.rotation_matrix(math.radians(deg), (1, 0, 0))


def rotate_y(deg: float) -> np.ndarray:
    return trimesh.transformations.rotation_matrix(math.radians(deg), (0, 1, 0))


def rotate_z(deg: float) -> np.ndarray:
    return trimesh.transformations.rotation_matrix(math.radians(deg), (0, 0, 1))


def transform(solid: Solid, matrix: np.ndarray) -> Solid:
    out = solid.copy()
    out.apply_transform(matrix)
    return out


def move(solid: Solid, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Solid:
    return transform(solid, translate((x, y, z)))


def scale(solid: Solid, factor: float) -> Solid:
    f = _positive("scale factor", factor)
    out = solid.copy()
    out.apply_scale(f)
    return out


# ---------------------- Queries ----------------------

def bounds(solid: Solid) -> np.ndarray:
    if solid.is_empty:
        raise GeometryError("empty solid has no bounding box")
    return np.asarray(solid.bounds, dtype=float)


def size(solid: Solid) -> np.ndarray:
    b = bounds(solid)
    return b[1] - b[0]


# ---------------------- Booleans ----------------------

def union(*solids: Solid) -> Solid:
    if not solids:
        raise GeometryError("union needs at least one solid")
    if len(solids) == 1:
        return solids[0].copy()
    try:
        return trimesh.boolean.union(list(solids), engine=ENGINE)
    except (ValueError, RuntimeError) as e:
        raise GeometryError(f"union failed: {e}") from e


def difference(a: Solid, *cutters: Solid) -> Solid:
    if not cutters:
        return a.copy()
    try:
        return trimesh.boolean.difference([a, *cutters], engine=ENGINE)
    except (ValueError, RuntimeError) as e:
        raise GeometryError(f"difference failed: {e}") from e


__all__ = [
    "Solid", "Vec3", "GeometryError", "DimensionError", "PolygonError",
    "box", "cylinder", "Polygon", "extrude_polygon",
    "translate", "rotate_x", "rotate_y", "rotate_z", "transform", "move", "scale",
    "bounds", "size", "union", "difference",
]
