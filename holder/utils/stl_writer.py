# utils/stl_writer.py
# Rasterizes a solid at a fixed resolution and writes it as binary STL.
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

import manifold3d
import numpy as np
import shapely
from shapely import geometry as sg
from trimesh.voxel import ops

from .geo import Solid

logger = logging.getLogger(__name__)


class ExportError(RuntimeError):
    """The solid could not be rendered or written."""


def _manifold(solid: Solid) -> manifold3d.Manifold:
    m = manifold3d.Manifold(
        mesh=manifold3d.Mesh(
            vert_properties=np.array(solid.vertices, dtype=np.float32),
            tri_verts=np.array(solid.faces, dtype=np.uint32),
        )
    )
    if m.status() != manifold3d.Error.NoError or m.is_empty():
        raise ExportError(f"solid is not a closed manifold ({m.status()})")
    return m


def _layer(m: manifold3d.Manifold, z: float, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    # contours of a slice are disjoint and nested, so even-odd over all of
    # them gives the material region
    inside = np.zeros(xs.shape, dtype=bool)
    for contour in m.slice(z).to_polygons():
        if len(contour) < 3:
            continue
        outline = sg.Polygon(contour)
        shapely.prepare(outline)
        inside ^= shapely.contains_xy(outline, xs, ys)
    return inside


def render(solid: Solid, resolution: int) -> Solid:
    """Re-mesh `solid` on a voxel grid with `resolution` cells on its longest axis.

    A cell is filled when its center lies inside the solid. The grid is
    filled one Z layer at a time from planar slices, so memory stays at the
    size of the occupancy grid. The surface is extracted with marching cubes,
    so the output is the same kind of mesh an SDF renderer produces and its
    triangle count depends only on the geometry and the resolution.
    """
    if int(resolution) <= 0:
        raise ExportError(f"resolution must be positive, got {resolution}")
    if solid.is_empty:
        raise ExportError("cannot render an empty solid")

    m = _manifold(solid)
    lo = np.asarray(solid.bounds[0], dtype=float)
    extents = np.asarray(solid.extents, dtype=float)
    pitch = float(np.max(extents)) / int(resolution)
    counts = np.maximum(np.ceil(extents / pitch - 1e-9).astype(int), 1)
    xs, ys, zs = (lo[i] + (np.arange(counts[i]) + 0.5) * pitch for i in range(3))
    gx, gy = np.meshgrid(xs, ys, indexing="ij")

    occupancy = np.zeros(tuple(counts), dtype=bool)
    for k, z in enumerate(zs):
        occupancy[:, :, k] = _layer(m, float(z), gx, gy)

    try:
        mesh = ops.matrix_to_marching_cubes(occupancy, pitch=pitch)
    except (ValueError, RuntimeError, MemoryError) as e:
        raise ExportError(f"rendering failed: {e}") from e
    # marching cubes puts cell (0, 0, 0) at the origin
    mesh.apply_translation(lo + pitch / 2.0)
    if mesh.is_empty:
        raise ExportError("rendering produced an empty mesh")

    logger.debug("rendered %d triangles on a %s grid at pitch %.4f",
                 len(mesh.faces), tuple(counts), pitch)
    return mesh


def mesh_to_stl_bytes(solid: Solid, resolution: Optional[int] = None) -> bytes:
    mesh = solid if resolution is None else render(solid, resolution)
    if mesh.is_empty:
        raise ExportError("cannot export an empty solid")
    return mesh.export(file_type="stl")


def render_stl(solid: Solid, resolution: int, path: Union[str, os.PathLike]) -> Path:
    """Render `solid` and write it to `path`; nothing is left behind on failure."""
    out = Path(path)
    data = render(solid, resolution).export(file_type="stl")
    try:
        with open(out, "wb") as f:
            f.write(data)
    except OSError as e:
        if out.is_file():
            out.unlink()
        raise ExportError(f"cannot write {out}: {e}") from e
    logger.info("wrote %s (%d bytes)", out, len(data))
    return out
