import numpy as np
import pytest
import trimesh

from holder.models import holder
from holder.utils import geo
from holder.utils.stl_writer import ExportError, mesh_to_stl_bytes, render, render_stl


def test_render_keeps_the_shape(cube):
    mesh = render(cube, 32)
    assert len(mesh.faces) > 0
    pitch = 10 / 32
    assert geo.size(mesh) == pytest.approx([10, 10, 10], abs=2 * pitch)
    assert mesh.volume == pytest.approx(1000, rel=0.15)


def test_render_stl_writes_file(cube, tmp_path):
    path = render_stl(cube, 24, tmp_path / "cube.stl")
    assert path.exists()
    loaded = trimesh.load(path, file_type="stl")
    assert len(loaded.faces) == len(render(cube, 24).faces)


def test_export_is_deterministic(full, tmp_path):
    solid = holder.finalize(full, holder.build(full))
    a = trimesh.load(render_stl(solid, 40, tmp_path / "a.stl"))
    b = trimesh.load(render_stl(holder.finalize(full, holder.build(full)), 40, tmp_path / "b.stl"))
    assert len(a.faces) == len(b.faces)
    assert np.allclose(a.bounds, b.bounds)


def test_exact_export_without_resolution(cube):
    data = mesh_to_stl_bytes(cube)
    # binary STL: 80 byte header, face count, 50 bytes per face
    assert len(data) == 84 + 50 * len(cube.faces)


@pytest.mark.parametrize("resolution", [0, -5])
def test_render_rejects_bad_resolution(cube, resolution):
    with pytest.raises(ExportError):
        render(cube, resolution)


def test_render_rejects_empty_solid():
    with pytest.raises(ExportError):
        render(trimesh.Trimesh(), 32)


def test_unwritable_path_leaves_nothing(cube, tmp_path):
    target = tmp_path / "missing" / "holder.stl"
    with pytest.raises(ExportError):
        render_stl(cube, 16, target)
    assert not target.exists()


def test_render_keeps_holes(cube):
    drilled = geo.difference(cube, geo.move(geo.cylinder(20, 2.5), z=5))
    mesh = render(drilled, 40)
    # an undrilled cube would come out 25% heavier
    assert mesh.volume == pytest.approx(drilled.volume, rel=0.1)


def test_render_full_holder_at_configured_resolution(full):
    solid = holder.finalize(full, holder.build(full))
    mesh = render(solid, full.resolution)
    pitch = float(np.max(solid.extents)) / full.resolution
    assert np.allclose(mesh.bounds, solid.bounds, atol=2 * pitch)
    assert mesh.volume == pytest.approx(solid.volume, rel=0.1)


@pytest.mark.parametrize("resolution", [0, -1])
def test_bytes_reject_bad_resolution(cube, resolution):
    with pytest.raises(ExportError):
        mesh_to_stl_bytes(cube, resolution)
