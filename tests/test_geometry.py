import numpy as np
import pytest

from geometry import VERTEX_SIZE, box_geometry, sphere_geometry


def _triangles(vertices, indices):
    v = vertices.reshape(-1, VERTEX_SIZE)
    return v[indices.reshape(-1, 3)]


def _outward(tris, center=(0.0, 0.0, 0.0)):
    p0, p1, p2 = tris[:, 0, :3], tris[:, 1, :3], tris[:, 2, :3]
    n = np.cross(p1 - p0, p2 - p0)
    centroid = (p0 + p1 + p2) / 3.0 - np.asarray(center)
    area = np.linalg.norm(n, axis=1)
    keep = area > 1e-9  # pole triangles collapse to a segment
    return np.einsum("ij,ij->i", n[keep], centroid[keep]) > 0.0


def test_box_counts_and_extent():
    vertices, indices = box_geometry(2.0, 1.0, 4.0)
    assert vertices.dtype == np.float32 and indices.dtype == np.uint32
    assert vertices.size == 24 * VERTEX_SIZE
    assert indices.size == 36
    pos = vertices.reshape(-1, VERTEX_SIZE)[:, :3]
    np.testing.assert_array_equal(pos.max(axis=0), [1.0, 0.5, 2.0])
    np.testing.assert_array_equal(pos.min(axis=0), [-1.0, -0.5, -2.0])


def test_box_winds_counter_clockwise_outward():
    vertices, indices = box_geometry()
    assert _outward(_triangles(vertices, indices)).all()


def test_box_normals_match_faces():
    vertices, _ = box_geometry()
    v = vertices.reshape(-1, VERTEX_SIZE)
    # every corner sits on the face its normal points to
    np.testing.assert_allclose(np.einsum("ij,ij->i", v[:, :3], v[:, 3:6]), 0.5)


@pytest.mark.parametrize("segments", [4, 50])
def test_sphere_counts(segments):
    vertices, indices = sphere_geometry(0.4, segments)
    assert vertices.size == (segments + 1) * (2 * segments + 1) * VERTEX_SIZE
    assert indices.size == 6 * segments * 2 * segments


def test_sphere_positions_and_normals():
    vertices, _ = sphere_geometry(0.4, 12)
    v = vertices.reshape(-1, VERTEX_SIZE)
    np.testing.assert_allclose(np.linalg.norm(v[:, :3], axis=1), 0.4, rtol=1e-5)
    np.testing.assert_allclose(np.linalg.norm(v[:, 3:6], axis=1), 1.0, rtol=1e-5)
    assert v[:, 6:8].min() >= 0.0 and v[:, 6:8].max() <= 1.0


def test_sphere_winds_counter_clockwise_outward():
    vertices, indices = sphere_geometry(1.0, 8)
    assert _outward(_triangles(vertices, indices)).all()
