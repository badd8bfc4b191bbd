import math
import numpy as np

# vertices are interleaved x y z nx ny nz u v, 8 float32 per vertex
VERTEX_SIZE = 8

# (normal, u axis, v axis) per face, u x v == normal so corners wind CCW
BOX_FACES = (
    (( 1, 0, 0), ( 0, 0,-1), (0, 1, 0)),  # right
    ((-1, 0, 0), ( 0, 0, 1), (0, 1, 0)),  # left
    (( 0, 1, 0), ( 1, 0, 0), (0, 0,-1)),  # top
    (( 0,-1, 0), ( 1, 0, 0), (0, 0, 1)),  # bottom
    (( 0, 0, 1), ( 1, 0, 0), (0, 1, 0)),  # front
    (( 0, 0,-1), (-1, 0, 0), (0, 1, 0)),  # back
)

QUAD_CORNERS = ((-1, -1, 0, 0), (1, -1, 1, 0), (1, 1, 1, 1), (-1, 1, 0, 1))


def box_geometry(xsize=1.0, ysize=1.0, zsize=1.0):
    """Axis-aligned box centred at the origin, 4 vertices per face."""
    half = np.array([xsize, ysize, zsize], dtype=np.float32) * 0.5
    verts = []
    indices = []
    for normal, u_axis, v_axis in BOX_FACES:
        n = np.array(normal, dtype=np.float32)
        u_axis = np.array(u_axis, dtype=np.float32)
        v_axis = np.array(v_axis, dtype=np.float32)
        base = len(verts) // VERTEX_SIZE
        for a, b, s, t in QUAD_CORNERS:
            p = (n + a * u_axis + b * v_axis) * half
            verts.extend([p[0], p[1], p[2], n[0], n[1], n[2], s, t])
        indices.extend([base, base + 1, base + 2, base, base + 2, base + 3])

    return np.array(verts, dtype=np.float32), np.array(indices, dtype=np.uint32)


def sphere_geometry(radius=1.0, segments=32):
    """UV sphere with ``segments`` stacks and ``2*segments`` slices.

    The seam column is duplicated so texture coordinates run 0..1 around it.
    """
    stacks = max(segments, 2)
    slices = 2 * stacks
    verts = []
    indices = []

    for i in range(stacks + 1):
        phi = math.pi * i / stacks
        for j in range(slices + 1):
            theta = 2 * math.pi * j / slices

            nx = math.sin(phi) * math.cos(theta)
            ny = math.cos(phi)
            nz = math.sin(phi) * math.sin(theta)

            verts.extend([radius * nx, radius * ny, radius * nz,
                          nx, ny, nz,
                          1.0 - j / slices, 1.0 - i / stacks])

    for i in range(stacks):
        for j in range(slices):
            first = i * (slices + 1) + j
            second = first + slices + 1

            indices.extend([first, first + 1, second])
            indices.extend([second, first + 1, second + 1])

    return np.array(verts, dtype=np.float32), np.array(indices, dtype=np.uint32)
