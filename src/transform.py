"""4x4 transformation matrices in column-major order.

Every matrix is a ``Mat4`` holding 16 float32 values where column ``c``, row ``r``
lives at index ``c*4 + r``. This is the layout ``glUniformMatrix4fv`` expects with
``transpose=GL_FALSE``, so ``Mat4.data`` can be uploaded as-is.
Vectors are columns and transforms compose as ``v' = M * v``.
"""

import math
import numpy as np


class Mat4:
    """Immutable 4x4 matrix backed by a read-only, column-major float32 buffer."""

    __slots__ = ("_data",)

    def __init__(self, values):
        data = np.array(values, dtype=np.float32).reshape(-1)
        if data.size != 16:
            raise ValueError(f"Mat4 needs 16 values, got {data.size}")
        data.flags.writeable = False
        self._data = data

    @classmethod
    def from_rows(cls, rows):
        """Build from a 4x4 nested sequence written the way it reads on paper."""
        M = np.array(rows, dtype=np.float32)
        if M.shape != (4, 4):
            raise ValueError(f"Mat4 needs 4x4 rows, got shape {M.shape}")
        return cls(M.ravel(order="F"))

    @property
    def data(self):
        return self._data

    def element(self, row, col):
        return float(self._data[col * 4 + row])

    def column(self, i):
        return self._data[i * 4:i * 4 + 4].copy()

    def to_array(self):
        # mathematical layout, M[row, col]
        return self._data.reshape((4, 4), order="F").copy()

    def apply(self, vec):
        v = np.asarray(vec, dtype=np.float32)
        return self._data.reshape((4, 4), order="F") @ v

    def allclose(self, other, rtol=1e-5, atol=1e-6):
        return np.allclose(self._data, other.data, rtol=rtol, atol=atol)

    def __matmul__(self, other):
        if isinstance(other, Mat4):
            return multiply(self, other)
        v = np.asarray(other)
        if v.shape == (4,):
            return self.apply(v)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return bool(np.array_equal(self._data, other.data))

    def __hash__(self):
        return hash(self._data.tobytes())

    def __iter__(self):
        return (float(x) for x in self._data)

    def __len__(self):
        return 16

    def __repr__(self):
        return f"Mat4({[round(float(x), 6) for x in self._data]})"

    def __str__(self):
        return format_matrix(self)


def identity():
    return Mat4(np.eye(4, dtype=np.float32).ravel(order="F"))


def rotate_x(angle):
    c = math.cos(angle); s = math.sin(angle)
    return Mat4.from_rows([
        [1.0, 0.0, 0.0, 0.0],
        [0.0,   c,  -s, 0.0],
        [0.0,   s,   c, 0.0],
        [0.0, 0.0, 0.0, 1.0]])


def rotate_y(angle):
    c = math.cos(angle); s = math.sin(angle)
    return Mat4.from_rows([
        [  c, 0.0,   s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [ -s, 0.0,   c, 0.0],
        [0.0, 0.0, 0.0, 1.0]])


def rotate_z(angle):
    c = math.cos(angle); s = math.sin(angle)
    return Mat4.from_rows([
        [  c,  -s, 0.0, 0.0],
        [  s,   c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0]])


def scale(factor):
    M = np.eye(4, dtype=np.float32)
    M[0,0] = factor; M[1,1] = factor; M[2,2] = factor
    return Mat4.from_rows(M)


def translate(dx, dy, dz):
    M = np.eye(4, dtype=np.float32)
    M[0,3] = dx; M[1,3] = dy; M[2,3] = dz
    return Mat4.from_rows(M)


def perspective(vfov, aspect, znear, zfar):
    """Symmetric perspective projection, ``vfov`` in radians.

    Maps view-space z in [-znear, -zfar] to [-1, 1] after the divide.
    Requires ``zfar > znear > 0``, ``0 < vfov < pi`` and ``aspect > 0``;
    nothing is checked, bad parameters give inf/nan entries.
    """
    f = np.float64(1.0) / np.tan(np.float64(vfov) / 2.0)
    znear = np.float64(znear); zfar = np.float64(zfar)
    M = np.zeros((4,4), dtype=np.float32)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        M[0,0] = f / np.float64(aspect); M[1,1] = f
        M[2,2] = (zfar + znear) / (znear - zfar)
        M[2,3] = (2.0 * zfar * znear) / (znear - zfar)
    M[3,2] = -1.0
    return Mat4.from_rows(M)


def multiply(a, b):
    """Matrix product ``a . b``: ``b`` is applied first, then ``a``."""
    A = a.data.reshape((4, 4), order="F")
    B = b.data.reshape((4, 4), order="F")
    return Mat4((A @ B).ravel(order="F"))


def format_matrix(m):
    lines = []
    for r in range(4):
        lines.append(" ".join(f"{m.element(r, c):6.2f}" for c in range(4)))
    return "\n".join(lines)
