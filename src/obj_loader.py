
import numpy as np

from geometry import VERTEX_SIZE


def _resolve(index_str, count, required=False):
    # OBJ indices are 1-based, negative ones count back from the end
    if not index_str:
        if required: raise ValueError("face corner has no position index")
        return -1
    idx = int(index_str)
    if idx > 0: return idx - 1
    if idx < 0 and count + idx >= 0: return count + idx
    raise ValueError(f"OBJ index {idx} is out of range")


def _floats(parts, size, minimum=None):
    """First ``size`` numbers of a record, zero-padded after ``minimum``."""
    minimum = size if minimum is None else minimum
    values = [float(x) for x in parts[1:size + 1]]
    if len(values) < minimum:
        raise ValueError(f"'{parts[0]}' needs at least {minimum} numbers, got {len(values)}")
    return tuple(values + [0.0] * (size - len(values)))


def _face_normal(p0, p1, p2):
    n = np.cross(np.subtract(p1, p0), np.subtract(p2, p0))
    length = np.linalg.norm(n)
    if length == 0.0:
        return (0.0, 0.0, 1.0)
    return tuple(n / length)


def parse_obj(lines):
    """Triangulate OBJ text into interleaved vertices and indices.

    Polygons are split as fans around their first corner. Corners without a
    normal get the flat normal of their triangle, corners without a texture
    coordinate get (0, 0); a lone ``vt u`` means v = 0. Materials and groups
    are ignored. Malformed records raise ValueError naming the line.
    """
    positions = []
    normals = []
    texcoords = []
    verts = []

    for lineno, line in enumerate(lines, 1):
        line = line.strip()
        if not line or line.startswith("#"): continue
        parts = line.split()
        tag = parts[0]
        try:
            if tag == "v":
                positions.append(_floats(parts, 3))
            elif tag == "vt":
                texcoords.append(_floats(parts, 2, minimum=1))
            elif tag == "vn":
                normals.append(_floats(parts, 3))
            elif tag == "f":
                if len(parts) < 4:
                    raise ValueError(f"face needs 3 corners, got {len(parts) - 1}")
                corners = []
                for p in parts[1:]:
                    tokens = p.split("/")
                    v_idx = _resolve(tokens[0], len(positions), required=True)
                    vt_idx = _resolve(tokens[1], len(texcoords)) if len(tokens) > 1 else -1
                    vn_idx = _resolve(tokens[2], len(normals)) if len(tokens) > 2 else -1
                    corners.append((v_idx, vt_idx, vn_idx))

                for i in range(1, len(corners) - 1):
                    tri = (corners[0], corners[i], corners[i + 1])
                    flat = _face_normal(*(positions[c[0]] for c in tri))
                    for v_idx, vt_idx, vn_idx in tri:
                        verts.extend(positions[v_idx])
                        verts.extend(normals[vn_idx] if vn_idx >= 0 else flat)
                        verts.extend(texcoords[vt_idx] if vt_idx >= 0 else (0.0, 0.0))
        except (ValueError, IndexError) as e:
            raise ValueError(f"line {lineno}: {e}") from e

    vertices = np.array(verts, dtype=np.float32)
    indices = np.arange(len(verts) // VERTEX_SIZE, dtype=np.uint32)
    return vertices, indices


def load_obj(filename):
    with open(filename, "r", errors="ignore") as f:
        return parse_obj(f)
