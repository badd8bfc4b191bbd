import ctypes
import logging
from PIL import Image
from OpenGL.GL import *

from geometry import VERTEX_SIZE, box_geometry, sphere_geometry
from obj_loader import load_obj

logger = logging.getLogger(__name__)


class Mesh:
    def __init__(self, vertices, indices, texture_id=None):
        # vertices: float32 interleaved x y z nx ny nz u v
        # indices: uint32
        self.count = indices.size
        self.texture_id = texture_id

        self.vao = glGenVertexArrays(1)
        self.vbo = glGenBuffers(1)
        self.ebo = glGenBuffers(1)

        glBindVertexArray(self.vao)

        glBindBuffer(GL_ARRAY_BUFFER, self.vbo)
        glBufferData(GL_ARRAY_BUFFER, vertices.nbytes, vertices, GL_STATIC_DRAW)

        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, self.ebo)
        glBufferData(GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices, GL_STATIC_DRAW)

        stride = VERTEX_SIZE * 4
        # location, components, byte offset
        for loc, size, offset in ((0, 3, 0), (1, 3, 12), (2, 2, 24)):
            glEnableVertexAttribArray(loc)
            glVertexAttribPointer(loc, size, GL_FLOAT, GL_FALSE, stride, ctypes.c_void_p(offset))

        glBindVertexArray(0)

    def draw(self):
        glBindTexture(GL_TEXTURE_2D, self.texture_id or 0)
        glBindVertexArray(self.vao)
        glDrawElements(GL_TRIANGLES, self.count, GL_UNSIGNED_INT, ctypes.c_void_p(0))
        glBindVertexArray(0)
        glBindTexture(GL_TEXTURE_2D, 0)

    def destroy(self):
        glDeleteVertexArrays(1, [self.vao])
        glDeleteBuffers(1, [self.vbo])
        glDeleteBuffers(1, [self.ebo])
        if self.texture_id:
            glDeleteTextures([self.texture_id])


def create_box_mesh(xsize=1.0, ysize=1.0, zsize=1.0, texture_id=None):
    vertices, indices = box_geometry(xsize, ysize, zsize)
    return Mesh(vertices, indices, texture_id)


def create_sphere_mesh(radius=1.0, segments=32, texture_id=None):
    vertices, indices = sphere_geometry(radius, segments)
    return Mesh(vertices, indices, texture_id)


def create_obj_mesh(path, texture_id=None):
    """Raises OSError if the file can't be read, ValueError if it can't be parsed."""
    vertices, indices = load_obj(path)
    logger.info("Loaded %s: %d triangles", path, indices.size // 3)
    return Mesh(vertices, indices, texture_id)


def load_texture(path):
    """Upload an image file as a mipmapped RGBA texture; None if unreadable."""
    try:
        img = Image.open(path)
        img = img.transpose(Image.Transpose.FLIP_TOP_BOTTOM).convert("RGBA")
    except OSError as e:
        logger.warning("Texture %s not loaded: %s", path, e)
        return None
    data = img.tobytes()
    w, h = img.size

    tex_id = glGenTextures(1)
    glBindTexture(GL_TEXTURE_2D, tex_id)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR_MIPMAP_LINEAR)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_REPEAT)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_REPEAT)
    glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, w, h, 0, GL_RGBA, GL_UNSIGNED_BYTE, data)
    glGenerateMipmap(GL_TEXTURE_2D)
    glBindTexture(GL_TEXTURE_2D, 0)
    return tex_id
