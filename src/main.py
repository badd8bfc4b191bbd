
import sys
import logging
import glfw
from OpenGL.GL import *

import config
from composer import FrameInput, aspect_ratio, compose_frame, projection_matrix, submit_frame
from rotator import KeyRotator, MouseRotator
from scene import create_box_mesh, create_obj_mesh, create_sphere_mesh, load_texture
from shader import ShaderProgram
from transform import format_matrix
from utils import FpsCounter

logger = logging.getLogger("glprimer")


def create_window():
    if not glfw.init():
        raise RuntimeError("Failed to initialize GLFW")

    vidmode = glfw.get_video_mode(glfw.get_primary_monitor())

    glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, config.GL_VERSION[0])
    glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, config.GL_VERSION[1])
    glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
    glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, glfw.TRUE)

    side = int(vidmode.size.height * config.WINDOW_SCALE)
    window = glfw.create_window(side, side, config.TITLE, None, None)
    if not window:
        glfw.terminate()
        raise RuntimeError("Unable to open window")

    glfw.make_context_current(window)
    glfw.swap_interval(config.SWAP_INTERVAL)

    logger.info("GL vendor:    %s", glGetString(GL_VENDOR).decode())
    logger.info("GL renderer:  %s", glGetString(GL_RENDERER).decode())
    logger.info("GL version:   %s", glGetString(GL_VERSION).decode())
    logger.info("Desktop size: %d x %d", vidmode.size.width, vidmode.size.height)
    return window


def load_meshes(meshes=None):
    """Meshes keyed by scene object name, in draw order.

    Fills ``meshes`` as it goes so a caller can release what was made if a
    later mesh fails.
    """
    meshes = {} if meshes is None else meshes
    trex_tex = load_texture(config.TREX_TEXTURE)
    try:
        meshes["trex"] = create_obj_mesh(config.TREX_MESH, trex_tex)
    except (OSError, ValueError) as e:
        logger.warning("Falling back to a box for %s: %s", config.TREX_MESH, e)
        meshes["trex"] = create_box_mesh(*config.BOX_SIZE, texture_id=trex_tex)

    meshes["earth"] = create_sphere_mesh(config.SPHERE_RADIUS, config.SPHERE_SEGMENTS,
                                         texture_id=load_texture(config.EARTH_TEXTURE))
    return meshes


def run(window):
    shader = None
    meshes = {}
    try:
        shader = ShaderProgram()
        load_meshes(meshes)
        key_rotator = KeyRotator(window)
        mouse_rotator = MouseRotator(window)
        fps = FpsCounter()

        glEnable(GL_CULL_FACE)
        glEnable(GL_DEPTH_TEST)
        logger.debug("Projection at aspect 1:\n%s", format_matrix(projection_matrix(1.0)))

        shader.use()
        shader.set_texture_unit(0)
        draws = {name: mesh.draw for name, mesh in meshes.items()}

        while not glfw.window_should_close(window):
            width, height = glfw.get_framebuffer_size(window)
            glViewport(0, 0, width, height)

            rate = fps.tick()
            if rate is not None:
                glfw.set_window_title(window, f"{config.TITLE} ({rate:.1f} FPS)")

            glClearColor(*config.CLEAR_COLOR)
            glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

            key_rotator.poll()
            mouse_rotator.poll()
            frame = FrameInput(time=glfw.get_time(),
                               key=key_rotator.angles,
                               mouse=mouse_rotator.angles,
                               aspect=aspect_ratio(width, height))

            shader.use()
            submit_frame(shader, compose_frame(frame), draws)

            glfw.swap_buffers(window)
            glfw.poll_events()

            if glfw.get_key(window, glfw.KEY_ESCAPE) == glfw.PRESS:
                glfw.set_window_should_close(window, True)
    finally:
        for mesh in meshes.values():
            mesh.destroy()
        if shader is not None:
            shader.destroy()


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    try:
        window = create_window()
    except RuntimeError:
        logger.exception("Window setup failed")
        return 1

    try:
        run(window)
    except RuntimeError:
        logger.exception("Rendering stopped")
        return 1
    finally:
        glfw.destroy_window(window)
        glfw.terminate()
    return 0


if __name__ == "__main__":
    sys.exit(main())
