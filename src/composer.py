"""Per-frame matrix composition.

``compose_frame`` is a pure function of time, the two rotation snapshots and the
output aspect ratio. Nothing here touches GLFW or GL; ``submit_frame`` talks to
the shader program and meshes through the small interface they expose.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Tuple

from transform import (Mat4, identity, multiply, perspective, rotate_x,
                       rotate_y, rotate_z, translate)

logger = logging.getLogger(__name__)

# Camera
VIEW_DISTANCE = 3.0
FOV = math.pi / 3.0
ZNEAR = 0.1
ZFAR = 100.0

# Primary object. rotate_y is right-handed, so this yaw and the orbit turn
# the opposite way to a transposed rotY.
PRIMARY_YAW = 1.0
PRIMARY_TILT = 10 * (math.pi / 100)

# Orbiting object
ORBIT_RADIUS = 0.8
ORBIT_TILT = 5 * (math.pi / 100)

# Uniform names in the shader program
MODEL_VIEW_UNIFORM = "MV"
PROJECTION_UNIFORM = "P"
ILLUMINATION_UNIFORM = "T"
TIME_UNIFORM = "time"


@dataclass(frozen=True)
class RotationAngles:
    phi: float = 0.0    # yaw, radians
    theta: float = 0.0  # pitch, radians


@dataclass(frozen=True)
class FrameInput:
    time: float
    key: RotationAngles = RotationAngles()
    mouse: RotationAngles = RotationAngles()
    aspect: float = 1.0


@dataclass(frozen=True)
class SceneObject:
    name: str
    recipe: Callable[[FrameInput], Mat4]


@dataclass(frozen=True)
class FrameMatrices:
    time: float
    model_views: Dict[str, Mat4] = field(default_factory=dict)
    illumination: Mat4 = field(default_factory=identity)
    projection: Mat4 = field(default_factory=identity)

    # model_views is a dict, so frames compare by value but cannot be hashed
    __hash__ = None


def chain(*matrices):
    """Multiply left to right; the rightmost matrix is applied first."""
    result = matrices[0]
    for m in matrices[1:]:
        result = multiply(result, m)
    return result


def key_orientation(angles):
    return multiply(rotate_z(-angles.phi), rotate_x(-angles.theta))


def mouse_orientation(angles):
    return multiply(rotate_z(angles.phi), rotate_x(-angles.theta))


def orbit_angle(t):
    return t / 4 * math.pi


def orbit_matrix(t):
    return chain(rotate_y(orbit_angle(t)),
                 translate(0.0, 0.0, ORBIT_RADIUS),
                 rotate_x(ORBIT_TILT))


def primary_model_view(frame):
    return chain(translate(0.0, 0.0, -VIEW_DISTANCE),
                 rotate_y(PRIMARY_YAW),
                 rotate_x(PRIMARY_TILT),
                 key_orientation(frame.key))


def orbiting_model_view(frame):
    # the spin term repeats the orbit angle on purpose
    return chain(translate(0.0, 0.0, -VIEW_DISTANCE),
                 rotate_y(orbit_angle(frame.time)),
                 rotate_x(ORBIT_TILT),
                 orbit_matrix(frame.time))


def illumination_matrix(angles):
    return multiply(mouse_orientation(angles), identity())


def projection_matrix(aspect):
    return perspective(FOV, aspect, ZNEAR, ZFAR)


def aspect_ratio(width, height):
    if height <= 0:
        return 1.0
    return width / height


SCENE_OBJECTS: Tuple[SceneObject, ...] = (
    SceneObject("trex", primary_model_view),
    SceneObject("earth", orbiting_model_view),
)


def compose_frame(frame, objects=SCENE_OBJECTS):
    """Compute every matrix needed to draw one frame.

    Returns a ``FrameMatrices`` whose ``model_views`` keep the order of
    ``objects``. The projection is rebuilt from ``frame.aspect`` each call.
    """
    return FrameMatrices(
        time=frame.time,
        model_views={obj.name: obj.recipe(frame) for obj in objects},
        illumination=illumination_matrix(frame.mouse),
        projection=projection_matrix(frame.aspect),
    )


def submit_frame(program, matrices, draws: Mapping[str, Callable[[], None]]):
    """Upload ``matrices`` through ``program`` and draw each object.

    Per object the model-view goes first; illumination and projection follow
    the first model-view only, before its draw call.
    """
    program.set_float(TIME_UNIFORM, matrices.time)
    shared_sent = False
    for name, model_view in matrices.model_views.items():
        program.set_matrix(MODEL_VIEW_UNIFORM, model_view)
        if not shared_sent:
            program.set_matrix(ILLUMINATION_UNIFORM, matrices.illumination)
            program.set_matrix(PROJECTION_UNIFORM, matrices.projection)
            shared_sent = True
        draw = draws.get(name)
        if draw is None:
            logger.debug("No mesh bound for %r, skipping draw", name)
            continue
        draw()
