
import math
import glfw

from composer import RotationAngles

TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi


def _wrap(phi):
    phi = math.fmod(phi, TWO_PI)
    if phi < 0.0: phi += TWO_PI
    return phi

def _clamp(theta):
    return max(-HALF_PI, min(HALF_PI, theta))


class KeyRotator:
    """Yaw/pitch driven by the arrow keys, at ``speed`` radians per second."""

    def __init__(self, window, speed=HALF_PI, clock=None):
        self.window = window
        self.speed = speed
        self.clock = clock or glfw.get_time
        self._phi = 0.0
        self._theta = 0.0
        self._last_time = self.clock()

    @property
    def phi(self):
        return self._phi

    @property
    def theta(self):
        return self._theta

    @property
    def angles(self):
        return RotationAngles(self._phi, self._theta)

    def _pressed(self, key):
        return glfw.get_key(self.window, key) == glfw.PRESS

    def poll(self):
        now = self.clock()
        step = (now - self._last_time) * self.speed
        self._last_time = now

        if self._pressed(glfw.KEY_RIGHT): self._phi += step
        if self._pressed(glfw.KEY_LEFT): self._phi -= step
        if self._pressed(glfw.KEY_UP): self._theta += step
        if self._pressed(glfw.KEY_DOWN): self._theta -= step

        self._phi = _wrap(self._phi)
        self._theta = _clamp(self._theta)


class MouseRotator:
    """Yaw/pitch from dragging with the left mouse button.

    A drag across the full window width turns ``phi`` by pi, across the full
    height turns ``theta`` by pi.
    """

    def __init__(self, window):
        self.window = window
        self._phi = 0.0
        self._theta = 0.0
        self._last_x, self._last_y = glfw.get_cursor_pos(window)
        self._last_left = False

    @property
    def phi(self):
        return self._phi

    @property
    def theta(self):
        return self._theta

    @property
    def angles(self):
        return RotationAngles(self._phi, self._theta)

    def poll(self):
        x, y = glfw.get_cursor_pos(self.window)
        left = glfw.get_mouse_button(self.window, glfw.MOUSE_BUTTON_LEFT) == glfw.PRESS

        if left and self._last_left:
            width, height = glfw.get_window_size(self.window)
            if width > 0 and height > 0:
                self._phi = _wrap(self._phi + math.pi * (x - self._last_x) / width)
                self._theta = _clamp(self._theta + math.pi * (y - self._last_y) / height)

        self._last_left = left
        self._last_x, self._last_y = x, y
