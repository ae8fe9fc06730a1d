"""Camera types: a plain projection, orthographic, editor orbit camera and a 2D controller."""

from __future__ import annotations

import math
from collections.abc import Collection, Sequence

import numpy as np

from hazelengine.keycodes import Key, Mouse
from hazelengine.transforms import (
    ortho,
    perspective,
    quat_from_euler,
    quat_to_matrix,
    rotate_vector,
    rotation,
    translation,
)


class Camera:
    """A camera that only knows its projection matrix."""

    def __init__(self, projection: np.ndarray | None = None) -> None:
        self.projection = (
            np.identity(4) if projection is None else np.array(projection, dtype=float)
        )


class OrthographicCamera:
    """2D camera with a position and a rotation about Z in degrees."""

    def __init__(self, left: float, right: float, bottom: float, top: float) -> None:
        self._projection = ortho(left, right, bottom, top, -1.0, 1.0)
        self._view = np.identity(4)
        self._position = np.zeros(3)
        self._rotation = 0.0
        self._view_projection = self._projection @ self._view

    def set_projection(self, left: float, right: float, bottom: float, top: float) -> None:
        self._projection = ortho(left, right, bottom, top, -1.0, 1.0)
        self._view_projection = self._projection @ self._view

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = np.array(value, dtype=float)[:3]
        self._recalculate_view()

    @property
    def rotation(self) -> float:
        """Rotation about Z in degrees."""
        return self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._rotation = float(value)
        self._recalculate_view()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view.copy()

    @property
    def view_projection_matrix(self) -> np.ndarray:
        return self._view_projection.copy()

    def _recalculate_view(self) -> None:
        transform = translation(self._position) @ rotation(
            math.radians(self._rotation), (0.0, 0.0, 1.0)
        )
        self._view = np.linalg.inv(transform)
        self._view_projection = self._projection @ self._view


class EditorCamera(Camera):
    """Perspective camera orbiting a focal point, driven by mouse input."""

    def __init__(
        self,
        fov: float = 45.0,
        aspect_ratio: float = 1.778,
        near_clip: float = 0.1,
        far_clip: float = 1000.0,
    ) -> None:
        super().__init__(perspective(math.radians(fov), aspect_ratio, near_clip, far_clip))
        self.fov = fov
        self.aspect_ratio = aspect_ratio
        self.near_clip = near_clip
        self.far_clip = far_clip

        self._view = np.identity(4)
        self._position = np.zeros(3)
        self.focal_point = np.zeros(3)
        self._initial_mouse = np.zeros(2)

        self.distance = 10.0
        self.pitch = 0.0
        self.yaw = 0.0

        self.viewport_width = 1280.0
        self.viewport_height = 720.0

        self._update_view()

    def on_update(
        self,
        ts: float,
        mouse_position: Sequence[float] = (0.0, 0.0),
        pressed_keys: Collection[int] = frozenset(),
        pressed_buttons: Collection[int] = frozenset(),
    ) -> None:
        """Apply one frame of input; Left Alt enables mouse control."""
        if Key.LEFT_ALT in pressed_keys:
            mouse = np.array(mouse_position, dtype=float)[:2]
            delta = (mouse - self._initial_mouse) * 0.003
            self._initial_mouse = mouse

            if Mouse.BUTTON_MIDDLE in pressed_buttons:
                self.mouse_pan(delta)
            elif Mouse.BUTTON_LEFT in pressed_buttons:
                self.mouse_rotate(delta)
            elif Mouse.BUTTON_RIGHT in pressed_buttons:
                self.mouse_zoom(float(delta[1]))

        self._update_view()

    def on_mouse_scroll(self, y_offset: float) -> bool:
        """Zoom for a scroll wheel step; never marks the event handled."""
        self.mouse_zoom(y_offset * 0.1)
        self._update_view()
        return False

    def set_viewport_size(self, width: float, height: float) -> None:
        self.viewport_width = float(width)
        self.viewport_height = float(height)
        self._update_projection()

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view.copy()

    @property
    def view_projection(self) -> np.ndarray:
        return self.projection @ self._view

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    def orientation(self) -> np.ndarray:
        """Orientation quaternion (w, x, y, z)."""
        return quat_from_euler((-self.pitch, -self.yaw, 0.0))

    def up_direction(self) -> np.ndarray:
        return rotate_vector(self.orientation(), (0.0, 1.0, 0.0))

    def right_direction(self) -> np.ndarray:
        return rotate_vector(self.orientation(), (1.0, 0.0, 0.0))

    def forward_direction(self) -> np.ndarray:
        return rotate_vector(self.orientation(), (0.0, 0.0, -1.0))

    def pan_speed(self) -> tuple[float, float]:
        x = min(self.viewport_width / 1000.0, 2.4)
        x_factor = 0.0366 * (x * x) - 0.1778 * x + 0.3021
        y = min(self.viewport_height / 1000.0, 2.4)
        y_factor = 0.0366 * (y * y) - 0.1778 * y + 0.3021
        return x_factor, y_factor

    def rotation_speed(self) -> float:
        return 0.8

    def zoom_speed(self) -> float:
        distance = max(self.distance * 0.2, 0.0)
        return min(distance * distance, 100.0)

    def mouse_pan(self, delta: Sequence[float]) -> None:
        x_speed, y_speed = self.pan_speed()
        self.focal_point = (
            self.focal_point
            - self.right_direction() * delta[0] * x_speed * self.distance
            + self.up_direction() * delta[1] * y_speed * self.distance
        )

    def mouse_rotate(self, delta: Sequence[float]) -> None:
        yaw_sign = -1.0 if self.up_direction()[1] < 0 else 1.0
        self.yaw += yaw_sign * delta[0] * self.rotation_speed()
        self.pitch += delta[1] * self.rotation_speed()

    def mouse_zoom(self, delta: float) -> None:
        self.distance -= delta * self.zoom_speed()
        if self.distance < 1.0:
            self.focal_point = self.focal_point + self.forward_direction()
            self.distance = 1.0

    def _update_projection(self) -> None:
        self.aspect_ratio = self.viewport_width / self.viewport_height
        self.projection = perspective(
            math.radians(self.fov), self.aspect_ratio, self.near_clip, self.far_clip
        )

    def _update_view(self) -> None:
        self._position = self.focal_point - self.forward_direction() * self.distance
        transform = translation(self._position) @ quat_to_matrix(self.orientation())
        self._view = np.linalg.inv(transform)


class OrthographicCameraController:
    """Keyboard and scroll control of an orthographic camera."""

    def __init__(self, aspect_ratio: float, rotation: bool = False) -> None:
        self.aspect_ratio = aspect_ratio
        self.zoom_level = 1.0
        self.camera = OrthographicCamera(*self._bounds())
        self.rotation_enabled = rotation

        self.camera_position = np.zeros(3)
        self.camera_rotation = 0.0
        self.translation_speed = 5.0
        self.rotation_speed = 180.0

    def _bounds(self) -> tuple[float, float, float, float]:
        return (
            -self.aspect_ratio * self.zoom_level,
            self.aspect_ratio * self.zoom_level,
            -self.zoom_level,
            self.zoom_level,
        )

    def on_update(self, ts: float, pressed_keys: Collection[int] = frozenset()) -> None:
        """Move (WASD) and optionally rotate (Q/E) the camera for one frame."""
        angle = math.radians(self.camera_rotation)
        step = self.translation_speed * ts
        cos_a, sin_a = math.cos(angle), math.sin(angle)

        if Key.A in pressed_keys:
            self.camera_position[0] -= cos_a * step
            self.camera_position[1] -= sin_a * step
        elif Key.D in pressed_keys:
            self.camera_position[0] += cos_a * step
            self.camera_position[1] += sin_a * step

        if Key.W in pressed_keys:
            self.camera_position[0] += -sin_a * step
            self.camera_position[1] += cos_a * step
        elif Key.S in pressed_keys:
            self.camera_position[0] -= -sin_a * step
            self.camera_position[1] -= cos_a * step

        if self.rotation_enabled:
            if Key.Q in pressed_keys:
                self.camera_rotation += self.rotation_speed * ts
            if Key.E in pressed_keys:
                self.camera_rotation -= self.rotation_speed * ts

            if self.camera_rotation > 180.0:
                self.camera_rotation -= 360.0
            elif self.camera_rotation <= -180.0:
                self.camera_rotation += 360.0

            self.camera.rotation = self.camera_rotation

        self.camera.position = self.camera_position
        self.translation_speed = self.zoom_level

    def on_resize(self, width: float, height: float) -> None:
        self.aspect_ratio = width / height
        self.camera.set_projection(*self._bounds())

    def on_mouse_scrolled(self, y_offset: float) -> bool:
        self.zoom_level = max(self.zoom_level - y_offset * 0.25, 0.25)
        self.camera.set_projection(*self._bounds())
        return False

    def on_window_resized(self, width: int, height: int) -> bool:
        self.on_resize(float(width), float(height))
        return False