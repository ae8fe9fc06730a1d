import math

import numpy as np
import pytest

from hazelengine.cameras import (
    Camera,
    EditorCamera,
    OrthographicCamera,
    OrthographicCameraController,
)
from hazelengine.keycodes import Key, Mouse
from hazelengine.transforms import ortho, perspective, translation


def test_camera_default_projection_is_identity():
    assert np.allclose(Camera().projection, np.identity(4))


def test_camera_keeps_given_projection():
    proj = ortho(-1, 1, -1, 1, -1, 1)
    assert np.allclose(Camera(proj).projection, proj)


def test_orthographic_camera_initial_matrices():
    cam = OrthographicCamera(-2.0, 2.0, -1.0, 1.0)
    assert np.allclose(cam.projection_matrix, ortho(-2.0, 2.0, -1.0, 1.0, -1.0, 1.0))
    assert np.allclose(cam.view_matrix, np.identity(4))
    assert np.allclose(cam.view_projection_matrix, cam.projection_matrix)


def test_orthographic_camera_position_inverts_view():
    cam = OrthographicCamera(-1.0, 1.0, -1.0, 1.0)
    cam.position = (3.0, -2.0, 0.0)
    assert np.allclose(cam.position, [3.0, -2.0, 0.0])
    assert np.allclose(cam.view_matrix @ translation((3.0, -2.0, 0.0)), np.identity(4))
    assert np.allclose(
        cam.view_projection_matrix, cam.projection_matrix @ cam.view_matrix
    )


def test_orthographic_camera_rotation_keeps_view_orthonormal():
    cam = OrthographicCamera(-1.0, 1.0, -1.0, 1.0)
    cam.rotation = 90.0
    assert cam.rotation == 90.0
    rot = cam.view_matrix[:3, :3]
    assert np.allclose(rot @ rot.T, np.identity(3))
    assert np.allclose(cam.view_matrix @ np.array([0.0, 1.0, 0.0, 0.0]), [1.0, 0.0, 0.0, 0.0])


def test_orthographic_camera_set_projection():
    cam = OrthographicCamera(-1.0, 1.0, -1.0, 1.0)
    cam.set_projection(-4.0, 4.0, -2.0, 2.0)
    assert np.allclose(cam.projection_matrix, ortho(-4.0, 4.0, -2.0, 2.0, -1.0, 1.0))


def test_editor_camera_default_position_is_distance_back():
    cam = EditorCamera()
    assert np.allclose(cam.position, [0.0, 0.0, cam.distance])
    assert np.allclose(cam.view_matrix @ np.array([*cam.position, 1.0]), [0, 0, 0, 1])


def test_editor_camera_initial_projection():
    cam = EditorCamera(60.0, 1.5, 0.5, 100.0)
    assert np.allclose(cam.projection, perspective(math.radians(60.0), 1.5, 0.5, 100.0))
    assert np.allclose(cam.view_projection, cam.projection @ cam.view_matrix)


def test_editor_camera_viewport_sets_aspect():
    cam = EditorCamera()
    cam.set_viewport_size(800, 400)
    assert cam.aspect_ratio == pytest.approx(800 / 400)
    assert np.allclose(
        cam.projection, perspective(math.radians(cam.fov), 800 / 400, cam.near_clip, cam.far_clip)
    )


def test_editor_camera_directions_are_orthonormal():
    cam = EditorCamera()
    cam.pitch, cam.yaw = 0.3, -0.7
    up, right, fwd = cam.up_direction(), cam.right_direction(), cam.forward_direction()
    for v in (up, right, fwd):
        assert np.linalg.norm(v) == pytest.approx(1.0)
    assert np.dot(up, right) == pytest.approx(0.0, abs=1e-9)
    assert np.dot(up, fwd) == pytest.approx(0.0, abs=1e-9)
    assert np.allclose(cam.forward_direction(), -np.cross(up, right))


def test_zoom_speed_is_capped():
    cam = EditorCamera()
    cam.distance = 10000.0
    assert cam.zoom_speed() == 100.0
    cam.distance = -5.0
    assert cam.zoom_speed() == 0.0


def test_mouse_zoom_clamps_distance_and_moves_focal_point():
    cam = EditorCamera()
    forward = cam.forward_direction()
    cam.mouse_zoom(1000.0)
    assert cam.distance == 1.0
    assert np.allclose(cam.focal_point, forward)


def test_pan_speed_equal_for_square_viewport():
    cam = EditorCamera()
    cam.set_viewport_size(900, 900)
    x, y = cam.pan_speed()
    assert x == pytest.approx(y)


def test_mouse_scroll_zooms_in_and_is_unhandled():
    cam = EditorCamera()
    before = cam.distance
    assert cam.on_mouse_scroll(1.0) is False
    assert cam.distance < before
    assert np.allclose(cam.position, [0.0, 0.0, cam.distance])


def test_on_update_without_alt_changes_nothing():
    cam = EditorCamera()
    cam.on_update(0.016, (500.0, 500.0), set(), {Mouse.BUTTON_LEFT})
    assert cam.yaw == 0.0 and cam.pitch == 0.0
    assert np.allclose(cam.focal_point, [0.0, 0.0, 0.0])


def test_on_update_with_alt_and_left_button_rotates():
    cam = EditorCamera()
    keys = {Key.LEFT_ALT}
    cam.on_update(0.016, (100.0, 50.0), keys, {Mouse.BUTTON_LEFT})
    assert cam.yaw == pytest.approx(100.0 * 0.003 * cam.rotation_speed())
    assert cam.pitch == pytest.approx(50.0 * 0.003 * cam.rotation_speed())
    yaw = cam.yaw
    cam.on_update(0.016, (100.0, 50.0), keys, {Mouse.BUTTON_LEFT})
    assert cam.yaw == pytest.approx(yaw)


def test_on_update_with_alt_and_middle_button_pans():
    cam = EditorCamera()
    cam.on_update(0.016, (100.0, 0.0), {Key.LEFT_ALT}, {Mouse.BUTTON_MIDDLE})
    assert cam.focal_point[0] < 0.0
    assert cam.focal_point[1] == pytest.approx(0.0)


def test_controller_moves_and_returns():
    ctl = OrthographicCameraController(1.5)
    ctl.on_update(0.5, {Key.D})
    assert ctl.camera_position[0] > 0.0
    ctl.on_update(0.5, {Key.A})
    assert np.allclose(ctl.camera_position, [0.0, 0.0, 0.0])
    assert np.allclose(ctl.camera.position, ctl.camera_position)


def test_controller_translation_speed_follows_zoom():
    ctl = OrthographicCameraController(1.0)
    ctl.zoom_level = 2.0
    ctl.on_update(0.1, set())
    assert ctl.translation_speed == 2.0


def test_controller_rotation_stays_in_range():
    ctl = OrthographicCameraController(1.0, rotation=True)
    for _ in range(7):
        ctl.on_update(0.7, {Key.Q})
        assert -180.0 < ctl.camera_rotation <= 180.0
        assert ctl.camera.rotation == ctl.camera_rotation


def test_controller_ignores_rotation_when_disabled():
    ctl = OrthographicCameraController(1.0)
    ctl.on_update(1.0, {Key.Q})
    assert ctl.camera_rotation == 0.0


def test_controller_zoom_clamps():
    ctl = OrthographicCameraController(1.0)
    assert ctl.on_mouse_scrolled(100.0) is False
    assert ctl.zoom_level == 0.25


def test_controller_window_resize_updates_projection():
    ctl = OrthographicCameraController(1.0)
    assert ctl.on_window_resized(200, 100) is False
    assert ctl.aspect_ratio == pytest.approx(200 / 100)
    assert np.allclose(
        ctl.camera.projection_matrix, ortho(-2.0, 2.0, -1.0, 1.0, -1.0, 1.0)
    )