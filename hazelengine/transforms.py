"""4x4 transform helpers and quaternions (w, x, y, z) on numpy arrays.

Matrices act on column vectors: the translation sits in the last column.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

_EPSILON = float(np.finfo(np.float32).eps)


def translation(offset: Sequence[float]) -> np.ndarray:
    """Matrix that moves points by ``offset``."""
    matrix = np.identity(4)
    matrix[:3, 3] = np.asarray(offset, dtype=float)[:3]
    return matrix


def rotation(angle: float, axis: Sequence[float]) -> np.ndarray:
    """Matrix rotating by ``angle`` radians about ``axis``."""
    a = np.asarray(axis, dtype=float)[:3]
    norm = np.linalg.norm(a)
    if norm == 0.0:
        raise ValueError("rotation axis must not be zero")
    x, y, z = a / norm
    c, s = math.cos(angle), math.sin(angle)
    t = 1.0 - c
    matrix = np.identity(4)
    matrix[:3, :3] = [
        [c + x * x * t, x * y * t - z * s, x * z * t + y * s],
        [y * x * t + z * s, c + y * y * t, y * z * t - x * s],
        [z * x * t - y * s, z * y * t + x * s, c + z * z * t],
    ]
    return matrix


def scaling(factors: Sequence[float]) -> np.ndarray:
    """Matrix scaling each axis by the given factors."""
    matrix = np.identity(4)
    matrix[[0, 1, 2], [0, 1, 2]] = np.asarray(factors, dtype=float)[:3]
    return matrix


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with depth mapped to [-1, 1]."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must not be zero")
    tan_half = math.tan(fovy / 2.0)
    matrix = np.zeros((4, 4))
    matrix[0, 0] = 1.0 / (aspect * tan_half)
    matrix[1, 1] = 1.0 / tan_half
    matrix[2, 2] = -(far + near) / (far - near)
    matrix[3, 2] = -1.0
    matrix[2, 3] = -(2.0 * far * near) / (far - near)
    return matrix


def ortho(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> np.ndarray:
    """Right-handed orthographic projection with depth mapped to [-1, 1]."""
    matrix = np.identity(4)
    matrix[0, 0] = 2.0 / (right - left)
    matrix[1, 1] = 2.0 / (top - bottom)
    matrix[2, 2] = -2.0 / (far - near)
    matrix[0, 3] = -(right + left) / (right - left)
    matrix[1, 3] = -(top + bottom) / (top - bottom)
    matrix[2, 3] = -(far + near) / (far - near)
    return matrix


def quat_from_euler(angles: Sequence[float]) -> np.ndarray:
    """Quaternion for Euler angles (radians), applied X first, then Y, then Z."""
    half = np.asarray(angles, dtype=float)[:3] * 0.5
    cx, cy, cz = np.cos(half)
    sx, sy, sz = np.sin(half)
    return np.array(
        [
            cx * cy * cz + sx * sy * sz,
            sx * cy * cz - cx * sy * sz,
            cx * sy * cz + sx * cy * sz,
            cx * cy * sz - sx * sy * cz,
        ]
    )


def quat_to_matrix(quat: Sequence[float]) -> np.ndarray:
    """4x4 rotation matrix of a unit quaternion (w, x, y, z)."""
    w, x, y, z = (float(v) for v in quat)
    matrix = np.identity(4)
    matrix[:3, :3] = [
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ]
    return matrix


def rotate_vector(quat: Sequence[float], vector: Sequence[float]) -> np.ndarray:
    """Rotate a 3-vector by a unit quaternion."""
    return quat_to_matrix(quat)[:3, :3] @ np.asarray(vector, dtype=float)[:3]


def decompose_transform(
    transform: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split a transform into translation, Euler rotation and scale.

    Raises ValueError when the homogeneous component is zero.
    """
    local = np.array(transform, dtype=float)
    if local.shape != (4, 4):
        raise ValueError("transform must be a 4x4 matrix")
    if abs(local[3, 3]) < _EPSILON:
        raise ValueError("transform cannot be decomposed: w component is zero")

    if np.any(np.abs(local[3, :3]) >= _EPSILON):
        local[3, :3] = 0.0
        local[3, 3] = 1.0

    translation_part = local[:3, 3].copy()
    local[:3, 3] = 0.0

    rows = local[:3, :3].T.copy()
    scale = np.linalg.norm(rows, axis=1)
    with np.errstate(divide="ignore", invalid="ignore"):
        rows = rows / scale[:, np.newaxis]

    rot = np.zeros(3)
    rot[1] = math.asin(float(np.clip(-rows[0, 2], -1.0, 1.0)))
    if math.cos(rot[1]) != 0:
        rot[0] = math.atan2(rows[1, 2], rows[2, 2])
        rot[2] = math.atan2(rows[0, 1], rows[0, 0])
    else:
        rot[0] = math.atan2(-rows[2, 0], rows[1, 1])
        rot[2] = 0.0

    return translation_part, rot, scale