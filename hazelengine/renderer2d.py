"""Batched 2D rendering of quads, circles and lines into draw batches."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any

import numpy as np

from hazelengine.buffer import BufferElement, BufferLayout, ShaderDataType
from hazelengine.transforms import rotation, scaling, translation

MAX_QUADS = 20000
MAX_TEXTURE_SLOTS = 32

QUAD_LAYOUT = BufferLayout(
    [
        BufferElement(ShaderDataType.FLOAT3, "a_Position"),
        BufferElement(ShaderDataType.FLOAT4, "a_Color"),
        BufferElement(ShaderDataType.FLOAT2, "a_TexCoord"),
        BufferElement(ShaderDataType.FLOAT, "a_TexIndex"),
        BufferElement(ShaderDataType.FLOAT, "a_TilingFactor"),
        BufferElement(ShaderDataType.INT, "a_EntityID"),
    ]
)

CIRCLE_LAYOUT = BufferLayout(
    [
        BufferElement(ShaderDataType.FLOAT3, "a_WorldPosition"),
        BufferElement(ShaderDataType.FLOAT3, "a_LocalPosition"),
        BufferElement(ShaderDataType.FLOAT4, "a_Color"),
        BufferElement(ShaderDataType.FLOAT, "a_Thickness"),
        BufferElement(ShaderDataType.FLOAT, "a_Fade"),
        BufferElement(ShaderDataType.INT, "a_EntityID"),
    ]
)

LINE_LAYOUT = BufferLayout(
    [
        BufferElement(ShaderDataType.FLOAT3, "a_Position"),
        BufferElement(ShaderDataType.FLOAT4, "a_Color"),
        BufferElement(ShaderDataType.INT, "a_EntityID"),
    ]
)

_QUAD_POSITIONS = np.array(
    [
        [-0.5, -0.5, 0.0, 1.0],
        [0.5, -0.5, 0.0, 1.0],
        [0.5, 0.5, 0.0, 1.0],
        [-0.5, 0.5, 0.0, 1.0],
    ]
)
_TEXTURE_COORDS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))
_WHITE = (1.0, 1.0, 1.0, 1.0)

Vec3 = tuple[float, float, float]
Vec4 = tuple[float, float, float, float]


@dataclass(frozen=True)
class QuadVertex:
    position: Vec3
    color: Vec4
    tex_coord: tuple[float, float]
    tex_index: float
    tiling_factor: float
    entity_id: int = -1


@dataclass(frozen=True)
class CircleVertex:
    world_position: Vec3
    local_position: Vec3
    color: Vec4
    thickness: float
    fade: float
    entity_id: int = -1


@dataclass(frozen=True)
class LineVertex:
    position: Vec3
    color: Vec4
    entity_id: int = -1


@dataclass(frozen=True)
class Batch:
    """One draw call: ``count`` is indices for quads/circles, vertices for lines."""

    kind: str
    vertices: tuple[Any, ...]
    count: int
    view_projection: np.ndarray
    textures: tuple[Any, ...] = ()
    line_width: float | None = None


@dataclass
class Statistics:
    draw_calls: int = 0
    quad_count: int = 0

    @property
    def total_vertex_count(self) -> int:
        return self.quad_count * 4

    @property
    def total_index_count(self) -> int:
        return self.quad_count * 6


class _WhiteTexture:
    """The 1x1 opaque white texture occupying slot 0."""

    width = 1
    height = 1
    data = 0xFFFFFFFF

    def __repr__(self) -> str:
        return "WhiteTexture"


def _quad_indices(quad_count: int) -> np.ndarray:
    base = np.arange(quad_count, dtype=np.uint32) * 4
    pattern = np.array([0, 1, 2, 2, 3, 0], dtype=np.uint32)
    return (base[:, np.newaxis] + pattern).ravel()


def _vec3(values: Sequence[float]) -> np.ndarray:
    array = np.asarray(values, dtype=float).ravel()
    if array.size == 2:
        return np.append(array, 0.0)
    if array.size < 3:
        raise ValueError("position needs 2 or 3 components")
    return array[:3]


def _tuple3(values: np.ndarray) -> Vec3:
    return (float(values[0]), float(values[1]), float(values[2]))


def _color(values: Sequence[float]) -> Vec4:
    array = np.asarray(values, dtype=float).ravel()
    if array.size != 4:
        raise ValueError("colour needs 4 components")
    return (float(array[0]), float(array[1]), float(array[2]), float(array[3]))


def _matrix(transform: Any) -> np.ndarray:
    matrix = np.asarray(transform, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError("transform must be a 4x4 matrix")
    return matrix


class Renderer2D:
    """Collects 2D primitives into batches and hands each batch to ``submit``."""

    def __init__(
        self,
        max_quads: int = MAX_QUADS,
        max_texture_slots: int = MAX_TEXTURE_SLOTS,
        submit: Callable[[Batch], None] | None = None,
    ) -> None:
        if max_quads < 1:
            raise ValueError("max_quads must be at least 1")
        if max_texture_slots < 2:
            raise ValueError("max_texture_slots must be at least 2")
        self.max_quads = max_quads
        self.max_vertices = max_quads * 4
        self.max_indices = max_quads * 6
        self.max_texture_slots = max_texture_slots
        self.submit = submit

        self.index_buffer = _quad_indices(max_quads)
        self.white_texture = _WhiteTexture()
        self.view_projection = np.identity(4)
        self._line_width = 2.0
        self._stats = Statistics()
        self._start_batch()

    # Scene handling

    def begin_scene(self, view_projection: Any) -> None:
        """Start a scene with the given view-projection matrix."""
        self.view_projection = _matrix(view_projection).copy()
        self._start_batch()

    def begin_scene_with_camera(self, camera: Any, transform: Any) -> None:
        """Start a scene seen by ``camera`` placed at ``transform``."""
        projection = _matrix(camera.projection)
        self.begin_scene(projection @ np.linalg.inv(_matrix(transform)))

    def end_scene(self) -> None:
        self.flush()

    def _start_batch(self) -> None:
        self._quads: list[QuadVertex] = []
        self._quad_index_count = 0
        self._circles: list[CircleVertex] = []
        self._circle_index_count = 0
        self._lines: list[LineVertex] = []
        self._line_vertex_count = 0
        self._texture_slots: list[Any] = [self.white_texture]

    def _emit(self, batch: Batch) -> None:
        self._stats.draw_calls += 1
        if self.submit is not None:
            self.submit(batch)

    def flush(self) -> None:
        """Submit whatever the current batch holds, one draw per primitive kind."""
        vp = self.view_projection.copy()
        if self._quad_index_count:
            self._emit(
                Batch("quad", tuple(self._quads), self._quad_index_count, vp,
                      tuple(self._texture_slots))
            )
        if self._circle_index_count:
            self._emit(
                Batch("circle", tuple(self._circles), self._circle_index_count, vp)
            )
        if self._line_vertex_count:
            self._emit(
                Batch("line", tuple(self._lines), self._line_vertex_count, vp,
                      line_width=self._line_width)
            )

    def _next_batch(self) -> None:
        self.flush()
        self._start_batch()

    # Quads

    def _push_quad(
        self,
        transform: np.ndarray,
        color: Vec4,
        tex_index: float,
        tiling_factor: float,
        entity_id: int,
    ) -> None:
        for corner, tex_coord in zip(_QUAD_POSITIONS, _TEXTURE_COORDS):
            self._quads.append(
                QuadVertex(
                    _tuple3(transform @ corner),
                    color,
                    tex_coord,
                    tex_index,
                    float(tiling_factor),
                    int(entity_id),
                )
            )
        self._quad_index_count += 6
        self._stats.quad_count += 1

    @staticmethod
    def _placement(
        position: Sequence[float], size: Sequence[float], degrees: float = 0.0
    ) -> np.ndarray:
        sx, sy = (float(v) for v in np.asarray(size, dtype=float).ravel()[:2])
        transform = translation(_vec3(position))
        if degrees:
            transform = transform @ rotation(math.radians(degrees), (0.0, 0.0, 1.0))
        return transform @ scaling((sx, sy, 1.0))

    def draw_quad(
        self, position: Sequence[float], size: Sequence[float], color: Sequence[float]
    ) -> None:
        self.draw_quad_transform(self._placement(position, size), color)

    def draw_textured_quad(
        self,
        position: Sequence[float],
        size: Sequence[float],
        texture: Any,
        tiling_factor: float = 1.0,
        tint_color: Sequence[float] = _WHITE,
    ) -> None:
        self.draw_textured_quad_transform(
            self._placement(position, size), texture, tiling_factor, tint_color
        )

    def draw_quad_transform(
        self, transform: Any, color: Sequence[float], entity_id: int = -1
    ) -> None:
        matrix = _matrix(transform)
        if self._quad_index_count >= self.max_indices:
            self._next_batch()
        self._push_quad(matrix, _color(color), 0.0, 1.0, entity_id)

    def draw_textured_quad_transform(
        self,
        transform: Any,
        texture: Any,
        tiling_factor: float = 1.0,
        tint_color: Sequence[float] = _WHITE,
        entity_id: int = -1,
    ) -> None:
        matrix = _matrix(transform)
        tint = _color(tint_color)
        if self._quad_index_count >= self.max_indices:
            self._next_batch()

        tex_index = next(
            (
                float(slot)
                for slot, bound in enumerate(self._texture_slots)
                if slot > 0 and bound == texture
            ),
            0.0,
        )
        if tex_index == 0.0:
            if len(self._texture_slots) >= self.max_texture_slots:
                self._next_batch()
            tex_index = float(len(self._texture_slots))
            self._texture_slots.append(texture)

        self._push_quad(matrix, tint, tex_index, tiling_factor, entity_id)

    def draw_rotated_quad(
        self,
        position: Sequence[float],
        size: Sequence[float],
        rotation: float,
        color: Sequence[float],
    ) -> None:
        """Draw a quad rotated by ``rotation`` degrees about Z."""
        self.draw_quad_transform(self._placement(position, size, rotation), color)

    def draw_rotated_textured_quad(
        self,
        position: Sequence[float],
        size: Sequence[float],
        rotation: float,
        texture: Any,
        tiling_factor: float = 1.0,
        tint_color: Sequence[float] = _WHITE,
    ) -> None:
        self.draw_textured_quad_transform(
            self._placement(position, size, rotation), texture, tiling_factor, tint_color
        )

    # Circles and lines

    def draw_circle(
        self,
        transform: Any,
        color: Sequence[float],
        thickness: float = 1.0,
        fade: float = 0.005,
        entity_id: int = -1,
    ) -> None:
        matrix = _matrix(transform)
        rgba = _color(color)
        if self._circle_index_count >= self.max_indices:
            self._next_batch()
        for corner in _QUAD_POSITIONS:
            self._circles.append(
                CircleVertex(
                    _tuple3(matrix @ corner),
                    _tuple3(corner * 2.0),
                    rgba,
                    float(thickness),
                    float(fade),
                    int(entity_id),
                )
            )
        self._circle_index_count += 6
        self._stats.quad_count += 1

    def draw_line(
        self,
        p0: Sequence[float],
        p1: Sequence[float],
        color: Sequence[float],
        entity_id: int = -1,
    ) -> None:
        rgba = _color(color)
        if self._line_vertex_count + 2 > self.max_vertices:
            self._next_batch()
        for point in (p0, p1):
            self._lines.append(LineVertex(_tuple3(_vec3(point)), rgba, int(entity_id)))
        self._line_vertex_count += 2

    def _draw_outline(self, corners: list[np.ndarray], color: Sequence[float]) -> None:
        for start, end in zip(corners, corners[1:] + corners[:1]):
            self.draw_line(start, end, color)

    def draw_rect(
        self,
        position: Sequence[float],
        size: Sequence[float],
        color: Sequence[float],
        entity_id: int = -1,
    ) -> None:
        """Outline an axis-aligned rectangle centred on ``position``."""
        x, y, z = _vec3(position)
        hx, hy = (float(v) * 0.5 for v in np.asarray(size, dtype=float).ravel()[:2])
        corners = [
            np.array([x - hx, y - hy, z]),
            np.array([x + hx, y - hy, z]),
            np.array([x + hx, y + hy, z]),
            np.array([x - hx, y + hy, z]),
        ]
        self._draw_outline(corners, color)

    def draw_rect_transform(
        self, transform: Any, color: Sequence[float], entity_id: int = -1
    ) -> None:
        matrix = _matrix(transform)
        self._draw_outline([(matrix @ corner)[:3] for corner in _QUAD_POSITIONS], color)

    def draw_sprite(self, transform: Any, sprite: Any, entity_id: int) -> None:
        """Draw a sprite component: textured when it has a texture, else flat."""
        if getattr(sprite, "texture", None) is not None:
            self.draw_textured_quad_transform(
                transform, sprite.texture, sprite.tiling_factor, sprite.color, entity_id
            )
        else:
            self.draw_quad_transform(transform, sprite.color, entity_id)

    # Settings and statistics

    @property
    def line_width(self) -> float:
        return self._line_width

    @line_width.setter
    def line_width(self, width: float) -> None:
        self._line_width = float(width)

    def reset_stats(self) -> None:
        self._stats = Statistics()

    def stats(self) -> Statistics:
        """A snapshot of the statistics."""
        return replace(self._stats)