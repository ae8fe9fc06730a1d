"""Components that can be attached to scene entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from hazelengine.identifiers import UUID
from hazelengine.scene_camera import SceneCamera
from hazelengine.transforms import quat_from_euler, quat_to_matrix, scaling, translation


def _vector(values: Sequence[float], length: int) -> np.ndarray:
    array = np.array(values, dtype=float).ravel()
    if array.shape != (length,):
        raise ValueError(f"expected {length} components, got {array.size}")
    return array


@dataclass
class IDComponent:
    """The entity's persistent identifier."""

    id: UUID = field(default_factory=UUID)

    def __post_init__(self) -> None:
        self.id = UUID(self.id)


@dataclass
class TagComponent:
    """The entity's display name."""

    tag: str = ""


@dataclass(eq=False)
class TransformComponent:
    """Position, Euler rotation (radians) and scale."""

    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.translation = _vector(self.translation, 3)
        self.rotation = _vector(self.rotation, 3)
        self.scale = _vector(self.scale, 3)

    @property
    def transform(self) -> np.ndarray:
        """The 4x4 matrix: translate, then rotate, then scale."""
        return (
            translation(self.translation)
            @ quat_to_matrix(quat_from_euler(self.rotation))
            @ scaling(self.scale)
        )


@dataclass(eq=False)
class SpriteRendererComponent:
    color: np.ndarray = field(default_factory=lambda: np.ones(4))
    texture: Any = None
    tiling_factor: float = 1.0

    def __post_init__(self) -> None:
        self.color = _vector(self.color, 4)


@dataclass(eq=False)
class CircleRendererComponent:
    color: np.ndarray = field(default_factory=lambda: np.ones(4))
    thickness: float = 1.0
    fade: float = 0.005

    def __post_init__(self) -> None:
        self.color = _vector(self.color, 4)


@dataclass(eq=False)
class CameraComponent:
    camera: SceneCamera = field(default_factory=SceneCamera)
    primary: bool = True
    fixed_aspect_ratio: bool = False


@dataclass(eq=False)
class NativeScriptComponent:
    """Attaches a script class whose instance the scene drives each frame."""

    instance: Any = None
    _script_class: type | None = field(default=None, repr=False)

    def bind(self, script_class: type) -> None:
        self._script_class = script_class

    def instantiate(self) -> Any:
        """Create a new script instance and keep it."""
        if self._script_class is None:
            raise RuntimeError("no script class bound to this component")
        self.instance = self._script_class()
        return self.instance

    def destroy(self) -> None:
        self.instance = None


class BodyType(Enum):
    STATIC = 0
    DYNAMIC = 1
    KINEMATIC = 2


@dataclass(eq=False)
class Rigidbody2DComponent:
    type: BodyType = BodyType.STATIC
    fixed_rotation: bool = False
    runtime_body: Any = None


@dataclass(eq=False)
class BoxCollider2DComponent:
    offset: np.ndarray = field(default_factory=lambda: np.zeros(2))
    size: np.ndarray = field(default_factory=lambda: np.full(2, 0.5))
    density: float = 1.0
    friction: float = 0.5
    restitution: float = 0.0
    restitution_threshold: float = 0.5
    runtime_fixture: Any = None

    def __post_init__(self) -> None:
        self.offset = _vector(self.offset, 2)
        self.size = _vector(self.size, 2)


@dataclass(eq=False)
class CircleCollider2DComponent:
    offset: np.ndarray = field(default_factory=lambda: np.zeros(2))
    radius: float = 0.5
    density: float = 1.0
    friction: float = 0.5
    restitution: float = 0.0
    restitution_threshold: float = 0.5
    runtime_fixture: Any = None

    def __post_init__(self) -> None:
        self.offset = _vector(self.offset, 2)


ALL_COMPONENTS: tuple[type, ...] = (
    TransformComponent,
    SpriteRendererComponent,
    CircleRendererComponent,
    CameraComponent,
    NativeScriptComponent,
    Rigidbody2DComponent,
    BoxCollider2DComponent,
    CircleCollider2DComponent,
)