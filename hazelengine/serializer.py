"""Saving scenes to YAML text and loading them back."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from hazelengine.components import (
    BodyType,
    BoxCollider2DComponent,
    CameraComponent,
    CircleCollider2DComponent,
    CircleRendererComponent,
    Rigidbody2DComponent,
    SpriteRendererComponent,
    TagComponent,
    TransformComponent,
)
from hazelengine.log import TRACE, core_logger
from hazelengine.scene import Entity, Scene
from hazelengine.scene_camera import ProjectionType

_SCENE_NAME = "Untitled"

_BODY_TYPE_NAMES = {
    BodyType.STATIC: "Static",
    BodyType.DYNAMIC: "Dynamic",
    BodyType.KINEMATIC: "Kinematic",
}
_BODY_TYPES_BY_NAME = {name: body for body, name in _BODY_TYPE_NAMES.items()}


class SceneFormatError(ValueError):
    """Raised when scene text cannot be read as a scene."""


class _FlowSequence(list):
    """A list written on one line, as vectors are."""


class _Dumper(yaml.SafeDumper):
    pass


_Dumper.add_representer(
    _FlowSequence,
    lambda dumper, data: dumper.represent_sequence(
        "tag:yaml.org,2002:seq", data, flow_style=True
    ),
)


def _flow(values: Sequence[float]) -> _FlowSequence:
    return _FlowSequence(float(v) for v in np.asarray(values, dtype=float).ravel())


def _entity_to_dict(entity: Entity) -> dict[str, Any]:
    out: dict[str, Any] = {"Entity": int(entity.uuid)}

    if entity.has_component(TagComponent):
        out["TagComponent"] = {"Tag": entity.get_component(TagComponent).tag}

    if entity.has_component(TransformComponent):
        tc = entity.get_component(TransformComponent)
        out["TransformComponent"] = {
            "Translation": _flow(tc.translation),
            "Rotation": _flow(tc.rotation),
            "Scale": _flow(tc.scale),
        }

    if entity.has_component(CameraComponent):
        cc = entity.get_component(CameraComponent)
        camera = cc.camera
        out["CameraComponent"] = {
            "Camera": {
                "ProjectionType": camera.projection_type.value,
                "PerspectiveFOV": float(camera.perspective_vertical_fov),
                "PerspectiveNear": float(camera.perspective_near_clip),
                "PerspectiveFar": float(camera.perspective_far_clip),
                "OrthographicSize": float(camera.orthographic_size),
                "OrthographicNear": float(camera.orthographic_near_clip),
                "OrthographicFar": float(camera.orthographic_far_clip),
            },
            "Primary": bool(cc.primary),
            "FixedAspectRatio": bool(cc.fixed_aspect_ratio),
        }

    if entity.has_component(SpriteRendererComponent):
        src = entity.get_component(SpriteRendererComponent)
        out["SpriteRendererComponent"] = {"Color": _flow(src.color)}

    if entity.has_component(CircleRendererComponent):
        crc = entity.get_component(CircleRendererComponent)
        out["CircleRendererComponent"] = {
            "Color": _flow(crc.color),
            "Thickness": float(crc.thickness),
            "Fade": float(crc.fade),
        }

    if entity.has_component(Rigidbody2DComponent):
        rb2d = entity.get_component(Rigidbody2DComponent)
        out["Rigidbody2DComponent"] = {
            "BodyType": _BODY_TYPE_NAMES[rb2d.type],
            "FixedRotation": bool(rb2d.fixed_rotation),
        }

    if entity.has_component(BoxCollider2DComponent):
        bc2d = entity.get_component(BoxCollider2DComponent)
        out["BoxCollider2DComponent"] = {
            "Offset": _flow(bc2d.offset),
            "Size": _flow(bc2d.size),
            "Density": float(bc2d.density),
            "Friction": float(bc2d.friction),
            "Restitution": float(bc2d.restitution),
            "RestitutionThreshold": float(bc2d.restitution_threshold),
        }

    if entity.has_component(CircleCollider2DComponent):
        cc2d = entity.get_component(CircleCollider2DComponent)
        out["CircleCollider2DComponent"] = {
            "Offset": _flow(cc2d.offset),
            "Radius": float(cc2d.radius),
            "Density": float(cc2d.density),
            "Friction": float(cc2d.friction),
            "Restitution": float(cc2d.restitution),
            "RestitutionThreshold": float(cc2d.restitution_threshold),
        }

    return out


def _required(node: Any, key: str) -> Any:
    if not isinstance(node, dict) or key not in node:
        raise SceneFormatError(f"missing key {key!r}")
    return node[key]


def _section(node: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = node.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise SceneFormatError(f"{key!r} must be a mapping")
    return value


def _float(node: Any, key: str) -> float:
    value = _required(node, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneFormatError(f"{key!r} must be a number, got {value!r}")
    return float(value)


def _bool(node: Any, key: str) -> bool:
    value = _required(node, key)
    if not isinstance(value, bool):
        raise SceneFormatError(f"{key!r} must be a boolean, got {value!r}")
    return value


def _int(node: Any, key: str) -> int:
    value = _required(node, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise SceneFormatError(f"{key!r} must be an integer, got {value!r}")
    return value


def _vector(node: Any, key: str, length: int) -> np.ndarray:
    value = _required(node, key)
    if not isinstance(value, list) or len(value) != length:
        raise SceneFormatError(f"{key!r} must be a sequence of {length} numbers")
    if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in value):
        raise SceneFormatError(f"{key!r} must hold only numbers")
    return np.array(value, dtype=float)


class SceneSerializer:
    """Writes a scene as YAML and adds entities read from YAML to it."""

    def __init__(self, scene: Scene) -> None:
        self.scene = scene

    def dumps(self) -> str:
        """The scene as YAML text."""
        document = {
            "Scene": _SCENE_NAME,
            "Entities": [_entity_to_dict(entity) for entity in self.scene.entities()],
        }
        return yaml.dump(
            document,
            Dumper=_Dumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )

    def serialize(self, filepath: str | os.PathLike[str]) -> None:
        """Write the scene to a file."""
        Path(filepath).write_text(self.dumps(), encoding="utf-8")

    def loads(self, text: str) -> str:
        """Add the entities described by ``text`` to the scene; returns the scene name."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as error:
            core_logger().error("Failed to load scene text\n     %s", error)
            raise SceneFormatError(f"invalid scene YAML: {error}") from error

        if not isinstance(data, dict) or not data.get("Scene"):
            raise SceneFormatError("document has no 'Scene' entry")

        scene_name = str(data["Scene"])
        core_logger().log(TRACE, "Deserializing scene '%s'", scene_name)

        entities = data.get("Entities")
        if entities:
            if not isinstance(entities, list):
                raise SceneFormatError("'Entities' must be a sequence")
            for node in entities:
                self._load_entity(node)
        return scene_name

    def deserialize(self, filepath: str | os.PathLike[str]) -> str:
        """Read a scene file into the scene; returns the scene name."""
        text = Path(filepath).read_text(encoding="utf-8")
        try:
            return self.loads(text)
        except SceneFormatError:
            core_logger().error("Failed to load .hazel file '%s'", os.fspath(filepath))
            raise

    def _load_entity(self, node: Any) -> None:
        if not isinstance(node, dict):
            raise SceneFormatError("each entity must be a mapping")

        uuid = _int(node, "Entity")
        name = ""
        tag = _section(node, "TagComponent")
        if tag is not None:
            name = str(_required(tag, "Tag") or "")

        core_logger().log(TRACE, "Deserialized entity with ID = %d, name = %s", uuid, name)

        try:
            entity = self.scene.create_entity_with_uuid(uuid, name)
        except ValueError as error:
            raise SceneFormatError(str(error)) from error

        transform = _section(node, "TransformComponent")
        if transform is not None:
            tc = entity.get_component(TransformComponent)
            tc.translation = _vector(transform, "Translation", 3)
            tc.rotation = _vector(transform, "Rotation", 3)
            tc.scale = _vector(transform, "Scale", 3)

        camera_node = _section(node, "CameraComponent")
        if camera_node is not None:
            cc = entity.add_component(CameraComponent())
            props = _required(camera_node, "Camera")
            try:
                projection_type = ProjectionType(_int(props, "ProjectionType"))
            except ValueError as error:
                raise SceneFormatError(str(error)) from error
            camera = cc.camera
            camera.projection_type = projection_type
            camera.perspective_vertical_fov = _float(props, "PerspectiveFOV")
            camera.perspective_near_clip = _float(props, "PerspectiveNear")
            camera.perspective_far_clip = _float(props, "PerspectiveFar")
            camera.orthographic_size = _float(props, "OrthographicSize")
            camera.orthographic_near_clip = _float(props, "OrthographicNear")
            camera.orthographic_far_clip = _float(props, "OrthographicFar")
            cc.primary = _bool(camera_node, "Primary")
            cc.fixed_aspect_ratio = _bool(camera_node, "FixedAspectRatio")

        sprite = _section(node, "SpriteRendererComponent")
        if sprite is not None:
            entity.add_component(SpriteRendererComponent(color=_vector(sprite, "Color", 4)))

        circle = _section(node, "CircleRendererComponent")
        if circle is not None:
            entity.add_component(
                CircleRendererComponent(
                    color=_vector(circle, "Color", 4),
                    thickness=_float(circle, "Thickness"),
                    fade=_float(circle, "Fade"),
                )
            )

        body = _section(node, "Rigidbody2DComponent")
        if body is not None:
            body_name = _required(body, "BodyType")
            try:
                body_type = _BODY_TYPES_BY_NAME[body_name]
            except (KeyError, TypeError):
                raise SceneFormatError(f"Unknown body type: {body_name!r}") from None
            entity.add_component(
                Rigidbody2DComponent(
                    type=body_type, fixed_rotation=_bool(body, "FixedRotation")
                )
            )

        box = _section(node, "BoxCollider2DComponent")
        if box is not None:
            entity.add_component(
                BoxCollider2DComponent(
                    offset=_vector(box, "Offset", 2),
                    size=_vector(box, "Size", 2),
                    density=_float(box, "Density"),
                    friction=_float(box, "Friction"),
                    restitution=_float(box, "Restitution"),
                    restitution_threshold=_float(box, "RestitutionThreshold"),
                )
            )

        circle_collider = _section(node, "CircleCollider2DComponent")
        if circle_collider is not None:
            entity.add_component(
                CircleCollider2DComponent(
                    offset=_vector(circle_collider, "Offset", 2),
                    radius=_float(circle_collider, "Radius"),
                    density=_float(circle_collider, "Density"),
                    friction=_float(circle_collider, "Friction"),
                    restitution=_float(circle_collider, "Restitution"),
                    restitution_threshold=_float(circle_collider, "RestitutionThreshold"),
                )
            )