"""Scenes: entities holding components, with update and render passes."""

from __future__ import annotations

import copy
from typing import Any

from hazelengine.components import (
    ALL_COMPONENTS,
    CameraComponent,
    CircleRendererComponent,
    IDComponent,
    NativeScriptComponent,
    SpriteRendererComponent,
    TagComponent,
    TransformComponent,
)
from hazelengine.identifiers import UUID

_SHARED_ATTRIBUTES = ("texture", "instance", "runtime_body", "runtime_fixture")


def _clone(component: Any) -> Any:
    """Deep copy of a component that keeps textures, scripts and runtime handles shared."""
    memo: dict[int, Any] = {}
    for attribute in _SHARED_ATTRIBUTES:
        value = getattr(component, attribute, None)
        if value is not None:
            memo[id(value)] = value
    return copy.deepcopy(component, memo)


class Entity:
    """A handle to an entity in a scene; the default entity is null."""

    def __init__(self, handle: int | None = None, scene: "Scene | None" = None) -> None:
        self._handle = handle
        self._scene = scene

    @property
    def handle(self) -> int | None:
        return self._handle

    @property
    def scene(self) -> "Scene | None":
        return self._scene

    def _components(self) -> dict[type, Any]:
        if self._handle is None or self._scene is None:
            raise RuntimeError("null entity has no components")
        try:
            return self._scene._registry[self._handle]
        except KeyError:
            raise RuntimeError(f"entity {self._handle} no longer exists") from None

    def add_component(self, component: Any) -> Any:
        components = self._components()
        kind = type(component)
        if kind in components:
            raise ValueError(f"Entity already has component {kind.__name__}")
        components[kind] = component
        self._scene._on_component_added(self, component)
        return component

    def add_or_replace_component(self, component: Any) -> Any:
        self._components()[type(component)] = component
        self._scene._on_component_added(self, component)
        return component

    def get_component(self, component_type: type) -> Any:
        components = self._components()
        try:
            return components[component_type]
        except KeyError:
            raise KeyError(
                f"Entity does not have component {component_type.__name__}"
            ) from None

    def has_component(self, component_type: type) -> bool:
        return component_type in self._components()

    def remove_component(self, component_type: type) -> None:
        components = self._components()
        if component_type not in components:
            raise KeyError(f"Entity does not have component {component_type.__name__}")
        del components[component_type]

    @property
    def uuid(self) -> UUID:
        return self.get_component(IDComponent).id

    @property
    def name(self) -> str:
        return self.get_component(TagComponent).tag

    def __bool__(self) -> bool:
        return self._handle is not None

    def __int__(self) -> int:
        if self._handle is None:
            raise ValueError("null entity has no handle")
        return self._handle

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self._handle == other._handle and self._scene is other._scene

    def __hash__(self) -> int:
        return hash((self._handle, id(self._scene)))

    def __repr__(self) -> str:
        return f"Entity({self._handle})"


class ScriptableEntity:
    """Base class for native scripts; ``entity`` is set by the scene."""

    def __init__(self) -> None:
        self.entity = Entity()

    def get_component(self, component_type: type) -> Any:
        return self.entity.get_component(component_type)

    def on_create(self) -> None:
        """Called once, before the first update."""

    def on_destroy(self) -> None:
        """Called when the script is torn down."""

    def on_update(self, ts: float) -> None:
        """Called every runtime frame."""


class Scene:
    """A collection of entities and their components, iterated in creation order."""

    def __init__(self) -> None:
        self._registry: dict[int, dict[type, Any]] = {}
        self._next_handle = 0
        self.viewport_width = 0
        self.viewport_height = 0

    @staticmethod
    def copy(other: "Scene") -> "Scene":
        """A new scene with the same entities (same UUIDs) and copies of their components."""
        new_scene = Scene()
        new_scene.viewport_width = other.viewport_width
        new_scene.viewport_height = other.viewport_height

        handles: dict[int, int] = {}
        for entity in other.entities_with(IDComponent):
            created = new_scene.create_entity_with_uuid(entity.uuid, entity.name)
            handles[entity.uuid] = created.handle

        for component_type in ALL_COMPONENTS:
            for entity in other.entities_with(component_type):
                target = new_scene._registry[handles[entity.uuid]]
                target[component_type] = _clone(entity.get_component(component_type))
        return new_scene

    def create_entity(self, name: str = "") -> Entity:
        return self.create_entity_with_uuid(UUID(), name)

    def create_entity_with_uuid(self, uuid: int, name: str = "") -> Entity:
        handle = self._next_handle
        self._next_handle += 1
        self._registry[handle] = {}
        entity = Entity(handle, self)
        entity.add_component(IDComponent(UUID(uuid)))
        entity.add_component(TransformComponent())
        entity.add_component(TagComponent(name or "Entity"))
        return entity

    def destroy_entity(self, entity: Entity) -> None:
        if entity.scene is not self or entity.handle not in self._registry:
            raise ValueError(f"{entity!r} does not belong to this scene")
        del self._registry[entity.handle]

    def entities(self) -> list[Entity]:
        return [Entity(handle, self) for handle in self._registry]

    def entities_with(self, *args: type) -> list[Entity]:
        """Entities holding every one of the given component types."""
        return [
            Entity(handle, self)
            for handle, components in self._registry.items()
            if all(kind in components for kind in args)
        ]

    def on_update_runtime(self, ts: float, renderer: Any = None) -> None:
        """Run scripts, then render through the primary camera if there is one."""
        for entity in self.entities_with(NativeScriptComponent):
            nsc = entity.get_component(NativeScriptComponent)
            if nsc.instance is None:
                instance = nsc.instantiate()
                instance.entity = entity
                instance.on_create()
            nsc.instance.on_update(ts)

        if renderer is None:
            return

        for entity in self.entities_with(TransformComponent, CameraComponent):
            camera = entity.get_component(CameraComponent)
            if camera.primary:
                transform = entity.get_component(TransformComponent).transform
                renderer.begin_scene_with_camera(camera.camera, transform)
                self._draw(renderer)
                renderer.end_scene()
                break

    def on_update_editor(self, ts: float, camera: Any, renderer: Any) -> None:
        """Render the scene as seen by an editor camera."""
        renderer.begin_scene(camera.view_projection)
        self._draw(renderer)
        renderer.end_scene()

    def _draw(self, renderer: Any) -> None:
        for entity in self.entities_with(TransformComponent, SpriteRendererComponent):
            transform = entity.get_component(TransformComponent).transform
            sprite = entity.get_component(SpriteRendererComponent)
            renderer.draw_sprite(transform, sprite, int(entity))

        for entity in self.entities_with(TransformComponent, CircleRendererComponent):
            transform = entity.get_component(TransformComponent).transform
            circle = entity.get_component(CircleRendererComponent)
            renderer.draw_circle(
                transform, circle.color, circle.thickness, circle.fade, int(entity)
            )

    def on_viewport_resize(self, width: int, height: int) -> None:
        """Store the viewport size and resize every camera without a fixed aspect ratio."""
        self.viewport_width = width
        self.viewport_height = height
        for entity in self.entities_with(CameraComponent):
            component = entity.get_component(CameraComponent)
            if not component.fixed_aspect_ratio:
                component.camera.set_viewport_size(width, height)

    def duplicate_entity(self, entity: Entity) -> Entity:
        """Create a new entity with the same name and copies of the components."""
        new_entity = self.create_entity(entity.name)
        for component_type in ALL_COMPONENTS:
            if entity.has_component(component_type):
                new_entity.add_or_replace_component(
                    _clone(entity.get_component(component_type))
                )
        return new_entity

    def primary_camera_entity(self) -> Entity:
        """The first entity with a primary camera, or a null entity."""
        for entity in self.entities_with(CameraComponent):
            if entity.get_component(CameraComponent).primary:
                return entity
        return Entity()

    def _on_component_added(self, entity: Entity, component: Any) -> None:
        if isinstance(component, CameraComponent):
            if self.viewport_width > 0 and self.viewport_height > 0:
                component.camera.set_viewport_size(self.viewport_width, self.viewport_height)