import numpy as np
import pytest

from hazelengine.cameras import EditorCamera
from hazelengine.components import (
    CameraComponent,
    CircleRendererComponent,
    IDComponent,
    NativeScriptComponent,
    SpriteRendererComponent,
    TagComponent,
    TransformComponent,
)
from hazelengine.renderer2d import Renderer2D
from hazelengine.scene import Entity, Scene, ScriptableEntity


class _Counter(ScriptableEntity):
    def __init__(self):
        super().__init__()
        self.created = 0
        self.updates = []

    def on_create(self):
        self.created += 1

    def on_update(self, ts):
        self.updates.append(ts)


def test_create_entity_has_default_components():
    scene = Scene()
    entity = scene.create_entity()
    assert entity.name == "Entity"
    assert entity.has_component(IDComponent)
    assert entity.has_component(TransformComponent)
    assert entity.has_component(TagComponent)


def test_create_entity_with_uuid():
    scene = Scene()
    entity = scene.create_entity_with_uuid(1234, "Player")
    assert entity.uuid == 1234
    assert entity.name == "Player"


def test_add_duplicate_component_raises():
    entity = Scene().create_entity()
    with pytest.raises(ValueError):
        entity.add_component(TransformComponent())


def test_add_or_replace_component_replaces():
    entity = Scene().create_entity()
    replacement = TransformComponent(translation=(1.0, 2.0, 3.0))
    entity.add_or_replace_component(replacement)
    assert entity.get_component(TransformComponent) is replacement


def test_remove_component():
    entity = Scene().create_entity()
    entity.add_component(SpriteRendererComponent())
    entity.remove_component(SpriteRendererComponent)
    assert not entity.has_component(SpriteRendererComponent)
    with pytest.raises(KeyError):
        entity.get_component(SpriteRendererComponent)
    with pytest.raises(KeyError):
        entity.remove_component(SpriteRendererComponent)


def test_destroy_entity():
    scene = Scene()
    keep = scene.create_entity("keep")
    gone = scene.create_entity("gone")
    scene.destroy_entity(gone)
    assert scene.entities() == [keep]
    with pytest.raises(RuntimeError):
        gone.has_component(TagComponent)
    with pytest.raises(ValueError):
        scene.destroy_entity(gone)


def test_null_entity():
    null = Entity()
    assert not null
    with pytest.raises(RuntimeError):
        null.get_component(TagComponent)


def test_entity_equality_and_hash():
    scene = Scene()
    entity = scene.create_entity()
    same = Entity(entity.handle, scene)
    assert entity == same
    assert hash(entity) == hash(same)
    assert entity != Entity(entity.handle, Scene())


def test_entities_with_filters():
    scene = Scene()
    plain = scene.create_entity()
    sprite = scene.create_entity()
    sprite.add_component(SpriteRendererComponent())
    assert scene.entities_with(SpriteRendererComponent) == [sprite]
    assert scene.entities_with(TransformComponent) == [plain, sprite]


def test_primary_camera_entity():
    scene = Scene()
    assert not scene.primary_camera_entity()
    secondary = scene.create_entity()
    secondary.add_component(CameraComponent(primary=False))
    primary = scene.create_entity()
    primary.add_component(CameraComponent())
    assert scene.primary_camera_entity() == primary


def test_viewport_resize_skips_fixed_cameras():
    scene = Scene()
    free = scene.create_entity()
    free.add_component(CameraComponent())
    fixed = scene.create_entity()
    fixed.add_component(CameraComponent(fixed_aspect_ratio=True))
    scene.on_viewport_resize(1600, 900)
    assert free.get_component(CameraComponent).camera.aspect_ratio == pytest.approx(1600 / 900)
    assert fixed.get_component(CameraComponent).camera.aspect_ratio == 0.0


def test_camera_added_after_resize_gets_viewport():
    scene = Scene()
    scene.on_viewport_resize(800, 400)
    entity = scene.create_entity()
    component = entity.add_component(CameraComponent())
    assert component.camera.aspect_ratio == pytest.approx(800 / 400)


def test_copy_keeps_ids_and_copies_components():
    scene = Scene()
    scene.on_viewport_resize(640, 480)
    original = scene.create_entity_with_uuid(42, "Player")
    original.add_component(SpriteRendererComponent(color=(0.2, 0.4, 0.6, 1.0)))

    copied = Scene.copy(scene)
    assert (copied.viewport_width, copied.viewport_height) == (640, 480)
    [entity] = copied.entities()
    assert entity.uuid == 42
    assert entity.name == "Player"
    sprite = entity.get_component(SpriteRendererComponent)
    assert np.allclose(sprite.color, (0.2, 0.4, 0.6, 1.0))

    sprite.color[0] = 0.9
    assert original.get_component(SpriteRendererComponent).color[0] == pytest.approx(0.2)


def test_duplicate_entity():
    scene = Scene()
    source = scene.create_entity("Box")
    source.get_component(TransformComponent).translation[:] = (1.0, 2.0, 3.0)
    duplicate = scene.duplicate_entity(source)
    assert duplicate != source
    assert duplicate.name == "Box"
    assert duplicate.uuid != source.uuid
    moved = duplicate.get_component(TransformComponent)
    assert np.allclose(moved.translation, (1.0, 2.0, 3.0))
    assert moved is not source.get_component(TransformComponent)


def test_scripts_created_once_and_updated():
    scene = Scene()
    entity = scene.create_entity()
    nsc = entity.add_component(NativeScriptComponent())
    nsc.bind(_Counter)
    scene.on_update_runtime(0.5)
    scene.on_update_runtime(0.25)
    assert nsc.instance.created == 1
    assert nsc.instance.updates == [0.5, 0.25]
    assert nsc.instance.entity == entity
    assert nsc.instance.get_component(TagComponent).tag == "Entity"


def test_runtime_renders_sprites_through_primary_camera():
    scene = Scene()
    scene.on_viewport_resize(1600, 900)
    camera = scene.create_entity("Camera")
    camera.add_component(CameraComponent())
    sprite_entity = scene.create_entity("Sprite")
    sprite_entity.add_component(SpriteRendererComponent(color=(1.0, 0.0, 0.0, 1.0)))

    batches = []
    renderer = Renderer2D(submit=batches.append)
    scene.on_update_runtime(0.016, renderer)
    assert [batch.kind for batch in batches] == ["quad"]
    assert {v.entity_id for v in batches[0].vertices} == {int(sprite_entity)}
    assert batches[0].vertices[0].color == (1.0, 0.0, 0.0, 1.0)
    assert renderer.stats().quad_count == 1


def test_runtime_without_camera_draws_nothing():
    scene = Scene()
    scene.create_entity().add_component(SpriteRendererComponent())
    batches = []
    scene.on_update_runtime(0.016, Renderer2D(submit=batches.append))
    assert batches == []


def test_editor_update_uses_editor_camera():
    scene = Scene()
    circle = scene.create_entity()
    circle.add_component(CircleRendererComponent(thickness=0.5))
    camera = EditorCamera()
    batches = []
    scene.on_update_editor(0.016, camera, Renderer2D(submit=batches.append))
    assert [batch.kind for batch in batches] == ["circle"]
    assert np.allclose(batches[0].view_projection, camera.view_projection)
    assert batches[0].vertices[0].thickness == 0.5
    assert batches[0].vertices[0].entity_id == int(circle)