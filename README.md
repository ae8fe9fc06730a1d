# hazelengine

This package holds the engine-side core of a small game engine. It keeps data and does the maths. Drawing to a screen is left to the caller.

## Modules

- `hazelengine.layers`: `Layer` and `LayerStack`.
  - Ordinary layers sit below overlays.
  - Iterating a stack goes bottom to top. `reversed()` goes top to bottom.
  - `close()` detaches every layer. The stack is also a context manager.
- `hazelengine.timing`: `Timestep` and `Timer`.
  - `Timestep` is a float of seconds, with `seconds` and `milliseconds` properties.
  - `Timer` measures elapsed time with `elapsed()` and `elapsed_millis()`.
- `hazelengine.identifiers`: `UUID`.
  - A 64-bit integer. It is random when no value is given.
  - A value outside the 64-bit range raises `ValueError`.
- `hazelengine.keycodes`: the `Key` and `Mouse` enums of key and button codes.
- `hazelengine.log`: `init_logging(log_file="Hazel.log")`, `core_logger()` and `client_logger()`.
  - It sets up two loggers, `HAZEL` and `APP`, at a custom `TRACE` level.
  - Both loggers write to standard output and to the log file. The file is truncated.
- `hazelengine.transforms`: 4x4 matrix helpers on numpy arrays, for column vectors.
  - Matrix builders: `translation`, `rotation`, `scaling`, `perspective`, `ortho`.
  - Quaternion helpers, in (w, x, y, z) order: `quat_from_euler`, `quat_to_matrix`, `rotate_vector`.
  - `decompose_transform` returns translation, Euler rotation and scale. It raises `ValueError` for a matrix that cannot be decomposed.
- `hazelengine.buffer`: `ShaderDataType`, `BufferElement`, `BufferLayout` and `shader_data_type_size`.
  - `BufferLayout` computes the offset of each element and the stride.
- `hazelengine.cameras`: `Camera`, `OrthographicCamera`, `EditorCamera` and `OrthographicCameraController`.
  - The camera classes do not poll input devices. You pass the input in: the mouse position and the sets of pressed keys and buttons.
- `hazelengine.shaders`: `Shader` and `ShaderLibrary`.
  - `Shader` records the uniform values set on it.
  - `ShaderLibrary` stores shaders under unique names. Adding a duplicate name raises `ValueError`. `get` on an unknown name raises `KeyError`.
- `hazelengine.framebuffer`: `FramebufferTextureFormat` and the framebuffer specification dataclasses.
- `hazelengine.renderer2d`: `Renderer2D`.
  - It collects quads, circles, lines and rectangles into `Batch` objects.
  - Each batch goes to an optional `submit` callback.
  - It keeps `Statistics` of draw calls and quads.
- `hazelengine.scene_camera`: `SceneCamera` and `ProjectionType`.
  - A `SceneCamera` is either perspective or orthographic.
- `hazelengine.components`: the entity components. These are:
  - `IDComponent`
  - `TagComponent`
  - `TransformComponent`
  - `SpriteRendererComponent`
  - `CircleRendererComponent`
  - `CameraComponent`
  - `NativeScriptComponent`
  - `Rigidbody2DComponent`, `BoxCollider2DComponent` and `CircleCollider2DComponent`
- `hazelengine.scene`: `Scene`, `Entity` and `ScriptableEntity`.
  - `Scene` creates, destroys, duplicates and copies entities.
  - `on_update_runtime` runs native scripts, then renders through the primary camera when a renderer is given.
  - `on_update_editor` renders through an editor camera.
- `hazelengine.serializer`: `SceneSerializer` and `SceneFormatError`.
  - `dumps` and `serialize` write a scene as YAML.
  - `loads` and `deserialize` add the entities of a YAML document to a scene and return the scene name.
  - Malformed input raises `SceneFormatError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from hazelengine.scene import Scene
from hazelengine.components import CameraComponent, SpriteRendererComponent
from hazelengine.serializer import SceneSerializer
from hazelengine.renderer2d import Renderer2D

scene = Scene()

player = scene.create_entity("Player")
player.add_component(SpriteRendererComponent(color=(0.2, 0.8, 0.3, 1.0)))

camera = scene.create_entity("Camera")
camera.add_component(CameraComponent())
scene.on_viewport_resize(1280, 720)

batches = []
renderer = Renderer2D(submit=batches.append)
scene.on_update_runtime(0.016, renderer)
print(renderer.stats().total_vertex_count)  # 4
print(batches[0].kind)                      # "quad"

text = SceneSerializer(scene).dumps()

restored = Scene()
SceneSerializer(restored).loads(text)
print([entity.name for entity in restored.entities()])  # ['Player', 'Camera']
```

## Layers

```python
from hazelengine.layers import Layer, LayerStack

with LayerStack() as stack:
    stack.push_layer(Layer("World"))
    stack.push_overlay(Layer("Debug"))

    for layer in reversed(stack):  # overlays first
        layer.on_event("click")
```

## What this package does not do

- It opens no window, talks to no graphics API and draws no pixels. `Renderer2D` only builds vertex batches and hands them to a callback. `Shader` only stores source text and uniform values.
- It has no application loop, event system or user interface layer.
- It reads no keyboard or mouse state itself.
- It runs no physics. The rigid body and collider components are stored and saved, but nothing simulates them.
- It installs no command-line program.