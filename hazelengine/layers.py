"""Layers and the ordered stack that holds them."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class Layer:
    """A unit of per-frame behaviour; override the hooks needed.

    The base hooks keep simple bookkeeping so that subclasses calling
    ``super()`` and callers inspecting a layer both see its state.
    """

    def __init__(self, name: str = "Layer") -> None:
        self.name = name
        self.attached = False
        self.last_timestep: Any = None
        self.frames_rendered = 0
        self.events_seen = 0

    def on_attach(self) -> None:
        """Called when the layer is attached."""
        self.attached = True

    def on_detach(self) -> None:
        """Called when the layer is removed."""
        self.attached = False

    def on_update(self, ts: Any) -> None:
        """Called once per frame with the frame's timestep."""
        self.last_timestep = ts

    def on_imgui_render(self) -> None:
        """Called once per frame while the UI is drawn."""
        self.frames_rendered += 1

    def on_event(self, event: Any) -> None:
        """Called for each event not yet handled."""
        self.events_seen += 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class LayerStack:
    """Layers first, overlays after them; iteration runs bottom to top."""

    def __init__(self) -> None:
        self._layers: list[Layer] = []
        self._insert_index = 0

    def push_layer(self, layer: Layer) -> None:
        self._layers.insert(self._insert_index, layer)
        self._insert_index += 1

    def push_overlay(self, overlay: Layer) -> None:
        self._layers.append(overlay)

    @staticmethod
    def _find(items: list[Layer], target: Layer) -> int | None:
        return next((i for i, item in enumerate(items) if item is target), None)

    def pop_layer(self, layer: Layer) -> None:
        """Detach and remove a layer; overlays and unknown layers are ignored."""
        index = self._find(self._layers[: self._insert_index], layer)
        if index is not None:
            layer.on_detach()
            del self._layers[index]
            self._insert_index -= 1

    def pop_overlay(self, overlay: Layer) -> None:
        """Detach and remove an overlay; plain layers and unknown ones are ignored."""
        index = self._find(self._layers[self._insert_index :], overlay)
        if index is not None:
            overlay.on_detach()
            del self._layers[self._insert_index + index]

    def close(self) -> None:
        """Detach every layer and empty the stack."""
        for layer in self._layers:
            layer.on_detach()
        self._layers.clear()
        self._insert_index = 0

    def __enter__(self) -> "LayerStack":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[Layer]:
        return iter(list(self._layers))

    def __reversed__(self) -> Iterator[Layer]:
        return reversed(list(self._layers))

    def __len__(self) -> int:
        return len(self._layers)