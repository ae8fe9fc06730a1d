from hazelengine.layers import Layer, LayerStack


class RecordingLayer(Layer):
    def __init__(self, name, journal):
        super().__init__(name)
        self.journal = journal

    def on_attach(self):
        self.journal.append(("attach", self.name))

    def on_detach(self):
        self.journal.append(("detach", self.name))


def _names(layers):
    return [layer.name for layer in layers]


def test_default_layer_name():
    assert Layer().name == "Layer"
    assert Layer("Custom").name == "Custom"


def test_layers_come_before_overlays():
    journal = []
    stack = LayerStack()
    a, b, c = (RecordingLayer(n, journal) for n in "abc")
    overlay = RecordingLayer("overlay", journal)
    stack.push_layer(a)
    stack.push_overlay(overlay)
    stack.push_layer(b)
    stack.push_layer(c)
    assert _names(stack) == ["a", "b", "c", "overlay"]
    assert _names(reversed(stack)) == ["overlay", "c", "b", "a"]
    assert len(stack) == 4


def test_push_does_not_attach():
    journal = []
    stack = LayerStack()
    stack.push_layer(RecordingLayer("a", journal))
    assert journal == []


def test_pop_layer_detaches_and_removes():
    journal = []
    stack = LayerStack()
    a, b = RecordingLayer("a", journal), RecordingLayer("b", journal)
    stack.push_layer(a)
    stack.push_layer(b)
    stack.pop_layer(a)
    assert journal == [("detach", "a")]
    assert _names(stack) == ["b"]
    stack.push_layer(RecordingLayer("c", journal))
    assert _names(stack) == ["b", "c"]


def test_pop_layer_ignores_overlays():
    journal = []
    stack = LayerStack()
    overlay = RecordingLayer("overlay", journal)
    stack.push_overlay(overlay)
    stack.pop_layer(overlay)
    assert _names(stack) == ["overlay"]
    assert journal == []


def test_pop_overlay_ignores_layers():
    journal = []
    stack = LayerStack()
    layer = RecordingLayer("a", journal)
    stack.push_layer(layer)
    stack.pop_overlay(layer)
    assert _names(stack) == ["a"]
    assert journal == []


def test_pop_overlay_removes_overlay():
    journal = []
    stack = LayerStack()
    layer = RecordingLayer("a", journal)
    overlay = RecordingLayer("overlay", journal)
    stack.push_layer(layer)
    stack.push_overlay(overlay)
    stack.pop_overlay(overlay)
    assert _names(stack) == ["a"]
    assert journal == [("detach", "overlay")]


def test_pop_unknown_layer_is_ignored():
    journal = []
    stack = LayerStack()
    stack.push_layer(RecordingLayer("a", journal))
    stack.pop_layer(RecordingLayer("stranger", journal))
    assert len(stack) == 1
    assert journal == []


def test_close_detaches_all_in_order():
    journal = []
    with LayerStack() as stack:
        stack.push_layer(RecordingLayer("a", journal))
        stack.push_overlay(RecordingLayer("overlay", journal))
        stack.push_layer(RecordingLayer("b", journal))
    assert journal == [("detach", "a"), ("detach", "b"), ("detach", "overlay")]
    assert len(stack) == 0