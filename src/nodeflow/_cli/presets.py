"""Ready-made patches the CLI can build and run."""

from collections.abc import Callable
from dataclasses import dataclass

from nodeflow._editor import CompoundKind, NodeEditor
from nodeflow._errors import ConfigError


@dataclass(frozen=True, slots=True)
class Preset:
    """A named patch and the function placing it into an editor."""

    name: str
    description: str
    build: Callable[[NodeEditor], None]


def _constant(editor: NodeEditor) -> None:
    source = editor.add_node(CompoundKind.CONST_SOURCE)
    sink = editor.add_node(CompoundKind.SINK)
    editor.link(sink.input_ids[0], source.id)


def _sum(editor: NodeEditor) -> None:
    add = editor.add_node(CompoundKind.ADD)
    editor.set_input(add.input_ids[0], 2.0)
    editor.set_input(add.input_ids[1], 3.0)
    sink = editor.add_node(CompoundKind.SINK)
    editor.link(sink.input_ids[0], add.id)


def _wave(editor: NodeEditor) -> None:
    clock = editor.add_node(CompoundKind.TIME_SOURCE)
    sine = editor.add_node(CompoundKind.SINE)
    sink = editor.add_node(CompoundKind.SINK)
    editor.link(sine.input_ids[0], clock.id)
    editor.link(sink.input_ids[0], sine.id)


def _scaled_wave(editor: NodeEditor) -> None:
    clock = editor.add_node(CompoundKind.TIME_SOURCE)
    scale = editor.add_node(CompoundKind.MULTIPLY)
    sine = editor.add_node(CompoundKind.SINE)
    sink = editor.add_node(CompoundKind.SINK)
    editor.link(scale.input_ids[0], clock.id)
    editor.set_input(scale.input_ids[1], 2.0)
    editor.link(sine.input_ids[0], scale.id)
    editor.link(sink.input_ids[0], sine.id)


PRESETS: dict[str, Preset] = {
    preset.name: preset
    for preset in (
        Preset("constant", "Constant source (0.5) into the sink", _constant),
        Preset("sum", "Sum of two inputs (2.0 + 3.0) into the sink", _sum),
        Preset("wave", "|sin(t)| of the clock into the sink", _wave),
        Preset("scaled-wave", "|sin(2t)| of the clock into the sink", _scaled_wave),
    )
}


def get_preset(name: str) -> Preset:
    """Look up a preset by name.

    Raises:
        ConfigError: If no preset has that name.

    """
    try:
        return PRESETS[name]
    except KeyError:
        available = ", ".join(PRESETS)
        msg = f"Unknown preset '{name}'. Available: {available}"
        raise ConfigError(msg) from None
