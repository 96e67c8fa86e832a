"""Step 3: An Editor Session.

NodeEditor groups operations with their input pins, enforces one link per
pin, and evaluates the sink once per frame.
"""

import nodeflow as nf

clock = nf.ManualClock()
editor = nf.NodeEditor(evaluator=nf.Evaluator(clock))

time_source = editor.add_node(nf.CompoundKind.TIME_SOURCE)
scale = editor.add_node(nf.CompoundKind.MULTIPLY)
sine = editor.add_node(nf.CompoundKind.SINE)
sink = editor.add_node(nf.CompoundKind.SINK)

editor.link(scale.input_ids[0], time_source.id)
editor.set_input(scale.input_ids[1], 2.0)
editor.link(sine.input_ids[0], scale.id)
editor.link(sink.input_ids[0], sine.id)

if __name__ == "__main__":
    for _ in range(5):
        value = editor.tick()
        print(f"t={clock():.2f}  |sin(2t)|={value:.4f}")  # noqa: T201
        clock.advance(0.25)
