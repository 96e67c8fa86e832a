"""Step 1: Your First Graph.

This example builds a graph directly on the store: a constant source feeding
a sink, evaluated once.
"""

import nodeflow as nf

store = nf.GraphStore()

# A source node: pushes its stored value
source = store.insert_node(nf.NodeKind.CONST_SOURCE, value=0.5)

# The sink is the root we evaluate; it takes its value from the source
sink = store.insert_node(nf.NodeKind.SINK)
store.insert_edge(sink, source)

if __name__ == "__main__":
    result = nf.Evaluator().run(store, sink)
    print(f"sink = {result}")  # noqa: T201
