"""Step 2: Input Pins.

INPUT nodes are placeholders an operation reads from. Left unconnected they
supply their own value; once driven, they forward their producer's value.
"""

import nodeflow as nf

store = nf.GraphStore()

a = store.insert_node(nf.NodeKind.INPUT, value=2.0)
b = store.insert_node(nf.NodeKind.INPUT, value=3.0)
add = store.insert_node(nf.NodeKind.ADD)
store.insert_edge(add, a)  # lhs
store.insert_edge(add, b)  # rhs

sink = store.insert_node(nf.NodeKind.SINK)
store.insert_edge(sink, add)

if __name__ == "__main__":
    evaluator = nf.Evaluator()
    print(f"2 + 3 = {evaluator.run(store, sink)}")  # noqa: T201

    # Drive pin `a` from a constant source; its own value is now ignored
    source = store.insert_node(nf.NodeKind.CONST_SOURCE, value=10.0)
    store.insert_edge(a, source)
    print(f"10 + 3 = {evaluator.run(store, sink)}")  # noqa: T201
