"""Tests for the evaluation engine module."""

import math

import pytest

from nodeflow import (
    EmptyGraphError,
    Evaluator,
    GraphStore,
    MalformedGraphError,
    ManualClock,
    MonotonicClock,
    NodeKind,
    NotFoundError,
    evaluate_graph,
)


def _sine_of(value: float) -> float:
    """Evaluate Input(value) -> Sine -> Sink and return the result."""
    store = GraphStore()
    pin = store.insert_node(NodeKind.INPUT, value=value)
    sine = store.insert_node(NodeKind.SINE)
    sink = store.insert_node(NodeKind.SINK)
    store.insert_edge(sine, pin)
    store.insert_edge(sink, sine)
    return evaluate_graph(store, sink, time_s=0.0)


class TestScenarios:
    """End-to-end evaluations of small graphs."""

    def test_const_source_into_sink(self) -> None:
        store = GraphStore()
        source = store.insert_node(NodeKind.CONST_SOURCE, value=0.5)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(sink, source)

        assert evaluate_graph(store, sink, time_s=0.0) == 0.5
        assert store.node(sink).value == 0.5

    def test_add_of_unconnected_inputs(self) -> None:
        store = GraphStore()
        a = store.insert_node(NodeKind.INPUT, value=2.0)
        b = store.insert_node(NodeKind.INPUT, value=3.0)
        add = store.insert_node(NodeKind.ADD)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(add, a)
        store.insert_edge(add, b)
        store.insert_edge(sink, add)

        assert evaluate_graph(store, sink, time_s=0.0) == 5.0
        assert store.node(sink).value == 5.0

    def test_add_with_one_producer_is_malformed(self) -> None:
        store = GraphStore()
        a = store.insert_node(NodeKind.INPUT, value=2.0)
        add = store.insert_node(NodeKind.ADD)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(add, a)
        store.insert_edge(sink, add)

        with pytest.raises(MalformedGraphError) as excinfo:
            evaluate_graph(store, sink, time_s=0.0)
        assert excinfo.value.root_id == sink

    def test_declared_arity_is_not_checked(self) -> None:
        store = GraphStore()
        a = store.insert_node(NodeKind.INPUT, value=2.0)
        b = store.insert_node(NodeKind.INPUT, value=3.0)
        add = store.insert_node(NodeKind.ADD, arity=5)
        sink = store.insert_node(NodeKind.SINK, arity=0)
        store.insert_edge(add, a)
        store.insert_edge(add, b)
        store.insert_edge(sink, add)

        assert evaluate_graph(store, sink, time_s=0.0) == 5.0

    def test_multiply_chain(self) -> None:
        store = GraphStore()
        x = store.insert_node(NodeKind.INPUT, value=1.5)
        y = store.insert_node(NodeKind.CONST_SOURCE, value=4.0)
        mul = store.insert_node(NodeKind.MULTIPLY)
        z = store.insert_node(NodeKind.INPUT, value=-1.0)
        add = store.insert_node(NodeKind.ADD)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(mul, x)
        store.insert_edge(mul, y)
        store.insert_edge(add, mul)
        store.insert_edge(add, z)
        store.insert_edge(sink, add)

        assert evaluate_graph(store, sink, time_s=0.0) == 5.0

    def test_root_may_be_a_source(self) -> None:
        store = GraphStore()
        source = store.insert_node(NodeKind.CONST_SOURCE, value=0.25)
        assert evaluate_graph(store, source, time_s=0.0) == 0.25

    def test_unconnected_input_pin_of_sink(self) -> None:
        store = GraphStore()
        pin = store.insert_node(NodeKind.INPUT, value=0.75)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(sink, pin)
        assert evaluate_graph(store, sink, time_s=0.0) == 0.75


class TestOperandOrder:
    """Tests that binary operations see their producers in wiring order."""

    def test_add_uses_first_edge_as_lhs(self) -> None:
        store = GraphStore()
        lhs = store.insert_node(NodeKind.INPUT, value=10.0)
        rhs = store.insert_node(NodeKind.INPUT, value=0.5)
        add = store.insert_node(NodeKind.ADD)
        store.insert_edge(add, lhs)
        store.insert_edge(add, rhs)
        assert evaluate_graph(store, add, time_s=0.0) == 10.5

    def test_nested_operands_do_not_interleave(self) -> None:
        # (2 * 3) + (4 * 5)
        store = GraphStore()
        left = store.insert_node(NodeKind.MULTIPLY)
        right = store.insert_node(NodeKind.MULTIPLY)
        for mul, values in ((left, (2.0, 3.0)), (right, (4.0, 5.0))):
            for value in values:
                store.insert_edge(mul, store.insert_node(NodeKind.INPUT, value=value))
        add = store.insert_node(NodeKind.ADD)
        store.insert_edge(add, left)
        store.insert_edge(add, right)

        assert evaluate_graph(store, add, time_s=0.0) == 26.0


class TestInputNodes:
    """Tests for INPUT pins forwarding or supplying values."""

    def test_driven_input_forwards_producer(self) -> None:
        store = GraphStore()
        pin = store.insert_node(NodeKind.INPUT, value=100.0)
        source = store.insert_node(NodeKind.CONST_SOURCE, value=0.5)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(sink, pin)
        store.insert_edge(pin, source)

        # The pin's own value is ignored once it is driven
        assert evaluate_graph(store, sink, time_s=0.0) == 0.5

    def test_input_never_double_counts(self) -> None:
        store = GraphStore()
        a = store.insert_node(NodeKind.INPUT, value=2.0)
        b = store.insert_node(NodeKind.INPUT, value=3.0)
        source = store.insert_node(NodeKind.CONST_SOURCE, value=7.0)
        add = store.insert_node(NodeKind.ADD)
        store.insert_edge(add, a)
        store.insert_edge(add, b)
        assert evaluate_graph(store, add, time_s=0.0) == 5.0

        store.insert_edge(a, source)

        assert evaluate_graph(store, add, time_s=0.0) == 10.0

    def test_unlinking_restores_fallback(self) -> None:
        store = GraphStore()
        pin = store.insert_node(NodeKind.INPUT, value=1.0)
        source = store.insert_node(NodeKind.CONST_SOURCE, value=9.0)
        edge = store.insert_edge(pin, source)
        assert evaluate_graph(store, pin, time_s=0.0) == 9.0

        store.erase_edge(edge)
        store.set_value(pin, 1.0)

        assert evaluate_graph(store, pin, time_s=0.0) == 1.0


class TestSine:
    """Tests for the rectified sine."""

    def test_sine_of_zero(self) -> None:
        assert _sine_of(0.0) == 0.0

    def test_sine_of_half_pi(self) -> None:
        assert _sine_of(math.pi / 2) == pytest.approx(1.0)

    @pytest.mark.parametrize("x", [-math.pi / 2, -1.0, 4.0, 1e6, -123.456])
    def test_sine_is_never_negative(self, x: float) -> None:
        result = _sine_of(x)
        assert result >= 0.0
        assert result == pytest.approx(abs(math.sin(x)))

    def test_sine_without_producer_below_root_is_malformed(self) -> None:
        store = GraphStore()
        sine = store.insert_node(NodeKind.SINE)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(sink, sine)
        with pytest.raises(MalformedGraphError, match="sine"):
            evaluate_graph(store, sink, time_s=0.0)


class TestTimeSource:
    """Tests for TIME_SOURCE nodes."""

    def test_pushes_and_records_time(self) -> None:
        store = GraphStore()
        clock = store.insert_node(NodeKind.TIME_SOURCE)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(sink, clock)

        assert evaluate_graph(store, sink, time_s=1.5) == 1.5
        assert store.node(clock).value == 1.5

    def test_all_time_sources_see_same_sample(self) -> None:
        store = GraphStore()
        first = store.insert_node(NodeKind.TIME_SOURCE)
        second = store.insert_node(NodeKind.TIME_SOURCE)
        add = store.insert_node(NodeKind.ADD)
        store.insert_edge(add, first)
        store.insert_edge(add, second)

        assert evaluate_graph(store, add, time_s=0.25) == 0.5
        assert store.node(first).value == store.node(second).value == 0.25


class TestSharing:
    """Tests for producers consumed more than once."""

    def test_duplicate_edge_sums_producer_with_itself(self) -> None:
        store = GraphStore()
        source = store.insert_node(NodeKind.CONST_SOURCE, value=1.5)
        add = store.insert_node(NodeKind.ADD)
        store.insert_edge(add, source)
        store.insert_edge(add, source)
        assert evaluate_graph(store, add, time_s=0.0) == 3.0

    def test_shared_producer_feeds_both_branches(self) -> None:
        store = GraphStore()
        source = store.insert_node(NodeKind.CONST_SOURCE, value=2.0)
        pin_a = store.insert_node(NodeKind.INPUT)
        pin_b = store.insert_node(NodeKind.INPUT)
        mul = store.insert_node(NodeKind.MULTIPLY)
        store.insert_edge(mul, pin_a)
        store.insert_edge(mul, pin_b)
        store.insert_edge(pin_a, source)
        store.insert_edge(pin_b, source)
        assert evaluate_graph(store, mul, time_s=0.0) == 4.0


class TestFailures:
    """Tests for evaluation errors."""

    def test_unknown_root(self) -> None:
        store = GraphStore()
        with pytest.raises(NotFoundError):
            evaluate_graph(store, 3, time_s=0.0)

    @pytest.mark.parametrize("kind", [NodeKind.SINK, NodeKind.SINE, NodeKind.ADD, NodeKind.MULTIPLY])
    def test_lone_consumer_root_is_empty(self, kind: NodeKind) -> None:
        store = GraphStore()
        root = store.insert_node(kind, value=-1.0)
        with pytest.raises(EmptyGraphError) as excinfo:
            evaluate_graph(store, root, time_s=0.0)
        assert excinfo.value.root_id == root
        assert store.node(root).value == -1.0

    def test_lone_input_root_supplies_its_value(self) -> None:
        store = GraphStore()
        pin = store.insert_node(NodeKind.INPUT, value=1.75)
        assert evaluate_graph(store, pin, time_s=0.0) == 1.75

    def test_leftover_values_are_malformed(self) -> None:
        store = GraphStore()
        sine = store.insert_node(NodeKind.SINE)
        store.insert_edge(sine, store.insert_node(NodeKind.INPUT, value=1.0))
        store.insert_edge(sine, store.insert_node(NodeKind.INPUT, value=2.0))
        with pytest.raises(MalformedGraphError, match="2 values left"):
            evaluate_graph(store, sine, time_s=0.0)

    def test_cycle_is_malformed(self) -> None:
        store = GraphStore()
        sink = store.insert_node(NodeKind.SINK)
        add = store.insert_node(NodeKind.ADD)
        store.insert_edge(sink, add)
        store.insert_edge(add, add)
        with pytest.raises(MalformedGraphError, match="cycle"):
            evaluate_graph(store, sink, time_s=0.0)

    def test_failed_run_writes_nothing(self) -> None:
        store = GraphStore()
        clock = store.insert_node(NodeKind.TIME_SOURCE, value=-1.0)
        add = store.insert_node(NodeKind.ADD, value=-2.0)
        sink = store.insert_node(NodeKind.SINK, value=-3.0)
        store.insert_edge(add, clock)
        store.insert_edge(sink, add)

        with pytest.raises(MalformedGraphError):
            evaluate_graph(store, sink, time_s=10.0)

        assert store.node(clock).value == -1.0
        assert store.node(add).value == -2.0
        assert store.node(sink).value == -3.0


class TestEvaluator:
    """Tests for the clock-driven Evaluator."""

    def test_run_samples_clock(self) -> None:
        clock = ManualClock(start=2.0)
        store = GraphStore()
        time_source = store.insert_node(NodeKind.TIME_SOURCE)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(sink, time_source)
        evaluator = Evaluator(clock)

        assert evaluator.run(store, sink) == 2.0
        clock.advance(0.5)
        assert evaluator.run(store, sink) == 2.5
        assert store.node(time_source).value == 2.5

    def test_runs_are_independent(self) -> None:
        store = GraphStore()
        source = store.insert_node(NodeKind.CONST_SOURCE, value=1.0)
        sink = store.insert_node(NodeKind.SINK)
        store.insert_edge(sink, source)
        evaluator = Evaluator(ManualClock())

        assert evaluator.run(store, sink) == 1.0
        store.set_value(source, 4.0)
        assert evaluator.run(store, sink) == 4.0

    def test_default_clock_is_monotonic(self) -> None:
        evaluator = Evaluator()
        assert isinstance(evaluator.clock, MonotonicClock)


class TestClocks:
    """Tests for the clock implementations."""

    def test_monotonic_clock_starts_near_zero_and_never_decreases(self) -> None:
        clock = MonotonicClock()
        first = clock()
        second = clock()
        assert 0.0 <= first <= second

    def test_manual_clock_advance(self) -> None:
        clock = ManualClock()
        assert clock() == 0.0
        assert clock.advance(0.25) == 0.25
        assert clock() == 0.25

    def test_manual_clock_set(self) -> None:
        clock = ManualClock(start=1.0)
        clock.set(3.0)
        assert clock() == 3.0

    def test_manual_clock_rejects_going_backwards(self) -> None:
        clock = ManualClock(start=1.0)
        with pytest.raises(ValueError, match="backwards"):
            clock.advance(-0.5)
        with pytest.raises(ValueError, match="backwards"):
            clock.set(0.0)
        assert clock() == 1.0
