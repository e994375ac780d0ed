"""
Tests for the planning session.

This module tests:
- Initial state (seeded project and product mix)
- Graph and product-mix operations trigger recomputes
- Callbacks and coalescing of re-entrant recompute requests
- Errors leave the session usable
"""

import pytest

from opsplan.errors import CycleDetectedError, InconsistentGraphError
from opsplan.session import PlanningSession, SessionState


@pytest.fixture
def session():
    return PlanningSession()


# =============================================================================
# Initial State
# =============================================================================


class TestInitialState:
    """A new session is seeded and solved."""

    def test_seeded_project(self, session):
        assert session.graph.name == "Warehouse Expansion"
        assert session.graph.total_duration == 21
        assert not session.graph.schedule_stale

    def test_seeded_product_mix(self, session):
        assert session.solution.feasible
        assert session.solution.objective_value == pytest.approx(5000)
        assert len(session.vertices) == 5

    def test_idle_with_one_run_each(self, session):
        assert session.state == SessionState.IDLE
        assert session.schedule_runs == 1
        assert session.lp_runs == 1

    def test_custom_graph(self, diamond_graph):
        session = PlanningSession(graph=diamond_graph)
        assert session.graph is diamond_graph
        assert session.graph.critical_path == ["A", "C", "D"]


# =============================================================================
# Project Operations
# =============================================================================


class TestProjectOperations:
    """Graph mutations are followed by a schedule recompute."""

    def test_add_activity(self, session):
        activity = session.add_activity("Final inspection", 1, predecessors=["J"])
        assert activity.id == "K"
        assert session.graph.total_duration == 22
        assert session.graph.critical_path[-1] == "K"

    def test_add_predecessor(self, session):
        # E now waits for D, pushing G past F
        assert session.add_predecessor("E", "D")
        assert session.graph.get_activity("E").early_start == 11
        assert session.graph.total_duration == 22

    def test_existing_edge_no_recompute(self, session):
        runs = session.schedule_runs
        assert session.add_predecessor("B", "A") is False
        assert session.schedule_runs == runs

    def test_cycle_rejected(self, session):
        runs = session.schedule_runs
        with pytest.raises(CycleDetectedError):
            session.add_predecessor("A", "J")
        assert session.schedule_runs == runs
        assert session.graph.total_duration == 21

    def test_remove_predecessor(self, session):
        assert session.remove_predecessor("D", "C")
        assert session.graph.get_activity("D").early_start == 5

    def test_remove_activity(self, session):
        session.remove_activity("C")
        for activity in session.graph:
            assert "C" not in activity.predecessors
        assert "C" not in session.graph.critical_path

    def test_update_activity(self, session):
        session.update_activity("B", duration=10)
        assert session.graph.total_duration == 27
        assert "B" in session.graph.critical_path

    def test_new_project(self, session):
        session.new_project("Blank")
        assert session.graph.name == "Blank"
        assert session.graph.total_duration == 0
        assert session.graph.critical_path == []
        assert session.add_activity("First", 3).id == "A"
        assert session.graph.total_duration == 3

    def test_load_default_project(self, session):
        session.new_project()
        session.load_default_project()
        assert session.graph.num_activities == 10
        assert session.graph.total_duration == 21

    def test_layout(self, session):
        layout = session.layout()
        assert len(layout.nodes) == 10

    def test_failed_recompute_returns_to_idle(self, session):
        session.graph.get_activity("A").predecessors.append("J")
        session.graph._rebuild_index()
        with pytest.raises(InconsistentGraphError):
            session.recompute_schedule()
        assert session.state == SessionState.IDLE


# =============================================================================
# Product-Mix Operations
# =============================================================================


class TestProductMixOperations:
    """Problem edits are followed by a re-solve."""

    def test_set_product(self, session):
        session.set_product("y", unit_profit=200)
        assert session.solution.vertex.y == pytest.approx(50)

    def test_set_constraints(self, session):
        session.set_constraints(hours=0)
        assert session.vertices == [session.solution.vertex]
        assert session.solution.objective_value == 0

    def test_invalid_edit_no_resolve(self, session):
        runs = session.lp_runs
        with pytest.raises(ValueError):
            session.set_product("x", unit_profit=-1)
        assert session.lp_runs == runs

    def test_reset(self, session):
        session.set_constraints(hours=10, material=10)
        session.reset_product_mix()
        assert session.solution.objective_value == pytest.approx(5000)

    def test_solve(self, session):
        vertices, solution = session.solve()
        assert vertices is session.vertices
        assert solution is session.solution
        assert session.lp_runs == 2

    def test_utilization(self, session):
        usage = session.utilization()
        assert usage.time.percentage == pytest.approx(100)


# =============================================================================
# Callbacks and Coalescing
# =============================================================================


class TestCallbacks:
    """Callbacks and re-entrant recompute requests."""

    def test_callback_kinds(self, session):
        events = []
        session.add_callback(lambda s, kind: events.append(kind))
        session.add_activity("Extra", 1)
        session.set_constraints(hours=80)
        assert events == ["schedule", "product_mix"]

    def test_callback_sees_computing_state(self, session):
        states = []
        session.add_callback(lambda s, kind: states.append(s.state))
        session.recompute_schedule()
        assert states == [SessionState.COMPUTING]

    def test_reentrant_requests_coalesced(self, session):
        events = []

        def mutate_once(s, kind):
            events.append(kind)
            if len(events) == 1:
                # Both requests land while the first recompute is running
                s.update_activity("B", duration=4)
                s.update_activity("E", duration=5)

        session.add_callback(mutate_once)
        runs = session.schedule_runs
        session.recompute_schedule()

        # One explicit pass plus one coalesced follow-up
        assert session.schedule_runs == runs + 2
        assert events == ["schedule", "schedule"]
        assert session.graph.get_activity("E").duration == 5
        assert session.graph.get_activity("B").slack == 0
        assert session.state == SessionState.IDLE

    def test_reentrant_product_mix_request(self, session):
        events = []

        def resolve_after_schedule(s, kind):
            events.append(kind)
            if kind == "schedule":
                s.set_constraints(hours=0)

        session.add_callback(resolve_after_schedule)
        session.recompute_schedule()
        assert events == ["schedule", "product_mix"]
        assert session.solution.objective_value == 0
