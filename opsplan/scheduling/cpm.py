"""
Critical Path Method (CPM) engine.

Given an acyclic activity-on-node graph, the engine computes for every
activity the earliest and latest start/finish times, the total slack and
whether it is critical, plus the project duration and the critical path.

Algorithm Overview:
------------------
1. Compute one topological order of the activities. Ties are broken by
   insertion position, so the order (and everything derived from it) is
   deterministic.
2. Forward pass along the order:
       ES = max(EF of predecessors), or 0 without predecessors
       EF = ES + duration
   Project duration T = max(EF).
3. Backward pass along the reversed order (only after step 2 completed):
       LF = min(LS of successors), or T without successors
       LS = LF - duration
4. Slack = LS - ES; an activity is critical iff slack == 0 (exact test,
   durations are exact values).
5. Critical path = critical ids sorted by ES, ties by insertion order.

Both passes are O(n + e). Acyclicity is guaranteed by the cycle guard on
edge insertion and is not re-checked here beyond detecting that no complete
order exists; in that case InconsistentGraphError is raised before any
derived field is written.

References:
----------
- Kelley, J. E., & Walker, M. R. (1959). Critical-path planning and
  scheduling. Proceedings of the Eastern Joint Computer Conference.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

import networkx as nx

from opsplan.core.activity import Number
from opsplan.core.graph import ProjectGraph
from opsplan.errors import InconsistentGraphError, UnknownActivityError

logger = logging.getLogger(__name__)


@dataclass
class ScheduleStats:
    """
    Statistics of the last recompute.

    Attributes:
        num_activities: Activities scheduled
        num_edges: Precedence edges traversed
        total_duration: Resulting project duration
        num_critical: Number of critical activities
        solve_time: Wall time of the recompute in seconds
    """
    num_activities: int = 0
    num_edges: int = 0
    total_duration: Number = 0
    num_critical: int = 0
    solve_time: float = 0.0


@dataclass
class _ScheduleTable:
    """Derived values computed before they are committed to the graph."""
    early_start: dict[str, Number] = field(default_factory=dict)
    early_finish: dict[str, Number] = field(default_factory=dict)
    late_start: dict[str, Number] = field(default_factory=dict)
    late_finish: dict[str, Number] = field(default_factory=dict)
    total_duration: Number = 0


class CPMEngine:
    """
    Stateless CPM scheduler.

    The engine borrows the graph for the duration of recompute() and keeps
    no reference to it afterward; only ``last_stats`` survives the call.

    Example:
        >>> engine = CPMEngine()
        >>> _ = engine.recompute(graph)
        >>> graph.total_duration, graph.critical_path
        (11, ['A', 'C', 'D'])
    """

    def __init__(self):
        self.last_stats: Optional[ScheduleStats] = None

    def recompute(self, graph: ProjectGraph) -> ProjectGraph:
        """
        Recompute every derived schedule field of ``graph`` in place.

        Args:
            graph: An acyclic project graph

        Returns:
            The same graph, with updated schedule fields

        Raises:
            InconsistentGraphError: If the graph contains a cycle (derived
                fields are left untouched)
            UnknownActivityError: If a predecessor id is dangling
        """
        start_time = time.time()

        if graph.num_activities == 0:
            graph.reset_schedule()
            graph.mark_scheduled()
            self.last_stats = ScheduleStats(solve_time=time.time() - start_time)
            logger.debug("Empty project '%s': nothing to schedule", graph.name)
            return graph

        # Both passes read edges from this one snapshot of the predecessor lists
        G = self._network(graph)
        order = self._topological_order(graph, G)
        table = self._forward_pass(graph, order)
        self._backward_pass(graph, G, order, table)
        self._commit(graph, table)

        self.last_stats = ScheduleStats(
            num_activities=graph.num_activities,
            num_edges=graph.num_edges,
            total_duration=graph.total_duration,
            num_critical=len(graph.critical_path),
            solve_time=time.time() - start_time,
        )
        logger.info(
            "Scheduled '%s': %d activities, duration %s, critical path %s",
            graph.name,
            graph.num_activities,
            graph.total_duration,
            " -> ".join(graph.critical_path),
        )
        return graph

    # =========================================================================
    # Passes
    # =========================================================================

    def _network(self, graph: ProjectGraph) -> nx.DiGraph:
        """Precedence digraph built from the current predecessor lists."""
        for activity in graph.activities:
            for pred_id in activity.predecessors:
                if pred_id not in graph:
                    logger.error(
                        "Activity '%s' references unknown predecessor '%s'",
                        activity.id, pred_id,
                    )
                    raise UnknownActivityError(pred_id, f"predecessor of '{activity.id}'")

        return graph.to_networkx()

    def _topological_order(self, graph: ProjectGraph, G: nx.DiGraph) -> list[str]:
        """Topological order with ties broken by insertion position."""
        try:
            return list(nx.lexicographical_topological_sort(
                G, key=lambda node: G.nodes[node]["position"]
            ))
        except nx.NetworkXUnfeasible:
            unscheduled = self._nodes_on_cycles(G, graph)
            logger.error(
                "Project '%s' has a precedence cycle through %s",
                graph.name, ", ".join(unscheduled),
            )
            raise InconsistentGraphError(unscheduled) from None

    @staticmethod
    def _nodes_on_cycles(G: nx.DiGraph, graph: ProjectGraph) -> list[str]:
        """Ids of activities that lie on a cycle, in insertion order."""
        on_cycle: set[str] = set()
        for component in nx.strongly_connected_components(G):
            if len(component) > 1:
                on_cycle.update(component)
            else:
                node = next(iter(component))
                if G.has_edge(node, node):
                    on_cycle.add(node)
        return [a.id for a in graph.activities if a.id in on_cycle]

    def _forward_pass(self, graph: ProjectGraph, order: list[str]) -> _ScheduleTable:
        """Earliest times and project duration."""
        table = _ScheduleTable()

        for activity_id in order:
            activity = graph.get_activity(activity_id)
            if activity.predecessors:
                es = max(table.early_finish[p] for p in activity.predecessors)
            else:
                es = 0
            table.early_start[activity_id] = es
            table.early_finish[activity_id] = es + activity.duration

        table.total_duration = max(table.early_finish.values())
        return table

    def _backward_pass(
        self,
        graph: ProjectGraph,
        G: nx.DiGraph,
        order: list[str],
        table: _ScheduleTable,
    ) -> None:
        """Latest times, walking successors from the far end."""
        total = table.total_duration

        for activity_id in reversed(order):
            activity = graph.get_activity(activity_id)
            successors = list(G.successors(activity_id))
            if successors:
                lf = min(table.late_start[s] for s in successors)
            else:
                lf = total
            table.late_finish[activity_id] = lf
            table.late_start[activity_id] = lf - activity.duration

    def _commit(self, graph: ProjectGraph, table: _ScheduleTable) -> None:
        """Write the computed table into the graph."""
        for activity in graph.activities:
            activity.early_start = table.early_start[activity.id]
            activity.early_finish = table.early_finish[activity.id]
            activity.late_start = table.late_start[activity.id]
            activity.late_finish = table.late_finish[activity.id]
            activity.slack = activity.late_start - activity.early_start
            activity.is_critical = activity.slack == 0

        graph.total_duration = table.total_duration

        # sorted() is stable, so equal early starts keep insertion order
        critical = [a for a in graph.activities if a.is_critical]
        graph.critical_path = [
            a.id for a in sorted(critical, key=lambda a: a.early_start)
        ]
        graph.mark_scheduled()


def recompute_schedule(graph: ProjectGraph) -> ProjectGraph:
    """
    Recompute the CPM schedule of ``graph`` in place.

    Convenience wrapper around CPMEngine().recompute().
    """
    return CPMEngine().recompute(graph)
