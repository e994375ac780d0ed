"""
Planning session: one project network and one product-mix problem.

The session is the stateful façade over the stateless engines. Every
mutation is followed by a recompute of the part it affects, and registered
callbacks are told when a schedule or a product-mix solution is ready.

Re-entrancy:
-----------
A callback may mutate the session again. While a recompute is running the
session is in the COMPUTING state; further recompute requests are queued and
coalesced into one follow-up pass per kind, run before the outermost request
returns. No request is ever dropped.

Example:
    >>> session = PlanningSession()
    >>> session.graph.total_duration
    21
    >>> _ = session.add_activity("Final inspection", 1, predecessors=["J"])
    >>> session.graph.total_duration
    22
"""

import logging
from enum import Enum, auto
from typing import Any, Callable, Iterable, Optional, Union

from opsplan.applications import apparel_product_mix, warehouse_expansion_project
from opsplan.config import OpsPlanConfig, config as global_config
from opsplan.core.activity import Activity, Number
from opsplan.core.graph import ProjectGraph
from opsplan.core.product import Product, ProductMixProblem, ProductSlot, ResourceConstraints, Vertex
from opsplan.lp.base import ProductMixSolver
from opsplan.lp.solution import ResourceUtilization, Solution, resource_utilization
from opsplan.lp.solve import get_solver
from opsplan.scheduling.cpm import CPMEngine
from opsplan.scheduling.layout import LayoutOptions, NetworkLayout, network_layout

logger = logging.getLogger(__name__)

SCHEDULE = "schedule"
PRODUCT_MIX = "product_mix"

# Recompute kinds in the order a coalesced pass runs them
_KINDS = (SCHEDULE, PRODUCT_MIX)

# Type alias for callback functions: (session, kind) -> None
SessionCallback = Callable[['PlanningSession', str], None]


class SessionState(Enum):
    """Whether a recompute is in progress."""
    IDLE = auto()
    COMPUTING = auto()


class PlanningSession:
    """
    Owns a ProjectGraph and a ProductMixProblem and keeps both solved.

    Attributes:
        graph: The project network (scheduled after every mutation)
        problem: The product-mix problem
        vertices: Feasible vertices of the last product-mix solve
        solution: Last product-mix solution
        state: IDLE or COMPUTING
        schedule_runs: Number of schedule recomputes performed
        lp_runs: Number of product-mix solves performed
    """

    def __init__(
        self,
        graph: Optional[ProjectGraph] = None,
        problem: Optional[ProductMixProblem] = None,
        config: Optional[OpsPlanConfig] = None,
        solver: Union[ProductMixSolver, str, None] = None,
    ):
        """
        Create a session and compute the initial schedule and solution.

        Args:
            graph: Project network (default: Warehouse Expansion)
            problem: Product-mix problem (default: apparel mix)
            config: Configuration (default: global config)
            solver: LP solver instance or name (default: config.default_lp_solver)
        """
        self.config = config or global_config
        self.graph = graph if graph is not None else warehouse_expansion_project()
        self.problem = problem if problem is not None else apparel_product_mix()

        self.engine = CPMEngine()
        if isinstance(solver, ProductMixSolver):
            self.solver = solver
        else:
            self.solver = get_solver(solver, self.config)

        self.vertices: list[Vertex] = []
        self.solution = Solution()
        self.state = SessionState.IDLE
        self.schedule_runs = 0
        self.lp_runs = 0

        self._pending: set[str] = set()
        self._callbacks: list[SessionCallback] = []

        self._request(SCHEDULE, PRODUCT_MIX)

    def add_callback(self, callback: SessionCallback) -> None:
        """
        Add a callback invoked after each successful recompute.

        Args:
            callback: Function taking (PlanningSession, kind) where kind is
                "schedule" or "product_mix"
        """
        self._callbacks.append(callback)

    # =========================================================================
    # Project Network
    # =========================================================================

    def add_activity(
        self,
        name: str,
        duration: Number,
        predecessors: Iterable[str] = (),
    ) -> Activity:
        """Add an activity with the next free id and reschedule."""
        activity = self.graph.add_activity(name, duration, predecessors)
        self._request(SCHEDULE)
        return activity

    def add_predecessor(self, activity_id: str, predecessor_id: str) -> bool:
        """
        Make ``activity_id`` depend on ``predecessor_id`` and reschedule.

        Returns:
            False if the edge already existed (nothing to recompute)

        Raises:
            CycleDetectedError: If the edge would close a cycle
        """
        added = self.graph.add_predecessor(activity_id, predecessor_id)
        if added:
            self._request(SCHEDULE)
        return added

    def remove_predecessor(self, activity_id: str, predecessor_id: str) -> bool:
        """Drop a dependency edge and reschedule."""
        removed = self.graph.remove_predecessor(activity_id, predecessor_id)
        if removed:
            self._request(SCHEDULE)
        return removed

    def remove_activity(self, activity_id: str) -> Activity:
        """Remove an activity (and all edges to it) and reschedule."""
        activity = self.graph.remove_activity(activity_id)
        self._request(SCHEDULE)
        return activity

    def update_activity(
        self,
        activity_id: str,
        name: Optional[str] = None,
        duration: Optional[Number] = None,
    ) -> Activity:
        """Rename and/or change the duration of an activity and reschedule."""
        activity = self.graph.update_activity(activity_id, name=name, duration=duration)
        self._request(SCHEDULE)
        return activity

    def new_project(self, name: str = "New Project") -> None:
        """Discard every activity and start an empty project."""
        self.graph.clear(name)
        self._request(SCHEDULE)

    def load_default_project(self) -> None:
        """Replace the project with the Warehouse Expansion network."""
        self.graph = warehouse_expansion_project()
        self._request(SCHEDULE)

    def recompute_schedule(self) -> ProjectGraph:
        """Recompute the schedule explicitly."""
        self._request(SCHEDULE)
        return self.graph

    def layout(self, options: Optional[LayoutOptions] = None) -> NetworkLayout:
        """Diagram coordinates of the current schedule."""
        return network_layout(self.graph, options)

    # =========================================================================
    # Product Mix
    # =========================================================================

    def set_product(self, which: Union[ProductSlot, str], **changes: Any) -> Product:
        """Edit product "x" or "y" and re-solve."""
        product = self.problem.set_product(which, **changes)
        self._request(PRODUCT_MIX)
        return product

    def set_constraints(
        self,
        hours: Optional[Number] = None,
        material: Optional[Number] = None,
    ) -> ResourceConstraints:
        """Change the available hours and/or material and re-solve."""
        constraints = self.problem.set_constraints(hours=hours, material=material)
        self._request(PRODUCT_MIX)
        return constraints

    def reset_product_mix(self) -> None:
        """Restore the products and constraints the problem started with."""
        self.problem.reset()
        self._request(PRODUCT_MIX)

    def solve(self) -> tuple[list[Vertex], Solution]:
        """Re-solve the product-mix problem explicitly."""
        self._request(PRODUCT_MIX)
        return self.vertices, self.solution

    def utilization(self) -> Optional[ResourceUtilization]:
        """Resource consumption of the current solution (None if infeasible)."""
        return resource_utilization(self.problem, self.solution)

    # =========================================================================
    # Recompute Loop
    # =========================================================================

    def _request(self, *kinds: str) -> None:
        """
        Queue recomputes and run them unless a recompute is already running.

        Requests made while COMPUTING (from a callback) are picked up by the
        loop of the outermost request.
        """
        self._pending.update(kinds)
        if self.state == SessionState.COMPUTING:
            logger.debug("Recompute of %s coalesced", ", ".join(sorted(kinds)))
            return

        self.state = SessionState.COMPUTING
        try:
            while self._pending:
                kind = next(k for k in _KINDS if k in self._pending)
                self._pending.discard(kind)
                self._run(kind)
                self._invoke_callbacks(kind)
        finally:
            self._pending.clear()
            self.state = SessionState.IDLE

    def _run(self, kind: str) -> None:
        if kind == SCHEDULE:
            self.engine.recompute(self.graph)
            self.schedule_runs += 1
        else:
            self.vertices, self.solution = self.solver.solve(self.problem)
            self.lp_runs += 1

    def _invoke_callbacks(self, kind: str) -> None:
        for callback in self._callbacks:
            callback(self, kind)

    def __repr__(self) -> str:
        return (
            f"PlanningSession(project='{self.graph.name}', "
            f"activities={self.graph.num_activities}, state={self.state.name})"
        )
