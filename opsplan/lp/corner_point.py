"""
Corner-point optimization.

By the corner-point theorem a bounded linear objective over a convex
polygon attains its maximum at a vertex, so evaluating the objective at
every vertex of the feasible region is an exact LP solver for two
variables.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from opsplan.config import OpsPlanConfig
from opsplan.core.product import ProductMixProblem, Vertex
from opsplan.lp.base import ProductMixSolver
from opsplan.lp.solution import Solution, SolutionStatus

logger = logging.getLogger(__name__)

OPTIMAL_MESSAGE = "Optimal solution found"
INFEASIBLE_MESSAGE = "No feasible solution found: the feasible region has no vertices"


class CornerPointOptimizer:
    """
    Picks the vertex maximizing ``profit_x * x + profit_y * y``.

    Ties keep the first maximal vertex in the given order.

    Example:
        >>> optimizer = CornerPointOptimizer()
        >>> solution = optimizer.optimize([Vertex(0, 0), Vertex(50, 45)], 45, 60)
        >>> solution.x, solution.y, solution.objective_value
        (50, 45, 4950)
    """

    name = "corner_point"

    def optimize(
        self,
        vertices: Sequence[Vertex],
        profit_x: float,
        profit_y: float,
    ) -> Solution:
        """
        Evaluate the objective at every vertex and return the best one.

        Args:
            vertices: Candidate vertices (typically from VertexEnumerator)
            profit_x: Objective coefficient of x
            profit_y: Objective coefficient of y

        Returns:
            The optimal Solution, or an infeasible Solution at (0, 0) if
            ``vertices`` is empty
        """
        if not vertices:
            logger.info("Feasible region is empty; no product mix possible")
            return Solution(
                x=0.0,
                y=0.0,
                objective_value=0.0,
                feasible=False,
                message=INFEASIBLE_MESSAGE,
                status=SolutionStatus.INFEASIBLE,
                solver=self.name,
            )

        best = vertices[0]
        best_value = profit_x * best.x + profit_y * best.y
        for vertex in vertices[1:]:
            value = profit_x * vertex.x + profit_y * vertex.y
            if value > best_value:
                best, best_value = vertex, value

        logger.debug(
            "Best of %d vertices: (%s, %s) with objective %s",
            len(vertices), best.x, best.y, best_value,
        )
        return Solution(
            x=best.x,
            y=best.y,
            objective_value=best_value,
            feasible=True,
            message=OPTIMAL_MESSAGE,
            status=SolutionStatus.OPTIMAL,
            solver=self.name,
        )


class CornerPointSolver(ProductMixSolver):
    """
    Default product-mix solver: vertex enumeration plus corner-point search.

    Example:
        >>> vertices, solution = CornerPointSolver().solve(problem)
        >>> solution.is_optimal
        True
    """

    name = CornerPointOptimizer.name

    def __init__(self, config: Optional[OpsPlanConfig] = None):
        super().__init__(config)
        self.optimizer = CornerPointOptimizer()

    def _solve_impl(
        self,
        problem: ProductMixProblem,
        vertices: list[Vertex],
    ) -> Solution:
        return self.optimizer.optimize(
            vertices,
            problem.product_x.unit_profit,
            problem.product_y.unit_profit,
        )
