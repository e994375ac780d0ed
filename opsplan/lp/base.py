"""
Product-mix solver abstract base class.

This module defines the interface every product-mix solver implements.
Users can either:
1. Use the provided CornerPointSolver (default) or HiGHSProductMixSolver
2. Implement their own by subclassing ProductMixSolver

Design Philosophy:
-----------------
- Solvers are stateless: the problem is borrowed for one solve() call and
  no reference to it is kept afterward
- Every solver also returns the vertices of the feasible region, so the
  caller can draw the polygon whichever solver picked the optimum
- Hooks allow customization without full reimplementation

Example:
    >>> class MyMaximizer(ProductMixSolver):
    ...     name = "mine"
    ...
    ...     def _solve_impl(self, problem, vertices):
    ...         # Pick a vertex and wrap it in a Solution
    ...         ...
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from opsplan.config import OpsPlanConfig, config as global_config
from opsplan.core.product import ProductMixProblem, Vertex
from opsplan.lp.solution import Solution
from opsplan.lp.vertices import VertexEnumerator

logger = logging.getLogger(__name__)


class ProductMixSolver(ABC):
    """
    Abstract base class for product-mix solvers.

    Lifecycle of solve():
    --------------------
    1. _before_solve(problem) hook
    2. Enumerate the vertices of the feasible region
    3. _solve_impl(problem, vertices) picks the optimum
    4. solve_time and solver name are filled in
    5. _after_solve(problem, solution) hook

    Attributes:
        name: Short solver name stored in Solution.solver
        enumerator: Vertex enumerator used for step 2
    """

    name = "base"

    def __init__(self, config: Optional[OpsPlanConfig] = None):
        """
        Initialize the solver.

        Args:
            config: Configuration providing tolerances (default: global config)
        """
        self._config = config or global_config
        self.enumerator = VertexEnumerator(
            feasibility_tolerance=self._config.get_tolerance("feasibility"),
            determinant_tolerance=self._config.get_tolerance("determinant"),
            decimals=self._config.dedup_decimals,
        )

    def solve(self, problem: ProductMixProblem) -> tuple[list[Vertex], Solution]:
        """
        Solve the product-mix problem.

        Args:
            problem: The problem to solve (not modified)

        Returns:
            (vertices of the feasible region, optimal solution)
        """
        start_time = time.time()

        self._before_solve(problem)
        vertices = self.enumerator.enumerate_problem(problem)
        solution = self._solve_impl(problem, vertices)

        solution.solver = self.name
        solution.solve_time = time.time() - start_time
        self._after_solve(problem, solution)

        logger.info(
            "Solved %r with %s: %s", problem, self.name, solution,
        )
        return vertices, solution

    # =========================================================================
    # Required
    # =========================================================================

    @abstractmethod
    def _solve_impl(
        self,
        problem: ProductMixProblem,
        vertices: list[Vertex],
    ) -> Solution:
        """
        Find the optimal product mix.

        Args:
            problem: The problem to solve
            vertices: Feasible vertices already enumerated for the problem

        Returns:
            The solution (solver name and timing are filled in by solve())
        """

    # =========================================================================
    # Hooks
    # =========================================================================

    def _before_solve(self, problem: ProductMixProblem) -> None:
        """Called before the vertices are enumerated."""

    def _after_solve(self, problem: ProductMixProblem, solution: Solution) -> None:
        """Called after the solution is complete."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
