"""
HiGHS implementation of the product-mix solver.

The corner-point solver is exact for two variables, so HiGHS is not needed
to find the optimum. It is provided as an independent cross-check: the same
LP handed to a real simplex code must reach the same objective value.

Usage:
    >>> from opsplan.lp import HiGHSProductMixSolver
    >>> vertices, solution = HiGHSProductMixSolver().solve(problem)
    >>> solution.objective_value
    5000.0
"""

import logging
from typing import Optional

try:
    import highspy
    HIGHS_AVAILABLE = True
except ImportError:
    HIGHS_AVAILABLE = False

from opsplan.config import OpsPlanConfig, config as global_config
from opsplan.core.product import ProductMixProblem, Vertex
from opsplan.lp.base import ProductMixSolver
from opsplan.lp.corner_point import INFEASIBLE_MESSAGE, OPTIMAL_MESSAGE, CornerPointSolver
from opsplan.lp.solution import Solution, SolutionStatus

logger = logging.getLogger(__name__)


def _map_highs_status(status) -> SolutionStatus:
    """Map HiGHS model status to our SolutionStatus."""
    if not HIGHS_AVAILABLE:
        return SolutionStatus.ERROR

    status_map = {
        highspy.HighsModelStatus.kNotset: SolutionStatus.NOT_SOLVED,
        highspy.HighsModelStatus.kOptimal: SolutionStatus.OPTIMAL,
        highspy.HighsModelStatus.kInfeasible: SolutionStatus.INFEASIBLE,
        highspy.HighsModelStatus.kModelEmpty: SolutionStatus.ERROR,
        highspy.HighsModelStatus.kLoadError: SolutionStatus.ERROR,
        highspy.HighsModelStatus.kModelError: SolutionStatus.ERROR,
        highspy.HighsModelStatus.kSolveError: SolutionStatus.ERROR,
    }

    return status_map.get(status, SolutionStatus.ERROR)


class HiGHSProductMixSolver(ProductMixSolver):
    """
    Product-mix solver using HiGHS.

    The model has two bounded columns and two rows:

        max  p_x x + p_y y
        s.t. t_x x + t_y y <= H
             m_x x + m_y y <= M
             0 <= x <= cap_x,  0 <= y <= cap_y

    The feasible vertices are still enumerated so callers can draw the
    region, but the optimum comes from HiGHS.
    """

    name = "highs"

    def __init__(
        self,
        config: Optional[OpsPlanConfig] = None,
        time_limit: Optional[float] = None,
        verbosity: int = 0,
    ):
        """
        Initialize the HiGHS solver.

        Args:
            config: Configuration providing tolerances (default: global config)
            time_limit: Maximum solve time in seconds (None = no limit)
            verbosity: HiGHS output level (0 = silent)

        Raises:
            ImportError: If highspy is not installed
        """
        if not HIGHS_AVAILABLE:
            raise ImportError(
                "HiGHS is not available. Install it with: pip install highspy"
            )

        self._time_limit = time_limit
        self._verbosity = verbosity
        super().__init__(config)

    def _build_model(self, problem: ProductMixProblem) -> "highspy.Highs":
        highs = highspy.Highs()
        highs.setOptionValue('output_flag', self._verbosity > 0)
        highs.setOptionValue('log_to_console', self._verbosity > 0)
        if self._time_limit is not None:
            highs.setOptionValue('time_limit', self._time_limit)

        highs.changeObjectiveSense(highspy.ObjSense.kMaximize)

        px, py = problem.product_x, problem.product_y
        # addCol(cost, lower, upper, num_nz, indices, values)
        highs.addCol(px.unit_profit, 0.0, px.max_inventory, 0, [], [])
        highs.addCol(py.unit_profit, 0.0, py.max_inventory, 0, [], [])

        rows = (
            ((px.time_per_unit, py.time_per_unit), problem.constraints.available_hours),
            ((px.material_per_unit, py.material_per_unit), problem.constraints.available_material),
        )
        for coefficients, upper in rows:
            indices = [i for i, c in enumerate(coefficients) if c != 0.0]
            values = [coefficients[i] for i in indices]
            highs.addRow(-highspy.kHighsInf, upper, len(indices), indices, values)

        return highs

    def _solve_impl(
        self,
        problem: ProductMixProblem,
        vertices: list[Vertex],
    ) -> Solution:
        highs = self._build_model(problem)
        highs.run()

        status = _map_highs_status(highs.getModelStatus())
        if status != SolutionStatus.OPTIMAL:
            logger.warning("HiGHS finished with status %s", status.name)
            return Solution(
                feasible=False,
                message=INFEASIBLE_MESSAGE if status == SolutionStatus.INFEASIBLE
                else f"HiGHS finished with status {status.name}",
                status=status,
            )

        x, y = highs.getSolution().col_value[:2]
        x, y = float(x) + 0.0, float(y) + 0.0
        return Solution(
            x=x,
            y=y,
            objective_value=problem.objective(x, y),
            feasible=True,
            message=OPTIMAL_MESSAGE,
            status=SolutionStatus.OPTIMAL,
        )

    def set_time_limit(self, seconds: float) -> None:
        """Set the time limit used by subsequent solves."""
        self._time_limit = seconds

    def set_verbosity(self, level: int) -> None:
        """Set the HiGHS output level (0 = silent)."""
        self._verbosity = level


def cross_check(
    problem: ProductMixProblem,
    config: Optional[OpsPlanConfig] = None,
) -> tuple[Solution, Solution, bool]:
    """
    Solve ``problem`` with both solvers and compare the objective values.

    Args:
        problem: The problem to solve
        config: Configuration providing the ``highs_cross_check`` tolerance

    Returns:
        (corner-point solution, HiGHS solution, whether they agree)
    """
    config = config or global_config
    _, corner = CornerPointSolver(config).solve(problem)
    _, highs = HiGHSProductMixSolver(config).solve(problem)

    tolerance = config.get_tolerance("highs_cross_check")
    scale = max(1.0, abs(corner.objective_value))
    agree = (
        corner.feasible == highs.feasible
        and abs(corner.objective_value - highs.objective_value) <= tolerance * scale
    )
    if not agree:
        logger.warning(
            "Solvers disagree on %r: corner point %s, HiGHS %s",
            problem, corner, highs,
        )
    return corner, highs, agree
