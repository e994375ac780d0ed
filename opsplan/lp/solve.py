"""
One-call entry point for the product-mix problem.
"""

from typing import Optional, Union

from opsplan.config import OpsPlanConfig, config as global_config
from opsplan.core.product import ProductMixProblem, Vertex
from opsplan.lp.base import ProductMixSolver
from opsplan.lp.corner_point import CornerPointSolver
from opsplan.lp.solution import Solution


def get_solver(
    name: Optional[str] = None,
    config: Optional[OpsPlanConfig] = None,
) -> ProductMixSolver:
    """
    Create a solver by name.

    Args:
        name: "corner_point" or "highs" (default: config.default_lp_solver)
        config: Configuration to use (default: global config)

    Raises:
        ValueError: If the name is unknown
        ImportError: If "highs" is requested but highspy is missing
    """
    config = config or global_config
    name = name or config.default_lp_solver

    if name == CornerPointSolver.name:
        return CornerPointSolver(config)
    if name == "highs":
        from opsplan.lp.highs import HiGHSProductMixSolver
        return HiGHSProductMixSolver(config)
    raise ValueError(f"Unknown LP solver '{name}'")


def solve_product_mix(
    problem: ProductMixProblem,
    solver: Union[ProductMixSolver, str, None] = None,
    config: Optional[OpsPlanConfig] = None,
) -> tuple[list[Vertex], Solution]:
    """
    Enumerate the feasible vertices of ``problem`` and find its optimum.

    Args:
        problem: The product-mix problem (not modified)
        solver: Solver instance or name (default: config.default_lp_solver)
        config: Configuration to use (default: global config)

    Returns:
        (vertices ordered by angle, optimal solution)

    Example:
        >>> from opsplan.applications import apparel_product_mix
        >>> vertices, solution = solve_product_mix(apparel_product_mix())
        >>> solution.feasible
        True
    """
    if not isinstance(solver, ProductMixSolver):
        solver = get_solver(solver, config)
    return solver.solve(problem)
