"""
LP module - the two-product, two-resource production mix.

The problem:

    maximize   p_x x + p_y y
    subject to t_x x + t_y y <= H        (production hours)
               m_x x + m_y y <= M        (raw material)
               0 <= x <= cap_x, 0 <= y <= cap_y

This module provides:
- VertexEnumerator: Corner points of the feasible region
- CornerPointOptimizer / CornerPointSolver: Exact two-variable LP solver
- HiGHSProductMixSolver: Cross-check solver using HiGHS
- Solution, SolutionStatus: Result data structures
- resource_utilization: Resource consumption of a solution

Usage:
------
    >>> from opsplan.lp import solve_product_mix
    >>> vertices, solution = solve_product_mix(problem)
    >>> solution.x, solution.y, solution.objective_value
"""

from opsplan.lp.solution import (
    ResourceUsage,
    ResourceUtilization,
    Solution,
    SolutionStatus,
    resource_utilization,
)
from opsplan.lp.vertices import VertexEnumerator, enumerate_vertices
from opsplan.lp.base import ProductMixSolver
from opsplan.lp.corner_point import CornerPointOptimizer, CornerPointSolver
from opsplan.lp.solve import get_solver, solve_product_mix

# Try to import HiGHS implementation
try:
    from opsplan.lp.highs import HiGHSProductMixSolver, HIGHS_AVAILABLE, cross_check
except ImportError:
    HIGHS_AVAILABLE = False
    HiGHSProductMixSolver = None  # type: ignore
    cross_check = None  # type: ignore


__all__ = [
    # Solution
    'Solution',
    'SolutionStatus',
    'ResourceUsage',
    'ResourceUtilization',
    'resource_utilization',

    # Vertices
    'VertexEnumerator',
    'enumerate_vertices',

    # Solvers
    'ProductMixSolver',
    'CornerPointOptimizer',
    'CornerPointSolver',
    'get_solver',
    'solve_product_mix',

    # HiGHS implementation
    'HiGHSProductMixSolver',
    'HIGHS_AVAILABLE',
    'cross_check',
]
