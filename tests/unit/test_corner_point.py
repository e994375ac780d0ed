"""
Tests for the corner-point optimizer and the solver interface.

This module tests:
- CornerPointOptimizer (objective, ties, empty input)
- ProductMixSolver ABC (via CornerPointSolver and a custom subclass)
- solve_product_mix / get_solver
"""

import pytest

from opsplan.config import OpsPlanConfig
from opsplan.core.product import Vertex
from opsplan.lp import (
    CornerPointOptimizer,
    CornerPointSolver,
    ProductMixSolver,
    Solution,
    SolutionStatus,
    get_solver,
    solve_product_mix,
)


# =============================================================================
# CornerPointOptimizer Tests
# =============================================================================


class TestCornerPointOptimizer:
    """Tests for CornerPointOptimizer.optimize."""

    def test_picks_maximum(self):
        vertices = [Vertex(0.0, 0.0), Vertex(10.0, 0.0), Vertex(0.0, 10.0)]
        solution = CornerPointOptimizer().optimize(vertices, 3, 2)
        assert (solution.x, solution.y) == (10.0, 0.0)
        assert solution.objective_value == 30
        assert solution.feasible
        assert solution.status == SolutionStatus.OPTIMAL
        assert solution.message == "Optimal solution found"

    def test_tie_keeps_first(self):
        vertices = [Vertex(0.0, 0.0), Vertex(10.0, 0.0), Vertex(0.0, 10.0)]
        solution = CornerPointOptimizer().optimize(vertices, 1, 1)
        assert (solution.x, solution.y) == (10.0, 0.0)

    def test_zero_profits_pick_first_vertex(self):
        vertices = [Vertex(5.0, 5.0), Vertex(0.0, 0.0)]
        solution = CornerPointOptimizer().optimize(vertices, 0, 0)
        assert solution.vertex == Vertex(5.0, 5.0)
        assert solution.objective_value == 0

    def test_empty_region(self):
        solution = CornerPointOptimizer().optimize([], 45, 60)
        assert not solution.feasible
        assert solution.status == SolutionStatus.INFEASIBLE
        assert (solution.x, solution.y, solution.objective_value) == (0.0, 0.0, 0.0)
        assert "No feasible solution" in solution.message

    def test_no_vertex_beats_optimum(self, apparel_problem):
        vertices, solution = solve_product_mix(apparel_problem)
        for v in vertices:
            assert apparel_problem.objective(v.x, v.y) <= solution.objective_value


# =============================================================================
# Solver Interface Tests
# =============================================================================


class TestCornerPointSolver:
    """Tests for CornerPointSolver via the ProductMixSolver interface."""

    def test_solve(self, square_problem):
        vertices, solution = CornerPointSolver().solve(square_problem)
        assert len(vertices) == 4
        assert solution.vertex == Vertex(10.0, 10.0)
        assert solution.objective_value == 50
        assert solution.solver == "corner_point"
        assert solution.solve_time >= 0

    def test_objective_is_exact(self, apparel_problem):
        _, solution = CornerPointSolver().solve(apparel_problem)
        p = apparel_problem
        assert solution.objective_value == (
            p.product_x.unit_profit * solution.x + p.product_y.unit_profit * solution.y
        )

    def test_uses_config_tolerances(self):
        config = OpsPlanConfig(tolerances={"feasibility": 0.25}, dedup_decimals=3)
        solver = CornerPointSolver(config)
        assert solver.enumerator.feasibility_tolerance == 0.25
        assert solver.enumerator.decimals == 3

    def test_hooks_called(self, square_problem):
        calls = []

        class RecordingSolver(CornerPointSolver):
            name = "recording"

            def _before_solve(self, problem):
                calls.append("before")

            def _after_solve(self, problem, solution):
                calls.append(("after", solution.solver))

        _, solution = RecordingSolver().solve(square_problem)
        assert calls == ["before", ("after", "recording")]
        assert solution.solver == "recording"

    def test_custom_subclass(self, square_problem):
        class OriginSolver(ProductMixSolver):
            name = "origin"

            def _solve_impl(self, problem, vertices):
                return Solution(feasible=True, status=SolutionStatus.OPTIMAL)

        vertices, solution = OriginSolver().solve(square_problem)
        assert len(vertices) == 4
        assert solution.solver == "origin"

    def test_abstract(self):
        with pytest.raises(TypeError):
            ProductMixSolver()


class TestSolveProductMix:
    """Tests for solver selection."""

    def test_default_solver(self, square_problem):
        _, solution = solve_product_mix(square_problem, config=OpsPlanConfig())
        assert solution.solver == "corner_point"

    def test_solver_by_name(self, square_problem):
        _, solution = solve_product_mix(square_problem, solver="corner_point")
        assert solution.is_optimal

    def test_solver_instance(self, square_problem):
        solver = CornerPointSolver()
        _, solution = solve_product_mix(square_problem, solver=solver)
        assert solution.solver == solver.name

    def test_unknown_solver(self):
        with pytest.raises(ValueError):
            get_solver("simplex")
