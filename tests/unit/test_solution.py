"""
Tests for product-mix solutions and resource utilization.
"""

import pytest

from opsplan.lp import (
    ResourceUsage,
    Solution,
    SolutionStatus,
    resource_utilization,
    solve_product_mix,
)


class TestSolution:
    """Tests for the Solution dataclass."""

    def test_defaults(self):
        solution = Solution()
        assert solution.status == SolutionStatus.NOT_SOLVED
        assert not solution.feasible
        assert not solution.is_optimal
        assert repr(solution) == "Solution(NOT_SOLVED)"

    def test_summary(self):
        solution = Solution(x=50, y=45.5, objective_value=5000, feasible=True,
                            message="Optimal solution found",
                            status=SolutionStatus.OPTIMAL, solver="corner_point")
        text = solution.summary()
        assert "OPTIMAL" in text
        assert "x = 50.0000" in text
        assert "corner_point" in text


class TestResourceUsage:
    """Tests for ResourceUsage."""

    def test_percentage(self):
        usage = ResourceUsage(used=45, available=90)
        assert usage.percentage == 50
        assert usage.remaining == 45

    def test_zero_available(self):
        assert ResourceUsage(used=0, available=0).percentage == 0.0


class TestResourceUtilization:
    """Tests for resource_utilization."""

    def test_apparel_optimum(self, apparel_problem):
        _, solution = solve_product_mix(apparel_problem)
        usage = resource_utilization(apparel_problem, solution)
        assert usage.time.used == pytest.approx(90)
        assert usage.time.percentage == pytest.approx(100)
        assert usage.material.used == pytest.approx(75 + 2 * 55 / 1.2)
        assert usage.material.available == 200
        assert usage.storage.used == pytest.approx(50 + 55 / 1.2)
        assert usage.storage.available == 100

    def test_infeasible_solution(self, apparel_problem):
        assert resource_utilization(apparel_problem, Solution()) is None

    def test_zero_hours(self, apparel_problem):
        apparel_problem.set_constraints(hours=0)
        _, solution = solve_product_mix(apparel_problem)
        usage = resource_utilization(apparel_problem, solution)
        assert usage.time.percentage == 0.0
        assert usage.storage.used == 0
