"""
Product-mix solution module.

This module defines the data structures for representing solutions of the
two-product LP problem and how much of each resource they consume.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from opsplan.core.product import ProductMixProblem, Vertex


class SolutionStatus(Enum):
    """
    Status of a product-mix solution.
    """
    OPTIMAL = auto()     # Optimal vertex found
    INFEASIBLE = auto()  # No feasible vertex
    NOT_SOLVED = auto()  # Solve not called yet
    ERROR = auto()       # Solver error occurred


@dataclass
class Solution:
    """
    Result of solving the product-mix problem.

    Attributes:
        x: Units of product X
        y: Units of product Y
        objective_value: Total profit at (x, y)
        feasible: Whether a feasible vertex was found
        message: Human-readable status message
        status: Solution status
        solver: Name of the solver that produced the solution
        solve_time: Time spent solving in seconds

    Example:
        >>> vertices, solution = solve_product_mix(problem)
        >>> if solution.feasible:
        ...     print(f"Make {solution.x} x {solution.y}: {solution.objective_value}")
    """
    x: float = 0.0
    y: float = 0.0
    objective_value: float = 0.0
    feasible: bool = False
    message: str = ""
    status: SolutionStatus = SolutionStatus.NOT_SOLVED
    solver: str = ""
    solve_time: float = 0.0

    @property
    def is_optimal(self) -> bool:
        """Check if solution is optimal."""
        return self.status == SolutionStatus.OPTIMAL

    @property
    def vertex(self) -> Vertex:
        """The solution point as a Vertex."""
        return Vertex(self.x, self.y)

    def summary(self) -> str:
        """
        Return a human-readable summary of the solution.

        Returns:
            Summary string
        """
        lines = [
            "Solution:",
            f"  Status: {self.status.name}",
            f"  Message: {self.message}",
        ]
        if self.feasible:
            lines.extend([
                f"  x = {self.x:.4f}, y = {self.y:.4f}",
                f"  Objective: {self.objective_value:.4f}",
            ])
        if self.solver:
            lines.append(f"  Solver: {self.solver} ({self.solve_time:.4f}s)")
        return "\n".join(lines)

    def __repr__(self) -> str:
        if not self.feasible:
            return f"Solution({self.status.name})"
        return (
            f"Solution({self.status.name}, x={self.x:.4f}, y={self.y:.4f}, "
            f"obj={self.objective_value:.4f})"
        )


@dataclass
class ResourceUsage:
    """Consumption of one resource at the solution point."""
    used: float
    available: float

    @property
    def percentage(self) -> float:
        """Share of the available amount that is used (0 when nothing is available)."""
        if self.available == 0:
            return 0.0
        return self.used / self.available * 100

    @property
    def remaining(self) -> float:
        return self.available - self.used


@dataclass
class ResourceUtilization:
    """
    Resource consumption of a solution.

    Attributes:
        time: Production hours used vs. available
        material: Raw material used vs. available
        storage: Units stored (x + y) vs. combined storage capacity
    """
    time: ResourceUsage
    material: ResourceUsage
    storage: ResourceUsage


def resource_utilization(
    problem: ProductMixProblem,
    solution: Solution,
) -> Optional[ResourceUtilization]:
    """
    Compute how much of each resource a solution consumes.

    Args:
        problem: The problem the solution belongs to
        solution: A solution of that problem

    Returns:
        ResourceUtilization, or None if the solution is not feasible
    """
    if not solution.feasible:
        return None

    x, y = solution.x, solution.y
    return ResourceUtilization(
        time=ResourceUsage(
            used=problem.time_used(x, y),
            available=problem.constraints.available_hours,
        ),
        material=ResourceUsage(
            used=problem.material_used(x, y),
            available=problem.constraints.available_material,
        ),
        storage=ResourceUsage(
            used=x + y,
            available=problem.product_x.max_inventory + problem.product_y.max_inventory,
        ),
    )
