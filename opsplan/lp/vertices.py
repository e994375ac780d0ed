"""
Vertex enumeration for the two-product feasible region.

The feasible region is the convex polygon bounded by six lines:

    row  line                         constraint
    0    x = 0                        x >= 0
    1    y = 0                        y >= 0
    2    x = cap_x                    x <= cap_x
    3    y = cap_y                    y <= cap_y
    4    t_x x + t_y y = H            t_x x + t_y y <= H
    5    m_x x + m_y y = M            m_x x + m_y y <= M

Every vertex of the polygon is the intersection of two boundary lines, so we
intersect all 15 pairs (Cramer's rule), drop pairs whose determinant is
(near) zero, keep candidates satisfying every constraint within tolerance,
deduplicate them and sort them by angle around their centroid.

A zero per-unit coefficient simply makes some pairs parallel; those pairs
are skipped by the determinant test like any other parallel pair.
"""

import logging
from itertools import combinations
from typing import Optional

import numpy as np

from opsplan.config import config
from opsplan.core.product import Product, ProductMixProblem, ResourceConstraints, Vertex

logger = logging.getLogger(__name__)

BOUNDARY_NAMES = (
    "x-axis bound (x = 0)",
    "y-axis bound (y = 0)",
    "storage X",
    "storage Y",
    "hours",
    "material",
)


class VertexEnumerator:
    """
    Computes the corner points of the product-mix feasible region.

    Attributes:
        feasibility_tolerance: Allowed constraint violation for a candidate
        determinant_tolerance: Pairs with |det| below this are skipped
        decimals: Decimal places used to detect duplicate vertices

    Example:
        >>> enumerator = VertexEnumerator()
        >>> vertices = enumerator.enumerate(product_x, product_y, constraints)
        >>> Vertex(0.0, 0.0) in vertices
        True
    """

    def __init__(
        self,
        feasibility_tolerance: Optional[float] = None,
        determinant_tolerance: Optional[float] = None,
        decimals: Optional[int] = None,
    ):
        if feasibility_tolerance is None:
            feasibility_tolerance = config.get_tolerance("feasibility")
        if determinant_tolerance is None:
            determinant_tolerance = config.get_tolerance("determinant")
        if decimals is None:
            decimals = config.dedup_decimals

        self.feasibility_tolerance = feasibility_tolerance
        self.determinant_tolerance = determinant_tolerance
        self.decimals = decimals

    # =========================================================================
    # Public API
    # =========================================================================

    def enumerate(
        self,
        product_x: Product,
        product_y: Product,
        constraints: ResourceConstraints,
    ) -> list[Vertex]:
        """
        Enumerate the vertices of the feasible region.

        Args:
            product_x: First product (x axis)
            product_y: Second product (y axis)
            constraints: Shared resource limits

        Returns:
            Feasible vertices ordered by angle around their centroid
            (empty if no candidate is feasible)
        """
        lines, rhs = self.boundary_lines(product_x, product_y, constraints)
        lhs_matrix, upper = self.constraint_system(product_x, product_y, constraints)

        candidates: list[Vertex] = []
        skipped = 0
        for i, j in combinations(range(len(lines)), 2):
            point = self._intersect(lines[i], rhs[i], lines[j], rhs[j])
            if point is None:
                logger.debug(
                    "Skipping parallel boundaries: %s / %s",
                    BOUNDARY_NAMES[i], BOUNDARY_NAMES[j],
                )
                skipped += 1
                continue
            if self._satisfies(lhs_matrix, upper, point):
                # + 0.0 turns a negative zero into 0.0
                candidates.append(Vertex(float(point[0]) + 0.0, float(point[1]) + 0.0))

        vertices = self._order_by_angle(self._deduplicate(candidates))
        logger.debug(
            "Enumerated %d vertices (%d parallel pairs skipped)",
            len(vertices), skipped,
        )
        return vertices

    def enumerate_problem(self, problem: ProductMixProblem) -> list[Vertex]:
        """Enumerate the vertices of a ProductMixProblem."""
        return self.enumerate(problem.product_x, problem.product_y, problem.constraints)

    @staticmethod
    def boundary_lines(
        product_x: Product,
        product_y: Product,
        constraints: ResourceConstraints,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        The six boundary lines as rows ``a x + b y = c``.

        Returns:
            (coefficients of shape (6, 2), right-hand sides of shape (6,))
        """
        lines = np.array([
            [1.0, 0.0],
            [0.0, 1.0],
            [1.0, 0.0],
            [0.0, 1.0],
            [product_x.time_per_unit, product_y.time_per_unit],
            [product_x.material_per_unit, product_y.material_per_unit],
        ], dtype=float)
        rhs = np.array([
            0.0,
            0.0,
            product_x.max_inventory,
            product_y.max_inventory,
            constraints.available_hours,
            constraints.available_material,
        ], dtype=float)
        return lines, rhs

    @staticmethod
    def constraint_system(
        product_x: Product,
        product_y: Product,
        constraints: ResourceConstraints,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        All six constraints in the form ``A @ (x, y) <= b``.
        """
        lhs_matrix = np.array([
            [-1.0, 0.0],
            [0.0, -1.0],
            [1.0, 0.0],
            [0.0, 1.0],
            [product_x.time_per_unit, product_y.time_per_unit],
            [product_x.material_per_unit, product_y.material_per_unit],
        ], dtype=float)
        upper = np.array([
            0.0,
            0.0,
            product_x.max_inventory,
            product_y.max_inventory,
            constraints.available_hours,
            constraints.available_material,
        ], dtype=float)
        return lhs_matrix, upper

    # =========================================================================
    # Helpers
    # =========================================================================

    def _intersect(
        self,
        line_a: np.ndarray,
        c_a: float,
        line_b: np.ndarray,
        c_b: float,
    ) -> Optional[np.ndarray]:
        """Intersection of two lines, or None if they are (near) parallel."""
        a1, b1 = line_a
        a2, b2 = line_b
        det = a1 * b2 - a2 * b1
        if abs(det) < self.determinant_tolerance:
            return None
        x = (c_a * b2 - c_b * b1) / det
        y = (a1 * c_b - a2 * c_a) / det
        return np.array([x, y])

    def _satisfies(self, lhs_matrix: np.ndarray, upper: np.ndarray, point: np.ndarray) -> bool:
        return bool(np.all(lhs_matrix @ point <= upper + self.feasibility_tolerance))

    def _deduplicate(self, vertices: list[Vertex]) -> list[Vertex]:
        """Keep the first vertex of each group that rounds to the same point."""
        unique: list[Vertex] = []
        seen: set[tuple[float, float]] = set()
        for vertex in vertices:
            key = (round(vertex.x, self.decimals) + 0.0, round(vertex.y, self.decimals) + 0.0)
            if key not in seen:
                seen.add(key)
                unique.append(vertex)
        return unique

    @staticmethod
    def _order_by_angle(vertices: list[Vertex]) -> list[Vertex]:
        """Sort vertices counter-clockwise by angle around their centroid."""
        if len(vertices) <= 1:
            return vertices

        points = np.array([v.as_tuple() for v in vertices])
        centroid = points.mean(axis=0)
        angles = np.arctan2(points[:, 1] - centroid[1], points[:, 0] - centroid[0])
        order = np.argsort(angles, kind="stable")
        return [vertices[i] for i in order]


def enumerate_vertices(problem: ProductMixProblem) -> list[Vertex]:
    """Enumerate the feasible vertices of ``problem`` with default settings."""
    return VertexEnumerator().enumerate_problem(problem)
