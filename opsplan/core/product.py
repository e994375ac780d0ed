"""
Product-mix model - the data of the two-product LP problem.

The problem being modeled:

    max  p_x * x + p_y * y                  (total profit)
    s.t. t_x * x + t_y * y <= H             (production hours)
         m_x * x + m_y * y <= M             (raw material)
         0 <= x <= cap_x                    (storage for product X)
         0 <= y <= cap_y                    (storage for product Y)

This module provides:
- Product: per-unit data of one product
- ResourceConstraints: shared resource limits
- ProductSlot: which product (X or Y) a field edit targets
- Vertex: a corner of the feasible region
- ProductMixProblem: container tying the above together
"""

import copy
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional, Union

from opsplan.core.activity import Number


class ProductSlot(Enum):
    """The two decision variables of the product-mix problem."""
    X = "x"
    Y = "y"

    @classmethod
    def parse(cls, which: Union['ProductSlot', str]) -> 'ProductSlot':
        """Accept a ProductSlot or the strings "x"/"y" (any case)."""
        if isinstance(which, cls):
            return which
        try:
            return cls(str(which).lower())
        except ValueError:
            raise ValueError(f"Unknown product '{which}', expected 'x' or 'y'") from None


@dataclass
class Product:
    """
    A product competing for shared resources.

    Attributes:
        name: Product name (used for display)
        unit_profit: Profit per unit produced
        time_per_unit: Production hours consumed per unit
        material_per_unit: Raw material consumed per unit
        max_inventory: Storage capacity (upper bound on units)
    """
    name: str
    unit_profit: Number
    time_per_unit: Number
    material_per_unit: Number
    max_inventory: Number

    def __post_init__(self):
        for f in fields(self):
            if f.name == "name":
                continue
            if getattr(self, f.name) < 0:
                raise ValueError(
                    f"Product '{self.name}': {f.name} must be >= 0, "
                    f"got {getattr(self, f.name)}"
                )


@dataclass
class ResourceConstraints:
    """
    Shared resource limits.

    Attributes:
        available_hours: Production hours available
        available_material: Raw material available
    """
    available_hours: Number
    available_material: Number

    def __post_init__(self):
        if self.available_hours < 0:
            raise ValueError(f"available_hours must be >= 0, got {self.available_hours}")
        if self.available_material < 0:
            raise ValueError(
                f"available_material must be >= 0, got {self.available_material}"
            )


@dataclass(frozen=True)
class Vertex:
    """A corner point (x, y) of the feasible region."""
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y


class ProductMixProblem:
    """
    Two-product LP problem: two products plus the shared constraints.

    The problem is a plain container; solving is delegated to the solvers in
    ``opsplan.lp``. Field edits go through set_product() / set_constraints()
    so that invalid values are rejected before anything changes.

    Example:
        >>> problem = ProductMixProblem(
        ...     Product("T-shirt", 45, 0.7, 1.5, 50),
        ...     Product("Sweater", 60, 1.2, 2.0, 50),
        ...     ResourceConstraints(90, 200),
        ... )
        >>> _ = problem.set_product("x", unit_profit=50)
        >>> problem.objective(10, 10)
        1100
    """

    def __init__(
        self,
        product_x: Product,
        product_y: Product,
        constraints: ResourceConstraints,
    ):
        self.product_x = product_x
        self.product_y = product_y
        self.constraints = constraints

        # Snapshot for reset()
        self._defaults = (
            copy.deepcopy(product_x),
            copy.deepcopy(product_y),
            copy.deepcopy(constraints),
        )

    # =========================================================================
    # Editing
    # =========================================================================

    def get_product(self, which: Union[ProductSlot, str]) -> Product:
        """Get product X or Y."""
        slot = ProductSlot.parse(which)
        return self.product_x if slot == ProductSlot.X else self.product_y

    def set_product(self, which: Union[ProductSlot, str], **changes: Any) -> Product:
        """
        Update fields of product X or Y.

        Args:
            which: ProductSlot.X / ProductSlot.Y or "x" / "y"
            **changes: Product field names and their new values

        Returns:
            The updated product

        Raises:
            ValueError: For unknown slots, unknown fields or negative values
                (the product is left unchanged)
        """
        slot = ProductSlot.parse(which)
        current = self.get_product(slot)

        known = {f.name for f in fields(Product)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown product field(s): {', '.join(sorted(unknown))}")

        values = {f.name: getattr(current, f.name) for f in fields(Product)}
        values.update(changes)
        updated = Product(**values)

        if slot == ProductSlot.X:
            self.product_x = updated
        else:
            self.product_y = updated
        return updated

    def set_constraints(
        self,
        hours: Optional[Number] = None,
        material: Optional[Number] = None,
    ) -> ResourceConstraints:
        """
        Update the resource limits (None keeps the current value).

        Raises:
            ValueError: For negative values (constraints are left unchanged)
        """
        updated = ResourceConstraints(
            available_hours=self.constraints.available_hours if hours is None else hours,
            available_material=(
                self.constraints.available_material if material is None else material
            ),
        )
        self.constraints = updated
        return updated

    def reset(self) -> None:
        """Restore the products and constraints given at construction."""
        product_x, product_y, constraints = self._defaults
        self.product_x = copy.deepcopy(product_x)
        self.product_y = copy.deepcopy(product_y)
        self.constraints = copy.deepcopy(constraints)

    # =========================================================================
    # Evaluation
    # =========================================================================

    def objective(self, x: float, y: float) -> float:
        """Total profit of producing x units of X and y units of Y."""
        return self.product_x.unit_profit * x + self.product_y.unit_profit * y

    def time_used(self, x: float, y: float) -> float:
        """Production hours consumed."""
        return self.product_x.time_per_unit * x + self.product_y.time_per_unit * y

    def material_used(self, x: float, y: float) -> float:
        """Raw material consumed."""
        return self.product_x.material_per_unit * x + self.product_y.material_per_unit * y

    def is_feasible(self, x: float, y: float, tolerance: float = 0.0) -> bool:
        """Check every constraint, allowing a violation up to ``tolerance``."""
        return (
            x >= -tolerance
            and y >= -tolerance
            and x <= self.product_x.max_inventory + tolerance
            and y <= self.product_y.max_inventory + tolerance
            and self.time_used(x, y) <= self.constraints.available_hours + tolerance
            and self.material_used(x, y) <= self.constraints.available_material + tolerance
        )

    def copy(self) -> 'ProductMixProblem':
        """Deep copy (defaults included)."""
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return (
            f"ProductMixProblem(x='{self.product_x.name}', y='{self.product_y.name}', "
            f"hours={self.constraints.available_hours}, "
            f"material={self.constraints.available_material})"
        )
