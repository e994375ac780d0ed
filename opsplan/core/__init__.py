"""
Core module - data structures shared by the planning engines.

Components:
----------
- Activity: A node of the project network
- ProjectGraph: The precedence network (arena + id index + successor index)
- would_create_cycle / ancestors: Reachability checks guarding edge commits
- Product, ResourceConstraints, ProductMixProblem: The two-product LP data
- Vertex: A corner of the LP feasible region
"""

from opsplan.core.activity import Activity
from opsplan.core.cycle_guard import ancestors, would_create_cycle
from opsplan.core.graph import ProjectGraph
from opsplan.core.product import (
    Product,
    ProductMixProblem,
    ProductSlot,
    ResourceConstraints,
    Vertex,
)

__all__ = [
    # Project network
    "Activity",
    "ProjectGraph",
    "would_create_cycle",
    "ancestors",
    # Product mix
    "Product",
    "ProductSlot",
    "ResourceConstraints",
    "ProductMixProblem",
    "Vertex",
]
