"""
OpsPlan: Operations Planning Toolkit

Two independent planning engines sharing one data model:

- Project scheduling with the Critical Path Method (CPM) on an
  activity-on-node precedence network
- A two-product, two-resource production mix solved by corner-point
  enumeration (with HiGHS as a cross-check)
"""

import logging

__version__ = "0.1.0"

# Configuration
from opsplan.config import config, configure_logging, get_tolerance, set_tolerance

# Errors
from opsplan.errors import (
    CycleDetectedError,
    InconsistentGraphError,
    OpsPlanError,
    UnknownActivityError,
)

# Core classes - these are the main user-facing API
from opsplan.core import (
    Activity,
    Product,
    ProductMixProblem,
    ProductSlot,
    ProjectGraph,
    ResourceConstraints,
    Vertex,
    would_create_cycle,
)

# Scheduling
from opsplan.scheduling import CPMEngine, network_layout, recompute_schedule

# Product mix
from opsplan.lp import (
    HIGHS_AVAILABLE,
    CornerPointOptimizer,
    CornerPointSolver,
    HiGHSProductMixSolver,
    ProductMixSolver,
    Solution,
    SolutionStatus,
    VertexEnumerator,
    resource_utilization,
    solve_product_mix,
)

# Applications
from opsplan.applications import apparel_product_mix, warehouse_expansion_project

# Session
from opsplan.session import PlanningSession, SessionState

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Configuration
    "config",
    "configure_logging",
    "get_tolerance",
    "set_tolerance",
    # Errors
    "OpsPlanError",
    "CycleDetectedError",
    "UnknownActivityError",
    "InconsistentGraphError",
    # Core classes
    "Activity",
    "ProjectGraph",
    "would_create_cycle",
    "Product",
    "ProductSlot",
    "ResourceConstraints",
    "ProductMixProblem",
    "Vertex",
    # Scheduling
    "CPMEngine",
    "recompute_schedule",
    "network_layout",
    # Product mix
    "ProductMixSolver",
    "CornerPointOptimizer",
    "CornerPointSolver",
    "HiGHSProductMixSolver",
    "HIGHS_AVAILABLE",
    "VertexEnumerator",
    "Solution",
    "SolutionStatus",
    "resource_utilization",
    "solve_product_mix",
    # Applications
    "warehouse_expansion_project",
    "apparel_product_mix",
    # Session
    "PlanningSession",
    "SessionState",
]
