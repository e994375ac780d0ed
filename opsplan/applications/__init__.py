"""
Ready-made planning scenarios.

- Warehouse Expansion: ten-activity project network (A..J)
- Apparel mix: T-shirt / sweater production mix

Usage:
------
    from opsplan.applications import warehouse_expansion_project, apparel_product_mix
    graph = warehouse_expansion_project()
    problem = apparel_product_mix()
"""

from opsplan.applications.apparel_mix import apparel_product_mix
from opsplan.applications.warehouse_expansion import (
    WAREHOUSE_ACTIVITIES,
    warehouse_expansion_project,
)

__all__ = [
    'warehouse_expansion_project',
    'WAREHOUSE_ACTIVITIES',
    'apparel_product_mix',
]
