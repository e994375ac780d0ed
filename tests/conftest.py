"""
Shared pytest fixtures for OpsPlan tests.
"""

import pytest

from opsplan.applications import apparel_product_mix, warehouse_expansion_project
from opsplan.core.graph import ProjectGraph
from opsplan.core.product import Product, ProductMixProblem, ResourceConstraints


def pytest_configure(config):
    """Add custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")


@pytest.fixture
def diamond_graph():
    """
    A(2) -> B(3), A -> C(4), B -> D(5), C -> D.

    Schedule: A 0/2, B 2/5, C 2/6, D 6/11; critical path A, C, D.
    """
    graph = ProjectGraph("Diamond")
    graph.add_activity("Survey", 2)
    graph.add_activity("Quotes", 3, predecessors=["A"])
    graph.add_activity("Design", 4, predecessors=["A"])
    graph.add_activity("Purchase", 5, predecessors=["B", "C"])
    return graph


@pytest.fixture
def warehouse_graph():
    """The ten-activity Warehouse Expansion project (unscheduled)."""
    return warehouse_expansion_project()


@pytest.fixture
def apparel_problem():
    """T-shirt / sweater mix: hours 90, material 200."""
    return apparel_product_mix()


@pytest.fixture
def square_problem():
    """
    A problem whose feasible region is the square [0, 10] x [0, 10].

    Resources are plentiful, so only the storage caps bind.
    """
    return ProductMixProblem(
        Product("X", 3, 1, 1, 10),
        Product("Y", 2, 1, 1, 10),
        ResourceConstraints(available_hours=1000, available_material=1000),
    )
