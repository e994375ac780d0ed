"""
Warehouse Expansion project.

A ten-activity project network used as the default planning scenario:

    id  activity                    duration  depends on
    A   Survey available space      2         -
    B   Material quotes             3         A
    C   Layout design               4         A
    D   Purchase materials          5         B, C
    E   Site preparation            3         C
    F   Shelving construction       4         D
    G   Electrical installation     2         E
    H   Warehouse assembly          3         F, G
    I   Testing and adjustments     2         H
    J   Staff training              1         I

Scheduled, the project takes 21 periods with critical path
A, C, D, F, H, I, J.

Usage:
------
    from opsplan.applications import warehouse_expansion_project
    from opsplan.scheduling import recompute_schedule

    graph = recompute_schedule(warehouse_expansion_project())
    print(graph.total_duration, graph.critical_path)
"""

from opsplan.core.graph import ProjectGraph

PROJECT_NAME = "Warehouse Expansion"

WAREHOUSE_ACTIVITIES = [
    {"id": "A", "name": "Survey available space", "duration": 2, "predecessors": []},
    {"id": "B", "name": "Material quotes", "duration": 3, "predecessors": ["A"]},
    {"id": "C", "name": "Layout design", "duration": 4, "predecessors": ["A"]},
    {"id": "D", "name": "Purchase materials", "duration": 5, "predecessors": ["B", "C"]},
    {"id": "E", "name": "Site preparation", "duration": 3, "predecessors": ["C"]},
    {"id": "F", "name": "Shelving construction", "duration": 4, "predecessors": ["D"]},
    {"id": "G", "name": "Electrical installation", "duration": 2, "predecessors": ["E"]},
    {"id": "H", "name": "Warehouse assembly", "duration": 3, "predecessors": ["F", "G"]},
    {"id": "I", "name": "Testing and adjustments", "duration": 2, "predecessors": ["H"]},
    {"id": "J", "name": "Staff training", "duration": 1, "predecessors": ["I"]},
]


def warehouse_expansion_project() -> ProjectGraph:
    """Build a fresh, unscheduled Warehouse Expansion project graph."""
    return ProjectGraph.from_records(WAREHOUSE_ACTIVITIES, name=PROJECT_NAME)
