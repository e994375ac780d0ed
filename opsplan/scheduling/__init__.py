"""
Scheduling module - Critical Path Method on project networks.

This module provides:
- CPMEngine: Forward/backward passes computing schedule times and slack
- recompute_schedule: One-call convenience wrapper
- ScheduleStats: Statistics of the last recompute
- network_layout: Pure function placing activities on a diagram grid

Usage:
------
    >>> from opsplan.core import ProjectGraph
    >>> from opsplan.scheduling import recompute_schedule
    >>> graph = ProjectGraph("Demo")
    >>> a = graph.add_activity("Survey", 2)
    >>> b = graph.add_activity("Build", 5, predecessors=[a.id])
    >>> recompute_schedule(graph).critical_path
    ['A', 'B']
"""

from opsplan.scheduling.cpm import CPMEngine, ScheduleStats, recompute_schedule
from opsplan.scheduling.layout import (
    Connection,
    LayoutOptions,
    NetworkLayout,
    NodePosition,
    network_layout,
)

__all__ = [
    # CPM
    'CPMEngine',
    'ScheduleStats',
    'recompute_schedule',
    # Layout
    'network_layout',
    'NetworkLayout',
    'NodePosition',
    'Connection',
    'LayoutOptions',
]
