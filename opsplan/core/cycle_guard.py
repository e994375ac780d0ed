"""
Cycle prevention for precedence edges.

Before an edge "predecessor -> successor" is committed, we search backward
from the predecessor through the existing predecessor lists. Reaching the
successor means the successor is already an ancestor of the predecessor, so
the new edge would close a cycle.

The CPM engine relies on this check for its acyclicity precondition.
"""

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from opsplan.core.graph import ProjectGraph


def would_create_cycle(
    graph: 'ProjectGraph',
    successor_id: str,
    predecessor_id: str,
) -> bool:
    """
    Check whether making ``successor_id`` depend on ``predecessor_id`` closes a cycle.

    Breadth-first search over predecessor lists with a visited set, so each
    activity and edge is inspected at most once (O(n + e)).

    Args:
        graph: The project graph (not modified)
        successor_id: Activity that would gain the predecessor
        predecessor_id: Activity that would become the predecessor

    Returns:
        True if the edge is a self-reference or would create a cycle
    """
    if successor_id == predecessor_id:
        return True

    visited: set[str] = set()
    queue = deque([predecessor_id])

    while queue:
        current = queue.popleft()
        if current == successor_id:
            return True
        if current in visited:
            continue
        visited.add(current)

        activity = graph.find_activity(current)
        if activity is None:
            continue
        for pred_id in activity.predecessors:
            if pred_id not in visited:
                queue.append(pred_id)

    return False


def ancestors(graph: 'ProjectGraph', activity_id: str) -> set[str]:
    """
    All transitive predecessors of an activity.

    Args:
        graph: The project graph
        activity_id: Starting activity (not included in the result)

    Returns:
        Set of ids the activity depends on, directly or indirectly
    """
    result: set[str] = set()
    start = graph.find_activity(activity_id)
    if start is None:
        return result

    queue = deque(start.predecessors)
    while queue:
        current = queue.popleft()
        if current in result:
            continue
        result.add(current)
        activity = graph.find_activity(current)
        if activity is not None:
            queue.extend(p for p in activity.predecessors if p not in result)

    return result
