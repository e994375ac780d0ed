"""
Network diagram layout.

Places each activity of a scheduled graph on a grid for drawing:
- one column per distinct early start, in ascending order
- within a column, one row per activity, ordered by id and centered
  vertically on the canvas

This is a pure function of the recomputed graph; nothing is cached, so
there is nothing to invalidate when the graph changes.
"""

from dataclasses import dataclass, field
from typing import Optional

from opsplan.core.activity import Activity
from opsplan.core.graph import ProjectGraph


@dataclass
class LayoutOptions:
    """
    Geometry of the diagram, in canvas units.

    Attributes:
        column_spacing: Horizontal distance between columns
        margin_left: x of the first column
        canvas_height: Height used to center each column
        row_spacing: Vertical distance between rows of a column
        node_half_height: Offset applied to single-node columns
    """
    column_spacing: float = 120
    margin_left: float = 40
    canvas_height: float = 300
    row_spacing: float = 80
    node_half_height: float = 25


@dataclass
class NodePosition:
    """Position of one activity in the diagram."""
    activity_id: str
    x: float
    y: float
    column: int
    row: int
    is_critical: bool


@dataclass
class Connection:
    """A drawn precedence edge; critical when both ends are critical."""
    source: str
    target: str
    is_critical: bool


@dataclass
class NetworkLayout:
    """Node positions and connections of a project network diagram."""
    nodes: list[NodePosition] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)

    def position_of(self, activity_id: str) -> Optional[NodePosition]:
        """Position of an activity, or None if it is not in the layout."""
        for node in self.nodes:
            if node.activity_id == activity_id:
                return node
        return None

    @property
    def num_columns(self) -> int:
        return len({node.column for node in self.nodes})


def _row_y(row: int, rows_in_column: int, options: LayoutOptions) -> float:
    if rows_in_column == 1:
        return options.canvas_height / 2 - options.node_half_height
    start_y = (options.canvas_height - (rows_in_column - 1) * options.row_spacing) / 2
    return start_y + row * options.row_spacing


def network_layout(
    graph: ProjectGraph,
    options: Optional[LayoutOptions] = None,
) -> NetworkLayout:
    """
    Lay out a scheduled project graph.

    Args:
        graph: Graph whose schedule has been recomputed
        options: Diagram geometry (defaults to LayoutOptions())

    Returns:
        NetworkLayout with one node per activity and one connection per edge
    """
    if options is None:
        options = LayoutOptions()

    layout = NetworkLayout()
    if graph.num_activities == 0:
        return layout

    columns: dict[float, list[Activity]] = {}
    for activity in graph.activities:
        columns.setdefault(activity.early_start, []).append(activity)

    for col_index, early_start in enumerate(sorted(columns)):
        group = sorted(columns[early_start], key=lambda a: a.id)
        for row_index, activity in enumerate(group):
            layout.nodes.append(NodePosition(
                activity_id=activity.id,
                x=col_index * options.column_spacing + options.margin_left,
                y=_row_y(row_index, len(group), options),
                column=col_index,
                row=row_index,
                is_critical=activity.is_critical,
            ))

    for activity in graph.activities:
        for pred_id in activity.predecessors:
            predecessor = graph.find_activity(pred_id)
            if predecessor is None:
                continue
            layout.connections.append(Connection(
                source=pred_id,
                target=activity.id,
                is_critical=activity.is_critical and predecessor.is_critical,
            ))

    return layout
