"""
Activity module - represents a single activity in a project network.

An activity is a node in an activity-on-node precedence graph. It carries
its input data (name, duration, predecessor ids) and the schedule values
derived by the CPM engine.

Design Notes:
------------
- Activities are identified by a short string id ("A", "B", ..., "A1")
- Predecessors are stored as an ordered list of ids with set semantics
  (no duplicates); order only matters for display
- Derived fields are written exclusively by the CPM engine
"""

from dataclasses import dataclass, field
from typing import Union

Number = Union[int, float]


@dataclass
class Activity:
    """
    Represents an activity in the project network.

    Attributes:
        id: Unique identifier within a ProjectGraph
        name: Human-readable description
        duration: Duration in project time units (>= 0)
        predecessors: Ids of the activities that must finish first
        early_start: Earliest start time (derived)
        early_finish: Earliest finish time (derived)
        late_start: Latest start time without delaying the project (derived)
        late_finish: Latest finish time without delaying the project (derived)
        slack: Total float, late_start - early_start (derived)
        is_critical: True when slack is exactly zero (derived)

    Example:
        >>> design = Activity(id="C", name="Layout design", duration=4,
        ...                   predecessors=["A"])
        >>> design.has_predecessor("A")
        True

    Note:
        Activities should be created through ProjectGraph.add_activity() so
        the id is unique and predecessor references are validated.
    """
    id: str
    name: str
    duration: Number
    predecessors: list[str] = field(default_factory=list)

    # Schedule values (written by the CPM engine)
    early_start: Number = 0
    early_finish: Number = 0
    late_start: Number = 0
    late_finish: Number = 0
    slack: Number = 0
    is_critical: bool = False

    def has_predecessor(self, activity_id: str) -> bool:
        """Check whether ``activity_id`` is a direct predecessor."""
        return activity_id in self.predecessors

    @property
    def is_start(self) -> bool:
        """True if the activity has no predecessors."""
        return not self.predecessors

    def reset_schedule(self) -> None:
        """Clear all derived schedule values."""
        self.early_start = 0
        self.early_finish = 0
        self.late_start = 0
        self.late_finish = 0
        self.slack = 0
        self.is_critical = False

    def schedule_values(self) -> tuple:
        """Derived values as a tuple (useful for comparing recomputes)."""
        return (
            self.early_start,
            self.early_finish,
            self.late_start,
            self.late_finish,
            self.slack,
            self.is_critical,
        )

    def to_dict(self) -> dict:
        """Convert the activity to a plain dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "predecessors": list(self.predecessors),
            "early_start": self.early_start,
            "early_finish": self.early_finish,
            "late_start": self.late_start,
            "late_finish": self.late_finish,
            "slack": self.slack,
            "is_critical": self.is_critical,
        }

    def __hash__(self) -> int:
        """Hash by id for use in sets/dicts."""
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        """Equality by id."""
        if not isinstance(other, Activity):
            return NotImplemented
        return self.id == other.id

    def __repr__(self) -> str:
        preds = ",".join(self.predecessors)
        crit = ", CRITICAL" if self.is_critical else ""
        return f"Activity('{self.id}', d={self.duration}, preds=[{preds}]{crit})"
