"""
Graph module - the precedence network of a project.

The ProjectGraph is the container that holds all activities and provides
the lookups the CPM engine needs (predecessors, successors, positions).

Design Notes:
------------
- Activities are stored in a list; insertion order is significant for
  tie-breaking and display
- An id -> index map gives O(1) lookup
- A successor index (id -> list of successor ids) is the exact inverse of
  the predecessor lists; it is rebuilt after every structural mutation
- Every mutation either leaves the graph consistent or is rejected before
  anything changes (unknown ids, cycles, duplicate ids)
- Derived fields (schedule values, total_duration, critical_path) are only
  valid after the CPM engine has run; mutations mark them stale
"""

import logging
import string
from collections.abc import Iterable, Iterator
from typing import Any, Optional

import networkx as nx

from opsplan.core.activity import Activity, Number
from opsplan.core.cycle_guard import would_create_cycle
from opsplan.errors import CycleDetectedError, UnknownActivityError

logger = logging.getLogger(__name__)


class ProjectGraph:
    """
    Activity-on-node precedence graph.

    Attributes:
        name: Project name
        activities: Activities in insertion order
        total_duration: Project duration (derived by the CPM engine)
        critical_path: Ids of critical activities (derived by the CPM engine)

    Example:
        >>> graph = ProjectGraph("Warehouse")
        >>> a = graph.add_activity("Survey", 2)
        >>> b = graph.add_activity("Quotes", 3, predecessors=[a.id])
        >>> graph.successors_of(a.id)
        ['B']

    Note:
        Activity ids are assigned automatically (A..Z, then A1, A2, ...)
        unless an explicit id is given.
    """

    def __init__(self, name: str = "New Project"):
        """Create an empty project graph."""
        self.name = name

        # Storage
        self._activities: list[Activity] = []

        # Lookup tables
        self._id_to_index: dict[str, int] = {}
        self._successors: dict[str, list[str]] = {}

        # Derived (written by the CPM engine)
        self.total_duration: Number = 0
        self.critical_path: list[str] = []
        self._schedule_stale = True

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def num_activities(self) -> int:
        """Number of activities in the graph."""
        return len(self._activities)

    @property
    def num_edges(self) -> int:
        """Number of precedence edges."""
        return sum(len(a.predecessors) for a in self._activities)

    @property
    def activities(self) -> list[Activity]:
        """List of all activities (read-only view)."""
        return self._activities

    @property
    def activity_ids(self) -> list[str]:
        """Activity ids in insertion order."""
        return [a.id for a in self._activities]

    @property
    def schedule_stale(self) -> bool:
        """True if the graph changed since the last schedule computation."""
        return self._schedule_stale

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_activity(self, activity_id: str) -> Activity:
        """
        Get an activity by id.

        Raises:
            UnknownActivityError: If the id is not in the graph
        """
        index = self._id_to_index.get(activity_id)
        if index is None:
            raise UnknownActivityError(activity_id)
        return self._activities[index]

    def find_activity(self, activity_id: str) -> Optional[Activity]:
        """Get an activity by id, or None if not found."""
        index = self._id_to_index.get(activity_id)
        if index is None:
            return None
        return self._activities[index]

    def index_of(self, activity_id: str) -> int:
        """
        Insertion position of an activity.

        Raises:
            UnknownActivityError: If the id is not in the graph
        """
        index = self._id_to_index.get(activity_id)
        if index is None:
            raise UnknownActivityError(activity_id)
        return index

    def predecessors_of(self, activity_id: str) -> list[str]:
        """Direct predecessor ids of an activity."""
        return list(self.get_activity(activity_id).predecessors)

    def successors_of(self, activity_id: str) -> list[str]:
        """Direct successor ids of an activity, in insertion order."""
        if activity_id not in self._id_to_index:
            raise UnknownActivityError(activity_id)
        return list(self._successors[activity_id])

    def next_activity_id(self) -> str:
        """
        Next unused id: the first free uppercase letter, then A1, A2, ...
        """
        for letter in string.ascii_uppercase:
            if letter not in self._id_to_index:
                return letter

        number = 1
        while f"A{number}" in self._id_to_index:
            number += 1
        return f"A{number}"

    # =========================================================================
    # Activity Operations
    # =========================================================================

    def add_activity(
        self,
        name: str,
        duration: Number,
        predecessors: Iterable[str] = (),
        activity_id: Optional[str] = None,
    ) -> Activity:
        """
        Add an activity to the graph.

        A brand-new activity has no successors, so its predecessor edges
        cannot close a cycle; only their existence is checked.

        Args:
            name: Activity description
            duration: Duration (>= 0)
            predecessors: Ids of existing activities
            activity_id: Explicit id (default: next_activity_id())

        Returns:
            The newly created activity

        Raises:
            ValueError: If the duration is negative or the id already exists
            UnknownActivityError: If a predecessor id does not exist
        """
        if duration < 0:
            raise ValueError(f"Activity duration must be >= 0, got {duration}")

        if activity_id is None:
            activity_id = self.next_activity_id()
        elif activity_id in self._id_to_index:
            raise ValueError(f"Activity with id '{activity_id}' already exists")

        pred_ids: list[str] = []
        for pred_id in predecessors:
            if pred_id not in self._id_to_index:
                logger.warning(
                    "Rejected activity '%s': unknown predecessor '%s'", name, pred_id
                )
                raise UnknownActivityError(pred_id, f"predecessor of '{name}'")
            if pred_id not in pred_ids:
                pred_ids.append(pred_id)

        activity = Activity(
            id=activity_id,
            name=name,
            duration=duration,
            predecessors=pred_ids,
        )
        self._activities.append(activity)
        self._rebuild_index()

        logger.debug("Added %r", activity)
        return activity

    def remove_activity(self, activity_id: str) -> Activity:
        """
        Remove an activity and every edge that references it.

        Args:
            activity_id: Id of the activity to remove

        Returns:
            The removed activity

        Raises:
            UnknownActivityError: If the id is not in the graph
        """
        removed = self.get_activity(activity_id)

        for activity in self._activities:
            if activity_id in activity.predecessors:
                activity.predecessors = [
                    p for p in activity.predecessors if p != activity_id
                ]

        self._activities = [a for a in self._activities if a.id != activity_id]
        self._rebuild_index()

        logger.debug("Removed activity '%s'", activity_id)
        return removed

    def update_activity(
        self,
        activity_id: str,
        name: Optional[str] = None,
        duration: Optional[Number] = None,
    ) -> Activity:
        """
        Change the name and/or duration of an activity.

        Raises:
            ValueError: If the duration is negative
            UnknownActivityError: If the id is not in the graph
        """
        activity = self.get_activity(activity_id)
        if duration is not None:
            if duration < 0:
                raise ValueError(f"Activity duration must be >= 0, got {duration}")
            activity.duration = duration
        if name is not None:
            activity.name = name
        self._schedule_stale = True
        return activity

    def clear(self, name: Optional[str] = None) -> None:
        """Remove all activities (optionally renaming the project)."""
        if name is not None:
            self.name = name
        self._activities = []
        self._rebuild_index()

    # =========================================================================
    # Edge Operations
    # =========================================================================

    def add_predecessor(self, activity_id: str, predecessor_id: str) -> bool:
        """
        Make ``activity_id`` depend on ``predecessor_id``.

        Args:
            activity_id: Activity gaining the predecessor
            predecessor_id: Activity that must finish first

        Returns:
            True if the edge was added, False if it already existed

        Raises:
            UnknownActivityError: If either id does not exist
            CycleDetectedError: If the edge would create a cycle (the graph
                is left unchanged)
        """
        activity = self.get_activity(activity_id)
        if predecessor_id not in self._id_to_index:
            raise UnknownActivityError(predecessor_id, f"predecessor of '{activity_id}'")

        if predecessor_id in activity.predecessors:
            return False

        if would_create_cycle(self, activity_id, predecessor_id):
            logger.warning(
                "Rejected edge %s -> %s: would create a cycle",
                predecessor_id, activity_id,
            )
            raise CycleDetectedError(activity_id, predecessor_id)

        activity.predecessors.append(predecessor_id)
        self._rebuild_index()
        return True

    def remove_predecessor(self, activity_id: str, predecessor_id: str) -> bool:
        """
        Drop the edge ``predecessor_id -> activity_id``.

        Returns:
            True if the edge existed and was removed

        Raises:
            UnknownActivityError: If ``activity_id`` does not exist
        """
        activity = self.get_activity(activity_id)
        if predecessor_id not in activity.predecessors:
            return False

        activity.predecessors = [p for p in activity.predecessors if p != predecessor_id]
        self._rebuild_index()
        return True

    def available_predecessors(self, activity_id: str) -> list[Activity]:
        """
        Activities that could legally become predecessors of ``activity_id``.

        Excludes the activity itself and every activity that would close a
        cycle. Existing predecessors are included (adding them is a no-op).
        """
        self.get_activity(activity_id)
        return [
            a for a in self._activities
            if a.id != activity_id and not would_create_cycle(self, activity_id, a.id)
        ]

    # =========================================================================
    # Schedule bookkeeping
    # =========================================================================

    def mark_scheduled(self) -> None:
        """Record that derived fields match the current structure."""
        self._schedule_stale = False

    def reset_schedule(self) -> None:
        """Clear all derived values."""
        for activity in self._activities:
            activity.reset_schedule()
        self.total_duration = 0
        self.critical_path = []
        self._schedule_stale = True

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_networkx(self) -> nx.DiGraph:
        """
        Build a NetworkX digraph with edges predecessor -> successor.

        Node attributes: ``position`` (insertion index), ``name`` and
        ``duration``.
        """
        G = nx.DiGraph(name=self.name)
        for index, activity in enumerate(self._activities):
            G.add_node(
                activity.id,
                position=index,
                name=activity.name,
                duration=activity.duration,
            )
        for activity in self._activities:
            for pred_id in activity.predecessors:
                G.add_edge(pred_id, activity.id)
        return G

    def to_records(self) -> list[dict[str, Any]]:
        """Activities as plain dictionaries, in insertion order."""
        return [a.to_dict() for a in self._activities]

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict[str, Any]],
        name: str = "New Project",
    ) -> 'ProjectGraph':
        """
        Build a graph from activity records.

        Each record needs ``name`` and ``duration``; ``id`` and
        ``predecessors`` are optional. Predecessors may reference records
        that appear later; every edge still goes through the cycle check.

        Raises:
            ValueError, UnknownActivityError, CycleDetectedError: As for the
                individual add operations
        """
        graph = cls(name)
        records = list(records)
        for record in records:
            graph.add_activity(
                record["name"],
                record["duration"],
                activity_id=record.get("id"),
            )
        for activity, record in zip(graph.activities, records):
            for pred_id in record.get("predecessors", ()):
                graph.add_predecessor(activity.id, pred_id)
        return graph

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _rebuild_index(self) -> None:
        """Rebuild the id -> index map and the successor index."""
        self._id_to_index = {a.id: i for i, a in enumerate(self._activities)}
        self._successors = {a.id: [] for a in self._activities}
        for activity in self._activities:
            for pred_id in activity.predecessors:
                self._successors[pred_id].append(activity.id)
        self._schedule_stale = True

    def validate(self) -> list[str]:
        """
        Validate the graph structure.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        seen: set[str] = set()
        for i, activity in enumerate(self._activities):
            if activity.id in seen:
                errors.append(f"Duplicate activity id '{activity.id}' at position {i}")
            seen.add(activity.id)
            if activity.duration < 0:
                errors.append(f"Activity '{activity.id}' has negative duration")
            if len(set(activity.predecessors)) != len(activity.predecessors):
                errors.append(f"Activity '{activity.id}' lists a predecessor twice")

        for activity in self._activities:
            for pred_id in activity.predecessors:
                if pred_id not in seen:
                    errors.append(
                        f"Activity '{activity.id}' references unknown predecessor '{pred_id}'"
                    )

        if not errors and not nx.is_directed_acyclic_graph(self.to_networkx()):
            errors.append("Precedence graph contains a cycle")

        return errors

    def summary(self) -> str:
        """
        Return a summary string of the graph.

        Returns:
            Human-readable summary
        """
        lines = [
            f"ProjectGraph '{self.name}': {self.num_activities} activities, "
            f"{self.num_edges} precedence edges",
        ]
        if self._schedule_stale:
            lines.append("  Schedule: not computed")
        else:
            lines.append(f"  Total duration: {self.total_duration}")
            lines.append("  Critical path: " + " -> ".join(self.critical_path))
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._activities)

    def __iter__(self) -> Iterator[Activity]:
        return iter(self._activities)

    def __contains__(self, activity_id: object) -> bool:
        return activity_id in self._id_to_index

    def __repr__(self) -> str:
        return f"ProjectGraph('{self.name}', activities={self.num_activities})"
