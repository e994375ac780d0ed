"""
Exception types raised by the planning engines.

Every error derives from OpsPlanError and from the builtin exception that
best describes it, so callers can catch either the library-specific type or
the builtin one:

- CycleDetectedError: a precedence edge was rejected (no mutation happened)
- UnknownActivityError: an activity id that is not part of the graph
- InconsistentGraphError: no topological order exists (recompute aborted)

Degenerate LP regions and parallel constraint lines are not errors; they are
reported through Solution.feasible or silently skipped by the enumerator.
"""


class OpsPlanError(Exception):
    """Base class for all OpsPlan errors."""


class CycleDetectedError(OpsPlanError, ValueError):
    """
    Adding a precedence edge would close a cycle.

    Attributes:
        activity_id: Activity that would gain the predecessor
        predecessor_id: The rejected predecessor
    """

    def __init__(self, activity_id: str, predecessor_id: str):
        self.activity_id = activity_id
        self.predecessor_id = predecessor_id
        if activity_id == predecessor_id:
            message = f"Activity '{activity_id}' cannot depend on itself"
        else:
            message = (
                f"Activity '{activity_id}' cannot depend on '{predecessor_id}': "
                f"'{predecessor_id}' already depends on '{activity_id}'"
            )
        super().__init__(message)


class UnknownActivityError(OpsPlanError, KeyError):
    """An activity id does not exist in the graph."""

    def __init__(self, activity_id: str, context: str = ""):
        self.activity_id = activity_id
        message = f"Unknown activity '{activity_id}'"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return str(self.args[0])


class InconsistentGraphError(OpsPlanError, RuntimeError):
    """
    The schedule could not be computed because the graph has a cycle.

    Attributes:
        unscheduled: Ids of the activities that could not be ordered
    """

    def __init__(self, unscheduled: list[str]):
        self.unscheduled = list(unscheduled)
        super().__init__(
            "Precedence graph is inconsistent; could not order activities: "
            + ", ".join(self.unscheduled)
        )
