"""Exception hierarchy for DynRoute.

Each error also derives from the builtin exception a caller would naturally
catch (``ValueError``, ``KeyError``, ``IndexError`` or ``RuntimeError``), and
keeps the offending identifiers as attributes for precise diagnostics.
"""

from __future__ import annotations

from typing import Any, Hashable, Optional, Sequence, Tuple


class DynRouteError(Exception):
    """Base class for all DynRoute errors."""


class InvalidEdge(DynRouteError, ValueError):
    """Edge weight is negative or not a real number."""

    def __init__(self, source: Hashable, target: Hashable, weight: Any) -> None:
        self.source = source
        self.target = target
        self.weight = weight
        super().__init__(
            f"Invalid weight {weight!r} for edge '{source}' -> '{target}': "
            "weights must be non-negative numbers."
        )


class EdgeNotFound(DynRouteError, KeyError):
    """Update targets a directed edge that does not exist."""

    def __init__(self, source: Hashable, target: Hashable) -> None:
        self.source = source
        self.target = target
        super().__init__(f"No edge '{source}' -> '{target}' in the graph.")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0])


class FrontierEmpty(DynRouteError, IndexError):
    """Pop or peek on an empty frontier."""

    def __init__(self) -> None:
        super().__init__("pop from an empty frontier")


class NoReachableDestination(DynRouteError, ValueError):
    """None of the candidate destinations is reachable from the start node."""

    def __init__(
        self, candidates: Sequence[Hashable], start: Optional[Hashable] = None
    ) -> None:
        self.start = start
        self.candidates: Tuple[Hashable, ...] = tuple(candidates)
        origin = f" from '{start}'" if start is not None else ""
        if self.candidates:
            listed = ", ".join(repr(c) for c in self.candidates)
            msg = f"No reachable destination{origin} among candidates [{listed}]."
        else:
            msg = f"No reachable destination{origin}: candidate list is empty."
        super().__init__(msg)


class SearchAborted(DynRouteError, RuntimeError):
    """Shortest-path search stopped by a deadline or a cancellation request."""

    def __init__(self, start: Hashable, reason: str, settled: int) -> None:
        self.start = start
        self.reason = reason
        self.settled = settled
        super().__init__(
            f"Shortest-path search from '{start}' aborted ({reason}) "
            f"after settling {settled} node(s)."
        )
