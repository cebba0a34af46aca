"""Min-priority frontier with lazy deletion.

The frontier never removes or re-prioritizes an entry in place. When a node's
distance improves the engine simply pushes a new entry; the older one becomes
stale and is discarded when it is popped. Entries live in an append-only arena
and the binary heap orders small tuples that point into it, so the heap itself
never compares node identifiers unless the tie-break policy asks for it.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import Any, Callable, List, Optional, Tuple

from dynroute.algorithms.base import Cost, NodeID, TieBreak
from dynroute.errors import FrontierEmpty

TieKeyFunc = Callable[[NodeID, int], Any]


def tie_break_fabric(
    tie_break: TieBreak,
    key_func: Optional[Callable[[NodeID], Any]] = None,
) -> TieKeyFunc:
    """
    Creates the secondary ordering key for entries with equal distance.

    The returned callable receives ``(node, seq)`` where ``seq`` is the
    zero-based push counter, and returns a value compared after the distance.
    The push counter is always appended as the last component of the heap key,
    so every policy yields a total, reproducible order.

    Args:
        tie_break: A TieBreak enum specifying the policy.
        key_func: A user-supplied ``node -> sortable`` function; required for
            TieBreak.USER_DEFINED and ignored otherwise.

    Returns:
        A callable ``(node, seq) -> sortable``.

    Raises:
        ValueError: If the policy is unknown or USER_DEFINED lacks key_func.
    """

    def by_insertion(node: NodeID, seq: int) -> int:
        return seq

    def by_node_id(node: NodeID, seq: int) -> Any:
        return node

    if tie_break == TieBreak.INSERTION_ORDER:
        return by_insertion
    if tie_break == TieBreak.NODE_ID:
        return by_node_id
    if tie_break == TieBreak.USER_DEFINED:
        if key_func is None:
            raise ValueError("TieBreak.USER_DEFINED requires a key_func.")
        user_key = key_func

        def by_user_key(node: NodeID, seq: int) -> Any:
            return user_key(node)

        return by_user_key
    raise ValueError(f"Unknown tie_break policy: {tie_break}")


class Frontier:
    """Priority frontier over ``(node, distance)`` entries.

    Entries are ordered by distance ascending, then by the tie-break key, then
    by push order. Multiple entries for the same node are allowed.

    Attributes:
        _arena: Append-only list of ``(node, distance)`` entries.
        _heap: Heap of ``(distance, tie_key, seq)``; ``seq`` indexes the arena.
    """

    def __init__(
        self,
        tie_break: TieBreak = TieBreak.INSERTION_ORDER,
        key_func: Optional[Callable[[NodeID], Any]] = None,
    ) -> None:
        self._tie_key = tie_break_fabric(tie_break, key_func)
        self._arena: List[Tuple[NodeID, Cost]] = []
        self._heap: List[Tuple[Cost, Any, int]] = []

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    @property
    def pushes(self) -> int:
        """Total number of entries ever pushed."""
        return len(self._arena)

    def push(self, node: NodeID, distance: Cost) -> None:
        seq = len(self._arena)
        self._arena.append((node, distance))
        heappush(self._heap, (distance, self._tie_key(node, seq), seq))

    def pop_min(self) -> Tuple[NodeID, Cost]:
        """Remove and return the entry with the smallest distance.

        Raises:
            FrontierEmpty: If the frontier holds no entries.
        """
        if not self._heap:
            raise FrontierEmpty()
        _, _, seq = heappop(self._heap)
        return self._arena[seq]

    def peek_min(self) -> Tuple[NodeID, Cost]:
        """Return the entry with the smallest distance without removing it.

        Raises:
            FrontierEmpty: If the frontier holds no entries.
        """
        if not self._heap:
            raise FrontierEmpty()
        return self._arena[self._heap[0][2]]
