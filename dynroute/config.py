"""Configuration classes for DynRoute components."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from dynroute.algorithms.base import TieBreak


@dataclass
class RouterConfig:
    """Defaults used by :class:`dynroute.router.Router` when arguments are omitted."""

    # Tie-break policy for equal-distance frontier entries
    tie_break: TieBreak = TieBreak.INSERTION_ORDER

    # Whether bulk edge lists describe two-way roads
    bidirectional: bool = False

    # Per-query time budget in seconds; None disables the deadline
    default_timeout_s: Optional[float] = None

    def deadline_from_now(self, timeout_s: Optional[float] = None) -> Optional[float]:
        """Return an absolute ``time.monotonic()`` deadline, or None.

        ``timeout_s`` takes precedence over ``default_timeout_s``.
        """
        budget = self.default_timeout_s if timeout_s is None else timeout_s
        if budget is None:
            return None
        if budget < 0:
            raise ValueError(f"Query timeout must be non-negative, got {budget}")
        return time.monotonic() + budget


# Global configuration instance
ROUTER_CONFIG = RouterConfig()
