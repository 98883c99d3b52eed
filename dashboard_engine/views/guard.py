"""
Latest-Request-Wins Guard

When the filter context changes while a fetch is still in flight, the
late result of the old fetch must never overwrite the newer view. Every
fetch takes a ticket; only the ticket issued last may apply its result.
"""

import itertools
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RequestTicket:
    sequence: int
    context: Dict[str, Any] = field(default_factory=dict)


class LatestRequestGuard:
    """
    Tracks the most recent request and discards results of superseded ones.

    Example:
        ticket = guard.issue({"period_key": "2024-03"})
        snapshot = fetch(...)
        guard.accept(ticket, snapshot, apply=render)
    """

    def __init__(self):
        self._sequence = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()
        self.discarded = 0

    def issue(self, context: Optional[Dict[str, Any]] = None) -> RequestTicket:
        """Start a new request, superseding every earlier ticket"""
        with self._lock:
            self._latest = next(self._sequence)
            return RequestTicket(sequence=self._latest, context=dict(context or {}))

    def is_current(self, ticket: RequestTicket) -> bool:
        with self._lock:
            return ticket.sequence == self._latest

    def accept(self, ticket: RequestTicket, result: T, apply: Callable[[T], Any]) -> bool:
        """
        Apply result if ticket is still the latest one.

        Returns:
            True if applied, False if the result was stale and dropped
        """
        if not self.is_current(ticket):
            self.discarded += 1
            logger.debug(
                "Discarding stale result",
                sequence=ticket.sequence,
                latest=self._latest,
                context=ticket.context,
            )
            return False
        apply(result)
        return True
