"""
Cooldown and match-queue stores.

The orchestrator only talks to the small abstract interfaces below; the
in-memory implementations are guarded by a lock so one orchestrator can
serve concurrent requests for different seekers.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

QUEUE_REFRESH_MINUTES = 60


class CooldownStore(ABC):
    """Per-seeker cooldown deadlines."""

    @abstractmethod
    def get(self, seeker_id: str) -> Optional[datetime]:
        """Return the cooldown deadline, or None if never set."""

    @abstractmethod
    def set(self, seeker_id: str, until: datetime) -> None:
        """Set the cooldown deadline."""

    @abstractmethod
    def clear(self, seeker_id: str) -> None:
        """Remove the cooldown deadline."""

    @abstractmethod
    def items(self) -> Dict[str, datetime]:
        """Snapshot of every stored deadline."""


class InMemoryCooldownStore(CooldownStore):
    def __init__(self):
        self._deadlines: Dict[str, datetime] = {}
        self._lock = threading.Lock()

    def get(self, seeker_id: str) -> Optional[datetime]:
        with self._lock:
            return self._deadlines.get(seeker_id)

    def set(self, seeker_id: str, until: datetime) -> None:
        with self._lock:
            self._deadlines[seeker_id] = until

    def clear(self, seeker_id: str) -> None:
        with self._lock:
            self._deadlines.pop(seeker_id, None)

    def items(self) -> Dict[str, datetime]:
        with self._lock:
            return dict(self._deadlines)


@dataclass
class MatchQueue:
    """
    Pending results from a seeker's latest discovery pass.

    Attributes:
        queue_id: Identifier of the queue
        seeker_id: Owner of the queue
        pending_matches: Ranked results
        processed_count: Results the seeker has acted on
        total_count: Number of results stored
        last_processed_at: When the queue was last written
        status: active, paused, exhausted or error
        refresh_interval_minutes: How often the queue should be refreshed
    """
    queue_id: str
    seeker_id: str
    pending_matches: List[Any] = field(default_factory=list)
    processed_count: int = 0
    total_count: int = 0
    last_processed_at: Optional[datetime] = None
    status: str = "active"
    refresh_interval_minutes: int = QUEUE_REFRESH_MINUTES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "queue_id": self.queue_id,
            "seeker_id": self.seeker_id,
            "pending_matches": [m.to_dict() for m in self.pending_matches],
            "processed_count": self.processed_count,
            "total_count": self.total_count,
            "last_processed_at": self.last_processed_at.isoformat() if self.last_processed_at else None,
            "status": self.status,
            "refresh_interval_minutes": self.refresh_interval_minutes,
        }


class MatchQueueStore(ABC):
    """Latest match queue per seeker."""

    @abstractmethod
    def get(self, seeker_id: str) -> Optional[MatchQueue]:
        """Return the seeker's queue, or None."""

    @abstractmethod
    def set(self, seeker_id: str, queue: MatchQueue) -> None:
        """Replace the seeker's queue."""

    @abstractmethod
    def clear(self, seeker_id: str) -> None:
        """Remove the seeker's queue."""


class InMemoryMatchQueueStore(MatchQueueStore):
    def __init__(self):
        self._queues: Dict[str, MatchQueue] = {}
        self._lock = threading.Lock()

    def get(self, seeker_id: str) -> Optional[MatchQueue]:
        with self._lock:
            return self._queues.get(seeker_id)

    def set(self, seeker_id: str, queue: MatchQueue) -> None:
        with self._lock:
            self._queues[seeker_id] = queue

    def clear(self, seeker_id: str) -> None:
        with self._lock:
            self._queues.pop(seeker_id, None)
