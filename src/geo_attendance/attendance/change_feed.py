from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .model import AttendanceEvent, ChangeSet, EventChange

logger = logging.getLogger(__name__)

Listener = Callable[[ChangeSet], None]
Predicate = Callable[[AttendanceEvent], bool]


@dataclass(frozen=True)
class _Subscriber:
    tenant_id: str
    listener: Listener
    predicate: Optional[Predicate]


class Subscription:
    def __init__(self, feed: "ChangeFeed", token: int):
        self._feed = feed
        self._token = token

    @property
    def active(self) -> bool:
        return self._feed._has(self._token)

    def cancel(self) -> None:
        self._feed._remove(self._token)


class ChangeFeed:
    """Publish/subscribe channel for attendance log changes.

    Every subscription is scoped to exactly one tenant; a change set is only
    delivered to subscribers of the tenant it belongs to. Listeners run on the
    publishing thread, outside the registry lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: dict[int, _Subscriber] = {}
        self._tokens = itertools.count(1)

    def subscribe(self, tenant_id: str, listener: Listener, predicate: Optional[Predicate] = None) -> Subscription:
        with self._lock:
            token = next(self._tokens)
            self._subscribers[token] = _Subscriber(tenant_id=tenant_id, listener=listener, predicate=predicate)
        return Subscription(self, token)

    def publish(self, tenant_id: str, changes: Sequence[EventChange]) -> None:
        with self._lock:
            targets = [s for s in self._subscribers.values() if s.tenant_id == tenant_id]

        for sub in targets:
            selected = tuple(
                c for c in changes if c.event.tenant_id == tenant_id and (sub.predicate is None or sub.predicate(c.event))
            )
            if not selected:
                continue
            try:
                sub.listener(ChangeSet(tenant_id=tenant_id, changes=selected))
            except Exception:
                # A broken dashboard session must not fail the check-in that triggered it.
                logger.exception("Change listener failed for tenant %s", tenant_id)

    def _has(self, token: int) -> bool:
        with self._lock:
            return token in self._subscribers

    def _remove(self, token: int) -> None:
        with self._lock:
            self._subscribers.pop(token, None)
