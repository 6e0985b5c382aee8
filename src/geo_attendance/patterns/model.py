from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import PatternType, Severity, TimelinessStatus


@dataclass(frozen=True)
class PatternAlert:
    """A derived finding about one actor; recomputed on every analysis pass."""

    tenant_id: str
    actor_id: str
    actor_name: str
    pattern_type: PatternType
    severity: Severity
    message: str
    weekday: Optional[str] = None


@dataclass
class ActorHistory:
    """Per-actor counters the rules read from."""

    tenant_id: str
    actor_id: str
    actor_name: str
    total_logs: int = 0
    late_count: int = 0
    late_by_weekday: dict[str, int] = field(default_factory=dict)
    # Most recent check-in statuses, newest first (at most two).
    recent_pair: list[Optional[TimelinessStatus]] = field(default_factory=list)

    @property
    def late_ratio(self) -> float:
        return self.late_count / self.total_logs if self.total_logs else 0.0
