from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import to_local
from ..tenants.model import TenantConfiguration
from .factory import TimelinessStrategyFactory
from .strategies.base import TimelinessDecision


class ShiftClassifier:
    """Classify a check-in against the tenant's shift start and grace period.

    `event_time` must be the authoritative server timestamp, never a device clock.
    The deadline is computed on the tenant-local calendar day of the event.

    Currently returns only ON_TIME or LATE; EARLY exists in the vocabulary but no
    rule produces it yet.
    """

    def __init__(self, factory: Optional[TimelinessStrategyFactory] = None):
        self._factory = factory or TimelinessStrategyFactory()

    def deadline_for(self, event_time: datetime, config: TenantConfiguration) -> tuple[datetime, datetime]:
        local = to_local(event_time, config.zone())
        shift_start = datetime.combine(local.date(), config.shift_start, tzinfo=local.tzinfo)
        return shift_start, shift_start + timedelta(minutes=config.grace_period_minutes)

    def classify(self, event_time: datetime, config: TenantConfiguration) -> TimelinessDecision:
        shift_start, deadline = self.deadline_for(event_time, config)
        now = to_local(event_time, config.zone())
        strategy = self._factory.for_checkin(now=now, deadline=deadline)
        return strategy.decide_checkin(now=now, shift_start=shift_start, deadline=deadline)
