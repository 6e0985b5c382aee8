from __future__ import annotations

import re
from dataclasses import dataclass

from ..core.enums import PatternType

_UNSAFE = re.compile(r"[^A-Za-z0-9]")


def normalize_actor_key(actor_name: str) -> str:
    """Replace every non-alphanumeric character with '_' for use in a record key."""
    return _UNSAFE.sub("_", (actor_name or "").strip())


@dataclass(frozen=True)
class DismissalRecord:
    tenant_id: str
    actor_key: str
    pattern_type: PatternType

    @classmethod
    def for_actor(cls, tenant_id: str, actor_name: str, pattern_type: PatternType) -> "DismissalRecord":
        return cls(tenant_id=tenant_id, actor_key=normalize_actor_key(actor_name), pattern_type=PatternType(pattern_type))
