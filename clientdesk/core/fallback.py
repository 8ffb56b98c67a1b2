"""Placeholder branches used when the branch store has none active."""
from __future__ import annotations

from clientdesk.core.schema import Branch

FALLBACK_BRANCHES: tuple[tuple[str, str], ...] = (
    ("1", "Main Branch"),
    ("2", "East Branch"),
    ("3", "West Branch"),
)


class ReferenceFallbackResolver:
    """Supplies the fixed default branch set.

    Only used when the live store legitimately reports zero active branches,
    never when the fetch itself failed.
    """

    def resolve(self) -> list[Branch]:
        return [Branch(id=branch_id, name=name) for branch_id, name in FALLBACK_BRANCHES]
