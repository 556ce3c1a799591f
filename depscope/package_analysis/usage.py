"""Usage statistics over external package usage."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..graphs.models import ExternalDependencyUsage
from ..models import DependencyInfo
from .models import UsageCount, UsageStatistics


def compute_usage_statistics(
    usages: Sequence[ExternalDependencyUsage],
    declared: Iterable[DependencyInfo],
    top_n: int = 10,
) -> UsageStatistics:
    """Rank package usage and list declared packages that are never imported.

    Args:
        usages: Aggregated external usage records.
        declared: Manifest dependencies to check for usage.
        top_n: Maximum length of the most/least used lists.

    Returns:
        UsageStatistics; ties keep first-seen order.
    """
    counts: List[UsageCount] = [UsageCount(name=u.name, count=u.usage_count) for u in usages]
    limit = max(top_n, 0)

    most_used = sorted(counts, key=lambda c: c.count, reverse=True)[:limit]
    least_used = sorted(counts, key=lambda c: c.count)[:limit]

    used = {u.name for u in usages}
    unused = tuple(dict.fromkeys(
        dep.name for dep in declared if dep.name and dep.name not in used
    ))

    return UsageStatistics(
        most_used=tuple(most_used),
        least_used=tuple(least_used),
        unused=unused,
        usage_distribution={c.name: c.count for c in counts},
    )
