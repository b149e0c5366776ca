"""
Summary statistics for the currently displayed results.

Derived purely from the result list; the search session memoises the value
per result list so it is only recomputed when the results change.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SearchStats:
    total: int
    avg_price: str      # two decimals, e.g. "200.00"
    categories: int


EMPTY_STATS = SearchStats(total=0, avg_price="0.00", categories=0)


def compute_stats(results: Sequence[Mapping[str, Any]]) -> SearchStats:
    if not results:
        return EMPTY_STATS

    total_price = sum(course.get("price") or 0 for course in results)
    categories  = {course.get("category") for course in results}

    return SearchStats(
        total=len(results),
        avg_price=f"{total_price / len(results):.2f}",
        categories=len(categories),
    )


def summary_line(stats: SearchStats) -> str:
    return (
        f"Found {stats.total} courses • Average price: ${stats.avg_price} "
        f"• {stats.categories} categories"
    )
