"""Pure transformations over analytics records.

Functions:
    bucket_clicks(clicks, days=7) -> list[ClickBucket]
        Group click events by UTC calendar day, oldest first, keeping only the
        last `days` distinct days present in the data. Days without clicks are
        never synthesized.

    summarize(records) -> AnalyticsSummary
        Totals across the full analytics list: URL count, clicks, and average
        clicks per URL (rounded half up).

Example:
    >>> clicks = [
    ...     ClickEvent(timestamp=datetime(2024, 1, 1, 10, 0, tzinfo=UTC)),
    ...     ClickEvent(timestamp=datetime(2024, 1, 1, 23, 0, tzinfo=UTC)),
    ...     ClickEvent(timestamp=datetime(2024, 1, 2, 0, 0, tzinfo=UTC)),
    ... ]
    >>> bucket_clicks(clicks)
    [ClickBucket(date=datetime.date(2024, 1, 1), count=2), ClickBucket(date=datetime.date(2024, 1, 2), count=1)]
"""

import math
from collections import Counter
from datetime import UTC
from collections.abc import Iterable

from urlifyclient.constants import Defaults
from urlifyclient.models import AnalyticsRecord, AnalyticsSummary, ClickBucket, ClickEvent


def bucket_clicks(clicks: Iterable[ClickEvent], days: int = Defaults.ANALYTICS_DAYS) -> list[ClickBucket]:
    if days < 1:
        raise ValueError(f'Days must be a positive integer (given value: {days}).')

    counts = Counter(click.timestamp.astimezone(UTC).date() for click in clicks)
    return [ClickBucket(date=day, count=counts[day]) for day in sorted(counts)[-days:]]


def summarize(records: Iterable[AnalyticsRecord]) -> AnalyticsSummary:
    records = list(records)
    total_clicks = sum(record.total_clicks for record in records)
    total_urls = len(records)
    average = math.floor(total_clicks / total_urls + 0.5) if total_urls else 0
    return AnalyticsSummary(total_urls=total_urls, total_clicks=total_clicks, average_clicks=average)
