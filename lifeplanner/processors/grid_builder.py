# File: lifeplanner/processors/grid_builder.py
"""
Month grid module.
Lays occurrences out on a fixed 6-week, Sunday-first grid.
"""

import datetime
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from lifeplanner.models import CalendarSettings, DayBucket, Occurrence
from lifeplanner.utils.logger import setup_logger

logger = setup_logger(__name__)

DAYS_PER_WEEK = 7
GRID_WEEKS = 6
GRID_CELLS = DAYS_PER_WEEK * GRID_WEEKS


def first_grid_day(month_ref: datetime.date) -> datetime.date:
    """Sunday on or before the first day of ``month_ref``'s month."""
    first = month_ref.replace(day=1)
    days_since_sunday = (first.weekday() + 1) % 7
    return first - datetime.timedelta(days=days_since_sunday)


def shift_month(month_ref: datetime.date, delta: int) -> datetime.date:
    """First day of the month ``delta`` months away."""
    years, month_index = divmod(month_ref.month - 1 + delta, 12)
    return datetime.date(month_ref.year + years, month_index + 1, 1)


class CalendarGridModel:
    """Builds the day buckets of one month view."""

    def __init__(self, settings: Optional[CalendarSettings] = None):
        self.settings = settings or CalendarSettings()

    def build(
        self,
        month_ref: datetime.date,
        occurrences: Iterable[Occurrence],
        today: Optional[datetime.date] = None
    ) -> List[DayBucket]:
        """
        Build the 42 day cells for the month containing ``month_ref``.

        Occurrences are bucketed by the calendar date of their start, in
        input order. Each bucket shows the first few directly and keeps the
        rest as overflow; nothing is dropped. Occurrences starting outside
        the grid are ignored.

        Args:
            month_ref: Any date inside the month to display
            occurrences: Expanded occurrences, already ordered
            today: Date to flag as today (optional)

        Returns:
            List of 42 DayBucket objects, Sunday-first
        """
        if isinstance(month_ref, datetime.datetime):
            month_ref = month_ref.date()

        start = first_grid_day(month_ref)
        end = start + datetime.timedelta(days=GRID_CELLS - 1)

        by_day: Dict[datetime.date, List[Occurrence]] = defaultdict(list)
        for occurrence in occurrences:
            day = occurrence.day
            if start <= day <= end:
                by_day[day].append(occurrence)

        buckets = []
        for offset in range(GRID_CELLS):
            day = start + datetime.timedelta(days=offset)
            buckets.append(DayBucket(
                date=day,
                in_month=(day.year == month_ref.year and day.month == month_ref.month),
                is_today=(today is not None and day == today),
                occurrences=by_day.get(day, []),
                max_visible=self.settings.max_visible_per_day,
            ))

        overflowing = sum(1 for b in buckets if b.overflow_count)
        logger.debug(
            f"Built grid {start} .. {end}: "
            f"{sum(len(v) for v in by_day.values())} occurrences, {overflowing} overflowing days"
        )
        return buckets

    @staticmethod
    def weeks(grid: List[DayBucket]) -> List[List[DayBucket]]:
        """Split a flat grid into week rows."""
        return [grid[i:i + DAYS_PER_WEEK] for i in range(0, len(grid), DAYS_PER_WEEK)]

    @staticmethod
    def find_bucket(grid: List[DayBucket], day: datetime.date) -> Optional[DayBucket]:
        """Bucket for ``day`` or None when it is off-grid."""
        if not grid:
            return None
        offset = (day - grid[0].date).days
        if 0 <= offset < len(grid):
            return grid[offset]
        return None
