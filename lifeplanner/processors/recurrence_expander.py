# File: lifeplanner/processors/recurrence_expander.py
"""
Recurrence expansion module.
Turns a stored event and its recurrence rule into dated occurrences.
"""

import datetime
from typing import List, Optional

from lifeplanner.models import (
    CalendarSettings, Occurrence, RecurrenceKind, RecurrenceRule, SourceEvent
)
from lifeplanner.models.common import js_weekday
from lifeplanner.utils.logger import setup_logger

logger = setup_logger(__name__)


def add_months(value: datetime.datetime, months: int) -> datetime.datetime:
    """
    Add calendar months, letting the day-of-month roll over.

    Jan 31 + 1 month lands on Mar 3 (Mar 2 in a leap year) rather than
    being clamped to the end of February.
    """
    years, month_index = divmod(value.month - 1 + months, 12)
    first = value.replace(year=value.year + years, month=month_index + 1, day=1)
    return first + datetime.timedelta(days=value.day - 1)


def add_years(value: datetime.datetime, years: int) -> datetime.datetime:
    """Add calendar years; Feb 29 rolls over to Mar 1 in common years."""
    first = value.replace(year=value.year + years, day=1)
    return first + datetime.timedelta(days=value.day - 1)


class RecurrenceExpander:
    """Expands recurring events into concrete occurrences."""

    def __init__(self, settings: Optional[CalendarSettings] = None):
        """
        Initialize the expander.

        Args:
            settings: Calendar constants (instance cap, colors, title glyph)
        """
        self.settings = settings or CalendarSettings()

    def expand(self, event: SourceEvent) -> List[Occurrence]:
        """
        Materialize an event into its base occurrence plus generated ones.

        The base occurrence always comes first and keeps the event id.
        Generated occurrences are read-only copies shifted to each
        recurrence date with the base duration preserved. Generation stops
        past the rule's end date, at the instance cap, or when a weekly
        weekday search finds no matching day.

        Args:
            event: Source event to expand

        Returns:
            Ordered list of occurrences, never empty
        """
        base_start, base_end = event.base_bounds()
        duration = base_end - base_start

        occurrences = [
            Occurrence.for_event(
                id=event.id,
                source_id=event.id,
                title=event.title,
                start=base_start,
                end=base_end,
                color=self.settings.event_color,
                priority=event.priority,
                all_day=event.all_day,
                completed=event.completed,
            )
        ]

        rule = event.recurrence
        if not rule.is_recurring:
            return occurrences

        cap = self.settings.max_recurring_instances
        title = f"{self.settings.recurring_glyph} {event.title}"
        current = base_start
        generated = 0

        while generated < cap:
            candidate = self.next_candidate(current, rule)
            if candidate is None:
                logger.debug(f"No further candidate after {current:%Y-%m-%d} for '{event.title}'")
                break
            if candidate.date() > rule.end_date:
                break

            try:
                candidate_end = candidate + duration
            except OverflowError as e:
                logger.warning(f"Recurrence of '{event.title}' stopped at {candidate:%Y-%m-%d}: {e}")
                break

            occurrences.append(
                Occurrence.for_event(
                    id=f"{event.id}-repeat-{generated}",
                    source_id=event.id,
                    title=title,
                    start=candidate,
                    end=candidate_end,
                    color=self.settings.event_color,
                    priority=event.priority,
                    all_day=event.all_day,
                    completed=event.completed,
                    is_recurring_instance=True,
                )
            )

            current = candidate
            generated += 1

        if generated >= cap:
            upcoming = self.next_candidate(current, rule)
            if upcoming is not None and upcoming.date() <= rule.end_date:
                logger.warning(
                    f"Recurrence of '{event.title}' truncated at {cap} instances "
                    f"(rule runs until {rule.end_date})"
                )

        logger.debug(f"Expanded '{event.title}' into {len(occurrences)} occurrences")
        return occurrences

    def next_candidate(self, current: datetime.datetime,
                       rule: RecurrenceRule) -> Optional[datetime.datetime]:
        """
        Compute the next recurrence date after ``current``.

        Returns None when a weekly weekday search finds no day in the set
        within 7 x interval days.
        """
        try:
            return self._step(current, rule)
        except (OverflowError, ValueError) as e:
            logger.warning(f"Recurrence stepping stopped at {current:%Y-%m-%d}: {e}")
            return None

    def _step(self, current: datetime.datetime,
              rule: RecurrenceRule) -> Optional[datetime.datetime]:
        interval = rule.interval

        if rule.kind == RecurrenceKind.DAILY:
            return current + datetime.timedelta(days=interval)

        if rule.kind == RecurrenceKind.WEEKLY:
            if not rule.weekdays:
                return current + datetime.timedelta(days=7 * interval)
            for offset in range(1, 7 * interval + 1):
                probe = current + datetime.timedelta(days=offset)
                if js_weekday(probe) in rule.weekdays:
                    return probe
            return None

        if rule.kind == RecurrenceKind.MONTHLY:
            return add_months(current, interval)

        if rule.kind == RecurrenceKind.YEARLY:
            return add_years(current, interval)

        return None


def expand_event(event: SourceEvent, settings: Optional[CalendarSettings] = None) -> List[Occurrence]:
    """Expand one event with a throwaway expander."""
    return RecurrenceExpander(settings).expand(event)
