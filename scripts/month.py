"""
Month calendar printout.
Fetches events and tasks from the planner API and prints the month grid.

Usage: python scripts/month.py [YYYY-MM]
"""

import sys
import time
import datetime
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from lifeplanner.core.config_manager import Config
from lifeplanner.models import DayBucket
from lifeplanner.processors.event_styler import priority_indicator
from lifeplanner.processors.grid_builder import CalendarGridModel
from lifeplanner.services.service_factory import ServiceFactory
from lifeplanner.utils.logger import setup_logger

logger = setup_logger(__name__)

CELL_WIDTH = 16


def parse_month(arg: Optional[str]) -> Optional[datetime.date]:
    """First day of the month named by ``arg`` (YYYY-MM), or None if invalid."""
    if not arg:
        return Config.today().replace(day=1)
    try:
        return datetime.datetime.strptime(arg, "%Y-%m").date()
    except ValueError:
        logger.error(f"Invalid month '{arg}', expected YYYY-MM")
        return None


def _cell_lines(bucket: DayBucket, max_visible: int) -> List[str]:
    marker = "*" if bucket.is_today else " "
    day_label = f"{bucket.date.day:>2}{marker}" if bucket.in_month else f"({bucket.date.day})"
    lines = [day_label]
    for occurrence in bucket.visible_occurrences:
        mark = priority_indicator(occurrence.priority)
        lines.append(f"{mark} {occurrence.title}")
    while len(lines) < max_visible + 1:
        lines.append("")
    lines.append(f"+{bucket.overflow_count} more" if bucket.overflow_count else "")
    return [line[:CELL_WIDTH - 1].ljust(CELL_WIDTH - 1) for line in lines]


def print_month(grid: List[DayBucket], month: datetime.date, max_visible: int) -> None:
    """Print the grid as a text table, one block per week."""
    width = CELL_WIDTH * 7 + 1
    print("\n" + "=" * width)
    print(f"{month:%B %Y}".center(width))
    print("=" * width)
    print("|" + "|".join(label.center(CELL_WIDTH - 1) for label in Config.WEEKDAY_LABELS) + "|")

    for week in CalendarGridModel.weeks(grid):
        print("-" * width)
        cells = [_cell_lines(bucket, max_visible) for bucket in week]
        for row in zip(*cells):
            print("|" + "|".join(row) + "|")
    print("-" * width + "\n")


def main() -> int:
    """
    Main execution function.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    start_time = time.time()

    if not Config.validate():
        logger.error("Configuration validation failed, check your .env file")
        return 1

    month = parse_month(sys.argv[1] if len(sys.argv) > 1 else None)
    if month is None:
        return 1

    try:
        view = ServiceFactory.create_calendar_view()
        view.state.current_month = month

        if not view.load():
            logger.warning("Some calendar data could not be loaded")

        print_month(view.grid(), month, view.settings.max_visible_per_day)
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1

    finally:
        elapsed = time.time() - start_time
        logger.info(f"Total execution time: {elapsed:.2f} seconds")


if __name__ == "__main__":
    sys.exit(main())
