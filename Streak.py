from dataclasses import dataclass
from datetime import date, timedelta

from Cadence import WeekdayCadence, is_active

DEFAULT_WINDOW_SIZE = 10


@dataclass(frozen=True)
class StreakSummary:
    current: int = 0
    longest: int = 0
    name: str = ""

    def to_dict(self):
        return {"name": self.name, "current": self.current, "longest": self.longest}


@dataclass(frozen=True)
class DayMarker:
    date: date
    completed: bool = False

    @property
    def day(self):
        return self.date.day

    def to_dict(self):
        return {"date": self.date.isoformat(), "day": self.day, "completed": self.completed}


def _check_sorted(dates):
    return all(earlier < later for earlier, later in zip(dates, dates[1:]))


def compute_streak(cadence, dates):
    """Current and longest run of satisfied active days.

    Walks every calendar day from the first link to the last. A day with a
    link always extends the run, even if the cadence no longer expects it.
    An active day without a link resets the run; inactive days are skipped.
    ``dates`` must be sorted ascending without duplicates.
    """
    dates = list(dates)
    assert _check_sorted(dates), "link dates must be sorted ascending and unique"
    if not dates:
        return StreakSummary()

    linked = set(dates)
    run = 0
    longest = 0
    day = dates[0]
    while day <= dates[-1]:
        if day in linked:
            run += 1
        elif is_active(cadence, day):
            longest = max(longest, run)
            run = 0
        day += timedelta(days=1)
    longest = max(longest, run)
    return StreakSummary(current=run, longest=longest)


def summarize(chain, dates):
    streak = compute_streak(WeekdayCadence.from_chain(chain), dates)
    return StreakSummary(current=streak.current, longest=streak.longest, name=chain.name)


def build_day_grid(dates, today, window_size=DEFAULT_WINDOW_SIZE):
    """Markers for the ``window_size`` days ending on ``today``, oldest first."""
    if window_size < 1:
        raise ValueError("window_size must be at least 1")
    start = today - timedelta(days=window_size - 1)
    linked = {d for d in dates if start <= d <= today}
    days = [start + timedelta(days=offset) for offset in range(window_size)]
    grid = [DayMarker(date=day, completed=day in linked) for day in days]
    assert len(grid) == window_size
    return grid
