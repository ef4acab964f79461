from datetime import date, timedelta

import pytest

from Cadence import IntervalCadence, WeekdayCadence
from Streak import StreakSummary, build_day_grid, compute_streak, summarize

DAILY = WeekdayCadence.every_day()
WEEKENDS = WeekdayCadence(saturday=True, sunday=True)
TODAY = date(2024, 1, 10)


def d(day):
    return date(2024, 1, day)


def streak(cadence, dates):
    result = compute_streak(cadence, dates)
    return result.current, result.longest


@pytest.mark.parametrize("cadence", [DAILY, WEEKENDS, WeekdayCadence()])
def test_no_links(cadence):
    assert compute_streak(cadence, []) == StreakSummary(current=0, longest=0)


@pytest.mark.parametrize("cadence", [DAILY, WEEKENDS, WeekdayCadence()])
def test_single_link(cadence):
    assert streak(cadence, [d(3)]) == (1, 1)


def test_consecutive_days():
    assert streak(DAILY, [d(8), d(9), d(10)]) == (3, 3)


def test_missed_active_days_break_the_run():
    dates = [d(1), d(2), d(5), d(8), d(9), d(10)]
    assert streak(DAILY, dates) == (3, 3)


def test_longest_keeps_the_earlier_run():
    dates = [d(1), d(2), d(3), d(4), d(5), d(8)]
    assert streak(DAILY, dates) == (1, 5)


def test_weekend_cadence_skips_weekday_gaps_but_not_weekend_gaps():
    # 2024-01-03/04 are Wed/Thu (inactive), 2024-01-06/07 are Sat/Sun (active, missed)
    dates = [d(1), d(2), d(5), d(8), d(9), d(10)]
    assert streak(WEEKENDS, dates) == (3, 3)


def test_runs_merge_when_every_gap_is_inactive():
    cadence = WeekdayCadence(monday=True, tuesday=True, friday=True)
    dates = [d(1), d(2), d(5), d(8), d(9), d(10)]
    assert streak(cadence, dates) == (6, 6)


def test_links_on_inactive_days_still_count():
    # 2024-01-06 is a Saturday; the weekday cadence does not expect it
    cadence = WeekdayCadence.from_days("weekdays")
    assert streak(cadence, [d(5), d(6), d(8)]) == (3, 3)


def test_all_false_cadence_merges_everything():
    assert streak(WeekdayCadence(), [date(2023, 6, 1), d(1), d(10)]) == (3, 3)


def test_custom_predicate():
    cadence = IntervalCadence(anchor=d(1), every=2)
    assert streak(cadence, [d(1), d(3), d(5)]) == (3, 3)
    assert streak(cadence, [d(1), d(5)]) == (1, 1)


def test_is_pure_and_longest_bounds_current():
    dates = [d(1), d(3), d(4), d(9)]
    first = compute_streak(DAILY, dates)
    assert compute_streak(DAILY, dates) == first
    assert first.longest >= first.current


def test_unsorted_input_is_rejected():
    with pytest.raises(AssertionError):
        compute_streak(DAILY, [d(2), d(1)])
    with pytest.raises(AssertionError):
        compute_streak(DAILY, [d(1), d(1)])


def test_summarize_attaches_the_chain_name():
    class FakeChain:
        name = "Read"
        sunday = monday = tuesday = wednesday = thursday = friday = saturday = True

    summary = summarize(FakeChain(), [d(9), d(10)])
    assert summary.to_dict() == {"name": "Read", "current": 2, "longest": 2}


def test_grid_without_links():
    grid = build_day_grid([], TODAY)
    assert [m.date for m in grid] == [d(i) for i in range(1, 11)]
    assert not any(m.completed for m in grid)


def test_grid_marks_exact_dates_and_ignores_old_links():
    dates = [date(2023, 12, 1), d(2), d(9), d(10)]
    grid = build_day_grid(dates, TODAY)
    assert [m.day for m in grid if m.completed] == [2, 9, 10]
    assert compute_streak(DAILY, dates).longest == 2


def test_grid_full_window_round_trip():
    window = [TODAY - timedelta(days=i) for i in range(9, -1, -1)]
    grid = build_day_grid(window, TODAY)
    assert all(m.completed for m in grid)


@pytest.mark.parametrize("size", [1, 7, 10, 30])
def test_grid_length_and_anchor(size):
    grid = build_day_grid([d(1)], TODAY, window_size=size)
    assert len(grid) == size
    assert grid[-1].date == TODAY
    assert all(a.date + timedelta(days=1) == b.date for a, b in zip(grid, grid[1:]))


def test_grid_ignores_future_links():
    grid = build_day_grid([d(11)], TODAY)
    assert not any(m.completed for m in grid)


def test_grid_rejects_empty_window():
    with pytest.raises(ValueError):
        build_day_grid([], TODAY, window_size=0)


def test_marker_to_dict():
    marker = build_day_grid([TODAY], TODAY, window_size=1)[0]
    assert marker.to_dict() == {"date": "2024-01-10", "day": 10, "completed": True}
