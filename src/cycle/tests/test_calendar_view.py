"""Tests for day classification, month building and calendar navigation."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.cycle.calendar_view import (
    CalendarState,
    DayKind,
    PredictionIndex,
    build_month,
    classify_day,
)
from src.cycle.projection import CycleParameters, FertileWindow, PredictedCycle, project_cycles
from src.cycle.tests.conftest import TEST_TODAY


@pytest.fixture
def january_cycles(one_month_params: CycleParameters) -> tuple[PredictedCycle, ...]:
    return project_cycles(one_month_params, today=TEST_TODAY)


def make_cycle(period_start: date, ovulation: date, fertile_start: date, fertile_end: date) -> PredictedCycle:
    return PredictedCycle(
        period_start=period_start,
        ovulation_date=ovulation,
        fertile_window=FertileWindow(fertile_start, fertile_end),
    )


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class TestClassification:
    def test_five_day_period_span(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        for offset in range(5):
            d = date(2024, 1, 29) + timedelta(days=offset)
            assert classify_day(d, january_cycles) is DayKind.period

    def test_day_after_period_span(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        assert classify_day(date(2024, 2, 3), january_cycles) is DayKind.none

    def test_ovulation_day(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        assert classify_day(date(2024, 1, 15), january_cycles) is DayKind.ovulation

    def test_fertile_window_inclusive(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        index = PredictionIndex.from_cycles(january_cycles)
        fertile = [date(2024, 1, 9) + timedelta(days=i) for i in range(6)]
        assert all(index.classify(d) is DayKind.fertile for d in fertile)
        assert index.classify(date(2024, 1, 8)) is DayKind.none
        assert index.classify(date(2024, 1, 16)) is DayKind.none

    def test_period_beats_ovulation(self) -> None:
        # 5-day cycle with a 1-day luteal phase: the second ovulation lands
        # on the last day of the first period
        params = CycleParameters(date(2024, 1, 1), 5, 1, horizon_months=1)
        cycles = project_cycles(params, today=TEST_TODAY)
        overlap = cycles[1].ovulation_date
        assert cycles[0].period_start <= overlap <= cycles[0].period_start + timedelta(days=4)
        assert classify_day(overlap, cycles) is DayKind.period

    def test_ovulation_beats_fertile(self) -> None:
        cycles = [
            make_cycle(date(2024, 3, 24), date(2024, 3, 10), date(2024, 3, 4), date(2024, 3, 9)),
            make_cycle(date(2024, 4, 20), date(2024, 4, 6), date(2024, 3, 8), date(2024, 3, 12)),
        ]
        assert classify_day(date(2024, 3, 10), cycles) is DayKind.ovulation

    def test_custom_period_span(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        index = PredictionIndex.from_cycles(january_cycles, period_span_days=3)
        assert index.classify(date(2024, 1, 31)) is DayKind.period
        assert index.classify(date(2024, 2, 1)) is DayKind.none

    def test_empty_prediction(self) -> None:
        assert classify_day(date(2024, 1, 1), []) is DayKind.none

    def test_period_span_cut_at_end_of_calendar(self) -> None:
        cycle = make_cycle(
            date(9999, 12, 30), date(9999, 12, 16), date(9999, 12, 10), date(9999, 12, 15)
        )
        index = PredictionIndex.from_cycles([cycle])
        assert index.period_days == frozenset({date(9999, 12, 30), date.max})
        month = build_month(9999, 12, index, today=TEST_TODAY)
        assert month.days[-1].kind is DayKind.period

    def test_long_fertile_window_checked_as_range(self) -> None:
        cycle = make_cycle(date(9999, 12, 30), date(9999, 12, 29), date.min, date(9999, 12, 28))
        index = PredictionIndex.from_cycles([cycle])
        assert index.fertile_windows == (cycle.fertile_window,)
        assert index.classify(date(1, 1, 1)) is DayKind.fertile
        assert index.classify(date(5000, 6, 15)) is DayKind.fertile
        assert index.classify(date(9999, 12, 29)) is DayKind.ovulation

    def test_labels(self) -> None:
        assert DayKind.period.label == "Period"
        assert DayKind.ovulation.label == "Ovulation"
        assert DayKind.fertile.label == "Fertile"
        assert DayKind.none.label == ""


# ---------------------------------------------------------------------------
# Month building
# ---------------------------------------------------------------------------


class TestBuildMonth:
    def test_january_2024_layout(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        month = build_month(2024, 1, PredictionIndex.from_cycles(january_cycles), today=TEST_TODAY)
        assert month.title == "January 2024"
        assert len(month.days) == 31
        # 2024-01-01 is a Monday: one blank Sunday cell first
        assert month.leading_blanks == 1

    def test_sunday_start_has_no_blanks(self) -> None:
        # 2024-09-01 is a Sunday
        assert build_month(2024, 9, PredictionIndex(), today=TEST_TODAY).leading_blanks == 0

    def test_leap_february(self) -> None:
        month = build_month(2024, 2, PredictionIndex(), today=TEST_TODAY)
        assert len(month.days) == 29
        # 2024-02-01 is a Thursday
        assert month.leading_blanks == 4

    def test_days_carry_kinds(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        month = build_month(2024, 1, PredictionIndex.from_cycles(january_cycles), today=TEST_TODAY)
        kinds = {d.date.day: d.kind for d in month.days}
        assert kinds[15] is DayKind.ovulation
        assert kinds[9] is DayKind.fertile
        assert kinds[29] is DayKind.period
        assert kinds[20] is DayKind.none

    def test_today_flag_independent_of_kind(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        month = build_month(
            2024, 1, PredictionIndex.from_cycles(january_cycles), today=date(2024, 1, 15)
        )
        today_cells = [d for d in month.days if d.is_today]
        assert len(today_cells) == 1
        assert today_cells[0].kind is DayKind.ovulation

    def test_today_outside_month(self) -> None:
        month = build_month(2024, 3, PredictionIndex(), today=date(2024, 1, 15))
        assert not any(d.is_today for d in month.days)


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


class TestCalendarState:
    def test_opens_on_first_predicted_period(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        state = CalendarState.for_prediction(january_cycles, today=date(2023, 6, 1))
        assert (state.year, state.month) == (2024, 1)

    def test_empty_prediction_opens_on_today(self) -> None:
        state = CalendarState.for_prediction([], today=date(2024, 5, 10))
        assert (state.year, state.month) == (2024, 5)
        assert all(d.kind is DayKind.none for d in state.render(today=date(2024, 5, 10)).days)

    def test_advance_rolls_into_next_year(self) -> None:
        state = CalendarState(year=2024, month=12)
        state.advance(1)
        assert (state.year, state.month) == (2025, 1)

    def test_retreat_rolls_into_previous_year(self) -> None:
        state = CalendarState(year=2024, month=1)
        state.advance(-1)
        assert (state.year, state.month) == (2023, 12)

    def test_multi_month_jumps(self) -> None:
        state = CalendarState(year=2024, month=11)
        assert (state.advance(14).year, state.month) == (2026, 1)
        assert (state.advance(-25).year, state.month) == (2023, 12)

    def test_navigation_reuses_cached_index(self, january_cycles: tuple[PredictedCycle, ...]) -> None:
        state = CalendarState.for_prediction(january_cycles)
        index = state.index
        feb = state.advance(1).render(today=TEST_TODAY)
        assert state.index is index
        assert [d.date.day for d in feb.days if d.kind is DayKind.period] == [1, 2]

    def test_invalid_month_rejected(self) -> None:
        with pytest.raises(ValueError):
            CalendarState(year=2024, month=13)
