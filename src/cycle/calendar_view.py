"""Calendar classification of projected cycles and month navigation.

Every calendar day gets at most one label, by precedence::

    period > ovulation > fertile > none

``CalendarState`` holds the month being viewed together with the cached
projection, so moving between months only re-classifies days.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

from src.cycle.projection import FertileWindow, PredictedCycle

DEFAULT_PERIOD_SPAN_DAYS = 5


class DayKind(str, Enum):
    period = "period"
    ovulation = "ovulation"
    fertile = "fertile"
    none = "none"

    @property
    def label(self) -> str:
        """Display label, empty for unmarked days."""
        return "" if self is DayKind.none else self.value.capitalize()


@dataclass(frozen=True)
class PredictionIndex:
    """Date lookups built once from a projected cycle sequence.

    Period and ovulation days are short, fixed spans and are stored as sets.
    Fertile windows are kept as ranges and tested with ``in``.
    """

    period_days: frozenset[date] = frozenset()
    ovulation_days: frozenset[date] = frozenset()
    fertile_windows: tuple[FertileWindow, ...] = ()

    @classmethod
    def from_cycles(
        cls,
        cycles: Iterable[PredictedCycle],
        period_span_days: int = DEFAULT_PERIOD_SPAN_DAYS,
    ) -> "PredictionIndex":
        period: set[date] = set()
        ovulation: set[date] = set()
        windows: list[FertileWindow] = []
        for c in cycles:
            # a period starting in the last days of 9999 is cut at date.max
            span = min(period_span_days, (date.max - c.period_start).days + 1)
            period.update(c.period_start + timedelta(days=i) for i in range(span))
            ovulation.add(c.ovulation_date)
            windows.append(c.fertile_window)
        return cls(frozenset(period), frozenset(ovulation), tuple(windows))

    def classify(self, d: date) -> DayKind:
        if d in self.period_days:
            return DayKind.period
        if d in self.ovulation_days:
            return DayKind.ovulation
        if any(d in w for w in self.fertile_windows):
            return DayKind.fertile
        return DayKind.none


def classify_day(
    d: date,
    cycles: Iterable[PredictedCycle],
    period_span_days: int = DEFAULT_PERIOD_SPAN_DAYS,
) -> DayKind:
    """Classify a single date against a cycle sequence."""
    return PredictionIndex.from_cycles(cycles, period_span_days).classify(d)


@dataclass(frozen=True)
class CalendarDay:
    date: date
    kind: DayKind
    is_today: bool = False

    @property
    def label(self) -> str:
        return self.kind.label


@dataclass(frozen=True)
class CalendarMonth:
    """One month of classified days.

    Attributes:
        year:           Four-digit year.
        month:          Month number, 1-12.
        title:          Display title such as "January 2024".
        leading_blanks: Empty cells before the 1st in a Sunday-first grid.
        days:           One entry per day of the month, in order.
    """

    year: int
    month: int
    title: str
    leading_blanks: int
    days: tuple[CalendarDay, ...]


def build_month(
    year: int,
    month: int,
    index: PredictionIndex,
    today: date | None = None,
) -> CalendarMonth:
    """Classify every day of ``year``/``month`` using a prebuilt index."""
    today = today or date.today()
    first_weekday, days_in_month = calendar.monthrange(year, month)
    days = []
    for day in range(1, days_in_month + 1):
        d = date(year, month, day)
        days.append(CalendarDay(date=d, kind=index.classify(d), is_today=d == today))
    return CalendarMonth(
        year=year,
        month=month,
        title=f"{calendar.month_name[month]} {year}",
        # monthrange counts Monday as 0; the grid starts on Sunday
        leading_blanks=(first_weekday + 1) % 7,
        days=tuple(days),
    )


@dataclass
class CalendarState:
    """Caller-owned view state: the month on screen and the cached projection.

    Usage::

        state = CalendarState.for_prediction(result.cycles)
        state.render()        # month of the first predicted period
        state.advance(1)
        state.render()        # next month, same cached projection
    """

    year: int
    month: int
    index: PredictionIndex = field(default_factory=PredictionIndex)

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {self.month}")

    @classmethod
    def for_prediction(
        cls,
        cycles: Iterable[PredictedCycle],
        today: date | None = None,
        period_span_days: int = DEFAULT_PERIOD_SPAN_DAYS,
    ) -> "CalendarState":
        """Open on the first predicted period's month, or today's if there is none."""
        cycles = tuple(cycles)
        anchor = cycles[0].period_start if cycles else (today or date.today())
        return cls(
            year=anchor.year,
            month=anchor.month,
            index=PredictionIndex.from_cycles(cycles, period_span_days),
        )

    def advance(self, offset: int = 1) -> "CalendarState":
        """Move ``offset`` months forward (negative to go back), rolling the year."""
        year_delta, month_index = divmod(self.month - 1 + offset, 12)
        self.year += year_delta
        self.month = month_index + 1
        return self

    def render(self, today: date | None = None) -> CalendarMonth:
        return build_month(self.year, self.month, self.index, today=today)
