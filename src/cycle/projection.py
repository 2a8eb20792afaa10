"""Period, ovulation and fertile-window projection.

Starting from a known period start, successive cycles are projected forward
until the predicted period start passes the horizon:

    period_start  = previous start + cycle length - symptom adjustment
    ovulation     = period_start - luteal phase
    fertile days  = the ``fertile_window_days`` days before ovulation

Ovulation day itself is not part of the fertile window; the calendar marks it
separately.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta

from src.cycle.config_loader import PredictorConfig, get_predictor_config
from src.cycle.errors import DegenerateCycleError, InvalidCycleInput

DEFAULT_HORIZON_MONTHS = 24


def add_months(d: date, months: int) -> date:
    """Shift a date by whole calendar months.

    The day is clamped to the end of the target month, so
    ``add_months(date(2024, 1, 31), 1)`` is 2024-02-29.  Results outside the
    supported calendar saturate at ``date.min`` / ``date.max``.
    """
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    if year > MAXYEAR:
        return date.max
    if year < MINYEAR:
        return date.min
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def _coerce_date(value: object, name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidCycleInput(f"{name} is not a valid date: {value!r}") from exc
    raise InvalidCycleInput(f"{name} is required")


def _coerce_int(value: object, name: str, minimum: int) -> int:
    if value is None or isinstance(value, bool):
        raise InvalidCycleInput(f"{name} is required")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError as exc:
            raise InvalidCycleInput(f"{name} must be a whole number, got {value!r}") from exc
    else:
        raise InvalidCycleInput(f"{name} must be a whole number, got {value!r}")
    if number < minimum:
        raise InvalidCycleInput(f"{name} must be at least {minimum}, got {number}")
    return number


@dataclass(frozen=True)
class CycleParameters:
    """Validated input for a projection run.

    Attributes:
        start_date:         First day of the most recent known period.
        cycle_length_days:  Days from one period start to the next.
        luteal_phase_days:  Days from ovulation to the next period start.
        horizon_months:     Calendar months ahead of today to project.
    """

    start_date: date
    cycle_length_days: int
    luteal_phase_days: int
    horizon_months: int = DEFAULT_HORIZON_MONTHS

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_date", _coerce_date(self.start_date, "start_date"))
        object.__setattr__(
            self,
            "cycle_length_days",
            _coerce_int(self.cycle_length_days, "cycle_length_days", minimum=1),
        )
        object.__setattr__(
            self,
            "luteal_phase_days",
            _coerce_int(self.luteal_phase_days, "luteal_phase_days", minimum=1),
        )
        object.__setattr__(
            self,
            "horizon_months",
            _coerce_int(self.horizon_months, "horizon_months", minimum=0),
        )

    @classmethod
    def parse(
        cls,
        start_date: object,
        cycle_length: object,
        luteal_phase: object,
        horizon_months: object = None,
    ) -> "CycleParameters":
        """Build parameters from raw form values such as ``"2024-01-01"`` and ``"28"``.

        Raises:
            InvalidCycleInput: If any value is missing, unparseable or out of range.
        """
        if horizon_months is None or horizon_months == "":
            horizon_months = DEFAULT_HORIZON_MONTHS
        # __post_init__ coerces and validates the raw values
        return cls(start_date, cycle_length, luteal_phase, horizon_months)  # type: ignore[arg-type]


@dataclass(frozen=True)
class FertileWindow:
    """Inclusive range of fertile days before ovulation."""

    start: date
    end: date

    def __contains__(self, d: object) -> bool:
        return isinstance(d, date) and self.start <= d <= self.end


@dataclass(frozen=True)
class PredictedCycle:
    """One projected cycle: period start, ovulation and the fertile window."""

    period_start: date
    ovulation_date: date
    fertile_window: FertileWindow


def horizon_end(horizon_months: int, today: date | None = None) -> date:
    """Return the last date a period start may fall on."""
    return add_months(today or date.today(), horizon_months)


def iter_cycles(
    params: CycleParameters,
    adjustment_days: int = 0,
    today: date | None = None,
    config: PredictorConfig | None = None,
) -> Iterator[PredictedCycle]:
    """Lazily project cycles from ``params.start_date`` up to the horizon.

    Preconditions are checked when this function is called, not when the
    iterator is first advanced.

    Args:
        params:          Validated cycle parameters.
        adjustment_days: Days to pull each period start earlier (see
                         ``symptom_adjustment_days``).
        today:           Reference date for the horizon (defaults to today).
        config:          Predictor config (defaults to the global singleton).

    Raises:
        InvalidCycleInput:    If ``adjustment_days`` is negative, or the first
                              fertile window would fall before ``date.min``.
        DegenerateCycleError: If the adjusted cycle would not advance.
    """
    if isinstance(adjustment_days, bool) or not isinstance(adjustment_days, int):
        raise InvalidCycleInput(f"adjustment_days must be a whole number, got {adjustment_days!r}")
    if adjustment_days < 0:
        raise InvalidCycleInput(f"adjustment_days must not be negative, got {adjustment_days}")

    step = params.cycle_length_days - adjustment_days
    if step <= 0:
        raise DegenerateCycleError(params.cycle_length_days, adjustment_days)

    fertile_days = (config or get_predictor_config()).projection.fertile_window_days
    # later cycles only move forward, so the first window is the earliest date
    if params.start_date.toordinal() + step - params.luteal_phase_days - fertile_days < 1:
        raise InvalidCycleInput(
            f"start_date {params.start_date} is too early for a {params.luteal_phase_days}-day "
            "luteal phase"
        )
    max_date = horizon_end(params.horizon_months, today)
    return _generate(params.start_date, step, params.luteal_phase_days, fertile_days, max_date)


def _generate(
    start: date, step: int, luteal_days: int, fertile_days: int, max_date: date
) -> Iterator[PredictedCycle]:
    current = start
    while True:
        try:
            period_start = current + timedelta(days=step)
        except OverflowError:
            # past date.max, so necessarily past the horizon too
            return
        if period_start > max_date:
            return
        ovulation = period_start - timedelta(days=luteal_days)
        yield PredictedCycle(
            period_start=period_start,
            ovulation_date=ovulation,
            fertile_window=FertileWindow(
                start=ovulation - timedelta(days=fertile_days),
                end=ovulation - timedelta(days=1),
            ),
        )
        current = period_start


def project_cycles(
    params: CycleParameters,
    adjustment_days: int = 0,
    today: date | None = None,
    config: PredictorConfig | None = None,
) -> tuple[PredictedCycle, ...]:
    """Eager form of :func:`iter_cycles`."""
    return tuple(iter_cycles(params, adjustment_days, today=today, config=config))
