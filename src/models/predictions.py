"""Pydantic request/response models for cycle predictions and the calendar view."""

from __future__ import annotations

from datetime import date

from pydantic import ConfigDict, Field, model_validator

from src.cycle.calendar_view import CalendarMonth, DayKind
from src.cycle.predictor import PredictionResult
from src.cycle.projection import FertileWindow, PredictedCycle
from src.models.base import AbebaBase

# Longest fertile window and cycle list accepted back from clients
MAX_FERTILE_WINDOW_DAYS = 31
MAX_CALENDAR_CYCLES = 3660


# ---------- Shared ----------

class SymptomLogIn(AbebaBase):
    # labels are matched as logged, ignoring only case
    model_config = ConfigDict(str_strip_whitespace=False)

    label: str = Field(min_length=1)


class FertileWindowSchema(AbebaBase):
    start: date
    end: date

    @model_validator(mode="after")
    def _valid_range(self) -> "FertileWindowSchema":
        if self.end < self.start:
            raise ValueError("fertile window end must not be before its start")
        if (self.end - self.start).days >= MAX_FERTILE_WINDOW_DAYS:
            raise ValueError(
                f"fertile window must not be longer than {MAX_FERTILE_WINDOW_DAYS} days"
            )
        return self


class PredictedCycleSchema(AbebaBase):
    period_start: date
    ovulation_date: date
    fertile_window: FertileWindowSchema

    @classmethod
    def from_cycle(cls, cycle: PredictedCycle) -> "PredictedCycleSchema":
        return cls(
            period_start=cycle.period_start,
            ovulation_date=cycle.ovulation_date,
            fertile_window=FertileWindowSchema(
                start=cycle.fertile_window.start, end=cycle.fertile_window.end
            ),
        )

    def to_cycle(self) -> PredictedCycle:
        return PredictedCycle(
            period_start=self.period_start,
            ovulation_date=self.ovulation_date,
            fertile_window=FertileWindow(
                start=self.fertile_window.start, end=self.fertile_window.end
            ),
        )


class MonthRef(AbebaBase):
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)


# ---------- Predictions ----------

class PredictionRequest(AbebaBase):
    start_date: date
    cycle_length_days: int = Field(gt=0, le=365)
    luteal_phase_days: int = Field(gt=0, le=365)
    horizon_months: int | None = Field(default=None, ge=0, le=120)
    symptoms: list[SymptomLogIn] = Field(default_factory=list)
    today: date | None = None  # reference date; server date when omitted


class PredictionResponse(AbebaBase):
    adjustment_days: int
    generated_on: date
    horizon_end: date
    cycles: list[PredictedCycleSchema]
    initial_view: MonthRef

    @classmethod
    def from_result(cls, result: PredictionResult, initial_view: MonthRef) -> "PredictionResponse":
        return cls(
            adjustment_days=result.adjustment_days,
            generated_on=result.generated_on,
            horizon_end=result.horizon_end,
            cycles=[PredictedCycleSchema.from_cycle(c) for c in result.cycles],
            initial_view=initial_view,
        )


# ---------- Calendar ----------

class CalendarRequest(MonthRef):
    cycles: list[PredictedCycleSchema] = Field(
        default_factory=list, max_length=MAX_CALENDAR_CYCLES
    )
    offset: int = Field(default=0, ge=-1200, le=1200)
    today: date | None = None


class CalendarDaySchema(AbebaBase):
    date: date
    day: int
    kind: DayKind
    label: str
    is_today: bool


class CalendarMonthSchema(AbebaBase):
    year: int
    month: int
    title: str
    leading_blanks: int
    days: list[CalendarDaySchema]

    @classmethod
    def from_month(cls, month: CalendarMonth) -> "CalendarMonthSchema":
        return cls(
            year=month.year,
            month=month.month,
            title=month.title,
            leading_blanks=month.leading_blanks,
            days=[
                CalendarDaySchema(
                    date=d.date,
                    day=d.date.day,
                    kind=d.kind,
                    label=d.label,
                    is_today=d.is_today,
                )
                for d in month.days
            ],
        )
