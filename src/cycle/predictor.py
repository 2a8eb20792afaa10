"""Cycle prediction facade: symptom adjustment plus projection in one call."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from src.cycle.calendar_view import CalendarState
from src.cycle.config_loader import PredictorConfig, get_predictor_config
from src.cycle.projection import (
    CycleParameters,
    PredictedCycle,
    horizon_end,
    project_cycles,
)
from src.cycle.symptoms import SymptomLogEntry, symptom_adjustment_days


@dataclass(frozen=True)
class PredictionResult:
    """Output of one prediction run.

    Attributes:
        parameters:      The validated input.
        adjustment_days: Days each period start was pulled earlier.
        cycles:          Projected cycles, oldest first.  May be empty.
        generated_on:    Reference date the horizon was measured from.
        horizon_end:     Last date a projected period could start on.
    """

    parameters: CycleParameters
    adjustment_days: int
    cycles: tuple[PredictedCycle, ...]
    generated_on: date
    horizon_end: date

    @property
    def next_period(self) -> PredictedCycle | None:
        return self.cycles[0] if self.cycles else None


class CyclePredictor:
    """Project cycles with the symptom heuristic applied.

    Holds no per-request state, so one instance can serve concurrent callers.

    Usage::

        predictor = CyclePredictor()
        result = predictor.predict(
            CycleParameters(date(2024, 1, 1), 28, 14),
            symptoms=[SymptomLogEntry("bloating")],
        )
        result.cycles[0].period_start   # date(2024, 1, 28)
    """

    def __init__(self, config: PredictorConfig | None = None) -> None:
        self._config = config or get_predictor_config()

    @property
    def config(self) -> PredictorConfig:
        return self._config

    def adjustment_days(self, symptoms: Iterable[SymptomLogEntry | str]) -> int:
        return symptom_adjustment_days(symptoms, self._config.symptom_adjustments)

    def predict(
        self,
        params: CycleParameters,
        symptoms: Iterable[SymptomLogEntry | str] = (),
        today: date | None = None,
    ) -> PredictionResult:
        """Run the full prediction.

        Raises:
            InvalidCycleInput:    If the adjustment or parameters are invalid.
            DegenerateCycleError: If the adjusted cycle length is not positive.
        """
        today = today or date.today()
        adjustment = self.adjustment_days(symptoms)
        cycles = project_cycles(params, adjustment, today=today, config=self._config)
        return PredictionResult(
            parameters=params,
            adjustment_days=adjustment,
            cycles=cycles,
            generated_on=today,
            horizon_end=horizon_end(params.horizon_months, today),
        )

    def calendar_for(
        self, result: PredictionResult, today: date | None = None
    ) -> CalendarState:
        """Return navigation state opened on the first predicted period."""
        return CalendarState.for_prediction(
            result.cycles,
            today=today or result.generated_on,
            period_span_days=self._config.projection.period_span_days,
        )
