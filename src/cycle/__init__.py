"""Menstrual cycle prediction for Abeba.

Pure computation: no I/O, persistence or authentication happens here.

Modules:
    config_loader - Load/validate/hot-reload predictor_config.yaml
    symptoms      - Symptom log adjustment heuristic
    projection    - Period, ovulation and fertile-window projection loop
    calendar_view - Day classification and month navigation state
    predictor     - CyclePredictor facade combining the above
"""

from src.cycle.calendar_view import (
    CalendarDay,
    CalendarMonth,
    CalendarState,
    DayKind,
    PredictionIndex,
    build_month,
    classify_day,
)
from src.cycle.config_loader import PredictorConfig, get_predictor_config
from src.cycle.errors import CyclePredictionError, DegenerateCycleError, InvalidCycleInput
from src.cycle.predictor import CyclePredictor, PredictionResult
from src.cycle.projection import (
    CycleParameters,
    FertileWindow,
    PredictedCycle,
    add_months,
    iter_cycles,
    project_cycles,
)
from src.cycle.symptoms import SymptomLogEntry, symptom_adjustment_days

__all__ = [
    "CalendarDay",
    "CalendarMonth",
    "CalendarState",
    "CycleParameters",
    "CyclePredictionError",
    "CyclePredictor",
    "DayKind",
    "DegenerateCycleError",
    "FertileWindow",
    "InvalidCycleInput",
    "PredictedCycle",
    "PredictionIndex",
    "PredictionResult",
    "PredictorConfig",
    "SymptomLogEntry",
    "add_months",
    "build_month",
    "classify_day",
    "get_predictor_config",
    "iter_cycles",
    "project_cycles",
    "symptom_adjustment_days",
]
