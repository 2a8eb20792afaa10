"""Typed failures raised by the cycle predictor."""

from __future__ import annotations


class CyclePredictionError(ValueError):
    """Base class for every error the predictor raises to its caller."""


class InvalidCycleInput(CyclePredictionError):
    """A start date, cycle length, luteal phase or horizon is missing or invalid."""


class DegenerateCycleError(CyclePredictionError):
    """The symptom adjustment leaves a cycle that would never advance.

    Attributes:
        cycle_length_days: Cycle length supplied by the caller.
        adjustment_days:   Days subtracted by the symptom heuristic.
    """

    def __init__(self, cycle_length_days: int, adjustment_days: int) -> None:
        self.cycle_length_days = cycle_length_days
        self.adjustment_days = adjustment_days
        super().__init__(
            f"Cycle length of {cycle_length_days} day(s) minus a symptom adjustment of "
            f"{adjustment_days} day(s) leaves no forward progress between periods"
        )
