"""Cycle prediction and calendar endpoints.

Both endpoints are stateless.  The client keeps the projected cycles from
``POST /predictions`` and sends them back to ``POST /predictions/calendar``
when paging through months, so navigation never re-runs the projection.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from src.cycle.calendar_view import CalendarState, PredictionIndex
from src.cycle.errors import CyclePredictionError, DegenerateCycleError
from src.cycle.projection import CycleParameters
from src.cycle.symptoms import SymptomLogEntry
from src.dependencies import AppSettings, Predictor
from src.models.predictions import (
    CalendarMonthSchema,
    CalendarRequest,
    MonthRef,
    PredictionRequest,
    PredictionResponse,
)

router = APIRouter(prefix="/predictions", tags=["predictions"])
logger = logging.getLogger("abeba.predictions")


@router.post("", response_model=PredictionResponse)
async def create_prediction(
    body: PredictionRequest, predictor: Predictor, settings: AppSettings
) -> Any:
    """Project period, ovulation and fertile days up to the horizon."""
    if settings.calculation_delay_ms > 0:
        await asyncio.sleep(settings.calculation_delay_ms / 1000)

    try:
        params = CycleParameters(
            start_date=body.start_date,
            cycle_length_days=body.cycle_length_days,
            luteal_phase_days=body.luteal_phase_days,
            horizon_months=(
                body.horizon_months
                if body.horizon_months is not None
                else predictor.config.projection.default_horizon_months
            ),
        )
        result = predictor.predict(
            params,
            symptoms=[SymptomLogEntry(label=s.label) for s in body.symptoms],
            today=body.today,
        )
    except DegenerateCycleError as exc:
        logger.warning(
            "Rejected degenerate cycle: length=%d adjustment=%d",
            exc.cycle_length_days,
            exc.adjustment_days,
        )
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except CyclePredictionError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    state = predictor.calendar_for(result)
    logger.info(
        "Projected %d cycle(s) through %s (adjustment %d day(s))",
        len(result.cycles),
        result.horizon_end,
        result.adjustment_days,
    )
    return PredictionResponse.from_result(
        result, initial_view=MonthRef(year=state.year, month=state.month)
    )


@router.post("/calendar", response_model=CalendarMonthSchema)
async def calendar_month(body: CalendarRequest, predictor: Predictor) -> Any:
    """Classify every day of a month against previously projected cycles.

    ``offset`` moves from ``year``/``month`` before rendering, e.g. ``1`` for
    the next-month button and ``-1`` for the previous-month button.
    """
    index = PredictionIndex.from_cycles(
        (c.to_cycle() for c in body.cycles),
        period_span_days=predictor.config.projection.period_span_days,
    )
    state = CalendarState(year=body.year, month=body.month, index=index)
    state.advance(body.offset)
    if not 1 <= state.year <= 9999:
        raise HTTPException(status_code=422, detail="Navigated outside the supported calendar range")
    return CalendarMonthSchema.from_month(state.render(today=body.today))
