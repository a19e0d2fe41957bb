"""
v1 Schedule Router - generation and validation endpoints.

This module exposes the engine entry points over HTTP. It never hides a
solver failure: infeasible inputs answer 409 unless the caller explicitly asks
for the baseline fallback, which is always returned with its findings.
"""

import time
import logging

from fastapi import APIRouter, Request, HTTPException, Query
from fastapi.responses import ORJSONResponse

from rotaplan.engine.errors import ConfigurationError, InfeasibleScheduleError
from rotaplan.engine.parameter_validator import check_parameters
from rotaplan.engine.roster_types import RotationParameters, Schedule
from rotaplan.engine.schedule_generator import (
    coverage_start_day,
    generate,
    generate_baseline,
    generate_for_required_duty_days,
    validate,
)
from rotaplan.engine.search_config import SearchConfig
from service.models import (
    FindingModel,
    RequiredDutyDaysRequest,
    RotationRequest,
    ScheduleModel,
    ScheduleResponse,
    ValidateRequest,
    ValidateResponse,
)

logger = logging.getLogger("rotaplan.api.v1")

router = APIRouter()


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _build_response(status: str, params: RotationParameters, schedule: Schedule,
                    request_id: str, warnings) -> ScheduleResponse:
    start = coverage_start_day(params)
    findings = validate(schedule, schedule.horizon_days, start, params, schedule.duty_ceiling)
    return ScheduleResponse(
        status=status,
        horizonDays=schedule.horizon_days,
        coverageStartDay=start,
        dutyCeiling=schedule.duty_ceiling,
        schedule=ScheduleModel.from_schedule(schedule),
        compact=schedule.to_codes(),
        findings=[FindingModel.from_finding(f) for f in findings],
        warnings=warnings,
        requestId=request_id,
    )


@router.post("/schedule", response_model=ScheduleResponse, response_class=ORJSONResponse)
def schedule_endpoint(
    request: Request,
    payload: RotationRequest,
    fallback: int = Query(0, ge=0, le=1),
):
    """
    Generate a schedule over a fixed horizon.

    Query parameters:
    - fallback: If 1, answer an infeasible input with the baseline schedule and
      its findings (status INFEASIBLE_BASELINE) instead of 409

    Returns:
    - 200: Schedule found (or baseline with fallback=1)
    - 409: No legal schedule exists for these parameters
    - 422: Invalid parameters
    """
    request_id = _request_id(request)
    start_time = time.perf_counter()
    params = payload.to_parameters()
    warnings = [w.message for w in check_parameters(params).warnings]

    try:
        schedule = generate(params, SearchConfig.from_env())
        status = "SOLVED"
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    except InfeasibleScheduleError as e:
        if not fallback:
            raise HTTPException(status_code=409, detail=e.to_dict())
        logger.warning("schedule requestId=%s infeasible, returning baseline: %s", request_id, e)
        schedule = generate_baseline(params)
        status = "INFEASIBLE_BASELINE"
        warnings.append(str(e))

    response = _build_response(status, params, schedule, request_id, warnings)
    elapsed_ms = int((time.perf_counter() - start_time) * 1000)
    logger.info(
        "schedule requestId=%s status=%s horizon=%s ceiling=%s findings=%s durMs=%s",
        request_id, status, schedule.horizon_days, schedule.duty_ceiling,
        len(response.findings), elapsed_ms
    )
    return response


@router.post("/schedule/required-duty-days", response_model=ScheduleResponse,
             response_class=ORJSONResponse)
def required_duty_days_endpoint(request: Request, payload: RequiredDutyDaysRequest):
    """Generate the shortest schedule containing the requested number of covered days."""
    request_id = _request_id(request)
    params = payload.to_parameters()
    try:
        result = generate_for_required_duty_days(params, SearchConfig.from_env())
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    except InfeasibleScheduleError as e:
        raise HTTPException(status_code=409, detail=e.to_dict())

    logger.info("required-duty-days requestId=%s required=%s horizon=%s attempts=%s",
                request_id, params.required_duty_days, result.horizon_days, result.attempts)
    return _build_response("SOLVED", params.with_horizon(result.horizon_days),
                           result.schedule, request_id, [])


@router.post("/validate", response_model=ValidateResponse, response_class=ORJSONResponse)
def validate_endpoint(request: Request, payload: ValidateRequest):
    """Validate any schedule (solver output or hand-edited) against the coverage rules."""
    try:
        schedule = payload.schedule.to_schedule()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    horizon = payload.horizonDays if payload.horizonDays is not None else schedule.horizon_days
    findings = validate(schedule, horizon, payload.gracePeriodDays)
    return ValidateResponse(
        valid=not findings,
        findings=[FindingModel.from_finding(f) for f in findings],
        requestId=_request_id(request),
    )


@router.get("/coverage-start-day")
async def coverage_start_day_endpoint(inductionLength: int = Query(..., ge=1, le=5)):
    """First day on which two workers can be on Duty together."""
    params = RotationParameters(duty_cycle_length=0, rest_cycle_length=0, induction_length=inductionLength)
    return {"inductionLength": inductionLength, "coverageStartDay": coverage_start_day(params)}
