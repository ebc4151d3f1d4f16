"""POST /v1/analysis - household financial health analysis endpoints"""

import time
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError

from finhealth.api.v1.schemas import AnalysisRequest, AnalysisResponse, FieldAnalysisRequest, QuickAnalysisRequest
from finhealth.api.dependencies import get_request_id
from finhealth.config import settings
from finhealth.domain.exceptions import InvalidFinancialDataError, UnknownFieldError
from finhealth.domain.forms import FIELD_MAP, apply_field_values, build_quick_record, default_financial_data
from finhealth.domain.models import AnalysisMode, FinancialData
from finhealth.domain.scoring import analyze_financial_health
from finhealth.infrastructure.observability.logging import log_analysis, logging_observer
from finhealth.infrastructure.observability.metrics import record_analysis, validation_failure_counter

router = APIRouter()


def _resolve_mode(mode: Optional[AnalysisMode]) -> AnalysisMode:
    return mode if mode is not None else AnalysisMode(settings.default_analysis_mode)


def _run_analysis(data: FinancialData, mode: AnalysisMode, request_id: str) -> AnalysisResponse:
    """
    Analyze one record and translate the outcome for HTTP.

    Flow:
    1. Run the scoring engine with configured limits and projection rates
    2. Record metrics and the structured completion log
    3. Map validation failures to 422, anything unexpected to 500
    """
    start_time = time.time()

    try:
        result = analyze_financial_health(
            data,
            mode=mode,
            observer=logging_observer,
            max_recommendations=settings.max_recommendations,
            projection_scenarios=(
                ("Conservative", settings.projection_conservative_return),
                ("Moderate", settings.projection_moderate_return),
                ("Aggressive", settings.projection_aggressive_return),
            ),
            retirement_return=settings.retirement_projection_return,
        )
    except InvalidFinancialDataError as e:
        validation_failure_counter.inc()
        logging.warning(f"Invalid financial data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_analysis(result)
    log_analysis(
        request_id,
        result.analysis_mode.value,
        result.overall_health_score,
        result.health_level,
        len(result.prioritized_recommendations),
        duration_ms,
    )

    return AnalysisResponse.model_validate(result)


@router.post("/analysis", response_model=AnalysisResponse)
async def create_analysis(request_body: AnalysisRequest, request: Request):
    """Analyze a complete household record from the comprehensive form"""
    request_id = get_request_id(request)
    return _run_analysis(request_body.to_domain(), _resolve_mode(request_body.mode), request_id)


@router.post("/analysis/quick", response_model=AnalysisResponse)
async def create_quick_analysis(request_body: QuickAnalysisRequest, request: Request):
    """Analyze the six quick-form figures expanded into a complete record"""
    request_id = get_request_id(request)
    data = build_quick_record(request_body.to_domain())
    return _run_analysis(data, AnalysisMode.QUICK, request_id)


def _describe_errors(error: ValidationError) -> str:
    """Name each rejected value by its form field key where one exists"""
    ui_keys = {target: key for key, target in FIELD_MAP.items()}
    names = []
    for item in error.errors():
        loc = tuple(str(part) for part in item["loc"])
        names.append(ui_keys.get(loc[-2:], ".".join(loc)))
    return f"Invalid field value(s): {', '.join(sorted(set(names)))}"


@router.post("/analysis/fields", response_model=AnalysisResponse)
async def create_field_analysis(request_body: FieldAnalysisRequest, request: Request):
    """
    Apply UI field values on top of the default record, then analyze it.

    The merged record is re-validated with the same range checks as
    POST /v1/analysis before scoring.
    """
    request_id = get_request_id(request)
    mode = _resolve_mode(request_body.mode)

    try:
        data = apply_field_values(default_financial_data(), request_body.field_values)
        data = AnalysisRequest.from_domain(data, mode).to_domain()
    except UnknownFieldError as e:
        validation_failure_counter.inc()
        logging.warning(f"Unknown field: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except ValidationError as e:
        detail = _describe_errors(e)
        validation_failure_counter.inc()
        logging.warning(detail, extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=detail)

    return _run_analysis(data, mode, request_id)
