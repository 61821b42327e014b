"""POST /v1/scores/* - credit score estimation and what-if simulation"""

import time
from datetime import date

from fastapi import APIRouter, Depends, Request

from credit_engine.api.dependencies import get_request_id, get_today
from credit_engine.api.v1.schemas import (
    ScoreImpactRequest,
    ScoreImpactResponse,
    ScoreRequest,
    ScoreResponse,
)
from credit_engine.domain.scoring import calculate_credit_score, calculate_score_impact
from credit_engine.infrastructure.observability.logging import log_score_calculation
from credit_engine.infrastructure.observability.metrics import record_score, record_score_impact

router = APIRouter()


@router.post("/scores/calculate", response_model=ScoreResponse)
def calculate_score(
    request_body: ScoreRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Estimate a 300-850 score for the supplied profile.

    Returns the score, its grade and the five weighted factors.
    """
    start_time = time.time()
    as_of = request_body.as_of or today

    profile = request_body.to_domain(as_of)
    result = calculate_credit_score(profile, as_of=as_of)

    duration_ms = (time.time() - start_time) * 1000
    record_score(result.grade)
    log_score_calculation(
        get_request_id(request), result.score, result.grade, len(profile.accounts), duration_ms
    )

    return ScoreResponse.model_validate(result)


@router.post("/scores/impact", response_model=ScoreImpactResponse)
def simulate_impact(
    request_body: ScoreImpactRequest,
    today: date = Depends(get_today),
):
    """Compare the current profile's score with the profile after the changes"""
    as_of = request_body.as_of or today

    impact = calculate_score_impact(
        request_body.current.to_domain(as_of),
        request_body.changes.to_domain(as_of),
        as_of=as_of,
    )
    record_score_impact(impact.impact)

    return ScoreImpactResponse.model_validate(impact)
