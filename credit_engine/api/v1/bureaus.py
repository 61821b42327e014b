"""POST /v1/bureaus/simulate - estimate the two missing bureau scores"""

import random

from fastapi import APIRouter, Depends

from credit_engine.api.dependencies import get_rng
from credit_engine.api.v1.schemas import (
    BureauScoreSchema,
    BureauSimulationRequest,
    BureauSimulationResponse,
)
from credit_engine.domain.bureaus import simulate_missing_bureau_scores
from credit_engine.infrastructure.observability.metrics import record_bureau_simulation

router = APIRouter()


@router.post("/bureaus/simulate", response_model=BureauSimulationResponse)
def simulate_bureaus(
    request_body: BureauSimulationRequest,
    rng: random.Random = Depends(get_rng),
):
    scores = simulate_missing_bureau_scores(
        request_body.known_bureau,
        request_body.known_score,
        request_body.account_count,
        rng=rng,
    )
    record_bureau_simulation(request_body.known_bureau, request_body.account_count)

    return BureauSimulationResponse(scores=[BureauScoreSchema.model_validate(s) for s in scores])
