"""/v1/disputes/* - dispute letters and bureau response deadlines"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from credit_engine.api.dependencies import get_request_id, get_today
from credit_engine.api.v1.schemas import DeadlineResponse, DisputeLetterRequest, DisputeLetterResponse
from credit_engine.domain.deadlines import calculate_30_day_deadline, get_deadline_status
from credit_engine.domain.exceptions import UnknownLetterTypeError
from credit_engine.domain.letters import DisputeLetterParams, generate_dispute_letter

router = APIRouter()


@router.post("/disputes/letter", response_model=DisputeLetterResponse)
def create_dispute_letter(
    request_body: DisputeLetterRequest,
    request: Request,
    today: date = Depends(get_today),
):
    params = DisputeLetterParams(
        user_info=request_body.user_info.to_domain(),
        bureau=request_body.bureau,
        letter_type=request_body.letter_type,
        items=[item.to_domain() for item in request_body.items],
        letter_date=request_body.letter_date or today,
    )

    try:
        letter = generate_dispute_letter(params)
    except UnknownLetterTypeError as e:
        logging.warning(f"Letter generation failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return DisputeLetterResponse(
        letter_type=request_body.letter_type,
        bureau=request_body.bureau,
        letter=letter,
    )


@router.get("/disputes/deadline", response_model=DeadlineResponse)
def dispute_deadline(
    mailing_date: date = Query(..., description="Date the dispute was mailed"),
    today: date = Depends(get_today),
):
    """30-day investigation deadline and how close it is"""
    deadline = calculate_30_day_deadline(mailing_date)
    status = get_deadline_status(deadline, today=today)

    return DeadlineResponse(
        mailing_date=mailing_date,
        deadline=deadline,
        status=status.status,
        days_remaining=status.days_remaining,
        message=status.message,
    )
