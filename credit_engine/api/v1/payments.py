"""/v1/payments/* - statement-aware payment timing"""

from datetime import date

from fastapi import APIRouter, Query

from credit_engine.api.v1.schemas import (
    PaymentDateRequest,
    PaymentRecommendationSchema,
    PaymentScheduleRequest,
    PaymentScheduleResponse,
    StatementDateResponse,
)
from credit_engine.domain.payments import (
    calculate_all_payment_dates,
    calculate_optimal_payment_date,
    estimate_statement_date,
)

router = APIRouter()


@router.post("/payments/optimal-date", response_model=PaymentRecommendationSchema)
def optimal_payment_date(request_body: PaymentDateRequest):
    recommendation = calculate_optimal_payment_date(
        request_body.account_name,
        request_body.statement_date,
        request_body.due_date,
        request_body.current_balance,
        request_body.credit_limit,
        request_body.planned_payment,
    )
    return PaymentRecommendationSchema.model_validate(recommendation)


@router.post("/payments/schedule", response_model=PaymentScheduleResponse)
def payment_schedule(request_body: PaymentScheduleRequest):
    """
    Recommend payment dates for every revolving account.

    Accounts without a positive credit limit are skipped; results are
    ordered by optimal payment date.
    """
    recommendations = calculate_all_payment_dates([a.to_domain() for a in request_body.accounts])
    return PaymentScheduleResponse(
        recommendations=[PaymentRecommendationSchema.model_validate(r) for r in recommendations]
    )


@router.get("/payments/statement-date", response_model=StatementDateResponse)
def statement_date(due_date: date = Query(..., description="Card payment due date")):
    return StatementDateResponse(
        due_date=due_date,
        estimated_statement_date=estimate_statement_date(due_date),
    )
