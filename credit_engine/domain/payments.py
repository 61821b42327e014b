"""
Payment date optimizer for revolving accounts.

Most creditors report to the bureaus 1-3 days after the statement closes,
so a payment that posts before the statement date lowers the reported
balance and therefore reported utilization.
"""

from datetime import date
from typing import List

from credit_engine.domain.models import (
    PaymentRecommendation,
    PaymentWindow,
    RevolvingAccount,
    UtilizationImpact,
)
from credit_engine.utils.date_utils import add_days, format_us_date

OPTIMAL_DAYS_BEFORE_STATEMENT = 4
WINDOW_START_DAYS_BEFORE = 5
WINDOW_END_DAYS_BEFORE = 2
STATEMENT_DAYS_BEFORE_DUE = 23  # typical card: statement closes 21-25 days before due date


def _utilization(balance: float, credit_limit: float) -> float:
    return (balance / credit_limit) * 100 if credit_limit > 0 else 0.0


def _format_amount(amount: float) -> str:
    return f"${int(amount)}" if float(amount).is_integer() else f"${amount:.2f}"


def build_reasoning(
    current_utilization: float,
    after_payment_utilization: float,
    planned_payment: float,
    optimal_payment_date: date,
    statement_date: date,
) -> str:
    """User-facing explanation; notification emails reuse it verbatim"""
    pay_by = format_us_date(optimal_payment_date)

    if current_utilization > 30:
        amount = _format_amount(planned_payment) if planned_payment > 0 else "the full balance"
        return (
            f"Your current utilization is {current_utilization:.1f}% (high). "
            f"Pay {amount} by {pay_by} (4 days before statement closes) to report "
            f"{after_payment_utilization:.1f}% utilization instead. This timing ensures your "
            f"payment posts BEFORE the balance is reported to credit bureaus."
        )
    if current_utilization > 10:
        return (
            f"Your current utilization is {current_utilization:.1f}% (moderate). "
            f"Pay by {pay_by} to lower reported utilization to "
            f"{after_payment_utilization:.1f}% and maximize your score impact."
        )
    return (
        f"Your utilization is already excellent at {current_utilization:.1f}%. "
        f"Continue paying before the statement date ({format_us_date(statement_date)}) "
        f"to maintain low reported balances."
    )


def calculate_optimal_payment_date(
    account_name: str,
    statement_date: date,
    due_date: date,
    current_balance: float,
    credit_limit: float,
    planned_payment: float = 0,
) -> PaymentRecommendation:
    """
    Recommend paying 4 days before the statement closes.

    A ``planned_payment`` of 0 means paying the full balance. The window
    runs from 5 to 2 days before the statement date.
    """
    if planned_payment == 0:
        planned_payment = current_balance

    current_utilization = _utilization(current_balance, credit_limit)
    after_payment_balance = max(0, current_balance - planned_payment)
    after_payment_utilization = _utilization(after_payment_balance, credit_limit)

    optimal_payment_date = add_days(statement_date, -OPTIMAL_DAYS_BEFORE_STATEMENT)
    window = PaymentWindow(
        start=add_days(statement_date, -WINDOW_START_DAYS_BEFORE),
        end=add_days(statement_date, -WINDOW_END_DAYS_BEFORE),
    )

    return PaymentRecommendation(
        account_name=account_name,
        statement_date=statement_date,
        due_date=due_date,
        optimal_payment_date=optimal_payment_date,
        optimal_payment_window=window,
        reasoning=build_reasoning(
            current_utilization,
            after_payment_utilization,
            planned_payment,
            optimal_payment_date,
            statement_date,
        ),
        utilization_impact=UtilizationImpact(
            current=current_utilization,
            after_payment=after_payment_utilization,
            improvement=current_utilization - after_payment_utilization,
        ),
    )


def calculate_all_payment_dates(accounts: List[RevolvingAccount]) -> List[PaymentRecommendation]:
    """Recommendations for every account with a limit, earliest first"""
    recommendations = [
        calculate_optimal_payment_date(
            account.name,
            account.statement_date,
            account.due_date,
            account.current_balance,
            account.credit_limit,
            account.planned_payment,
        )
        for account in accounts
        if account.credit_limit > 0
    ]
    return sorted(recommendations, key=lambda r: r.optimal_payment_date)


def estimate_statement_date(due_date: date) -> date:
    """Fallback when only the due date is known"""
    return add_days(due_date, -STATEMENT_DAYS_BEFORE_DUE)
