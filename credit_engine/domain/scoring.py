"""
Credit score estimation engine.

Approximates a FICO-range score from publicly documented factor weights:
- 35%: Payment history
- 30%: Credit utilization
- 15%: Credit age
- 10%: Credit mix
- 10%: New credit / inquiries

Actual bureau models are proprietary; this is an estimate.
"""

import math
from datetime import date, timedelta
from typing import List, Optional

from credit_engine.domain.models import (
    INSTALLMENT_TYPES,
    AccountData,
    CreditAgeDetails,
    CreditMixDetails,
    CreditProfile,
    CreditUtilizationDetails,
    Grade,
    InquiryData,
    NewCreditDetails,
    PaymentHistoryDetails,
    ProfileChanges,
    PublicRecordData,
    ScoreFactor,
    ScoreFactors,
    ScoreImpact,
    ScoreResult,
)
from credit_engine.utils.date_utils import age_in_months

PAYMENT_HISTORY_WEIGHT = 0.35
CREDIT_UTILIZATION_WEIGHT = 0.30
CREDIT_AGE_WEIGHT = 0.15
CREDIT_MIX_WEIGHT = 0.10
NEW_CREDIT_WEIGHT = 0.10

MIN_SCORE = 300
MAX_SCORE = 850

RECENT_WINDOW = timedelta(days=365)


def calculate_payment_history_score(
    accounts: List[AccountData],
    public_records: List[PublicRecordData],
) -> ScoreFactor:
    """
    Start from 100 and deduct 2/5/10 points per 30/60/90-day late and
    25 points per public record, floored at 0.

    Itemized payment_history wins over the aggregate counters per account.
    """
    total_payments = 0
    on_time_payments = 0
    late_30 = late_60 = late_90 = 0

    for account in accounts:
        if account.payment_history is not None:
            statuses = [record.status for record in account.payment_history]
            total_payments += len(statuses)
            on_time_payments += statuses.count("on_time")
            late_30 += statuses.count("30_days_late")
            late_60 += statuses.count("60_days_late")
            late_90 += statuses.count("90_days_late")
        else:
            account_lates = (
                (account.late_payments_30 or 0)
                + (account.late_payments_60 or 0)
                + (account.late_payments_90 or 0)
            )
            late_30 += account.late_payments_30 or 0
            late_60 += account.late_payments_60 or 0
            late_90 += account.late_payments_90 or 0
            if account.months_reviewed:
                total_payments += account.months_reviewed
                on_time_payments += max(0, account.months_reviewed - account_lates)

    on_time_rate = on_time_payments / total_payments if total_payments > 0 else 1.0
    derogatory = len(public_records)

    score = 100 - (late_30 * 2) - (late_60 * 5) - (late_90 * 10) - (derogatory * 25)
    score = max(0, score)

    return ScoreFactor(
        score=score,
        weight=PAYMENT_HISTORY_WEIGHT,
        details=PaymentHistoryDetails(
            on_time_payment_rate=on_time_rate,
            late_payments_30=late_30,
            late_payments_60=late_60,
            late_payments_90=late_90,
            derogatory=derogatory,
        ),
    )


def utilization_to_score(overall_utilization: float) -> float:
    """
    Piecewise mapping of utilization percent to a 0-100 score.

    Bands: <=10% is ideal, <=30% acceptable, then steeper penalties up to
    75% and a slow tail to zero beyond it.
    """
    if overall_utilization <= 10:
        return 100
    if overall_utilization <= 30:
        return 100 - (overall_utilization - 10) * 1.5
    if overall_utilization <= 50:
        return 70 - (overall_utilization - 30) * 2
    if overall_utilization <= 75:
        return 30 - (overall_utilization - 50) * 0.8
    return max(0, 10 - (overall_utilization - 75) * 0.4)


def calculate_credit_utilization_score(accounts: List[AccountData]) -> ScoreFactor:
    """Only credit cards with a positive limit count toward utilization"""
    revolving = [
        a for a in accounts
        if a.account_type == "credit_card" and a.credit_limit and a.credit_limit > 0
    ]

    if not revolving:
        # No revolving debt is treated as best-case
        return ScoreFactor(
            score=100,
            weight=CREDIT_UTILIZATION_WEIGHT,
            details=CreditUtilizationDetails(
                overall_utilization=0,
                per_card_utilization=[],
                accounts_over_limit=0,
            ),
        )

    total_balance = 0.0
    total_limit = 0.0
    per_card: List[float] = []
    accounts_over_limit = 0

    for account in revolving:
        balance = account.current_balance or 0
        limit = account.credit_limit or 0
        total_balance += balance
        total_limit += limit

        card_util = (balance / limit) * 100 if limit > 0 else 0
        per_card.append(card_util)
        if card_util > 100:
            accounts_over_limit += 1

    overall = (total_balance / total_limit) * 100 if total_limit > 0 else 0

    score = utilization_to_score(overall) - accounts_over_limit * 15
    score = max(0, score)

    return ScoreFactor(
        score=score,
        weight=CREDIT_UTILIZATION_WEIGHT,
        details=CreditUtilizationDetails(
            overall_utilization=overall,
            per_card_utilization=per_card,
            accounts_over_limit=accounts_over_limit,
        ),
    )


def _age_points(months: float) -> float:
    """Up to 50 points for an age in months"""
    if months >= 120:  # 10+ years
        return 50
    if months >= 84:
        return 40
    if months >= 60:
        return 30
    if months >= 36:
        return 20
    if months >= 24:
        return 10
    return (months / 24) * 10


def calculate_credit_age_score(accounts: List[AccountData], as_of: date) -> ScoreFactor:
    """Average age and oldest account each contribute up to 50 points"""
    if not accounts:
        return ScoreFactor(
            score=0,
            weight=CREDIT_AGE_WEIGHT,
            details=CreditAgeDetails(average_age=0, oldest_account=0, newest_account=0),
        )

    ages = [age_in_months(a.open_date, a.close_date or as_of) for a in accounts]
    average_age = sum(ages) / len(ages)
    oldest = max(ages)
    newest = min(ages)

    score = min(100, _age_points(average_age) + _age_points(oldest))

    return ScoreFactor(
        score=score,
        weight=CREDIT_AGE_WEIGHT,
        details=CreditAgeDetails(
            average_age=average_age,
            oldest_account=oldest,
            newest_account=newest,
        ),
    )


def calculate_credit_mix_score(accounts: List[AccountData]) -> ScoreFactor:
    types = {a.account_type for a in accounts}
    has_revolving = "credit_card" in types
    has_installment = bool(types & INSTALLMENT_TYPES)
    has_mortgage = "mortgage" in types

    score = 0
    if has_revolving:
        score += 30
    if has_installment:
        score += 30
    if has_mortgage:
        score += 20

    # Variety bonus
    if len(types) >= 4:
        score += 20
    elif len(types) == 3:
        score += 15
    elif len(types) == 2:
        score += 10

    return ScoreFactor(
        score=min(100, score),
        weight=CREDIT_MIX_WEIGHT,
        details=CreditMixDetails(
            has_revolving=has_revolving,
            has_installment=has_installment,
            has_mortgage=has_mortgage,
            account_types=len(types),
        ),
    )


def calculate_new_credit_score(
    accounts: List[AccountData],
    inquiries: List[InquiryData],
    as_of: date,
) -> ScoreFactor:
    """Deduct 5 per recent inquiry (max 50) and 8 per new account (max 30)"""
    cutoff = as_of - RECENT_WINDOW
    recent_inquiries = sum(1 for i in inquiries if i.date >= cutoff)
    recent_accounts = sum(1 for a in accounts if a.open_date >= cutoff)

    score = 100 - min(50, recent_inquiries * 5) - min(30, recent_accounts * 8)

    return ScoreFactor(
        score=max(0, score),
        weight=NEW_CREDIT_WEIGHT,
        details=NewCreditDetails(
            inquiries_last_12_months=recent_inquiries,
            accounts_opened_last_12_months=recent_accounts,
            recent_inquiries=recent_inquiries,
        ),
    )


def determine_grade(score: int) -> Grade:
    """
    Score bands:
    - 800+:    Excellent
    - 740-799: Very Good
    - 670-739: Good
    - 580-669: Fair
    - <580:    Poor
    """
    if score >= 800:
        return "Excellent"
    elif score >= 740:
        return "Very Good"
    elif score >= 670:
        return "Good"
    elif score >= 580:
        return "Fair"
    else:
        return "Poor"


def calculate_credit_score(profile: CreditProfile, as_of: Optional[date] = None) -> ScoreResult:
    """
    Main entry point: score a credit profile.

    ``as_of`` is the reference date for account ages and the 12-month
    lookback (default: today).
    """
    as_of = as_of or date.today()

    factors = ScoreFactors(
        payment_history=calculate_payment_history_score(profile.accounts, profile.public_records),
        credit_utilization=calculate_credit_utilization_score(profile.accounts),
        credit_age=calculate_credit_age_score(profile.accounts, as_of),
        credit_mix=calculate_credit_mix_score(profile.accounts),
        new_credit=calculate_new_credit_score(profile.accounts, profile.inquiries, as_of),
    )

    weighted = sum(factor.score * factor.weight for factor in factors.all())

    # Map the 0-100 weighted score onto 300-850
    score = math.floor(MIN_SCORE + (weighted / 100) * (MAX_SCORE - MIN_SCORE) + 0.5)
    score = max(MIN_SCORE, min(MAX_SCORE, score))

    return ScoreResult(score=score, grade=determine_grade(score), factors=factors)


def calculate_score_impact(
    current: CreditProfile,
    changes: ProfileChanges,
    as_of: Optional[date] = None,
) -> ScoreImpact:
    """
    What-if simulation: rescore with the lists present in ``changes``
    replacing the current profile's, and report the difference.
    """
    as_of = as_of or date.today()
    current_score = calculate_credit_score(current, as_of).score

    changed = CreditProfile(
        accounts=changes.accounts if changes.accounts is not None else current.accounts,
        inquiries=changes.inquiries if changes.inquiries is not None else current.inquiries,
        public_records=(
            changes.public_records if changes.public_records is not None else current.public_records
        ),
    )
    new_score = calculate_credit_score(changed, as_of).score

    return ScoreImpact(
        current_score=current_score,
        new_score=new_score,
        impact=new_score - current_score,
    )
