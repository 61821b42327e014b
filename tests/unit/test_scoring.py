"""Unit tests for credit score estimation"""

from datetime import date, timedelta

import pytest

from credit_engine.domain.models import (
    AccountData,
    CreditProfile,
    InquiryData,
    PaymentRecord,
    ProfileChanges,
    PublicRecordData,
)
from credit_engine.domain.scoring import (
    calculate_credit_age_score,
    calculate_credit_mix_score,
    calculate_credit_score,
    calculate_credit_utilization_score,
    calculate_new_credit_score,
    calculate_payment_history_score,
    calculate_score_impact,
    determine_grade,
    utilization_to_score,
)


def _card(balance: float, limit: float, **kwargs) -> AccountData:
    return AccountData(account_type="credit_card", current_balance=balance, credit_limit=limit, **kwargs)


def _bankruptcy() -> PublicRecordData:
    return PublicRecordData(type="bankruptcy", date=date(2019, 3, 15), status="filed")


def test_empty_profile_scores_in_range(as_of):
    """No accounts: utilization defaults to 100, credit age to 0"""
    result = calculate_credit_score(CreditProfile(), as_of=as_of)

    assert 300 <= result.score <= 850
    assert result.factors.credit_utilization.score == 100
    assert result.factors.credit_age.score == 0
    # 35 + 30 + 0 + 0 + 10 = 75 weighted -> 300 + 0.75 * 550 = 712.5
    assert result.score == 713
    assert result.grade == "Good"


def test_factor_weights_sum_to_one(as_of):
    result = calculate_credit_score(CreditProfile(), as_of=as_of)
    weights = [f.weight for f in result.factors.all()]

    assert weights == [0.35, 0.30, 0.15, 0.10, 0.10]
    assert sum(weights) == pytest.approx(1.0)


def test_seasoned_profile_hits_ceiling(seasoned_profile, as_of):
    result = calculate_credit_score(seasoned_profile, as_of=as_of)

    assert result.score == 850
    assert result.grade == "Excellent"
    assert all(f.score == 100 for f in result.factors.all())


def test_utilization_breakpoints():
    assert utilization_to_score(0) == 100
    assert utilization_to_score(10) == 100
    assert utilization_to_score(30) == pytest.approx(70)
    assert utilization_to_score(50) == pytest.approx(30)
    assert utilization_to_score(75) == pytest.approx(10)
    assert utilization_to_score(100) == pytest.approx(0)
    assert utilization_to_score(250) == 0


def test_utilization_score_is_non_increasing():
    points = [0, 5, 10, 10.01, 20, 30, 30.01, 40, 50, 50.01, 60, 75, 75.01, 90, 100, 150]
    scores = [utilization_to_score(p) for p in points]

    assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_utilization_only_counts_cards_with_limits():
    factor = calculate_credit_utilization_score(
        [
            AccountData(account_type="auto_loan", current_balance=15000, credit_limit=20000),
            _card(500, 0),
            _card(500, None),
        ]
    )

    assert factor.score == 100
    assert factor.details.overall_utilization == 0
    assert factor.details.per_card_utilization == []


def test_utilization_aggregates_across_cards():
    factor = calculate_credit_utilization_score([_card(2000, 5000), _card(1000, 5000)])

    # 3000 / 10000 = 30%
    assert factor.details.overall_utilization == pytest.approx(30)
    assert factor.details.per_card_utilization == pytest.approx([40, 20])
    assert factor.score == pytest.approx(70)


def test_utilization_penalizes_over_limit_cards():
    factor = calculate_credit_utilization_score([_card(1200, 1000), _card(0, 9000)])

    # 12% overall -> 97, minus 15 for the over-limit card
    assert factor.details.accounts_over_limit == 1
    assert factor.score == pytest.approx(82)


def test_payment_history_prefers_itemized_records():
    history = [PaymentRecord(date=date(2023, m, 1), status="on_time") for m in range(1, 11)]
    history += [
        PaymentRecord(date=date(2023, 11, 1), status="30_days_late"),
        PaymentRecord(date=date(2023, 12, 1), status="60_days_late"),
    ]
    account = _card(100, 1000, payment_history=history, late_payments_30=5, late_payments_90=3)

    factor = calculate_payment_history_score([account], [])

    # The aggregate counters are ignored when itemized history exists
    assert factor.details.late_payments_30 == 1
    assert factor.details.late_payments_60 == 1
    assert factor.details.late_payments_90 == 0
    assert factor.score == 93
    assert factor.details.on_time_payment_rate == pytest.approx(10 / 12)


def test_payment_history_from_aggregate_counters():
    account = _card(100, 1000, months_reviewed=24, late_payments_30=2, late_payments_90=1)

    factor = calculate_payment_history_score([account], [])

    assert factor.score == 100 - 4 - 10
    assert factor.details.on_time_payment_rate == pytest.approx(21 / 24)


def test_payment_history_counts_each_account_once():
    accounts = [
        _card(100, 1000, months_reviewed=12, late_payments_30=1),
        _card(100, 1000, months_reviewed=12, late_payments_30=1),
    ]

    factor = calculate_payment_history_score(accounts, [])

    assert factor.details.late_payments_30 == 2
    assert factor.details.on_time_payment_rate == pytest.approx(22 / 24)


def test_payment_history_public_records_and_floor():
    assert calculate_payment_history_score([], [_bankruptcy()]).score == 75
    assert calculate_payment_history_score([], [_bankruptcy()] * 5).score == 0


def test_credit_age_long_history(as_of):
    account = _card(0, 1000, open_date=as_of - timedelta(days=3600))

    factor = calculate_credit_age_score([account], as_of)

    assert factor.details.average_age == pytest.approx(120)
    assert factor.score == 100


def test_credit_age_young_account(as_of):
    account = _card(0, 1000, open_date=as_of - timedelta(days=900))

    factor = calculate_credit_age_score([account], as_of)

    # 30 months lands in the 24-35 band for both average and oldest
    assert factor.score == 20


def test_credit_age_below_two_years_is_proportional(as_of):
    account = _card(0, 1000, open_date=as_of - timedelta(days=360))

    factor = calculate_credit_age_score([account], as_of)

    assert factor.score == pytest.approx(2 * (12 / 24) * 10)


def test_credit_age_uses_close_date(as_of):
    account = _card(
        0,
        1000,
        open_date=as_of - timedelta(days=1200),
        close_date=as_of - timedelta(days=600),
    )

    factor = calculate_credit_age_score([account], as_of)

    assert factor.details.oldest_account == pytest.approx(20)
    assert factor.details.newest_account == pytest.approx(20)


def test_credit_age_future_open_date_floors_at_zero(as_of):
    account = _card(0, 1000, open_date=as_of + timedelta(days=60))

    factor = calculate_credit_age_score([account], as_of)

    assert factor.details.average_age == 0
    assert factor.score == 0


def test_credit_mix_scoring():
    card = AccountData(account_type="credit_card")
    auto = AccountData(account_type="auto_loan")
    mortgage = AccountData(account_type="mortgage")
    student = AccountData(account_type="student_loan")

    assert calculate_credit_mix_score([]).score == 0
    assert calculate_credit_mix_score([card]).score == 30
    assert calculate_credit_mix_score([card, auto]).score == 70
    assert calculate_credit_mix_score([card, auto, mortgage]).score == 95
    assert calculate_credit_mix_score([card, auto, mortgage, student]).score == 100

    details = calculate_credit_mix_score([card, auto, mortgage]).details
    assert details.has_revolving and details.has_installment and details.has_mortgage
    assert details.account_types == 3


def test_new_credit_recent_activity(as_of):
    inquiries = [
        InquiryData(date=as_of - timedelta(days=10), creditor="A"),
        InquiryData(date=as_of - timedelta(days=200), creditor="B"),
        InquiryData(date=as_of - timedelta(days=364), creditor="C"),
        InquiryData(date=as_of - timedelta(days=400), creditor="Old"),
    ]
    accounts = [
        AccountData(account_type="credit_card", open_date=as_of - timedelta(days=90)),
        AccountData(account_type="auto_loan", open_date=as_of - timedelta(days=2000)),
    ]

    factor = calculate_new_credit_score(accounts, inquiries, as_of)

    assert factor.details.inquiries_last_12_months == 3
    assert factor.details.accounts_opened_last_12_months == 1
    assert factor.score == 100 - 15 - 8


def test_new_credit_deductions_are_capped(as_of):
    inquiries = [InquiryData(date=as_of - timedelta(days=i), creditor="X") for i in range(12)]
    accounts = [AccountData(account_type="credit_card", open_date=as_of) for _ in range(5)]

    factor = calculate_new_credit_score(accounts, inquiries, as_of)

    assert factor.score == 100 - 50 - 30


@pytest.mark.parametrize(
    "score,grade",
    [
        (850, "Excellent"),
        (800, "Excellent"),
        (799, "Very Good"),
        (740, "Very Good"),
        (739, "Good"),
        (670, "Good"),
        (669, "Fair"),
        (580, "Fair"),
        (579, "Poor"),
        (300, "Poor"),
    ],
)
def test_grade_thresholds(score, grade):
    assert determine_grade(score) == grade


def test_worst_case_profile_stays_in_range(as_of):
    profile = CreditProfile(
        accounts=[_card(5000, 1000, open_date=as_of, months_reviewed=12, late_payments_90=12)],
        inquiries=[InquiryData(date=as_of, creditor="X")] * 20,
        public_records=[_bankruptcy()] * 3,
    )

    result = calculate_credit_score(profile, as_of=as_of)

    assert 300 <= result.score <= 850
    assert result.grade == "Poor"


def test_score_impact_identical_changes_is_zero(maxed_card_profile, as_of):
    changes = ProfileChanges(
        accounts=maxed_card_profile.accounts,
        inquiries=maxed_card_profile.inquiries,
        public_records=maxed_card_profile.public_records,
    )

    impact = calculate_score_impact(maxed_card_profile, changes, as_of=as_of)

    assert impact.impact == 0
    assert impact.current_score == impact.new_score


def test_score_impact_of_paying_down_card(maxed_card_profile, as_of):
    paid_down = _card(500, 10000, open_date=maxed_card_profile.accounts[0].open_date)

    impact = calculate_score_impact(maxed_card_profile, ProfileChanges(accounts=[paid_down]), as_of=as_of)

    expected = calculate_credit_score(
        CreditProfile(accounts=[paid_down], inquiries=maxed_card_profile.inquiries),
        as_of=as_of,
    ).score
    assert impact.new_score == expected
    assert impact.impact == impact.new_score - impact.current_score
    assert impact.impact > 0


def test_score_impact_keeps_unchanged_lists(maxed_card_profile, as_of):
    impact = calculate_score_impact(maxed_card_profile, ProfileChanges(inquiries=[]), as_of=as_of)

    # Dropping two recent inquiries restores 10 new-credit points (weighted 51.2 -> 52.2)
    assert impact.current_score == 582
    assert impact.new_score == 587
    assert impact.impact == 5


def test_late_counters_apply_without_months_reviewed():
    factor = calculate_payment_history_score([_card(100, 1000, late_payments_30=2, late_payments_60=1)], [])

    assert factor.score == 100 - 4 - 5
    assert factor.details.on_time_payment_rate == 1.0
