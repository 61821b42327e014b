"""Domain models - pure Python dataclasses representing credit report entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal, Optional, Union

AccountType = Literal["credit_card", "auto_loan", "personal_loan", "student_loan", "mortgage", "other"]
AccountStatus = Literal["current", "late", "closed", "paid_off"]
PaymentStatus = Literal["on_time", "30_days_late", "60_days_late", "90_days_late", "charge_off"]
PublicRecordType = Literal["bankruptcy", "tax_lien", "judgment", "foreclosure"]
PublicRecordStatus = Literal["filed", "discharged", "satisfied"]
Bureau = Literal["equifax", "experian", "transunion"]
Confidence = Literal["high", "medium", "low"]
Grade = Literal["Excellent", "Very Good", "Good", "Fair", "Poor"]

BUREAUS: tuple[Bureau, ...] = ("equifax", "experian", "transunion")
INSTALLMENT_TYPES = frozenset({"auto_loan", "personal_loan", "student_loan"})


@dataclass
class PaymentRecord:
    """One month of payment status on a tradeline"""

    date: date
    status: PaymentStatus


@dataclass
class AccountData:
    """
    A single tradeline.

    Itemized payment_history and the aggregate late_payments_* counters are
    alternative inputs: the counters are only read when payment_history is None.
    """

    account_type: AccountType
    current_balance: float = 0.0
    credit_limit: Optional[float] = None  # revolving accounts
    original_amount: Optional[float] = None  # installment accounts
    status: AccountStatus = "current"
    open_date: date = field(default_factory=date.today)
    close_date: Optional[date] = None
    payment_history: Optional[List[PaymentRecord]] = None
    months_reviewed: Optional[int] = None
    late_payments_30: int = 0
    late_payments_60: int = 0
    late_payments_90: int = 0


@dataclass
class InquiryData:
    """Hard inquiry on the report"""

    date: date
    creditor: str


@dataclass
class PublicRecordData:
    """Bankruptcy, lien, judgment or foreclosure"""

    type: PublicRecordType
    date: date
    status: PublicRecordStatus
    amount: Optional[float] = None


@dataclass
class CreditProfile:
    """Everything the score calculator looks at"""

    accounts: List[AccountData] = field(default_factory=list)
    inquiries: List[InquiryData] = field(default_factory=list)
    public_records: List[PublicRecordData] = field(default_factory=list)


@dataclass
class ProfileChanges:
    """Partial profile for what-if scoring; None means keep the current list"""

    accounts: Optional[List[AccountData]] = None
    inquiries: Optional[List[InquiryData]] = None
    public_records: Optional[List[PublicRecordData]] = None


@dataclass
class ParsedCreditReport:
    """Output of the free-text report parser"""

    accounts: List[AccountData] = field(default_factory=list)
    inquiries: List[InquiryData] = field(default_factory=list)
    public_records: List[PublicRecordData] = field(default_factory=list)

    def to_profile(self) -> CreditProfile:
        return CreditProfile(
            accounts=list(self.accounts),
            inquiries=list(self.inquiries),
            public_records=list(self.public_records),
        )


@dataclass
class CSVAccountData:
    """Flexible account row from a CSV export; unmapped fields stay None"""

    account_name: str
    account_number: Optional[str] = None
    account_type: Optional[str] = None
    balance: Optional[str] = None
    credit_limit: Optional[str] = None
    payment_status: Optional[str] = None
    date_opened: Optional[str] = None
    monthly_payment: Optional[str] = None
    interest_rate: Optional[str] = None


# ───────────── Score breakdown ─────────────
@dataclass
class PaymentHistoryDetails:
    on_time_payment_rate: float
    late_payments_30: int
    late_payments_60: int
    late_payments_90: int
    derogatory: int


@dataclass
class CreditUtilizationDetails:
    overall_utilization: float
    per_card_utilization: List[float]
    accounts_over_limit: int


@dataclass
class CreditAgeDetails:
    average_age: float  # months
    oldest_account: float
    newest_account: float


@dataclass
class CreditMixDetails:
    has_revolving: bool
    has_installment: bool
    has_mortgage: bool
    account_types: int


@dataclass
class NewCreditDetails:
    inquiries_last_12_months: int
    accounts_opened_last_12_months: int
    recent_inquiries: int


FactorDetails = Union[
    PaymentHistoryDetails,
    CreditUtilizationDetails,
    CreditAgeDetails,
    CreditMixDetails,
    NewCreditDetails,
]


@dataclass
class ScoreFactor:
    """One weighted sub-score on a 0-100 scale"""

    score: float
    weight: float
    details: FactorDetails


@dataclass
class ScoreFactors:
    payment_history: ScoreFactor
    credit_utilization: ScoreFactor
    credit_age: ScoreFactor
    credit_mix: ScoreFactor
    new_credit: ScoreFactor

    def all(self) -> List[ScoreFactor]:
        return [
            self.payment_history,
            self.credit_utilization,
            self.credit_age,
            self.credit_mix,
            self.new_credit,
        ]


@dataclass
class ScoreResult:
    """Output of the score calculator"""

    score: int  # 300-850
    grade: Grade
    factors: ScoreFactors


@dataclass
class ScoreImpact:
    """What-if comparison between two profiles"""

    current_score: int
    new_score: int
    impact: int


# ───────────── Bureau simulation ─────────────
@dataclass
class BureauScore:
    bureau: Bureau
    score: int
    is_simulated: bool
    confidence: Confidence
    notes: str = ""


# ───────────── Payment timing ─────────────
@dataclass
class PaymentWindow:
    start: date
    end: date


@dataclass
class UtilizationImpact:
    current: float
    after_payment: float
    improvement: float


@dataclass
class PaymentRecommendation:
    """Best date to pay a revolving account ahead of its statement"""

    account_name: str
    statement_date: date
    due_date: date
    optimal_payment_date: date
    optimal_payment_window: PaymentWindow
    reasoning: str
    utilization_impact: UtilizationImpact


@dataclass
class RevolvingAccount:
    """Live account fields the payment optimizer needs"""

    name: str
    statement_date: date
    due_date: date
    current_balance: float
    credit_limit: float
    planned_payment: float = 0.0


# ───────────── Disputes ─────────────
@dataclass
class DeadlineStatus:
    status: Literal["overdue", "approaching", "normal"]
    days_remaining: int
    message: str


@dataclass
class UserInfo:
    name: str
    address: str
    city: str
    state: str
    zip: str
    ssn: Optional[str] = None
    date_of_birth: Optional[str] = None


@dataclass
class DisputeItem:
    description: str
    reason: str = ""
    type: Literal["account", "inquiry", "public_record", "personal_info"] = "account"
    account_number: Optional[str] = None
    creditor_name: Optional[str] = None


@dataclass
class NegativeItem:
    """Report line flagged for dispute"""

    account_name: str
    is_negative: bool
    account_number: Optional[str] = None
    payment_status: Optional[str] = None
