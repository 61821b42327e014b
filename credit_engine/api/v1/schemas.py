"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from credit_engine.config import settings
from credit_engine.domain.letters import LetterType
from credit_engine.domain.models import (
    AccountData,
    CreditProfile,
    DisputeItem,
    InquiryData,
    PaymentRecord,
    ProfileChanges,
    PublicRecordData,
    RevolvingAccount,
    UserInfo,
)

AccountTypeField = Literal["credit_card", "auto_loan", "personal_loan", "student_loan", "mortgage", "other"]
BureauField = Literal["equifax", "experian", "transunion"]


class ResponseModel(BaseModel):
    """Base for responses built from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


# ───────────── Profile input ─────────────
class PaymentRecordSchema(ResponseModel):
    date: date
    status: Literal["on_time", "30_days_late", "60_days_late", "90_days_late", "charge_off"]


class AccountSchema(ResponseModel):
    """A tradeline; omit open_date to use the request's reference date"""

    account_type: AccountTypeField
    current_balance: float = 0
    credit_limit: Optional[float] = None
    original_amount: Optional[float] = None
    status: Literal["current", "late", "closed", "paid_off"] = "current"
    open_date: Optional[date] = None
    close_date: Optional[date] = None
    payment_history: Optional[List[PaymentRecordSchema]] = None
    months_reviewed: Optional[int] = Field(default=None, ge=0)
    late_payments_30: int = Field(default=0, ge=0)
    late_payments_60: int = Field(default=0, ge=0)
    late_payments_90: int = Field(default=0, ge=0)

    def to_domain(self, today: date) -> AccountData:
        history = None
        if self.payment_history is not None:
            history = [PaymentRecord(date=p.date, status=p.status) for p in self.payment_history]
        return AccountData(
            account_type=self.account_type,
            current_balance=self.current_balance,
            credit_limit=self.credit_limit,
            original_amount=self.original_amount,
            status=self.status,
            open_date=self.open_date or today,
            close_date=self.close_date,
            payment_history=history,
            months_reviewed=self.months_reviewed,
            late_payments_30=self.late_payments_30,
            late_payments_60=self.late_payments_60,
            late_payments_90=self.late_payments_90,
        )


class InquirySchema(ResponseModel):
    date: date
    creditor: str

    def to_domain(self) -> InquiryData:
        return InquiryData(date=self.date, creditor=self.creditor)


class PublicRecordSchema(ResponseModel):
    type: Literal["bankruptcy", "tax_lien", "judgment", "foreclosure"]
    date: date
    status: Literal["filed", "discharged", "satisfied"]
    amount: Optional[float] = None

    def to_domain(self) -> PublicRecordData:
        return PublicRecordData(type=self.type, date=self.date, status=self.status, amount=self.amount)


class CreditProfileSchema(BaseModel):
    accounts: List[AccountSchema] = Field(default_factory=list)
    inquiries: List[InquirySchema] = Field(default_factory=list)
    public_records: List[PublicRecordSchema] = Field(default_factory=list)

    def to_domain(self, today: date) -> CreditProfile:
        return CreditProfile(
            accounts=[a.to_domain(today) for a in self.accounts],
            inquiries=[i.to_domain() for i in self.inquiries],
            public_records=[r.to_domain() for r in self.public_records],
        )


class ScoreRequest(CreditProfileSchema):
    """Request body for POST /v1/scores/calculate"""

    as_of: Optional[date] = Field(default=None, description="Reference date (default: today)")


class ProfileChangesSchema(BaseModel):
    accounts: Optional[List[AccountSchema]] = None
    inquiries: Optional[List[InquirySchema]] = None
    public_records: Optional[List[PublicRecordSchema]] = None

    def to_domain(self, today: date) -> ProfileChanges:
        return ProfileChanges(
            accounts=[a.to_domain(today) for a in self.accounts] if self.accounts is not None else None,
            inquiries=[i.to_domain() for i in self.inquiries] if self.inquiries is not None else None,
            public_records=(
                [r.to_domain() for r in self.public_records] if self.public_records is not None else None
            ),
        )


class ScoreImpactRequest(BaseModel):
    """Request body for POST /v1/scores/impact"""

    current: CreditProfileSchema
    changes: ProfileChangesSchema
    as_of: Optional[date] = None


# ───────────── Score output ─────────────
class PaymentHistoryDetailsSchema(ResponseModel):
    on_time_payment_rate: float
    late_payments_30: int
    late_payments_60: int
    late_payments_90: int
    derogatory: int


class CreditUtilizationDetailsSchema(ResponseModel):
    overall_utilization: float
    per_card_utilization: List[float]
    accounts_over_limit: int


class CreditAgeDetailsSchema(ResponseModel):
    average_age: float
    oldest_account: float
    newest_account: float


class CreditMixDetailsSchema(ResponseModel):
    has_revolving: bool
    has_installment: bool
    has_mortgage: bool
    account_types: int


class NewCreditDetailsSchema(ResponseModel):
    inquiries_last_12_months: int
    accounts_opened_last_12_months: int
    recent_inquiries: int


class PaymentHistoryFactor(ResponseModel):
    score: float
    weight: float
    details: PaymentHistoryDetailsSchema


class CreditUtilizationFactor(ResponseModel):
    score: float
    weight: float
    details: CreditUtilizationDetailsSchema


class CreditAgeFactor(ResponseModel):
    score: float
    weight: float
    details: CreditAgeDetailsSchema


class CreditMixFactor(ResponseModel):
    score: float
    weight: float
    details: CreditMixDetailsSchema


class NewCreditFactor(ResponseModel):
    score: float
    weight: float
    details: NewCreditDetailsSchema


class ScoreFactorsSchema(ResponseModel):
    payment_history: PaymentHistoryFactor
    credit_utilization: CreditUtilizationFactor
    credit_age: CreditAgeFactor
    credit_mix: CreditMixFactor
    new_credit: NewCreditFactor


class ScoreResponse(ResponseModel):
    """Response for POST /v1/scores/calculate"""

    score: int
    grade: str
    factors: ScoreFactorsSchema


class ScoreImpactResponse(ResponseModel):
    current_score: int
    new_score: int
    impact: int


# ───────────── Bureaus ─────────────
class BureauSimulationRequest(BaseModel):
    """Request body for POST /v1/bureaus/simulate"""

    known_bureau: BureauField
    known_score: int = Field(..., ge=300, le=850)
    account_count: int = Field(default=0, ge=0)


class BureauScoreSchema(ResponseModel):
    bureau: BureauField
    score: int
    is_simulated: bool
    confidence: Literal["high", "medium", "low"]
    notes: str


class BureauSimulationResponse(BaseModel):
    scores: List[BureauScoreSchema]


# ───────────── Payments ─────────────
class PaymentDateRequest(BaseModel):
    """Request body for POST /v1/payments/optimal-date"""

    account_name: str = Field(..., min_length=1)
    statement_date: date
    due_date: date
    current_balance: float
    credit_limit: float
    planned_payment: float = 0


class RevolvingAccountSchema(BaseModel):
    name: str = Field(..., min_length=1)
    statement_date: date
    due_date: date
    current_balance: float
    credit_limit: float
    planned_payment: float = 0

    def to_domain(self) -> RevolvingAccount:
        return RevolvingAccount(**self.model_dump())


class PaymentScheduleRequest(BaseModel):
    accounts: List[RevolvingAccountSchema]


class PaymentWindowSchema(ResponseModel):
    start: date
    end: date


class UtilizationImpactSchema(ResponseModel):
    current: float
    after_payment: float
    improvement: float


class PaymentRecommendationSchema(ResponseModel):
    account_name: str
    statement_date: date
    due_date: date
    optimal_payment_date: date
    optimal_payment_window: PaymentWindowSchema
    reasoning: str
    utilization_impact: UtilizationImpactSchema


class PaymentScheduleResponse(BaseModel):
    recommendations: List[PaymentRecommendationSchema]


class StatementDateResponse(BaseModel):
    due_date: date
    estimated_statement_date: date


# ───────────── Reports ─────────────
class ReportTextRequest(BaseModel):
    """Request body for POST /v1/reports/parse-text"""

    text: str = Field(..., max_length=settings.max_report_chars)
    as_of: Optional[date] = None


class ParsedReportResponse(ResponseModel):
    accounts: List[AccountSchema]
    inquiries: List[InquirySchema]
    public_records: List[PublicRecordSchema]


class CSVRequest(BaseModel):
    """Request body for POST /v1/reports/parse-csv"""

    content: str = Field(..., max_length=settings.max_report_chars)


class CSVAccountSchema(ResponseModel):
    account_name: str
    account_number: Optional[str] = None
    account_type: Optional[str] = None
    balance: Optional[str] = None
    credit_limit: Optional[str] = None
    payment_status: Optional[str] = None
    date_opened: Optional[str] = None
    monthly_payment: Optional[str] = None
    interest_rate: Optional[str] = None


class CSVParseResponse(BaseModel):
    accounts: List[CSVAccountSchema]


# ───────────── Disputes ─────────────
class UserInfoSchema(BaseModel):
    name: str = Field(..., min_length=1)
    address: str
    city: str
    state: str
    zip: str
    ssn: Optional[str] = None
    date_of_birth: Optional[str] = None

    def to_domain(self) -> UserInfo:
        return UserInfo(**self.model_dump())


class DisputeItemSchema(BaseModel):
    description: str
    reason: str = ""
    type: Literal["account", "inquiry", "public_record", "personal_info"] = "account"
    account_number: Optional[str] = None
    creditor_name: Optional[str] = None

    def to_domain(self) -> DisputeItem:
        return DisputeItem(**self.model_dump())


class DisputeLetterRequest(BaseModel):
    """Request body for POST /v1/disputes/letter"""

    user_info: UserInfoSchema
    bureau: BureauField
    letter_type: LetterType
    items: List[DisputeItemSchema] = Field(default_factory=list)
    letter_date: Optional[date] = None


class DisputeLetterResponse(BaseModel):
    letter_type: LetterType
    bureau: BureauField
    letter: str


class DeadlineResponse(BaseModel):
    mailing_date: date
    deadline: date
    status: Literal["overdue", "approaching", "normal"]
    days_remaining: int
    message: str
