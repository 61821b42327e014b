"""
Free-text credit report parser.

Walks report text line by line through an explicit section state machine
and accumulates tradelines, inquiries and public records. Matching is
keyword based, so the order of the keyword checks below is part of the
parser's observable behaviour.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Mapping, Optional

from credit_engine.domain.models import (
    AccountData,
    AccountStatus,
    AccountType,
    InquiryData,
    PaymentRecord,
    ParsedCreditReport,
    PublicRecordData,
)
from credit_engine.utils.text_utils import extract_amount, extract_date, extract_first_integer

logger = logging.getLogger(__name__)

ACCOUNT_HEADER_KEYWORDS = ("credit card", "revolving", "installment", "loan")
INQUIRY_KEYWORDS = ("inquir",)
PUBLIC_RECORD_KEYWORDS = ("public record", "bankruptcy", "judgment")

# Ordered: first match wins
ACCOUNT_TYPE_RULES: tuple[tuple[AccountType, tuple[str, ...]], ...] = (
    ("credit_card", ("credit card", "revolving")),
    ("auto_loan", ("auto", "vehicle", "car loan")),
    ("mortgage", ("mortgage", "home loan", "real estate")),
    ("student_loan", ("student", "education")),
    ("personal_loan", ("personal loan", "installment")),
)

ACCOUNT_STATUS_RULES: tuple[tuple[AccountStatus, tuple[str, ...]], ...] = (
    ("paid_off", ("paid", "closed", "paid off")),
    ("late", ("late", "delinquent", "past due")),
    ("closed", ("closed",)),
)

LATE_COUNTER_RULES = (
    ("late_payments_30", ("30 days late", "times 30")),
    ("late_payments_60", ("60 days late", "times 60")),
    ("late_payments_90", ("90 days late", "times 90")),
)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def parse_account_type(description: str) -> AccountType:
    """Infer the tradeline type from a description line"""
    lowered = description.lower()
    for account_type, keywords in ACCOUNT_TYPE_RULES:
        if _contains_any(lowered, keywords):
            return account_type
    return "other"


def parse_account_status(description: str) -> AccountStatus:
    """Classify a status line; "paid" and "closed" both read as paid_off"""
    lowered = description.lower()
    for status, keywords in ACCOUNT_STATUS_RULES:
        if _contains_any(lowered, keywords):
            return status
    return "current"


class Section(str, Enum):
    NONE = "none"
    ACCOUNTS = "accounts"
    INQUIRIES = "inquiries"
    PUBLIC_RECORDS = "public_records"


@dataclass
class ReportParserState:
    """
    Section state machine for :func:`parse_credit_report_text`.

    ``flush`` is the only transition that moves the in-progress account
    into the result, so every section change and the end of input go
    through it.
    """

    today: date = field(default_factory=date.today)
    section: Section = Section.NONE
    current_account: Optional[AccountData] = None
    result: ParsedCreditReport = field(default_factory=ParsedCreditReport)

    def flush(self) -> None:
        if self.current_account is not None:
            logger.debug("Flushing %s account", self.current_account.account_type)
            self.result.accounts.append(self.current_account)
            self.current_account = None

    def start_account(self, line: str) -> None:
        self.flush()
        self.section = Section.ACCOUNTS
        self.current_account = AccountData(
            account_type=parse_account_type(line),
            status="current",
            open_date=self.today,
            current_balance=0,
        )

    def enter_section(self, section: Section) -> None:
        self.flush()
        self.section = section

    def feed(self, line: str) -> None:
        lowered = line.lower()

        if _contains_any(lowered, ACCOUNT_HEADER_KEYWORDS):
            self.start_account(line)
            return

        if _contains_any(lowered, INQUIRY_KEYWORDS):
            self.enter_section(Section.INQUIRIES)
            return

        if _contains_any(lowered, PUBLIC_RECORD_KEYWORDS):
            self.enter_section(Section.PUBLIC_RECORDS)
            # A dated bankruptcy line both opens the section and is a record
            self._handle_public_record_line(line, lowered)
            return

        if self.section is Section.ACCOUNTS:
            self._handle_account_line(line, lowered)
        elif self.section is Section.INQUIRIES:
            self._handle_inquiry_line(line)
        elif self.section is Section.PUBLIC_RECORDS:
            self._handle_public_record_line(line, lowered)

    def finish(self) -> ParsedCreditReport:
        self.flush()
        return self.result

    # ───────────── Per-section handlers ─────────────
    def _handle_account_line(self, line: str, lowered: str) -> None:
        account = self.current_account
        if account is None:
            return

        if "balance" in lowered:
            amount = extract_amount(line)
            if amount is not None:
                account.current_balance = amount

        if "limit" in lowered or "high credit" in lowered:
            amount = extract_amount(line)
            if amount is not None:
                account.credit_limit = amount

        if "opened" in lowered or "open date" in lowered:
            opened = extract_date(line)
            if opened is not None:
                account.open_date = opened

        if "status" in lowered:
            account.status = parse_account_status(line)

        for attr, keywords in LATE_COUNTER_RULES:
            if _contains_any(lowered, keywords):
                count = extract_first_integer(line)
                if count is not None:
                    setattr(account, attr, count)

    def _handle_inquiry_line(self, line: str) -> None:
        inquiry_date = extract_date(line)
        if inquiry_date is None:
            return
        creditor = line
        for index, char in enumerate(line):
            if char.isdigit():
                creditor = line[:index]
                break
        self.result.inquiries.append(InquiryData(date=inquiry_date, creditor=creditor.strip()))

    def _handle_public_record_line(self, line: str, lowered: str) -> None:
        if "bankruptcy" not in lowered:
            return
        record_date = extract_date(line)
        if record_date is not None:
            self.result.public_records.append(
                PublicRecordData(type="bankruptcy", date=record_date, status="filed")
            )


def parse_credit_report_text(report_text: str, today: Optional[date] = None) -> ParsedCreditReport:
    """
    Parse OCR'd or pasted credit report text.

    Lines that match no keyword are ignored; empty input yields an empty
    report. Accounts without an "opened" line default to ``today``.
    """
    state = ReportParserState(today=today or date.today())
    for raw_line in (report_text or "").split("\n"):
        line = raw_line.strip()
        if line:
            state.feed(line)
    report = state.finish()
    logger.debug(
        "Parsed report text",
        extra={
            "accounts": len(report.accounts),
            "inquiries": len(report.inquiries),
            "public_records": len(report.public_records),
        },
    )
    return report


def _coerce_date(value: Any) -> Optional[date]:
    """Accept dates, datetimes, ISO strings or free-text dates; None when unreadable"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return extract_date(str(value))


def _coerce_payment_history(records: Any) -> Optional[List[PaymentRecord]]:
    if records is None:
        return None
    return [
        record
        if isinstance(record, PaymentRecord)
        else PaymentRecord(date=_coerce_date(record["date"]), status=record["status"])
        for record in records
    ]


def parse_structured_account(data: Mapping[str, Any], today: Optional[date] = None) -> AccountData:
    """Build an AccountData from a manually entered or imported mapping"""
    return AccountData(
        account_type=data.get("account_type") or "other",
        current_balance=data.get("current_balance") or 0,
        credit_limit=data.get("credit_limit"),
        original_amount=data.get("original_amount"),
        status=data.get("status") or "current",
        open_date=_coerce_date(data.get("open_date")) or today or date.today(),
        close_date=_coerce_date(data.get("close_date")),
        payment_history=_coerce_payment_history(data.get("payment_history")),
        months_reviewed=data.get("months_reviewed"),
        late_payments_30=data.get("late_payments_30") or 0,
        late_payments_60=data.get("late_payments_60") or 0,
        late_payments_90=data.get("late_payments_90") or 0,
    )


def convert_live_account(live_account: Mapping[str, Any], today: Optional[date] = None) -> AccountData:
    """
    Map a tracked live account onto AccountData.

    The creation date stands in for the open date, two years of clean
    history is assumed, and closed or paid-off accounts age until today.
    """
    today = today or date.today()
    status = live_account.get("status") or "current"
    return AccountData(
        account_type=live_account.get("account_type") or "other",
        current_balance=live_account.get("current_balance") or 0,
        credit_limit=live_account.get("credit_limit"),
        original_amount=live_account.get("original_amount"),
        status=status,
        open_date=_coerce_date(live_account.get("created_at")) or today,
        close_date=today if status in ("closed", "paid_off") else None,
        months_reviewed=24,
    )
