"""CSV parser for account exports (Credit Karma, Experian, TransUnion, generic)"""

import csv
import logging
import re
from typing import Dict, List, Optional

from credit_engine.domain.exceptions import InvalidCSVError
from credit_engine.domain.models import CSVAccountData
from credit_engine.utils.text_utils import clean_currency, clean_percentage, normalize_date

logger = logging.getLogger(__name__)

UNKNOWN_ACCOUNT_NAME = "Unknown Account"

# Ordered: a header is assigned to the first field whose pattern matches
COLUMN_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("account_name", re.compile(r"account\s*name|creditor|lender|company", re.I)),
    ("account_number", re.compile(r"account\s*number|account\s*#|acct\s*num", re.I)),
    ("account_type", re.compile(r"account\s*type|type|category", re.I)),
    ("balance", re.compile(r"^balance|current\s*balance|amount\s*owed", re.I)),
    ("credit_limit", re.compile(r"credit\s*limit|limit|max\s*credit", re.I)),
    ("payment_status", re.compile(r"status|payment\s*status|pay\s*status", re.I)),
    ("date_opened", re.compile(r"date\s*opened|open\s*date|opened", re.I)),
    ("monthly_payment", re.compile(r"monthly\s*payment|payment|min\s*payment", re.I)),
    ("interest_rate", re.compile(r"interest|apr|rate", re.I)),
)

ACCOUNT_TYPE_NORMALIZATION: tuple[tuple[str, re.Pattern], ...] = (
    ("credit_card", re.compile(r"credit\s*card|revolving", re.I)),
    ("mortgage", re.compile(r"mortgage|home\s*loan", re.I)),
    ("auto_loan", re.compile(r"auto|car|vehicle", re.I)),
    ("personal_loan", re.compile(r"personal\s*loan", re.I)),
    ("student_loan", re.compile(r"student\s*loan", re.I)),
)


def parse_csv_line(line: str) -> List[str]:
    """Split one CSV line, honouring quoted fields and "" escapes"""
    row = next(csv.reader([line], skipinitialspace=True), [])
    return [cell.strip() for cell in row]


THOUSANDS_HEAD = re.compile(r"^-?\$?\d{1,3}(,\d{3})*$")
THOUSANDS_TAIL = re.compile(r"^\d{3}(\.\d{1,2})?$")


def rejoin_split_amounts(values: List[str], expected: int) -> List[str]:
    """
    Re-merge unquoted amounts like ``$1,200`` that the comma split apart.

    Only applies while the row has more cells than the header, so quoted
    or well-formed rows pass through untouched.
    """
    merged = list(values)
    i = 1
    while len(merged) > expected and i < len(merged):
        if THOUSANDS_TAIL.match(merged[i]) and THOUSANDS_HEAD.match(merged[i - 1]):
            merged[i - 1] = f"{merged[i - 1]},{merged[i]}"
            del merged[i]
        else:
            i += 1
    return merged


def create_column_map(headers: List[str]) -> Dict[str, int]:
    """Map standard field names to column indexes; unmapped fields are absent"""
    column_map: Dict[str, int] = {}
    for index, header in enumerate(headers):
        for field_name, pattern in COLUMN_PATTERNS:
            if pattern.search(header):
                column_map[field_name] = index
                break
    return column_map


def normalize_account_type(value: str) -> str:
    for account_type, pattern in ACCOUNT_TYPE_NORMALIZATION:
        if pattern.search(value):
            return account_type
    return value


def _get_value(values: List[str], column_map: Dict[str, int], field_name: str) -> Optional[str]:
    index = column_map.get(field_name)
    if index is None or index >= len(values):
        return None
    value = values[index].strip()
    return value or None


def parse_accounts_csv(csv_content: str) -> List[CSVAccountData]:
    """
    Parse CSV account exports with flexible, case-insensitive headers.

    Raises:
        InvalidCSVError: If there is no header row plus at least one data row
    """
    lines = [line.strip() for line in (csv_content or "").split("\n")]
    lines = [line for line in lines if line]

    if len(lines) < 2:
        raise InvalidCSVError("CSV must contain at least a header row and one data row")

    headers = [header.lower().strip() for header in parse_csv_line(lines[0])]
    column_map = create_column_map(headers)

    accounts: List[CSVAccountData] = []
    for line in lines[1:]:
        values = rejoin_split_amounts(parse_csv_line(line), len(headers))
        if not any(values):
            continue

        def get(field_name: str) -> Optional[str]:
            return _get_value(values, column_map, field_name)

        account_type = get("account_type")
        balance = get("balance")
        credit_limit = get("credit_limit")
        date_opened = get("date_opened")
        monthly_payment = get("monthly_payment")
        interest_rate = get("interest_rate")

        accounts.append(
            CSVAccountData(
                account_name=get("account_name") or UNKNOWN_ACCOUNT_NAME,
                account_number=get("account_number"),
                account_type=normalize_account_type(account_type) if account_type else None,
                balance=clean_currency(balance) if balance else None,
                credit_limit=clean_currency(credit_limit) if credit_limit else None,
                payment_status=get("payment_status"),
                date_opened=normalize_date(date_opened) if date_opened else None,
                monthly_payment=clean_currency(monthly_payment) if monthly_payment else None,
                interest_rate=clean_percentage(interest_rate) if interest_rate else None,
            )
        )

    logger.debug("Parsed CSV export", extra={"rows": len(accounts), "columns": len(headers)})
    return accounts
