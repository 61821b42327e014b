"""Regex helpers for pulling amounts and dates out of free text"""

import re
from datetime import date
from typing import Optional

AMOUNT_PATTERN = re.compile(r"\$?(\d[\d,]*)")
FIRST_INTEGER_PATTERN = re.compile(r"(\d+)")

SLASH_DATE_PATTERN = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
DASH_DATE_PATTERN = re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})")
MONTH_YEAR_PATTERN = re.compile(
    r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s+(\d{4})",
    re.IGNORECASE,
)

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}


def extract_amount(text: str) -> Optional[int]:
    """Return the first ``$1,234``-style number in ``text`` as an int"""
    match = AMOUNT_PATTERN.search(text)
    if not match:
        return None
    return int(match.group(1).replace(",", ""))


def extract_first_integer(text: str) -> Optional[int]:
    match = FIRST_INTEGER_PATTERN.search(text)
    return int(match.group(1)) if match else None


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def extract_date(text: str) -> Optional[date]:
    """
    Find a date in free text.

    Formats are tried in order: MM/DD/YYYY, MM-DD-YYYY, then "Mon YYYY"
    (first of the month). Impossible calendar dates such as 13/45/2020 are
    treated as no match for that format.
    """
    for pattern in (SLASH_DATE_PATTERN, DASH_DATE_PATTERN):
        match = pattern.search(text)
        if match:
            parsed = _build_date(int(match.group(3)), int(match.group(1)), int(match.group(2)))
            if parsed is not None:
                return parsed

    match = MONTH_YEAR_PATTERN.search(text)
    if match:
        month = MONTHS[match.group(1).lower()[:3]]
        return date(int(match.group(2)), month, 1)

    return None


def clean_currency(value: str) -> str:
    """Strip dollar signs and thousands separators"""
    return re.sub(r"[$,]", "", value).strip()


def clean_percentage(value: str) -> str:
    return value.replace("%", "").strip()


def normalize_date(value: str) -> str:
    """
    Normalize CSV date cells to MM/DD/YYYY.

    Accepts MM/DD/YYYY (unchanged), YYYY-MM-DD and MM-DD-YYYY; anything
    else is returned trimmed but otherwise as-is.
    """
    cleaned = value.strip()

    if re.fullmatch(r"\d{1,2}/\d{1,2}/\d{4}", cleaned):
        return cleaned

    if re.fullmatch(r"\d{4}-\d{1,2}-\d{1,2}", cleaned):
        year, month, day = cleaned.split("-")
        return f"{month}/{day}/{year}"

    if re.fullmatch(r"\d{1,2}-\d{1,2}-\d{4}", cleaned):
        return cleaned.replace("-", "/")

    return cleaned
