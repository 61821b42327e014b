"""Unit tests for CSV account export parsing"""

import pytest

from credit_engine.domain.exceptions import InvalidCSVError
from credit_engine.parsing.csv_parser import (
    create_column_map,
    normalize_account_type,
    parse_accounts_csv,
    parse_csv_line,
    rejoin_split_amounts,
)

CREDIT_KARMA_EXPORT = """Creditor,Account Number,Account Type,Balance,Credit Limit,Payment Status,Date Opened,Monthly Payment,APR
"Chase Bank, N.A.",XXXX1234,Revolving,"$1,250.00","$5,000",Current,2018-03-15,$35,24.99%
Ally Financial,XXXX9876,Auto Loan,$14500,,30 Days Late,06-01-2020,$412,5.9%
"""


def test_parses_well_formed_export():
    accounts = parse_accounts_csv(CREDIT_KARMA_EXPORT)

    assert len(accounts) == 2
    chase, ally = accounts

    assert chase.account_name == "Chase Bank, N.A."
    assert chase.account_number == "XXXX1234"
    assert chase.account_type == "credit_card"
    assert chase.balance == "1250.00"
    assert chase.credit_limit == "5000"
    assert chase.payment_status == "Current"
    assert chase.date_opened == "03/15/2018"
    assert chase.monthly_payment == "35"
    assert chase.interest_rate == "24.99"

    assert ally.account_type == "auto_loan"
    assert ally.credit_limit is None
    assert ally.date_opened == "06/01/2020"


def test_unquoted_thousands_are_rejoined():
    accounts = parse_accounts_csv("Account Name,Balance,Credit Limit\nVisa,$1,200,$5,000")

    assert accounts[0].account_name == "Visa"
    assert accounts[0].balance == "1200"
    assert accounts[0].credit_limit == "5000"


def test_missing_name_uses_placeholder_and_blank_rows_are_skipped():
    accounts = parse_accounts_csv("Account Name,Balance\n,$300\n\n , \nDiscover,$10\n")

    assert [a.account_name for a in accounts] == ["Unknown Account", "Discover"]


def test_headers_are_case_insensitive_and_unmapped_columns_ignored():
    accounts = parse_accounts_csv("LENDER,Notes,CURRENT BALANCE\nCiti,hello,$99")

    assert accounts[0].account_name == "Citi"
    assert accounts[0].balance == "99"
    assert accounts[0].account_type is None


@pytest.mark.parametrize("content", ["", "Account Name,Balance", "Account Name,Balance\n\n   \n"])
def test_requires_header_and_data_row(content):
    with pytest.raises(InvalidCSVError):
        parse_accounts_csv(content)


def test_parse_csv_line_handles_quotes():
    assert parse_csv_line('a,"b, c","say ""hi""", d ') == ["a", "b, c", 'say "hi"', "d"]
    assert parse_csv_line("a,,b") == ["a", "", "b"]


def test_rejoin_leaves_matching_rows_alone():
    values = ["Visa", "1", "200"]

    assert rejoin_split_amounts(values, 3) == values


def test_create_column_map_first_pattern_wins():
    column_map = create_column_map(["account name", "account type", "payment status", "monthly payment"])

    assert column_map == {
        "account_name": 0,
        "account_type": 1,
        "payment_status": 2,
        "monthly_payment": 3,
    }


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Credit Card", "credit_card"),
        ("REVOLVING", "credit_card"),
        ("Home Loan", "mortgage"),
        ("Car Loan", "auto_loan"),
        ("Personal Loan", "personal_loan"),
        ("Student Loan", "student_loan"),
        ("Collection", "Collection"),
    ],
)
def test_normalize_account_type(value, expected):
    assert normalize_account_type(value) == expected


def test_unquoted_thousands_with_two_columns():
    accounts = parse_accounts_csv("Account Name,Balance\nVisa,$1,200")

    assert accounts[0].account_name == "Visa"
    assert accounts[0].balance == "1200"


def test_parse_csv_line_space_before_quoted_field():
    assert parse_csv_line('Visa, "$1,200", Current') == ["Visa", "$1,200", "Current"]
