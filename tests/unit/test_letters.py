"""Unit tests for dispute letter generation"""

from datetime import date

import pytest

from credit_engine.domain.exceptions import UnknownLetterTypeError
from credit_engine.domain.letters import (
    LETTER_TEMPLATES,
    DisputeLetterParams,
    LetterType,
    generate_dispute_letter,
    generate_dispute_letter_from_report,
)
from credit_engine.domain.models import DisputeItem, NegativeItem, UserInfo

LETTER_DATE = date(2024, 3, 5)


@pytest.fixture
def user() -> UserInfo:
    return UserInfo(
        name="Jane Doe",
        address="123 Main St",
        city="Springfield",
        state="IL",
        zip="62701",
        ssn="123-45-6789",
        date_of_birth="01/02/1985",
    )


@pytest.fixture
def items():
    return [
        DisputeItem(
            description="Capital One Platinum",
            reason="Account was never 30 days late",
            account_number="XXXX4321",
            creditor_name="Capital One",
        ),
        DisputeItem(description="Midland Credit collection", reason="Not my account"),
    ]


def _params(user, items, letter_type, bureau="equifax") -> DisputeLetterParams:
    return DisputeLetterParams(
        user_info=user,
        bureau=bureau,
        letter_type=letter_type,
        items=items,
        letter_date=LETTER_DATE,
    )


def test_every_letter_type_has_a_template():
    assert set(LETTER_TEMPLATES) == set(LetterType)


@pytest.mark.parametrize("letter_type", list(LetterType))
def test_every_template_renders(user, items, letter_type):
    letter = generate_dispute_letter(_params(user, items, letter_type))

    assert letter.startswith("Jane Doe\n123 Main St\nSpringfield, IL 62701")
    assert "March 5, 2024" in letter
    assert letter.rstrip().count("Jane Doe") >= 2


def test_inaccuracy_letter_layout(user, items):
    letter = generate_dispute_letter(_params(user, items, LetterType.INACCURACY))

    assert "Equifax Information Services LLC\nP.O. Box 740256\nAtlanta, GA 30374" in letter
    assert "RE: Formal Dispute of Inaccurate Information" in letter
    assert "SSN: XXX-XX-6789" in letter
    assert "123-45-6789" not in letter
    assert "Date of Birth: 01/02/1985" in letter
    assert "Dear Sir or Madam:" in letter
    assert "1. Capital One Platinum\n   Account Number: XXXX4321\n   Creditor: Capital One" in letter
    assert "   Reason for Dispute: Account was never 30 days late" in letter
    assert "2. Midland Credit collection\n   Reason for Dispute: Not my account" in letter
    assert letter.endswith("Enclosures: Supporting Documentation")


def test_bureau_addresses(user, items):
    experian = generate_dispute_letter(_params(user, items, LetterType.VALIDATION, bureau="experian"))
    transunion = generate_dispute_letter(_params(user, items, LetterType.VALIDATION, bureau="transunion"))

    assert "Experian\nP.O. Box 4500\nAllen, TX 75013" in experian
    assert "TransUnion LLC\nConsumer Dispute Center\nP.O. Box 2000, Chester, PA 19016" in transunion


def test_identity_lines_are_optional(items):
    bare = UserInfo(name="Sam Lee", address="9 Elm Rd", city="Austin", state="TX", zip="73301")

    letter = generate_dispute_letter(_params(bare, items, LetterType.MIXED_FILE))

    assert "SSN" not in letter
    assert "Date of Birth" not in letter
    assert "RE: Mixed File Dispute\n\nDear Sir or Madam:" in letter


def test_goodwill_letter_addresses_creditor(user, items):
    letter = generate_dispute_letter(_params(user, items, LetterType.GOODWILL))

    assert "Dear Capital One Customer Service:" in letter
    assert "Account Number: XXXX4321" in letter
    assert "Dear Sir or Madam:" not in letter
    assert "Account was never 30 days late" in letter


def test_goodwill_letter_without_items(user):
    letter = generate_dispute_letter(_params(user, [], LetterType.GOODWILL))

    assert "Dear [Creditor Name] Customer Service:" in letter


def test_string_letter_type_is_accepted(user, items):
    letter = generate_dispute_letter(_params(user, items, "identity_theft"))

    assert "RE: Identity Theft Report and Dispute" in letter


def test_unknown_letter_type_is_rejected(user, items):
    with pytest.raises(UnknownLetterTypeError):
        generate_dispute_letter(_params(user, items, "cease_and_desist"))


def test_letter_from_report_uses_negative_items_only(user):
    negative_items = [
        NegativeItem(
            account_name="Synchrony Bank",
            is_negative=True,
            account_number="6011000012345678",
            payment_status="120 Days Late",
        ),
        NegativeItem(account_name="Amex", is_negative=False, payment_status="Current"),
    ]

    letter = generate_dispute_letter_from_report(
        user, "transunion", negative_items, letter_date=LETTER_DATE
    )

    assert "1. Synchrony Bank (Account ending in 5678)" in letter
    assert 'The payment status reported as "120 Days Late" is inaccurate' in letter
    assert "Amex" not in letter
    assert "RE: Formal Dispute of Inaccurate Information" in letter
