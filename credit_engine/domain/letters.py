"""
Dispute letter generator.

Each letter type maps to one template function in ``LETTER_TEMPLATES``;
the mapping is fixed at import time and ``generate_dispute_letter`` looks
the type up there.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Optional

from credit_engine.domain.exceptions import UnknownLetterTypeError
from credit_engine.domain.models import Bureau, DisputeItem, NegativeItem, UserInfo


class LetterType(str, Enum):
    INACCURACY = "inaccuracy"
    VALIDATION = "validation"
    GOODWILL = "goodwill"
    IDENTITY_THEFT = "identity_theft"
    MIXED_FILE = "mixed_file"
    LATE_PAYMENT_REMOVAL = "late_payment_removal"
    COLLECTION_VALIDATION = "collection_validation"
    INQUIRY_REMOVAL = "inquiry_removal"
    OUTDATED_INFORMATION = "outdated_information"


@dataclass
class BureauAddress:
    name: str
    address: str
    city_state_zip: str


BUREAU_ADDRESSES: Dict[str, BureauAddress] = {
    "equifax": BureauAddress("Equifax Information Services LLC", "P.O. Box 740256", "Atlanta, GA 30374"),
    "experian": BureauAddress("Experian", "P.O. Box 4500", "Allen, TX 75013"),
    "transunion": BureauAddress(
        "TransUnion LLC", "Consumer Dispute Center", "P.O. Box 2000, Chester, PA 19016"
    ),
}


@dataclass
class DisputeLetterParams:
    user_info: UserInfo
    bureau: Bureau
    letter_type: LetterType
    items: List[DisputeItem] = field(default_factory=list)
    letter_date: Optional[date] = None

    @property
    def today(self) -> str:
        d = self.letter_date or date.today()
        return f"{d:%B} {d.day}, {d.year}"


# ───────────── Shared pieces ─────────────
def _sender_block(user: UserInfo) -> str:
    return f"{user.name}\n{user.address}\n{user.city}, {user.state} {user.zip}"


def _identity_lines(user: UserInfo) -> str:
    lines = []
    if user.ssn:
        lines.append(f"SSN: XXX-XX-{user.ssn[-4:]}")
    if user.date_of_birth:
        lines.append(f"Date of Birth: {user.date_of_birth}")
    return "\n".join(lines)


def _bureau_header(params: DisputeLetterParams, subject: str) -> str:
    bureau = BUREAU_ADDRESSES[params.bureau]
    parts = [
        _sender_block(params.user_info),
        params.today,
        f"{bureau.name}\n{bureau.address}\n{bureau.city_state_zip}",
        f"RE: {subject}\n{_identity_lines(params.user_info)}".rstrip(),
        "Dear Sir or Madam:",
    ]
    return "\n\n".join(parts)


def _item_list(items: List[DisputeItem], reason_label: str, show_creditor: bool = True) -> str:
    blocks = []
    for index, item in enumerate(items, start=1):
        lines = [f"{index}. {item.description}"]
        if item.account_number:
            lines.append(f"   Account Number: {item.account_number}")
        if show_creditor and item.creditor_name:
            lines.append(f"   Creditor: {item.creditor_name}")
        lines.append(f"   {reason_label}: {item.reason}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def _closing(user: UserInfo, enclosures: str = "") -> str:
    closing = f"Sincerely,\n\n{user.name}"
    if enclosures:
        closing += f"\n\n{enclosures}"
    return closing


def _letter(*sections: str) -> str:
    return "\n\n".join(section for section in sections if section)


# ───────────── Templates ─────────────
def inaccuracy_letter(params: DisputeLetterParams) -> str:
    return _letter(
        _bureau_header(params, "Formal Dispute of Inaccurate Information"),
        "I am writing to dispute inaccurate information appearing on my credit report. Under the "
        "Fair Credit Reporting Act (FCRA), I have the right to request that you investigate and "
        "correct any inaccurate or incomplete information.",
        "After carefully reviewing my credit report, I have identified the following items that "
        "contain inaccurate information:",
        _item_list(params.items, "Reason for Dispute"),
        "These items are inaccurate and do not reflect my actual credit history. I am requesting "
        "that you conduct a thorough investigation of these items and remove or correct them as "
        "required by law.",
        "Under the FCRA § 611(a)(1)(A), you are required to conduct a reasonable investigation of "
        "my dispute within 30 days of receipt of this letter. If you cannot verify the accuracy of "
        "these items, they must be deleted from my credit report immediately.",
        "Please provide me with written confirmation of the results of your investigation and a "
        "copy of my updated credit report once the investigation is complete.",
        _closing(params.user_info, "Enclosures: Supporting Documentation"),
    )


def validation_letter(params: DisputeLetterParams) -> str:
    return _letter(
        _bureau_header(params, "Request for Verification of Information"),
        "I am writing to request verification of the following items appearing on my credit "
        "report. Under the Fair Credit Reporting Act (FCRA) § 611, I have the right to request "
        "that you verify the accuracy and completeness of all information reported about me.",
        _item_list(params.items, "Reason for Verification Request"),
        "For each item listed above, please provide:\n\n"
        "1. The name and complete mailing address of the original creditor\n"
        "2. Copies of all documents used to verify this information\n"
        "3. The method of verification used\n"
        "4. The date this information was verified\n"
        "5. Proof that I was properly notified of this information being reported",
        "If you cannot provide complete verification of these items with proper documentation, I "
        "request that they be immediately removed from my credit report as required by "
        "FCRA § 611(a)(5)(A).",
        _closing(params.user_info),
    )


def goodwill_letter(params: DisputeLetterParams) -> str:
    # Goodwill requests go to the creditor rather than the bureau
    first = params.items[0] if params.items else None
    creditor = (first.creditor_name if first else None) or "[Creditor Name]"
    account_line = f"Account Number: {first.account_number}" if first and first.account_number else ""
    circumstances = (first.reason if first else "") or (
        "I experienced unexpected financial difficulties that temporarily affected my ability "
        "to make timely payments."
    )
    return _letter(
        _sender_block(params.user_info),
        params.today,
        f"{creditor}\nCustomer Service Department\n[Creditor Address]",
        f"RE: Goodwill Adjustment Request\n{account_line}".rstrip(),
        f"Dear {creditor} Customer Service:",
        f"I have been a customer of {creditor} and have greatly valued our relationship. I am "
        "writing to request your consideration in removing the following negative item(s) from "
        "my credit report:",
        _item_list(params.items, "Circumstances", show_creditor=False),
        f"I want to explain the circumstances that led to this situation. {circumstances}",
        "Since that time, I have maintained a positive payment history and am committed to "
        "responsible credit management going forward. I understand that you are not obligated "
        "to make this adjustment, but I hope you will consider my request.",
        _closing(params.user_info),
    )


def identity_theft_letter(params: DisputeLetterParams) -> str:
    return _letter(
        _bureau_header(params, "Identity Theft Report and Dispute"),
        "I am writing to report identity theft and to dispute fraudulent information appearing on "
        "my credit report. The following accounts/items were opened or reported without my "
        "knowledge or authorization:",
        _item_list(params.items, "Reason"),
        "Under the Fair Credit Reporting Act (FCRA) § 605B, you are required to block information "
        "that appears on my credit report as a result of identity theft within 4 business days of "
        "receiving my request.",
        "Please block these fraudulent items, notify the furnishers that the information is the "
        "result of identity theft, and provide written confirmation once the block is in place.",
        _closing(
            params.user_info,
            "Enclosures:\n- Identity Theft Report (FTC)\n- Police Report\n- Proof of Identity\n"
            "- Identity Theft Affidavit",
        ),
    )


def mixed_file_letter(params: DisputeLetterParams) -> str:
    return _letter(
        _bureau_header(params, "Mixed File Dispute"),
        "I am writing to dispute information on my credit report that does not belong to me. It "
        "appears that my credit file has been mixed with another consumer's information.",
        _item_list(params.items, "Reason"),
        "Under the Fair Credit Reporting Act (FCRA) § 611, you are required to conduct a "
        "reasonable investigation and correct any inaccurate information. Since these items do "
        "not belong to me, they must be removed from my credit file.",
        "Please provide written confirmation that these items have been removed, a copy of my "
        "corrected credit report, and notification to any party who received my report in the "
        "past 6 months.",
        _closing(params.user_info, "Enclosures: Proof of Identity and Supporting Documentation"),
    )


def late_payment_removal_letter(params: DisputeLetterParams) -> str:
    creditor = (params.items[0].creditor_name if params.items else None) or "your company"
    return _letter(
        _bureau_header(params, "Request for Removal of Late Payment(s)"),
        "I am writing to request the removal of late payment notation(s) on my credit report. "
        "This late payment was an isolated incident that does not reflect my overall payment "
        "history.",
        _item_list(params.items, "Details"),
        "I have since brought this account current and have maintained a perfect payment record. "
        f"I value my relationship with {creditor} and kindly request that this notation be "
        "removed as a gesture of goodwill.",
        _closing(params.user_info),
    )


def collection_validation_letter(params: DisputeLetterParams) -> str:
    return _letter(
        _bureau_header(params, "Request for Validation of Debt"),
        "This letter is a formal request for validation of the following collection account(s) "
        "appearing on my credit report:",
        _item_list(params.items, "Reason"),
        "Under the Fair Debt Collection Practices Act (FDCPA) § 809(b) and the Fair Credit "
        "Reporting Act (FCRA) § 611, I have the right to request validation of this debt. Please "
        "provide proof of ownership or authority to collect, a copy of the original signed "
        "agreement, and the complete payment history from the original creditor.",
        "Until this debt is validated, it must not be reported as verified.",
        _closing(params.user_info),
    )


def inquiry_removal_letter(params: DisputeLetterParams) -> str:
    inquiries = "\n\n".join(
        f"{index}. {item.creditor_name or 'Unknown Company'}\n"
        f"   Date: {item.description}\n"
        f"   Reason: I did not authorize this inquiry"
        for index, item in enumerate(params.items, start=1)
    )
    return _letter(
        _bureau_header(params, "Unauthorized Hard Inquiry Removal Request"),
        "I am writing to dispute unauthorized hard inquiries appearing on my credit report:",
        inquiries,
        "I did not authorize these credit inquiries, nor did I apply for credit with these "
        "companies. Under the Fair Credit Reporting Act (FCRA) § 604, a credit bureau may furnish "
        "a consumer report only for a permissible purpose.",
        "Please remove these inquiries and provide written confirmation once they have been "
        "deleted. I expect a response within 30 days as required by federal law.",
        _closing(params.user_info),
    )


def outdated_information_letter(params: DisputeLetterParams) -> str:
    outdated = "\n\n".join(
        f"{index}. {item.description}\n"
        f"   Account Number: {item.account_number or 'N/A'}\n"
        f"   Date of First Delinquency: {item.reason or 'More than 7 years ago'}"
        for index, item in enumerate(params.items, start=1)
    )
    return _letter(
        _bureau_header(params, "Removal of Outdated Information"),
        "I am writing to request the removal of outdated information from my credit report that "
        "has exceeded the legal reporting period:",
        outdated,
        "Under the Fair Credit Reporting Act (FCRA) § 605(a)(4), most negative information must "
        "be removed 7 years after the date of first delinquency. The items listed above have "
        "exceeded this time limit and must be deleted.",
        _closing(params.user_info),
    )


LETTER_TEMPLATES: Dict[LetterType, Callable[[DisputeLetterParams], str]] = {
    LetterType.INACCURACY: inaccuracy_letter,
    LetterType.VALIDATION: validation_letter,
    LetterType.GOODWILL: goodwill_letter,
    LetterType.IDENTITY_THEFT: identity_theft_letter,
    LetterType.MIXED_FILE: mixed_file_letter,
    LetterType.LATE_PAYMENT_REMOVAL: late_payment_removal_letter,
    LetterType.COLLECTION_VALIDATION: collection_validation_letter,
    LetterType.INQUIRY_REMOVAL: inquiry_removal_letter,
    LetterType.OUTDATED_INFORMATION: outdated_information_letter,
}


def generate_dispute_letter(params: DisputeLetterParams) -> str:
    """
    Render a dispute letter.

    Raises:
        UnknownLetterTypeError: If the letter type has no template
    """
    try:
        letter_type = LetterType(params.letter_type)
    except ValueError as e:
        raise UnknownLetterTypeError(f"Unknown letter type: {params.letter_type}") from e
    return LETTER_TEMPLATES[letter_type](params)


def generate_dispute_letter_from_report(
    user_info: UserInfo,
    bureau: Bureau,
    negative_items: List[NegativeItem],
    letter_type: LetterType = LetterType.INACCURACY,
    letter_date: Optional[date] = None,
) -> str:
    """Build dispute items from flagged report lines and render the letter"""
    items = []
    for item in negative_items:
        if not item.is_negative:
            continue
        description = item.account_name
        if item.account_number:
            description += f" (Account ending in {item.account_number[-4:]})"
        items.append(
            DisputeItem(
                type="account",
                description=description,
                account_number=item.account_number,
                creditor_name=item.account_name,
                reason=(
                    f'The payment status reported as "{item.payment_status}" is inaccurate and '
                    "does not reflect my actual payment history."
                ),
            )
        )

    return generate_dispute_letter(
        DisputeLetterParams(
            user_info=user_info,
            bureau=bureau,
            letter_type=letter_type,
            items=items,
            letter_date=letter_date,
        )
    )
