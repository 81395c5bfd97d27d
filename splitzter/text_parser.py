"""
Text Parser Module

This module turns informally written lines such as "I paid 200 for dinner"
into expense drafts.

Supported formats (one per line, case-insensitive, first match wins):
    1. i owe <name> <amount> [currency]
    2. <name> owes me <amount> [currency]
    3. i paid <amount> [currency] for <description>
    4. <name> paid <amount> [currency] for <description>
    5. <amount> [currency] <description>

Currency tokens rs, rupees, dollar(s) and $ are optional and ignored.

"I" and "me" become CURRENT_USER_ID in the drafts. The caller swaps in the
real person id with resolve_current_user() before saving anything.

Functions:
    parse_expense_text: Parse raw text into drafts and per-line errors.
    resolve_current_user: Replace CURRENT_USER_ID in a list of drafts.
    example_text: Help text showing the supported formats.
"""

import logging
import re
from decimal import Decimal
from typing import Optional

from splitzter.expenses import ExpenseRecord, ExpenseValidationError
from splitzter.money import to_decimal
from splitzter.participants import Person, build_name_index, roster_ids


logger = logging.getLogger(__name__)

# Reserved person id standing for whoever typed the text
CURRENT_USER_ID = "current_user"

_AMOUNT = r"(\d+(?:\.\d+)?)"
_CURRENCY = r"(?:rs|rupees|dollars?|\$)?"
_NAME = r"([a-z\s]+?)"

_I_OWE = re.compile(rf"^i\s+owe\s+{_NAME}\s+{_AMOUNT}\s*{_CURRENCY}$", re.IGNORECASE)
_OWES_ME = re.compile(rf"^{_NAME}\s+owes?\s+me\s+{_AMOUNT}\s*{_CURRENCY}$", re.IGNORECASE)
_I_PAID = re.compile(rf"^i\s+paid\s+{_AMOUNT}\s*{_CURRENCY}\s+for\s+(.+)$", re.IGNORECASE)
_NAME_PAID = re.compile(rf"^{_NAME}\s+paid\s+{_AMOUNT}\s*{_CURRENCY}\s+for\s+(.+)$", re.IGNORECASE)
_AMOUNT_FIRST = re.compile(rf"^{_AMOUNT}\s*{_CURRENCY}\s+(.+)$", re.IGNORECASE)


class LineError(Exception):
    """A line matched a format but could not be turned into a draft."""


class ParsedExpenseDraft:
    """
    An expense parsed from text that has no id, journey or date yet.

    Attributes:
        title (str): Short title.
        amount (Decimal): Parsed amount.
        paid_by (str): Payer id, possibly CURRENT_USER_ID.
        split_between (list[str]): Split ids, possibly with CURRENT_USER_ID.
        category (str | None): Optional category.
        description (str | None): Longer description.
    """

    def __init__(
        self,
        title: str,
        amount: Decimal,
        paid_by: str,
        split_between: list[str],
        category: Optional[str] = None,
        description: Optional[str] = None
    ):
        self.title = title
        self.amount = amount
        self.paid_by = paid_by
        self.split_between = list(split_between)
        self.category = category
        self.description = description

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "amount": self.amount,
            "paid_by": self.paid_by,
            "split_between": list(self.split_between),
            "category": self.category,
            "description": self.description
        }

    def to_expense(self, expense_id: str, journey_id: str, date: str) -> ExpenseRecord:
        """
        Build the expense record to hand to storage.

        Raises:
            ExpenseValidationError: If CURRENT_USER_ID has not been resolved.
        """
        if self.paid_by == CURRENT_USER_ID or CURRENT_USER_ID in self.split_between:
            raise ExpenseValidationError(
                expense_id, "current user placeholder must be resolved before saving"
            )

        return ExpenseRecord(
            id=expense_id,
            journey_id=journey_id,
            title=self.title,
            amount=self.amount,
            paid_by=self.paid_by,
            split_between=self.split_between,
            date=date,
            category=self.category,
            description=self.description
        )

    def __repr__(self) -> str:
        return (
            f"ParsedExpenseDraft(title='{self.title}', amount={self.amount}, "
            f"paid_by='{self.paid_by}', split={self.split_between})"
        )


def _find_person(name: str, name_index: dict[str, Person]) -> Person:
    key = name.strip().lower()
    person = name_index.get(key)
    if person is None:
        raise LineError(f'Person "{key}" not found in participants')
    return person


def _parse_amount(raw: str) -> Decimal:
    amount = to_decimal(raw)
    if amount <= 0:
        raise LineError(f"Amount must be greater than zero, got {raw}")
    return amount


def _parse_line(
    line: str,
    name_index: dict[str, Person],
    everyone: list[str]
) -> Optional[ParsedExpenseDraft]:
    """Try each format in order. Returns None when nothing matches."""
    match = _I_OWE.match(line)
    if match:
        person = _find_person(match.group(1), name_index)
        return ParsedExpenseDraft(
            title=f"Owed to {person.name}",
            amount=_parse_amount(match.group(2)),
            paid_by=person.id,
            split_between=[CURRENT_USER_ID],
            description=f"Amount owed to {person.name}"
        )

    match = _OWES_ME.match(line)
    if match:
        person = _find_person(match.group(1), name_index)
        return ParsedExpenseDraft(
            title=f"Owed by {person.name}",
            amount=_parse_amount(match.group(2)),
            paid_by=CURRENT_USER_ID,
            split_between=[person.id],
            description=f"Amount owed by {person.name}"
        )

    match = _I_PAID.match(line)
    if match:
        description = match.group(2).strip()
        return ParsedExpenseDraft(
            title=description,
            amount=_parse_amount(match.group(1)),
            paid_by=CURRENT_USER_ID,
            split_between=everyone,
            description=f"Paid for {description}"
        )

    match = _NAME_PAID.match(line)
    if match:
        person = _find_person(match.group(1), name_index)
        description = match.group(3).strip()
        return ParsedExpenseDraft(
            title=description,
            amount=_parse_amount(match.group(2)),
            paid_by=person.id,
            split_between=everyone,
            description=f"{person.name} paid for {description}"
        )

    match = _AMOUNT_FIRST.match(line)
    if match:
        description = match.group(2).strip()
        return ParsedExpenseDraft(
            title=description,
            amount=_parse_amount(match.group(1)),
            paid_by=CURRENT_USER_ID,
            split_between=everyone,
            description=description
        )

    return None


def parse_expense_text(raw_text: str, roster: list[Person]) -> dict:
    """
    Parse free text into expense drafts.

    Each non-blank line is trimmed and parsed on its own. Lines are
    numbered from 1, counting only non-blank lines.

    Args:
        raw_text: Multi-line text typed by the user.
        roster: Journey roster; names are matched case-insensitively.

    Returns:
        dict: Containing:
            - drafts: list[ParsedExpenseDraft] in line order
            - errors: list[str] in line order, e.g.
              'Line 2: Could not parse "hello"'

    Notes:
        - A bad line never stops the remaining lines from parsing
        - "Everyone" splits cover every roster id plus CURRENT_USER_ID
    """
    lines = [line.strip() for line in (raw_text or "").split("\n") if line.strip()]
    name_index = build_name_index(roster)
    everyone = roster_ids(roster) + [CURRENT_USER_ID]

    drafts = []
    errors = []

    for number, line in enumerate(lines, start=1):
        try:
            draft = _parse_line(line, name_index, everyone)
        except (LineError, ValueError) as e:
            errors.append(f"Line {number}: {e}")
            continue

        if draft is None:
            errors.append(f'Line {number}: Could not parse "{line}"')
        else:
            drafts.append(draft)

    logger.debug("parsed %d lines: %d drafts, %d errors", len(lines), len(drafts), len(errors))
    return {"drafts": drafts, "errors": errors}


def resolve_current_user(drafts: list[ParsedExpenseDraft], person_id: str) -> list[ParsedExpenseDraft]:
    """
    Replace CURRENT_USER_ID with a real person id.

    Returns new drafts; the input list is left untouched. If the person
    already appears in a split, the duplicate is collapsed.

    Raises:
        ValueError: If person_id is empty.
    """
    if not isinstance(person_id, str) or not person_id.strip():
        raise ValueError("person_id must be a non-empty string")

    def swap(value: str) -> str:
        return person_id if value == CURRENT_USER_ID else value

    return [
        ParsedExpenseDraft(
            title=draft.title,
            amount=draft.amount,
            paid_by=swap(draft.paid_by),
            split_between=list(dict.fromkeys(swap(pid) for pid in draft.split_between)),
            category=draft.category,
            description=draft.description
        )
        for draft in drafts
    ]


def example_text(roster: list[Person]) -> str:
    """Help text listing the supported formats, using roster names."""
    names = [p.name.lower() for p in roster[:2]]
    name1 = names[0] if len(names) > 0 else "amit"
    name2 = names[1] if len(names) > 1 else "priya"

    return (
        "Examples of supported formats:\n"
        "\n"
        f"I owe {name1} 100 rs\n"
        f"{name2} owes me 50 rs\n"
        "I paid 200 for dinner\n"
        f"{name1} paid 150 for groceries\n"
        "300 taxi ride\n"
        "250 movie tickets\n"
        "\n"
        "Supported currencies: rs, rupees, dollars, $\n"
        "You can also omit currency symbols."
    )
