"""
Expenses Module

This module defines the expense record consumed by the ledger and the
validation applied before any expense enters a balance calculation.

Data Model:
    ExpenseRecord:
        - id: string
        - journey_id: string (the group the expense belongs to)
        - title: string
        - amount: positive number (int, float, str or Decimal)
        - paid_by: person id of who paid
        - split_between: non-empty list of person ids (equal shares)
        - date: ISO date string
        - category: string or None
        - description: string or None

Functions:
    validate_expense: Check an expense and return its Decimal amount and
        de-duplicated split members.
"""

from decimal import Decimal
from typing import Optional

from splitzter.money import to_decimal


class ExpenseValidationError(ValueError):
    """Raised when an expense cannot take part in a balance calculation."""

    def __init__(self, expense_id, message: str):
        self.expense_id = expense_id
        super().__init__(f"expense '{expense_id}': {message}")


class ExpenseRecord:
    """
    Represents a single shared expense in a journey.

    Attributes:
        id (str): Unique identifier of the expense.
        journey_id (str): Identifier of the owning journey.
        title (str): Short title.
        amount: Amount paid (must be > 0).
        paid_by (str): Person id of the payer.
        split_between (list[str]): Person ids sharing the cost equally.
        date (str): ISO date of the expense.
        category (str | None): Optional category.
        description (str | None): Optional free-form description.
    """

    def __init__(
        self,
        id: str,
        journey_id: str,
        title: str,
        amount,
        paid_by: str,
        split_between: list[str],
        date: str,
        category: Optional[str] = None,
        description: Optional[str] = None
    ):
        self.id = id
        self.journey_id = journey_id
        self.title = title
        self.amount = amount
        self.paid_by = paid_by
        self.split_between = list(split_between or [])
        self.date = date
        self.category = category
        self.description = description

    def to_dict(self) -> dict:
        """Convert expense to a plain dictionary."""
        return {
            "id": self.id,
            "journey_id": self.journey_id,
            "title": self.title,
            "amount": self.amount,
            "paid_by": self.paid_by,
            "split_between": list(self.split_between),
            "date": self.date,
            "category": self.category,
            "description": self.description
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExpenseRecord":
        """Create an ExpenseRecord instance from a dictionary."""
        return cls(
            id=data.get("id"),
            journey_id=data.get("journey_id"),
            title=data.get("title"),
            amount=data.get("amount"),
            paid_by=data.get("paid_by"),
            split_between=data.get("split_between") or [],
            date=data.get("date"),
            category=data.get("category"),
            description=data.get("description")
        )

    def __repr__(self) -> str:
        return (
            f"ExpenseRecord(id='{self.id}', paid_by='{self.paid_by}', "
            f"amount={self.amount}, split={self.split_between})"
        )


def validate_expense(expense: ExpenseRecord) -> tuple[Decimal, list[str]]:
    """
    Validate an expense before it enters a balance calculation.

    Args:
        expense: The expense to check.

    Returns:
        tuple: (amount as Decimal, split members with repeats removed,
            first-seen order kept).

    Raises:
        ExpenseValidationError: If amount is not a positive finite number,
            paid_by is empty, or split_between is empty.
    """
    try:
        amount = to_decimal(expense.amount)
    except ValueError as e:
        raise ExpenseValidationError(expense.id, str(e)) from e

    if amount <= 0:
        raise ExpenseValidationError(
            expense.id, f"amount must be a positive number, got: {expense.amount}"
        )

    if not isinstance(expense.paid_by, str) or not expense.paid_by.strip():
        raise ExpenseValidationError(expense.id, "paid_by must be a non-empty string")

    members = list(dict.fromkeys(expense.split_between))
    if len(members) == 0:
        raise ExpenseValidationError(
            expense.id, "split_between must be a non-empty list of person ids"
        )

    return amount, members
