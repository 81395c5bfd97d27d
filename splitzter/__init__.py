"""
Splitzter - shared expense balances, settlements and quick text entry.
"""

from splitzter.expenses import ExpenseRecord, ExpenseValidationError, validate_expense
from splitzter.ledger import (
    JourneyBalance,
    calculate_journey_balance,
    compute_balances,
    person_summary,
)
from splitzter.money import EPSILON
from splitzter.participants import Person
from splitzter.settlement import (
    Settlement,
    plan_settlements,
    settlement_to_expense,
    settlements_to_expenses,
)
from splitzter.text_parser import (
    CURRENT_USER_ID,
    ParsedExpenseDraft,
    example_text,
    parse_expense_text,
    resolve_current_user,
)

__all__ = [
    "CURRENT_USER_ID",
    "EPSILON",
    "ExpenseRecord",
    "ExpenseValidationError",
    "JourneyBalance",
    "ParsedExpenseDraft",
    "Person",
    "Settlement",
    "calculate_journey_balance",
    "compute_balances",
    "example_text",
    "parse_expense_text",
    "person_summary",
    "plan_settlements",
    "resolve_current_user",
    "settlement_to_expense",
    "settlements_to_expenses",
    "validate_expense",
]
