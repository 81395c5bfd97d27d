import pytest

from splitzter.expenses import ExpenseRecord
from splitzter.participants import Person


def make_expense(expense_id, amount, paid_by, split_between, journey_id="J1", **kwargs):
    return ExpenseRecord(
        id=expense_id,
        journey_id=journey_id,
        title=kwargs.pop("title", f"Expense {expense_id}"),
        amount=amount,
        paid_by=paid_by,
        split_between=split_between,
        date=kwargs.pop("date", "2025-12-01"),
        **kwargs
    )


@pytest.fixture
def roster():
    return [Person("A", "Alice"), Person("B", "Bob"), Person("C", "Charlie")]


@pytest.fixture
def parser_roster():
    return [Person("P001", "Amit"), Person("P002", "Priya")]
