"""
Ledger Module

This module folds a journey's expenses into per-person balances.

Features:
    - Equal splitting among the people listed on each expense
    - Per-person balance calculation seeded from the roster
    - Per-person paid/share summary
    - Decimal precision throughout, rounding only in summaries

Data Model:
    Input - expenses: list of ExpenseRecord
    Input - roster: list of Person

    Output - balances (dict keyed by person id):
        signed Decimal, positive = owes the group,
        negative = is owed by the group

Functions:
    compute_balances: Total and per-person balances.
    person_summary: Paid/share summary for one person.
    calculate_journey_balance: Balances plus the settlement plan.
"""

import logging
from decimal import Decimal

from splitzter.expenses import ExpenseRecord, validate_expense
from splitzter.money import round_money
from splitzter.participants import Person
from splitzter.settlement import Settlement, plan_settlements


logger = logging.getLogger(__name__)


class JourneyBalance:
    """
    Everything a journey screen shows about money in one object.

    Attributes:
        journey_id (str): Journey the balances belong to.
        total (Decimal): Sum of all expense amounts.
        balances (dict[str, Decimal]): Signed balance per person id.
        settlements (list[Settlement]): Greedy settlement plan.
    """

    def __init__(
        self,
        journey_id: str,
        total: Decimal,
        balances: dict,
        settlements: list[Settlement]
    ):
        self.journey_id = journey_id
        self.total = total
        self.balances = balances
        self.settlements = settlements

    def to_dict(self) -> dict:
        return {
            "journey_id": self.journey_id,
            "total": self.total,
            "balances": dict(self.balances),
            "settlements": [s.to_dict() for s in self.settlements]
        }


def _validated(expenses: list[ExpenseRecord]) -> list[tuple]:
    # Reject the whole batch before anything is accumulated
    return [(expense, *validate_expense(expense)) for expense in expenses]


def compute_balances(expenses: list[ExpenseRecord], roster: list[Person]) -> dict:
    """
    Calculate the journey total and per-person balances.

    For each expense:
        1. The payer is credited the full amount (balance decreases)
        2. Each split member is debited amount / len(split_between)
        3. The amount is added to the total

    Args:
        expenses: List of ExpenseRecord.
        roster: List of Person; every member starts at 0, even
            those without expenses.

    Returns:
        dict: Containing:
            - total: Decimal (sum of all expense amounts)
            - balances: dict keyed by person id with signed Decimals

    Raises:
        ExpenseValidationError: If any expense has an empty split or
            a non-positive amount. Nothing is computed in that case.

    Notes:
        - Payer does NOT need to be in the split
        - Ids missing from the roster are added as they appear
        - Balances are not rounded
    """
    checked = _validated(expenses)

    balances = {person.id: Decimal("0") for person in roster}
    total = Decimal("0")

    for expense, amount, members in checked:
        share = amount / Decimal(len(members))

        balances[expense.paid_by] = balances.get(expense.paid_by, Decimal("0")) - amount

        for person_id in members:
            balances[person_id] = balances.get(person_id, Decimal("0")) + share

        total += amount

    logger.debug(
        "computed balances for %d people from %d expenses (total %s)",
        len(balances), len(checked), total
    )
    return {"total": total, "balances": balances}


def person_summary(expenses: list[ExpenseRecord], person_id: str) -> dict:
    """
    Summarise what one person paid and what their share came to.

    Args:
        expenses: List of ExpenseRecord.
        person_id: The person to summarise.

    Returns:
        dict: Containing (all rounded to 2 decimal places):
            - total_paid: Decimal (amounts this person paid)
            - total_share: Decimal (equal shares this person owes)
            - balance: Decimal (total_share - total_paid)
    """
    total_paid = Decimal("0")
    total_share = Decimal("0")

    for expense, amount, members in _validated(expenses):
        if expense.paid_by == person_id:
            total_paid += amount
        if person_id in members:
            total_share += amount / Decimal(len(members))

    return {
        "total_paid": round_money(total_paid),
        "total_share": round_money(total_share),
        "balance": round_money(total_share - total_paid)
    }


def calculate_journey_balance(
    expenses: list[ExpenseRecord],
    roster: list[Person],
    journey_id: str = ""
) -> JourneyBalance:
    """
    Compute balances and the settlement plan in one call.

    journey_id falls back to the first expense's journey, or "".
    """
    if not journey_id and expenses:
        journey_id = expenses[0].journey_id or ""

    result = compute_balances(expenses, roster)
    return JourneyBalance(
        journey_id=journey_id,
        total=result["total"],
        balances=result["balances"],
        settlements=plan_settlements(result["balances"])
    )
