"""
Settlement Module

This module turns net balances into payment instructions and records
settlements back as expenses.

Features:
    - Convert net balances into settlement transactions
    - Greedy largest-debtor / largest-creditor matching
    - Rounding to cents only when a settlement is emitted
    - Record settlements as expenses so the ledger returns to zero

Data Model:
    Input - balances (dict keyed by person id):
        signed amount, positive = owes the group, negative = is owed

    Output - list of Settlement:
        - from_id: string (debtor who pays)
        - to_id: string (creditor who receives)
        - amount: Decimal (rounded to 2 decimal places)

Functions:
    plan_settlements: Convert balances into settlement transactions.
    settlement_to_expense: Record one settlement as an expense.
    settlements_to_expenses: Record a whole plan as expenses.
"""

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from splitzter.expenses import ExpenseRecord
from splitzter.money import EPSILON, round_money, to_decimal
from splitzter.participants import Person, person_name


logger = logging.getLogger(__name__)

SETTLEMENT_CATEGORY = "Settlement"


class Settlement:
    """
    A single directed payment: from_id pays to_id.

    Attributes:
        from_id (str): Debtor who pays.
        to_id (str): Creditor who receives.
        amount (Decimal): Positive amount rounded to cents.
    """

    def __init__(self, from_id: str, to_id: str, amount: Decimal):
        self.from_id = from_id
        self.to_id = to_id
        self.amount = amount

    def to_dict(self) -> dict:
        return {"from": self.from_id, "to": self.to_id, "amount": self.amount}

    def __eq__(self, other) -> bool:
        if not isinstance(other, Settlement):
            return NotImplemented
        return (self.from_id, self.to_id, self.amount) == (other.from_id, other.to_id, other.amount)

    def __repr__(self) -> str:
        return f"Settlement(from='{self.from_id}', to='{self.to_id}', amount={self.amount})"


def plan_settlements(balances: dict) -> list[Settlement]:
    """
    Convert net balances into settlement transactions.

    Uses a greedy algorithm:
        1. Separate people into debtors (balance > EPSILON) and creditors
           (balance < -EPSILON); everyone else is already settled
        2. Sort both by largest amount first, keeping input order for ties
        3. Match the largest open debtor with the largest open creditor,
           settle the smaller of the two amounts and move past whichever
           side drops below EPSILON
        4. Repeat until either side runs out

    This is not a globally minimal plan, only largest-to-largest.

    Args:
        balances: Dict keyed by person id with signed amounts
            (positive = owes money, negative = is owed money).

    Returns:
        list[Settlement]: Transactions in the order they were matched.

    Notes:
        - Does NOT modify input balances
        - Remainders are tracked at full precision; only emitted
          amounts are rounded
    """
    debtors = []    # [person_id, amount owed]
    creditors = []  # [person_id, amount owed to them], stored positive

    for person_id, balance in balances.items():
        net = to_decimal(balance)

        if net > EPSILON:
            debtors.append([person_id, net])
        elif net < -EPSILON:
            creditors.append([person_id, -net])

    # list.sort is stable, including with reverse=True
    debtors.sort(key=lambda x: x[1], reverse=True)
    creditors.sort(key=lambda x: x[1], reverse=True)

    settlements = []
    debtor_idx = 0
    creditor_idx = 0

    while debtor_idx < len(debtors) and creditor_idx < len(creditors):
        debtor_id, debt_amount = debtors[debtor_idx]
        creditor_id, credit_amount = creditors[creditor_idx]

        settlement_amount = min(debt_amount, credit_amount)

        # Skip if settlement amount is negligible (rounding artifact)
        if settlement_amount >= EPSILON:
            settlements.append(Settlement(debtor_id, creditor_id, round_money(settlement_amount)))

        debtors[debtor_idx][1] = debt_amount - settlement_amount
        creditors[creditor_idx][1] = credit_amount - settlement_amount

        if debtors[debtor_idx][1] < EPSILON:
            debtor_idx += 1
        if creditors[creditor_idx][1] < EPSILON:
            creditor_idx += 1

    logger.debug(
        "planned %d settlements for %d debtors and %d creditors",
        len(settlements), len(debtors), len(creditors)
    )
    return settlements


def settlement_to_expense(
    settlement: Settlement,
    journey_id: str,
    roster: list[Person],
    description: str = "Settlement payment",
    expense_id: Optional[str] = None,
    date: Optional[str] = None
) -> ExpenseRecord:
    """
    Record a settlement as an expense.

    The debtor is recorded as the payer and the creditor as the only
    beneficiary, so adding the expense cancels both balances.

    Args:
        settlement: The settlement to record.
        journey_id: The journey the expense belongs to.
        roster: Journey roster, used for display names.
        description: Suffix for the expense title.
        expense_id: Optional id; generated when omitted.
        date: Optional ISO date; current UTC time when omitted.

    Returns:
        ExpenseRecord: The settlement expense.
    """
    from_name = person_name(settlement.from_id, roster)
    to_name = person_name(settlement.to_id, roster)

    return ExpenseRecord(
        id=expense_id or f"settlement_{uuid.uuid4().hex[:12]}",
        journey_id=journey_id,
        title=f"Settlement: {description}",
        amount=settlement.amount,
        paid_by=settlement.from_id,
        split_between=[settlement.to_id],
        date=date or datetime.now(timezone.utc).isoformat(),
        category=SETTLEMENT_CATEGORY,
        description=f"Settlement payment from {from_name} to {to_name}"
    )


def settlements_to_expenses(
    settlements: list[Settlement],
    journey_id: str,
    roster: list[Person]
) -> list[ExpenseRecord]:
    """Record every settlement of a plan, titled "Payment i of n"."""
    total = len(settlements)
    return [
        settlement_to_expense(s, journey_id, roster, f"Payment {index} of {total}")
        for index, s in enumerate(settlements, start=1)
    ]
