from decimal import Decimal

import pytest

from splitzter.expenses import ExpenseRecord, ExpenseValidationError
from splitzter.ledger import calculate_journey_balance, compute_balances, person_summary
from splitzter.participants import Person
from splitzter.settlement import Settlement

from conftest import make_expense


CENT = Decimal("0.01")


def test_three_way_even_split(roster):
    result = compute_balances([make_expense("E001", 90, "A", ["A", "B", "C"])], roster)

    assert result["total"] == Decimal("90")
    assert result["balances"] == {"A": Decimal("-60"), "B": Decimal("30"), "C": Decimal("30")}


def test_roster_members_without_expenses_start_at_zero(roster):
    result = compute_balances([make_expense("E001", 40, "A", ["A", "B"])], roster)

    assert list(result["balances"]) == ["A", "B", "C"]
    assert result["balances"]["C"] == 0


def test_no_expenses_gives_zero_total(roster):
    result = compute_balances([], roster)

    assert result["total"] == 0
    assert all(v == 0 for v in result["balances"].values())


def test_balances_close_to_zero_with_uneven_split(roster):
    expenses = [
        make_expense("E001", 100, "A", ["A", "B", "C"]),
        make_expense("E002", 55.55, "B", ["A", "C"]),
        make_expense("E003", "19.99", "C", ["A", "B", "C"]),
    ]
    result = compute_balances(expenses, roster)

    assert abs(sum(result["balances"].values())) <= CENT
    assert result["total"] == Decimal("175.54")


def test_payer_does_not_need_to_be_in_split(roster):
    result = compute_balances([make_expense("E001", 50, "A", ["B", "C"])], roster)

    assert result["balances"] == {"A": Decimal("-50"), "B": Decimal("25"), "C": Decimal("25")}


def test_duplicate_split_members_are_counted_once(roster):
    result = compute_balances([make_expense("E001", 60, "A", ["B", "B", "C"])], roster)

    assert result["balances"]["B"] == Decimal("30")
    assert result["balances"]["C"] == Decimal("30")


def test_ids_outside_roster_are_added(roster):
    result = compute_balances([make_expense("E001", 20, "Z", ["A", "Z"])], roster)

    assert result["balances"]["Z"] == Decimal("-10")
    assert result["balances"]["A"] == Decimal("10")


def test_empty_split_is_rejected(roster):
    expenses = [
        make_expense("E001", 30, "A", ["A", "B"]),
        make_expense("E002", 30, "A", []),
    ]

    with pytest.raises(ExpenseValidationError) as exc_info:
        compute_balances(expenses, roster)

    assert exc_info.value.expense_id == "E002"
    assert "split_between" in str(exc_info.value)


@pytest.mark.parametrize("amount", [0, -5, "abc", float("nan"), float("inf")])
def test_bad_amount_is_rejected(roster, amount):
    with pytest.raises(ExpenseValidationError):
        compute_balances([make_expense("E001", amount, "A", ["A"])], roster)


def test_missing_split_is_rejected(roster):
    expense = make_expense("E001", 30, "A", None)

    assert expense.split_between == []
    with pytest.raises(ExpenseValidationError):
        compute_balances([expense], roster)


def test_validation_error_is_a_value_error(roster):
    with pytest.raises(ValueError):
        compute_balances([make_expense("E001", 10, "", ["A"])], roster)


def test_inputs_are_not_modified(roster):
    expense = make_expense("E001", 90, "A", ["A", "B", "B"])
    compute_balances([expense], roster)

    assert expense.split_between == ["A", "B", "B"]
    assert expense.amount == 90


def test_records_loaded_from_dicts():
    roster = [Person.from_dict({"id": "P001", "name": "Alice"}), Person.from_dict({"id": "P002", "name": "Bob"})]
    expenses = [
        ExpenseRecord.from_dict({
            "id": "E001",
            "journey_id": "goa",
            "title": "Hotel",
            "amount": 1500,
            "paid_by": "P001",
            "split_between": ["P001", "P002"],
            "date": "2025-12-02",
            "category": "hotel",
        }),
    ]

    result = compute_balances(expenses, roster)

    assert result["balances"] == {"P001": Decimal("-750"), "P002": Decimal("750")}
    assert expenses[0].to_dict()["category"] == "hotel"
    assert roster[1].to_dict()["is_from_contacts"] is False


def test_person_summary(roster):
    expenses = [
        make_expense("E001", 90, "A", ["A", "B", "C"]),
        make_expense("E002", 100, "B", ["A", "B", "C"]),
    ]

    summary = person_summary(expenses, "A")

    assert summary["total_paid"] == Decimal("90.00")
    assert summary["total_share"] == Decimal("63.33")
    assert summary["balance"] == Decimal("-26.67")


def test_person_summary_rounds_only_at_the_end():
    # Three shares of 10/3 round to 3.33 each but sum to 10.00
    expenses = [make_expense(f"E00{i}", 10, "A", ["A", "B", "C"]) for i in range(3)]

    assert person_summary(expenses, "B")["total_share"] == Decimal("10.00")


def test_person_summary_for_unknown_person(roster):
    summary = person_summary([make_expense("E001", 90, "A", ["A", "B"])], "Q")

    assert summary == {"total_paid": 0, "total_share": 0, "balance": 0}


def test_journey_balance_combines_balances_and_settlements(roster):
    result = calculate_journey_balance([make_expense("E001", 90, "A", ["A", "B", "C"])], roster)

    assert result.journey_id == "J1"
    assert result.total == Decimal("90")
    assert result.settlements == [
        Settlement("B", "A", Decimal("30.00")),
        Settlement("C", "A", Decimal("30.00")),
    ]


def test_journey_balance_without_expenses():
    result = calculate_journey_balance([], [Person("A", "Alice")])

    assert result.journey_id == ""
    assert result.settlements == []
    assert result.to_dict()["balances"] == {"A": 0}
