from decimal import Decimal

from splitzter.ledger import compute_balances
from splitzter.settlement import (
    SETTLEMENT_CATEGORY,
    Settlement,
    plan_settlements,
    settlement_to_expense,
    settlements_to_expenses,
)

from conftest import make_expense


CENT = Decimal("0.01")


def _paid_by(settlements, person_id):
    return sum((s.amount for s in settlements if s.from_id == person_id), Decimal("0"))


def _received_by(settlements, person_id):
    return sum((s.amount for s in settlements if s.to_id == person_id), Decimal("0"))


def test_single_creditor_two_debtors():
    settlements = plan_settlements({"A": -60, "B": 30, "C": 30})

    assert settlements == [
        Settlement("B", "A", Decimal("30.00")),
        Settlement("C", "A", Decimal("30.00")),
    ]


def test_largest_debtor_matched_with_largest_creditor_first():
    settlements = plan_settlements({"P1": -700, "P2": 200, "P3": 500})

    assert [(s.from_id, s.to_id, s.amount) for s in settlements] == [
        ("P3", "P1", Decimal("500.00")),
        ("P2", "P1", Decimal("200.00")),
    ]


def test_greedy_plan_is_kept_even_when_not_globally_minimal():
    # 6 + 4 -> C1 and 5 + 3 -> C2 would take 4 payments;
    # largest-to-largest matching takes 5.
    balances = {"C1": -10, "C2": -8, "D1": 6, "D2": 5, "D3": 4, "D4": 3}

    settlements = plan_settlements(balances)

    assert [(s.from_id, s.to_id, s.amount) for s in settlements] == [
        ("D1", "C1", Decimal("6.00")),
        ("D2", "C1", Decimal("4.00")),
        ("D2", "C2", Decimal("1.00")),
        ("D3", "C2", Decimal("4.00")),
        ("D4", "C2", Decimal("3.00")),
    ]


def test_ties_keep_input_order():
    settlements = plan_settlements({"X": 10, "Y": 10, "Z": -20})

    assert [s.from_id for s in settlements] == ["X", "Y"]


def test_settled_people_are_skipped():
    settlements = plan_settlements({"A": Decimal("0.005"), "B": Decimal("-0.01"), "C": 0})

    assert settlements == []


def test_payment_rounding_to_one_cent_is_kept():
    settlements = plan_settlements({"A": Decimal("0.012"), "B": Decimal("-0.012")})

    assert settlements == [Settlement("A", "B", Decimal("0.01"))]


def test_closure_with_remainder_just_above_one_cent():
    balances = {"A": 10.012, "B": -10, "C": -0.012}

    settlements = plan_settlements(balances)

    assert [(s.from_id, s.to_id, s.amount) for s in settlements] == [
        ("A", "B", Decimal("10.00")),
        ("A", "C", Decimal("0.01")),
    ]
    assert abs(_paid_by(settlements, "A") - Decimal("10.012")) <= CENT
    assert abs(_received_by(settlements, "B") - Decimal("10")) <= CENT
    assert abs(_received_by(settlements, "C") - Decimal("0.012")) <= CENT


def test_uneven_split_rounding(roster):
    balances = compute_balances([make_expense("E001", 100, "A", ["A", "B", "C"])], roster)["balances"]

    settlements = plan_settlements(balances)

    assert abs(sum(balances.values())) <= CENT
    assert [s.from_id for s in settlements] == ["B", "C"]
    assert all(s.amount == Decimal("33.33") for s in settlements)
    assert abs(_received_by(settlements, "A") - abs(balances["A"])) <= CENT


def test_settlement_closure_and_no_self_payment():
    expenses = [
        make_expense("E001", 120, "A", ["A", "B", "C", "D", "E"]),
        make_expense("E002", 45.5, "B", ["B", "C"]),
        make_expense("E003", 300, "C", ["A", "D", "E"]),
        make_expense("E004", 77.77, "E", ["A", "B", "C", "D"]),
    ]
    balances = compute_balances(expenses, [])["balances"]

    settlements = plan_settlements(balances)

    for s in settlements:
        assert s.from_id != s.to_id
        assert s.amount > 0
    for person_id, balance in balances.items():
        if balance > CENT:
            assert abs(_paid_by(settlements, person_id) - balance) <= CENT
            assert _received_by(settlements, person_id) == 0
        elif balance < -CENT:
            assert abs(_received_by(settlements, person_id) + balance) <= CENT
            assert _paid_by(settlements, person_id) == 0


def test_plan_is_deterministic_and_input_untouched():
    balances = {"A": -45.5, "B": 20.25, "C": 20.25, "D": 5}
    before = dict(balances)

    first = plan_settlements(balances)
    second = plan_settlements(balances)

    assert first == second
    assert balances == before


def test_settlement_to_dict():
    assert Settlement("B", "A", Decimal("30.00")).to_dict() == {
        "from": "B", "to": "A", "amount": Decimal("30.00")
    }


def test_settlement_expense_cancels_balances(roster):
    expenses = [make_expense("E001", 90, "A", ["A", "B", "C"])]
    settlements = plan_settlements(compute_balances(expenses, roster)["balances"])

    recorded = settlements_to_expenses(settlements, "J1", roster)
    balances = compute_balances(expenses + recorded, roster)["balances"]

    assert all(abs(v) <= CENT for v in balances.values())
    assert [e.title for e in recorded] == [
        "Settlement: Payment 1 of 2",
        "Settlement: Payment 2 of 2",
    ]


def test_settlement_to_expense_fields(roster):
    expense = settlement_to_expense(
        Settlement("B", "A", Decimal("30.00")), "J1", roster,
        expense_id="S1", date="2025-12-05"
    )

    assert expense.id == "S1"
    assert expense.paid_by == "B"
    assert expense.split_between == ["A"]
    assert expense.category == SETTLEMENT_CATEGORY
    assert expense.description == "Settlement payment from Bob to Alice"
    assert expense.date == "2025-12-05"


def test_settlement_to_expense_generates_id_and_unknown_names():
    expense = settlement_to_expense(Settlement("X", "Y", Decimal("1.50")), "J1", [])

    assert expense.id.startswith("settlement_")
    assert expense.description == "Settlement payment from Unknown to Unknown"
    assert expense.date
