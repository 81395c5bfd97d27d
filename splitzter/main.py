"""
Splitzter - FastAPI Web Backend

Stateless HTTP access to the ledger, settlement and text-parsing
functions. Every request carries the expenses and roster it needs;
nothing is stored.

Endpoints:
    POST /balances           - Total and per-person balances
    POST /journeys/balance   - Balances plus settlement plan
    POST /person-summary     - Paid/share summary for one person
    POST /settlements        - Settlement plan for given balances
    POST /parse              - Parse free text into expense drafts
    POST /parse/examples     - Help text for the parser
    GET  /health             - Health check

Usage:
    uvicorn splitzter.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from splitzter.config import get_log_level, get_settings
from splitzter.expenses import ExpenseRecord
from splitzter.ledger import calculate_journey_balance, compute_balances, person_summary
from splitzter.participants import Person
from splitzter.settlement import Settlement, plan_settlements
from splitzter.text_parser import (
    ParsedExpenseDraft,
    example_text,
    parse_expense_text,
    resolve_current_user,
)


logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Models for Request/Response Validation
# =============================================================================

class PersonIn(BaseModel):
    """A roster member."""
    id: str = Field(..., min_length=1, description="Person id, unique within the roster")
    name: str = Field(..., min_length=1, description="Display name")
    phone: Optional[str] = None
    email: Optional[str] = None
    is_from_contacts: bool = False


class ExpenseIn(BaseModel):
    """An expense as stored by the client."""
    id: str = Field(..., description="Expense id")
    journey_id: str = Field("", description="Journey the expense belongs to")
    title: str = Field("", description="Short title")
    amount: float = Field(..., gt=0, description="Expense amount (must be > 0)")
    paid_by: str = Field(..., min_length=1, description="Person id of payer")
    split_between: list[str] = Field(..., min_length=1, description="Person ids sharing the cost")
    date: str = Field("", description="ISO date")
    category: Optional[str] = None
    description: Optional[str] = None


class BalancesRequest(BaseModel):
    expenses: list[ExpenseIn]
    roster: list[PersonIn]


class JourneyBalanceRequest(BalancesRequest):
    journey_id: str = ""


class PersonSummaryRequest(BaseModel):
    expenses: list[ExpenseIn]
    person_id: str = Field(..., min_length=1)


class SettlementsRequest(BaseModel):
    balances: dict[str, float] = Field(..., description="Signed balance per person id")


class ParseRequest(BaseModel):
    text: str
    roster: list[PersonIn]
    current_user_id: Optional[str] = Field(
        None, description="Substituted for 'I'/'me' when given"
    )


class ExamplesRequest(BaseModel):
    roster: list[PersonIn] = []


class SettlementOut(BaseModel):
    # "from" is a keyword, so the fields are aliased
    model_config = ConfigDict(populate_by_name=True)

    from_id: str = Field(..., alias="from")
    to_id: str = Field(..., alias="to")
    amount: float


class BalancesResponse(BaseModel):
    total: float
    balances: dict[str, float]


class JourneyBalanceResponse(BalancesResponse):
    journey_id: str
    settlements: list[SettlementOut]


class PersonSummaryResponse(BaseModel):
    total_paid: float
    total_share: float
    balance: float


class DraftOut(BaseModel):
    title: str
    amount: float
    paid_by: str
    split_between: list[str]
    category: Optional[str]
    description: Optional[str]


class ParseResponse(BaseModel):
    drafts: list[DraftOut]
    errors: list[str]


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Splitzter",
    description="Shared expense balances, settlements and quick text entry",
    version="1.0.0"
)


# =============================================================================
# Helper Functions
# =============================================================================

def _to_person(p: PersonIn) -> Person:
    return Person(
        id=p.id,
        name=p.name,
        phone=p.phone,
        email=p.email,
        is_from_contacts=p.is_from_contacts
    )


def _to_expense(e: ExpenseIn) -> ExpenseRecord:
    return ExpenseRecord(
        id=e.id,
        journey_id=e.journey_id,
        title=e.title,
        amount=e.amount,
        paid_by=e.paid_by,
        split_between=e.split_between,
        date=e.date,
        category=e.category,
        description=e.description
    )


def _balances_to_floats(balances: dict) -> dict[str, float]:
    return {pid: float(amount) for pid, amount in balances.items()}


def _settlement_out(s: Settlement) -> SettlementOut:
    return SettlementOut(from_id=s.from_id, to_id=s.to_id, amount=float(s.amount))


def _draft_out(d: ParsedExpenseDraft) -> DraftOut:
    return DraftOut(
        title=d.title,
        amount=float(d.amount),
        paid_by=d.paid_by,
        split_between=d.split_between,
        category=d.category,
        description=d.description
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.post("/balances", response_model=BalancesResponse)
async def balances_endpoint(request: BalancesRequest):
    """
    Compute the total and per-person balances.

    Positive balances owe the group; negative balances are owed.
    """
    try:
        result = compute_balances(
            [_to_expense(e) for e in request.expenses],
            [_to_person(p) for p in request.roster]
        )
        logger.info("balances computed for %d expenses", len(request.expenses))
        return BalancesResponse(
            total=float(result["total"]),
            balances=_balances_to_floats(result["balances"])
        )

    except ValueError as e:
        logger.warning("rejected balances request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("balances request failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    "/journeys/balance",
    response_model=JourneyBalanceResponse,
    response_model_by_alias=True
)
async def journey_balance_endpoint(request: JourneyBalanceRequest):
    """Balances and the settlement plan in one response."""
    try:
        result = calculate_journey_balance(
            [_to_expense(e) for e in request.expenses],
            [_to_person(p) for p in request.roster],
            journey_id=request.journey_id
        )
        logger.info(
            "journey '%s': %d settlements", result.journey_id, len(result.settlements)
        )
        return JourneyBalanceResponse(
            journey_id=result.journey_id,
            total=float(result.total),
            balances=_balances_to_floats(result.balances),
            settlements=[_settlement_out(s) for s in result.settlements]
        )

    except ValueError as e:
        logger.warning("rejected journey balance request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("journey balance request failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/person-summary", response_model=PersonSummaryResponse)
async def person_summary_endpoint(request: PersonSummaryRequest):
    """What one person paid, what their share was, and the difference."""
    try:
        summary = person_summary(
            [_to_expense(e) for e in request.expenses],
            request.person_id
        )
        return PersonSummaryResponse(
            total_paid=float(summary["total_paid"]),
            total_share=float(summary["total_share"]),
            balance=float(summary["balance"])
        )

    except ValueError as e:
        logger.warning("rejected person summary request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("person summary request failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    "/settlements",
    response_model=list[SettlementOut],
    response_model_by_alias=True
)
async def settlements_endpoint(request: SettlementsRequest):
    """Greedy settlement plan for the given balances."""
    try:
        settlements = plan_settlements(request.balances)
        logger.info("planned %d settlements", len(settlements))
        return [_settlement_out(s) for s in settlements]

    except ValueError as e:
        logger.warning("rejected settlements request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("settlements request failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/parse", response_model=ParseResponse)
async def parse_endpoint(request: ParseRequest):
    """
    Parse free text into expense drafts.

    Request flow:
        1. Parse every line against the roster
        2. If current_user_id is given, substitute it for "I"/"me"
        3. Return drafts and per-line errors together
    """
    try:
        result = parse_expense_text(request.text, [_to_person(p) for p in request.roster])
        drafts = result["drafts"]

        if request.current_user_id is not None:
            drafts = resolve_current_user(drafts, request.current_user_id)

        logger.info("parsed text: %d drafts, %d errors", len(drafts), len(result["errors"]))
        return ParseResponse(
            drafts=[_draft_out(d) for d in drafts],
            errors=result["errors"]
        )

    except ValueError as e:
        logger.warning("rejected parse request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("parse request failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/parse/examples")
async def parse_examples_endpoint(request: ExamplesRequest):
    """Help text for the parser, using the first two roster names."""
    return {"text": example_text([_to_person(p) for p in request.roster])}


# =============================================================================
# Health Check Endpoint
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint to verify API is running."""
    return {"status": "healthy", "service": "Splitzter"}


# =============================================================================
# Run with: python -m splitzter.main
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "splitzter.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload
    )
