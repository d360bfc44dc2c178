"""Schedule routes."""

import logging

from fastapi import APIRouter, HTTPException

from amortizer.api.schemas import (
    ScheduleRequest,
    ScheduleResponse,
    PeriodResponse,
    SummaryResponse,
    YearlyResponse,
)
from amortizer.engine.errors import InvalidTermsError, PrecisionOverflowError
from amortizer.engine.schedule import generate_schedule, level_payment
from amortizer.engine.summary import summarize_schedule, yearly_summary
from amortizer.models.loan import LoanTerms, Period

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["schedule"])


def _build_terms(req: ScheduleRequest) -> LoanTerms:
    return LoanTerms(
        principal=req.principal,
        annual_rate=req.annual_rate,
        periods=req.periods,
        frequency=req.frequency,
        extra_payment=req.extra_payment,
        rounding=req.rounding,
        decimal_places=req.decimal_places,
    )


def _run(terms: LoanTerms) -> tuple[Period, ...]:
    """Generate a schedule, mapping engine errors to HTTP errors."""
    try:
        return generate_schedule(terms)
    except InvalidTermsError as e:
        logger.warning("Rejected loan terms: %s", e)
        raise HTTPException(
            status_code=400,
            detail={"field": e.field, "constraint": e.constraint},
        )
    except PrecisionOverflowError as e:
        logger.warning("Rejected schedule length: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: ScheduleRequest):
    """Loan terms → full amortization schedule with totals."""
    terms = _build_terms(req)
    periods = _run(terms)
    summary = summarize_schedule(periods, principal=terms.principal)

    return ScheduleResponse(
        level_payment=level_payment(terms),
        summary=SummaryResponse(
            period_count=summary.period_count,
            initial_loan_amount=summary.initial_loan_amount,
            total_principal=summary.total_principal,
            total_interest=summary.total_interest,
            total_paid=summary.total_paid,
            remaining_balance=summary.remaining_balance,
            principal_share=summary.principal_share,
            interest_share=summary.interest_share,
        ),
        periods=[
            PeriodResponse(
                index=p.index,
                payment_due=p.payment_due,
                principal_due=p.principal_due,
                interest_due=p.interest_due,
                remaining_balance=p.remaining_balance,
            )
            for p in periods
        ],
    )


@router.post("/schedule/yearly", response_model=list[YearlyResponse])
async def schedule_yearly(req: ScheduleRequest):
    """Loan terms → schedule rolled up by year."""
    terms = _build_terms(req)
    periods = _run(terms)
    return [
        YearlyResponse(
            year=y["year"],
            principal=y["principal"],
            interest=y["interest"],
            debt_service=y["debt_service"],
            ending_balance=y["ending_balance"],
        )
        for y in yearly_summary(periods, terms.frequency)
    ]
