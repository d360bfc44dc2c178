"""Aggregate statistics over an amortization schedule.

Pure functions over already-generated periods. Nothing here formats money;
renderers receive plain Decimals.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Context, Decimal, MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, localcontext
from itertools import groupby

from amortizer.models.loan import Period

SHARE_PLACES = Decimal("0.0001")


def _total(values) -> Decimal:
    """Sum without rounding, whatever the caller's context precision."""
    # Addition never needs more digits than its operands, so MAX_PREC stays exact
    with localcontext(Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)):
        return sum(values, Decimal("0"))


@dataclass(frozen=True)
class ScheduleSummary:
    period_count: int
    initial_loan_amount: Decimal
    total_principal: Decimal
    total_interest: Decimal
    total_paid: Decimal
    remaining_balance: Decimal  # initial_loan_amount - total_principal
    principal_share: Decimal  # Of total_paid
    interest_share: Decimal


def derive_initial_loan_amount(periods: Sequence[Period]) -> Decimal:
    """Recover the loan amount from the first period alone.

    Presentation convenience for consumers that only hold the periods. The
    balance before period 1 is its remaining balance plus the principal it
    repaid; interest never touches the balance. Adding the first period's
    interest as well, as some renderers do, overstates the loan by that
    interest, so it is deliberately left out.
    """
    if not periods:
        raise ValueError("Cannot derive a loan amount from an empty schedule")
    first = periods[0]
    return _total([first.remaining_balance, first.principal_due])


def _share(part: Decimal, whole: Decimal) -> Decimal:
    if whole == 0:
        return Decimal("0")
    return (part / whole).quantize(SHARE_PLACES, ROUND_HALF_UP)


def summarize_schedule(
    periods: Sequence[Period],
    principal: Decimal | None = None,
) -> ScheduleSummary:
    """Totals for a schedule.

    Args:
        periods: Schedule, in order
        principal: Original loan amount. When omitted it is derived from the
            first period.
    """
    if not periods:
        zero = Decimal("0")
        return ScheduleSummary(
            period_count=0,
            initial_loan_amount=principal if principal is not None else zero,
            total_principal=zero,
            total_interest=zero,
            total_paid=zero,
            remaining_balance=principal if principal is not None else zero,
            principal_share=zero,
            interest_share=zero,
        )

    total_principal = _total(p.principal_due for p in periods)
    total_interest = _total(p.interest_due for p in periods)
    total_paid = _total([total_principal, total_interest])
    initial = principal if principal is not None else derive_initial_loan_amount(periods)

    return ScheduleSummary(
        period_count=len(periods),
        initial_loan_amount=initial,
        total_principal=total_principal,
        total_interest=total_interest,
        total_paid=total_paid,
        remaining_balance=_total([initial, total_principal.copy_negate()]),
        principal_share=_share(total_principal, total_paid),
        interest_share=_share(total_interest, total_paid),
    )


def yearly_summary(periods: Sequence[Period], frequency: int = 12) -> list[dict[str, Decimal | int]]:
    """Group a schedule into years of ``frequency`` periods each.

    Returns one dict per year with keys: year (int, 1-based), principal,
    interest, debt_service, ending_balance. A schedule that ends mid-year
    yields a short final year.
    """
    if frequency < 1:
        raise ValueError("frequency must be >= 1")

    yearly: list[dict[str, Decimal | int]] = []
    for year, group in groupby(periods, key=lambda p: (p.index - 1) // frequency + 1):
        in_year = list(group)
        yearly.append({
            "year": year,
            "principal": _total(p.principal_due for p in in_year),
            "interest": _total(p.interest_due for p in in_year),
            "debt_service": _total(p.payment_due for p in in_year),
            "ending_balance": in_year[-1].remaining_balance,
        })
    return yearly
