"""Amortization schedule computation.

Pure functions: LoanTerms in, tuple of Period out. No I/O.

Rounding policy: the level payment and every period's interest are quantized
to ``terms.decimal_places`` with ``terms.rounding`` (half-up unless the terms
say otherwise). Balances keep full precision. The last scheduled period pays
off whatever balance is left, so principal always sums to the loan amount.
"""

import logging
from decimal import (
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    ROUND_HALF_EVEN,
    localcontext,
)

from amortizer.config import settings
from amortizer.engine.errors import InvalidTermsError, PrecisionOverflowError
from amortizer.models.loan import LoanTerms, Period, ROUNDING_MODES

logger = logging.getLogger(__name__)

MIN_PRECISION = 28
GUARD_DIGITS = 12
ZERO = Decimal("0")


def _required_precision(terms: LoanTerms) -> int:
    """Digits needed to hold every amount of the schedule exactly.

    Spans from the largest possible interest or payment (amount times rate)
    down to the finer of the inputs' own places and the currency places.
    """
    amounts = [Decimal(terms.principal), Decimal(terms.extra_payment)]
    rate = Decimal(terms.annual_rate)
    highest = max(a.adjusted() for a in amounts) + max(rate.adjusted(), 0) + 1
    lowest = min([a.as_tuple().exponent for a in amounts] + [-terms.decimal_places])
    return max(MIN_PRECISION, settings.working_precision, highest - lowest + GUARD_DIGITS)


def _working_context(terms: LoanTerms):
    """Private Decimal context so callers' contexts are never touched."""
    prec = _required_precision(terms)
    if prec > settings.max_working_precision:
        raise PrecisionOverflowError("working precision", prec, settings.max_working_precision)
    ctx = Context(
        prec=prec,
        rounding=ROUND_HALF_EVEN,
        traps=[InvalidOperation, DivisionByZero, Overflow],
    )
    return localcontext(ctx)


def _check_amount(field: str, value, allow_zero: bool) -> None:
    # Money must not arrive as binary floating point
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        raise InvalidTermsError(field, "must be a Decimal or int")
    value = Decimal(value)
    if not value.is_finite():
        raise InvalidTermsError(field, "must be finite")
    if allow_zero and value < 0:
        raise InvalidTermsError(field, "must be >= 0")
    if not allow_zero and value <= 0:
        raise InvalidTermsError(field, "must be > 0")


def _check_count(field: str, value, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTermsError(field, "must be an integer")
    if value < minimum:
        raise InvalidTermsError(field, f"must be >= {minimum}")


def validate_terms(terms: LoanTerms) -> None:
    """Raise InvalidTermsError for the first constraint the terms violate."""
    _check_amount("principal", terms.principal, allow_zero=False)
    _check_amount("annual_rate", terms.annual_rate, allow_zero=True)
    _check_count("periods", terms.periods, 1)
    _check_count("frequency", terms.frequency, 1)
    _check_amount("extra_payment", terms.extra_payment, allow_zero=True)
    if terms.rounding not in ROUNDING_MODES:
        raise InvalidTermsError("rounding", f"must be one of {', '.join(ROUNDING_MODES)}")
    _check_count("decimal_places", terms.decimal_places, 0)


def _round(value: Decimal, terms: LoanTerms) -> Decimal:
    return value.quantize(terms.quantum, rounding=terms.rounding)


def _level_payment(terms: LoanTerms, rate: Decimal) -> Decimal:
    principal = Decimal(terms.principal)
    # PMT = P * r / (1 - (1 + r)^-n), integer power keeps it in Decimal.
    # A rate too small to move 1 + r at this precision is straight-line.
    denominator = 1 - (1 + rate) ** -terms.periods if rate else ZERO
    if denominator == 0:
        return _round(principal / terms.periods, terms)
    return _round(principal * rate / denominator, terms)


def periodic_rate(terms: LoanTerms) -> Decimal:
    """Annual nominal rate divided by payments per year."""
    validate_terms(terms)
    with _working_context(terms):
        return terms.periodic_rate


def level_payment(terms: LoanTerms) -> Decimal:
    """Scheduled payment before extra payments, rounded to currency precision."""
    validate_terms(terms)
    try:
        with _working_context(terms):
            return _level_payment(terms, terms.periodic_rate)
    except DecimalException as e:
        raise InvalidTermsError("terms", f"cannot be computed in Decimal ({type(e).__name__})") from e


def generate_schedule(terms: LoanTerms, max_periods: int | None = None) -> tuple[Period, ...]:
    """Generate the full amortization schedule for a loan.

    Args:
        terms: Loan terms
        max_periods: Safety ceiling on ``terms.periods``. Defaults to
            ``settings.max_schedule_periods``.

    Raises:
        InvalidTermsError: terms violate an input constraint
        PrecisionOverflowError: ``terms.periods`` exceeds the ceiling, or the
            terms need more Decimal digits than ``settings.max_working_precision``

    The schedule stops early once extra payments clear the balance. The final
    period's principal is the whole remaining balance, so its payment may
    differ from the level payment by the accumulated rounding residue.
    """
    validate_terms(terms)
    ceiling = settings.max_schedule_periods if max_periods is None else max_periods
    if terms.periods > ceiling:
        raise PrecisionOverflowError("periods", terms.periods, ceiling)

    try:
        with _working_context(terms):
            rate = terms.periodic_rate
            pmt = _level_payment(terms, rate)
            extra = Decimal(terms.extra_payment)
            balance = Decimal(terms.principal)

            periods: list[Period] = []
            for index in range(1, terms.periods + 1):
                interest = _round(balance * rate, terms)

                if index == terms.periods:
                    # Residual correction
                    principal_paid = balance
                else:
                    principal_paid = min(max(pmt - interest + extra, ZERO), balance)

                balance -= principal_paid
                periods.append(Period(
                    index=index,
                    payment_due=principal_paid + interest,
                    principal_due=principal_paid,
                    interest_due=interest,
                    remaining_balance=balance,
                ))

                if balance == 0:
                    break
    except DecimalException as e:
        raise InvalidTermsError("terms", f"cannot be computed in Decimal ({type(e).__name__})") from e

    logger.debug(
        "Generated %d of %d periods (payment %s, rate %s/period)",
        len(periods), terms.periods, pmt, rate,
    )
    return tuple(periods)
