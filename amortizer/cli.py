"""CLI for generating amortization schedules.

Usage:
    python -m amortizer.cli 1000 0.12 12
    python -m amortizer.cli 250000 0.065 360 --extra 200
    python -m amortizer.cli 250000 0.065 360 --yearly --rounding half-even
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, ROUND_HALF_UP

from amortizer.config import settings
from amortizer.engine.errors import AmortizationError
from amortizer.engine.schedule import generate_schedule, level_payment
from amortizer.engine.summary import ScheduleSummary, summarize_schedule, yearly_summary
from amortizer.models.loan import LoanTerms, Period

ROUNDING_CHOICES = {"half-up": ROUND_HALF_UP, "half-even": ROUND_HALF_EVEN}


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value.replace(",", ""))
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid decimal value: {value!r}")


def print_schedule(periods: tuple[Period, ...]) -> None:
    print(f"{'#':>5}  {'Payment':>14}  {'Principal':>14}  {'Interest':>12}  {'Balance':>16}")
    for p in periods:
        print(
            f"{p.index:>5}  {p.payment_due:>14}  {p.principal_due:>14}"
            f"  {p.interest_due:>12}  {p.remaining_balance:>16}"
        )


def print_yearly(yearly: list[dict[str, Decimal | int]]) -> None:
    print(f"{'Year':>5}  {'Debt service':>14}  {'Principal':>14}  {'Interest':>12}  {'Balance':>16}")
    for y in yearly:
        print(
            f"{y['year']:>5}  {y['debt_service']:>14}  {y['principal']:>14}"
            f"  {y['interest']:>12}  {y['ending_balance']:>16}"
        )


def print_summary(summary: ScheduleSummary, payment: Decimal) -> None:
    print(f"\n{'=' * 48}")
    print("  Summary")
    print(f"{'=' * 48}")
    print(f"  Level payment:      {payment}")
    print(f"  Payments:           {summary.period_count}")
    print(f"  Loan amount:        {summary.initial_loan_amount}")
    print(f"  Total principal:    {summary.total_principal}")
    print(f"  Total interest:     {summary.total_interest}")
    print(f"  Total paid:         {summary.total_paid}")
    print(f"  Principal share:    {summary.principal_share}")
    print(f"  Interest share:     {summary.interest_share}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Loan amortization schedule")
    parser.add_argument("principal", type=_decimal, help="Loan amount")
    parser.add_argument("annual_rate", type=_decimal, help="Nominal annual rate, e.g. 0.05 for 5%%")
    parser.add_argument("periods", type=int, help="Number of payments")
    parser.add_argument("--frequency", type=int, default=12, help="Payments per year (default: 12)")
    parser.add_argument("--extra", type=_decimal, default=Decimal("0"), help="Extra principal per payment")
    parser.add_argument(
        "--rounding",
        choices=sorted(ROUNDING_CHOICES),
        default="half-even" if settings.default_rounding == ROUND_HALF_EVEN else "half-up",
        help="Rounding mode for due amounts",
    )
    parser.add_argument("--places", type=int, default=settings.currency_places, help="Currency decimal places")
    parser.add_argument("--yearly", action="store_true", help="Show the yearly roll-up instead of every payment")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_parser().parse_args(argv)

    terms = LoanTerms(
        principal=args.principal,
        annual_rate=args.annual_rate,
        periods=args.periods,
        frequency=args.frequency,
        extra_payment=args.extra,
        rounding=ROUNDING_CHOICES[args.rounding],
        decimal_places=args.places,
    )

    try:
        periods = generate_schedule(terms)
    except AmortizationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.yearly:
        print_yearly(yearly_summary(periods, terms.frequency))
    else:
        print_schedule(periods)
    print_summary(summarize_schedule(periods, principal=terms.principal), level_payment(terms))
    return 0


if __name__ == "__main__":
    sys.exit(main())
