from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, ROUND_HALF_EVEN

ROUNDING_MODES = (ROUND_HALF_UP, ROUND_HALF_EVEN)


@dataclass(frozen=True)
class LoanTerms:
    """Inputs for a level-payment amortizing loan."""
    principal: Decimal
    annual_rate: Decimal  # Nominal, e.g. 0.05 for 5%
    periods: int  # Number of scheduled payments
    frequency: int = 12  # Payments per year
    extra_payment: Decimal = Decimal("0")  # Applied to principal every period

    # Rounding policy for due amounts. One mode per schedule.
    rounding: str = ROUND_HALF_UP
    decimal_places: int = 2

    @property
    def periodic_rate(self) -> Decimal:
        return Decimal(self.annual_rate) / self.frequency

    @property
    def quantum(self) -> Decimal:
        """Smallest currency unit, e.g. Decimal("0.01") for two places."""
        return Decimal(1).scaleb(-self.decimal_places)


@dataclass(frozen=True)
class Period:
    index: int  # 1-based
    payment_due: Decimal  # principal_due + interest_due
    principal_due: Decimal
    interest_due: Decimal
    remaining_balance: Decimal  # After this payment
