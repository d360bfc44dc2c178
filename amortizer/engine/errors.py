"""Errors raised by the amortization engine."""


class AmortizationError(Exception):
    """Base class for engine errors."""


class InvalidTermsError(AmortizationError, ValueError):
    """Loan terms violate an input constraint.

    Raised before any computation. ``field`` names the offending LoanTerms
    attribute and ``constraint`` describes the rule it broke.
    """

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field} {constraint}")


class PrecisionOverflowError(AmortizationError):
    """Schedule would exceed a configured computation ceiling.

    ``limit`` is either ``"periods"`` (schedule length) or
    ``"working precision"`` (Decimal digits the terms would need).
    """

    def __init__(self, limit: str, value: int, ceiling: int):
        self.limit = limit
        self.value = value
        self.ceiling = ceiling
        super().__init__(f"{limit} of {value} exceeds the ceiling of {ceiling}")
