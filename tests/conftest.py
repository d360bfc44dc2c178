"""Canonical loan fixtures used across engine and API tests.

Fixture: $400K, 7%, 30yr monthly mortgage.
Fixture: $1,000, 12%, 12 monthly payments (1% per period).
"""

import pytest
from decimal import Decimal

from amortizer.models.loan import LoanTerms


@pytest.fixture
def mortgage_terms() -> LoanTerms:
    """$400K loan at 7% for 30 years."""
    return LoanTerms(
        principal=Decimal("400000"),
        annual_rate=Decimal("0.07"),
        periods=360,
        frequency=12,
    )


@pytest.fixture
def one_year_terms() -> LoanTerms:
    """$1,000 at 12% over 12 monthly payments."""
    return LoanTerms(
        principal=Decimal("1000.00"),
        annual_rate=Decimal("0.12"),
        periods=12,
        frequency=12,
    )
