"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from amortizer.config import settings


# ---- Request schemas ----

class ScheduleRequest(BaseModel):
    principal: Decimal = Field(..., description="Loan amount")
    annual_rate: Decimal = Field(..., description="Nominal annual rate, e.g. 0.05 for 5%")
    periods: int = Field(..., description="Number of scheduled payments")
    frequency: int = Field(12, description="Payments per year")
    extra_payment: Decimal = Decimal("0")
    rounding: str = settings.default_rounding
    decimal_places: int = settings.currency_places


# ---- Response schemas ----

class PeriodResponse(BaseModel):
    index: int
    payment_due: Decimal
    principal_due: Decimal
    interest_due: Decimal
    remaining_balance: Decimal


class SummaryResponse(BaseModel):
    period_count: int
    initial_loan_amount: Decimal
    total_principal: Decimal
    total_interest: Decimal
    total_paid: Decimal
    remaining_balance: Decimal
    principal_share: Decimal
    interest_share: Decimal


class ScheduleResponse(BaseModel):
    level_payment: Decimal
    summary: SummaryResponse
    periods: list[PeriodResponse]


class YearlyResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    debt_service: Decimal
    ending_balance: Decimal
