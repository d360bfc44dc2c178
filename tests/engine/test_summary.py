from dataclasses import replace
from decimal import Decimal, localcontext

import pytest

from amortizer.engine.schedule import generate_schedule, level_payment
from amortizer.engine.summary import (
    derive_initial_loan_amount,
    summarize_schedule,
    yearly_summary,
)
from amortizer.models.loan import LoanTerms, Period


class TestSummarizeSchedule:
    def test_totals(self, one_year_terms):
        periods = generate_schedule(one_year_terms)
        summary = summarize_schedule(periods, principal=one_year_terms.principal)
        assert summary.period_count == 12
        assert summary.total_principal == Decimal("1000.00")
        assert summary.total_interest == sum(p.interest_due for p in periods)
        assert summary.total_paid == sum(p.payment_due for p in periods)
        assert summary.remaining_balance == 0

    def test_totals_exact_beyond_context_precision(self, one_year_terms):
        terms = replace(one_year_terms, decimal_places=30)
        periods = generate_schedule(terms)
        with localcontext() as ctx:
            ctx.prec = 10
            summary = summarize_schedule(periods, principal=terms.principal)
            yearly = yearly_summary(periods)
        assert summary.total_principal == terms.principal
        assert summary.remaining_balance == 0
        assert yearly[0]["principal"] == terms.principal

    def test_derives_loan_amount_without_principal(self, mortgage_terms):
        periods = generate_schedule(mortgage_terms)
        summary = summarize_schedule(periods)
        assert summary.initial_loan_amount == Decimal("400000")
        assert summary.remaining_balance == 0

    def test_partial_schedule_remaining_balance(self, mortgage_terms):
        periods = generate_schedule(mortgage_terms)[:84]
        summary = summarize_schedule(periods, principal=mortgage_terms.principal)
        assert summary.remaining_balance == periods[-1].remaining_balance

    def test_shares(self, mortgage_terms):
        summary = summarize_schedule(generate_schedule(mortgage_terms))
        # Over 30 years at 7%, interest exceeds principal
        assert summary.interest_share > summary.principal_share
        assert abs(summary.principal_share + summary.interest_share - 1) <= Decimal("0.0001")

    def test_empty_schedule(self):
        summary = summarize_schedule(())
        assert summary.period_count == 0
        assert summary.total_paid == 0
        assert summary.principal_share == 0

    def test_empty_schedule_keeps_principal(self):
        summary = summarize_schedule((), principal=Decimal("500"))
        assert summary.initial_loan_amount == Decimal("500")
        assert summary.remaining_balance == Decimal("500")


class TestDeriveInitialLoanAmount:
    def test_first_period(self, one_year_terms):
        periods = generate_schedule(one_year_terms)
        assert derive_initial_loan_amount(periods) == one_year_terms.principal

    def test_hand_built_period(self):
        period = Period(
            index=1,
            payment_due=Decimal("88.85"),
            principal_due=Decimal("78.85"),
            interest_due=Decimal("10.00"),
            remaining_balance=Decimal("921.15"),
        )
        assert derive_initial_loan_amount([period]) == Decimal("1000.00")

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            derive_initial_loan_amount([])


class TestYearlySummary:
    def test_thirty_years(self, mortgage_terms):
        yearly = yearly_summary(generate_schedule(mortgage_terms), mortgage_terms.frequency)
        assert len(yearly) == 30
        assert yearly[-1]["ending_balance"] == 0

    def test_yearly_totals_match(self, mortgage_terms):
        periods = generate_schedule(mortgage_terms)
        yearly = yearly_summary(periods)
        summary = summarize_schedule(periods)
        assert sum(y["interest"] for y in yearly) == summary.total_interest
        assert sum(y["principal"] for y in yearly) == summary.total_principal

    def test_debt_service_equals_12_payments(self, mortgage_terms):
        periods = generate_schedule(mortgage_terms)
        pmt = level_payment(mortgage_terms)
        # The final year carries the residual correction
        for y in yearly_summary(periods)[:-1]:
            assert y["debt_service"] == pmt * 12

    def test_partial_final_year(self, one_year_terms):
        terms = replace(one_year_terms, periods=18)
        yearly = yearly_summary(generate_schedule(terms), terms.frequency)
        assert [y["year"] for y in yearly] == [1, 2]
        assert yearly[1]["ending_balance"] == 0

    def test_quarterly(self):
        terms = LoanTerms(principal=Decimal("10000"), annual_rate=Decimal("0.08"), periods=8, frequency=4)
        yearly = yearly_summary(generate_schedule(terms), terms.frequency)
        assert len(yearly) == 2

    def test_invalid_frequency(self):
        with pytest.raises(ValueError):
            yearly_summary([], 0)
