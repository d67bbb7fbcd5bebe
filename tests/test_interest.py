"""
Tests for the interest and amortization calculator.
"""

import pytest

from fintrack.engine.interest import (
    compound_interest,
    future_value,
    installment_payment,
    present_value,
    remaining_balance,
    simple_interest,
)


class TestSimpleAndCompoundInterest:
    """Tests for the closed-form interest formulas."""

    def test_simple_interest(self):
        """Test 10% a year for two years on 1000."""
        assert simple_interest(1000, 10, 2) == pytest.approx(200.0)

    def test_compound_interest_annual(self):
        """Test yearly compounding matches the textbook value."""
        assert compound_interest(1000, 10, 2, frequency=1) == pytest.approx(210.0)

    def test_compound_interest_defaults_to_monthly(self):
        """Test the default frequency is twelve periods a year."""
        expected = 1000 * (1 + 0.12 / 12) ** 12 - 1000
        assert compound_interest(1000, 12, 1) == pytest.approx(expected)

    def test_future_value_is_principal_plus_interest(self):
        """Test future value equals principal plus compound interest."""
        assert future_value(5000, 8, 3) == pytest.approx(5000 + compound_interest(5000, 8, 3))

    def test_present_value_inverts_future_value(self):
        """Test discounting a future value recovers the principal."""
        fv = future_value(2500, 6, 4, frequency=4)
        assert present_value(fv, 6, 4, frequency=4) == pytest.approx(2500)

    def test_zero_rate_leaves_principal_unchanged(self):
        """Test a zero rate earns nothing."""
        assert compound_interest(1000, 0, 5) == 0
        assert future_value(1000, 0, 5) == 1000


class TestInstallmentPayment:
    """Tests for the Price-system installment."""

    @pytest.mark.parametrize("principal,periods", [(1200, 12), (999.99, 7), (50000, 360)])
    def test_zero_rate_is_straight_division(self, principal, periods):
        """Test a zero rate divides the principal evenly."""
        assert installment_payment(principal, 0, periods) == principal / periods

    def test_interest_inflates_payment(self):
        """Test 24% a year over 12 months costs more than 1000 a month."""
        payment = installment_payment(12000, 24, 12)
        assert payment > 1000
        assert payment == pytest.approx(1134.72, abs=0.01)

    def test_payments_amortize_the_loan(self):
        """Test the installment pays the loan off exactly at its own rate."""
        principal, rate, periods = 10000, 18, 24
        payment = installment_payment(principal, rate, periods)
        monthly_rate = rate / 100 / 12
        balance = principal
        for _ in range(periods):
            balance -= payment - balance * monthly_rate
        assert balance == pytest.approx(0, abs=1e-6)


class TestRemainingBalance:
    """Tests for the schedule walk."""

    def test_nothing_paid_returns_principal(self):
        """Test no paid periods leaves the full principal."""
        assert remaining_balance(12000, 2, 12, 0) == 12000

    @pytest.mark.parametrize("rate", [0, 0.5, 2, 3.5])
    def test_fully_paid_returns_zero(self, rate):
        """Test a fully paid loan has nothing outstanding."""
        assert remaining_balance(12000, rate, 12, 12) == 0

    def test_zero_rate_is_straight_line(self):
        """Test a zero rate reduces the balance linearly."""
        assert remaining_balance(1200, 0, 12, 3) == pytest.approx(900)

    def test_first_period_follows_installment(self):
        """Test one step subtracts the installment minus that period's interest."""
        installment = installment_payment(12000, 2 * 12, 12)
        interest = 12000 * (2 / 100 / 12)
        expected = 12000 - (installment - interest)
        assert remaining_balance(12000, 2, 12, 1) == pytest.approx(expected)

    def test_balance_decreases_monotonically(self):
        """Test each paid period lowers the outstanding balance."""
        balances = [remaining_balance(5000, 1.5, 10, k) for k in range(11)]
        assert all(a >= b for a, b in zip(balances, balances[1:]))

    def test_never_negative(self):
        """Test the balance is clamped at zero."""
        assert remaining_balance(5000, 3, 10, 10) >= 0
