"""
Tests for the summary and monthly report builder.
"""

from datetime import date, timedelta

import pytest

from fintrack.engine.reports import build_monthly_report, build_summary, month_bounds
from fintrack.models.ledger import TransactionStatus, TransactionType


class TestMonthBounds:
    """Tests for calendar month boundaries."""

    @pytest.mark.parametrize("year,month,last", [
        (2024, 1, date(2024, 1, 31)),
        (2024, 2, date(2024, 2, 29)),
        (2023, 2, date(2023, 2, 28)),
        (2024, 4, date(2024, 4, 30)),
        (2024, 12, date(2024, 12, 31)),
    ])
    def test_first_and_last_day(self, year, month, last):
        """Test the window spans the whole month."""
        assert month_bounds(year, month) == (date(year, month, 1), last)


class TestBuildSummary:
    """Tests for the point-in-time summary."""

    def test_composes_all_totals(self, make_transaction, make_account, make_investment, today):
        """Test every summary field comes from its engine function."""
        upcoming = make_transaction(
            TransactionType.EXPENSE, 70,
            status=TransactionStatus.PENDING,
            scheduled_date=today + timedelta(days=5),
        )
        overdue = make_transaction(
            TransactionType.EXPENSE, 30,
            status=TransactionStatus.PENDING,
            date=today - timedelta(days=5),
        )
        txns = [
            make_transaction(TransactionType.INCOME, 3000),
            make_transaction(TransactionType.EXPENSE, 800),
            make_transaction(TransactionType.CARD_CHARGE, 200),
            make_transaction(TransactionType.DEBT, 1500, status=TransactionStatus.PENDING,
                             date=today - timedelta(days=60)),
            upcoming,
            overdue,
        ]
        accounts = [
            make_account(id="a", balance=1000),
            make_account(id="b", balance=500, is_active=False),
        ]
        investments = [make_investment(current_value=2500)]

        summary = build_summary(txns, accounts, investments, today=today)

        assert summary.total_balance == 1000
        assert summary.total_income == 3000
        assert summary.total_expenses == 1000
        assert summary.total_investments == 2500
        assert summary.total_debts == 1500
        assert summary.net_balance == 2000
        assert summary.upcoming_transactions == [upcoming]
        # the pending debt is past due too
        assert overdue in summary.overdue_transactions
        assert upcoming not in summary.overdue_transactions

    def test_empty_ledger(self, today):
        """Test an empty ledger yields an all-zero summary."""
        summary = build_summary([], [], [], today=today)
        assert summary.total_balance == 0
        assert summary.net_balance == 0
        assert summary.upcoming_transactions == []
        assert summary.overdue_transactions == []

    def test_is_recomputed_on_every_call(self, make_transaction, today):
        """Test two calls over the same inputs agree and share no state."""
        txns = [make_transaction(TransactionType.INCOME, 10)]
        first = build_summary(txns, [], [], today=today)
        second = build_summary(txns, [], [], today=today)
        assert first == second
        assert first is not second

    def test_horizon_is_configurable(self, make_transaction, today):
        """Test a shorter horizon excludes later transactions."""
        txn = make_transaction(
            status=TransactionStatus.PENDING,
            date=today + timedelta(days=10),
        )
        assert build_summary([txn], [], [], horizon_days=7, today=today).upcoming_transactions == []
        assert build_summary([txn], [], [], horizon_days=10, today=today).upcoming_transactions == [txn]


class TestBuildMonthlyReport:
    """Tests for the month-bounded report."""

    def test_totals_for_the_month(self, make_transaction, make_account):
        """Test only in-month completed income/expenses are totaled."""
        txns = [
            make_transaction(TransactionType.INCOME, 4000, date=date(2024, 5, 1)),
            make_transaction(TransactionType.EXPENSE, 900, date=date(2024, 5, 31)),
            make_transaction(TransactionType.CARD_CHARGE, 100, date=date(2024, 5, 20)),
            make_transaction(TransactionType.EXPENSE, 50, date=date(2024, 5, 20),
                             status=TransactionStatus.PENDING),
            make_transaction(TransactionType.INCOME, 7777, date=date(2024, 6, 1)),
            make_transaction(TransactionType.EXPENSE, 8888, date=date(2024, 4, 30)),
        ]
        report = build_monthly_report(txns, [make_account()], 5, 2024)

        assert (report.month, report.year) == (5, 2024)
        assert report.total_income == 4000
        assert report.total_expenses == 1000
        assert report.balance == 3000

    def test_category_breakdown_sums_everything_in_month(self, make_transaction):
        """Test the breakdown ignores type and status."""
        txns = [
            make_transaction(TransactionType.EXPENSE, 100, category_id="food", date=date(2024, 5, 3)),
            make_transaction(TransactionType.EXPENSE, 25, category_id="food", date=date(2024, 5, 9),
                             status=TransactionStatus.CANCELED),
            make_transaction(TransactionType.INCOME, 3000, category_id="salary", date=date(2024, 5, 5),
                             status=TransactionStatus.PENDING),
            make_transaction(TransactionType.TRANSFER, 40, category_id="moves", date=date(2024, 5, 7)),
            make_transaction(TransactionType.EXPENSE, 999, category_id="food", date=date(2024, 6, 1)),
        ]
        report = build_monthly_report(txns, [], 5, 2024)
        assert report.category_breakdown == {"food": 125, "salary": 3000, "moves": 40}

    def test_account_balances_are_current_snapshots(self, make_account):
        """Test the report carries every account's cached balance."""
        accounts = [
            make_account(id="a", balance=150),
            make_account(id="b", balance=-20, is_active=False),
        ]
        report = build_monthly_report([], accounts, 1, 2024)
        assert report.account_balances == {"a": 150, "b": -20}

    def test_december_report(self, make_transaction):
        """Test the year boundary is handled."""
        txns = [
            make_transaction(TransactionType.INCOME, 10, date=date(2024, 12, 31)),
            make_transaction(TransactionType.INCOME, 20, date=date(2025, 1, 1)),
        ]
        assert build_monthly_report(txns, [], 12, 2024).total_income == 10
