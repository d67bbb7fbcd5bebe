"""
Tests for the account reconciler.
"""

import itertools
from datetime import timedelta

from fintrack.engine.accounts import (
    projected_balance,
    reconcile_account,
    reconcile_accounts,
    signed_amount,
    total_balance,
    update_account_balance,
)
from fintrack.models.ledger import TransactionStatus, TransactionType


class TestUpdateAccountBalance:
    """Tests for recomputing a balance from the ledger."""

    def test_income_and_expense_scenario(self, make_account, make_transaction):
        """Test 1000 initial + 500 income - 200 expense = 1300."""
        account = make_account(initial_balance=1000)
        txns = [
            make_transaction(TransactionType.INCOME, 500),
            make_transaction(TransactionType.EXPENSE, 200),
        ]
        assert update_account_balance(account, txns) == 1300

    def test_sign_rule_per_type(self, make_account, make_transaction):
        """Test inflows add, outflows subtract, transfers are ignored."""
        account = make_account(initial_balance=0)
        txns = [
            make_transaction(TransactionType.INCOME, 100),
            make_transaction(TransactionType.CREDIT, 50),
            make_transaction(TransactionType.EXPENSE, 10),
            make_transaction(TransactionType.DEBT, 20),
            make_transaction(TransactionType.CARD_CHARGE, 5),
            make_transaction(TransactionType.INVESTMENT, 15),
            make_transaction(TransactionType.TRANSFER, 1000),
        ]
        assert update_account_balance(account, txns) == 100

    def test_only_completed_transactions_of_the_account(self, make_account, make_transaction):
        """Test pending, canceled and foreign transactions are skipped."""
        account = make_account(id="acc-1", initial_balance=10)
        txns = [
            make_transaction(TransactionType.INCOME, 5),
            make_transaction(TransactionType.INCOME, 7, status=TransactionStatus.PENDING),
            make_transaction(TransactionType.INCOME, 9, status=TransactionStatus.CANCELED),
            make_transaction(TransactionType.INCOME, 11, account_id="acc-2"),
        ]
        assert update_account_balance(account, txns) == 15

    def test_ignores_the_cached_balance(self, make_account, make_transaction):
        """Test a stale cached balance does not leak into the result."""
        account = make_account(initial_balance=100, balance=123456)
        txns = [make_transaction(TransactionType.EXPENSE, 40)]
        assert update_account_balance(account, txns) == 60

    def test_is_idempotent(self, make_account, make_transaction):
        """Test repeated calls give the same result and leave the account untouched."""
        account = make_account(initial_balance=250.75, balance=0)
        txns = [
            make_transaction(TransactionType.INCOME, 0.1),
            make_transaction(TransactionType.EXPENSE, 0.2),
        ]
        first = update_account_balance(account, txns)
        second = update_account_balance(account, txns)
        assert first == second
        assert account.balance == 0

    def test_signed_amount_of_transfer_is_zero(self, make_transaction):
        """Test transfers have no effect on reconciliation."""
        assert signed_amount(make_transaction(TransactionType.TRANSFER, 70)) == 0


class TestReconcileAccount:
    """Tests for producing reconciled account copies."""

    def test_returns_copy_with_ledger_balance(self, make_account, make_transaction):
        """Test the copy carries the recomputed balance."""
        account = make_account(initial_balance=1000, balance=0)
        txns = [make_transaction(TransactionType.INCOME, 500)]
        reconciled = reconcile_account(account, txns)
        assert reconciled.balance == 1500
        assert reconciled.id == account.id
        assert account.balance == 0
        assert reconciled.updated_at >= account.updated_at

    def test_consistent_account_is_returned_as_is(self, make_account):
        """Test nothing is copied when the balance already matches."""
        account = make_account(initial_balance=300, balance=300)
        assert reconcile_account(account, []) is account

    def test_reconcile_accounts_handles_each_account(self, make_account, make_transaction):
        """Test every account gets its own balance."""
        accounts = [make_account(id="a"), make_account(id="b", initial_balance=10)]
        txns = [
            make_transaction(TransactionType.INCOME, 5, account_id="a"),
            make_transaction(TransactionType.EXPENSE, 3, account_id="b"),
        ]
        result = reconcile_accounts(accounts, txns)
        assert [a.balance for a in result] == [5, 7]


class TestProjectedBalance:
    """Tests for forward projections."""

    def test_applies_upcoming_pending_transactions(self, make_account, make_transaction, today):
        """Test the projection starts from the current balance."""
        account = make_account(initial_balance=0, balance=1000)
        txns = [
            make_transaction(
                TransactionType.INCOME, 300,
                status=TransactionStatus.PENDING,
                date=today + timedelta(days=3),
            ),
            make_transaction(
                TransactionType.EXPENSE, 100,
                status=TransactionStatus.PENDING,
                date=today + timedelta(days=10),
            ),
            # beyond the horizon
            make_transaction(
                TransactionType.EXPENSE, 5000,
                status=TransactionStatus.PENDING,
                date=today + timedelta(days=45),
            ),
            # already realized, must not be applied twice
            make_transaction(TransactionType.EXPENSE, 400, date=today + timedelta(days=1)),
            # another account
            make_transaction(
                TransactionType.INCOME, 50,
                status=TransactionStatus.PENDING,
                account_id="acc-2",
                date=today + timedelta(days=1),
            ),
        ]
        assert projected_balance(account, txns, 30, today=today) == 1200

    def test_no_upcoming_transactions_keeps_balance(self, make_account, today):
        """Test an empty ledger projects the current balance."""
        account = make_account(balance=42.5)
        assert projected_balance(account, [], today=today) == 42.5


class TestTotalBalance:
    """Tests for summing account balances."""

    def test_counts_active_accounts_only(self, make_account):
        """Test inactive accounts are excluded."""
        accounts = [
            make_account(id="a", balance=100),
            make_account(id="b", balance=250.5),
            make_account(id="c", balance=9999, is_active=False),
        ]
        assert total_balance(accounts) == 350.5

    def test_order_independent(self, make_account):
        """Test every permutation of the accounts gives the same total."""
        accounts = [
            make_account(id="a", balance=0.1),
            make_account(id="b", balance=0.2),
            make_account(id="c", balance=0.3),
            make_account(id="d", balance=-1e16),
            make_account(id="e", balance=1e16),
        ]
        totals = {total_balance(p) for p in itertools.permutations(accounts)}
        assert len(totals) == 1

    def test_empty_is_zero(self):
        """Test no accounts means a zero total."""
        assert total_balance([]) == 0
