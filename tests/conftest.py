"""Shared factories for building ledger entities in tests."""

from datetime import date

import pytest

from fintrack.models.ledger import (
    Account,
    Investment,
    InvestmentType,
    Transaction,
    TransactionStatus,
    TransactionType,
)


TODAY = date(2024, 6, 15)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_transaction():
    def _make(
        type=TransactionType.EXPENSE,
        amount=100.0,
        status=TransactionStatus.COMPLETED,
        account_id="acc-1",
        category_id="cat-1",
        date=TODAY,
        **kwargs,
    ) -> Transaction:
        return Transaction(
            type=type,
            amount=amount,
            status=status,
            account_id=account_id,
            category_id=category_id,
            date=date,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_account():
    def _make(
        id="acc-1",
        initial_balance=0.0,
        balance=0.0,
        is_active=True,
        **kwargs,
    ) -> Account:
        return Account(
            id=id,
            name=kwargs.pop("name", f"Account {id}"),
            initial_balance=initial_balance,
            balance=balance,
            is_active=is_active,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_investment():
    def _make(
        type=InvestmentType.FIXED_INCOME,
        amount=1000.0,
        current_value=1000.0,
        is_active=True,
        **kwargs,
    ) -> Investment:
        return Investment(
            name=kwargs.pop("name", "Treasury bond"),
            type=type,
            amount=amount,
            current_value=current_value,
            purchase_date=kwargs.pop("purchase_date", date(2023, 1, 10)),
            account_id=kwargs.pop("account_id", "acc-1"),
            is_active=is_active,
            **kwargs,
        )
    return _make
