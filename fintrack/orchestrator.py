"""
Ledger Service for Fintrack

This module ties storage, the computation engine and the audit trail
together. It is the single writer of the ledger: every mutation goes
through it, is persisted, and is followed by reconciliation of the
affected accounts.

DESIGN DECISION: The service enforces the balance invariant:
- An account's cached balance always equals its initial balance plus
  its completed transactions once a mutation returns
- Deleting an account or category that transactions still reference
  is refused
- Every mutation is audited

The engine itself guarantees correctness only at the instant of
computation. Sequencing, i.e. re-running reconciliation after each
write, is this module's job.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel

from fintrack.audit import AuditLogger, get_logger
from fintrack.config import AppSettings, EngineSettings, Settings, get_settings
from fintrack.engine import (
    build_monthly_report,
    build_summary,
    investment_future_value,
    projected_balance,
    reconcile_account,
)
from fintrack.models.ledger import (
    Account,
    Category,
    CreditCard,
    Investment,
    Transaction,
)
from fintrack.models.query import SortOptions, TransactionFilters
from fintrack.models.reports import FinancialSummary, MonthlyReport
from fintrack.queries import query_transactions
from fintrack.services.storage import (
    EntityType,
    DuplicateError,
    JsonFileAuditStorage,
    JsonFileStorage,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)


class LedgerIntegrityError(Exception):
    """A mutation would leave transactions pointing at a missing entity."""
    pass


# Names used in audit events
_ENTITY_NAMES = {
    EntityType.TRANSACTIONS: "transaction",
    EntityType.ACCOUNTS: "account",
    EntityType.CATEGORIES: "category",
    EntityType.INVESTMENTS: "investment",
    EntityType.CREDIT_CARDS: "credit_card",
}


def _touch(record: BaseModel) -> BaseModel:
    """Stamp ``updated_at`` on records that carry one."""
    if "updated_at" in type(record).model_fields:
        return record.model_copy(update={"updated_at": datetime.now(timezone.utc)})
    return record


class LedgerService:
    """
    Holds the loaded ledger and sequences every change to it.

    Flow for a transaction mutation:
    1. Build the new collection and reconcile every account it touches
    2. Persist transactions and accounts together
    3. Swap the in-memory collections
    4. Audit
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        engine_settings: Optional[EngineSettings] = None,
        app_settings: Optional[AppSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._engine_settings = engine_settings or EngineSettings()
        self._app_settings = app_settings or AppSettings()
        self._audit_logger = audit_logger or AuditLogger()
        self._logger = get_logger(__name__)
        self._collections: dict[EntityType, list] = {
            entity_type: [] for entity_type in EntityType
        }

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._collections[EntityType.TRANSACTIONS])

    @property
    def accounts(self) -> tuple[Account, ...]:
        return tuple(self._collections[EntityType.ACCOUNTS])

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._collections[EntityType.CATEGORIES])

    @property
    def investments(self) -> tuple[Investment, ...]:
        return tuple(self._collections[EntityType.INVESTMENTS])

    @property
    def credit_cards(self) -> tuple[CreditCard, ...]:
        return tuple(self._collections[EntityType.CREDIT_CARDS])

    def get_account(self, account_id: str) -> Account:
        return self._find(EntityType.ACCOUNTS, account_id)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """
        Load every collection from storage and restore the balance invariant.

        Seeds the configured default categories into an empty ledger and
        saves accounts back when reconciliation changed any balance. The
        loaded ledger replaces the current one only after every storage
        call succeeded; on failure the service keeps its previous state.
        """
        try:
            loaded = {
                entity_type: self._storage.load_collection(entity_type)
                for entity_type in EntityType
            }

            seeded = not loaded[EntityType.CATEGORIES]
            if seeded:
                loaded[EntityType.CATEGORIES] = list(self._app_settings.default_categories)
                self._storage.save_collection(
                    EntityType.CATEGORIES, loaded[EntityType.CATEGORIES]
                )

            accounts = loaded[EntityType.ACCOUNTS]
            reconciled = [
                reconcile_account(a, loaded[EntityType.TRANSACTIONS]) for a in accounts
            ]
            changed = [(old, new) for old, new in zip(accounts, reconciled) if new is not old]
            if changed:
                self._storage.save_collection(EntityType.ACCOUNTS, reconciled)
                loaded[EntityType.ACCOUNTS] = reconciled
        except StorageError as e:
            self._audit_logger.log_storage_error("load", str(e))
            raise

        self._collections = loaded
        if seeded:
            self._logger.info("default_categories_seeded", count=len(loaded[EntityType.CATEGORIES]))
        for old, new in changed:
            self._audit_logger.log_account_reconciled(new.id, old.balance, new.balance)
        self._audit_logger.log_ledger_loaded({
            entity_type.value: len(records)
            for entity_type, records in self._collections.items()
        })

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(self, transaction: Transaction) -> Transaction:
        """
        Raises:
            DuplicateError: If a transaction with this id is already booked
        """
        if any(t.id == transaction.id for t in self._collections[EntityType.TRANSACTIONS]):
            raise DuplicateError(f"transaction already exists: {transaction.id}")
        self._commit_transactions(
            "add_transaction",
            [*self._collections[EntityType.TRANSACTIONS], transaction],
            {transaction.account_id},
        )
        self._audit_logger.log_entity_changed("transaction", "added", transaction.id)
        return transaction

    def update_transaction(self, transaction: Transaction) -> Transaction:
        """
        Replace a transaction and reconcile both its old and new account.

        Raises:
            NotFoundError: If no transaction has this id
        """
        previous = self._find(EntityType.TRANSACTIONS, transaction.id)
        updated = _touch(transaction)
        self._commit_transactions(
            "update_transaction",
            [
                updated if t.id == updated.id else t
                for t in self._collections[EntityType.TRANSACTIONS]
            ],
            {previous.account_id, updated.account_id},
        )
        self._audit_logger.log_entity_changed("transaction", "updated", updated.id)
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        transaction = self._find(EntityType.TRANSACTIONS, transaction_id)
        self._commit_transactions(
            "delete_transaction",
            [t for t in self._collections[EntityType.TRANSACTIONS] if t.id != transaction_id],
            {transaction.account_id},
        )
        self._audit_logger.log_entity_changed("transaction", "deleted", transaction_id)

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def add_account(self, account: Account) -> Account:
        """Add an account with its balance reconciled against the ledger."""
        account = reconcile_account(account, self._collections[EntityType.TRANSACTIONS])
        return self._add(EntityType.ACCOUNTS, account)

    def update_account(self, account: Account) -> Account:
        account = reconcile_account(account, self._collections[EntityType.TRANSACTIONS])
        return self._update(EntityType.ACCOUNTS, account)

    def delete_account(self, account_id: str) -> None:
        """
        Raises:
            LedgerIntegrityError: If transactions are posted to the account
        """
        self._find(EntityType.ACCOUNTS, account_id)
        if any(t.account_id == account_id for t in self._collections[EntityType.TRANSACTIONS]):
            raise LedgerIntegrityError(
                f"Cannot delete account {account_id}: transactions are posted to it"
            )
        self._delete(EntityType.ACCOUNTS, account_id)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(self, category: Category) -> Category:
        return self._add(EntityType.CATEGORIES, category)

    def update_category(self, category: Category) -> Category:
        return self._update(EntityType.CATEGORIES, category)

    def delete_category(self, category_id: str) -> None:
        """
        Raises:
            LedgerIntegrityError: If transactions use the category
        """
        self._find(EntityType.CATEGORIES, category_id)
        if any(t.category_id == category_id for t in self._collections[EntityType.TRANSACTIONS]):
            raise LedgerIntegrityError(
                f"Cannot delete category {category_id}: transactions use it"
            )
        self._delete(EntityType.CATEGORIES, category_id)

    # -------------------------------------------------------------------------
    # Investments and credit cards
    # -------------------------------------------------------------------------

    def add_investment(self, investment: Investment) -> Investment:
        return self._add(EntityType.INVESTMENTS, investment)

    def update_investment(self, investment: Investment) -> Investment:
        return self._update(EntityType.INVESTMENTS, investment)

    def delete_investment(self, investment_id: str) -> None:
        self._find(EntityType.INVESTMENTS, investment_id)
        self._delete(EntityType.INVESTMENTS, investment_id)

    def add_credit_card(self, card: CreditCard) -> CreditCard:
        return self._add(EntityType.CREDIT_CARDS, card)

    def update_credit_card(self, card: CreditCard) -> CreditCard:
        return self._update(EntityType.CREDIT_CARDS, card)

    def delete_credit_card(self, card_id: str) -> None:
        self._find(EntityType.CREDIT_CARDS, card_id)
        self._delete(EntityType.CREDIT_CARDS, card_id)

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    def summary(self, today: Optional[date] = None) -> FinancialSummary:
        return build_summary(
            self._collections[EntityType.TRANSACTIONS],
            self._collections[EntityType.ACCOUNTS],
            self._collections[EntityType.INVESTMENTS],
            horizon_days=self._engine_settings.upcoming_horizon_days,
            today=today,
        )

    def monthly_report(self, month: int, year: int) -> MonthlyReport:
        return build_monthly_report(
            self._collections[EntityType.TRANSACTIONS],
            self._collections[EntityType.ACCOUNTS],
            month,
            year,
        )

    def projected_balance(
        self,
        account_id: str,
        days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> float:
        if days is None:
            days = self._engine_settings.upcoming_horizon_days
        return projected_balance(
            self.get_account(account_id),
            self._collections[EntityType.TRANSACTIONS],
            days,
            today,
        )

    def investment_projection(self, investment_id: str, months: float) -> float:
        return investment_future_value(
            self._find(EntityType.INVESTMENTS, investment_id),
            months,
            self._engine_settings.compounding_frequency,
        )

    def query_transactions(
        self,
        filters: Optional[TransactionFilters] = None,
        sort: Optional[SortOptions] = None,
        search: Optional[str] = None,
    ) -> list[Transaction]:
        return query_transactions(
            self._collections[EntityType.TRANSACTIONS],
            filters=filters,
            sort=sort,
            search=search,
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _find(self, entity_type: EntityType, record_id: str):
        for record in self._collections[entity_type]:
            if record.id == record_id:
                return record
        raise NotFoundError(f"{_ENTITY_NAMES[entity_type]} not found: {record_id}")

    def _add(self, entity_type: EntityType, record: BaseModel):
        try:
            self._storage.add_record(entity_type, record)
        except StorageError as e:
            self._audit_logger.log_storage_error(f"add_{_ENTITY_NAMES[entity_type]}", str(e))
            raise
        self._collections[entity_type].append(record)
        self._audit_logger.log_entity_changed(_ENTITY_NAMES[entity_type], "added", record.id)
        return record

    def _update(self, entity_type: EntityType, record: BaseModel):
        self._find(entity_type, record.id)
        record = _touch(record)
        try:
            self._storage.update_record(entity_type, record)
        except StorageError as e:
            self._audit_logger.log_storage_error(f"update_{_ENTITY_NAMES[entity_type]}", str(e))
            raise
        self._collections[entity_type] = [
            record if existing.id == record.id else existing
            for existing in self._collections[entity_type]
        ]
        self._audit_logger.log_entity_changed(_ENTITY_NAMES[entity_type], "updated", record.id)
        return record

    def _delete(self, entity_type: EntityType, record_id: str) -> None:
        try:
            self._storage.delete_record(entity_type, record_id)
        except StorageError as e:
            self._audit_logger.log_storage_error(f"delete_{_ENTITY_NAMES[entity_type]}", str(e))
            raise
        self._collections[entity_type] = [
            r for r in self._collections[entity_type] if r.id != record_id
        ]
        self._audit_logger.log_entity_changed(_ENTITY_NAMES[entity_type], "deleted", record_id)

    def _commit_transactions(
        self,
        operation: str,
        transactions: list[Transaction],
        account_ids: set[str],
    ) -> None:
        """
        Persist a new transaction collection with the accounts it rebalances.

        Flow:
        1. Reconcile the given accounts against the new collection
        2. Save the transactions, then the changed accounts
        3. If the accounts cannot be saved, put the previous transactions back
        4. Only then swap the in-memory collections

        Either both collections change or neither does.
        """
        previous = self._collections[EntityType.TRANSACTIONS]
        accounts = self._collections[EntityType.ACCOUNTS]
        reconciled = [
            reconcile_account(a, transactions) if a.id in account_ids else a
            for a in accounts
        ]
        changed = [(old, new) for old, new in zip(accounts, reconciled) if new is not old]

        try:
            self._storage.save_collection(EntityType.TRANSACTIONS, transactions)
            if changed:
                try:
                    self._storage.save_collection(EntityType.ACCOUNTS, reconciled)
                except StorageError:
                    self._storage.save_collection(EntityType.TRANSACTIONS, previous)
                    raise
        except StorageError as e:
            self._audit_logger.log_storage_error(operation, str(e))
            raise

        self._collections[EntityType.TRANSACTIONS] = transactions
        self._collections[EntityType.ACCOUNTS] = reconciled
        for old, new in changed:
            self._audit_logger.log_account_reconciled(new.id, old.balance, new.balance)


def create_app_components(settings: Optional[Settings] = None) -> LedgerService:
    """
    Factory function to create the ledger service from configuration.

    Returns:
        A loaded ledger service backed by JSON file storage
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app

    if app_settings.debug_mode:
        logging.getLogger("fintrack").setLevel(logging.DEBUG)

    storage = JsonFileStorage(storage_settings.data_dir)
    audit_storage = JsonFileAuditStorage(
        storage_settings.data_dir / storage_settings.audit_file_name
    )

    service = LedgerService(
        storage=storage,
        engine_settings=settings.engine,
        app_settings=app_settings,
        audit_logger=AuditLogger(audit_storage),
    )
    service.load()
    return service
