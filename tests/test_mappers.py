"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from pocketbook.database.models import (
    User as ORMUser,
    Category as ORMCategory,
    BankAccount as ORMBankAccount,
    Tag as ORMTag,
    Transaction as ORMTransaction,
)
from pocketbook.database.mappers import (
    user_to_domain,
    category_to_domain,
    bank_account_to_domain,
    tag_to_domain,
    transaction_to_domain,
)
from pocketbook.domain.entities import BankAccount, Category, Tag, Transaction, TransactionKind, User

NOW = datetime(2024, 1, 5, 12, 0, tzinfo=UTC)


class TestUserMapper:
    def test_user_to_domain_drops_password_hash(self):
        orm_user = ORMUser(id=1, email="alice@example.com", password_hash="secret", created_at=NOW)

        user = user_to_domain(orm_user)

        assert user == User(id=1, email="alice@example.com", created_at=NOW)
        assert not hasattr(user, "password_hash")


class TestReferenceDataMappers:
    """Tests for category, bank account and tag mappers."""

    def test_category_to_domain(self):
        orm_category = ORMCategory(
            id=3, user_id=1, kind="earn", name="Salary", description=None, created_at=NOW, updated_at=NOW
        )

        category = category_to_domain(orm_category, in_use_count=2)

        assert isinstance(category, Category)
        assert category.kind == TransactionKind.EARN
        assert category.owner_id == 1
        assert category.name == "Salary"
        assert category.in_use_count == 2

    def test_bank_account_to_domain(self):
        orm_account = ORMBankAccount(
            id=4, user_id=1, name="Main Account", description="Everyday", created_at=NOW, updated_at=NOW
        )

        account = bank_account_to_domain(orm_account)

        assert isinstance(account, BankAccount)
        assert account.description == "Everyday"
        assert account.in_use_count == 0

    def test_tag_to_domain(self):
        tag = tag_to_domain(ORMTag(id=5, user_id=2, name="travel", created_at=NOW, updated_at=NOW), 7)

        assert isinstance(tag, Tag)
        assert (tag.id, tag.owner_id, tag.name, tag.in_use_count) == (5, 2, "travel", 7)


class TestTransactionMapper:
    def test_transaction_to_domain(self):
        orm_transaction = ORMTransaction(
            id=10,
            user_id=1,
            date=date(2024, 1, 5),
            kind="spend",
            amount=Decimal("45.67"),
            category_id=3,
            bank_account_id=4,
            notes="Weekly shop",
            created_at=NOW,
            updated_at=NOW,
        )
        orm_transaction.category = ORMCategory(id=3, user_id=1, kind="spend", name="Groceries")
        orm_transaction.bank_account = ORMBankAccount(id=4, user_id=1, name="Main Account")
        orm_transaction.tags = [ORMTag(id=6, user_id=1, name="monthly"), ORMTag(id=5, user_id=1, name="essentials")]

        txn = transaction_to_domain(orm_transaction)

        assert isinstance(txn, Transaction)
        assert txn.kind == TransactionKind.SPEND
        assert txn.amount == Decimal("45.67")
        assert txn.category_name == "Groceries"
        assert txn.bank_account_name == "Main Account"
        assert txn.tag_ids == frozenset({5, 6})
        assert txn.tags == ("essentials", "monthly")

    def test_transaction_without_references(self):
        orm_transaction = ORMTransaction(
            id=11, user_id=1, date=date(2024, 2, 1), kind="save", amount=Decimal("250.00")
        )

        txn = transaction_to_domain(orm_transaction)

        assert txn.category_id is None
        assert txn.category_name is None
        assert txn.bank_account_name is None
        assert txn.tag_ids == frozenset()
        assert txn.tags == ()
