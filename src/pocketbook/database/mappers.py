"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain never sees ORM rows.
"""

from pocketbook.domain import entities as domain
from pocketbook.database.models import (
    User as ORMUser,
    Category as ORMCategory,
    BankAccount as ORMBankAccount,
    Tag as ORMTag,
    Transaction as ORMTransaction,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        created_at=orm_user.created_at,
    )


def category_to_domain(orm_category: ORMCategory, in_use_count: int = 0) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        owner_id=orm_category.user_id,
        kind=domain.TransactionKind(orm_category.kind),
        name=orm_category.name,
        description=orm_category.description,
        created_at=orm_category.created_at,
        updated_at=orm_category.updated_at,
        in_use_count=in_use_count,
    )


def bank_account_to_domain(orm_account: ORMBankAccount, in_use_count: int = 0) -> domain.BankAccount:
    """Convert SQLAlchemy BankAccount model to domain BankAccount entity."""
    return domain.BankAccount(
        id=orm_account.id,
        owner_id=orm_account.user_id,
        name=orm_account.name,
        description=orm_account.description,
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
        in_use_count=in_use_count,
    )


def tag_to_domain(orm_tag: ORMTag, in_use_count: int = 0) -> domain.Tag:
    """Convert SQLAlchemy Tag model to domain Tag entity."""
    return domain.Tag(
        id=orm_tag.id,
        owner_id=orm_tag.user_id,
        name=orm_tag.name,
        description=orm_tag.description,
        created_at=orm_tag.created_at,
        updated_at=orm_tag.updated_at,
        in_use_count=in_use_count,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    category = orm_transaction.category
    bank_account = orm_transaction.bank_account
    return domain.Transaction(
        id=orm_transaction.id,
        owner_id=orm_transaction.user_id,
        date=orm_transaction.date,
        kind=domain.TransactionKind(orm_transaction.kind),
        amount=orm_transaction.amount,
        category_id=orm_transaction.category_id,
        bank_account_id=orm_transaction.bank_account_id,
        tag_ids=frozenset(tag.id for tag in orm_transaction.tags),
        notes=orm_transaction.notes,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
        category_name=category.name if category is not None else None,
        bank_account_name=bank_account.name if bank_account is not None else None,
        tags=tuple(sorted(tag.name for tag in orm_transaction.tags)),
    )
