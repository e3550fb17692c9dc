"""Tests for the bank account service."""

import pytest

from pocketbook.domain.errors import ConflictError, DependencyError, NotFoundError


def test_create_bank_account(bank_account_service, user_a):
    account_id = bank_account_service.create_bank_account(user_a, name="Main Account", description="Everyday")

    account = bank_account_service.get_bank_account(user_a, account_id)
    assert account.name == "Main Account"
    assert account.description == "Everyday"
    assert account.owner_id == user_a.user_id


def test_duplicate_name_conflicts(bank_account_service, user_a, reference_data):
    with pytest.raises(ConflictError, match="Bank account 'Main Account' already exists"):
        bank_account_service.create_bank_account(user_a, name="Main Account")


def test_list_reports_usage(bank_account_service, transaction_service, user_a, reference_data):
    spare = bank_account_service.create_bank_account(user_a, name="Spare")
    transaction_service.create_transaction(
        user_a, kind="spend", date="2024-01-01", amount=5, bank_account_id=reference_data["Main Account"]
    )

    usage = {a.name: a.in_use_count for a in bank_account_service.list_bank_accounts(user_a)}
    assert usage == {"Main Account": 1, "Spare": 0}
    assert bank_account_service.get_bank_account(user_a, spare).in_use_count == 0


def test_rename(bank_account_service, user_a, reference_data):
    bank_account_service.update_bank_account(user_a, reference_data["Main Account"], name="Checking")

    assert bank_account_service.get_bank_account_by_name(user_a, "Checking") is not None
    assert bank_account_service.get_bank_account_by_name(user_a, "Main Account") is None


def test_rename_to_own_name_is_allowed(bank_account_service, user_a, reference_data):
    bank_account_service.update_bank_account(user_a, reference_data["Main Account"], name="Main Account")


def test_delete_guard(bank_account_service, transaction_service, user_a, reference_data):
    account_id = reference_data["Main Account"]
    txn_id = transaction_service.create_transaction(
        user_a, kind="earn", date="2024-01-01", amount=100, bank_account_id=account_id
    )

    with pytest.raises(DependencyError, match="Bank account is in use by 1 transaction"):
        bank_account_service.delete_bank_account(user_a, account_id)

    transaction_service.delete_transaction(user_a, txn_id)
    bank_account_service.delete_bank_account(user_a, account_id)
    assert bank_account_service.list_bank_accounts(user_a) == []


def test_foreign_account_behaves_as_missing(bank_account_service, user_a, user_b, reference_data):
    account_id = reference_data["Main Account"]

    assert bank_account_service.get_bank_account(user_b, account_id) is None
    with pytest.raises(NotFoundError, match=f"Bank account {account_id} not found"):
        bank_account_service.update_bank_account(user_b, account_id, name="Mine")
    with pytest.raises(NotFoundError):
        bank_account_service.delete_bank_account(user_b, account_id)
