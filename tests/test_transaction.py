"""Tests for the transaction service."""

import pytest
from datetime import date
from decimal import Decimal

from pocketbook.domain.entities import TransactionFilter, TransactionKind
from pocketbook.domain.errors import NotFoundError, ValidationError


@pytest.fixture
def sample_transactions(transaction_service, user_a, reference_data):
    """Five transactions across two months, kinds and tags."""
    create = transaction_service.create_transaction
    return [
        create(user_a, kind="spend", date="2024-01-05", amount="45.67", category_id=reference_data["Groceries"],
               bank_account_id=reference_data["Main Account"], tag_ids=[reference_data["essentials"]]),
        create(user_a, kind="spend", date="2024-01-20", amount=12, category_id=reference_data["Groceries"],
               tag_ids=[reference_data["essentials"], reference_data["monthly"]]),
        create(user_a, kind="earn", date="2024-01-31", amount=3000, category_id=reference_data["Salary"],
               bank_account_id=reference_data["Main Account"], tag_ids=[reference_data["monthly"]]),
        create(user_a, kind="save", date="2024-02-01", amount="250.00", category_id=reference_data["Savings"]),
        create(user_a, kind="spend", date="2024-02-14", amount=30.5, notes="Flowers"),
    ]


class TestCreateTransaction:
    def test_create_and_get(self, transaction_service, user_a, reference_data):
        txn_id = transaction_service.create_transaction(
            user_a,
            kind="spend",
            date=date(2024, 1, 5),
            amount=Decimal("45.67"),
            category_id=reference_data["Groceries"],
            bank_account_id=reference_data["Main Account"],
            tag_ids=[reference_data["monthly"], reference_data["essentials"]],
            notes="  Weekly shop ",
        )

        txn = transaction_service.get_transaction(user_a, txn_id)
        assert txn.kind == TransactionKind.SPEND
        assert txn.date == date(2024, 1, 5)
        assert txn.amount == Decimal("45.67")
        assert txn.category_name == "Groceries"
        assert txn.bank_account_name == "Main Account"
        assert txn.tags == ("essentials", "monthly")
        assert txn.tag_ids == frozenset({reference_data["monthly"], reference_data["essentials"]})
        assert txn.notes == "Weekly shop"

    def test_minimal_transaction(self, transaction_service, user_a):
        txn_id = transaction_service.create_transaction(user_a, kind="earn", date="2024-03-01", amount=0)

        txn = transaction_service.get_transaction(user_a, txn_id)
        assert txn.category_id is None
        assert txn.tags == ()
        assert txn.amount == Decimal("0.00")

    def test_category_kind_must_match(self, transaction_service, user_a, reference_data):
        with pytest.raises(ValidationError, match="has type earn"):
            transaction_service.create_transaction(
                user_a, kind="spend", date="2024-01-01", amount=1, category_id=reference_data["Salary"]
            )

    @pytest.mark.parametrize(
        "field,value,message",
        [
            ("amount", -1, "must not be negative"),
            ("amount", "1.005", "2 decimal places"),
            ("date", "2024-02-30", "Invalid date"),
            ("date", "yesterday", "expected YYYY-MM-DD"),
            ("kind", "transfer", "must be one of"),
        ],
    )
    def test_rejects_invalid_fields(self, transaction_service, user_a, field, value, message):
        values = {"kind": "spend", "date": "2024-01-01", "amount": 1}
        values[field] = value

        with pytest.raises(ValidationError, match=message):
            transaction_service.create_transaction(user_a, **values)

    def test_rejects_foreign_references(self, transaction_service, user_a, user_b, reference_data):
        with pytest.raises(NotFoundError, match="Category"):
            transaction_service.create_transaction(
                user_b, kind="spend", date="2024-01-01", amount=1, category_id=reference_data["Groceries"]
            )
        with pytest.raises(NotFoundError, match="Bank account"):
            transaction_service.create_transaction(
                user_b, kind="spend", date="2024-01-01", amount=1, bank_account_id=reference_data["Main Account"]
            )
        with pytest.raises(NotFoundError, match="Tag"):
            transaction_service.create_transaction(
                user_b, kind="spend", date="2024-01-01", amount=1, tag_ids=[reference_data["essentials"]]
            )


class TestListTransactions:
    def test_default_order_is_newest_first(self, transaction_service, user_a, sample_transactions):
        transactions = transaction_service.list_transactions(user_a)

        assert [t.id for t in transactions] == list(reversed(sample_transactions))

    def test_date_range_and_kind(self, transaction_service, user_a, sample_transactions):
        filters = TransactionFilter(
            start_date=date(2024, 1, 1), end_date=date(2024, 1, 31), kind=TransactionKind.SPEND
        )

        assert [t.id for t in transaction_service.list_transactions(user_a, filters)] == [
            sample_transactions[1],
            sample_transactions[0],
        ]

    def test_reference_filters(self, transaction_service, user_a, reference_data, sample_transactions):
        by_category = TransactionFilter(category_id=reference_data["Groceries"])
        by_account = TransactionFilter(bank_account_id=reference_data["Main Account"])

        assert len(transaction_service.list_transactions(user_a, by_category)) == 2
        assert len(transaction_service.list_transactions(user_a, by_account)) == 2

    def test_tag_filters(self, transaction_service, user_a, sample_transactions):
        any_tag = TransactionFilter(tags_any=("essentials", "monthly"))
        all_tags = TransactionFilter(tags_all=("essentials", "monthly"))

        assert len(transaction_service.list_transactions(user_a, any_tag)) == 3
        assert [t.id for t in transaction_service.list_transactions(user_a, all_tags)] == [sample_transactions[1]]

    def test_ordering_and_paging(self, transaction_service, user_a, sample_transactions):
        filters = TransactionFilter(order_by="amount", descending=False, limit=2, offset=1)

        amounts = [t.amount for t in transaction_service.list_transactions(user_a, filters)]
        assert amounts == [Decimal("30.50"), Decimal("45.67")]

    def test_rejects_unknown_order_column(self, transaction_service, user_a):
        with pytest.raises(ValidationError, match="Cannot order by 'notes'"):
            transaction_service.list_transactions(user_a, TransactionFilter(order_by="notes"))

    def test_sum_uses_filters(self, transaction_service, user_a, sample_transactions):
        spend = TransactionFilter(kind=TransactionKind.SPEND)

        assert transaction_service.sum_amount(user_a, spend) == Decimal("88.17")
        assert transaction_service.sum_amount(user_a) == Decimal("3338.17")
        assert transaction_service.sum_amount(user_a, TransactionFilter(start_date=date(2025, 1, 1))) == Decimal("0")

    def test_isolation(self, transaction_service, user_a, user_b, sample_transactions):
        assert transaction_service.list_transactions(user_b) == []
        assert transaction_service.sum_amount(user_b) == Decimal("0")
        assert transaction_service.get_transaction(user_b, sample_transactions[0]) is None


class TestUpdateTransaction:
    def test_update_fields(self, transaction_service, user_a, reference_data, sample_transactions):
        txn_id = sample_transactions[4]

        transaction_service.update_transaction(
            user_a,
            txn_id,
            amount="31.00",
            date="2024-02-15",
            category_id=reference_data["Groceries"],
            tag_ids=[reference_data["monthly"]],
            notes="Roses",
        )

        txn = transaction_service.get_transaction(user_a, txn_id)
        assert txn.amount == Decimal("31.00")
        assert txn.date == date(2024, 2, 15)
        assert txn.category_name == "Groceries"
        assert txn.tags == ("monthly",)
        assert txn.notes == "Roses"

    def test_clear_references(self, transaction_service, user_a, sample_transactions):
        txn_id = sample_transactions[0]

        transaction_service.update_transaction(
            user_a, txn_id, clear_category=True, clear_bank_account=True, tag_ids=[]
        )

        txn = transaction_service.get_transaction(user_a, txn_id)
        assert txn.category_id is None
        assert txn.bank_account_id is None
        assert txn.tags == ()

    def test_kind_change_must_keep_category_consistent(self, transaction_service, user_a, reference_data, sample_transactions):
        txn_id = sample_transactions[0]

        with pytest.raises(ValidationError, match="Groceries"):
            transaction_service.update_transaction(user_a, txn_id, kind="earn")

        transaction_service.update_transaction(user_a, txn_id, kind="earn", category_id=reference_data["Salary"])
        txn = transaction_service.get_transaction(user_a, txn_id)
        assert txn.kind == TransactionKind.EARN
        assert txn.category_name == "Salary"

    def test_kind_change_with_cleared_category(self, transaction_service, user_a, sample_transactions):
        transaction_service.update_transaction(user_a, sample_transactions[0], kind="save", clear_category=True)

        assert transaction_service.get_transaction(user_a, sample_transactions[0]).kind == TransactionKind.SAVE

    def test_rejects_category_and_clear(self, transaction_service, user_a, reference_data, sample_transactions):
        with pytest.raises(ValidationError, match="Cannot set both"):
            transaction_service.update_transaction(
                user_a, sample_transactions[0], category_id=reference_data["Groceries"], clear_category=True
            )

    def test_other_user_cannot_update(self, transaction_service, user_b, sample_transactions):
        with pytest.raises(NotFoundError):
            transaction_service.update_transaction(user_b, sample_transactions[0], amount=1)


class TestDeleteTransactions:
    def test_delete_one(self, transaction_service, user_a, sample_transactions):
        transaction_service.delete_transaction(user_a, sample_transactions[0])

        assert transaction_service.get_transaction(user_a, sample_transactions[0]) is None
        assert len(transaction_service.list_transactions(user_a)) == 4

    def test_delete_many(self, transaction_service, user_a, sample_transactions):
        deleted = transaction_service.delete_transactions(user_a, sample_transactions[:3])

        assert deleted == 3
        assert len(transaction_service.list_transactions(user_a)) == 2

    def test_delete_many_is_all_or_nothing(self, transaction_service, user_a, sample_transactions):
        with pytest.raises(NotFoundError, match="Transaction 9999 not found"):
            transaction_service.delete_transactions(user_a, [sample_transactions[0], 9999])

        assert len(transaction_service.list_transactions(user_a)) == 5

    def test_cannot_delete_other_users_transactions(self, transaction_service, user_a, user_b, sample_transactions):
        with pytest.raises(NotFoundError):
            transaction_service.delete_transactions(user_b, sample_transactions)

        assert len(transaction_service.list_transactions(user_a)) == 5
