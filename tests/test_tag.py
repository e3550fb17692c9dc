"""Tests for the tag service."""

import pytest

from pocketbook.domain.errors import ConflictError, DependencyError, NotFoundError


def test_create_and_list(tag_service, user_a):
    tag_service.create_tag(user_a, name="travel", description="Trips")
    tag_service.create_tag(user_a, name="essentials")

    assert [t.name for t in tag_service.list_tags(user_a)] == ["essentials", "travel"]


def test_duplicate_conflicts(tag_service, user_a, reference_data):
    with pytest.raises(ConflictError):
        tag_service.create_tag(user_a, name="monthly")


def test_update(tag_service, user_a, reference_data):
    tag_id = reference_data["monthly"]

    tag_service.update_tag(user_a, tag_id, name="recurring", description="Every month")

    tag = tag_service.get_tag(user_a, tag_id)
    assert tag.name == "recurring"
    assert tag.description == "Every month"


def test_rename_conflict(tag_service, user_a, reference_data):
    with pytest.raises(ConflictError, match="Tag 'essentials' already exists"):
        tag_service.update_tag(user_a, reference_data["monthly"], name="essentials")


def test_delete_guard_counts_transactions(tag_service, transaction_service, user_a, reference_data):
    tag_id = reference_data["essentials"]
    for day in (1, 2, 3):
        transaction_service.create_transaction(
            user_a, kind="spend", date=f"2024-02-0{day}", amount=1, tag_ids=[tag_id, reference_data["monthly"]]
        )

    with pytest.raises(DependencyError, match="Tag is in use by 3 transaction"):
        tag_service.delete_tag(user_a, tag_id)
    assert tag_service.get_tag(user_a, tag_id).in_use_count == 3


def test_delete_unused(tag_service, user_a, reference_data):
    tag_service.delete_tag(user_a, reference_data["monthly"])

    assert tag_service.get_tag_by_name(user_a, "monthly") is None


def test_isolation(tag_service, user_a, user_b, reference_data):
    assert tag_service.list_tags(user_b) == []
    with pytest.raises(NotFoundError):
        tag_service.delete_tag(user_b, reference_data["essentials"])

    tag_service.create_tag(user_b, name="essentials")
    assert len(tag_service.list_tags(user_a)) == 2
