"""Tests for the record store."""

import pytest

from outfit_draw.context import build_context


def _users(context):
    alice, _ = context.auth.signup("alice", "pw123")
    bob, _ = context.auth.signup("bob", "pw456")
    return alice.id, bob.id


def test_list_is_empty_for_new_user(context) -> None:
    alice, _ = _users(context)
    assert context.records.list(alice) == []


def test_list_only_returns_owned_records(context) -> None:
    alice, bob = _users(context)
    store = context.records
    store.create(alice, date="2024-01-01", style="blue shirt", image=None, note="a1")
    store.create(bob, date="2024-01-02", style="black hoodie", image=None, note="b1")
    store.create(alice, date="2024-01-03", style="denim jacket", image=None, note="a2")

    assert [r.note for r in store.list(alice)] == ["a2", "a1"]
    assert [r.note for r in store.list(bob)] == ["b1"]


def test_newest_first_for_any_sequence_of_saves(context) -> None:
    alice, _ = _users(context)
    store = context.records

    for index in range(5):
        store.create(alice, date="2024-01-01", style=f"style-{index}", image=None, note="")
        assert store.list(alice)[0].style == f"style-{index}"

    ids = [r.id for r in store.list(alice)]
    assert ids == sorted(ids, reverse=True)
    assert len(set(ids)) == 5


def test_absent_fields_are_stored_empty(context) -> None:
    alice, _ = _users(context)
    context.records.create(alice, date=None, style=None, image=None, note=None)

    (record,) = context.records.list(alice)
    assert record.date == ""
    assert record.style == ""
    assert record.note == ""
    assert record.image is None


def test_delete_of_foreign_or_unknown_record_is_noop(context) -> None:
    alice, bob = _users(context)
    store = context.records
    record_id = store.create(alice, date="d", style="s", image="data:image/jpeg;base64,AA==", note="n")

    assert store.delete(bob, record_id) == 0
    assert store.delete(alice, record_id + 100) == 0
    assert [r.id for r in store.list(alice)] == [record_id]

    assert store.delete(alice, record_id) == 1
    assert store.list(alice) == []


@pytest.mark.parametrize("bad_id", ["abc", "", "1.5", "-1", "0", str(2**64)])
def test_delete_with_malformed_id_is_noop(context, bad_id) -> None:
    alice, _ = _users(context)
    store = context.records
    store.create(alice, date="d", style="s", image=None, note="")

    assert store.delete(alice, bad_id) == 0
    assert len(store.list(alice)) == 1


def test_delete_accepts_numeric_string_id(context) -> None:
    alice, _ = _users(context)
    record_id = context.records.create(alice, date="d", style="s", image=None, note="")

    assert context.records.delete(alice, str(record_id)) == 1


def test_records_survive_context_rebuild(settings, context) -> None:
    alice, _ = _users(context)
    context.records.create(alice, date="2024-01-01", style="blue shirt", image=None, note="comfy")
    context.database.dispose()

    restarted = build_context(settings)
    restarted.database.init_db()
    try:
        (record,) = restarted.records.list(alice)
        assert record.style == "blue shirt"
    finally:
        restarted.database.dispose()
