from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from shared import DuplicateEmailError, IdentityNotFoundError, InMemoryCredentialStore


def test_create_assigns_sequential_ids():
    store = InMemoryCredentialStore()

    first = store.create("a@b.com", "hash-a")
    second = store.create("c@d.com", "hash-c")

    assert first.id == 1
    assert second.id == 2
    assert first.refresh_token is None
    assert first.refresh_token_expires_at is None


def test_create_rejects_duplicate_email():
    store = InMemoryCredentialStore()
    store.create("a@b.com", "hash-1")

    with pytest.raises(DuplicateEmailError):
        store.create("a@b.com", "hash-2")

    # 원본 레코드는 병합/덮어쓰기 없음
    assert store.find_by_email("a@b.com").password_hash == "hash-1"
    assert len(store) == 1


def test_find_by_email_returns_none_when_absent():
    store = InMemoryCredentialStore()
    assert store.find_by_email("nobody@example.com") is None
    assert store.find_by_subject("nobody@example.com") is None


def test_find_by_subject_matches_find_by_email():
    store = InMemoryCredentialStore()
    store.create("a@b.com", "hash")

    assert store.find_by_subject("a@b.com") == store.find_by_email("a@b.com")


def test_returned_records_are_copies():
    store = InMemoryCredentialStore()
    created = store.create("a@b.com", "hash")
    created.refresh_token = "tampered"

    fetched = store.find_by_email("a@b.com")
    fetched.refresh_token = "tampered-again"

    assert store.find_by_email("a@b.com").refresh_token is None


def test_set_refresh_token_updates_both_fields():
    store = InMemoryCredentialStore()
    store.create("a@b.com", "hash")
    expires_at = datetime(2030, 1, 1, tzinfo=timezone.utc)

    store.set_refresh_token("a@b.com", "tok-1", expires_at)
    store.set_refresh_token("a@b.com", "tok-2", expires_at + timedelta(days=1))

    record = store.find_by_email("a@b.com")
    assert record.refresh_token == "tok-2"
    assert record.refresh_token_expires_at == expires_at + timedelta(days=1)


def test_set_refresh_token_for_unknown_email():
    store = InMemoryCredentialStore()

    with pytest.raises(IdentityNotFoundError):
        store.set_refresh_token("ghost@example.com", "tok", datetime.now(timezone.utc))


def test_concurrent_create_with_distinct_emails():
    store = InMemoryCredentialStore()
    emails = [f"user{i}@example.com" for i in range(50)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        records = list(pool.map(lambda e: store.create(e, "hash"), emails))

    assert sorted(r.id for r in records) == list(range(1, 51))
    for email in emails:
        assert store.find_by_email(email).email == email


def test_concurrent_create_with_same_email():
    store = InMemoryCredentialStore()

    def attempt(_):
        try:
            store.create("same@example.com", "hash")
            return "ok"
        except DuplicateEmailError:
            return "duplicate"

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(attempt, range(50)))

    assert results.count("ok") == 1
    assert results.count("duplicate") == 49
    assert len(store) == 1
