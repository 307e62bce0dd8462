"""
Notepad Backend — Note Store Tests
===================================

What:  Tests for NoteStore against an in-memory SQLite database.
Why:   The store carries every query the API depends on.

What we test:
    ✅ create defaults and unique ids
    ✅ get round trip and absence
    ✅ update semantics (archived override, updated_at refresh)
    ✅ delete idempotence and clear
    ✅ criteria: case-insensitive substrings, literal wildcards, empty term,
       strict date comparisons
    ✅ counts stay consistent with listings
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from notepad.store import (
    content_contains,
    created_after,
    is_archived,
    title_contains,
    title_or_content_contains,
    updated_after,
)


class TestCreateAndGet:

    @pytest.mark.asyncio
    async def test_create_sets_defaults(self, store):
        note = await store.create("Shopping List", "Milk\nBread\nEggs")

        assert note.id is not None
        assert note.title == "Shopping List"
        assert note.content == "Milk\nBread\nEggs"
        assert note.archived is False
        assert note.created_at == note.updated_at

    @pytest.mark.asyncio
    async def test_create_archived(self, store):
        note = await store.create("Ideas", "- one", archived=True)

        assert note.archived is True
        assert note.created_at == note.updated_at

    @pytest.mark.asyncio
    async def test_create_assigns_unique_ids(self, store):
        first = await store.create("A", "a")
        second = await store.create("A", "a")
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_get_returns_created_note(self, store, db_session):
        created = await store.create("Title", "Body")
        await db_session.commit()
        db_session.expunge_all()

        fetched = await store.get(created.id)

        assert fetched is not None
        assert fetched.id == created.id
        assert fetched.title == created.title
        assert fetched.content == created.content
        assert fetched.created_at == created.created_at
        assert fetched.updated_at == created.updated_at
        assert fetched.archived == created.archived

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, store):
        assert await store.get(uuid4()) is None

    @pytest.mark.asyncio
    async def test_list_all_ordered_by_creation(self, store):
        for title in ["one", "two", "three"]:
            await store.create(title, "")

        notes = await store.list_all()

        assert {n.title for n in notes} == {"one", "two", "three"}
        stamps = [n.created_at for n in notes]
        assert stamps == sorted(stamps)


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_overwrites_title_and_content(self, store):
        note = await store.create("Old", "old body")
        updated = await store.update(note.id, "New", "new body")

        assert updated.title == "New"
        assert updated.content == "new body"

    @pytest.mark.asyncio
    async def test_update_with_empty_strings_still_overwrites(self, store):
        note = await store.create("Title", "Body")
        updated = await store.update(note.id, "", "")
        assert updated.title == ""
        assert updated.content == ""

    @pytest.mark.asyncio
    async def test_update_without_archived_preserves_it(self, store):
        note = await store.create("T", "C")
        await store.update(note.id, "T", "C", archived=True)

        updated = await store.update(note.id, "T2", "C2")
        assert updated.archived is True

    @pytest.mark.asyncio
    async def test_update_with_archived_sets_it(self, store):
        note = await store.create("T", "C")
        assert (await store.update(note.id, "T", "C", archived=True)).archived is True
        assert (await store.update(note.id, "T", "C", archived=False)).archived is False

    @pytest.mark.asyncio
    async def test_update_refreshes_updated_at_only(self, store):
        note = await store.create("T", "C")
        created_at = note.created_at
        previous = note.updated_at

        updated = await store.update(note.id, "T", "C")

        assert updated.created_at == created_at
        assert updated.updated_at > previous

    @pytest.mark.asyncio
    async def test_consecutive_updates_strictly_increase_updated_at(self, store):
        note = await store.create("T", "C")
        stamps = [note.updated_at]
        for _ in range(5):
            stamps.append((await store.update(note.id, "T", "C")).updated_at)
        assert all(a < b for a, b in zip(stamps, stamps[1:]))

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, store):
        assert await store.update(uuid4(), "T", "C") is None


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_existing(self, store):
        note = await store.create("T", "C")
        assert await store.delete(note.id) is True
        assert await store.get(note.id) is None

    @pytest.mark.asyncio
    async def test_delete_twice_returns_false(self, store):
        note = await store.create("T", "C")
        await store.delete(note.id)
        assert await store.delete(note.id) is False

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, store):
        assert await store.delete(uuid4()) is False

    @pytest.mark.asyncio
    async def test_clear_removes_everything(self, store):
        for i in range(3):
            await store.create(f"n{i}", "")
        assert await store.clear() == 3
        assert await store.list_all() == []


class TestCriteria:

    @pytest.mark.asyncio
    async def test_content_search_is_case_insensitive(self, store):
        note = await store.create("Shopping List", "Milk\nBread\nEggs")
        await store.create("Other", "nothing here")

        assert [n.id for n in await store.list_where(content_contains("MILK"))] == [note.id]
        assert [n.id for n in await store.list_where(content_contains("bread"))] == [note.id]

    @pytest.mark.asyncio
    async def test_search_folds_non_ascii_case(self, store):
        note = await store.create("Été", "ÉCOLE")
        await store.create("Other", "ecole")

        assert [n.id for n in await store.list_where(content_contains("école"))] == [note.id]
        assert [n.id for n in await store.list_where(title_contains("ÉTÉ"))] == [note.id]
        found = await store.list_where(title_or_content_contains("École"))
        assert [n.id for n in found] == [note.id]

    @pytest.mark.asyncio
    async def test_title_search_ignores_content(self, store):
        await store.create("Groceries", "shopping")
        match = await store.create("Shopping", "list")

        found = await store.list_where(title_contains("shop"))
        assert [n.id for n in found] == [match.id]

    @pytest.mark.asyncio
    async def test_title_or_content_search(self, store):
        a = await store.create("Meeting", "agenda")
        b = await store.create("Ideas", "Meeting room booking")
        await store.create("Other", "nothing")

        found = await store.list_where(title_or_content_contains("meeting"))
        assert {n.id for n in found} == {a.id, b.id}

    @pytest.mark.asyncio
    async def test_substring_not_prefix(self, store):
        note = await store.create("Quick Reminder", "")
        found = await store.list_where(title_contains("remind"))
        assert [n.id for n in found] == [note.id]

    @pytest.mark.asyncio
    async def test_empty_term_matches_everything(self, store):
        for i in range(3):
            await store.create(f"n{i}", f"c{i}")
        await store.create("", "")

        assert len(await store.list_where(title_or_content_contains(""))) == 4
        assert len(await store.list_where(title_contains(""))) == 4
        assert len(await store.list_where(content_contains(""))) == 4

    @pytest.mark.asyncio
    async def test_wildcards_are_literal(self, store):
        literal = await store.create("50% off", "")
        await store.create("500 items", "")
        await store.create("a_b", "")

        found = await store.list_where(title_contains("50%"))
        assert [n.id for n in found] == [literal.id]
        found = await store.list_where(title_contains("_"))
        assert [n.title for n in found] == ["a_b"]

    @pytest.mark.asyncio
    async def test_archived_criteria(self, store):
        active = await store.create("active", "")
        archived = await store.create("archived", "")
        await store.update(archived.id, "archived", "", archived=True)

        assert [n.id for n in await store.list_where(is_archived(False))] == [active.id]
        assert [n.id for n in await store.list_where(is_archived(True))] == [archived.id]

    @pytest.mark.asyncio
    async def test_created_after_is_strict(self, store):
        first = await store.create("first", "")
        second = await store.create("second", "")

        found = await store.list_where(created_after(first.created_at))
        assert first.id not in [n.id for n in found]
        if second.created_at > first.created_at:
            assert [n.id for n in found] == [second.id]

        earlier = first.created_at - timedelta(seconds=1)
        assert len(await store.list_where(created_after(earlier))) == 2

    @pytest.mark.asyncio
    async def test_updated_after(self, store):
        untouched = await store.create("untouched", "")
        touched = await store.create("touched", "")
        cutoff = max(untouched.updated_at, touched.updated_at)

        await store.update(touched.id, "touched", "again")

        found = await store.list_where(updated_after(cutoff))
        assert [n.id for n in found] == [touched.id]


class TestCounts:

    @pytest.mark.asyncio
    async def test_count_all_and_by_state(self, store):
        notes = [await store.create(f"n{i}", "") for i in range(4)]
        await store.update(notes[0].id, "n0", "", archived=True)

        total = await store.count_where()
        active = await store.count_where(is_archived(False))
        archived = await store.count_where(is_archived(True))

        assert (total, active, archived) == (4, 3, 1)
        assert active + archived == len(await store.list_all())

    @pytest.mark.asyncio
    async def test_count_empty_store(self, store):
        assert await store.count_where() == 0
