"""Tests for batched card upload."""

from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from setloader.db.operations import count_cards
from setloader.models.card import CardRecord
from setloader.services.uploader import SqlCardStore, UploadError, chunked, upload_cards


class TestChunked:
    def test_last_chunk_may_be_short(
        self, records_factory: Callable[[int], list[CardRecord]]
    ) -> None:
        chunks = list(chunked(records_factory(7), 3))

        assert [len(chunk) for chunk in chunks] == [3, 3, 1]

    def test_empty(self) -> None:
        assert list(chunked([], 3)) == []


class TestUploadCards:
    async def test_batches_in_order(
        self, records_factory: Callable[[int], list[CardRecord]], recording_store: Any
    ) -> None:
        """2500 records at batch size 1000 -> 1000, 1000, 500."""
        records = records_factory(2500)

        uploaded = await upload_cards(recording_store, records, batch_size=1000)

        assert uploaded == 2500
        assert [len(call) for call in recording_store.calls] == [1000, 1000, 500]
        flattened = [record for call in recording_store.calls for record in call]
        assert flattened == records

    async def test_stops_at_failing_batch(
        self, records_factory: Callable[[int], list[CardRecord]], store_factory: Any
    ) -> None:
        """A failure on batch 2 is reported as batch 2 and batch 3 is never attempted."""
        store = store_factory(fail_on_call=2)
        records = records_factory(2500)

        with pytest.raises(UploadError) as exc_info:
            await upload_cards(store, records, batch_size=1000)

        assert exc_info.value.batch_index == 2
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert len(store.calls) == 2

    async def test_earlier_batches_stay_committed(
        self, records_factory: Callable[[int], list[CardRecord]], store_factory: Any
    ) -> None:
        store = store_factory(fail_on_call=2)
        records = records_factory(25)

        with pytest.raises(UploadError):
            await upload_cards(store, records, batch_size=10)

        assert set(store.rows) == {record.scryfall_id for record in records[:10]}

    async def test_first_batch_failure(
        self, records_factory: Callable[[int], list[CardRecord]], store_factory: Any
    ) -> None:
        store = store_factory(fail_on_call=1)

        with pytest.raises(UploadError, match="batch 1"):
            await upload_cards(store, records_factory(5), batch_size=10)

    async def test_uses_scryfall_id_conflict_key(
        self, records_factory: Callable[[int], list[CardRecord]], recording_store: Any
    ) -> None:
        records = records_factory(3)

        await upload_cards(recording_store, records)
        await upload_cards(recording_store, records)

        assert len(recording_store.rows) == 3

    async def test_no_records_no_calls(self, recording_store: Any) -> None:
        assert await upload_cards(recording_store, []) == 0
        assert recording_store.calls == []

    async def test_rejects_non_positive_batch_size(
        self, records_factory: Callable[[int], list[CardRecord]], recording_store: Any
    ) -> None:
        with pytest.raises(ValueError, match="batch_size"):
            await upload_cards(recording_store, records_factory(1), batch_size=0)


class TestSqlCardStore:
    @pytest.fixture
    def session_factory(self, async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def test_reupload_creates_no_duplicates(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        records_factory: Callable[[int], list[CardRecord]],
    ) -> None:
        """Running the same upload twice leaves the row count unchanged."""
        store = SqlCardStore(session_factory)
        records = records_factory(25)

        await upload_cards(store, records, batch_size=10)
        async with session_factory() as session:
            first_count = await count_cards(session)

        await upload_cards(store, records, batch_size=10)
        async with session_factory() as session:
            second_count = await count_cards(session)

        assert first_count == second_count == 25

    async def test_commits_each_batch(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        records_factory: Callable[[int], list[CardRecord]],
    ) -> None:
        store = SqlCardStore(session_factory)

        await store.upsert(records_factory(3), conflict_key="scryfall_id")

        async with session_factory() as session:
            assert await count_cards(session) == 3
