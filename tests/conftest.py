from collections.abc import AsyncIterator, Callable, Sequence
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from setloader.config import Settings
from setloader.models.card import CardRecord
from setloader.models.db import Base

SCRYFALL_API = "https://api.scryfall.com"


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no database and no request delay."""
    return Settings(
        database_url="",
        scryfall_api_base=SCRYFALL_API,
        request_delay_seconds=0.0,
    )


@pytest.fixture
def card_payload() -> Callable[..., dict[str, Any]]:
    """Factory for Scryfall card JSON objects."""

    def _make(card_id: str = "0000", name: str = "Test Card", **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "object": "card",
            "id": card_id,
            "oracle_id": f"oracle-{card_id}",
            "name": name,
            "lang": "en",
            "uri": f"{SCRYFALL_API}/cards/{card_id}",
            "scryfall_uri": f"https://scryfall.com/card/dsk/{card_id}",
            "layout": "normal",
            "mana_cost": "{1}{R}",
            "cmc": 2.0,
            "type_line": "Creature — Devil",
            "power": "2",
            "toughness": "1",
            "colors": ["R"],
            "color_identity": ["R"],
            "keywords": [],
            "rarity": "common",
            "set": "dsk",
            "set_name": "Duskmourn: House of Horror",
            "collector_number": "1",
            "image_uris": {
                "small": f"https://cards.scryfall.io/small/{card_id}.jpg",
                "normal": f"https://cards.scryfall.io/normal/{card_id}.jpg",
            },
            "legalities": {"standard": "legal"},
            "prices": {"usd": "0.10", "usd_foil": None},
            "related_uris": {},
            "purchase_uris": {},
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def set_payload() -> Callable[..., dict[str, Any]]:
    """Factory for Scryfall set JSON objects."""

    def _make(code: str = "dsk", card_count: int = 3) -> dict[str, Any]:
        return {
            "object": "set",
            "id": "a3f6a1c8-0000-0000-0000-000000000000",
            "code": code,
            "name": "Duskmourn: House of Horror",
            "released_at": "2024-09-27",
            "set_type": "expansion",
            "card_count": card_count,
            "digital": False,
            "foil_only": False,
            "nonfoil_only": False,
        }

    return _make


def make_record(index: int, **overrides: Any) -> CardRecord:
    """Build a CardRecord with a unique scryfall_id."""
    values: dict[str, Any] = {
        "scryfall_id": f"00000000-0000-0000-0000-{index:012d}",
        "name": f"Card {index}",
        "mana_cost": "{G}",
        "cmc": 1.0,
        "type_line": "Creature — Elf",
        "colors": ["G"],
        "color_identity": ["G"],
        "power": "1",
        "toughness": "1",
        "rarity": "common",
        "set_code": "dsk",
        "collector_number": str(index),
        "keywords": "",
        "image_uris": None,
        "card_object_uri": f"{SCRYFALL_API}/cards/{index}",
        "scryfall_uri": None,
    }
    values.update(overrides)
    return CardRecord(**values)


@pytest.fixture
def records_factory() -> Callable[[int], list[CardRecord]]:
    """Factory for lists of distinct CardRecords."""

    def _make(count: int) -> list[CardRecord]:
        return [make_record(i) for i in range(count)]

    return _make


class RecordingStore:
    """In-memory CardStore that records every upsert call."""

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.calls: list[list[CardRecord]] = []
        self.rows: dict[str, CardRecord] = {}
        self.fail_on_call = fail_on_call

    async def upsert(self, records: Sequence[CardRecord], conflict_key: str) -> None:
        self.calls.append(list(records))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise RuntimeError("connection reset by peer")
        for record in records:
            self.rows[getattr(record, conflict_key)] = record


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def record_factory() -> Callable[..., CardRecord]:
    return make_record


@pytest.fixture
def store_factory() -> type[RecordingStore]:
    return RecordingStore


@pytest.fixture
async def async_engine() -> AsyncIterator[AsyncEngine]:
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session
