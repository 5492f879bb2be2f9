"""
Database operations for the ``cards`` table.

The upsert is dialect-specific: PostgreSQL and SQLite both support
``INSERT ... ON CONFLICT DO UPDATE`` but through different SQLAlchemy
constructs.
"""

import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from setloader.models.card import CardRecord
from setloader.models.db import CardDB

# Columns that identify a row and are never overwritten by an upsert
_IMMUTABLE_COLUMNS = frozenset({"id", "scryfall_id", "created_at"})

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _insert_for(session: AsyncSession) -> Any:
    dialect = session.get_bind().dialect.name
    try:
        return _INSERT_BY_DIALECT[dialect]
    except KeyError:
        raise ValueError(f"Upsert is not supported for database dialect '{dialect}'") from None


async def upsert_cards(
    session: AsyncSession,
    records: Sequence[CardRecord],
    conflict_key: str = "scryfall_id",
) -> int:
    """
    Insert cards, updating existing rows that share ``conflict_key``.

    Does not commit; the caller owns the transaction.

    Returns:
        Number of rows sent to the database, after collapsing duplicate keys
    """
    if not records:
        return 0

    # One row per key per statement; the last duplicate wins
    latest = {getattr(record, conflict_key): record for record in records}
    rows = [{"id": str(uuid.uuid4()), **record.to_row()} for record in latest.values()]

    insert = _insert_for(session)
    stmt = insert(CardDB).values(rows)
    update_columns = {
        column.name: stmt.excluded[column.name]
        for column in CardDB.__table__.columns
        if column.name not in _IMMUTABLE_COLUMNS and column.name != "updated_at"
    }
    update_columns["updated_at"] = func.now()

    stmt = stmt.on_conflict_do_update(index_elements=[conflict_key], set_=update_columns)
    await session.execute(stmt)
    return len(rows)


async def count_cards(session: AsyncSession, set_code: str | None = None) -> int:
    """Count stored cards, optionally restricted to one set."""
    query = select(func.count()).select_from(CardDB)
    if set_code is not None:
        query = query.where(CardDB.set_code == set_code)
    result = await session.execute(query)
    return int(result.scalar_one())


async def get_card_by_scryfall_id(session: AsyncSession, scryfall_id: str) -> CardDB | None:
    """
    Get a stored card by its Scryfall ID.

    Returns None if the card has not been imported.
    """
    result = await session.execute(select(CardDB).where(CardDB.scryfall_id == scryfall_id))
    return result.scalar_one_or_none()
