from setloader.db.database import (
    create_engine_from_settings,
    create_session_factory,
    drop_db,
    init_db,
)
from setloader.db.operations import count_cards, get_card_by_scryfall_id, upsert_cards

__all__ = [
    "count_cards",
    "create_engine_from_settings",
    "create_session_factory",
    "drop_db",
    "get_card_by_scryfall_id",
    "init_db",
    "upsert_cards",
]
