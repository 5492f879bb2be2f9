"""
Scryfall -> storage schema mapping.

Pure functions, no I/O. Optional catalog fields that are absent become None,
never an empty string. Keywords are the one exception: they are stored as a
joined string, so no keywords is "".
"""

from collections.abc import Iterable

from setloader.models.card import CardRecord
from setloader.models.scryfall import ScryfallCard

KEYWORD_SEPARATOR = ", "


def _or_none(value: str | None) -> str | None:
    return value or None


def transform_card(card: ScryfallCard) -> CardRecord:
    """Map one Scryfall card to a CardRecord."""
    return CardRecord(
        scryfall_id=card.id,
        name=card.name,
        mana_cost=_or_none(card.mana_cost),
        cmc=card.cmc,
        type_line=card.type_line,
        colors=list(card.colors) if card.colors is not None else None,
        color_identity=list(card.color_identity) if card.color_identity is not None else None,
        power=_or_none(card.power),
        toughness=_or_none(card.toughness),
        rarity=card.rarity,
        set_code=card.set,
        collector_number=_or_none(card.collector_number),
        keywords=KEYWORD_SEPARATOR.join(card.keywords),
        image_uris=card.image_uris.model_dump(exclude_none=True) if card.image_uris else None,
        card_object_uri=card.uri,
        scryfall_uri=_or_none(card.scryfall_uri),
    )


def transform_cards(cards: Iterable[ScryfallCard]) -> list[CardRecord]:
    """Map cards element-wise, preserving order."""
    return [transform_card(card) for card in cards]
