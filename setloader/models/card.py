from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    A card row ready for the ``cards`` table.

    Attributes:
        scryfall_id: Scryfall's stable printing ID (unique upsert key)
        name: Card name
        mana_cost: Mana cost string like "{2}{B}{B}", None for lands
        cmc: Converted mana cost
        type_line: Full type line
        colors: Color letters, None when Scryfall omits them (e.g. split faces)
        color_identity: Commander color identity
        power: Creature power as printed ("*" is valid), None otherwise
        toughness: Creature toughness as printed, None otherwise
        rarity: common, uncommon, rare, mythic, special, bonus
        set_code: Lowercase set code (e.g. "dsk")
        collector_number: Collector number within set
        keywords: Comma-and-space joined keyword abilities ("" when none)
        image_uris: Image URL map keyed by size
        card_object_uri: API URI of the card object
        scryfall_uri: Human-facing Scryfall page
    """

    scryfall_id: str
    name: str
    mana_cost: str | None
    cmc: float
    type_line: str
    colors: list[str] | None
    color_identity: list[str] | None
    power: str | None
    toughness: str | None
    rarity: str
    set_code: str
    collector_number: str | None
    keywords: str
    image_uris: dict[str, Any] | None
    card_object_uri: str
    scryfall_uri: str | None = None

    def to_row(self) -> dict[str, Any]:
        """Column -> value mapping for an INSERT statement."""
        return asdict(self)
