"""
Scryfall API payload models.

These mirror the JSON shapes returned by https://api.scryfall.com for the
endpoints the importer calls. Fields we never read are left to pydantic's
``extra="ignore"`` so catalog additions don't break parsing.

API docs: https://scryfall.com/docs/api
"""

from pydantic import BaseModel, ConfigDict, Field


class _ScryfallModel(BaseModel):
    """Base for catalog payloads: immutable once fetched."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class ImageUris(_ScryfallModel):
    small: str | None = None
    normal: str | None = None
    large: str | None = None
    png: str | None = None
    art_crop: str | None = None
    border_crop: str | None = None


class ScryfallSet(_ScryfallModel):
    """Set metadata from ``GET /sets/{code}``."""

    id: str
    code: str
    name: str
    released_at: str | None = None
    set_type: str | None = None
    card_count: int
    digital: bool = False
    foil_only: bool = False
    nonfoil_only: bool = False
    uri: str | None = None
    scryfall_uri: str | None = None
    search_uri: str | None = None
    icon_svg_uri: str | None = None


class ScryfallCard(_ScryfallModel):
    """
    One printing of a card, as returned by ``/cards/search``.

    ``id`` is Scryfall's permanent identifier for this printing and is the
    upsert key for the ``cards`` table.
    """

    id: str
    oracle_id: str | None = None
    name: str
    lang: str = "en"
    released_at: str | None = None
    uri: str = ""
    scryfall_uri: str | None = None
    layout: str | None = None
    mana_cost: str | None = None
    cmc: float = 0.0
    type_line: str = ""
    oracle_text: str | None = None
    power: str | None = None
    toughness: str | None = None
    colors: list[str] | None = None
    color_identity: list[str] | None = None
    keywords: list[str] = Field(default_factory=list)
    rarity: str
    set: str
    set_name: str | None = None
    collector_number: str | None = None
    image_uris: ImageUris | None = None
    legalities: dict[str, str] = Field(default_factory=dict)
    prices: dict[str, str | None] = Field(default_factory=dict)
    related_uris: dict[str, str] = Field(default_factory=dict)
    purchase_uris: dict[str, str] = Field(default_factory=dict)


class ScryfallCardList(_ScryfallModel):
    """One page of a paginated search response."""

    object: str = "list"
    total_cards: int | None = None
    has_more: bool = False
    next_page: str | None = None
    data: list[ScryfallCard] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ScryfallErrorBody(_ScryfallModel):
    """Error object Scryfall returns with non-2xx responses."""

    object: str = "error"
    code: str
    status: int
    details: str
    warnings: list[str] = Field(default_factory=list)
