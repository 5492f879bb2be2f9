from setloader.models.card import CardRecord
from setloader.models.import_result import ImportResult
from setloader.models.scryfall import (
    ImageUris,
    ScryfallCard,
    ScryfallCardList,
    ScryfallErrorBody,
    ScryfallSet,
)

__all__ = [
    "CardRecord",
    "ImageUris",
    "ImportResult",
    "ScryfallCard",
    "ScryfallCardList",
    "ScryfallErrorBody",
    "ScryfallSet",
]
