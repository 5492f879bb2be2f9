from dataclasses import dataclass
from pathlib import Path

from setloader.models.scryfall import ScryfallSet


@dataclass
class ImportResult:
    """
    Summary of one import run.

    Attributes:
        set_metadata: Set metadata fetched at the start of the run
        cards_imported: Number of transformed records (uploaded unless dry run)
        validation_passed: Whether the fetched count matched the declared count
        saved_to_file: Path of the JSON dump, if one was written
    """

    set_metadata: ScryfallSet
    cards_imported: int
    validation_passed: bool
    saved_to_file: Path | None = None
