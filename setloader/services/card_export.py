"""
JSON dumps of transformed cards for inspection.

The pipeline only writes these files; it never reads them back.
"""

import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from setloader.config import SAMPLE_SIZE
from setloader.models.card import CardRecord

logger = logging.getLogger(__name__)


def _metadata(set_code: str, card_count: int, now: datetime) -> dict[str, Any]:
    return {
        "setCode": set_code,
        "cardCount": card_count,
        "exportedAt": now.isoformat(),
    }


def _write_json(path: Path, payload: dict[str, Any]) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    path.write_text(text, encoding="utf-8")
    return text


def save_cards_to_file(
    cards: Sequence[CardRecord],
    set_code: str,
    output_dir: Path = Path("data"),
    *,
    now: datetime | None = None,
) -> Path:
    """
    Save a small sample of a set's cards plus metadata.

    Writes ``{set_code}-cards-{YYYY-MM-DD}.json`` in ``output_dir``.

    Returns:
        Path to the written file
    """
    now = now or datetime.now(UTC)
    path = output_dir / f"{set_code}-cards-{now.date().isoformat()}.json"

    payload = {
        "metadata": _metadata(set_code, len(cards), now),
        "cards": [card.to_row() for card in cards[:SAMPLE_SIZE]],
        "sample": True,
        "fullDataMessage": (
            f"This file contains a sample of {SAMPLE_SIZE} cards. "
            f"Full dataset has {len(cards)} cards."
        ),
    }
    _write_json(path, payload)

    logger.info("Sample data saved to: %s", path)
    return path


def save_complete_cards_to_file(
    cards: Sequence[CardRecord],
    set_code: str,
    output_dir: Path = Path("data"),
    *,
    now: datetime | None = None,
) -> Path:
    """
    Save every card in a set plus metadata.

    Writes ``{set_code}-cards-complete-{YYYY-MM-DD}.json``. Large sets produce
    multi-megabyte files.

    Returns:
        Path to the written file
    """
    now = now or datetime.now(UTC)
    path = output_dir / f"{set_code}-cards-complete-{now.date().isoformat()}.json"

    payload = {
        "metadata": _metadata(set_code, len(cards), now),
        "cards": [card.to_row() for card in cards],
    }
    text = _write_json(path, payload)

    logger.info("Complete data saved to: %s", path)
    logger.info("File size: %.2f MB", len(text.encode("utf-8")) / 1024 / 1024)
    return path
