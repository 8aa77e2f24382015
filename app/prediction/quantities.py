"""Per-feeding quantity observations read from event notes."""

import re
from collections.abc import Iterable
from typing import Optional

from app.models.feeding import FeedingEvent, FeedingKind
from app.prediction.config import DEFAULT_NURSING_ML
from app.prediction.types import Observer, QuantityObservation, notify

# First run of ASCII digits directly followed by "ml", e.g. "60ml", "夜 120ml"
_ML_PATTERN = re.compile(r"([0-9]+)ml")

# Larger amounts are typos, not feedings
MAX_NOTE_ML = 10_000


def parse_ml(note: str) -> int | None:
    """Return the millilitre amount written in a note, or None if absent or implausible."""
    match = _ML_PATTERN.search(note)
    if match is None:
        return None
    digits = match.group(1).lstrip("0") or "0"
    if len(digits) > len(str(MAX_NOTE_ML)):
        return None
    amount = int(digits)
    return amount if amount <= MAX_NOTE_ML else None


def extract_quantities(
    events: Iterable[FeedingEvent],
    *,
    nursing_default_ml: int = DEFAULT_NURSING_ML,
    observer: Optional[Observer] = None,
) -> list[QuantityObservation]:
    """
    Build quantity observations in input order.

    - formula: amount parsed from the note; events without one are skipped
    - nursing: fixed estimate, the note is not read
    """
    observations: list[QuantityObservation] = []
    skipped = 0
    for event in events:
        if event.kind is FeedingKind.FORMULA:
            amount = parse_ml(event.note)
            if amount is None:
                skipped += 1
                continue
            observations.append(QuantityObservation(amount_ml=amount, is_estimated=False))
        elif event.kind is FeedingKind.NURSING:
            observations.append(
                QuantityObservation(amount_ml=nursing_default_ml, is_estimated=True)
            )
        else:
            raise ValueError(f"Unhandled feeding kind: {event.kind!r}")

    notify(
        observer, "quantities",
        count=len(observations),
        estimated=sum(1 for q in observations if q.is_estimated),
        skipped=skipped,
    )
    return observations
