"""Calculation history for GST Calc.

The history is a plain list of results, newest first, bounded to
MAX_HISTORY_ITEMS. It is passed into and returned from record() so the
caller decides when to load and save it.
"""

import json
from dataclasses import dataclass, field
from decimal import InvalidOperation
from typing import List, Optional

from .calculator import CalculationResult

MAX_HISTORY_ITEMS = 5

HistoryList = List[CalculationResult]


@dataclass
class DecodedHistory:
    """Result of reading persisted history."""

    entries: HistoryList = field(default_factory=list)
    malformed: bool = False  # stored value was not a JSON array
    skipped: int = 0  # array items that could not be decoded


def record(result: CalculationResult, current_history: HistoryList) -> HistoryList:
    """Prepend a result and keep only the newest MAX_HISTORY_ITEMS entries.

    The passed-in list is left untouched; a new list is returned.
    """
    return ([result] + list(current_history))[:MAX_HISTORY_ITEMS]


def history_to_json(history: HistoryList) -> str:
    """Encode a history list for storage."""
    return json.dumps([entry.to_dict() for entry in history])


def history_from_json(raw: Optional[str]) -> DecodedHistory:
    """Decode persisted history.

    Args:
        raw: The stored JSON text, or None when nothing was stored.

    Returns:
        DecodedHistory. Invalid JSON or a non-array value gives an empty,
        malformed history; undecodable array items are skipped.
    """
    if raw is None:
        return DecodedHistory()

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return DecodedHistory(malformed=True)

    if not isinstance(data, list):
        return DecodedHistory(malformed=True)

    decoded = DecodedHistory()
    for item in data:
        try:
            decoded.entries.append(CalculationResult.from_dict(item))
        except (KeyError, TypeError, ValueError, AttributeError, InvalidOperation):
            decoded.skipped += 1

    decoded.entries = decoded.entries[:MAX_HISTORY_ITEMS]
    return decoded
