"""High score persistence.

The engine only needs a single integer that survives between sessions, so a
store is anything with `get_high_score()` and `set_high_score()`.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional, Protocol


logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "highScore"


class HighScoreStore(Protocol):
    def get_high_score(self) -> Optional[int]:
        ...

    def set_high_score(self, value: int) -> None:
        ...


def parse_high_score(raw: Any) -> Optional[int]:
    """Coerce a stored value to a high score; None when it is not one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        text = raw.strip()
        try:
            raw = int(text, 10)
        except ValueError:
            try:
                raw = float(text)
            except ValueError:
                return None
    if isinstance(raw, float):
        # Whole-number floats (e.g. 1300.0) are scores; nan, inf and fractions are not
        if not raw.is_integer():
            return None
        raw = int(raw)
    if not isinstance(raw, int):
        return None
    value = raw
    if value < 0:
        return None
    return value


class InMemoryHighScoreStore:
    def __init__(self, value: Optional[int] = None) -> None:
        self.value = value

    def get_high_score(self) -> Optional[int]:
        return self.value

    def set_high_score(self, value: int) -> None:
        self.value = int(value)


class JsonHighScoreStore:
    """Keeps `{"highScore": n}` in a JSON file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def get_high_score(self) -> Optional[int]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            return None
        raw = data.get(HIGH_SCORE_KEY) if isinstance(data, dict) else None
        value = parse_high_score(raw)
        if value is None:
            logger.warning("Ignoring malformed high score %r in %s", raw, self.path)
        return value

    def set_high_score(self, value: int) -> None:
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({HIGH_SCORE_KEY: int(value)}, f)
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self.path, exc)
