from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_points: int = 100
    level_threshold: int = 500

    def score_for_lines(self, lines: int, level: int) -> int:
        # Every line in one clear is worth the same, at the current level
        if lines <= 0:
            return 0
        return lines * self.line_clear_points * level

    def should_level_up(self, score: int, level: int) -> bool:
        return score > level * self.level_threshold


def drop_interval_for(level: int, base_ms: int = 1000, step_ms: int = 50, min_ms: int = 100) -> int:
    """Gravity period in milliseconds for `level` (linear, with a floor)."""
    return max(min_ms, base_ms - (level - 1) * step_ms)
