from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    # Points for 1, 2, 3 and 4 rows cleared by one lock, before the level multiplier.
    line_clear_scores: tuple[int, int, int, int] = (40, 100, 300, 1200)
    rows_per_level: int = 10

    # Gravity interval in seconds: steep linear ramp up to `late_level`, then a
    # shallower one, never below `min_tick_interval`.
    start_tick_interval: float = 1.0
    start_slope: float = -0.08
    late_level: int = 10
    late_tick_interval: float = 0.25
    late_slope: float = -0.012
    min_tick_interval: float = 0.05

    def score_for_lines(self, lines: int, level: int = 0) -> int:
        if lines < 0 or lines > len(self.line_clear_scores):
            raise ValueError(f"rows cleared per lock must be in 0..{len(self.line_clear_scores)}, got {lines}")
        if lines == 0:
            return 0
        return self.line_clear_scores[lines - 1] * (level + 1)

    def level_for_lines(self, total_lines: int, start_level: int = 0) -> int:
        return max(start_level, total_lines // self.rows_per_level)

    def tick_interval(self, level: int) -> float:
        if level < self.late_level:
            interval = self.start_tick_interval + self.start_slope * level
        else:
            interval = self.late_tick_interval + self.late_slope * (level - self.late_level)
        return max(self.min_tick_interval, interval)
