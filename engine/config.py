"""
config.py — Visualizer Configuration
=====================================
Every tunable the visualizer recognises, with the defaults of the
classic 20 x 50 board.

    cfg = VisualizerConfig.from_mapping(app.config)

`from_mapping` reads the upper-case keys used by Flask's config object
(and therefore by PATHFINDER_* environment variables).
"""

from dataclasses import dataclass, replace
from typing import Tuple, Mapping, Any

from algorithms import get_algorithm


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per visited-cell reveal)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   50,
    "medium": 25,
    "fast":   10,
    "turbo":  1,
}

MIN_VISIT_DELAY_MS = 1
MAX_VISIT_DELAY_MS = 50


@dataclass(frozen=True)
class VisualizerConfig:
    rows:            int             = 20
    cols:            int             = 50
    start:           Tuple[int, int] = (10, 5)
    end:             Tuple[int, int] = (10, 45)
    visit_delay_ms:  float           = 10
    path_delay_ms:   float           = 50
    algorithm:       str             = "dijkstra"

    def __post_init__(self):
        # tuples may arrive as lists from JSON / env vars
        object.__setattr__(self, "start", tuple(self.start))
        object.__setattr__(self, "end", tuple(self.end))

        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Grid shape must be positive, got {self.rows}x{self.cols}")
        for name, (r, c) in (("start", self.start), ("end", self.end)):
            if not (0 <= r < self.rows and 0 <= c < self.cols):
                raise ValueError(f"{name} {(r, c)} is outside a {self.rows}x{self.cols} grid")
        if self.start == self.end:
            raise ValueError("start and end must be different cells")
        if self.visit_delay_ms < 0 or self.path_delay_ms < 0:
            raise ValueError("Reveal delays cannot be negative")

        if get_algorithm(self.algorithm) is None:
            raise ValueError(f"Unknown algorithm: {self.algorithm}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "VisualizerConfig":
        defaults = cls()
        return cls(
            rows=int(mapping.get("GRID_ROWS", defaults.rows)),
            cols=int(mapping.get("GRID_COLS", defaults.cols)),
            start=tuple(mapping.get("START", defaults.start)),
            end=tuple(mapping.get("END", defaults.end)),
            visit_delay_ms=float(mapping.get("VISIT_DELAY_MS", defaults.visit_delay_ms)),
            path_delay_ms=float(mapping.get("PATH_DELAY_MS", defaults.path_delay_ms)),
            algorithm=str(mapping.get("ALGORITHM", defaults.algorithm)),
        )

    def with_changes(self, **kwargs) -> "VisualizerConfig":
        return replace(self, **kwargs)


def resolve_speed(value) -> float:
    """Preset name or number → visited-reveal delay, clamped to the slider range."""
    if isinstance(value, str):
        if value not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {value}")
        return SPEED_PRESETS[value]
    try:
        delay = float(value)
    except OverflowError:
        raise ValueError(f"Speed out of range: {value}") from None
    return min(MAX_VISIT_DELAY_MS, max(MIN_VISIT_DELAY_MS, delay))
