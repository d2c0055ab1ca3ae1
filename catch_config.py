# catch_config.py

from dataclasses import dataclass
from typing import Dict, Tuple

# Horizontal lanes, left to right
ZONES = ("LEFT", "CENTER", "RIGHT")
DEFAULT_ZONE = "CENTER"

# Classifier class names the basket reacts to. The pose model was trained
# with Korean class names, so both spellings are accepted.
ZONE_LABELS = {
    "LEFT": "LEFT",
    "CENTER": "CENTER",
    "RIGHT": "RIGHT",
    "좌": "LEFT",
    "중앙": "CENTER",
    "우": "RIGHT",
}

# Timing (milliseconds)
LEVEL_UP_INTERVAL_MS = 20000
SPAWN_DELAY_MIN_MS = 1500
SPAWN_DELAY_MAX_MS = 2500

MAX_LEVEL = 5
MAX_MISSES = 3
# (combo reached, bonus points)
COMBO_BONUSES = ((5, 50), (10, 100))

REASON_BOMB_CAUGHT = "bomb caught"
REASON_TOO_MANY_MISSES = "too many fruits missed"


@dataclass(frozen=True)
class ItemKind:
    tag: str
    emoji: str
    score: int
    is_hazard: bool = False


@dataclass(frozen=True)
class LevelConfig:
    level: int
    fall_duration_ms: int
    hazard_probability: float


# Declared order matters: weighted selection walks it front to back.
ITEM_KINDS: Dict[str, ItemKind] = {
    "apple": ItemKind("apple", "🍎", 100),
    "banana": ItemKind("banana", "🍌", 150),
    "watermelon": ItemKind("watermelon", "🍉", 200),
    "cherry": ItemKind("cherry", "🍒", 250),
    "bomb": ItemKind("bomb", "💣", 0, is_hazard=True),
}
DEFAULT_ITEM_TAG = "apple"

LEVEL_SCHEDULE: Dict[int, LevelConfig] = {
    1: LevelConfig(1, 4000, 0.05),
    2: LevelConfig(2, 3500, 0.05),
    3: LevelConfig(3, 3000, 0.10),
    4: LevelConfig(4, 2500, 0.10),
    5: LevelConfig(5, 2000, 0.20),
}

# Spawn weights per level bracket, in ITEM_KINDS order. Each row sums to 1.0.
# (highest level of the bracket, weights)
SPAWN_WEIGHTS: Tuple[Tuple[int, Tuple[float, ...]], ...] = (
    (2, (0.40, 0.30, 0.20, 0.05, 0.05)),
    (4, (0.30, 0.25, 0.25, 0.10, 0.10)),
    (MAX_LEVEL, (0.25, 0.20, 0.20, 0.15, 0.20)),
)


def clamp_level(level):
    return max(1, min(level, MAX_LEVEL))


def level_config(level):
    """Fall duration and hazard odds for a level; out-of-range levels are clamped."""
    return LEVEL_SCHEDULE[clamp_level(level)]


def spawn_weights_for_level(level):
    level = clamp_level(level)
    for top, weights in SPAWN_WEIGHTS:
        if level <= top:
            return weights
    return SPAWN_WEIGHTS[-1][1]


def zone_for_label(label):
    """Map a classifier label onto a zone, or None when the label is not a zone."""
    if not label:
        return None
    return ZONE_LABELS.get(label.strip().upper())


@dataclass(frozen=True)
class GameSettings:
    max_misses: int = MAX_MISSES
    max_level: int = MAX_LEVEL
    level_up_interval_ms: int = LEVEL_UP_INTERVAL_MS
    spawn_delay_min_ms: int = SPAWN_DELAY_MIN_MS
    spawn_delay_max_ms: int = SPAWN_DELAY_MAX_MS
    combo_bonuses: Tuple[Tuple[int, int], ...] = COMBO_BONUSES
    # Use the fall duration of the level an item spawned at instead of
    # re-reading the current level every frame.
    freeze_fall_duration: bool = False

    def __post_init__(self):
        if self.max_misses < 1:
            raise ValueError(f"max_misses must be positive, got {self.max_misses}")
        if not 1 <= self.max_level <= MAX_LEVEL:
            raise ValueError(f"max_level must be within 1..{MAX_LEVEL}, got {self.max_level}")
        if self.level_up_interval_ms <= 0:
            raise ValueError("level_up_interval_ms must be positive")
        if not 0 < self.spawn_delay_min_ms < self.spawn_delay_max_ms:
            raise ValueError(
                f"bad spawn delay range [{self.spawn_delay_min_ms}, {self.spawn_delay_max_ms})"
            )

    def combo_bonus(self, combo):
        return dict(self.combo_bonuses).get(combo, 0)
