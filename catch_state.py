# catch_state.py

from dataclasses import dataclass

from catch_config import DEFAULT_ZONE, MAX_LEVEL, MAX_MISSES, ItemKind

IDLE = "IDLE"
ACTIVE = "ACTIVE"
ENDED = "ENDED"


class InvariantViolation(AssertionError):
    """The engine reached a state its rules forbid. Always a bug, never a game event."""


@dataclass(frozen=True)
class FallingItem:
    id: int
    kind: ItemKind
    zone: str
    created_at: float
    fall_duration_ms: int

    @property
    def is_hazard(self):
        return self.kind.is_hazard

    def progress(self, now, fall_duration_ms):
        return (now - self.created_at) / fall_duration_ms


class GameState:
    def __init__(self, max_misses=MAX_MISSES, max_level=MAX_LEVEL):
        self.phase = IDLE
        self.score = 0
        self.level = 1
        self.max_level = max_level
        self.miss_count = 0
        self.max_misses = max_misses
        self.combo = 0
        self.fruits_caught = 0
        self.basket_position = DEFAULT_ZONE

        # Insertion order is creation order
        self.items = []
        self.next_item_id = 0
        self.started_at = None

    @property
    def is_active(self):
        return self.phase == ACTIVE

    def new_item_id(self):
        item_id = self.next_item_id
        self.next_item_id += 1
        return item_id

    def find_item(self, item_id):
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def remove_item(self, item_id):
        item = self.find_item(item_id)
        if item is not None:
            self.items.remove(item)
        return item

    def check_invariants(self):
        if self.score < 0:
            raise InvariantViolation(f"negative score {self.score}")
        if not 0 <= self.miss_count <= self.max_misses:
            raise InvariantViolation(f"miss count {self.miss_count} outside 0..{self.max_misses}")
        if self.miss_count == self.max_misses and self.is_active:
            raise InvariantViolation("still active after the last allowed miss")
        if not 1 <= self.level <= self.max_level:
            raise InvariantViolation(f"level {self.level} outside 1..{self.max_level}")
        if self.combo < 0:
            raise InvariantViolation(f"negative combo {self.combo}")

    def snapshot(self):
        return {
            'is_active': self.is_active,
            'phase': self.phase,
            'score': self.score,
            'level': self.level,
            'miss_count': self.miss_count,
            'max_misses': self.max_misses,
            'combo': self.combo,
            'basket_position': self.basket_position,
            'fruits_caught': self.fruits_caught,
            'active_items': len(self.items),
        }
