import pytest

from catch_config import (
    ITEM_KINDS,
    LEVEL_SCHEDULE,
    SPAWN_WEIGHTS,
    GameSettings,
    level_config,
    spawn_weights_for_level,
    zone_for_label,
)


def test_catalog_has_four_fruits_and_a_bomb():
    fruits = [k for k in ITEM_KINDS.values() if not k.is_hazard]
    hazards = [k for k in ITEM_KINDS.values() if k.is_hazard]

    assert [k.tag for k in fruits] == ['apple', 'banana', 'watermelon', 'cherry']
    assert [k.score for k in fruits] == [100, 150, 200, 250]
    assert [k.tag for k in hazards] == ['bomb']


@pytest.mark.parametrize('level, duration', [(0, 4000), (1, 4000), (3, 3000), (5, 2000), (12, 2000)])
def test_level_config_clamps(level, duration):
    assert level_config(level).fall_duration_ms == duration


def test_fall_gets_faster_and_bombs_more_likely():
    configs = [LEVEL_SCHEDULE[level] for level in range(1, 6)]
    durations = [c.fall_duration_ms for c in configs]
    odds = [c.hazard_probability for c in configs]

    assert durations == sorted(durations, reverse=True)
    assert odds == sorted(odds)


def test_spawn_weights_sum_to_one():
    for _, weights in SPAWN_WEIGHTS:
        assert len(weights) == len(ITEM_KINDS)
        assert sum(weights) == pytest.approx(1.0)


def test_bomb_weight_matches_level_schedule():
    bomb_index = list(ITEM_KINDS).index('bomb')
    for level in range(1, 6):
        weights = spawn_weights_for_level(level)
        assert weights[bomb_index] == pytest.approx(LEVEL_SCHEDULE[level].hazard_probability)


@pytest.mark.parametrize('level, bracket', [(1, 0), (2, 0), (3, 1), (4, 1), (5, 2), (9, 2)])
def test_spawn_weight_brackets(level, bracket):
    assert spawn_weights_for_level(level) == SPAWN_WEIGHTS[bracket][1]


@pytest.mark.parametrize('label, zone', [
    ('LEFT', 'LEFT'),
    ('center', 'CENTER'),
    (' Right ', 'RIGHT'),
    ('좌', 'LEFT'),
    ('중앙', 'CENTER'),
    ('우', 'RIGHT'),
    ('UP', None),
    ('', None),
    (None, None),
])
def test_zone_for_label(label, zone):
    assert zone_for_label(label) == zone


@pytest.mark.parametrize('kwargs', [
    {'max_misses': 0},
    {'max_level': 6},
    {'level_up_interval_ms': 0},
    {'spawn_delay_min_ms': 2500, 'spawn_delay_max_ms': 1500},
])
def test_settings_reject_bad_values(kwargs):
    with pytest.raises(ValueError):
        GameSettings(**kwargs)


def test_default_settings():
    settings = GameSettings()
    assert settings.max_misses == 3
    assert settings.combo_bonuses == ((5, 50), (10, 100))
    assert not settings.freeze_fall_duration


def test_settings_are_hashable():
    assert hash(GameSettings()) == hash(GameSettings())
    assert len({GameSettings(), GameSettings(), GameSettings(max_misses=5)}) == 2


@pytest.mark.parametrize('combo, bonus', [(1, 0), (4, 0), (5, 50), (6, 0), (10, 100), (15, 0)])
def test_combo_bonus(combo, bonus):
    assert GameSettings().combo_bonus(combo) == bonus


def test_custom_combo_bonuses():
    settings = GameSettings(combo_bonuses=((3, 30),))
    assert settings.combo_bonus(3) == 30
    assert settings.combo_bonus(5) == 0
