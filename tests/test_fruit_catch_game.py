import numpy as np
import pytest

from catch_config import ITEM_KINDS
from catch_engine import CatchEngine
from conftest import ManualClock, ScriptedRandom
from fruit_catch_game import FruitCatchGame
from game import Game
from scheduler import FrameScheduler


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def game(clock):
    engine = CatchEngine(scheduler=FrameScheduler(clock), rng=ScriptedRandom())
    return FruitCatchGame(engine)


def test_reset_starts_a_session(game):
    game.reset()

    assert game.engine.is_active
    assert game.hud == {'score': 0, 'level': 1, 'miss_count': 0, 'max_misses': 3, 'combo': 0}
    assert list(game.falling) == [0]


def test_board_follows_notifications(game, clock):
    game.reset()
    game.update('LEFT', 0.016)
    game.engine.add_item(ITEM_KINDS['banana'], 'LEFT')
    assert game.basket == 'LEFT'
    assert set(game.falling) == {0, 1}

    clock.advance(4000)
    game.update(None, 4.0)

    assert game.hud['score'] == 150
    assert game.hud['combo'] == 1
    # bomb #0 and the banana landed; a new bomb spawned on the way
    assert list(game.falling) == [2]


def test_labels_ignored_after_game_over(game, clock):
    game.reset()
    game.update('RIGHT', 0.016)
    clock.advance(4000)
    game.update(None, 4.0)
    assert game.game_over.reason == 'bomb caught'

    game.update('LEFT', 0.016)
    assert game.basket == 'RIGHT'
    assert game.pose_label == 'LEFT'


def test_reset_after_game_over_clears_board(game, clock):
    game.reset()
    game.update('RIGHT', 0.016)
    clock.advance(4000)
    game.update(None, 4.0)

    game.reset()

    assert game.game_over is None
    assert game.basket == 'CENTER'
    assert list(game.falling) == [0]


def test_stop_empties_board(game):
    game.reset()
    game.stop()

    assert game.falling == {}
    assert not game.engine.is_active


def test_render_draws_on_frame(game, clock):
    game.reset()
    clock.advance(1000)
    game.update(None, 1.0)
    frame = np.zeros((720, 1280, 3), dtype=np.uint8)

    result = game.render(frame)

    assert result.shape == (720, 1280, 3)
    assert result.any()


def test_base_game_render_passes_frame_through():
    frame = np.zeros((4, 4, 3), dtype=np.uint8)

    assert Game().render(frame) is frame
