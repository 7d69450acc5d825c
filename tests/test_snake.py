import random

import pytest

from pocketarcade.snake import (
    CANCEL_SOUND,
    CONFIRM_SOUND,
    EAT_SOUND,
    LOSE_SOUND,
    MOVE_SOUND,
    Snake,
)
from pocketarcade.text_input import Button


class RecordingAudio:
    def __init__(self):
        self.played = []

    def play(self, sound):
        self.played.append(tuple(sound))

    def stop(self):
        pass


@pytest.fixture
def setup():
    now = [0.0]
    store = {}
    audio = RecordingAudio()
    game = Snake(rng=random.Random(3), clock=lambda: now[0], highscore_store=store,
                 audio=audio)
    return game, now, store, audio


def started(game):
    game.on_start()
    game.on_loop(0.01)
    return game


def test_highscore_table_bound_to_snake(setup):
    game, _, store, _ = setup
    assert "Snake" in store
    assert game.status == "title"
    assert game.snake_length == 0


def test_title_setup_places_menu_snake(setup):
    game = started(setup[0])
    assert game.snake_length == 30
    assert game.snake_x[0] == 1
    assert game.dir_x == game.speed
    assert any(label.text == "SPEED: 1" for label in game.labels)


def test_menu_navigation(setup):
    game, _, _, audio = setup
    started(game)
    game.button_pressed(Button.RIGHT)
    assert game.border_flag is False
    assert game.menu_signal == 0
    game.button_pressed(Button.RIGHT)
    assert game.menu_signal == 1
    game.button_pressed(Button.A)
    assert game.speed == 2
    game.button_pressed(Button.NUM_3)
    assert game.speed == 3
    game.button_pressed(Button.LEFT)
    assert game.menu_signal == 0
    assert game.border_flag is False
    game.button_pressed(Button.LEFT)
    assert game.border_flag is True
    game.button_pressed(Button.LEFT)
    assert game.menu_signal == 3
    assert audio.played.count(MOVE_SOUND) == 7


def test_speed_keys_ignored_outside_speed_entry(setup):
    game = started(setup[0])
    game.button_pressed(Button.NUM_2)
    assert game.speed == 1


def test_back_on_title_pops(setup):
    game, _, _, audio = setup
    started(game)
    game.button_pressed(Button.B)
    assert game.popped
    assert audio.played[-1] == CANCEL_SOUND


def test_start_new_game(setup):
    game, _, _, audio = setup
    started(game)
    game.button_pressed(Button.A)
    assert game.status == "newgame"
    assert audio.played[-1] == CONFIRM_SOUND
    game.on_loop(0.01)
    assert game.status == "oldgame"
    assert game.snake_y[0] == 63
    assert game.dir_x == 1
    assert game.h_score == 0


def test_direction_keys(setup):
    game = started(setup[0])
    game.button_pressed(Button.A)
    game.on_loop(0.01)
    game.button_pressed(Button.NUM_2)
    assert (game.dir_x, game.dir_y) == (0, -game.speed)
    game.button_pressed(Button.NUM_8)
    assert (game.dir_x, game.dir_y) == (0, -game.speed)
    game.button_pressed(Button.NUM_4)
    assert (game.dir_x, game.dir_y) == (-game.speed, 0)
    game.button_pressed(Button.B)
    assert game.status == "paused"
    game.on_loop(0.01)
    game.button_pressed(Button.A)
    assert game.status == "oldgame"


def test_control_shifts_body(setup):
    game, _, _, _ = setup
    game.snake_length = 4
    game.snake_x[:4] = [20, 19, 18, 17]
    game.snake_y[:4] = [30, 30, 30, 30]
    game.dir_x, game.dir_y = 0, 2
    game.control()
    assert game.snake_x[:5] == [20, 20, 19, 18, 17]
    assert game.snake_y[0] == 32
    assert game.snake_y[1] == 30


def test_control_growth_fills_tail(setup):
    game, _, _, _ = setup
    game.snake_length = 18
    game.snake_x[:18] = list(range(100, 82, -1))
    game.dir_x, game.dir_y = 1, 0
    game.bigger = True
    head = game.snake_x[0]
    game.control()
    assert game.bigger is False
    assert game.snake_x[0] == head + 1
    tail = game.snake_x[13:19]
    assert len(set(tail)) == 1
    assert game.snake_x[1] == head


def test_food_check_grows_snake(setup):
    game, _, _, audio = setup
    game.snake_length = 12
    game.speed = 2
    game.snake_x[0], game.snake_y[0] = 50, 50
    game.food_x, game.food_y = 52, 52
    game.food_check()
    assert game.eaten is True
    assert game.bigger is True
    assert game.snake_length == 18
    assert game.h_score == 2
    assert audio.played[-1] == EAT_SOUND


def test_food_check_misses(setup):
    game, _, _, _ = setup
    game.snake_length = 12
    game.snake_x[0], game.snake_y[0] = 10, 10
    game.food_x, game.food_y = 100, 100
    game.food_check()
    assert game.eaten is False
    assert game.snake_length == 12


def test_crash_into_wall(setup):
    game, _, _, audio = setup
    game.border_flag = True
    game.snake_length = 2
    game.snake_x[:2] = [0, 1]
    game.snake_y[:2] = [50, 50]
    game.status = "oldgame"
    game.crash()
    assert game.status == "dead"
    assert audio.played[-1] == LOSE_SOUND


def test_wrap_without_walls(setup):
    game, _, _, _ = setup
    game.border_flag = False
    game.snake_length = 2
    game.snake_x[:2] = [-3, 40]
    game.snake_y[:2] = [60, -20]
    game.status = "oldgame"
    game.crash()
    assert game.snake_x[0] == game.canvas.width - 1
    assert game.snake_y[1] == game.canvas.height - 1
    assert game.snake_x[1] == 40
    assert game.status == "oldgame"


def test_menu_snake_turns_at_right_edge(setup):
    game, _, _, _ = setup
    game.speed = 2
    game.snake_x[0] = game.canvas.width - 7
    game.snake_y[0] = 0
    game.snake_menu_control()
    assert (game.dir_x, game.dir_y) == (0, 2)
    game.snake_y[0] = game.canvas.height - 7
    game.snake_menu_control()
    assert (game.dir_x, game.dir_y) == (-2, 0)


def test_erase_highscores(setup):
    game, _, _, _ = setup
    started(game)
    game.h_score = 4
    game.status = "enterInitials"
    game.on_loop(0.01)
    game.button_pressed(Button.A)
    game.on_loop(0.01)
    assert game.highscore.count() == 1
    game.button_pressed(Button.UP)
    assert game.status == "eraseData"
    game.on_loop(0.01)
    game.button_pressed(Button.B)
    assert game.status == "dataDisplay"
    game.on_loop(0.01)
    game.button_pressed(Button.UP)
    game.on_loop(0.01)
    game.button_pressed(Button.A)
    assert game.highscore.count() == 0
    assert game.status == "title"


def test_dead_screen_waits(setup):
    game, _, _, _ = setup
    started(game)
    game.status = "dead"
    game.dead_time = 0
    game.on_loop(1.0)
    assert game.status == "dead"
    game.on_loop(2.0)
    assert game.status == "enterInitials"