import numpy as np
import pytest

from flappy_dragon.game import SCREEN_HEIGHT, SCREEN_WIDTH, FlappyDragon, GameMode
from flappy_dragon.surface import NAVY, CellSurface, Key


@pytest.fixture
def game():
    return FlappyDragon(rng=np.random.default_rng(1234))


@pytest.fixture
def cells():
    return CellSurface(SCREEN_WIDTH, SCREEN_HEIGHT)


def _tick(game, cells, ms=0.0, key=None):
    cells.frame_time_ms = ms
    cells.key = key
    game.tick(cells)


def _start(game, cells):
    _tick(game, cells, key=Key.P)
    assert game.mode == GameMode.PLAYING


# --- Menu ---

def test_starts_in_menu(game, cells):
    assert game.mode == GameMode.MENU
    _tick(game, cells)
    assert "Welcome to Flappy Dragon!" in cells.row_text(5)
    assert "[P] Play Game" in cells.row_text(8)
    assert "[Q] Quit Game" in cells.row_text(9)
    assert game.mode == GameMode.MENU


def test_menu_ignores_other_keys(game, cells):
    _tick(game, cells, key=Key.SPACE)
    assert game.mode == GameMode.MENU
    assert not cells.quitting


def test_menu_play_resets_game(game, cells):
    game.score = 9
    game.frame_time = 50.0
    _start(game, cells)
    assert game.score == 0
    assert game.frame_time == 0.0
    assert (game.player.x, game.player.y, game.player.velocity) == (5, 25, 0.0)
    assert game.obstacle.x == SCREEN_WIDTH
    assert game.obstacle.size == 20


def test_menu_quit_requests_exit(game, cells):
    _tick(game, cells, key=Key.Q)
    assert cells.quitting
    assert game.mode == GameMode.MENU


# --- Playing ---

def test_time_below_threshold_does_not_move_player(game, cells):
    _start(game, cells)
    for _ in range(7):
        _tick(game, cells, ms=10.0)
    assert game.frame_time == 70.0
    assert (game.player.x, game.player.y, game.player.velocity) == (5, 25, 0.0)

    _tick(game, cells, ms=10.0)
    assert game.frame_time == 0.0
    assert game.player.x == 6
    assert game.player.velocity == 0.2


def test_one_physics_step_per_threshold_crossing(game, cells):
    _start(game, cells)
    # A long frame still advances only once, the remainder is dropped
    _tick(game, cells, ms=500.0)
    assert game.player.x == 6
    assert game.frame_time == 0.0


def test_flap_is_applied_every_frame(game, cells):
    _start(game, cells)
    _tick(game, cells, ms=0.0, key=Key.SPACE)
    assert game.player.velocity == -2.0
    assert game.player.x == 5


def test_playing_frame_layout(game, cells):
    _start(game, cells)
    _tick(game, cells)
    assert cells.row_text(0).startswith("Press [Space] to flap!")
    assert cells.row_text(1).startswith("Score: 0")
    assert cells.glyphs[25, 0] == "@"
    assert tuple(cells.bg[30, 40]) == NAVY
    # The obstacle sits at world column 80, i.e. screen column 75
    assert cells.glyphs[SCREEN_HEIGHT - 1, 75] == "|"


def test_passing_obstacle_scores_and_respawns(game, cells):
    _start(game, cells)
    game.obstacle.x = game.player.x
    game.obstacle.gap_y = game.player.y

    _tick(game, cells, ms=100.0)
    assert game.score == 1
    assert game.obstacle.x == game.player.x + SCREEN_WIDTH
    assert game.obstacle.size == 19
    assert game.mode == GameMode.PLAYING


def test_hitting_wall_ends_game(game, cells):
    _start(game, cells)
    game.obstacle.x = game.player.x + 1
    game.obstacle.gap_y = 39

    _tick(game, cells, ms=100.0)
    assert game.player.x == game.obstacle.x
    assert game.mode == GameMode.END
    assert game.score == 0


def test_falling_off_screen_then_replaying(game, cells):
    _start(game, cells)
    for _ in range(100):
        _tick(game, cells, ms=100.0)
        if game.mode == GameMode.END:
            break
    assert game.mode == GameMode.END
    assert game.player.y > SCREEN_HEIGHT
    # The obstacle was never reached on the way down
    assert game.player.x < SCREEN_WIDTH

    _tick(game, cells)
    assert "You are dead!" in cells.row_text(5)
    assert "You earned 0 points." in cells.row_text(6)

    _tick(game, cells, key=Key.P)
    assert game.mode == GameMode.PLAYING
    assert game.score == 0
    assert (game.player.x, game.player.y) == (5, 25)


def test_end_screen_shows_score_and_quits(game, cells):
    game.mode = GameMode.END
    game.score = 3
    _tick(game, cells)
    assert "You earned 3 points." in cells.row_text(6)

    _tick(game, cells, key=Key.Q)
    assert cells.quitting
    assert game.mode == GameMode.END


def test_seeded_games_place_the_same_obstacles():
    a = FlappyDragon(rng=np.random.default_rng(99))
    b = FlappyDragon(rng=np.random.default_rng(99))
    gaps_a, gaps_b = [], []
    for _ in range(5):
        a.restart()
        b.restart()
        gaps_a.append(a.obstacle.gap_y)
        gaps_b.append(b.obstacle.gap_y)
    assert gaps_a == gaps_b
