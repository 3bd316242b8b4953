import pygame
import pytest

from engine import FIELD_HEIGHT, JUMP_FORCE, Bird, Obstacle, Phase
from game import MAX_TILT, RocketGame, obstacle_rects, rocket_tilt


@pytest.fixture
def game():
    game = RocketGame(seed=42)
    yield game
    game._shutdown()


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k, mod=0, unicode="", scancode=0)


def click(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=button)


def button_center(game, label):
    for text, rect, _ in game.buttons():
        if text == label:
            return rect.center
    raise AssertionError(f"no {label} button")


def test_rocket_tilt_follows_velocity():
    assert rocket_tilt(Bird(velocity=-10.0)) == -30.0
    assert rocket_tilt(Bird(velocity=2.0)) == 6.0
    assert rocket_tilt(Bird(velocity=25.0)) == MAX_TILT


def test_obstacle_rects_leave_the_gap_open():
    top, bottom = obstacle_rects(Obstacle(x=120.0, gap_top=150.0))

    assert top == pygame.Rect(120, 0, 80, 150)
    assert bottom == pygame.Rect(120, 350, 80, FIELD_HEIGHT - 350)


def test_start_button_starts_round(game):
    game.handle_event(click(button_center(game, "START GAME")))

    assert game.state.phase is Phase.PLAYING
    assert game.session.scheduler.scheduled


def test_space_and_click_both_thrust(game):
    game.handle_event(key(pygame.K_RETURN))
    assert game.state.phase is Phase.PLAYING

    game.handle_event(key(pygame.K_SPACE))
    assert game.state.bird.velocity == JUMP_FORCE

    game.session.tick()
    game.handle_event(click((300, 300)))
    assert game.state.bird.velocity == JUMP_FORCE


def test_right_click_does_nothing(game):
    game.handle_event(key(pygame.K_RETURN))
    game.handle_event(click((300, 300), button=3))

    assert game.state.bird.velocity == 0.0


def test_space_on_menu_does_not_start(game):
    game.handle_event(key(pygame.K_SPACE))

    assert game.state.phase is Phase.IDLE


def test_game_over_buttons(game):
    game.handle_event(key(pygame.K_RETURN))
    while game.state.phase is Phase.PLAYING:
        game.session.scheduler.run_pending()
    assert game.state.phase is Phase.GAME_OVER

    game.handle_event(click(button_center(game, "PLAY AGAIN")))
    assert game.state.phase is Phase.PLAYING

    while game.state.phase is Phase.PLAYING:
        game.session.scheduler.run_pending()
    game.handle_event(click(button_center(game, "MENU")))
    assert game.state.phase is Phase.IDLE


def test_menu_key_from_game_over(game):
    game.handle_event(key(pygame.K_RETURN))
    while game.state.phase is Phase.PLAYING:
        game.session.scheduler.run_pending()

    game.handle_event(key(pygame.K_m))

    assert game.state.phase is Phase.IDLE


def test_escape_quits(game):
    with pytest.raises(SystemExit):
        game.handle_event(key(pygame.K_ESCAPE))


def test_draw_every_phase(game):
    game.draw()
    game.handle_event(key(pygame.K_RETURN))
    game.session.tick()
    game.draw()
    while game.state.phase is Phase.PLAYING:
        game.session.scheduler.run_pending()
    game.draw()
