from __future__ import annotations

import numpy as np
import pygame
import pytest

from blockfall_rl.game import Command, Point, ShapeKind
from blockfall_rl.visualization.human_play import (
    GravityTimer,
    build_parser,
    command_for_key,
    handle_key,
)
from blockfall_rl.visualization.renderer import GHOST, Renderer, color_for_value

from conftest import scripted_game


@pytest.fixture
def display():
    pygame.init()
    yield pygame.display.set_mode((1, 1))
    pygame.quit()


def test_key_bindings() -> None:
    assert command_for_key(pygame.K_LEFT) == Command.MOVE_LEFT
    assert command_for_key(pygame.K_RIGHT) == Command.MOVE_RIGHT
    assert command_for_key(pygame.K_UP) == Command.ROTATE_CW
    assert command_for_key(pygame.K_z) == Command.ROTATE_CCW
    assert command_for_key(pygame.K_DOWN) == Command.SOFT_DROP
    assert command_for_key(pygame.K_SPACE) == Command.HARD_DROP
    assert command_for_key(pygame.K_q) is None


def test_handle_key_routes_commands_and_quits() -> None:
    game = scripted_game(ShapeKind.I)
    assert handle_key(game, pygame.K_LEFT) is True
    assert game.active.col == 4
    assert handle_key(game, pygame.K_q) is True
    assert handle_key(game, pygame.K_ESCAPE) is False


def test_new_game_key_only_after_game_over() -> None:
    game = scripted_game(ShapeKind.O)
    handle_key(game, pygame.K_SPACE)
    assert game.pieces_locked == 1
    handle_key(game, pygame.K_n)
    assert game.pieces_locked == 1

    while not game.is_game_over():
        handle_key(game, pygame.K_SPACE)
    handle_key(game, pygame.K_LEFT)
    assert game.is_game_over()
    handle_key(game, pygame.K_r)
    assert not game.is_game_over()
    assert game.pieces_locked == 0


def test_gravity_timer_fires_on_interval() -> None:
    timer = GravityTimer()
    assert timer.advance(0.4, 1.0) is False
    assert timer.advance(0.4, 1.0) is False
    assert timer.advance(0.3, 1.0) is True
    assert timer.advance(0.3, 1.0) is False
    timer.reset()
    assert timer.elapsed == 0.0


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert (args.width, args.height, args.level, args.seed) == (10, 20, 0, None)


def test_palette_colors_each_kind() -> None:
    colors = {color_for_value(k.board_value) for k in ShapeKind}
    assert len(colors) == 7
    assert color_for_value(-3) == color_for_value(3)


def test_grid_surface_paints_cells_and_ghost(display) -> None:
    renderer = Renderer(cell_size=10)
    state = np.zeros((4, 3), dtype=np.int8)
    state[3, 0] = ShapeKind.I.board_value
    surf = renderer.grid_surface(state, ghost=[Point(2, 3), Point(0, 3)])
    assert surf.get_size() == (30, 40)
    assert tuple(surf.get_at((5, 35)))[:3] == color_for_value(ShapeKind.I.board_value)
    assert tuple(surf.get_at((25, 35)))[:3] == GHOST
    assert tuple(surf.get_at((15, 5)))[:3] == color_for_value(0)


def test_full_frame_draws(display) -> None:
    game = scripted_game(ShapeKind.T)
    renderer = Renderer(cell_size=8)
    screen = pygame.display.set_mode(renderer.window_size(game.grid.height, game.grid.width))
    renderer.draw(screen, game)
    active = game.active_piece_cells()[0]
    x = renderer.margin + active.x * 8 + 2
    y = renderer.margin + active.y * 8 + 2
    assert tuple(screen.get_at((x, y)))[:3] == color_for_value(ShapeKind.T.board_value)
