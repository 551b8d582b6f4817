from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from blockfall_rl.game import Command, FallingBlockGame, GameConfig
from blockfall_rl.utils.logging import setup_logger
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
}

NEW_GAME_KEYS = (pygame.K_n, pygame.K_r)


def command_for_key(key: int) -> Optional[Command]:
    return KEY_TO_COMMAND.get(key)


class GravityTimer:
    """Accumulates frame time and says when the next gravity tick is due."""

    def __init__(self) -> None:
        self.elapsed = 0.0

    def reset(self) -> None:
        self.elapsed = 0.0

    def advance(self, dt: float, interval: float) -> bool:
        self.elapsed += dt
        if self.elapsed >= interval:
            self.elapsed = 0.0
            return True
        return False


def handle_key(game: FallingBlockGame, key: int) -> bool:
    """Route one key press to the engine. Returns False when the player quits."""
    if key == pygame.K_ESCAPE:
        return False
    if game.is_game_over():
        if key in NEW_GAME_KEYS:
            game.reset()
            logger.info("new game")
        return True
    cmd = command_for_key(key)
    if cmd is not None:
        game.command(cmd)
    return True


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--level", type=int, default=0, help="Starting level")
    p.add_argument("--cell", type=int, default=30, help="Cell size in pixels")
    p.add_argument("--log-level", type=str, default="info")
    return p


def run(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level)

    game = FallingBlockGame(GameConfig(width=args.width, height=args.height,
                                       random_seed=args.seed, start_level=args.level))
    renderer = Renderer(cell_size=args.cell)
    timer = GravityTimer()

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(game.grid.height, game.grid.width))
        pygame.display.set_caption("Blockfall - Human Play")

        running = True
        while running:
            dt = clock.tick(60) / 1000.0

            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = handle_key(game, event.key) and running

            # Gravity
            if game.is_game_over():
                timer.reset()
            elif timer.advance(dt, game.tick_interval()):
                game.tick()

            renderer.draw(screen, game)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
