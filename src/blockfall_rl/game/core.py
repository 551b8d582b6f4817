from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import GameGrid
from .randomizer import PieceGenerator
from .rules import ScoringRules
from .shapes import ROTATION_COUNT, Shape, ShapeKind, cells_at, shape_for, spawn_row


logger = logging.getLogger(__name__)

# Column offsets tried, in order, when a rotation is blocked in place.
WALL_KICKS: Tuple[int, ...] = (0, -1, 1)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    start_level: int = 0

    def __post_init__(self) -> None:
        # Every rotation of every piece must fit on an empty board.
        if self.width < 4:
            raise ValueError(f"width must be >= 4, got {self.width}")
        if self.height < 4:
            raise ValueError(f"height must be >= 4, got {self.height}")
        if self.start_level < 0:
            raise ValueError(f"start_level must be >= 0, got {self.start_level}")


@dataclass(frozen=True)
class ActivePiece:
    kind: ShapeKind
    rotation: int  # 0..3
    col: int
    row: int

    def shape(self) -> Shape:
        return shape_for(self.kind, self.rotation)

    def cells(self) -> Shape:
        return cells_at(self.shape(), self.col, self.row)

    def moved(self, dcol: int = 0, drow: int = 0) -> "ActivePiece":
        return replace(self, col=self.col + dcol, row=self.row + drow)

    def rotated(self, delta: int) -> "ActivePiece":
        return replace(self, rotation=(self.rotation + delta) % ROTATION_COUNT)


@dataclass(frozen=True)
class TickResult:
    locked: bool = False
    rows_cleared: int = 0
    game_over: bool = False


class FallingBlockGame:
    """Rules engine for the falling-block game.

    The driver calls `tick()` on a timer and `command()` for player input; both
    finish the whole spawn -> fall -> lock -> clear cycle before returning.
    Illegal moves and rotations are rejected by returning False, never by
    raising. Once the game is over nothing changes until `reset()`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        generator: Optional[PieceGenerator] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.generator = generator or PieceGenerator(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.score = 0
        self.level = self.config.start_level
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self.active: Optional[ActivePiece] = None
        self.next_kind: ShapeKind = ShapeKind.T
        self.last_result = TickResult()
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.generator.reseed(seed)
        self.grid.reset()
        self.score = 0
        self.level = self.config.start_level
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self.last_result = TickResult()
        self.next_kind = self.generator.next_kind()
        self._spawn_piece()

    def _fits(self, piece: ActivePiece) -> bool:
        return self.grid.can_place(piece.shape(), (piece.col, piece.row))

    def _spawn_piece(self) -> bool:
        kind = self.next_kind
        self.next_kind = self.generator.next_kind()
        piece = ActivePiece(kind=kind, rotation=0, col=self.grid.width // 2, row=spawn_row(kind))
        if not self._fits(piece):
            self.active = None
            self.game_over = True
            logger.info(
                "game over: no room to spawn %s (score=%d, lines=%d, level=%d)",
                kind.name, self.score, self.lines_cleared_total, self.level,
            )
            return False
        self.active = piece
        logger.debug("spawned %s at col=%d row=%d, next=%s", kind.name, piece.col, piece.row, self.next_kind.name)
        return True

    # ---- commands ------------------------------------------------------------------

    def move(self, dcol: int) -> bool:
        if self.game_over or self.active is None:
            return False
        candidate = self.active.moved(dcol=dcol)
        if not self._fits(candidate):
            return False
        self.active = candidate
        return True

    def rotate(self, clockwise: bool = True) -> bool:
        if self.game_over or self.active is None:
            return False
        turned = self.active.rotated(1 if clockwise else -1)
        for kick in WALL_KICKS:
            candidate = turned.moved(dcol=kick)
            if self._fits(candidate):
                self.active = candidate
                return True
        return False

    def tick(self) -> TickResult:
        """Gravity step: fall one row, or lock if the piece has landed."""
        if self.game_over or self.active is None:
            return TickResult(game_over=True)
        candidate = self.active.moved(drow=1)
        if self._fits(candidate):
            self.active = candidate
            result = TickResult()
        else:
            result = self._lock_piece()
        self.last_result = result
        return result

    def soft_drop(self) -> TickResult:
        return self.tick()

    def hard_drop(self) -> TickResult:
        if self.game_over or self.active is None:
            return TickResult(game_over=True)
        self.active = self._landing(self.active)
        result = self._lock_piece()
        self.last_result = result
        return result

    def command(self, cmd: Command | int) -> bool:
        """Apply one player command; returns whether it was accepted.

        Drops are always accepted while the game runs since they either move
        the piece or lock it; the lock outcome is left in `last_result`.
        """
        cmd = Command(cmd)
        if self.game_over:
            return False
        if cmd == Command.MOVE_LEFT:
            return self.move(-1)
        if cmd == Command.MOVE_RIGHT:
            return self.move(1)
        if cmd == Command.ROTATE_CW:
            return self.rotate(clockwise=True)
        if cmd == Command.ROTATE_CCW:
            return self.rotate(clockwise=False)
        if cmd == Command.SOFT_DROP:
            self.soft_drop()
            return True
        self.hard_drop()
        return True

    # ---- internals -----------------------------------------------------------------

    def _landing(self, piece: ActivePiece) -> ActivePiece:
        while True:
            below = piece.moved(drow=1)
            if not self._fits(below):
                return piece
            piece = below

    def _lock_piece(self) -> TickResult:
        assert self.active is not None
        piece = self.active
        self.grid.lock(piece.shape(), (piece.col, piece.row), piece.kind.board_value)
        self.pieces_locked += 1
        self.active = None

        lines = self.grid.clear_completed_rows()
        # Score at the level in force when the piece landed.
        self.score += self.rules.score_for_lines(lines, self.level)
        self.lines_cleared_total += lines
        new_level = max(self.level, self.rules.level_for_lines(self.lines_cleared_total, self.config.start_level))
        if lines:
            logger.debug("locked %s, cleared %d rows (total=%d, score=%d)", piece.kind.name, lines,
                         self.lines_cleared_total, self.score)
        if new_level != self.level:
            logger.info("level up: %d -> %d", self.level, new_level)
            self.level = new_level

        spawned = self._spawn_piece()
        return TickResult(locked=True, rows_cleared=lines, game_over=not spawned)

    # ---- queries -------------------------------------------------------------------

    def is_game_over(self) -> bool:
        return self.game_over

    def tick_interval(self) -> float:
        """Seconds the driver should wait between gravity ticks at the current level."""
        return self.rules.tick_interval(self.level)

    def grid_snapshot(self) -> np.ndarray:
        return self.grid.clone_state()

    def active_piece_cells(self) -> Shape:
        if self.active is None:
            return ()
        return self.active.cells()

    def ghost_row(self) -> Optional[int]:
        if self.active is None:
            return None
        return self._landing(self.active).row

    def ghost_piece_cells(self) -> Shape:
        if self.active is None:
            return ()
        return self._landing(self.active).cells()

    def next_piece_preview(self) -> Tuple[ShapeKind, Shape]:
        return self.next_kind, shape_for(self.next_kind, 0)

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.active is not None and not self.game_over:
            for x, y in self.active.cells():
                # Negative marks the falling piece
                state[y, x] = -self.active.kind.board_value
        return state


def new_game(
    seed: Optional[int] = None,
    config: Optional[GameConfig] = None,
    rules: Optional[ScoringRules] = None,
) -> FallingBlockGame:
    config = config or GameConfig()
    if seed is not None:
        config = replace(config, random_seed=seed)
    return FallingBlockGame(config, rules)
