from __future__ import annotations

import os
from typing import Iterable, Optional

# pygame tests run without a window or sound device
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from blockfall_rl.game import FallingBlockGame, GameConfig, PieceGenerator, ShapeKind


class SequenceGenerator(PieceGenerator):
    """Deals a fixed cycle of kinds instead of random ones."""

    def __init__(self, kinds: Iterable[ShapeKind]) -> None:
        super().__init__(seed=0)
        self.kinds = list(kinds)
        self.index = 0

    def reseed(self, seed: Optional[int]) -> None:
        self.index = 0

    def next_kind(self) -> ShapeKind:
        kind = self.kinds[self.index % len(self.kinds)]
        self.index += 1
        return kind


def scripted_game(*kinds: ShapeKind, width: int = 10, height: int = 20, start_level: int = 0) -> FallingBlockGame:
    return FallingBlockGame(
        GameConfig(width=width, height=height, start_level=start_level),
        generator=SequenceGenerator(kinds),
    )


@pytest.fixture
def i_game() -> FallingBlockGame:
    return scripted_game(ShapeKind.I)
