from __future__ import annotations

import random
from typing import Optional

from .shapes import ShapeKind


class PieceGenerator:
    """Uniform, memoryless stream of piece kinds.

    Pass a `random.Random` to share a source with the caller, or a seed for a
    reproducible stream. With neither, the stream is seeded from OS entropy.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self._kinds = list(ShapeKind)

    def reseed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def next_kind(self) -> ShapeKind:
        return self.rng.choice(self._kinds)
