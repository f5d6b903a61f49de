"""Next-piece randomizer"""
import random
from typing import Optional

from tetris_piece import PieceType


class PieceRandom:
    """Uniform draw over the 7 piece types; seeded for reproducible games."""
    PIECES = list(PieceType)

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_piece(self) -> PieceType:
        return self._rng.choice(self.PIECES)
