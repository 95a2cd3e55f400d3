"""Evaluation values, tapered scores and game-phase blending."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

_MATE_0_VAL = 30_000
_MATE_CUTOFF = 29_000
_PAWN_VALUE = 100

Number = Union[int, float]


class Color(enum.Enum):
    """A side in a game of chess."""

    WHITE = 0
    BLACK = 1

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


@dataclass(frozen=True, order=True)
class Eval:
    """An evaluation in centipawns; higher is better for White.

    Magnitudes above 29,000 are reserved for mates: 30,000 is White having
    mated, 29,999 is White to mate in one ply, and so on.
    """

    cp: int

    MIN: ClassVar["Eval"]
    MAX: ClassVar["Eval"]
    BLACK_MATE: ClassVar["Eval"]
    WHITE_MATE: ClassVar["Eval"]
    DRAW: ClassVar["Eval"]

    @staticmethod
    def pawns(x: float) -> "Eval":
        """An evaluation worth `x` pawns, truncated to the centipawn."""
        return Eval(int(x * _PAWN_VALUE))

    @staticmethod
    def centipawns(x: int) -> "Eval":
        """An evaluation worth `x` centipawns."""
        return Eval(int(x))

    @staticmethod
    def mate_in(nplies: int) -> "Eval":
        """White mates in `nplies` half-moves; negate for Black."""
        return Eval(_MATE_0_VAL - nplies)

    def step_back_by(self, n: int) -> "Eval":
        """Move a mate evaluation `n` plies further from the mate."""
        if self.cp < -_MATE_CUTOFF:
            return Eval(self.cp + n)
        if _MATE_CUTOFF < self.cp:
            return Eval(self.cp - n)
        return self

    def step_forward_by(self, n: int) -> "Eval":
        """Move a mate evaluation `n` plies closer to the mate."""
        if self.cp < -_MATE_CUTOFF:
            return Eval(self.cp - n)
        if _MATE_CUTOFF < self.cp:
            return Eval(self.cp + n)
        return self

    def is_mate(self) -> bool:
        return self.cp > _MATE_CUTOFF or self.cp < -_MATE_CUTOFF

    def moves_to_mate(self) -> Optional[int]:
        """Full moves until mate under perfect play, or None if not a mate."""
        if not self.is_mate():
            return None
        if self.cp > 0:
            return (_MATE_0_VAL - self.cp + 1) // 2
        return (_MATE_0_VAL + self.cp + 1) // 2

    def centipawn_val(self) -> int:
        return self.cp

    def float_val(self) -> float:
        """The evaluation in pawns."""
        return self.cp / 100.0

    def in_perspective(self, player: Color) -> "Eval":
        """Negate the evaluation if `player` is Black."""
        return self if player is Color.WHITE else Eval(-self.cp)

    def __add__(self, other: "Eval") -> "Eval":
        if not isinstance(other, Eval):
            return NotImplemented
        return Eval(self.cp + other.cp)

    def __sub__(self, other: "Eval") -> "Eval":
        if not isinstance(other, Eval):
            return NotImplemented
        return Eval(self.cp - other.cp)

    def __neg__(self) -> "Eval":
        return Eval(-self.cp)

    def __mul__(self, other: Number) -> "Eval":
        if isinstance(other, bool) or not isinstance(other, (int, float)):
            return NotImplemented
        if isinstance(other, float):
            return Eval(int(self.cp * other))
        return Eval(self.cp * other)

    __rmul__ = __mul__

    def __str__(self) -> str:
        if self.cp > _MATE_CUTOFF:
            return f"+M{(_MATE_0_VAL - self.cp + 1) // 2}"
        if self.cp < -_MATE_CUTOFF:
            return f"-M{(_MATE_0_VAL + self.cp + 1) // 2}"
        if self.cp == 0:
            return "00.00"
        return f"{self.cp / _PAWN_VALUE:+.2f}"


Eval.MIN = Eval(-_MATE_0_VAL - 1000)
Eval.MAX = Eval(_MATE_0_VAL + 1000)
Eval.BLACK_MATE = Eval(-_MATE_0_VAL)
Eval.WHITE_MATE = Eval(_MATE_0_VAL)
Eval.DRAW = Eval(0)


@dataclass(frozen=True)
class Score:
    """A pair of midgame and endgame evaluations."""

    mg: Eval
    eg: Eval

    DRAW: ClassVar["Score"]

    @staticmethod
    def centipawns(mg: int, eg: int) -> "Score":
        return Score(Eval.centipawns(mg), Eval.centipawns(eg))

    def blend(self, phase: float) -> Eval:
        """Mix midgame and endgame by `phase` (1 is full midgame)."""
        if not 0.0 <= phase <= 1.0:
            raise ValueError(f"phase must lie in [0, 1], got {phase}")
        return self.mg * phase + self.eg * (1.0 - phase)

    def __add__(self, other: "Score") -> "Score":
        if not isinstance(other, Score):
            return NotImplemented
        return Score(self.mg + other.mg, self.eg + other.eg)

    def __sub__(self, other: "Score") -> "Score":
        if not isinstance(other, Score):
            return NotImplemented
        return Score(self.mg - other.mg, self.eg - other.eg)

    def __neg__(self) -> "Score":
        return Score(-self.mg, -self.eg)

    def __mul__(self, other: int) -> "Score":
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return Score(self.mg * other, self.eg * other)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"({self.mg}, {self.eg})"


Score.DRAW = Score.centipawns(0, 0)

MG_LIMIT = Eval.centipawns(2408)
"""The cutoff for pure midgame material."""

EG_LIMIT = Eval.centipawns(1348)
"""The cutoff for pure endgame material."""


def calculate_phase(mg_npm: Eval) -> float:
    """Phase of the game from non-pawn midgame material: 0 endgame, 1 midgame."""
    bounded = min(max(mg_npm, EG_LIMIT), MG_LIMIT)
    return (EG_LIMIT - bounded).float_val() / (EG_LIMIT - MG_LIMIT).float_val()