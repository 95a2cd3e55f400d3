"""Messages an engine sends to a GUI over UCI, and their wire formatting.

Moves may be given as UCI strings or as objects with a `to_uci()` method.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Optional, Sequence, Tuple, Union

from tomato.evaluate import Eval


def _uci(m: Any) -> str:
    return m if isinstance(m, str) else m.to_uci()


# --- engine information items -------------------------------------------------


@dataclass(frozen=True)
class Depth:
    """The depth searched."""

    depth: int

    def fragment(self) -> str:
        return f" depth {self.depth}"


@dataclass(frozen=True)
class SelDepth:
    """The selective search depth."""

    depth: int

    def fragment(self) -> str:
        return f" seldepth {self.depth}"


@dataclass(frozen=True)
class Time:
    """The time spent searching."""

    elapsed: timedelta

    def fragment(self) -> str:
        return f" time {self.elapsed // timedelta(milliseconds=1)}"


@dataclass(frozen=True)
class Nodes:
    """The number of nodes searched."""

    count: int

    def fragment(self) -> str:
        return f" nodes {self.count}"


@dataclass(frozen=True)
class Pv:
    """The principal variation."""

    moves: Sequence[Any]

    def fragment(self) -> str:
        return " pv" + "".join(f" {_uci(m)}" for m in self.moves)


@dataclass(frozen=True)
class MultiPv:
    """The index of the principal variation given."""

    index: int

    def fragment(self) -> str:
        return f" multipv {self.index}"


@dataclass(frozen=True)
class ScoreInfo:
    """The evaluation of the position, possibly only a bound."""

    eval: Eval
    is_lower_bound: bool = False
    is_upper_bound: bool = False

    def fragment(self) -> str:
        plies = self.eval.moves_to_mate()
        if plies is None:
            text = f" score cp {self.eval.centipawn_val()}"
        elif self.eval > Eval.DRAW:
            text = f" score mate {plies}"
        else:
            text = f" score mate -{plies}"
        if self.is_lower_bound and not self.is_upper_bound:
            text += " lowerbound"
        elif self.is_upper_bound:
            text += " upperbound"
        return text


@dataclass(frozen=True)
class CurrMove:
    """The move currently being examined."""

    move: Any

    def fragment(self) -> str:
        return f" currmove {_uci(self.move)}"


@dataclass(frozen=True)
class CurrMoveNumber:
    """The 1-based number of the move currently being searched."""

    number: int

    def fragment(self) -> str:
        return f" currmovenumber {self.number}"


@dataclass(frozen=True)
class HashFull:
    """The transposition table fill rate, out of 1000."""

    permill: int

    def fragment(self) -> str:
        return f" hashfull {self.permill}"


@dataclass(frozen=True)
class NodeSpeed:
    """Nodes searched per second."""

    nps: int

    def fragment(self) -> str:
        return f" nps {self.nps}"


@dataclass(frozen=True)
class InfoString:
    """Free text for the GUI to display; must not contain newlines."""

    text: str

    def __post_init__(self) -> None:
        if "\n" in self.text:
            raise ValueError("info strings may not contain newlines")

    def fragment(self) -> str:
        return f" string {self.text}"


EngineInfo = Union[
    Depth, SelDepth, Time, Nodes, Pv, MultiPv, ScoreInfo, CurrMove,
    CurrMoveNumber, HashFull, NodeSpeed, InfoString,
]


# --- option types ----------------------------------------------------------------


@dataclass(frozen=True)
class Spin:
    """An integer spin box."""

    default: int
    min: int
    max: int

    def describe(self) -> str:
        return f"type spin default {self.default} min {self.min} max {self.max}"


@dataclass(frozen=True)
class StringOption:
    """A free text input."""

    default: Optional[str] = None

    def describe(self) -> str:
        text = "type string"
        if self.default is not None:
            text += f" default {self.default}"
        return text


@dataclass(frozen=True)
class Check:
    """A checkbox."""

    default: Optional[bool] = None

    def describe(self) -> str:
        text = "type check"
        if self.default is not None:
            text += f" default {'true' if self.default else 'false'}"
        return text


@dataclass(frozen=True)
class Combo:
    """A choice among fixed variants."""

    default: Optional[str] = None
    vars: Tuple[str, ...] = field(default_factory=tuple)

    def describe(self) -> str:
        text = "type combo"
        if self.default is not None:
            text += f" default {self.default}"
        return text + "".join(f" var {v}" for v in self.vars)


@dataclass(frozen=True)
class Button:
    """A button that sends a command when pressed."""

    def describe(self) -> str:
        return "type button"


OptionType = Union[Spin, StringOption, Check, Combo, Button]


# --- messages --------------------------------------------------------------------


@dataclass(frozen=True)
class IdMessage:
    """The engine identifying itself."""

    name: Optional[str] = None
    author: Optional[str] = None

    def __str__(self) -> str:
        text = "id"
        if self.name is not None:
            text += f" name {self.name}"
        if self.author is not None:
            if self.name is not None:
                text += "\nid"
            text += f" author {self.author}"
        return text


@dataclass(frozen=True)
class UciOk:
    """The engine is ready in UCI mode."""

    def __str__(self) -> str:
        return "uciok"


@dataclass(frozen=True)
class ReadyOk:
    """The engine has processed all input."""

    def __str__(self) -> str:
        return "readyok"


@dataclass(frozen=True)
class OptionMessage:
    """An option the GUI should offer the user."""

    name: str
    opt: OptionType

    def __str__(self) -> str:
        return f"option name {self.name} {self.opt.describe()}"


@dataclass(frozen=True)
class BestMove:
    """The move the engine has chosen, with an optional move to ponder."""

    m: Any
    ponder: Optional[Any] = None

    def __str__(self) -> str:
        text = f"bestmove {_uci(self.m)}"
        if self.ponder is not None:
            text += f" ponder {_uci(self.ponder)}"
        return text


@dataclass(frozen=True)
class InfoMessage:
    """Information about the engine's thinking."""

    infos: Sequence[EngineInfo]

    def __str__(self) -> str:
        parts = ["info"]
        new_line = False
        for info in self.infos:
            if new_line:
                parts.append("\ninfo")
                new_line = False
            parts.append(info.fragment())
            if isinstance(info, InfoString):
                new_line = True
        return "".join(parts)