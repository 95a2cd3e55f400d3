"""Parsing of the commands a GUI sends to an engine over UCI.

Moves are kept as lower-case UCI move strings such as ``"e2e4"`` or
``"e7e8q"``.
"""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, Optional, Tuple, Union

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
"""The position at the start of a normal game of chess."""

_MOVE_RE = re.compile(r"[a-h][1-8][a-h][1-8][nbrq]?")
_U64_MAX = (1 << 64) - 1


class UciParseError(ValueError):
    """A line is not a legal UCI command."""


# --- commands --------------------------------------------------------------------


@dataclass(frozen=True)
class Uci:
    """The GUI starts a UCI session."""


@dataclass(frozen=True)
class Debug:
    """Turn the engine's debug mode on or off."""

    on: bool


@dataclass(frozen=True)
class IsReady:
    """The GUI asks whether the engine is ready."""


@dataclass(frozen=True)
class SetOption:
    """Set an engine option, optionally to a value."""

    name: str
    value: Optional[str] = None


@dataclass(frozen=True)
class NewGame:
    """The next position belongs to a new game."""


@dataclass(frozen=True)
class Position:
    """Set up a position from a FEN (or the start position) and play moves."""

    fen: Optional[str] = None
    moves: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Go:
    """Start searching with the given options."""

    options: Tuple["GoOption", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Stop:
    """Stop searching immediately."""


@dataclass(frozen=True)
class PonderHit:
    """The opponent played the ponder move."""


@dataclass(frozen=True)
class Quit:
    """Quit as soon as possible."""


Command = Union[
    Uci, Debug, IsReady, SetOption, NewGame, Position, Go, Stop, PonderHit, Quit
]


# --- go options ------------------------------------------------------------------


@dataclass(frozen=True)
class SearchMoves:
    """Restrict the search to these moves."""

    moves: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Ponder:
    """Search in ponder mode."""


@dataclass(frozen=True)
class WhiteTime:
    """Milliseconds left on White's clock."""

    ms: int


@dataclass(frozen=True)
class BlackTime:
    """Milliseconds left on Black's clock."""

    ms: int


@dataclass(frozen=True)
class WhiteInc:
    """White's increment in milliseconds."""

    ms: int


@dataclass(frozen=True)
class BlackInc:
    """Black's increment in milliseconds."""

    ms: int


@dataclass(frozen=True)
class MovesToGo:
    """Moves remaining until the next time control."""

    moves: int


@dataclass(frozen=True)
class Depth:
    """Search to this many plies."""

    plies: int


@dataclass(frozen=True)
class Nodes:
    """Search only this many nodes."""

    count: int


@dataclass(frozen=True)
class Mate:
    """Search for a mate in this many moves."""

    moves: int


@dataclass(frozen=True)
class MoveTime:
    """Search for exactly this many milliseconds."""

    ms: int


@dataclass(frozen=True)
class Infinite:
    """Search until told to stop."""


GoOption = Union[
    SearchMoves, Ponder, WhiteTime, BlackTime, WhiteInc, BlackInc,
    MovesToGo, Depth, Nodes, Mate, MoveTime, Infinite,
]


# --- parsing ---------------------------------------------------------------------


def _is_move(token: str) -> bool:
    return _MOVE_RE.fullmatch(token) is not None


def _parse_move(token: str) -> str:
    if not _is_move(token):
        raise UciParseError(f"could not parse move `{token}`")
    return token


def parse_line(line: str) -> Command:
    """Parse one line of UCI input into a command.

    Raises UciParseError if the line is not a legal UCI command.
    """
    tokens: Deque[str] = deque(line.split())
    if not tokens:
        raise UciParseError("line contains no tokens")
    first = tokens.popleft()
    if first == "uci":
        return Uci()
    if first == "debug":
        flag = tokens.popleft() if tokens else None
        if flag in ("on", None):
            return Debug(True)
        if flag == "off":
            return Debug(False)
        raise UciParseError("unrecognized option")
    if first == "isready":
        return IsReady()
    if first == "setoption":
        return _parse_set_option(tokens)
    if first == "ucinewgame":
        return NewGame()
    if first == "position":
        return _parse_position(tokens)
    if first == "go":
        return _parse_go(tokens)
    if first == "stop":
        return Stop()
    if first == "ponderhit":
        return PonderHit()
    if first == "quit":
        return Quit()
    raise UciParseError("unrecognized UCI command")


def _parse_set_option(tokens: Deque[str]) -> SetOption:
    if not tokens:
        raise UciParseError(
            "reached end of line while searching for `name` field in `setoption`"
        )
    name_tok = tokens.popleft()
    if name_tok != "name":
        raise UciParseError(f"expected token `name` for `setoption`, got `{name_tok}`")

    key_parts = []
    while tokens:
        tok = tokens.popleft()
        if tok == "value":
            return SetOption(" ".join(key_parts), " ".join(tokens))
        key_parts.append(tok)
    return SetOption(" ".join(key_parts), None)


def _parse_position(tokens: Deque[str]) -> Position:
    if not tokens:
        raise UciParseError("reached EOL while parsing position")
    kind = tokens.popleft()
    fen: Optional[str]
    if kind == "fen":
        fen_parts = []
        while tokens:
            tok = tokens.popleft()
            if tok == "moves":
                break
            fen_parts.append(tok)
        fen = " ".join(fen_parts)
        if not fen:
            raise UciParseError("empty FEN in position command")
    elif kind == "startpos":
        fen = None
        if tokens and tokens[0] == "moves":
            tokens.popleft()
    else:
        raise UciParseError("illegal starting position token")

    moves = tuple(_parse_move(tok) for tok in tokens)
    return Position(fen=fen, moves=moves)


def _parse_int(tokens: Deque[str]) -> int:
    if not tokens:
        raise UciParseError("reached EOF while parsing int")
    tok = tokens.popleft()
    digits = tok[1:] if tok.startswith("+") else tok
    if not digits or not digits.isascii() or not digits.isdigit():
        raise UciParseError(f"could not parse int due to error: invalid digit in `{tok}`")
    value = int(digits)
    if value > _U64_MAX:
        raise UciParseError(f"could not parse int due to error: `{tok}` is too large")
    return value


def _bits(value: int, width: int) -> int:
    return value & ((1 << width) - 1)


def _collect_search_moves(tokens: Deque[str]) -> Iterable[str]:
    while tokens and _is_move(tokens[0]):
        yield tokens.popleft()


def _parse_go(tokens: Deque[str]) -> Go:
    opts = []
    while tokens:
        tok = tokens.popleft()
        if tok == "searchmoves":
            opts.append(SearchMoves(tuple(_collect_search_moves(tokens))))
        elif tok == "ponder":
            opts.append(Ponder())
        elif tok == "wtime":
            opts.append(WhiteTime(_bits(_parse_int(tokens), 32)))
        elif tok == "btime":
            opts.append(BlackTime(_bits(_parse_int(tokens), 32)))
        elif tok == "winc":
            opts.append(WhiteInc(_bits(_parse_int(tokens), 32)))
        elif tok == "binc":
            opts.append(BlackInc(_bits(_parse_int(tokens), 32)))
        elif tok == "movestogo":
            opts.append(MovesToGo(_bits(_parse_int(tokens), 8)))
        elif tok == "depth":
            opts.append(Depth(_bits(_parse_int(tokens), 8)))
        elif tok == "nodes":
            opts.append(Nodes(_parse_int(tokens)))
        elif tok == "mate":
            opts.append(Mate(_bits(_parse_int(tokens), 8)))
        elif tok == "movetime":
            opts.append(MoveTime(_bits(_parse_int(tokens), 32)))
        elif tok == "infinite":
            opts.append(Infinite())
        else:
            raise UciParseError(f"unrecognized option {tok} for `go`")
    return Go(tuple(opts))