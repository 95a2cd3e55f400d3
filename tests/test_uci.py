import pytest

from tomato.uci import (
    BlackInc,
    BlackTime,
    Debug,
    Depth,
    Go,
    Infinite,
    IsReady,
    Mate,
    MovesToGo,
    MoveTime,
    NewGame,
    Nodes,
    Ponder,
    PonderHit,
    Position,
    Quit,
    SearchMoves,
    SetOption,
    Stop,
    Uci,
    UciParseError,
    WhiteInc,
    WhiteTime,
    parse_line,
)


def test_position_starting():
    assert parse_line("position startpos moves\n") == Position(fen=None, moves=())


def test_position_starting_no_moves_tok():
    assert parse_line("position startpos\n") == Position(fen=None, moves=())


def test_position_fen():
    assert parse_line(
        "position fen rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1 moves\n"
    ) == Position(
        fen="rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1", moves=()
    )


def test_position_not_castle():
    assert parse_line(
        "position fen 1rr3k1/5pp1/3pp2p/p2n3P/1q1P4/1P1Q1N2/5PP1/R3R1K1 w - - 0 26 moves e1c1\n"
    ) == Position(
        fen="1rr3k1/5pp1/3pp2p/p2n3P/1q1P4/1P1Q1N2/5PP1/R3R1K1 w - - 0 26",
        moves=("e1c1",),
    )


def test_position_fen_then_moves():
    assert parse_line(
        "position fen rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1 moves c7c5 g1f3\n"
    ) == Position(
        fen="rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
        moves=("c7c5", "g1f3"),
    )


def test_position_fen_no_moves():
    assert parse_line(
        "position fen rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2\n"
    ) == Position(
        fen="rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2", moves=()
    )


def test_position_startpos_with_moves():
    assert parse_line("position startpos moves e2e4 e7e5") == Position(
        fen=None, moves=("e2e4", "e7e5")
    )


def test_position_promotion_move():
    assert parse_line("position startpos moves e7e8q").moves == ("e7e8q",)


def test_setoption_key_only():
    assert parse_line("setoption name MyOption\n") == SetOption(name="MyOption", value=None)


def test_setoption_key_value():
    assert parse_line("setoption name my option value 4 or 5\n") == SetOption(
        name="my option", value="4 or 5"
    )


def test_go_simple():
    assert parse_line("go depth 7 nodes 25\n") == Go((Depth(7), Nodes(25)))


def test_go_all():
    assert parse_line(
        "go depth 7 nodes 250 infinite searchmoves e2e4 wtime 1 btime 2 winc 3 binc 4 "
        "movestogo 5 mate 6 movetime 7 ponder\n"
    ) == Go(
        (
            Depth(7),
            Nodes(250),
            Infinite(),
            SearchMoves(("e2e4",)),
            WhiteTime(1),
            BlackTime(2),
            WhiteInc(3),
            BlackInc(4),
            MovesToGo(5),
            Mate(6),
            MoveTime(7),
            Ponder(),
        )
    )


def test_go_searchmoves():
    assert parse_line("go searchmoves e2e4 infinite\n") == Go(
        (SearchMoves(("e2e4",)), Infinite())
    )


def test_go_empty():
    assert parse_line("go") == Go(())


def test_uci():
    assert parse_line("uci\n") == Uci()


def test_debug():
    assert parse_line("debug on\n") == Debug(True)
    assert parse_line("debug off\n") == Debug(False)
    assert parse_line("debug\n") == Debug(True)


@pytest.mark.parametrize(
    "line, expected",
    [
        ("isready", IsReady()),
        ("ucinewgame", NewGame()),
        ("stop", Stop()),
        ("ponderhit", PonderHit()),
        ("quit", Quit()),
    ],
)
def test_simple_commands(line, expected):
    assert parse_line(line) == expected


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   \n",
        "frobnicate",
        "debug maybe",
        "setoption",
        "setoption value 3",
        "position",
        "position somewhere",
        "position fen",
        "position startpos moves e2e9",
        "go depth",
        "go depth seven",
        "go depth -3",
        "go nodes 99999999999999999999999",
        "go sideways",
    ],
)
def test_invalid_lines(line):
    with pytest.raises(UciParseError):
        parse_line(line)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_line("nonsense")