# tomato

Parts of a UCI chess engine that stand on their own, in plain Python with
no dependencies:

- `tomato.evaluate`: `Eval` (centipawn and mate scores, with `mate_in`,
  `moves_to_mate`, `step_back_by`, `step_forward_by`, `in_perspective`),
  `Score` (a midgame/endgame pair with `blend`), `Color`, and
  `calculate_phase` with the `MG_LIMIT` / `EG_LIMIT` material cutoffs.
- `tomato.limit`: `SearchLimit`, a thread-safe stop flag driven by an
  optional node cap (`nodes_cap`) and an optional time budget in seconds
  (`search_duration`). It also defines the `SearchError` and
  `SearchTimeout` exceptions for a search to raise when it is cut short.
- `tomato.transposition`: `TTable`, a bucketed transposition table with
  probing via `get` (returning a `TTEntryGuard`), entry ageing (`age_up`),
  `resize`, `clear`, `size_mb` and a `fill_rate_permill` estimate.
- `tomato.timing`: `get_search_time`, which decides how many milliseconds to
  think for from UCI clock information.
- `tomato.uci_send`: messages the engine sends to a GUI (`IdMessage`,
  `UciOk`, `ReadyOk`, `OptionMessage`, `BestMove`, `InfoMessage`), turned
  into protocol text with `str()`. Moves may be UCI strings or objects with
  a `to_uci()` method.
- `tomato.uci`: `parse_line`, which turns one line from the GUI into a
  command object such as `Position`, `Go` or `SetOption`, raising
  `UciParseError` for lines that are not valid commands.

## Installing

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## A short tour

```python
from tomato.evaluate import Eval, Score
from tomato.timing import get_search_time
from tomato.uci import parse_line, Go, Depth, Nodes

mate = Eval.mate_in(3)
assert mate > Eval.DRAW
assert mate.moves_to_mate() == 2

blended = Score.centipawns(100, 50).blend(1.0)
assert blended == Eval.centipawns(100)

# 60 seconds left, no increment, no moves-to-go: think for 750 ms
assert get_search_time(None, 0, 60_000) == 750

assert parse_line("go depth 7 nodes 25") == Go((Depth(7), Nodes(25)))
```

Engine output is built from message objects:

```python
from tomato.uci_send import BestMove, InfoMessage, Depth, Nodes

assert str(BestMove("e2e4", ponder="e7e5")) == "bestmove e2e4 ponder e7e5"
assert str(InfoMessage([Depth(2), Nodes(2124)])) == "info depth 2 nodes 2124"
```

Transposition tables are sized in megabytes:

```python
from tomato.transposition import TTable

table = TTable.with_size(16)
guard = table.get(0xDEADBEEF)
assert guard.entry() is None
```

## What this package does not do

There is no board representation, move generation, static position
evaluation or tree search here, and no command-line program that speaks UCI
on standard input. `parse_line` checks moves only for the shape of a UCI
move string (such as `e2e4` or `e7e8q`), not for legality in the position,
and it does not check that a FEN describes a valid position.