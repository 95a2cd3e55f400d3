import pytest

from tomato.evaluate import Eval
from tomato.transposition import BUCKET_LEN, TTable, TTEntry


def _entry(key, depth, move, lower, upper):
    return TTEntry(key_low16=key, depth=depth, best_move=move, lower_bound=lower, upper_bound=upper)


def _save(tt, key, e):
    tt.get(key).save(e.depth, e.best_move, e.lower_bound, e.upper_bound)


def test_guaranteed_miss():
    tt = TTable.with_capacity(4)
    assert tt.get(12345).entry() is None


def test_guaranteed_hit():
    tt = TTable.with_capacity(4)
    e = _entry(12, 5, "e2e4", Eval.DRAW, Eval.centipawns(100))
    _save(tt, 12, e)
    assert tt.get(12).entry() == e


def test_attempt_write_nosize_table():
    tt = TTable()
    e = _entry(12, 5, "e2e4", Eval.DRAW, Eval.centipawns(100))
    _save(tt, 12, e)
    assert tt.get(12).entry() is None


def test_overwrite():
    e0 = _entry(2022, 5, "e2e4", Eval.DRAW, Eval.centipawns(100))
    e1 = _entry(2022, 7, "e4e5", Eval.BLACK_MATE, -Eval.centipawns(100))
    tt = TTable.with_capacity(4)
    _save(tt, 2022, e0)
    _save(tt, 2022, e1)
    assert tt.get(2022).entry() == e1


def test_resize_empty_table():
    tt = TTable()
    tt.resize(2000)
    e = _entry(2022, 5, "e2e4", Eval.DRAW, Eval.centipawns(100))
    _save(tt, 2022, e)
    assert tt.get(2022).entry() == e


def test_age_up_zero_clear():
    tt = TTable.with_capacity(3)
    tt.get(2022).save(10, "e2e4", Eval.BLACK_MATE, Eval.DRAW)
    tt.age_up(0)
    assert tt.get(2022).entry() is None


def test_age_up_discrimination():
    e0 = _entry(1, 5, "e2e4", Eval.DRAW, Eval.centipawns(100))
    e1 = _entry(2, 7, "e4e5", Eval.BLACK_MATE, -Eval.centipawns(100))
    tt = TTable.with_capacity(3)
    _save(tt, 1, e0)
    tt.age_up(10)
    _save(tt, 2, e1)
    tt.age_up(1)
    assert tt.get(1).entry() is None
    assert tt.get(2).entry() is not None
    assert tt.get(2).entry().depth == 7


def test_age_up_rejects_large_max_age():
    tt = TTable.with_capacity(2)
    with pytest.raises(ValueError):
        tt.age_up(0x40)


def test_oldest_entry_is_replaced_when_bucket_full():
    tt = TTable.with_capacity(2)
    tt.get(1).save(1, "a", Eval.DRAW, Eval.DRAW)
    tt.age_up(10)
    for key in range(2, BUCKET_LEN + 1):
        tt.get(key).save(key, "b", Eval.DRAW, Eval.DRAW)
    guard = tt.get(BUCKET_LEN + 1)
    assert guard.entry() is None
    guard.save(9, "c", Eval.DRAW, Eval.DRAW)
    assert tt.get(1).entry() is None
    assert tt.get(BUCKET_LEN + 1).entry().depth == 9
    for key in range(2, BUCKET_LEN + 1):
        assert tt.get(key).entry().depth == key


def test_fill_rate_empty_allocation_is_full():
    assert TTable().fill_rate_permill() == 1000


def test_fill_rate_fresh_table_is_zero():
    assert TTable.with_capacity(5).fill_rate_permill() == 0


def test_fill_rate_single_bucket_one_entry():
    tt = TTable.with_capacity(0)
    tt.get(7).save(1, "e2e4", Eval.DRAW, Eval.DRAW)
    assert tt.fill_rate_permill() == 1000 // BUCKET_LEN


def test_size_mb_values():
    assert TTable().size_mb() == 0
    assert TTable.with_size(0).size_mb() == 0
    assert TTable.with_size(2).size_mb() == 1


def test_clear_removes_entries():
    tt = TTable.with_capacity(4)
    tt.get(99).save(3, "g1f3", Eval.DRAW, Eval.DRAW)
    tt.clear()
    assert tt.get(99).entry() is None
    assert tt.fill_rate_permill() == 0


def test_resize_to_zero_empties_table():
    tt = TTable.with_capacity(4)
    tt.get(99).save(3, "g1f3", Eval.DRAW, Eval.DRAW)
    tt.resize(0)
    assert tt.size_mb() == 0
    assert tt.get(99).entry() is None


def test_shrink_keeps_entries_from_dropped_buckets():
    tt = TTable.with_capacity(14)
    key = ((8192 + 3) << 16) | 7
    tt.get(key).save(4, "d2d4", Eval.DRAW, Eval.centipawns(20))
    tt.resize(1)
    found = tt.get(key).entry()
    assert found is not None
    assert found.best_move == "d2d4"
    assert found.upper_bound == Eval.centipawns(20)


def test_grow_starts_empty():
    tt = TTable.with_capacity(3)
    tt.get(5).save(4, "d2d4", Eval.DRAW, Eval.DRAW)
    tt.resize(1)
    assert tt.get(5).entry() is None


def test_depth_captures_value():
    tt = TTable.with_capacity(1)
    tt.get(3).save(TTEntry.DEPTH_CAPTURES, None, Eval.MIN, Eval.MAX)
    assert tt.get(3).entry().depth == -1


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        TTable.with_capacity(-1)