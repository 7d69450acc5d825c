import pytest

from pocketarcade.highscore import MAX_SCORES, NAME_LIMIT, Highscore, Score


def make(store=None, name="Snake"):
    hs = Highscore(store if store is not None else {})
    hs.begin(name)
    return hs


def test_begin_creates_empty_entry():
    store = {}
    hs = make(store)
    assert hs.count() == 0
    assert "Snake" in store


def test_scores_kept_in_descending_order():
    hs = make()
    for name, value in [("AAA", 5), ("BBB", 50), ("CCC", 20)]:
        hs.add(Score(name, value))
    values = [hs.get(i).score for i in range(hs.count())]
    assert values == sorted(values, reverse=True)
    assert hs.get(0).name == "BBB"


def test_tie_goes_after_existing():
    hs = make()
    hs.add(Score("OLD", 10))
    hs.add(Score("NEW", 10))
    assert [s.name for s in hs] == ["OLD", "NEW"]


def test_table_capped_at_max():
    hs = make()
    for value in range(10):
        hs.add(Score("ABC", value))
    assert hs.count() == MAX_SCORES
    assert hs.get(0).score == 9
    assert hs.get(MAX_SCORES - 1).score == 10 - MAX_SCORES


def test_full_table_ignores_lower_and_equal_scores():
    hs = make()
    for value in range(10, 15):
        hs.add(Score("HI", value))
    before = list(hs)
    hs.add(Score("LOW", 1))
    hs.add(Score("EQ", 10))
    assert list(hs) == before


def test_scores_persist_across_instances():
    store = {}
    first = make(store)
    first.add(Score("ABC", 42))
    first.add(Score("XYZ", 7))
    second = make(store)
    assert list(second) == list(first)


def test_clear_persists():
    store = {}
    hs = make(store)
    hs.add(Score("ABC", 3))
    hs.clear()
    assert hs.count() == 0
    assert make(store).count() == 0


def test_get_out_of_range():
    hs = make()
    with pytest.raises(IndexError):
        hs.get(0)


def test_corrupt_store_is_cleared():
    store = {"Snake": "not json"}
    hs = make(store)
    assert hs.count() == 0
    assert make(store).count() == 0


def test_nothing_saved_before_begin():
    store = {}
    hs = Highscore(store)
    hs.add(Score("ABC", 1))
    assert hs.count() == 1
    assert store == {}


def test_name_truncated_and_negative_rejected():
    assert len(Score("ABCDEF", 1).name) == NAME_LIMIT
    with pytest.raises(ValueError):
        Score("ABC", -1)