import pytest

from linkharvest.domain.frontier import Frontier, FrontierEntry


def test_seed_is_first_entry_at_depth_zero():
    frontier = Frontier("http://a.test/")
    assert len(frontier) == 1
    assert frontier.pop() == FrontierEntry("http://a.test/", 0)
    assert not frontier


def test_fifo_order():
    frontier = Frontier()
    frontier.push("http://a.test/1", 1)
    frontier.push("http://a.test/2", 1)
    frontier.push("http://a.test/3", 2)
    assert [frontier.pop().url for _ in range(3)] == [
        "http://a.test/1",
        "http://a.test/2",
        "http://a.test/3",
    ]


def test_duplicates_are_kept():
    frontier = Frontier()
    frontier.push("http://a.test/x")
    frontier.push("http://a.test/x")
    assert len(frontier) == 2


def test_pop_on_empty_raises():
    with pytest.raises(IndexError):
        Frontier().pop()
