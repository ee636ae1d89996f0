import pytest

from hanabot.plugins.bookreview import BookReviewStore


@pytest.fixture
def store():
    with BookReviewStore() as s:
        yield s


def test_add_and_count(store):
    assert store.count() == 0
    first = store.add("a good novel about dragons")
    second = store.add("poetry collection")
    assert second > first
    assert store.count() == 2


def test_by_keyword(store):
    store.add("a good novel about dragons")
    store.add("dragons again")
    assert store.by_keyword("dragons") == "a good novel about dragons"
    assert store.by_keyword("poetry") is None


def test_keyword_with_wildcards_is_literal(store):
    store.add("plain text")
    assert store.by_keyword("%") is None


def test_random(store):
    assert store.random() is None
    reviews = {"one", "two", "three"}
    for r in reviews:
        store.add(r)
    assert store.random() in reviews


def test_chinese_keyword(store):
    store.add("一部关于龙的小说")
    store.add("诗集")
    assert store.by_keyword("龙") == "一部关于龙的小说"
    assert store.by_keyword("剑") is None