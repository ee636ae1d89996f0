import pytest

from hanabot.plugins.driftbottle import (
    DEFAULT_CHANNEL,
    Bottle,
    Sea,
    _crc64_iso,
    bottle_id,
    parse_fetch,
    parse_throw,
)


@pytest.fixture
def sea():
    with Sea() as s:
        yield s


def test_crc64_iso_check_value():
    assert _crc64_iso(b"123456789") == 0xB90956C775A41001


def test_bottle_id_deterministic_and_signed_range():
    a = bottle_id(1, 2, "name", "msg")
    assert a == bottle_id(1, 2, "name", "msg")
    assert -(2**63) <= a < 2**63
    assert a != bottle_id(1, 2, "name", "msg2")


def test_bottle_gets_id_from_fields():
    b = Bottle(qq=10, grp=20, name="n", msg="m")
    assert b.id == bottle_id(10, 20, "n", "m")


def test_throw_fetch_destroy(sea):
    b = Bottle(qq=1, grp=0, name="alice", msg="hello")
    sea.throw(b, DEFAULT_CHANNEL)
    assert sea.count() == 1
    got = sea.fetch(DEFAULT_CHANNEL, 42)
    assert got == b
    sea.destroy(got, DEFAULT_CHANNEL)
    assert sea.count() == 0


def test_same_bottle_replaces(sea):
    b = Bottle(qq=1, grp=0, name="alice", msg="hello")
    sea.throw(b)
    sea.throw(b)
    assert sea.count() == 1


def test_group_restriction(sea):
    sea.throw(Bottle(qq=1, grp=5, name="a", msg="only five"))
    assert sea.fetch(DEFAULT_CHANNEL, 5).msg == "only five"
    with pytest.raises(LookupError):
        sea.fetch(DEFAULT_CHANNEL, 6)


def test_fetch_zero_group_rejected(sea):
    with pytest.raises(ValueError):
        sea.fetch(DEFAULT_CHANNEL, 0)


def test_missing_channel(sea):
    with pytest.raises(LookupError):
        sea.throw(Bottle(qq=1, grp=0, name="a", msg="x"), "nowhere")
    with pytest.raises(LookupError):
        sea.count("nowhere")


def test_create_channel(sea):
    sea.create_channel("abc")
    sea.throw(Bottle(qq=1, grp=0, name="a", msg="x"), "abc")
    assert sea.count("abc") == 1
    assert sea.count() == 0
    with pytest.raises(ValueError):
        sea.create_channel("")


def test_parse_throw_full():
    assert parse_throw("在群123丢漂流瓶到频道abc hello") == (123, "abc", "hello")


def test_parse_throw_defaults():
    assert parse_throw("丢漂流瓶 hi there") == (None, DEFAULT_CHANNEL, "hi there")


def test_parse_throw_errors():
    assert parse_throw("something else") is None
    with pytest.raises(ValueError):
        parse_throw("丢漂流瓶 ")
    with pytest.raises(ValueError):
        parse_throw("在群99999999999999999999丢漂流瓶 hi")


def test_parse_fetch():
    assert parse_fetch("捡漂流瓶") == DEFAULT_CHANNEL
    assert parse_fetch("从频道abc捡漂流瓶") == "abc"
    assert parse_fetch("捡漂流瓶吧") is None