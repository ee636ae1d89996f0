import json

import pytest

from hanabot.plugins.bilibili import (
    ERR_NEED_COOKIE,
    NOT_FOUND,
    Medal,
    VupStore,
    parse_followings,
    parse_medals,
    parse_search,
    sort_medals,
)


def test_parse_search_reads_results():
    doc = {
        "data": {
            "numResults": 1,
            "result": [{"mid": 42, "uname": "alice", "gender": 2, "usign": "hi", "level": 5}],
        }
    }
    results = parse_search(json.dumps(doc).encode())
    assert len(results) == 1
    r = results[0]
    assert (r.mid, r.uname, r.gender, r.usign, r.level) == (42, "alice", 2, "hi", 5)


def test_parse_search_nobody_found():
    with pytest.raises(LookupError, match=NOT_FOUND):
        parse_search('{"data": {"numResults": 0}}')


def test_parse_followings_round_trip():
    names = ["甲", "bob"]
    doc = {"code": 0, "data": {"list": [{"uname": n} for n in names]}}
    assert json.loads(parse_followings(json.dumps(doc))) == names


def test_parse_followings_needs_cookie():
    with pytest.raises(PermissionError) as info:
        parse_followings('{"code": -101, "message": "x"}')
    assert str(info.value) == ERR_NEED_COOKIE


def test_parse_medals_other_error():
    with pytest.raises(RuntimeError, match="busy"):
        parse_medals('{"code": 5, "message": "busy"}')


def test_parse_medals_fields():
    doc = {
        "code": 0,
        "data": {
            "list": [
                {
                    "target_name": "up",
                    "medal_info": {
                        "target_id": 7,
                        "medal_name": "m",
                        "level": 3,
                        "medal_color_start": 1,
                        "medal_color_end": 2,
                        "medal_color_border": 4,
                    },
                }
            ]
        },
    }
    assert parse_medals(doc) == [Medal(7, "up", "m", 3, 1, 2, 4)]


def test_sort_medals_descending():
    medals = [Medal(i, "u", "m", lvl, 0, 0, 0) for i, lvl in enumerate([2, 9, 5, 9])]
    levels = [m.level for m in sort_medals(medals)]
    assert levels == sorted(levels, reverse=True)
    assert len(levels) == len(medals)


def test_vup_store_insert_and_filter():
    with VupStore() as store:
        store.insert_vup(3, "c", 30)
        store.insert_vup(1, "a", 10)
        store.insert_vup(1, "changed", 11)
        assert store.filter_vups([1, 2, 3]) == [(1, "a", 10), (3, "c", 30)]
        assert store.filter_vups([]) == []


def test_cookie_set_and_update():
    with VupStore() as store:
        assert store.get_cookie() == ""
        store.set_cookie("token")
        assert store.get_cookie() == "token"
        store.set_cookie("placeholder")
        assert store.get_cookie() == "placeholder"