import json

import pytest

from hanabot.plugins.epidemic import Area, find_city, format_report, parse_epidemic


def _doc():
    return {
        "data": {
            "diseaseh5Shelf": {
                "lastUpdateTime": "2022-05-09 10:00:00",
                "areaTree": [
                    {
                        "name": "中国",
                        "today": {"confirm": 1},
                        "total": {"nowConfirm": 2},
                        "children": [
                            {
                                "name": "上海",
                                "today": {"confirm": 3, "wzz_add": 4},
                                "total": {"nowConfirm": 5, "confirm": 6, "dead": 7,
                                          "heal": 8, "grade": "高", "wzz": 9},
                                "children": [{"name": "浦东", "today": {}, "total": {}}],
                            }
                        ],
                    }
                ],
            }
        }
    }


def test_parse_and_find_nested():
    root, when = parse_epidemic(json.dumps(_doc(), ensure_ascii=False))
    assert when == "2022-05-09 10:00:00"
    assert find_city(root, "中国") is root
    city = find_city(root, "上海")
    assert (city.today_confirm, city.now_confirm, city.dead, city.wzz) == (3, 5, 7, 9)
    assert find_city(root, "浦东").name == "浦东"


def test_find_missing_city():
    root, _ = parse_epidemic(_doc())
    assert find_city(root, "火星") is None
    assert find_city(None, "上海") is None


def test_empty_tree_raises():
    with pytest.raises(ValueError):
        parse_epidemic({"data": {"diseaseh5Shelf": {"areaTree": []}}})


def test_report_contains_figures():
    root, when = parse_epidemic(_doc())
    text = format_report(find_city(root, "上海"), when)
    assert text.startswith("【上海】疫情数据\n")
    assert "新增无症状：4\n" in text
    assert text.endswith("『2022-05-09 10:00:00』")


def test_report_missing_wzz_add():
    text = format_report(Area(name="x"), "t")
    assert "新增无症状：<nil>" in text