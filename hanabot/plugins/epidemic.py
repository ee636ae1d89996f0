"""City epidemic figures: parsing the area tree and the report text."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

TX_URL = (
    "https://api.inews.qq.com/newsqa/v1/query/inner/publish/modules/list"
    "?modules=statisGradeCityDetail,diseaseh5Shelf"
)
EMPTY_CITY = "你还没有输入城市名字呢！"


@dataclass
class Area:
    """Figures of one area and its sub-areas."""

    name: str
    today_confirm: int = 0
    today_wzz_add: Any = None
    now_confirm: int = 0
    confirm: int = 0
    dead: int = 0
    heal: int = 0
    grade: str = ""
    wzz: int = 0
    children: list["Area"] = field(default_factory=list)


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _area(doc: Any) -> Area:
    if not isinstance(doc, dict):
        raise ValueError("malformed area")
    today = doc.get("today") if isinstance(doc.get("today"), dict) else {}
    total = doc.get("total") if isinstance(doc.get("total"), dict) else {}
    return Area(
        name=str(doc.get("name", "")),
        today_confirm=_int(today.get("confirm")),
        today_wzz_add=today.get("wzz_add"),
        now_confirm=_int(total.get("nowConfirm")),
        confirm=_int(total.get("confirm")),
        dead=_int(total.get("dead")),
        heal=_int(total.get("heal")),
        grade=str(total.get("grade") or ""),
        wzz=_int(total.get("wzz")),
        children=[_area(c) for c in doc.get("children") or [] if c is not None],
    )


def find_city(area: Area | None, name: str) -> Area | None:
    """The area called ``name`` in the tree under ``area``, or None."""
    if area is None:
        return None
    if area.name == name:
        return area
    for child in area.children:
        if child.name == name:
            return child
        found = find_city(child, name)
        if found is not None:
            return found
    return None


def parse_epidemic(data: Any) -> tuple[Area, str]:
    """The first area tree and the update time of a service response."""
    doc = json.loads(data) if isinstance(data, (bytes, bytearray, str)) else data
    try:
        shelf = doc["data"]["diseaseh5Shelf"]
        tree = shelf.get("areaTree") or []
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError("malformed epidemic data") from exc
    if not tree:
        raise ValueError("no area data")
    return _area(tree[0]), str(shelf.get("lastUpdateTime") or "")


def _show(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_report(area: Area, update_time: str) -> str:
    """The text reporting one area's figures."""
    return (
        f"【{area.name}】疫情数据\n"
        f"新增人数：{area.today_confirm}\n"
        f"现有确诊：{area.now_confirm}\n"
        f"累计确诊：{area.confirm}\n"
        f"治愈人数：{area.heal}\n"
        f"死亡人数：{area.dead}\n"
        f"无症状人数：{area.wzz}\n"
        f"新增无症状：{_show(area.today_wzz_add)}\n"
        f"更新时间：\n『{update_time}』"
    )