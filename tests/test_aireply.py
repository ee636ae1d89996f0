import pytest

from hanabot.engine import ServiceData
from hanabot.plugins.aireply import (
    ReplyModes,
    TTSModes,
    float_to_chinese,
    numbers_to_chinese,
)


def test_reply_mode_default():
    assert ReplyModes().get_mode(1) == "青云客"


def test_reply_mode_set_and_get():
    modes = ReplyModes()
    modes.set_mode(-5, "小爱")
    assert modes.get_mode(-5) == "小爱"
    assert modes.get_mode(5) == "青云客"


def test_reply_mode_unknown():
    with pytest.raises(ValueError, match="no such mode"):
        ReplyModes().set_mode(1, "nope")


def test_reply_mode_out_of_range_falls_back():
    data = ServiceData()
    data.set(1, 99)
    assert ReplyModes(data).get_mode(1) == "青云客"


def test_tts_default_and_names_copy():
    modes = TTSModes()
    names = modes.names()
    names.clear()
    assert modes.names()[0] == "拟声鸟阿梓"
    assert modes.get_mode(3) == "拟声鸟阿梓"


def test_tts_set_mode():
    modes = TTSModes()
    modes.set_mode(3, "百度男声")
    assert modes.get_mode(3) == "百度男声"
    with pytest.raises(ValueError):
        modes.set_mode(3, "unknown")


def test_tts_set_default_swaps():
    modes = TTSModes()
    before = modes.names()
    modes.set_default("百度女声")
    after = modes.names()
    assert after[0] == "百度女声"
    assert after[before.index("百度女声")] == before[0]
    assert sorted(after) == sorted(before)
    assert modes.get_mode(9) == "百度女声"


def test_float_to_chinese_pinned():
    assert float_to_chinese(12) == "十二"
    assert float_to_chinese(-1.5) == "负一点五"


def test_float_to_chinese_sign_and_integral():
    assert float_to_chinese(-37) == "负" + float_to_chinese(37)
    assert float_to_chinese(7.0) == float_to_chinese(7)


def test_float_to_chinese_injective():
    spelled = [float_to_chinese(n) for n in range(3000)]
    assert len(set(spelled)) == len(spelled)


def test_float_to_chinese_rejects_inf():
    with pytest.raises(ValueError):
        float_to_chinese(float("inf"))


def test_numbers_to_chinese_replaces():
    assert numbers_to_chinese("x12y3.5") == "x" + float_to_chinese(12) + "y" + float_to_chinese(3.5)
    assert numbers_to_chinese("没有数字") == "没有数字"


def test_numbers_to_chinese_leaves_no_digits():
    out = numbers_to_chinese("a -40 b +7 c 1000.25")
    assert not any(ch.isdigit() for ch in out)