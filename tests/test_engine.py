import pytest

from hanabot.engine import (
    Context,
    Engine,
    Event,
    Segment,
    ServiceData,
    register_help,
    session_id,
)


def text_event(text, **kwargs):
    return Event(message=[Segment.text(text)], raw_message=text, **kwargs)


def test_segment_text_joins_strings():
    assert Segment.text("a", "b").data["text"] == "ab"


def test_segment_text_mixed_values():
    assert Segment.text("群温度 ", 26, "℃").data["text"] == "群温度 26℃"


def test_segment_text_spaces_between_non_strings():
    assert Segment.text(1, 2).data["text"] == "1 2"


def test_segment_kinds():
    assert Segment.image("x.jpg") == Segment("image", {"file": "x.jpg"})
    assert Segment.record("y.amr").type == "record"
    assert Segment.at(42).data["qq"] == "42"
    assert Segment.reply(7).data["id"] == "7"


def test_session_id():
    assert session_id(Event(user_id=5, group_id=9)) == 9
    assert session_id(Event(user_id=5)) == -5


def test_context_send_wraps_values():
    ctx = Context(Event())
    segs = ctx.send("hi", Segment.image("a"))
    assert segs[0] == Segment.text("hi")
    assert ctx.sent == [segs]


def test_full_match_and_block():
    engine = Engine()
    engine.on_full_match(["ping", "p"]).handle(lambda ctx: ctx.send("pong"))
    engine.on_message().handle(lambda ctx: ctx.send("fallback"))
    assert engine.dispatch(text_event("p")) == [[Segment.text("pong")]]
    assert engine.dispatch(text_event("other")) == [[Segment.text("fallback")]]


def test_non_blocking_continues():
    engine = Engine()
    first = engine.on_keyword("a")
    first.block = False
    first.handle(lambda ctx: ctx.send(ctx.state["keyword"]))
    engine.on_message().handle(lambda ctx: ctx.send("next"))
    sent = engine.dispatch(text_event("xax"))
    assert [s[0].data["text"] for s in sent] == ["a", "next"]


def test_regex_state():
    engine = Engine()
    seen = {}
    engine.on_regex(r"^set(\d+)(x)?").handle(lambda ctx: seen.update(ctx.state))
    engine.dispatch(text_event("set12"))
    assert seen["regex_matched"] == ["set12", "12", ""]


def test_prefix_and_suffix_args():
    engine = Engine()
    got = []
    engine.on_prefix("选择").handle(lambda ctx: got.append(ctx.state["args"]))
    engine.on_suffix("疫情").handle(lambda ctx: got.append(ctx.state["args"]))
    engine.dispatch(text_event("选择  A "))
    engine.dispatch(text_event("北京 疫情"))
    assert got == ["A", "北京"]


def test_extra_rule_blocks_handler():
    engine = Engine()
    engine.on_full_match("x", lambda ctx: ctx.event.to_me).handle(lambda ctx: ctx.send("ok"))
    assert engine.dispatch(text_event("x")) == []
    assert engine.dispatch(text_event("x", to_me=True)) == [[Segment.text("ok")]]


def test_sink_receives_messages():
    received = []
    engine = Engine(sink=lambda ev, segs: received.append((ev.user_id, segs)))
    engine.on_message().handle(lambda ctx: ctx.send("hey"))
    engine.dispatch(text_event("z", user_id=3))
    assert received == [(3, [Segment.text("hey")])]


def test_register_help():
    engine = Engine()
    register_help(engine, "BANNER")
    sent = engine.dispatch(text_event("菜单", to_me=True))
    assert sent[0][0].data["text"] == "BANNER\n可发送\"/服务列表\"查看 bot 功能"
    assert engine.dispatch(text_event("菜单")) == []


@pytest.mark.parametrize("gid", [0, 12, -7])
def test_service_data(gid):
    data = ServiceData()
    assert data.get(gid) == 0
    data.set(gid, 3)
    assert data.get(gid) == 3