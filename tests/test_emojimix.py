from hanabot.engine import Segment
from hanabot.plugins.emojimix import (
    face_to_emoji,
    match_emojis,
    mix,
    mix_urls,
)

SMILE = ord("😄")
GRIN = ord("😀")
EXHALE = 128558


def test_text_segment_single_char():
    assert face_to_emoji(Segment.text("😄")) == 128516


def test_text_segment_multiple_chars():
    assert face_to_emoji(Segment.text("ab")) == 0


def test_face_segment():
    assert face_to_emoji(Segment("face", {"id": "0"})) == 128558


def test_unknown_face_and_type():
    assert face_to_emoji(Segment("face", {"id": "3"})) == 0
    assert face_to_emoji(Segment("face", {"id": "x"})) == 0
    assert face_to_emoji(Segment.image("a.png")) == 0


def test_match_two_segments():
    segs = [Segment("face", {"id": "28"}), Segment.text("😀")]
    assert match_emojis(segs, "") == (128516, GRIN)


def test_match_two_segments_rejects_unknown():
    segs = [Segment.text("a"), Segment.text("😀")]
    assert match_emojis(segs, "😄😀") is None


def test_match_raw():
    assert match_emojis([Segment.text("😄😀")], "😄😀") == (SMILE, GRIN)


def test_match_raw_wrong_length():
    assert match_emojis([], "😄") is None
    assert match_emojis([], "a😀") is None


def test_mix_urls():
    u1, u2 = mix_urls(SMILE, GRIN)
    assert u1 == (
        "https://www.gstatic.com/android/keyboard/emojikitchen/20201001/u1f604/u1f604_u1f600.png"
    )
    assert u2.endswith("u1f600/u1f600_u1f604.png")


def test_mix_picks_first_existing():
    u1, u2 = mix_urls(SMILE, GRIN)
    assert mix(SMILE, GRIN, lambda url: True) == u1
    assert mix(SMILE, GRIN, lambda url: url == u2) == u2
    assert mix(SMILE, GRIN, lambda url: False) is None


def test_table_dates():
    u1, u2 = mix_urls(EXHALE, SMILE)
    assert u1 == (
        "https://www.gstatic.com/android/keyboard/emojikitchen/20210218/u1f62e/u1f62e_u1f604.png"
    )
    assert u2 == (
        "https://www.gstatic.com/android/keyboard/emojikitchen/20201001/u1f604/u1f604_u1f62e.png"
    )