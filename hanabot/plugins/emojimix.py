"""Combine two emoji into one picture from the emoji kitchen."""

from __future__ import annotations

from typing import Callable, Sequence

from ..engine import Segment

BED = "https://www.gstatic.com/android/keyboard/emojikitchen/{}/u{:x}/u{:x}_u{:x}.png"

EMOJIS: dict[int, int] = {
    128516: 20201001, 128512: 20201001, 128578: 20201001, 128579: 20201001,
    128521: 20201001, 128522: 20201001, 128518: 20201001, 128515: 20201001,
    128513: 20201001, 129315: 20201001, 128517: 20201001, 128514: 20201001,
    128519: 20201001, 129392: 20201001, 128525: 20201001, 128536: 20201001,
    129321: 20201001, 128535: 20201001, 128538: 20201001, 128537: 20201001,
    128539: 20201001, 128541: 20201001, 128523: 20201001, 129394: 20201001,
    129297: 20201001, 128540: 20201001, 129303: 20201001, 129323: 20201001,
    129300: 20201001, 129325: 20201001, 129320: 20201001, 129296: 20201001,
    128528: 20201001, 128529: 20201001, 128566: 20201001, 129322: 20201001,
    128527: 20201001, 128530: 20201001, 128580: 20201001, 128556: 20201001,
    128558: 20210218, 129317: 20201001, 128524: 20201001, 128532: 20201001,
    128554: 20201001, 129316: 20201001, 128564: 20201001, 128567: 20201001,
    129298: 20201001, 129301: 20201001, 129314: 20201001, 129326: 20201001,
    129319: 20201001, 129397: 20201001, 129398: 20201001, 128565: 20201001,
    129396: 20201001, 129327: 20201001, 129312: 20201001, 129395: 20201001,
    129400: 20201001, 129488: 20201001, 128526: 20201001, 128533: 20201001,
    128543: 20201001, 128577: 20201001, 128559: 20201001, 128562: 20201001,
    129299: 20201001, 128563: 20201001, 129402: 20201001, 128551: 20201001,
    128552: 20201001, 128550: 20201001, 128560: 20201001, 128549: 20201001,
    128557: 20201001, 128553: 20201001, 128546: 20201001, 128547: 20201001,
    128544: 20201001, 128531: 20201001, 128534: 20201001, 129324: 20201001,
    128542: 20201001, 128555: 20201001, 128548: 20201001, 129393: 20201001,
    128169: 20201001, 128545: 20201001, 128561: 20201001, 128127: 20201001,
    128128: 20201001, 128125: 20201001, 128520: 20201001, 129313: 20201001,
    128123: 20201001, 129302: 20201001, 128175: 20201001, 128064: 20201001,
    127801: 20201001, 127804: 20201001, 127799: 20201001, 127797: 20201001,
    127821: 20201001, 127874: 20201001, 127751: 20210831, 129473: 20201001,
    127911: 20210521, 127800: 20210218, 129440: 20201001, 128144: 20201001,
    127789: 20201001, 128139: 20201001, 127875: 20201001, 129472: 20201001,
    9749: 20201001, 127882: 20201001, 127880: 20201001, 9924: 20201001,
    128142: 20201001, 127794: 20201001, 129410: 20210218, 128584: 20201001,
    128148: 20201001, 128140: 20201001, 128152: 20201001, 128159: 20201001,
    128158: 20201001, 128147: 20201001, 128149: 20201001, 128151: 20201001,
    129505: 20201001, 128155: 20201001, 10084: 20210218, 128156: 20201001,
    128154: 20201001, 128153: 20201001, 129294: 20201001, 129293: 20201001,
    128420: 20201001, 128150: 20201001, 128157: 20201001, 127873: 20211115,
    129717: 20211115, 127942: 20211115, 127838: 20210831, 128240: 20201001,
    128302: 20201001, 128081: 20201001, 128055: 20201001, 129412: 20210831,
    127771: 20201001, 129420: 20201001, 129668: 20210521, 128171: 20201001,
    128049: 20201001, 129409: 20201001, 128293: 20201001, 128038: 20210831,
    129415: 20201001, 129417: 20210831, 127752: 20201001, 128053: 20201001,
    128029: 20201001, 128034: 20201001, 128025: 20201001, 129433: 20201001,
    128016: 20210831, 128060: 20201001, 128040: 20201001, 129445: 20201001,
    128059: 20210831, 128048: 20201001, 129428: 20201001, 128054: 20211115,
    128041: 20211115, 129437: 20211115, 128039: 20211115, 128012: 20210218,
    128045: 20201001, 128031: 20210831, 127757: 20201001, 127774: 20201001,
    127775: 20201001, 11088: 20201001, 127772: 20201001, 129361: 20201001,
    127820: 20211115, 127827: 20210831, 127819: 20210521, 127818: 20211115,
}

QQFACE: dict[int, int] = {
    0: 128558, 1: 128556, 2: 128525, 4: 128526, 5: 128557, 6: 129402,
    7: 129296, 8: 128554, 11: 128545, 12: 128539, 13: 128513, 14: 128578,
    15: 128577, 16: 128526, 19: 129326, 20: 129325, 21: 128522, 23: 128533,
    24: 128523, 27: 128531, 28: 128516, 31: 129324, 32: 129300, 33: 129323,
    34: 128565, 35: 128547, 37: 128128, 46: 128055, 53: 127874, 59: 128169,
    60: 9749, 63: 127801, 66: 10084, 67: 128148, 69: 127873, 74: 127774,
    75: 127772, 96: 128517, 104: 129393, 109: 128535, 110: 128562, 111: 129402,
    172: 128539, 182: 128514, 187: 128123, 247: 128567, 272: 128579, 320: 129395,
    325: 128561,
}


def face_to_emoji(segment: Segment) -> int:
    """Code point of a one-character text or a known QQ face; 0 otherwise."""
    if segment.type == "text":
        text = segment.data.get("text", "")
        return ord(text) if len(text) == 1 else 0
    if segment.type != "face":
        return 0
    try:
        face_id = int(segment.data.get("id", ""))
    except ValueError:
        return 0
    return QQFACE.get(face_id, 0)


def match_emojis(segments: Sequence[Segment], raw: str) -> tuple[int, int] | None:
    """Return the two mixable emoji of a message, or None."""
    if len(segments) == 2:
        pair = tuple(face_to_emoji(seg) for seg in segments)
        if all(code in EMOJIS for code in pair):
            return pair[0], pair[1]
        return None
    if len(raw) == 2:
        pair = (ord(raw[0]), ord(raw[1]))
        if all(code in EMOJIS for code in pair):
            return pair
    return None


def mix_urls(r1: int, r2: int) -> tuple[str, str]:
    """The two candidate picture addresses, one for each order of the pair."""
    return (
        BED.format(EMOJIS.get(r1, 0), r1, r1, r2),
        BED.format(EMOJIS.get(r2, 0), r2, r2, r1),
    )


def mix(r1: int, r2: int, exists: Callable[[str], bool]) -> str | None:
    """The first candidate address for which ``exists`` holds, or None."""
    return next((url for url in mix_urls(r1, r2) if exists(url)), None)