"""A small message-matching engine: segments, events, matchers and dispatch."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from .kanban import BANNER

Rule = Callable[["Context"], bool]
Handler = Callable[["Context"], Any]
Sink = Callable[["Event", list["Segment"]], Any]

HELP_WORDS = ("/help", ".help", "菜单")
HELP_HINT = "\n可发送\"/服务列表\"查看 bot 功能"


def _go_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def _sprint(args: Iterable[Any]) -> str:
    """Join values, putting a space between two neighbours that are both non-strings."""
    out: list[str] = []
    prev_is_str = True
    for position, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if position and not is_str and not prev_is_str:
            out.append(" ")
        out.append(arg if is_str else _go_str(arg))
        prev_is_str = is_str
    return "".join(out)


@dataclass
class Segment:
    """One piece of a chat message."""

    type: str
    data: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def text(*args: Any) -> "Segment":
        return Segment("text", {"text": _sprint(args)})

    @staticmethod
    def image(file: str) -> "Segment":
        return Segment("image", {"file": file})

    @staticmethod
    def record(file: str) -> "Segment":
        return Segment("record", {"file": file})

    @staticmethod
    def at(qq: int) -> "Segment":
        return Segment("at", {"qq": str(qq)})

    @staticmethod
    def reply(message_id: int) -> "Segment":
        return Segment("reply", {"id": str(message_id)})


@dataclass
class Event:
    """An incoming message event."""

    user_id: int = 0
    group_id: int = 0
    message_id: int = 0
    message: list[Segment] = field(default_factory=list)
    raw_message: str = ""
    nickname: str = ""
    to_me: bool = False

    @property
    def plain_text(self) -> str:
        texts = [seg.data.get("text", "") for seg in self.message if seg.type == "text"]
        if texts:
            return "".join(texts)
        return "" if self.message else self.raw_message


def session_id(event: Event) -> int:
    """Group id for group messages, the negated user id for private ones."""
    return event.group_id if event.group_id else -event.user_id


class Context:
    """State for handling one event by one matcher."""

    def __init__(self, event: Event, sink: Sink | None = None) -> None:
        self.event = event
        self.state: dict[str, Any] = {}
        self.sent: list[list[Segment]] = []
        self._sink = sink

    @property
    def plain_text(self) -> str:
        return self.event.plain_text

    def send(self, *args: Any) -> list[Segment]:
        """Send a message made of segments; bare values become text segments."""
        segments = [a if isinstance(a, Segment) else Segment.text(a) for a in args]
        self.sent.append(segments)
        if self._sink is not None:
            self._sink(self.event, segments)
        return segments


@dataclass
class Matcher:
    """A set of rules and the handler run when they all hold."""

    rules: list[Rule] = field(default_factory=list)
    block: bool = True
    handler: Handler | None = None

    def handle(self, func: Handler) -> Handler:
        self.handler = func
        return func


def _as_list(words: str | Iterable[str]) -> list[str]:
    return [words] if isinstance(words, str) else list(words)


class Engine:
    """Holds matchers in priority order and dispatches events to them."""

    def __init__(self, sink: Sink | None = None) -> None:
        self.matchers: list[Matcher] = []
        self._sink = sink

    def _add(self, rules: Iterable[Rule]) -> Matcher:
        matcher = Matcher(rules=list(rules))
        self.matchers.append(matcher)
        return matcher

    def on_full_match(self, words: str | Iterable[str], *args: Rule) -> Matcher:
        candidates = _as_list(words)

        def rule(ctx: Context) -> bool:
            text = ctx.plain_text
            if text in candidates:
                ctx.state["matched"] = text
                return True
            return False

        return self._add([rule, *args])

    def on_keyword(self, words: str | Iterable[str], *args: Rule) -> Matcher:
        candidates = _as_list(words)

        def rule(ctx: Context) -> bool:
            text = ctx.plain_text
            found = next((w for w in candidates if w in text), None)
            if found is None:
                return False
            ctx.state["keyword"] = found
            return True

        return self._add([rule, *args])

    def on_regex(self, pattern: str, *args: Rule) -> Matcher:
        compiled = re.compile(pattern)

        def rule(ctx: Context) -> bool:
            match = compiled.search(ctx.plain_text)
            if match is None:
                return False
            ctx.state["regex_matched"] = [match.group(0)] + [g or "" for g in match.groups()]
            return True

        return self._add([rule, *args])

    def on_prefix(self, prefix: str, *args: Rule) -> Matcher:
        def rule(ctx: Context) -> bool:
            text = ctx.plain_text
            if not text.startswith(prefix):
                return False
            ctx.state["prefix"] = prefix
            ctx.state["args"] = text[len(prefix):].strip()
            return True

        return self._add([rule, *args])

    def on_suffix(self, suffix: str, *args: Rule) -> Matcher:
        def rule(ctx: Context) -> bool:
            text = ctx.plain_text
            if not text.endswith(suffix):
                return False
            ctx.state["suffix"] = suffix
            ctx.state["args"] = text[: len(text) - len(suffix)].strip()
            return True

        return self._add([rule, *args])

    def on_message(self, *args: Rule) -> Matcher:
        return self._add(args)

    def dispatch(self, event: Event) -> list[list[Segment]]:
        """Run matching handlers in order and return every message they sent."""
        sent: list[list[Segment]] = []
        for matcher in self.matchers:
            ctx = Context(event, self._sink)
            if not all(rule(ctx) for rule in matcher.rules):
                continue
            if matcher.handler is not None:
                matcher.handler(ctx)
            sent.extend(ctx.sent)
            if matcher.block:
                break
        return sent


class ServiceData:
    """Per-session integer settings of a service."""

    def __init__(self) -> None:
        self._data: dict[int, int] = {}
        self._lock = threading.Lock()

    def get(self, gid: int) -> int:
        with self._lock:
            return self._data.get(gid, 0)

    def set(self, gid: int, value: int) -> None:
        with self._lock:
            self._data[gid] = int(value)


def _only_to_me(ctx: Context) -> bool:
    return ctx.event.to_me


def register_help(engine: Engine, banner: str = BANNER) -> Matcher:
    """Answer help requests addressed to the bot with the banner."""
    matcher = engine.on_full_match(list(HELP_WORDS), _only_to_me)
    matcher.handle(lambda ctx: ctx.send(Segment.text(banner, HELP_HINT)))
    return matcher