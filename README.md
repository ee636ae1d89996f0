# hanabot

Building blocks for a chat bot used in group and private chats: the bot's
configuration and command line, a small message-matching engine, and the
logic of a set of plugins (small talk, a choice helper, base16384 and TEA
text encoding, emoji mixing, drift bottles, book reviews, story templates,
essays, bilibili data, epidemic figures, system status and more).

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
pytest
```

## The `hanabot` command

The package installs one command, `hanabot`. Every run first prints the
start-up banner.

Show the banner again and the list of options:

```
hanabot -h
```

Options:

- `-t` access token of the websocket client (default empty)
- `-u` websocket URL (default `ws://127.0.0.1:6700`)
- `-n` default nickname (default `椛椛`); `ATRI`, `atri`, `亚托莉` and
  `アトリ` are always added after it
- `-p` command prefix (default `/`)
- `-c FILE` load the configuration from a JSON file instead
- `-s FILE` write the configuration built from the options to a file and exit
- `-d` debug logging, `-w` warnings and above only (`-w` wins over `-d`)
- any further arguments that are 64-bit integers are taken as superuser ids;
  other arguments are ignored

Write a configuration with two superusers to a file:

```
hanabot -u ws://127.0.0.1:6700 -t token -n 椛椛 -p / -s config.json 10001 10002
```

Load it again:

```
hanabot -c config.json
```

After building or loading the configuration the command logs a one-line
summary of it (nicknames, prefix, websocket URLs) in colour and exits with
status 0.

The configuration file is JSON of this shape:

```json
{"zero": {"nickname": ["椛椛", "ATRI", "atri", "亚托莉", "アトリ"],
          "command_prefix": "/", "super_users": [10001]},
 "ws": [{"Url": "ws://127.0.0.1:6700", "AccessToken": "token"}]}
```

## Using the library

### Configuration

```python
from hanabot.config import default_config, save_config, load_config, parse_superusers

cfg = default_config("ws://127.0.0.1:6700", "token", "椛椛", "/", parse_superusers(["10001", "x"]))
save_config(cfg, "config.json")
assert load_config("config.json").to_dict() == cfg.to_dict()
```

`load_config` raises `ValueError` for a file that is not a configuration
object. `hanabot.logformat.ColorFormatter` formats log records as a coloured
`[LEVEL] message` line; `hanabot.kanban.banner_text` and `print_banner`
produce the banner.

### Message engine

`hanabot.engine.Engine` keeps matchers in registration order. Register them
with `on_full_match`, `on_keyword`, `on_regex`, `on_prefix`, `on_suffix` or
`on_message` (each takes extra rule functions of a `Context`), attach a
handler with `Matcher.handle`, and feed events to `dispatch`, which returns
every message the handlers sent. A matcher blocks later ones by default.

```python
from hanabot.engine import Engine, Event, register_help
from hanabot.plugins.choose import choose

engine = Engine()
register_help(engine)
engine.on_prefix("选择").handle(
    lambda ctx: ctx.send(choose(ctx.state["args"], ctx.event.nickname))
)
sent = engine.dispatch(Event(user_id=1, raw_message="选择茶还是咖啡", nickname="Alice"))
print(sent[0][0].data["text"])
```

`Segment` builds message pieces (`text`, `image`, `record`, `at`, `reply`),
`session_id` gives the group id or the negated user id, and `ServiceData`
keeps an integer setting per session.

### Plugins

All in `hanabot.plugins`:

- `chat`: `nickname_reply`, `poke_reply` with a token-bucket `RateLimiter`,
  and a per-group `AirConditioner` (default 26℃).
- `choose`: `choose` lists the options split on `还是` and picks one.
- `aiwife`: `waifu_url` gives a random picture address.
- `aireply`: `ReplyModes` and `TTSModes` per-session mode settings;
  `float_to_chinese` and `numbers_to_chinese` spell numbers in Chinese.
- `base16384`: `encode`, `decode`, `encode_string`, `decode_string`.
- `tea`: the `TEA` cipher with `encrypt`/`decrypt`, and `key_from_text`.
- `emojimix`: `face_to_emoji`, `match_emojis`, `mix_urls`, and `mix`, which
  takes a callable telling whether an address exists.
- `curse`, `cpstory`, `bookreview`, `chouxianghua`, `diana`: SQLite-backed
  stores (`CurseStore`, `CpStoryStore`, `BookReviewStore`, `PinyinStore`,
  `TextStore`; in memory by default, or at a given path) plus `fill_story`,
  `split_names`, `convert`, `text_id`, `is_check_request`,
  `build_request_body` and `format_report`.
- `driftbottle`: a `Sea` of channels holding `Bottle`s, `bottle_id`
  (CRC-64/ISO), `parse_throw` and `parse_fetch`.
- `bilibili`: `parse_search`, `parse_followings`, `parse_medals`,
  `sort_medals` and a `VupStore` of vups and the cookie.
- `bilibilipush`: `PushStore` of subscriptions and up names.
- `epidemic`: `parse_epidemic`, `find_city`, `format_report`.
- `baidu`: `search_link`.
- `sysstat`: `cpu_percent`, `mem_percent`, `disk_report`, `status_text`
  (via psutil).

```python
from hanabot.plugins.base16384 import encode_string, decode_string
from hanabot.plugins.driftbottle import Bottle, Sea

assert decode_string(encode_string("hello")) == "hello"

with Sea() as sea:
    sea.throw(Bottle(qq=1, grp=0, name="Alice", msg="hi"))
    print(sea.fetch("global", -2).msg)
```

## What the package does not do

- The `hanabot` command does not connect to the websocket endpoint and does
  not run a bot: it only builds, loads or saves the configuration and exits.
  Wiring an `Engine` to a chat connection is left to the caller.
- No plugin fetches anything over the network. The bilibili, epidemic and
  essay-check modules parse responses and format replies from data the
  caller supplies; `emojimix.mix` asks the caller whether an address exists.
- There is no text-to-speech or AI chat backend; `aireply` only keeps the
  chosen modes and spells numbers.
- No picture rendering: results are returned as text and addresses.
- The notice board in the banner is empty unless text is passed to
  `banner_text` or `print_banner`.