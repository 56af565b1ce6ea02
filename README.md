# remstocks

remstocks is a small Telegram bot library. Each subscriber keeps a set of
product "cards" they follow. The bot polls the Telegram Bot API for new
messages, registers users who write `start`, and passes other messages to
the matching user as commands.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

Fetching updates needs the `jq` command-line tool on the `PATH`.

## Modules

### `remstocks.sender`

`TelegramSender(token, results_dir="../res")` makes Bot API requests.

- `query(chat_id, kind, data)` performs one request and returns `""`:
  - `MessageKind.READ` calls `getUpdates?offset=<data>` and writes the raw
    response body to `result_path(data)`, i.e. `results_dir/result_<data>.json`;
  - `MessageKind.SEND` posts `data`, URL-encoded, as the text of a
    `sendMessage` to `chat_id`.
  
  Network errors raised by `requests` are swallowed.
- `call(chat_id, kind, data)` runs `query` in a background thread pool and
  returns a `concurrent.futures.Future`.
- `TelegramSender.from_env_file(path="../.env", results_dir="../res")`
  builds a sender whose token is the first whitespace-separated word of the
  file (an empty token if the file is empty).
- `TelegramSender.get_instance()` returns a shared sender, created on first
  use with `from_env_file()` and its defaults; `TelegramSender.destroy()`
  shuts its pool down and forgets it.

### `remstocks.json_worker`

`read(command, kind)` runs `command` through the shell and cleans each line
of its standard output according to a `JsonKind`:

- `JsonKind.PRODUCTS` uses `erase_for_products(line)`, which keeps what
  follows the first `": "` of the line;
- `JsonKind.MESSAGE` uses `erase_for_messages(line)`, which extracts the
  quoted value of a `"key": "value"` line.

Lines with no `:` are returned unchanged. A `:` that ends the line raises
`ValueError`.

### `remstocks.user`

`TelegramUser(user_id, sender=None, cards_file="../res/cards.json")` holds a
chat id and a set of cards. `add_card`, `del_card` (unknown cards are
ignored) and `cards()` (a copy) manage the set. Without a `sender` the
shared `TelegramSender.get_instance()` is used.

`notify(message)` handles a command of the form `"<digit>. <argument>"`;
the argument starts at the fourth character:

- `1. <name>` adds the card `<name>`;
- `2. <name>` sends `<name>` to the user's chat if the user follows it;
- `3. ...` does nothing;
- `4. ...` reads `cards_file`, a JSON object with a `"cards"` list of
  objects with a `"name"`, and sends each name the user follows.

Any other leading character is ignored. A message shorter than three
characters raises `ValueError`. Sends wait for the request to finish.

### `remstocks.bot`

`TelegramBot(offset, sender=None, cards_file="../res/cards.json", interval=10.0)`
keeps the subscribers.

- `poll_once()` fetches updates at the current `offset`, runs a `jq` filter
  over the saved file, and handles the first text message found: `start`
  subscribes its sender, any other text is passed to `notify` of the first
  user with that id. The offset is then increased by one. It returns whether
  a message was found.
- `start()` runs `check_msg()` in a daemon thread, which calls `poll_once()`
  every `interval` seconds until `stop()` is called.
- `add_user(user)` accepts a `TelegramUser` or a chat id and returns the
  user; `find_user(user_id)` returns the first match or raises `KeyError`;
  `users` lists the subscribers in joining order.
- `notify_all(message)` passes a command to every user;
  `liked_products()` is the union of all users' cards.

### `remstocks.script_loader`

`script_load(command)` runs a shell command and returns its exit status
(0–255); a process killed by a signal yields `0`.

## Example

```python
from remstocks.sender import TelegramSender
from remstocks.user import TelegramUser
from remstocks.bot import TelegramBot

sender = TelegramSender("token", "res")
bot = TelegramBot("0", sender, "res/cards.json", 10)

user = TelegramUser("42", sender, "res/cards.json")
user.add_card("Mollis")
bot.add_user(user)

print(bot.liked_products())   # {'Mollis'}
bot.start()                   # polls Telegram in the background
```

## What it does not do

- There is no command-line program; the bot is driven from Python code.
- Users and their cards live only in memory and are lost when the process
  ends; nothing is stored in a database.
- The sale data in the cards file is not produced by this package; it only
  reads that file.
- The forecast command (`3.`) is accepted but does nothing.