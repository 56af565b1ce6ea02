"""Poll the Bot API for messages and dispatch them to subscribed users."""

from __future__ import annotations

import shlex
import threading
from pathlib import Path

from remstocks.json_worker import JsonKind, read
from remstocks.sender import MessageKind, TelegramSender
from remstocks.user import DEFAULT_CARDS_FILE, TelegramUser

__all__ = ["TelegramBot"]

_MESSAGE_FILTER = (
    ".result[] | select(.message.text != null) | "
    "{text: .message.text, id: .message.from.id}"
)


class TelegramBot:
    """Keeps the subscribers and turns incoming messages into commands."""

    updates_command = "jq -r {filter} {path}"

    def __init__(
        self,
        offset: str,
        sender: TelegramSender | None = None,
        cards_file: str | Path = DEFAULT_CARDS_FILE,
        interval: float = 10.0,
    ) -> None:
        self.offset = str(offset)
        self.cards_file = Path(cards_file)
        self.interval = interval
        self._sender = sender
        self._users: list[TelegramUser] = []
        self._lock = threading.RLock()
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def sender(self) -> TelegramSender:
        """The sender used for requests; the shared one unless given."""
        if self._sender is None:
            return TelegramSender.get_instance()
        return self._sender

    @property
    def users(self) -> tuple[TelegramUser, ...]:
        """The subscribers, in the order they joined."""
        with self._lock:
            return tuple(self._users)

    def start(self) -> None:
        """Start polling for messages in a background thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stopped.clear()
        self._thread = threading.Thread(
            target=self.check_msg, name="telegram-bot", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Ask the polling thread to finish after its current round."""
        self._stopped.set()

    def check_msg(self) -> None:
        """Poll every ``interval`` seconds until stopped."""
        while not self._stopped.wait(self.interval):
            self.poll_once()

    def poll_once(self) -> bool:
        """Fetch updates at the current offset and handle the first message.

        Returns whether a message was found.
        """
        sender = self.sender
        sender.call("", MessageKind.READ, self.offset).result()
        command = self.updates_command.format(
            filter=shlex.quote(_MESSAGE_FILTER),
            path=shlex.quote(str(sender.result_path(self.offset))),
        )
        lines = read(command, JsonKind.MESSAGE)
        if not lines:
            return False
        if len(lines) < 3:
            raise ValueError(f"incomplete message in updates: {lines!r}")

        user_id, text = lines[2], lines[1]
        with self._lock:
            if text == "start":
                self._users.append(self._new_user(user_id))
            else:
                for user in self._users:
                    if user.user_id == user_id:
                        user.notify(text)
                        break
            self.offset = str(int(self.offset) + 1)
        return True

    def notify_all(self, message: str) -> None:
        """Pass ``message`` to every subscriber."""
        for user in self.users:
            user.notify(message)

    def liked_products(self) -> set[str]:
        """Every card followed by at least one subscriber."""
        products: set[str] = set()
        for user in self.users:
            products |= user.cards()
        return products

    def add_user(self, user: TelegramUser | str) -> TelegramUser:
        """Subscribe ``user``, given as a user or as a chat id."""
        if not isinstance(user, TelegramUser):
            user = self._new_user(user)
        with self._lock:
            self._users.append(user)
        return user

    def find_user(self, user_id: str) -> TelegramUser:
        """The first subscriber with ``user_id``."""
        for user in self.users:
            if user.user_id == user_id:
                return user
        raise KeyError(user_id)

    def _new_user(self, user_id: str) -> TelegramUser:
        return TelegramUser(user_id, self._sender, self.cards_file)