"""A bot subscriber and the commands it understands."""

from __future__ import annotations

import json
from pathlib import Path

from remstocks.sender import MessageKind, TelegramSender

__all__ = ["TelegramUser", "DEFAULT_CARDS_FILE"]

DEFAULT_CARDS_FILE = "../res/cards.json"

_ADD_CARD = 1
_SEND_SALE = 2
_FORECAST = 3
_WANTED_SALES = 4


class TelegramUser:
    """A chat subscriber with the set of product cards it follows.

    Commands have the form ``"<digit>. <argument>"``: the digit picks the
    action and the argument starts at the fourth character.
    """

    def __init__(
        self,
        user_id: str,
        sender: TelegramSender | None = None,
        cards_file: str | Path = DEFAULT_CARDS_FILE,
    ) -> None:
        self.user_id = str(user_id)
        self.cards_file = Path(cards_file)
        self._sender = sender
        self._cards: set[str] = set()

    def __repr__(self) -> str:
        return f"TelegramUser(user_id={self.user_id!r}, cards={sorted(self._cards)!r})"

    @property
    def sender(self) -> TelegramSender:
        """The sender used for replies; the shared one unless given."""
        if self._sender is None:
            return TelegramSender.get_instance()
        return self._sender

    def add_card(self, card: str) -> None:
        """Follow ``card``."""
        self._cards.add(card)

    def del_card(self, card: str) -> None:
        """Stop following ``card``; unknown cards are ignored."""
        self._cards.discard(card)

    def cards(self) -> set[str]:
        """A copy of the followed cards."""
        return set(self._cards)

    def notify(self, message: str) -> None:
        """Carry out one command message."""
        if len(message) < 3:
            raise ValueError(f"command too short: {message!r}")
        action = ord(message[0]) - ord("0")
        argument = message[3:]

        if action == _ADD_CARD:
            self.add_card(argument)
        elif action == _SEND_SALE:
            if argument in self._cards:
                self._send(argument)
        elif action == _FORECAST:
            pass
        elif action == _WANTED_SALES:
            for name in self._sale_names():
                if name in self._cards:
                    self._send(name)

    def _send(self, text: str) -> None:
        self.sender.call(self.user_id, MessageKind.SEND, text).result()

    def _sale_names(self) -> list[str]:
        with self.cards_file.open(encoding="utf-8") as handle:
            document = json.load(handle)
        names = []
        for entry in document.get("cards") or []:
            name = entry["name"]
            if not isinstance(name, str):
                raise TypeError(f"card name is not a string: {name!r}")
            names.append(name)
        return names