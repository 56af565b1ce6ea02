"""Talk to the Telegram Bot API: fetch updates to a file and send messages."""

from __future__ import annotations

import enum
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from urllib.parse import quote

import requests

__all__ = ["MessageKind", "TelegramSender"]

API_BASE = "https://api.telegram.org"
DEFAULT_ENV_FILE = "../.env"
DEFAULT_RESULTS_DIR = "../res"


class MessageKind(enum.Enum):
    """The request a sender makes."""

    READ = "read"
    SEND = "send"


class TelegramSender:
    """Issues Bot API requests, optionally in the background."""

    _instance: TelegramSender | None = None
    _instance_lock = threading.Lock()

    def __init__(self, token: str, results_dir: str | Path = DEFAULT_RESULTS_DIR) -> None:
        self.token = token
        self.results_dir = Path(results_dir)
        self._executor = ThreadPoolExecutor(thread_name_prefix="telegram-sender")

    @classmethod
    def from_env_file(
        cls,
        path: str | Path = DEFAULT_ENV_FILE,
        results_dir: str | Path = DEFAULT_RESULTS_DIR,
    ) -> TelegramSender:
        """Build a sender whose token is the first word of the file at ``path``."""
        words = Path(path).read_text(encoding="utf-8").split()
        return cls(words[0] if words else "", results_dir)

    @classmethod
    def get_instance(cls) -> TelegramSender:
        """Return the shared sender, creating it from the default env file."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls.from_env_file()
            return cls._instance

    @classmethod
    def destroy(cls) -> None:
        """Drop the shared sender."""
        with cls._instance_lock:
            if cls._instance is not None:
                cls._instance._executor.shutdown(wait=False)
            cls._instance = None

    def call(self, chat_id: str, kind: MessageKind, data: str) -> Future:
        """Run :meth:`query` in the background and return its future."""
        return self._executor.submit(self.query, chat_id, kind, data)

    def result_path(self, offset: str) -> Path:
        """Where the updates fetched at ``offset`` are stored."""
        return self.results_dir / f"result_{offset}.json"

    def query(self, chat_id: str, kind: MessageKind, data: str) -> str:
        """Perform one request; transport failures are ignored."""
        url = f"{API_BASE}/bot{self.token}"
        kind = MessageKind(kind)
        if kind is MessageKind.READ:
            path = self.result_path(data)
            with path.open("wb") as out:
                try:
                    response = requests.get(f"{url}/getUpdates?offset={data}")
                except requests.RequestException:
                    return ""
                out.write(response.content)
        else:
            body = f"chat_id={chat_id}&text={quote(data, safe='')}"
            try:
                requests.post(
                    f"{url}/sendMessage",
                    data=body.encode("utf-8"),
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
            except requests.RequestException:
                pass
        return ""