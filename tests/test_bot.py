import time
from concurrent.futures import Future

import pytest

from remstocks.bot import TelegramBot
from remstocks.sender import MessageKind
from remstocks.user import TelegramUser


def jq_output(text, user_id):
    return '{\n  "text": "%s",\n  "id": %s\n}\n' % (text, user_id)


class FakeSender:
    def __init__(self, directory):
        self.directory = directory
        self.calls = []
        self.updates = {}

    def result_path(self, offset):
        return self.directory / f"result_{offset}.json"

    def call(self, chat_id, kind, data):
        self.calls.append((chat_id, kind, data))
        if kind is MessageKind.READ:
            self.result_path(data).write_text(self.updates.get(data, ""), encoding="utf-8")
        future = Future()
        future.set_result("")
        return future


@pytest.fixture
def sender(tmp_path):
    return FakeSender(tmp_path)


@pytest.fixture
def bot(sender, tmp_path):
    made = TelegramBot("100", sender, tmp_path / "cards.json", interval=0.01)
    made.updates_command = "cat {path}"
    return made


def test_start_message_adds_user(bot, sender):
    sender.updates["100"] = jq_output("start", "42")
    assert bot.poll_once() is True
    assert [user.user_id for user in bot.users] == ["42"]
    assert bot.offset == "101"
    assert sender.calls[0] == ("", MessageKind.READ, "100")


def test_command_message_goes_to_matching_user(bot, sender):
    bot.add_user("42")
    bot.add_user("43")
    sender.updates["100"] = jq_output("1. Mollis", "42")
    assert bot.poll_once() is True
    assert bot.find_user("42").cards() == {"Mollis"}
    assert bot.find_user("43").cards() == set()
    assert bot.offset == "101"


def test_message_from_unknown_user_still_advances(bot, sender):
    sender.updates["100"] = jq_output("1. Mollis", "42")
    assert bot.poll_once() is True
    assert bot.users == ()
    assert bot.offset == "101"


def test_no_messages_keeps_offset(bot, sender):
    assert bot.poll_once() is False
    assert bot.offset == "100"


def test_add_user_accepts_user_object(bot, sender):
    user = TelegramUser("42", sender)
    returned = bot.add_user(user)
    assert returned is user
    assert bot.find_user("42") is user


def test_find_user_missing_raises(bot):
    with pytest.raises(KeyError):
        bot.find_user("nobody")


def test_notify_all_and_liked_products(bot):
    bot.add_user("1")
    bot.add_user("2")
    bot.notify_all("1. Mollis")
    bot.find_user("2").add_card("Bread")
    assert bot.find_user("1").cards() == {"Mollis"}
    assert bot.liked_products() == {"Mollis", "Bread"}


def test_liked_products_empty(bot):
    assert bot.liked_products() == set()


def test_start_polls_in_background(bot, sender):
    sender.updates["100"] = jq_output("start", "42")
    bot.start()
    try:
        deadline = time.monotonic() + 5
        while not bot.users and time.monotonic() < deadline:
            time.sleep(0.01)
    finally:
        bot.stop()
    assert bot.find_user("42").user_id == "42"
    assert int(bot.offset) > 100


def test_incomplete_output_raises(bot, sender):
    sender.updates["100"] = "{\n"
    with pytest.raises(ValueError):
        bot.poll_once()