"""Run a shell command that emits jq-formatted JSON and pull values out of its lines."""

from __future__ import annotations

import enum
import subprocess

__all__ = ["JsonKind", "read", "erase_for_products", "erase_for_messages"]


class JsonKind(enum.Enum):
    """How each output line of a jq command is cleaned up."""

    PRODUCTS = "products"
    MESSAGE = "message"


def _value_start(line: str, colon: int) -> int:
    start = colon + 2
    if start > len(line):
        raise ValueError(f"no value after ':' in line {line!r}")
    return start


def erase_for_products(line: str) -> str:
    """Return what follows ``": "`` in a product line, or the line unchanged."""
    colon = line.find(":")
    if colon == -1:
        return line
    return line[_value_start(line, colon):]


def erase_for_messages(line: str) -> str:
    """Return the bare value of a ``"key": value`` message line, or the line unchanged."""
    colon = line.find(":")
    if colon == -1:
        return line
    start = _value_start(line, colon)
    count = len(line) - 9
    value = line[start:] if count < 0 else line[start:start + count]

    first = value.find('"')
    if first == -1:
        return value
    last = value.rfind('"')
    if last == 0:
        return value[first + 1:]
    return value[first + 1:first + 1 + last - 1]


_CLEANERS = {
    JsonKind.PRODUCTS: erase_for_products,
    JsonKind.MESSAGE: erase_for_messages,
}


def read(command: str, kind: JsonKind) -> list[str]:
    """Run ``command`` through the shell and clean every line of its output."""
    cleaner = _CLEANERS[JsonKind(kind)]
    completed = subprocess.run(
        command,
        shell=True,
        stdout=subprocess.PIPE,
        encoding="utf-8",
        errors="replace",
        check=False,
    )
    return [cleaner(line) for line in completed.stdout.splitlines(keepends=True)]