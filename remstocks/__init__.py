"""Telegram bot library that tracks users' product cards and notifies them about sales."""

__version__ = "0.1.0"
__all__ = ["bot", "json_worker", "script_loader", "sender", "user"]