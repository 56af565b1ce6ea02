"""Run an external script through the shell and report its exit status."""

from __future__ import annotations

import subprocess

__all__ = ["script_load"]


def script_load(command: str) -> int:
    """Run ``command`` through the shell and return its exit status (0-255)."""
    completed = subprocess.run(command, shell=True, check=False)
    if completed.returncode < 0:
        # Terminated by a signal: there is no exit status to report.
        return 0
    return completed.returncode & 0xFF