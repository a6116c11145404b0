"""A global switch for diagnostic chatter."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

__all__ = ["set_talk", "is_talking", "talk"]


@dataclass
class _Settings:
    on: bool = True


_settings = _Settings()


def set_talk(enabled: bool) -> None:
    """Turn diagnostic output on or off."""
    _settings.on = bool(enabled)


def is_talking() -> bool:
    """True when diagnostic output is on."""
    return _settings.on


def talk(message: str, stream: TextIO | None = None) -> bool:
    """Write ``message`` as a line when talking is on; return whether it was written."""
    if not _settings.on:
        return False
    stream = sys.stdout if stream is None else stream
    stream.write(f"{message}\n")
    return True