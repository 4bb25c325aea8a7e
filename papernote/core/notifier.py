"""
User notification sinks
"""
from __future__ import annotations

import sys
from typing import List, Optional, Protocol, TextIO


class Notifier(Protocol):
    def notify(self, message: str) -> None:
        ...


class ConsoleNotifier:
    """Print notices to a stream (stderr by default)"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def notify(self, message: str) -> None:
        print(message, file=self.stream or sys.stderr)


class RecordingNotifier:
    """Keep notices in memory"""

    def __init__(self):
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)
