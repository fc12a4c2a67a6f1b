from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable, Sequence
from typing import Protocol, TextIO

from .models import Choice, Contact


class Picker(Protocol):
    """Modal list of choices; resolves to the picked contact or None when dismissed."""

    async def present(self, choices: Sequence[Choice]) -> Contact | None: ...


class DismissingPicker:
    """Non-interactive picker that always dismisses.

    Used where nobody can answer a prompt (HTTP requests); the caller gets the
    full candidate list back instead.
    """

    def __init__(self) -> None:
        self.presented: list[list[Choice]] = []

    async def present(self, choices: Sequence[Choice]) -> Contact | None:
        self.presented.append(list(choices))
        return None


class ConsolePicker:
    """Numbered list on a text stream, answered by typing the number."""

    def __init__(
        self,
        stream: TextIO | None = None,
        reader: Callable[[str], str] = input,
    ) -> None:
        self.stream = stream or sys.stdout
        self.reader = reader

    async def present(self, choices: Sequence[Choice]) -> Contact | None:
        if not choices:
            return None
        for idx, choice in enumerate(choices, start=1):
            print(f"  {idx}. {choice.label}", file=self.stream)
        answer = await asyncio.to_thread(self.reader, "Select contact (blank to dismiss): ")
        answer = (answer or "").strip()
        if not answer.isdigit():
            return None
        idx = int(answer) - 1
        if 0 <= idx < len(choices):
            return choices[idx].payload
        return None


__all__ = ["Picker", "DismissingPicker", "ConsolePicker"]
