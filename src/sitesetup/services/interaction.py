"""Interactive prompting, abstracted so resolution can run without a terminal."""

from __future__ import annotations

import sys
from collections import deque
from typing import Iterable, Protocol

import typer


class Interaction(Protocol):
    def is_interactive(self) -> bool: ...

    def ask(self, question: str, default: str = "") -> str: ...


class TerminalInteraction:
    """Prompts on the controlling terminal when stdin is a TTY."""

    def is_interactive(self) -> bool:
        return sys.stdin.isatty()

    def ask(self, question: str, default: str = "") -> str:
        """Prompt once; end of input counts as a blank answer."""
        try:
            return typer.prompt(question, default=default, show_default=False)
        except typer.Abort as exc:
            # Click turns both EOF and Ctrl-C into Abort; only EOF is a blank answer
            if isinstance(exc.__context__, EOFError):
                return default
            raise


class ScriptedInteraction:
    """Replays fixed answers; returns the default once they run out."""

    def __init__(self, answers: Iterable[str] = (), *, interactive: bool = False):
        self._answers = deque(answers)
        self._interactive = interactive
        self.questions: list[str] = []

    def is_interactive(self) -> bool:
        return self._interactive

    def ask(self, question: str, default: str = "") -> str:
        self.questions.append(question)
        if self._answers:
            return self._answers.popleft()
        return default
