"""The interactive channel used by sign-in and error reporting.

Sign-in logic talks to the user only through the narrow
:class:`UserInterface` capability (``prompt``, ``prompt_secret``,
``info``, ``error``), so the protocol can be driven by a terminal
(:class:`ConsoleUI`) or by a script (:class:`ScriptedUI`) alike.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

import typer

from gemauth.output import get_output


class UserInterface(ABC):
    """Abstract interactive channel."""

    @abstractmethod
    def prompt(self, label: str) -> str:
        """Ask for a visible line of input."""
        ...

    @abstractmethod
    def prompt_secret(self, label: str) -> str:
        """Ask for a line of input without echoing it."""
        ...

    @abstractmethod
    def info(self, message: str) -> None:
        """Show an informational message."""
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        """Show an error message."""
        ...


class ConsoleUI(UserInterface):
    """Terminal implementation backed by :func:`typer.prompt` and :mod:`gemauth.output`.

    Messages go to stderr through the global
    :class:`~gemauth.output.OutputManager`, so ``--quiet`` and
    ``--no-color`` apply to them.
    """

    def prompt(self, label: str) -> str:
        return typer.prompt(label, prompt_suffix="")

    def prompt_secret(self, label: str) -> str:
        return typer.prompt(label, prompt_suffix="", hide_input=True)

    def info(self, message: str) -> None:
        get_output().info(message)

    def error(self, message: str) -> None:
        get_output().error(message)


class ScriptedUI(UserInterface):
    """Replay queued answers and record everything shown.

    Each prompt pops the next answer; running out of answers raises
    :class:`EOFError`, as reading a closed stdin would.

    Args:
        answers: Responses to hand out, in prompt order.

    Example::

        ui = ScriptedUI(["you@example.com", "secret"])
        assert ui.prompt("Email: ") == "you@example.com"
        assert ui.prompts == ["Email: "]
    """

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []
        self.messages: list[str] = []
        self.errors: list[str] = []
        self._transcript: list[str] = []

    def _next(self, label: str) -> str:
        self.prompts.append(label)
        self._transcript.append(label)
        if not self._answers:
            raise EOFError(f"No scripted answer for prompt {label!r}")
        return self._answers.pop(0)

    def prompt(self, label: str) -> str:
        return self._next(label)

    def prompt_secret(self, label: str) -> str:
        return self._next(label)

    def info(self, message: str) -> None:
        self.messages.append(message)
        self._transcript.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    @property
    def output(self) -> str:
        """Prompts and info messages joined in the order they were shown."""
        return "\n".join(self._transcript)
