"""Prefix-matched command dispatch for packets received on the debug line."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Union

MAX_ARGS = 20
MAX_SIMILAR_COMMANDS = 4

Handler = Callable[[list], object]


class Log(Protocol):
    def warning(self, message: str) -> object: ...

    def error(self, message: str) -> object: ...


def tokenize(text: str) -> list[str]:
    """Split ``text`` on spaces into at most ``MAX_ARGS`` arguments.

    Runs of spaces count as one separator. Beyond ``MAX_ARGS`` tokens the
    slots are reused from the start, so later tokens replace earlier ones.
    """
    slots: list[Optional[str]] = [None] * MAX_ARGS
    for position, token in enumerate(t for t in text.split(" ") if t):
        slots[position % MAX_ARGS] = token
    return [token for token in slots if token is not None]


class CommandDecoder:
    """Matches a packet against registered command prefixes and runs the handler."""

    def __init__(self, log: Optional[Log] = None) -> None:
        self.log: Log = log if log is not None else logging.getLogger(__name__)
        self._commands: dict[str, Handler] = {}
        self.argv: list[str] = []

    def register(self, name: str, handler: Handler) -> None:
        """Bind ``handler`` to the command ``name``; it receives the argument list."""
        if not name:
            raise ValueError("command name must not be empty")
        self._commands[name] = handler

    def command(self, name: str) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`register`."""

        def decorate(handler: Handler) -> Handler:
            self.register(name, handler)
            return handler

        return decorate

    def decode(self, stream: Union[bytes, str]) -> Optional[str]:
        """Run the longest command that prefixes ``stream``; return its name.

        The last byte after the command name is a terminator and is not part
        of the arguments. Returns None when nothing ran.
        """
        text = stream.decode("latin-1") if isinstance(stream, (bytes, bytearray)) else stream
        matches: list[str] = []
        for name in self._commands:
            if text.startswith(name):
                matches.append(name)
                if len(matches) >= MAX_SIMILAR_COMMANDS:
                    self.log.error("HMI :: Too many similar cmds")
                    return None
        if not matches:
            self.log.warning("HMI :: cmd not found")
            return None
        target = matches[0]
        for name in matches[1:]:
            if len(target) < len(name):
                target = name
        self.argv = tokenize(text[len(target):-1] if len(text) > len(target) else "")
        self._commands[target](list(self.argv))
        return target