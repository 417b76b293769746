"""Levelled, timestamped debug output with double buffering and packet input."""

from __future__ import annotations

import threading
from enum import IntEnum
from typing import Callable, Optional, Protocol, Union

from serialdebug.framing import DEFAULT_RX_CAPACITY, PacketFramer
from serialdebug.timestamp import Timestamp

DEBUG_TX_TOTAL_RAM = 4096
DEFAULT_BUFFER_SIZE = DEBUG_TX_TOTAL_RAM // 2

_FOOTER = b"\n"
_READY_MESSAGE = "Serial debugger engine initialized successfully"


class Level(IntEnum):
    """Severity of a debug message; lower values are more verbose."""

    TRACE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4

    @property
    def label(self) -> bytes:
        """The six-byte prefix written in front of every message of this level."""
        return _LABELS[self]


_LABELS = {
    Level.TRACE: b"<TRC> ",
    Level.INFO: b"<INF> ",
    Level.WARNING: b"<WRN> ",
    Level.ERROR: b"<ERR> ",
    Level.FATAL: b"<FTL> ",
}


class Transport(Protocol):
    def busy(self) -> bool: ...

    def send(self, data: bytes) -> int: ...


Message = Union[str, bytes]


def _to_bytes(text: Message) -> bytes:
    return text.encode("utf-8") if isinstance(text, str) else bytes(text)


class Debugger:
    """Formats debug messages into a bounded buffer and hands it to a transport.

    Messages are appended to the pending buffer; whenever the transport is idle
    the buffer is sent and a fresh one started. A message that does not fit is
    truncated, always keeping the trailing newline.
    """

    def __init__(
        self,
        transport: Transport,
        level: Union[Level, int] = Level.TRACE,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        rx_capacity: int = DEFAULT_RX_CAPACITY,
        on_packet: Optional[Callable[[bytes], object]] = None,
    ) -> None:
        if buffer_size < 1:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self.transport = transport
        self.level = Level(level)
        self.buffer_size = buffer_size
        self.on_packet = on_packet
        self.timestamp = Timestamp()
        self.framer = PacketFramer(rx_capacity)
        self._buffer = bytearray()
        self._lock = threading.Lock()
        self.trace(_READY_MESSAGE)

    @property
    def pending(self) -> bytes:
        """Bytes accepted but not yet handed to the transport."""
        return bytes(self._buffer)

    def transmit(self, level: Union[Level, int], message: Message, *args: object) -> bool:
        """Queue ``message`` at ``level``; with ``args`` it is %-formatted.

        Returns False if the level is filtered out or another writer holds the
        buffer, True once the message has been accepted.
        """
        level = Level(level)
        if self.level > level:
            return False
        if not self._lock.acquire(blocking=False):
            return False
        try:
            self._append(level.label)
            self._append(f"{self.timestamp} ".encode("ascii"))
            if args:
                self._append_formatted(_to_bytes(message % args))
            else:
                self._append(_to_bytes(message))
            self._append_footer()
            if not self.transport.busy():
                self._send_pending()
            return True
        finally:
            self._lock.release()

    def trace(self, message: Message, *args: object) -> bool:
        return self.transmit(Level.TRACE, message, *args)

    def info(self, message: Message, *args: object) -> bool:
        return self.transmit(Level.INFO, message, *args)

    def warning(self, message: Message, *args: object) -> bool:
        return self.transmit(Level.WARNING, message, *args)

    def error(self, message: Message, *args: object) -> bool:
        return self.transmit(Level.ERROR, message, *args)

    def fatal(self, message: Message, *args: object) -> bool:
        return self.transmit(Level.FATAL, message, *args)

    def tick(self) -> None:
        """Advance the message clock by one millisecond."""
        self.timestamp.tick()

    def receive(self, data: bytes) -> list[bytes]:
        """Feed incoming bytes; return completed packets, passing each to ``on_packet``."""
        packets = self.framer.feed(data)
        if self.on_packet is not None:
            for packet in packets:
                self.on_packet(packet)
        return packets

    def flush(self) -> int:
        """Send whatever is pending regardless of the transport state."""
        with self._lock:
            return self._send_pending()

    def _free(self) -> int:
        return self.buffer_size - len(self._buffer)

    def _append(self, data: bytes) -> None:
        self._buffer += data[: self._free()]

    def _append_formatted(self, data: bytes) -> None:
        free = self._free()
        if len(data) < free:
            self._buffer += data
        elif free > 0:
            # Truncated output keeps a terminator in its last byte.
            self._buffer += data[: free - 1] + b"\0"

    def _append_footer(self) -> None:
        if self._free() >= len(_FOOTER):
            self._buffer += _FOOTER
        else:
            self._buffer[-len(_FOOTER):] = _FOOTER

    def _send_pending(self) -> int:
        if not self._buffer:
            return 0
        data = bytes(self._buffer)
        self._buffer.clear()
        return self.transport.send(data)