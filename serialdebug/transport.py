"""Byte sinks that carry debug output to a serial line or any binary stream."""

from __future__ import annotations

from types import TracebackType
from typing import BinaryIO

import serial

DEBUG_BAUD_RATE = 230400


class StreamTransport:
    """Writes outgoing debug bytes to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def busy(self) -> bool:
        """Report whether earlier output is still waiting to leave the stream."""
        return bool(getattr(self.stream, "out_waiting", 0))

    def send(self, data: bytes) -> int:
        """Write all of ``data`` and flush; return the number of bytes sent."""
        payload = bytes(data)
        if not payload:
            return 0
        view = memoryview(payload)
        while view:
            written = self.stream.write(view)
            if written is None:
                written = len(view)
            view = view[written:]
        self.stream.flush()
        return len(payload)

    def close(self) -> None:
        """Close the underlying stream."""
        self.stream.close()

    def __enter__(self) -> StreamTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def open_serial(port: str, baudrate: int = DEBUG_BAUD_RATE) -> StreamTransport:
    """Open ``port`` as 8N1 at ``baudrate`` and wrap it in a transport.

    ``port`` may be a device name or any URL the serial library understands.
    """
    connection = serial.serial_for_url(
        port,
        baudrate=baudrate,
        bytesize=serial.EIGHTBITS,
        parity=serial.PARITY_NONE,
        stopbits=serial.STOPBITS_ONE,
        timeout=1,
    )
    return StreamTransport(connection)