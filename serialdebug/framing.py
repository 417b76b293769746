"""Reassembly of carriage-return delimited packets from a byte stream."""

from __future__ import annotations

DEFAULT_RX_CAPACITY = 32

_DELIMITER = 0x0D


class PacketFramer:
    """Collects bytes between a pair of ``\\r`` markers into packets.

    A ``\\r`` opens a packet and the next ``\\r`` closes it. Bytes outside an
    open packet are ignored, empty packets are dropped, and a packet that
    reaches ``capacity`` bytes is discarded so framing can resynchronise.
    """

    def __init__(self, capacity: int = DEFAULT_RX_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._buffer = bytearray()
        self._open = False

    def feed(self, data: bytes) -> list[bytes]:
        """Consume ``data`` and return every packet it completes, in order."""
        packets: list[bytes] = []
        for byte in bytes(data):
            if byte == _DELIMITER:
                if self._open and self._buffer:
                    packets.append(bytes(self._buffer))
                    self._open = False
                else:
                    self._open = not self._open
                self._buffer.clear()
            elif self._open:
                self._buffer.append(byte)
                if len(self._buffer) >= self.capacity:
                    self._buffer.clear()
                    self._open = False
        return packets