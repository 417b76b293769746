import pytest

from serialdebug.framing import DEFAULT_RX_CAPACITY, PacketFramer


def test_single_packet():
    assert PacketFramer().feed(b"\rCMD1\r") == [b"CMD1"]


def test_default_capacity_matches_config():
    assert PacketFramer().capacity == DEFAULT_RX_CAPACITY == 32


def test_bytes_before_header_are_ignored():
    assert PacketFramer().feed(b"noise\rhello\r") == [b"hello"]


def test_empty_packet_dropped_and_next_marker_opens_new_one():
    framer = PacketFramer()
    assert framer.feed(b"\r\r") == []
    assert framer.feed(b"\rabc\r") == [b"abc"]


def test_back_to_back_packets():
    assert PacketFramer().feed(b"\rA\r\rB\r") == [b"A", b"B"]


def test_closing_marker_does_not_open_next_packet():
    assert PacketFramer().feed(b"\rA\rB\r") == [b"A"]


def test_packet_split_across_feeds():
    framer = PacketFramer()
    payload = b"set speed 10"
    chunks = [b"\r" + payload[:3], payload[3:7], payload[7:] + b"\r"]
    results = [framer.feed(chunk) for chunk in chunks]
    assert results[:2] == [[], []]
    assert results[2] == [payload]


def test_byte_by_byte_matches_bulk():
    stream = b"xx\rone\r\r\rtwo words\rjunk\rthree\r"
    bulk = PacketFramer().feed(stream)
    framer = PacketFramer()
    trickled = [packet for b in stream for packet in framer.feed(bytes([b]))]
    assert trickled == bulk
    assert bulk == [b"one", b"two words", b"three"]


def test_largest_packet_fits():
    payload = b"a" * (DEFAULT_RX_CAPACITY - 1)
    assert PacketFramer().feed(b"\r" + payload + b"\r") == [payload]


def test_overflow_discards_and_resynchronises():
    framer = PacketFramer()
    overflow = b"\r" + b"a" * DEFAULT_RX_CAPACITY
    assert framer.feed(overflow) == []
    assert framer.feed(b"\rX\r") == [b"X"]


@pytest.mark.parametrize("capacity", [1, 4, 16])
def test_packets_never_reach_capacity(capacity):
    framer = PacketFramer(capacity)
    stream = b"".join(b"\r" + b"z" * n + b"\r" for n in range(0, 20))
    packets = framer.feed(stream)
    assert all(0 < len(p) < capacity for p in packets)


def test_accepts_bytearray_and_memoryview():
    framer = PacketFramer()
    assert framer.feed(bytearray(b"\rab")) == []
    assert framer.feed(memoryview(b"c\r")) == [b"abc"]


@pytest.mark.parametrize("capacity", [0, -3])
def test_invalid_capacity(capacity):
    with pytest.raises(ValueError):
        PacketFramer(capacity)