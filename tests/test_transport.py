import io

import serial

from serialdebug.transport import DEBUG_BAUD_RATE, StreamTransport, open_serial


class _PendingStream(io.BytesIO):
    def __init__(self, pending):
        super().__init__()
        self.out_waiting = pending


class _ShortWriter(io.BytesIO):
    """Accepts at most two bytes per write call."""

    def write(self, data):
        return super().write(bytes(data[:2]))


def test_send_writes_all_bytes():
    sink = io.BytesIO()
    transport = StreamTransport(sink)
    assert transport.send(b"<INF> hello\n") == len(b"<INF> hello\n")
    assert sink.getvalue() == b"<INF> hello\n"


def test_send_handles_partial_writes():
    sink = _ShortWriter()
    payload = b"abcdefg"
    assert StreamTransport(sink).send(payload) == len(payload)
    assert sink.getvalue() == payload


def test_send_accepts_bytearray_and_memoryview():
    sink = io.BytesIO()
    transport = StreamTransport(sink)
    transport.send(bytearray(b"ab"))
    transport.send(memoryview(b"cd"))
    assert sink.getvalue() == b"abcd"


def test_send_empty_writes_nothing():
    sink = io.BytesIO()
    assert StreamTransport(sink).send(b"") == 0
    assert sink.getvalue() == b""


def test_plain_stream_is_never_busy():
    transport = StreamTransport(io.BytesIO())
    transport.send(b"data")
    assert transport.busy() is False


def test_pending_output_reports_busy():
    assert StreamTransport(_PendingStream(5)).busy() is True
    assert StreamTransport(_PendingStream(0)).busy() is False


def test_context_manager_closes_stream():
    sink = io.BytesIO()
    with StreamTransport(sink) as transport:
        transport.send(b"x")
    assert sink.closed


def test_open_serial_loopback_round_trip():
    with open_serial("loop://") as transport:
        assert transport.stream.baudrate == DEBUG_BAUD_RATE == 230400
        assert transport.stream.bytesize == serial.EIGHTBITS
        assert transport.stream.parity == serial.PARITY_NONE
        assert transport.stream.stopbits == serial.STOPBITS_ONE
        assert transport.send(b"\rCMD1\r") == len(b"\rCMD1\r")
        assert transport.stream.read(len(b"\rCMD1\r")) == b"\rCMD1\r"


def test_open_serial_custom_baudrate():
    with open_serial("loop://", 115200) as transport:
        assert transport.stream.baudrate == 115200