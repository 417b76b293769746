# serialdebug

This package writes levelled, timestamped debug lines to a serial port or to any
binary stream. It also provides a small command console that dispatches packets
received from the other end to the handlers you register.

## Log output

`serialdebug.debugger.Debugger` formats each message as one line. A line has
three parts:

- a level label: `<TRC> `, `<INF> `, `<WRN> `, `<ERR> ` or `<FTL> `, following
  `Level.TRACE` through `Level.FATAL`;
- the current `Timestamp`, written as `HH:MM:SS:mmm` and followed by a space;
- the message, then a newline.

A message can be a `str` or `bytes`. If you pass extra arguments, the message
is `%`-formatted with them.

`transmit(level, message, *args)` and the shortcuts `trace`, `info`, `warning`,
`error` and `fatal` all return a boolean:

- `True` when the message was accepted;
- `False` when its level is below `Debugger.level`;
- `False` when another thread is writing at that moment, because the writer
  does not wait for the lock.

Accepted bytes are collected in a pending buffer of `buffer_size` bytes, 2048
by default. After each message, the buffer is passed to the transport's
`send()` and cleared, but only if the transport's `busy()` returns false.
`flush()` sends whatever is pending regardless, and returns the number of bytes
sent. You can read the unsent bytes through `pending`.

When the buffer is full, messages are cut short:

- a plain message is cut to the space that is left;
- a formatted message that does not fit ends in a NUL byte;
- a line always ends with its newline, which overwrites the last byte if
  necessary.

When it is created, a `Debugger` emits the trace line
`Serial debugger engine initialized successfully`. That line is filtered out
like any other trace line if the level is set higher than `Level.TRACE`.

## Timestamps

`serialdebug.timestamp.Timestamp` holds a time of day in milliseconds. Each call
to `tick()` adds one millisecond, and the clock wraps from `23:59:59:999` back
to `00:00:00:000`. `Debugger.tick()` advances the clock that the debugger uses.

## Transports

`serialdebug.transport.StreamTransport` wraps a binary stream:

- `send(data)` writes all of the data, flushes, and returns the byte count;
- `busy()` reports the stream's `out_waiting`, or false if the stream has no
  such attribute;
- it can be used as a context manager, which closes the stream on exit.

`open_serial(port, baudrate=230400)` opens the port as 8N1 with a one-second
timeout and wraps it in a `StreamTransport`. The port can be a device name or a
URL that pyserial accepts, such as `loop://`.

## Command input

`Debugger.receive(data)` passes incoming bytes to a
`serialdebug.framing.PacketFramer`:

- a carriage return opens a packet and the next carriage return closes it;
- bytes outside an open packet are ignored;
- empty packets are dropped;
- a packet that reaches `rx_capacity` bytes (32 by default) is discarded.

`receive` returns the completed packets and also passes each one to
`on_packet`, if one was given.

`serialdebug.hmi.CommandDecoder` dispatches packets. You add handlers with
`register(name, handler)` or with the `@decoder.command(name)` decorator.
`decode(stream)` takes `bytes` (read as Latin-1) or `str`, and works as follows:

1. It finds every registered name that is a prefix of the input. If four or
   more names match, it logs the error `HMI :: Too many similar cmds` and runs
   nothing.
2. If no name matches, it logs the warning `HMI :: cmd not found` and returns
   `None`.
3. Otherwise the longest matching name wins.
4. Everything after the name, except the final character, is split into
   arguments with `tokenize`. The final character is treated as a terminator
   and dropped.
5. The handler is called with the argument list, which is also kept in
   `decoder.argv`, and `decode` returns the command name.

Messages go to the `log` passed to the decoder, or to a standard `logging`
logger if none was passed.

`tokenize(text)` splits the text on runs of spaces and keeps at most 20
arguments. From the 21st token onward, each new token replaces an earlier one,
starting again from the first.

## Example

```python
import io

from serialdebug.debugger import Debugger, Level
from serialdebug.hmi import CommandDecoder
from serialdebug.transport import StreamTransport

sink = io.BytesIO()
decoder = CommandDecoder()

@decoder.command("led")
def led(args):
    print("led", args)

debugger = Debugger(StreamTransport(sink), level=Level.INFO, on_packet=decoder.decode)

debugger.trace("not shown: below the configured level")
debugger.info("sensor ready")
debugger.warning("temperature %d C", 71)
print(sink.getvalue().decode(), end="")
# <INF> 00:00:00:000 sensor ready
# <WRN> 00:00:00:000 temperature 71 C

debugger.receive(b"\rled on;\r")   # prints: led ['on']
```

## What it does not do

- There is no command-line program.
- Nothing runs in the background. Your code must read bytes from the port and
  pass them to `Debugger.receive`.
- Your code must call `Debugger.tick()` once per millisecond, or whenever its
  own clock advances, to keep the timestamps moving.
- Output held back while the transport is busy is sent with the next message or
  on `flush()`. No timer sends it on its own.