"""
Stream consumers for child process output.

Each consumer owns exactly one pipe and runs on its own thread. Line
consumers forward text lines to the logger; copy consumers pass raw bytes
through to a terminal stream.
"""

from collections.abc import Callable, Iterator
from typing import IO, Any

from ...core.cancellation import CancellationContext
from ...core.exceptions import StreamReadError
from ...core.interfaces.logger import ILogger

INITIAL_BUFFER_SIZE = 64 * 1024  # 64 KiB
MAX_LINE_SIZE = 1024 * 1024  # 1 MiB, newline included
COPY_CHUNK_SIZE = 32 * 1024


def _reader(stream: IO[bytes]) -> Callable[[int], bytes]:
    """Prefer read1 so a partial chunk is returned as soon as it arrives."""
    return getattr(stream, "read1", stream.read)


class LineReader:
    """
    Newline-delimited reader with a bounded, growing buffer.

    The buffer starts at ``initial_size`` and doubles while a line is still
    incomplete, up to ``max_size``. A line that does not fit raises
    StreamReadError. Trailing ``\\r`` is stripped; a final line without a
    newline is still returned.
    """

    def __init__(
        self,
        stream: IO[bytes],
        name: str = "stream",
        initial_size: int = INITIAL_BUFFER_SIZE,
        max_size: int = MAX_LINE_SIZE,
    ) -> None:
        if initial_size <= 0 or max_size < initial_size:
            raise ValueError("require 0 < initial_size <= max_size")
        self._read = _reader(stream)
        self._name = name
        self._capacity = initial_size
        self._max_size = max_size
        self._buffer = bytearray()
        self._scan_from = 0
        self._eof = False

    @property
    def capacity(self) -> int:
        """Current buffer capacity in bytes."""
        return self._capacity

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        line = self.read_line()
        if line is None:
            raise StopIteration
        return line

    def read_line(self) -> bytes | None:
        """Return the next line without its terminator, or None at EOF."""
        while True:
            idx = self._buffer.find(b"\n", self._scan_from)
            if idx >= 0:
                line = bytes(self._buffer[:idx])
                del self._buffer[: idx + 1]
                self._scan_from = 0
                return line[:-1] if line.endswith(b"\r") else line

            self._scan_from = len(self._buffer)

            if self._eof:
                if not self._buffer:
                    return None
                line = bytes(self._buffer)
                self._buffer.clear()
                self._scan_from = 0
                return line

            if len(self._buffer) >= self._capacity:
                if self._capacity >= self._max_size:
                    raise StreamReadError(
                        f"line exceeds maximum size of {self._max_size} bytes",
                        stream=self._name,
                    )
                self._capacity = min(self._capacity * 2, self._max_size)

            try:
                chunk = self._read(self._capacity - len(self._buffer))
            except (OSError, ValueError) as e:
                raise StreamReadError(
                    f"failed to read {self._name}: {e}", stream=self._name, cause=e
                ) from e

            if not chunk:
                self._eof = True
            else:
                self._buffer += chunk


def discard_stream(stream: IO[bytes]) -> None:
    """Read and drop everything left in a pipe so the writer never blocks."""
    read = _reader(stream)
    try:
        while read(COPY_CHUNK_SIZE):
            pass
    except (OSError, ValueError):
        pass


def drain_to_log(
    stream: IO[bytes],
    emit: Callable[[str], Any],
    name: str,
    ctx: CancellationContext | None,
    logger: ILogger,
    initial_size: int = INITIAL_BUFFER_SIZE,
    max_size: int = MAX_LINE_SIZE,
) -> None:
    """
    Forward each line of ``stream`` to ``emit`` until EOF or cancellation.

    A StreamReadError is logged and ends forwarding for this stream only.
    Once forwarding stops the remainder of the pipe is discarded.
    """
    reader = LineReader(stream, name=name, initial_size=initial_size, max_size=max_size)
    try:
        for line in reader:
            if ctx is not None and ctx.is_cancelled():
                logger.warning("stream cancelled", stream=name, reason=ctx.cause)
                discard_stream(stream)
                return
            emit(line.decode("utf-8", errors="replace"))
    except StreamReadError as e:
        logger.error("failed to read stream", stream=name, err=e.message)
        discard_stream(stream)


def copy_stream(
    stream: IO[bytes],
    sink: IO[bytes],
    name: str,
    ctx: CancellationContext | None,
    logger: ILogger,
) -> None:
    """Copy raw bytes from ``stream`` to ``sink`` until EOF or cancellation."""
    read = _reader(stream)
    while True:
        if ctx is not None and ctx.is_cancelled():
            logger.warning("stream cancelled", stream=name, reason=ctx.cause)
            discard_stream(stream)
            return
        try:
            chunk = read(COPY_CHUNK_SIZE)
        except (OSError, ValueError) as e:
            logger.error("failed to read stream", stream=name, err=str(e))
            return
        if not chunk:
            return
        try:
            sink.write(chunk)
            sink.flush()
        except (OSError, ValueError) as e:
            logger.error("failed to write stream", stream=name, err=str(e))
            discard_stream(stream)
            return


class TextSink:
    """Adapts a text stream without ``.buffer`` to the bytes sink interface."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def write(self, data: bytes) -> int:
        self._stream.write(data.decode("utf-8", errors="replace"))
        return len(data)

    def flush(self) -> None:
        self._stream.flush()


def binary_sink(stream: Any) -> IO[bytes]:
    """Return a bytes-accepting view of a terminal stream."""
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        return buffer
    return TextSink(stream)  # type: ignore[return-value]
