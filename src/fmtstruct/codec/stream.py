"""Streaming unpack.

This module provides UnpackStream, a lazy, one-shot sequence of decoded
values. A background producer thread decodes one field group at a time and
hands each value to the consumer through a bounded queue; a terminal error,
if any, travels on a separate single-slot queue so that it is never mixed
with the values.

Design:
- Queue-based decoupling: producer-consumer handoff with backpressure
- Background thread: decoding runs while the consumer processes values
- Cancellation: closing the stream (or no longer draining it) stops the producer
"""

from __future__ import annotations

import logging
from queue import Empty, Full, Queue
from threading import Event, Thread
from types import TracebackType
from typing import Iterator

from ..exceptions import SizeMismatchError, StreamStalledError, StructCodecError
from .config import StreamConfig
from .cursor import ByteReader, BytesLike
from .decoder import decode_group
from .scalar import Value
from .schema import CompiledSchema, compile

logger = logging.getLogger(__name__)

_END = object()


class UnpackStream:
    """Lazily decoded values of one buffer.

    Iterating yields the same values, in the same order, as ``unpack``. When
    iteration stops, ``error`` tells whether the stream ended normally (None)
    or because of a failure (the exception). Errors are never raised from the
    iterator itself; call ``raise_for_error()`` to re-raise one.

    Buffers shorter than the format's size yield every value that fits and
    then end with TruncatedInputError. Buffers longer than the format's size
    yield nothing and end with SizeMismatchError.

    Attributes:
        schema: Compiled schema being decoded
        config: Stream configuration

    Examples:
        ```python
        from fmtstruct import iter_unpack

        with iter_unpack("<10s2bd", data) as stream:
            for value in stream:
                print(value)

        if stream.failed:
            print(f"stream ended early: {stream.error}")
        ```
    """

    def __init__(
        self,
        schema: CompiledSchema,
        buffer: BytesLike,
        config: StreamConfig | None = None,
    ) -> None:
        """Start decoding a buffer in the background.

        Args:
            schema: Compiled schema to decode with
            buffer: Bytes-like object to decode; it is snapshotted
            config: Stream configuration. If None, uses default config.
        """
        self.schema = schema
        self.config = config if config is not None else StreamConfig()
        self._data = bytes(buffer)
        self._values: Queue[object] = Queue(maxsize=self.config.max_buffered)
        self._errors: Queue[StructCodecError] = Queue(maxsize=1)
        self._closed = Event()
        self._finished = False
        self._error: StructCodecError | None = None

        self._thread = Thread(target=self._produce, daemon=True, name="fmtstruct-iter-unpack")
        self._thread.start()

    # Consumer side

    def __iter__(self) -> Iterator[Value]:
        return self

    def __next__(self) -> Value:
        if self._finished:
            raise StopIteration

        while True:
            try:
                item = self._values.get(timeout=self.config.poll_interval)
                break
            except Empty:
                if self._thread.is_alive():
                    continue
                # Producer exited without an end marker (closed or stalled).
                try:
                    item = self._values.get_nowait()
                except Empty:
                    item = _END
                break

        if item is _END:
            self._finish()
            raise StopIteration
        return item  # type: ignore[return-value]

    @property
    def done(self) -> bool:
        """Whether the stream has been exhausted or closed."""
        return self._finished

    @property
    def error(self) -> StructCodecError | None:
        """The error that ended the stream, or None.

        The error becomes visible once the producer has signaled it, at the
        latest when iteration stops.
        """
        self._collect_error()
        return self._error

    @property
    def failed(self) -> bool:
        """Whether the stream ended because of an error."""
        return self.error is not None

    def raise_for_error(self) -> None:
        """Re-raise the error that ended the stream, if any."""
        error = self.error
        if error is not None:
            raise error

    def close(self) -> None:
        """Stop the producer and discard undrained values."""
        self._closed.set()
        self._finished = True
        self._thread.join(timeout=self.config.poll_interval * 4)

    def __enter__(self) -> UnpackStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _finish(self) -> None:
        self._finished = True
        self._collect_error()

    def _collect_error(self) -> None:
        if self._error is None:
            try:
                self._error = self._errors.get_nowait()
            except Empty:
                pass

    # Producer side

    def _produce(self) -> None:
        logger.debug("stream producer started for %r (%d bytes)", self.schema, len(self._data))
        try:
            if len(self._data) > self.schema.size():
                raise SizeMismatchError(self.schema.size(), len(self._data))

            reader = ByteReader(self._data)
            order = self.schema.order()
            for group in self.schema.groups():
                for value in decode_group(reader, group, order):
                    if not self._send(value):
                        logger.debug("stream producer stopped before end of %r", self.schema)
                        return
        except StructCodecError as err:
            logger.debug("stream for %r failed: %s", self.schema, err)
            self._signal(err)

        self._send(_END)
        logger.debug("stream producer finished for %r", self.schema)

    def _send(self, item: object) -> bool:
        """Put an item on the value channel, honoring close and stall timeout."""
        waited = 0.0
        stall_timeout = self.config.stall_timeout
        while not self._closed.is_set():
            try:
                self._values.put(item, timeout=self.config.poll_interval)
                return True
            except Full:
                waited += self.config.poll_interval
                if stall_timeout is not None and waited >= stall_timeout:
                    logger.debug("stream for %r stalled after %.2fs", self.schema, waited)
                    self._signal(StreamStalledError(waited))
                    return False
        return False

    def _signal(self, error: StructCodecError) -> None:
        # Only the first failure is reported.
        if self._errors.empty():
            self._errors.put_nowait(error)

    def __repr__(self) -> str:
        state = "done" if self._finished else "open"
        return f"<{type(self).__name__} {self.schema.format!r} {state}>"


def iter_unpack(
    fmt: str | CompiledSchema,
    buffer: BytesLike,
    config: StreamConfig | None = None,
) -> UnpackStream:
    """Stream the decoded values of a buffer.

    Args:
        fmt: Format string or compiled schema
        buffer: Bytes-like object to decode
        config: Stream configuration. If None, uses default config.

    Returns:
        UnpackStream yielding values lazily

    Raises:
        FormatError: If the format string is malformed
    """
    return UnpackStream(compile(fmt), buffer, config)
