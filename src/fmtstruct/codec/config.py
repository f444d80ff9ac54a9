"""Configuration for streaming unpack.

This module provides the configuration dataclass that controls how the
background producer of an UnpackStream hands values to its consumer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class StreamConfig:
    """Configuration for streaming unpack.

    Attributes:
        max_buffered: Capacity of the value channel between the producer thread
            and the consumer (default 64). The producer blocks once this many
            decoded values are waiting to be consumed.

        poll_interval: Seconds the producer and consumer wait on the channel
            before re-checking whether the other side is gone (default 0.05).

        stall_timeout: Seconds the producer keeps waiting on a full channel
            before giving up with StreamStalledError (default 30.0).
            None waits until the stream is closed.

    Examples:
        ```python
        from fmtstruct import StreamConfig, iter_unpack

        # Small buffer, fail fast when nobody reads
        config = StreamConfig(max_buffered=4, stall_timeout=1.0)

        with iter_unpack("<100d", data, config) as stream:
            for value in stream:
                process(value)
        ```
    """

    max_buffered: int = 64
    poll_interval: float = 0.05  # seconds
    stall_timeout: float | None = 30.0  # seconds

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_buffered <= 0:
            raise ValueError(f"max_buffered must be > 0, got {self.max_buffered}")

        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")

        if self.stall_timeout is not None and self.stall_timeout <= 0:
            raise ValueError(f"stall_timeout must be > 0 or None, got {self.stall_timeout}")
