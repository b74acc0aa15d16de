# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""
SSDB Wire Protocol Implementation.

Protocol Format:
    Every block is a sequence of length-prefixed items closed by an empty
    line. Requests and responses share the same framing:

    <len>\\n<bytes>\\n      one item, repeated
    \\n                    end of block

    For a response, the first item is the status ("ok", "not_found" or an
    error status such as "client_error"); the remaining items are values.

    Example (``set key val`` and its answer):

    3\\nset\\n3\\nkey\\n3\\nval\\n\\n    ->    2\\nok\\n1\\n1\\n\\n

Because every item carries its own length, content may contain newlines and
is never scanned for delimiters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol

from .exceptions import CommandError, ProtocolError
from .types import ResponseBlock, Status

if TYPE_CHECKING:
    from .types import Command

# Protocol constants
NL: bytes = b"\n"
DEFAULT_PORT: int = 8888
MAX_ITEM_SIZE: int = 64 * 1024 * 1024  # 64MB
MAX_LENGTH_LINE: int = 32


class Reader(Protocol):
    """Anything a block can be read from: a Connection or a BytesIO."""

    def readline(self, limit: int = -1) -> bytes: ...

    def read(self, size: int = -1) -> bytes: ...


def encode_command(args: Iterable[bytes]) -> bytes:
    """
    Serialize one command's arguments into a request block.

    Args:
        args: Raw argument byte-strings, command name first.

    Returns:
        The encoded block, including its terminating empty line.
    """
    parts: list[bytes] = []
    for arg in args:
        parts.append(str(len(arg)).encode("ascii"))
        parts.append(NL)
        parts.append(arg)
        parts.append(NL)
    parts.append(NL)
    return b"".join(parts)


def encode_commands(commands: Iterable[Command]) -> bytes:
    """
    Serialize several commands into one buffer so they go out in one write.

    Args:
        commands: Commands to encode, in submission order.

    Returns:
        The concatenated request blocks.
    """
    return b"".join(encode_command(cmd.args) for cmd in commands)


def _read_length(reader: Reader) -> int | None:
    """Read a length line. Returns None for the empty end-of-block line."""
    line = reader.readline(MAX_LENGTH_LINE)
    if not line:
        raise EOFError("Connection closed")
    if not line.endswith(NL):
        raise ProtocolError(f"Invalid length line: {line[:MAX_LENGTH_LINE]!r}")

    line = line.rstrip(b"\r\n")
    if not line:
        return None
    if not line.isdigit():
        raise ProtocolError(f"Invalid length line: {line!r}")

    size = int(line)
    if size > MAX_ITEM_SIZE:
        raise ProtocolError(f"Item too large: {size} bytes, maximum is {MAX_ITEM_SIZE} bytes")
    return size


def _read_item(reader: Reader, size: int) -> bytes:
    """Read exactly ``size`` content bytes plus the item's newline."""
    data = reader.read(size + 1)
    if len(data) < size + 1:
        raise EOFError(f"Incomplete item: got {len(data)} bytes, expected {size + 1}")
    if data[-1:] != NL:
        raise ProtocolError(f"Item of {size} bytes is not newline-terminated")
    return data[:-1]


def read_block(reader: Reader) -> ResponseBlock | None:
    """
    Read one response block from a stream.

    Args:
        reader: Stream to read from.

    Returns:
        The parsed block, or None when the stream holds an empty line where
        a block should start (nothing available).

    Raises:
        ProtocolError: If a length line or item terminator is malformed.
        EOFError: If the stream ends in the middle of a block.
    """
    size = _read_length(reader)
    if size is None:
        return None

    status = _read_item(reader, size).decode("ascii", "replace")

    values: list[bytes] = []
    while True:
        size = _read_length(reader)
        if size is None:
            break
        values.append(_read_item(reader, size))

    return ResponseBlock(status=status, values=tuple(values))


def read_response(reader: Reader) -> ResponseBlock | None:
    """
    Read one response block and check its status.

    Args:
        reader: Stream to read from.

    Returns:
        The block when its status is ``ok`` or ``not_found``, None when no
        block is available.

    Raises:
        CommandError: If the server answered with any other status.
        ProtocolError: If the block is malformed.
        EOFError: If the stream ends in the middle of a block.
    """
    block = read_block(reader)
    if block is None or block.status in (Status.OK.value, Status.NOT_FOUND.value):
        return block

    detail = block.values[0].decode("utf-8", "replace") if block.values else None
    raise CommandError(block.status, detail)
