# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""
A single blocking TCP connection to an SSDB server.

The socket is opened lazily and every low-level failure is mapped to one of
the client's exception types:

- timeout expiry                              -> ConnectionTimeoutError
- reset, broken pipe, aborted, bad descriptor,
  invalid argument, EOF, refused connect      -> ConnectionLostError
- any other OSError                           -> ConnectionError
"""

from __future__ import annotations

import errno
import socket
from enum import Enum
from typing import Any, Callable

from loguru import logger

from .exceptions import ConnectionError, ConnectionLostError, ConnectionTimeoutError
from .protocol import DEFAULT_PORT, read_response
from .types import ResponseBlock

SocketFactory = Callable[[tuple[str, int], float], socket.socket]

_LOST_ERRNOS = frozenset({errno.EBADF, errno.EINVAL})


class ConnectionState(str, Enum):
    """Lifecycle of a Connection."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class Connection:
    """
    Owns one socket and its send/receive timeout.

    Not thread-safe: the Client serializes all access to it.

    Example:
        >>> conn = Connection("127.0.0.1", 8888, timeout=2.5)
        >>> conn.ensure_open()
        >>> conn.write(encode_command([b"get", b"key"]))
        >>> conn.read_response()
        ResponseBlock(status='ok', values=(b'val',))
        >>> conn.close()
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        *,
        timeout: float = 10.0,
        connect_timeout: float | None = None,
        socket_factory: SocketFactory | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self.connect_timeout = connect_timeout if connect_timeout is not None else timeout
        self._socket_factory = socket_factory or socket.create_connection
        self._sock: socket.socket | None = None
        self._reader: Any = None

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def state(self) -> ConnectionState:
        return ConnectionState.CONNECTED if self._sock is not None else ConnectionState.DISCONNECTED

    @property
    def is_connected(self) -> bool:
        return self._sock is not None

    def ensure_open(self) -> None:
        """Open the socket unless it is already open."""
        if self._sock is not None:
            return

        try:
            sock = self._socket_factory((self.host, self.port), self.connect_timeout)
        except socket.timeout as e:
            raise ConnectionTimeoutError(
                f"Connection to {self.endpoint} timed out", self.host, self.port
            ) from e
        except OSError as e:
            raise ConnectionLostError(
                f"Failed to connect to {self.endpoint}: {e}", self.host, self.port
            ) from e

        sock.settimeout(self.timeout)
        self._sock = sock
        self._reader = sock.makefile("rb")
        logger.debug(f"Connected to {self.endpoint} (timeout={self.timeout}s)")

    def close(self) -> None:
        """Close the socket. Never raises."""
        sock, reader = self._sock, self._reader
        self._sock = None
        self._reader = None
        if sock is None:
            return

        for resource in (reader, sock):
            try:
                resource.close()
            except Exception as exc:
                logger.debug(f"Ignoring error while closing {self.endpoint}: {exc}")
        logger.debug(f"Disconnected from {self.endpoint}")

    def write(self, data: bytes) -> None:
        """Send all of ``data``."""
        self._io(self._require_socket().sendall, data)

    def readline(self, limit: int = -1) -> bytes:
        """Read up to and including the next newline."""
        self._require_socket()
        return self._io(self._reader.readline, limit)

    def read(self, size: int = -1) -> bytes:
        """Read ``size`` bytes, fewer only at EOF."""
        self._require_socket()
        return self._io(self._reader.read, size)

    def read_response(self) -> ResponseBlock | None:
        """
        Read one response block.

        Raises:
            ConnectionLostError: If the server closes the stream mid-block.
            ConnectionTimeoutError: If no data arrives in time.
            CommandError: If the server answered with an error status.
            ProtocolError: If the block is malformed.
        """
        try:
            return read_response(self)
        except EOFError as e:
            raise ConnectionLostError(
                f"Connection lost ({e})", self.host, self.port
            ) from e

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionLostError("Not connected", self.host, self.port)
        return self._sock

    def _io(self, op: Callable[..., Any], *args: Any) -> Any:
        try:
            return op(*args)
        except (socket.timeout, BlockingIOError) as e:
            raise ConnectionTimeoutError("Connection timed out", self.host, self.port) from e
        except (ConnectionResetError, BrokenPipeError, ConnectionAbortedError) as e:
            raise ConnectionLostError(
                f"Connection lost ({type(e).__name__})", self.host, self.port
            ) from e
        except ValueError as e:
            # I/O on a file object closed under us
            raise ConnectionLostError(f"Connection lost ({e})", self.host, self.port) from e
        except OSError as e:
            if e.errno in _LOST_ERRNOS:
                raise ConnectionLostError(
                    f"Connection lost ({errno.errorcode.get(e.errno, e.errno)})",
                    self.host,
                    self.port,
                ) from e
            raise ConnectionError(str(e), self.host, self.port) from e

    def __repr__(self) -> str:
        return f"<Connection {self.endpoint} {self.state.value}>"
