# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""
Custom exceptions for the pyssdb client.

All exceptions inherit from SSDBError, so every failure raised by the client
can be caught with a single except clause:

    try:
        ssdb.get("key")
    except SSDBError as e:
        print(f"SSDB error: {e}")

For more granular handling, catch the specific types:

    try:
        ssdb.get("key")
    except ConnectionTimeoutError:
        ...  # never retried, the connection has been closed
    except ConnectionLostError:
        ...  # already retried once
    except CommandError as e:
        print(f"Server refused the command: {e.status}")
"""

from __future__ import annotations


class SSDBError(Exception):
    """
    Base exception for all pyssdb errors.

    An optional hint is appended to the message to point at the likely fix.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        self.hint = hint
        if hint:
            message = f"{message}\n\n  Hint: {hint}"
        super().__init__(message)


class ConfigurationError(SSDBError):
    """Raised when client settings are invalid, before any I/O happens."""


class ConnectionError(SSDBError):
    """
    Raised when talking to the SSDB server fails at the transport level.

    Common causes:
    - Server is not running
    - Wrong host or port
    - Network issues
    """

    def __init__(
        self,
        message: str,
        host: str | None = None,
        port: int | None = None,
        *,
        hint: str | None = None,
    ) -> None:
        self.host = host
        self.port = port
        if hint is None and host:
            hint = f"Check that the SSDB server is running on {host}:{port}"
        super().__init__(message, hint=hint)


class ConnectionLostError(ConnectionError):
    """
    Raised when the connection is severed in the middle of an operation.

    The client retries the whole pipeline once before surfacing this error.
    """


class ConnectionTimeoutError(ConnectionError):
    """
    Raised when no data arrives within the configured timeout.

    Timeouts are never retried.
    """

    def __init__(self, message: str, host: str | None = None, port: int | None = None) -> None:
        super().__init__(
            message,
            host,
            port,
            hint="Try increasing the client timeout or check network connectivity",
        )


class CommandError(SSDBError):
    """
    Raised when the server answers with an error status.

    The status (e.g. ``client_error``) and the optional detail text sent by
    the server are kept on the exception.
    """

    def __init__(self, status: str, detail: str | None = None) -> None:
        self.status = status
        self.detail = detail
        message = f"Server responded with '{status}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ProtocolError(SSDBError):
    """Raised when the response stream does not follow the wire format."""


class FutureError(SSDBError):
    """Base exception for future-related errors."""


class FutureNotReadyError(FutureError):
    """
    Raised when a future is read before its batch has been flushed.

    This is always a caller bug.
    """

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(
            f"Value of {command!r} is not ready",
            hint="Read futures after the batch block has exited",
        )


class FutureAlreadyResolvedError(FutureError):
    """Raised when a value is assigned to a future twice."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Value of {command!r} has already been set")


class BatchError(SSDBError):
    """Raised when a batch is misused (flushed twice, nested, reused)."""
