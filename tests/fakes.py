# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""Scripted stand-ins for a server connection."""

from __future__ import annotations

import io
from dataclasses import dataclass, field

from pyssdb.connection import ConnectionState
from pyssdb.exceptions import ConnectionLostError
from pyssdb.protocol import encode_command, read_response
from pyssdb.types import ResponseBlock


def response(status: str, *values: str | bytes) -> bytes:
    """Encode a server response block."""
    parts = [status.encode()] + [v.encode() if isinstance(v, str) else v for v in values]
    return encode_command(parts)


@dataclass
class Session:
    """What the server does on one connection."""

    responses: bytes = b""
    write_error: Exception | None = None
    read_error: Exception | None = None


@dataclass
class FakeConnection:
    """Connection double that replays one Session per (re)connect."""

    sessions: list[Session] = field(default_factory=list)
    host: str = "127.0.0.1"
    port: int = 8888
    written: list[bytes] = field(default_factory=list)
    opened: int = 0
    closed: int = 0

    def __post_init__(self) -> None:
        self._session: Session | None = None
        self._stream: io.BytesIO | None = None

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    @property
    def state(self) -> ConnectionState:
        return ConnectionState.CONNECTED if self.is_connected else ConnectionState.DISCONNECTED

    def ensure_open(self) -> None:
        if self._session is not None:
            return
        self._session = self.sessions.pop(0)
        self._stream = io.BytesIO(self._session.responses)
        self.opened += 1

    def write(self, data: bytes) -> None:
        assert self._session is not None
        if self._session.write_error is not None:
            raise self._session.write_error
        self.written.append(data)

    def read_response(self) -> ResponseBlock | None:
        assert self._session is not None and self._stream is not None
        if self._session.read_error is not None:
            raise self._session.read_error
        try:
            return read_response(self._stream)
        except EOFError as e:
            raise ConnectionLostError(f"Connection lost ({e})") from e

    def close(self) -> None:
        self._session = None
        self._stream = None
        self.closed += 1
