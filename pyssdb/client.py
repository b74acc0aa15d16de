# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""
SSDB protocol client.

The Client sends commands over one persistent connection and decodes the
answers. Several commands handed to ``perform`` are pipelined: written in one
buffer, then answered strictly in submission order.

Usage Patterns:

    # Pattern 1: One command at a time
    from pyssdb import Client, Command, Decoder
    client = Client("ssdb://127.0.0.1:8888/")
    client.call(Command.build("incr", "visits", decoder=Decoder.INT))

    # Pattern 2: Pipelining
    client.perform([
        Command.build("set", "key", "val", decoder=Decoder.BOOL),
        Command.build("get", "key"),
    ])
    # -> [True, "val"]

    # Pattern 3: Context manager
    with Client() as client:
        client.call(Command.build("get", "key"))
    # Connection closes when exiting the block

Retry policy:
    A lost connection (reset, broken pipe, EOF) closes the socket and the
    whole pipeline is sent again once. A second loss, a timeout, or an error
    status from the server closes the socket and is raised to the caller.
"""

from __future__ import annotations

import threading
from typing import Any, Sequence

from loguru import logger
from pydantic import ValidationError

from .connection import Connection
from .decoders import apply
from .exceptions import ConfigurationError, ConnectionLostError
from .models import ClientConfig
from .protocol import encode_commands
from .types import Command


class Client:
    """
    Low-level SSDB client owning exactly one connection.

    Calls are serialized with a re-entrant lock held for the whole
    request/response cycle, so a Client can be shared between threads.

    Example:
        >>> client = Client("ssdb://127.0.0.1:8888/", timeout=2.5)
        >>> client.call(Command.build("set", "key", "val", decoder=Decoder.BOOL))
        True
        >>> client.close()
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        config: ClientConfig | None = None,
        connection: Connection | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the client. No connection is opened until the first call.

        Args:
            url: Server URL, e.g. ``ssdb://host:8888/``. Defaults to the
                SSDB_URL environment variable or ``ssdb://127.0.0.1:8888/``.
            config: Optional ClientConfig object.
            connection: Pre-built Connection to use instead of opening one
                from the configured URL.
            **kwargs: Override config options (timeout, reconnect, ...).

        Raises:
            ConfigurationError: If the URL or any option is invalid.
        """
        try:
            if config is None:
                if url is not None:
                    kwargs["url"] = url
                config = ClientConfig(**kwargs)
            else:
                config = config.model_copy()
                if url is not None:
                    config.url = url
                unknown = sorted(set(kwargs) - set(ClientConfig.model_fields))
                if unknown:
                    raise ConfigurationError(f"Unknown client option(s): {', '.join(unknown)}")
                for key, value in kwargs.items():
                    setattr(config, key, value)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid client configuration: {e}",
                hint="URLs look like ssdb://127.0.0.1:8888/",
            ) from e

        self._config = config
        self._connection = connection if connection is not None else Connection(
            config.host,
            config.port,
            timeout=config.timeout,
            connect_timeout=config.connect_timeout,
        )
        self._lock = threading.RLock()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def id(self) -> str:
        """Identifier of this client: its URL."""
        return self._config.url

    @property
    def host(self) -> str:
        return self._connection.host

    @property
    def port(self) -> int:
        return self._connection.port

    @property
    def timeout(self) -> float:
        return self._config.timeout

    @property
    def reconnect(self) -> bool:
        return self._config.reconnect

    @reconnect.setter
    def reconnect(self, value: bool) -> None:
        self._config.reconnect = value

    @property
    def max_attempts(self) -> int:
        """How many times one ``perform`` call may send its pipeline."""
        return 2 if self._config.reconnect else 1

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def lock(self) -> threading.RLock:
        """The lock serializing every call on this client."""
        return self._lock

    @property
    def is_connected(self) -> bool:
        return self._connection.is_connected

    # =========================================================================
    # Commands
    # =========================================================================

    def call(self, command: Command) -> Any:
        """
        Execute a single command and return its decoded result.

        Raises:
            ConnectionLostError: If the connection dropped twice.
            ConnectionTimeoutError: If the server did not answer in time.
            CommandError: If the server answered with an error status.
        """
        return self.perform([command])[0]

    def perform(self, commands: Sequence[Command]) -> list[Any]:
        """
        Pipeline several commands and return their results in order.

        The call is all-or-error: if any command fails, no result is
        returned.

        Args:
            commands: Commands to send, in order.

        Returns:
            One decoded result per command.
        """
        commands = list(commands)
        if not commands:
            return []

        with self._lock:
            attempt = 1
            while True:
                logger.debug(
                    f"Performing {len(commands)} command(s) on {self._connection.endpoint} "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
                try:
                    return self._send_and_receive(commands)
                except ConnectionLostError as e:
                    self._connection.close()
                    if attempt >= self.max_attempts:
                        raise
                    logger.warning(f"{e}; retrying {len(commands)} command(s)")
                    attempt += 1
                except Exception as e:
                    logger.debug(f"Closing {self._connection.endpoint} after {type(e).__name__}")
                    self._connection.close()
                    raise

    def _send_and_receive(self, commands: list[Command]) -> list[Any]:
        """One attempt: open, write everything, read one block per command."""
        conn = self._connection
        conn.ensure_open()
        conn.write(encode_commands(commands))

        results: list[Any] = []
        for command in commands:
            block = conn.read_response()
            if block is None:
                raise ConnectionLostError(
                    f"No response available for {command.name!r}", conn.host, conn.port
                )
            results.append(
                apply(
                    command.decoder,
                    block,
                    multi=command.multi,
                    context=command.context,
                    encoding=self._config.encoding,
                )
            )
        return results

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def disconnect(self) -> None:
        """Close the connection. The next call reconnects."""
        with self._lock:
            self._connection.close()

    close = disconnect

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Client {self.id} {self._connection.state.value}>"
