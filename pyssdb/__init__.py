# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""
pyssdb - Python client for the SSDB key-value / sorted-set server.

Supports:
- Pipelining several commands in one round trip
- Batches with deferred (future) results
- Transparent single retry when the connection drops

Quick Start:
    >>> from pyssdb import connect
    >>>
    >>> ssdb = connect("ssdb://127.0.0.1:8888/")
    >>> ssdb.set("foo", "val")
    True
    >>> ssdb.get("foo")
    'val'

Context Manager:
    >>> with connect() as ssdb:
    ...     ssdb.incr("visits")
    # Connection closes when exiting the block

Batches:
    >>> with ssdb.batch() as batch:
    ...     ssdb.set("foo", "5")
    ...     n = ssdb.incr("foo")
    >>> batch.results
    [True, 6]
    >>> n.value
    6

Low-level access:
    >>> from pyssdb import Client, Command, Decoder
    >>> client = Client(timeout=2.5)
    >>> client.perform([
    ...     Command.build("zset", "visits", "u1", 101, decoder=Decoder.BOOL),
    ...     Command.build("zget", "visits", "u1", decoder=Decoder.OPTIONAL_INT),
    ... ])
    [True, 101]
"""

from .batch import Batch, CommandSink
from .client import Client
from .connection import Connection, ConnectionState
from .decoders import Decoder, apply
from .exceptions import (
    BatchError,
    CommandError,
    ConfigurationError,
    ConnectionError,
    ConnectionLostError,
    ConnectionTimeoutError,
    FutureAlreadyResolvedError,
    FutureError,
    FutureNotReadyError,
    ProtocolError,
    SSDBError,
)
from .future import Future
from .models import ClientConfig
from .protocol import DEFAULT_PORT, encode_command, encode_commands, read_block, read_response
from .ssdb import SSDB, connect
from .types import Command, ResponseBlock, Status

__version__ = "0.4.0"
__license__ = "Apache-2.0"

__all__ = [
    # Client
    "SSDB",
    "Client",
    "connect",
    # Batching
    "Batch",
    "CommandSink",
    "Future",
    # Connection
    "Connection",
    "ConnectionState",
    # Protocol
    "DEFAULT_PORT",
    "Command",
    "ResponseBlock",
    "Status",
    "encode_command",
    "encode_commands",
    "read_block",
    "read_response",
    # Decoders
    "Decoder",
    "apply",
    # Configuration
    "ClientConfig",
    # Exceptions
    "SSDBError",
    "ConfigurationError",
    "ConnectionError",
    "ConnectionLostError",
    "ConnectionTimeoutError",
    "CommandError",
    "ProtocolError",
    "FutureError",
    "FutureNotReadyError",
    "FutureAlreadyResolvedError",
    "BatchError",
]
