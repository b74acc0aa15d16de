# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""
High-level SSDB interface: one method per server command.

Every method builds a Command and hands it to the current sink. Normally that
is the live Client and the decoded result comes back at once; inside
``SSDB.batch()`` it is a Batch and the method returns a Future instead.

    >>> ssdb = connect("ssdb://127.0.0.1:8888/")
    >>> ssdb.set("foo", "5")
    True
    >>> with ssdb.batch() as batch:
    ...     v = ssdb.get("foo")
    ...     w = ssdb.incr("foo")
    >>> batch.results
    ['5', 6]
    >>> w.value
    6
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping

from .batch import Batch, CommandSink
from .client import Client
from .decoders import Decoder
from .exceptions import BatchError
from .types import Command

BLANK = ""


def _as_list(keys: Any) -> list[Any]:
    if isinstance(keys, (str, bytes)):
        return [keys]
    return list(keys)


def _flatten(pairs: Mapping[Any, Any]) -> list[Any]:
    flat: list[Any] = []
    for key, value in pairs.items():
        flat.append(key)
        flat.append(value)
    return flat


class SSDB:
    """
    SSDB command interface over a single Client.

    Example:
        >>> ssdb = SSDB("ssdb://127.0.0.1:8888/", timeout=2.0)
        >>> ssdb.zset("visits", "u1", 101)
        True
        >>> ssdb.zscan("visits", 0, 300, limit=2)
        [('u1', 101)]
    """

    def __init__(self, url: str | None = None, *, client: Client | None = None, **kwargs: Any) -> None:
        self._client = client or Client(url, **kwargs)
        self._sink: CommandSink = self._client

    @property
    def client(self) -> Client:
        return self._client

    @property
    def batching(self) -> bool:
        """True while inside a ``batch()`` block."""
        return self._sink is not self._client

    @contextmanager
    def batch(self) -> Iterator[Batch]:
        """
        Queue every command issued inside the block and send them together.

        Commands return Futures inside the block. On a normal exit the batch
        is flushed in one pipeline; the results are then on ``batch.results``
        and on each Future. An exception inside the block discards the batch.
        """
        with self._client.lock:
            if self.batching:
                raise BatchError("Batches cannot be nested")

            batch = Batch()
            self._sink = batch
            try:
                yield batch
            finally:
                self._sink = self._client
            batch.flush(self._client)

    def _call(self, *parts: Any, **options: Any) -> Any:
        command = Command.build(*parts, **options)
        with self._client.lock:
            return self._sink.call(command)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> SSDB:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # Server
    # =========================================================================

    def info(self) -> dict[str, Any]:
        """Server info and statistics."""
        return self._call("info", decoder=Decoder.INFO, multi=True)

    def eval(self, script: str, *args: Any) -> Any:
        """Evaluate a Lua script on the server."""
        return self._call("eval", script, *args)

    # =========================================================================
    # Plain values
    # =========================================================================

    def get(self, key: Any) -> Any:
        """Value at ``key``, None if missing."""
        return self._call("get", key)

    def set(self, key: Any, value: Any) -> bool:
        return self._call("set", key, value, decoder=Decoder.BOOL)

    def incr(self, key: Any, value: int = 1) -> int:
        """Increment ``key`` by ``value`` and return the new value."""
        return self._call("incr", key, value, decoder=Decoder.INT)

    def decr(self, key: Any, value: int = 1) -> int:
        """Decrement ``key`` by ``value`` and return the new value."""
        return self._call("decr", key, value, decoder=Decoder.INT)

    def exists(self, key: Any) -> bool:
        return self._call("exists", key, decoder=Decoder.BOOL)

    def delete(self, key: Any) -> Any:
        return self._call("del", key)

    def keys(self, start: Any, stop: Any, limit: int = -1) -> list[Any]:
        """Keys between ``start`` and ``stop``."""
        return self._call("keys", start, stop, limit, multi=True)

    def scan(self, start: Any, stop: Any, limit: int = -1) -> list[tuple[Any, Any]]:
        """(key, value) pairs between ``start`` and ``stop``."""
        return self._call("scan", start, stop, limit, multi=True, decoder=Decoder.PAIRS)

    def rscan(self, start: Any, stop: Any, limit: int = -1) -> list[tuple[Any, Any]]:
        """(key, value) pairs between ``start`` and ``stop``, in reverse order."""
        return self._call("rscan", start, stop, limit, multi=True, decoder=Decoder.PAIRS)

    def multi_set(self, pairs: Mapping[Any, Any]) -> int:
        return self._call("multi_set", *_flatten(pairs), decoder=Decoder.INT)

    def multi_get(self, keys: Iterable[Any]) -> list[Any]:
        """Values for ``keys`` in order, None for missing keys."""
        keys = _as_list(keys)
        return self._call("multi_get", *keys, multi=True, decoder=Decoder.KEYED_LIST, context=keys)

    def mapped_multi_get(self, keys: Iterable[Any]) -> dict[Any, Any]:
        """Mapping of the existing ``keys`` to their values."""
        return self._call("multi_get", *_as_list(keys), multi=True, decoder=Decoder.KEYED_MAP)

    def multi_del(self, keys: Iterable[Any]) -> int:
        return self._call("multi_del", *_as_list(keys), decoder=Decoder.INT)

    def multi_exists(self, keys: Iterable[Any]) -> list[bool]:
        return self._call("multi_exists", *_as_list(keys), multi=True, decoder=Decoder.VECTOR_BOOL)

    # =========================================================================
    # Sorted sets
    # =========================================================================

    def zget(self, key: Any, member: Any) -> int | None:
        """Score of ``member``, None if the member or set is missing."""
        return self._call("zget", key, member, decoder=Decoder.OPTIONAL_INT)

    def zset(self, key: Any, member: Any, score: int) -> bool:
        return self._call("zset", key, member, score, decoder=Decoder.BOOL)

    def zadd(self, key: Any, score: int, member: Any) -> bool:
        """Redis-style argument order for ``zset``."""
        return self.zset(key, member, score)

    def zincr(self, key: Any, member: Any, score: int = 1) -> int:
        return self._call("zincr", key, member, score, decoder=Decoder.INT)

    def zdecr(self, key: Any, member: Any, score: int = 1) -> int:
        return self._call("zdecr", key, member, score, decoder=Decoder.INT)

    def zexists(self, key: Any) -> bool:
        return self._call("zexists", key, decoder=Decoder.BOOL)

    def zsize(self, key: Any) -> int:
        return self._call("zsize", key, decoder=Decoder.INT)

    def zdel(self, key: Any, member: Any) -> bool:
        return self._call("zdel", key, member, decoder=Decoder.BOOL)

    def zlist(self, start: Any, stop: Any, limit: int = -1) -> list[Any]:
        """Sorted-set names between ``start`` and ``stop``."""
        return self._call("zlist", start, stop, limit, multi=True)

    def zkeys(self, key: Any, start: int, stop: int, limit: int = -1) -> list[Any]:
        """Members of ``key`` with scores between ``start`` and ``stop``."""
        return self._call("zkeys", key, BLANK, start, stop, limit, multi=True)

    def zscan(self, key: Any, start: int, stop: int, limit: int = -1) -> list[tuple[Any, int]]:
        """(member, score) pairs with scores between ``start`` and ``stop``."""
        return self._call(
            "zscan", key, BLANK, start, stop, limit, multi=True, decoder=Decoder.SCORED_PAIRS
        )

    def zrscan(self, key: Any, start: int, stop: int, limit: int = -1) -> list[tuple[Any, int]]:
        """Like ``zscan``, highest scores first."""
        return self._call(
            "zrscan", key, BLANK, start, stop, limit, multi=True, decoder=Decoder.SCORED_PAIRS
        )

    def multi_zexists(self, keys: Iterable[Any]) -> list[bool]:
        return self._call("multi_zexists", *_as_list(keys), multi=True, decoder=Decoder.VECTOR_BOOL)

    def multi_zsize(self, keys: Iterable[Any]) -> list[int]:
        return self._call("multi_zsize", *_as_list(keys), multi=True, decoder=Decoder.VECTOR_INT)

    def multi_zset(self, key: Any, pairs: Mapping[Any, int]) -> int:
        return self._call("multi_zset", key, *_flatten(pairs), decoder=Decoder.INT)

    def multi_zget(self, key: Any, members: Iterable[Any]) -> list[int]:
        """Scores for ``members`` in order, 0 for missing members."""
        members = _as_list(members)
        return self._call(
            "multi_zget", key, *members, multi=True, decoder=Decoder.KEYED_LIST_INT, context=members
        )

    def mapped_multi_zget(self, key: Any, members: Iterable[Any]) -> dict[Any, int]:
        return self._call(
            "multi_zget", key, *_as_list(members), multi=True, decoder=Decoder.KEYED_MAP_INT
        )

    def multi_zdel(self, key: Any, members: Iterable[Any]) -> int:
        return self._call("multi_zdel", key, *_as_list(members), decoder=Decoder.INT)

    def __repr__(self) -> str:
        return f"<SSDB {self._client.id}>"


def connect(url: str | None = None, **kwargs: Any) -> SSDB:
    """
    Create an SSDB interface for ``url``.

    The connection itself is opened lazily, on the first command.

    Args:
        url: Server URL. Defaults to SSDB_URL or ``ssdb://127.0.0.1:8888/``.
        **kwargs: Client options (timeout, connect_timeout, reconnect, encoding).

    Raises:
        ConfigurationError: If the URL or an option is invalid.
    """
    return SSDB(url, **kwargs)
