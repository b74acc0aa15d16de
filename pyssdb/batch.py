# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""
Command sinks: immediate execution and batching.

Code issuing commands talks to a CommandSink. The Client executes each
command right away; a Batch queues it and hands back a Future that is
resolved when the batch is flushed through a Client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from .exceptions import BatchError
from .future import Future

if TYPE_CHECKING:
    from .client import Client
    from .types import Command


class CommandSink(Protocol):
    """Where a command goes: executed now, or queued for later."""

    def call(self, command: Command) -> Any: ...


class Batch:
    """
    Ordered queue of commands with one Future per command.

    A batch is single-use: once flushed (successfully or not) it accepts no
    more commands. Batches are not thread-safe.

    Example:
        >>> batch = Batch()
        >>> f = batch.enqueue(Command.build("incr", "visits", decoder=Decoder.INT))
        >>> batch.flush(client)
        [1]
        >>> f.value
        1
    """

    def __init__(self) -> None:
        self._commands: list[Command] = []
        self._futures: list[Future] = []
        self._results: list[Any] | None = None
        self._flushed = False

    def enqueue(self, command: Command) -> Future:
        """Queue a command without sending it. Returns its Future."""
        if self._flushed:
            raise BatchError("Cannot add commands to a batch that has been flushed")

        future = Future(command)
        self._commands.append(command)
        self._futures.append(future)
        return future

    call = enqueue

    def flush(self, client: Client) -> list[Any]:
        """
        Send every queued command through ``client`` in one pipeline.

        Each Future is resolved from the result at its index. If the
        pipeline fails no Future is resolved.

        Returns:
            The results, in the order commands were queued.
        """
        if self._flushed:
            raise BatchError("Batch has already been flushed")
        self._flushed = True

        results = client.perform(self._commands)
        for future, value in zip(self._futures, results):
            future.set_result(value)
        self._results = results
        return results

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(self._commands)

    @property
    def futures(self) -> tuple[Future, ...]:
        return tuple(self._futures)

    @property
    def flushed(self) -> bool:
        return self._flushed

    @property
    def results(self) -> list[Any] | None:
        """Results of a successful flush, None before that."""
        return self._results

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        state = "flushed" if self._flushed else "pending"
        return f"<Batch {len(self)} command(s) {state}>"
