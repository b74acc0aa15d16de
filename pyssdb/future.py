# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""Deferred results for batched commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .exceptions import FutureAlreadyResolvedError, FutureNotReadyError

if TYPE_CHECKING:
    from .types import Command

_UNSET: Any = object()


class Future:
    """
    Placeholder for the result of a command queued in a batch.

    The value is assigned exactly once, when the batch is flushed. Reading
    it earlier raises FutureNotReadyError.

    Example:
        >>> with ssdb.batch():
        ...     f = ssdb.incr("visits")
        >>> f.value
        1
    """

    __slots__ = ("_command", "_value")

    def __init__(self, command: Command) -> None:
        self._command = command
        self._value = _UNSET

    @property
    def command(self) -> Command:
        return self._command

    def done(self) -> bool:
        """Check if the value has been assigned."""
        return self._value is not _UNSET

    def set_result(self, value: Any) -> None:
        """Assign the value. Only the owning batch calls this."""
        if self.done():
            raise FutureAlreadyResolvedError(self._command.name)
        self._value = value

    def get(self) -> Any:
        """
        Return the resolved value.

        Raises:
            FutureNotReadyError: If the owning batch has not been flushed.
        """
        if not self.done():
            raise FutureNotReadyError(self._command.name)
        return self._value

    @property
    def value(self) -> Any:
        return self.get()

    def __repr__(self) -> str:
        args = [a.decode("utf-8", "replace") for a in self._command.args]
        state = f"value={self._value!r}" if self.done() else "pending"
        return f"<Future {args!r} {state}>"
