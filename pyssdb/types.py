# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""Type definitions for the pyssdb client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from .decoders import Decoder


class Status(str, Enum):
    """Response statuses the client understands. Anything else is an error."""

    OK = "ok"
    NOT_FOUND = "not_found"


def to_bytes(value: Any) -> bytes:
    """Coerce a command argument to bytes."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8", "surrogateescape")
    return str(value).encode("utf-8")


@dataclass(frozen=True)
class Command:
    """
    A single command: its wire arguments plus how to decode the answer.

    ``multi`` asks for the response values as a list even when the server
    sends exactly one; ``context`` carries the key list for keyed decoders.
    """

    args: tuple[bytes, ...]
    decoder: Decoder = Decoder.RAW
    multi: bool = False
    context: tuple[Any, ...] | None = None

    def __post_init__(self) -> None:
        if not self.args:
            raise ValueError("A command needs at least a name")

    @classmethod
    def build(
        cls,
        *parts: Any,
        decoder: Decoder = Decoder.RAW,
        multi: bool = False,
        context: Iterable[Any] | None = None,
    ) -> Command:
        """Build a command from mixed str/bytes/number parts."""
        return cls(
            args=tuple(to_bytes(p) for p in parts),
            decoder=decoder,
            multi=multi,
            context=tuple(context) if context is not None else None,
        )

    @property
    def name(self) -> str:
        """The command name, e.g. ``get``."""
        return self.args[0].decode("utf-8", "replace")


@dataclass(frozen=True)
class ResponseBlock:
    """One response read off the wire: a status and its raw values."""

    status: str
    values: tuple[bytes, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status == Status.OK.value

    @property
    def not_found(self) -> bool:
        return self.status == Status.NOT_FOUND.value
