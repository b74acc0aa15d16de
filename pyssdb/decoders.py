# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""
Response decoders.

Every command names one Decoder. ``apply`` first shapes the raw block (single
value, list, or absence) and then runs the decoder's transform on it:

    >>> block = ResponseBlock("ok", (b"a", b"1", b"b", b"0"))
    >>> apply(Decoder.VECTOR_BOOL, block, multi=True)
    [True, False]
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterator, Sequence

if TYPE_CHECKING:
    from .types import ResponseBlock

DB_STATS: tuple[str, ...] = ("compactions", "level", "size", "time", "read", "written")
LEVELDB_STATS_KEY = "leveldb.stats"
CMD_PREFIX = "cmd."

_INTEGER = re.compile(r"^[+-]?\d+$")
_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")

# Undecodable bytes survive as lone surrogates and re-encode unchanged.
DECODE_ERRORS = "surrogateescape"


class Decoder(str, Enum):
    """Named response transforms."""

    RAW = "raw"
    BOOL = "bool"
    INT = "int"
    OPTIONAL_INT = "optional_int"
    VECTOR_BOOL = "vector_bool"
    VECTOR_INT = "vector_int"
    PAIRS = "pairs"
    SCORED_PAIRS = "scored_pairs"
    KEYED_LIST = "keyed_list"
    KEYED_LIST_INT = "keyed_list_int"
    KEYED_MAP = "keyed_map"
    KEYED_MAP_INT = "keyed_map_int"
    INFO = "info"


def _pairs(raw: Sequence[Any]) -> Iterator[tuple[Any, Any]]:
    it = iter(raw)
    return zip(it, it)


def _is_one(value: Any) -> bool:
    return value == "1" or value == b"1"


def _to_int(value: Any) -> int:
    """Leading integer of a value, 0 when there is none ("5.9" -> 5, "" -> 0)."""
    if isinstance(value, bytes):
        value = value.decode("ascii", "replace")
    match = _LEADING_INTEGER.match(value)
    return int(match.group(1)) if match else 0


def _scalar(value: Any) -> int | str:
    text = value.decode("utf-8", "replace") if isinstance(value, bytes) else value
    return int(text) if _INTEGER.match(text) else text


def _text(value: Any) -> str:
    return value.decode("utf-8", "replace") if isinstance(value, bytes) else value


def _decode_bool(raw: Any, context: Any) -> bool:
    return _is_one(raw)


def _decode_int(raw: Any, context: Any) -> int:
    return _to_int(raw) if raw else 0


def _decode_optional_int(raw: Any, context: Any) -> int | None:
    return _to_int(raw) if raw is not None else None


def _decode_vector_bool(raw: Any, context: Any) -> list[bool]:
    return [_is_one(v) for _, v in _pairs(raw)]


def _decode_vector_int(raw: Any, context: Any) -> list[int]:
    return [_to_int(v) for _, v in _pairs(raw)]


def _decode_pairs(raw: Any, context: Any) -> list[tuple[Any, Any]]:
    return list(_pairs(raw))


def _decode_scored_pairs(raw: Any, context: Any) -> list[tuple[Any, int]]:
    return [(member, _to_int(score)) for member, score in _pairs(raw)]


def _decode_keyed_map(raw: Any, context: Any) -> dict[Any, Any]:
    return dict(_pairs(raw))


def _decode_keyed_map_int(raw: Any, context: Any) -> dict[Any, int]:
    return {k: _to_int(v) for k, v in _pairs(raw)}


def _require_keys(context: Any, decoder: Decoder) -> Sequence[Any]:
    if context is None:
        raise ValueError(f"Decoder {decoder.value!r} needs the requested keys as context")
    return context


def _decode_keyed_list(raw: Any, context: Any) -> list[Any]:
    found = dict(_pairs(raw))
    return [found.get(k) for k in _require_keys(context, Decoder.KEYED_LIST)]


def _decode_keyed_list_int(raw: Any, context: Any) -> list[int]:
    found = dict(_pairs(raw))
    keys = _require_keys(context, Decoder.KEYED_LIST_INT)
    return [_to_int(found[k]) if k in found else 0 for k in keys]


def _decode_leveldb_stats(value: str) -> dict[str, int]:
    lines = value.strip().splitlines()
    fields = lines[-1].split() if lines else []
    return {name: _to_int(v) for name, v in zip(DB_STATS, fields)}


def _decode_cmd_stats(value: str) -> dict[str, int]:
    stats: dict[str, int] = {}
    for item in value.split("\t"):
        name, _, v = item.partition(": ")
        if name:
            stats[name.strip()] = _to_int(v)
    return stats


def _decode_info(raw: Any, context: Any) -> dict[str, Any]:
    rows = list(raw or ())[1:]  # the first row is a count, not a key
    info: dict[str, Any] = {}
    for key, value in _pairs(rows):
        key, value = _text(key), _text(value)
        if key == LEVELDB_STATS_KEY:
            info[key] = _decode_leveldb_stats(value)
        elif key.startswith(CMD_PREFIX):
            info[key] = _decode_cmd_stats(value)
        else:
            info[key] = _scalar(value)
    return info


_TRANSFORMS: dict[Decoder, Callable[[Any, Any], Any]] = {
    Decoder.RAW: lambda raw, context: raw,
    Decoder.BOOL: _decode_bool,
    Decoder.INT: _decode_int,
    Decoder.OPTIONAL_INT: _decode_optional_int,
    Decoder.VECTOR_BOOL: _decode_vector_bool,
    Decoder.VECTOR_INT: _decode_vector_int,
    Decoder.PAIRS: _decode_pairs,
    Decoder.SCORED_PAIRS: _decode_scored_pairs,
    Decoder.KEYED_LIST: _decode_keyed_list,
    Decoder.KEYED_LIST_INT: _decode_keyed_list_int,
    Decoder.KEYED_MAP: _decode_keyed_map,
    Decoder.KEYED_MAP_INT: _decode_keyed_map_int,
    Decoder.INFO: _decode_info,
}


def shape(block: ResponseBlock, *, multi: bool = False, encoding: str | None = "utf-8") -> Any:
    """
    Turn a block into the raw value decoders work on.

    ``not_found`` becomes ``[]`` in multi mode and None otherwise. An ``ok``
    block becomes its value list in multi mode or when it holds several
    values, and its single value (or None) otherwise.
    """
    if block.not_found:
        return [] if multi else None

    if encoding is None:
        values = list(block.values)
    else:
        values = [v.decode(encoding, DECODE_ERRORS) for v in block.values]

    if multi or len(values) > 1:
        return values
    return values[0] if values else None


def _coerce_context(context: Sequence[Any] | None, encoding: str | None) -> Sequence[Any] | None:
    """Match context keys to the form response values are decoded to."""
    if context is None:
        return None
    if encoding is None:
        return [k if isinstance(k, bytes) else str(k).encode("utf-8") for k in context]
    return [k.decode(encoding, DECODE_ERRORS) if isinstance(k, bytes) else str(k) for k in context]


def apply(
    decoder: Decoder,
    block: ResponseBlock,
    *,
    multi: bool = False,
    context: Sequence[Any] | None = None,
    encoding: str | None = "utf-8",
) -> Any:
    """
    Decode a response block.

    Args:
        decoder: Transform to run.
        block: Block read off the wire (``ok`` or ``not_found``).
        multi: Keep the values as a list even for a single value.
        context: Requested keys, for the keyed-list decoders.
        encoding: Text encoding for values, or None to keep bytes.

    Returns:
        The decoded result.
    """
    raw = shape(block, multi=multi, encoding=encoding)
    return _TRANSFORMS[decoder](raw, _coerce_context(context, encoding))
