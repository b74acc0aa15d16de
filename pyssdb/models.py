# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""
Pydantic models for the pyssdb client.

Provides the validated client configuration.
"""

from __future__ import annotations

import codecs
import os
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .protocol import DEFAULT_PORT

DEFAULT_URL = "ssdb://127.0.0.1:8888/"
URL_ENV_VAR = "SSDB_URL"


def default_url() -> str:
    """URL from the SSDB_URL environment variable, or the local default."""
    return os.environ.get(URL_ENV_VAR) or DEFAULT_URL


class ClientConfig(BaseModel):
    """Configuration for the SSDB client."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    url: str = Field(
        default_factory=default_url,
        description="Server endpoint, e.g. ssdb://127.0.0.1:8888/",
    )
    timeout: float = Field(default=10.0, gt=0, description="Send/receive timeout in seconds")
    connect_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Connect timeout in seconds, defaults to timeout",
    )
    reconnect: bool = Field(default=True, description="Retry once on a lost connection")
    encoding: str | None = Field(
        default="utf-8",
        description="Encoding for response values, None keeps raw bytes",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        try:
            parts = urlsplit(v)
            parts.port  # raises on a non-numeric port
        except ValueError as e:
            raise ValueError(f"Invalid url {v!r}: {e}") from e
        if not parts.hostname:
            raise ValueError(f"Invalid url {v!r}, unable to determine 'host'")
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str | None) -> str | None:
        if v is not None:
            try:
                codecs.lookup(v)
            except LookupError as e:
                raise ValueError(f"Unknown encoding: {v}") from e
        return v

    @property
    def host(self) -> str:
        return urlsplit(self.url).hostname or ""

    @property
    def port(self) -> int:
        return urlsplit(self.url).port or DEFAULT_PORT
