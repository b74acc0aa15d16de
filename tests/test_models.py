# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""Tests for ClientConfig."""

import pytest
from pydantic import ValidationError

from pyssdb.models import DEFAULT_URL, ClientConfig


class TestClientConfig:
    """Tests for ClientConfig model."""

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("SSDB_URL", raising=False)
        config = ClientConfig()
        assert config.url == DEFAULT_URL
        assert config.host == "127.0.0.1"
        assert config.port == 8888
        assert config.timeout == 10.0
        assert config.connect_timeout is None
        assert config.reconnect is True
        assert config.encoding == "utf-8"

    def test_fractional_timeout(self) -> None:
        assert ClientConfig(timeout=0.25).timeout == 0.25

    @pytest.mark.parametrize("url", ["", "ssdb://", "ssdb://:8888/", "ssdb://host:port/"])
    def test_invalid_urls(self, url: str) -> None:
        with pytest.raises(ValidationError):
            ClientConfig(url=url)

    def test_assignment_is_validated(self) -> None:
        config = ClientConfig()
        with pytest.raises(ValidationError):
            config.timeout = 0

    def test_unknown_encoding(self) -> None:
        with pytest.raises(ValidationError, match="Unknown encoding"):
            ClientConfig(encoding="no-such-codec")

    def test_raw_bytes_mode(self) -> None:
        assert ClientConfig(encoding=None).encoding is None

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError, match="timout"):
            ClientConfig(timout=5)
