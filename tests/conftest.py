# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""Shared fixtures for pyssdb tests."""

import socket

import pytest

from pyssdb import Client, Connection


@pytest.fixture
def socket_pair():
    """A connected (client, server) socket pair, closed after the test."""
    client_sock, server_sock = socket.socketpair()
    yield client_sock, server_sock
    for sock in (client_sock, server_sock):
        try:
            sock.close()
        except OSError:
            pass


@pytest.fixture
def make_connection():
    """Build a Connection whose factory hands out the given sockets in order."""
    connections = []

    def factory(*socks: socket.socket, timeout: float = 1.0) -> Connection:
        pending = list(socks)
        conn = Connection(
            "127.0.0.1",
            8888,
            timeout=timeout,
            socket_factory=lambda address, connect_timeout: pending.pop(0),
        )
        connections.append(conn)
        return conn

    yield factory
    for conn in connections:
        conn.close()


@pytest.fixture
def make_client():
    """Build a Client on top of an injected connection."""

    def factory(connection, **kwargs) -> Client:
        return Client("ssdb://127.0.0.1:8888/", connection=connection, **kwargs)

    return factory
