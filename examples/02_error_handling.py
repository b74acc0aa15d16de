#!/usr/bin/env python3
"""
02_error_handling.py - Error Handling Patterns

This example demonstrates:
- Configuration errors raised before any I/O
- Connection errors and timeouts
- Error statuses returned by the server
- Reading a future too early

Prerequisites:
    - SSDB server running on localhost:8888
    - pyssdb installed

Run with:
    python 02_error_handling.py
"""

from pyssdb import Command, connect
from pyssdb.exceptions import (
    CommandError,
    ConfigurationError,
    ConnectionError,
    ConnectionTimeoutError,
    FutureNotReadyError,
)


def configuration_error_handling():
    """Handling invalid settings"""
    print("Configuration Error Handling")
    print("-" * 50)

    try:
        connect("not a url")
    except ConfigurationError as e:
        print(f"✓ Caught ConfigurationError: {e}")


def connection_error_handling():
    """Handling connection errors"""
    print("\nConnection Error Handling")
    print("-" * 50)

    ssdb = connect("ssdb://localhost:19999/", timeout=2.0)
    try:
        print("Calling an unavailable server...")
        ssdb.get("key")
    except ConnectionTimeoutError as e:
        print(f"✓ Caught connection timeout: {e}")
    except ConnectionError as e:
        print(f"✓ Caught connection error (after one retry): {e}")
    finally:
        ssdb.close()


def command_error_handling():
    """Handling error statuses from the server"""
    print("\nCommand Error Handling")
    print("-" * 50)

    with connect("ssdb://localhost:8888/") as ssdb:
        try:
            ssdb.client.call(Command.build("no_such_command"))
        except CommandError as e:
            print(f"✓ Caught CommandError: status={e.status!r} detail={e.detail!r}")

        # the connection was closed; the next call reconnects
        print(f"✓ Still usable: set -> {ssdb.set('example:key', 'value')}")
        ssdb.delete("example:key")


def future_error_handling():
    """Reading a future before its batch is sent"""
    print("\nFuture Error Handling")
    print("-" * 50)

    with connect("ssdb://localhost:8888/") as ssdb:
        with ssdb.batch():
            pending = ssdb.get("example:key")
            try:
                pending.value
            except FutureNotReadyError as e:
                print(f"✓ Caught FutureNotReadyError: {e}")
        print(f"✓ After the batch: {pending.value!r}")


def main():
    configuration_error_handling()
    connection_error_handling()
    command_error_handling()
    future_error_handling()


if __name__ == "__main__":
    main()
