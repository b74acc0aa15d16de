#!/usr/bin/env python3
"""
01_basic_usage.py - Values, Sorted Sets and Batches

This example demonstrates:
- Connecting to an SSDB server
- Setting and reading plain values
- Scoring members of a sorted set
- Sending several commands in one batch

Prerequisites:
    - SSDB server running on localhost:8888
    - pyssdb installed

Run with:
    python 01_basic_usage.py
"""

from pyssdb import connect


def main():
    with connect("ssdb://localhost:8888/", timeout=5.0) as ssdb:
        print("Plain values")
        print("-" * 50)
        ssdb.set("example:greeting", "Hello, SSDB!")
        print(f"greeting = {ssdb.get('example:greeting')!r}")
        print(f"visits   = {ssdb.incr('example:visits')}")

        print("\nSorted sets")
        print("-" * 50)
        ssdb.multi_zset("example:scores", {"alice": 120, "bob": 95, "carol": 143})
        for member, score in ssdb.zrscan("example:scores", "", "", limit=3):
            print(f"{member:<8} {score}")

        print("\nBatch")
        print("-" * 50)
        with ssdb.batch() as batch:
            ssdb.incr("example:visits")
            total = ssdb.get("example:visits")
            top = ssdb.zget("example:scores", "carol")
        print(f"results = {batch.results}")
        print(f"total   = {total.value}, carol = {top.value}")

        ssdb.multi_del(["example:greeting", "example:visits"])
        ssdb.multi_zdel("example:scores", ["alice", "bob", "carol"])


if __name__ == "__main__":
    main()
