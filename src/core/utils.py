"""
Small shared utilities.
"""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Generator, Iterable


@contextmanager
def timer() -> Generator[dict, None, None]:
    """Context manager that records elapsed wall-clock milliseconds."""
    result: dict = {}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["elapsed_ms"] = int((time.perf_counter() - start) * 1000)


def first_seen(values: Iterable[Any]) -> list[Any]:
    """De-duplicate *values*, keeping the first occurrence of each."""
    seen: list[Any] = []
    index: set[Any] = set()
    for value in values:
        try:
            if value in index:
                continue
            index.add(value)
        except TypeError:
            # unhashable: fall back to a linear equality scan
            if value in seen:
                continue
        seen.append(value)
    return seen
