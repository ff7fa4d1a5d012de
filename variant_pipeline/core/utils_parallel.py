"""Parallel execution helpers for the variant pipeline."""
from __future__ import annotations

import concurrent.futures
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence, TypeVar


LOGGER = logging.getLogger("variant_pipeline.parallel")

T = TypeVar("T")
R = TypeVar("R")


def run_parallel(function: Callable[[T], R], items: Sequence[T], *, max_workers: Optional[int] = None) -> list[R]:
    """Run *function* for each element in *items* concurrently.

    Results keep the order of *items*; items whose worker raised are logged
    and left out.
    """

    if not items:
        return []
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(function, item) for item in items]
        results: list[R] = []
        for item, future in zip(items, futures):
            try:
                results.append(future.result())
            except Exception:
                LOGGER.exception("Parallel worker failure for %s", item)
        return results


@contextmanager
def limited_threads(max_workers: Optional[int]) -> Iterator[None]:
    """Context manager that logs thread usage for diagnostics."""

    LOGGER.debug("Starting thread pool with up to %s workers", max_workers)
    try:
        yield
    finally:
        LOGGER.debug("Thread pool with %s workers completed", max_workers)
