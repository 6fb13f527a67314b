# pagewait/utils/projection.py
from __future__ import annotations

"""Projection helpers
--------------------
Map a sequence into a new list, in order, either in the calling thread or
across a thread pool. Handy for reading the same property off many elements,
where each read is a driver round trip.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from pagewait.drivers.interface import ElementHandle
from pagewait.utils.config import get_settings

T = TypeVar("T")
R = TypeVar("R")


def _bind(selector: Callable[..., R], items: Sequence[T], with_index: bool) -> Callable[[int], R]:
    if with_index:
        return lambda i: selector(items[i], i)
    return lambda i: selector(items[i])


def select_array(items: Sequence[T], selector: Callable[..., R], *, with_index: bool = False) -> List[R]:
    """
    Apply `selector` to each item, keeping positions.
    With `with_index=True` the selector is called as selector(item, index).
    """
    apply = _bind(selector, items, with_index)
    out: List[Any] = [None] * len(items)
    for i in range(len(items)):
        out[i] = apply(i)
    return out


def select_array_parallel(
    items: Sequence[T],
    selector: Callable[..., R],
    *,
    with_index: bool = False,
    max_workers: Optional[int] = None,
) -> List[R]:
    """
    Parallel select_array. Each result is written to its item's slot, so the
    output order matches the input whatever order the workers finish in. The
    first selector exception is re-raised once all work has finished.
    """
    if not items:
        return []
    apply = _bind(selector, items, with_index)
    workers = max_workers if max_workers is not None else get_settings().MAX_WORKERS
    out: List[Any] = [None] * len(items)

    def _run(i: int) -> None:
        out[i] = apply(i)

    with ThreadPoolExecutor(max_workers=max(1, min(workers, len(items)))) as ex:
        futures = [ex.submit(_run, i) for i in range(len(items))]
    for fut in futures:
        fut.result()
    return out


def texts(elements: Sequence[ElementHandle]) -> List[str]:
    return select_array(elements, lambda e: e.text)


def texts_parallel(elements: Sequence[ElementHandle], *, max_workers: Optional[int] = None) -> List[str]:
    return select_array_parallel(elements, lambda e: e.text, max_workers=max_workers)


def normalize_url(url: str, https: bool = False) -> str:
    """
    Displayed form of `url`: an http(s) scheme in front and a trailing slash.
    """
    normalized = url
    if not url.startswith("http"):
        normalized = ("https://" if https else "http://") + normalized
    if not url.endswith("/"):
        normalized += "/"
    return normalized
