# pagewait/core/conditions.py
from __future__ import annotations

"""Element predicates
--------------------
Reusable checks the engine polls. Plain functions take an element; the
factories (has_class, css_value_equals, ...) return such a function.
"""

from typing import Any, Callable, Set

from pagewait.drivers.interface import ElementHandle, Point, Size, StaleHandle

ElementPredicate = Callable[[ElementHandle], bool]

# any attribute works; the read only has to reach the node
_STALENESS_PROBE_ATTRIBUTE = "id"


def is_displayed(element: ElementHandle) -> bool:
    return element.is_displayed()


def is_not_displayed(element: ElementHandle) -> bool:
    return not element.is_displayed()


def is_enabled(element: ElementHandle) -> bool:
    return element.is_enabled()


def is_disabled(element: ElementHandle) -> bool:
    return not element.is_enabled()


def get_classes(element: ElementHandle) -> Set[str]:
    """Class tokens of the element; an absent class attribute gives an empty set."""
    return set((element.get_attribute("class") or "").split())


def has_class(class_name: str) -> ElementPredicate:
    def _check(element: ElementHandle) -> bool:
        return class_name in get_classes(element)
    return _check


def lacks_class(class_name: str) -> ElementPredicate:
    def _check(element: ElementHandle) -> bool:
        return class_name not in get_classes(element)
    return _check


def css_value_equals(property_name: str, expected: str) -> ElementPredicate:
    """Exact string comparison against the computed style value."""
    def _check(element: ElementHandle) -> bool:
        return element.value_of_css_property(property_name) == expected
    return _check


def is_stale(element: ElementHandle) -> bool:
    """
    True once an attribute read reports the handle as stale. Any other driver
    error is not treated as staleness and reaches the caller.
    """
    return isinstance(element.read_attribute(_STALENESS_PROBE_ATTRIBUTE), StaleHandle)


def has_size(element: ElementHandle) -> bool:
    size = element.size
    return size.height * size.width != 0


# ---------- Sampled properties for change detection ----------

def location_of(element: ElementHandle) -> Point:
    return element.location


def size_of(element: ElementHandle) -> Size:
    return element.size


def changed(previous: Any, current: Any) -> bool:
    return previous != current


def unchanged(previous: Any, current: Any) -> bool:
    return previous == current
