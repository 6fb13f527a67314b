# pagewait/core/search.py
from __future__ import annotations

from typing import List, Optional, Sequence

from pagewait.core.engine import WaitUntil
from pagewait.core.errors import MultipleElementsError, NoSuchElementError
from pagewait.drivers.interface import ElementHandle, Locator, SearchSurface


def _assert_up_to_one(elements: Sequence[ElementHandle], locator: Locator) -> None:
    if len(elements) > 1:
        raise MultipleElementsError(f"More than one element was found using {locator}")


def find_first_or_default(surface: SearchSurface, locator: Locator) -> Optional[ElementHandle]:
    """First match of `locator`, or None when nothing matches."""
    elements = surface.find_elements(locator)
    return elements[0] if elements else None


def find_single(surface: SearchSurface, locator: Locator) -> ElementHandle:
    """
    The only match of `locator`.

    Raises:
        NoSuchElementError: nothing matched
        MultipleElementsError: more than one element matched
    """
    elements = surface.find_elements(locator)
    if not elements:
        raise NoSuchElementError(f"No elements were found using {locator}")
    _assert_up_to_one(elements, locator)
    return elements[0]


def find_single_or_default(surface: SearchSurface, locator: Locator) -> Optional[ElementHandle]:
    """Like find_single, but None when nothing matched."""
    elements = surface.find_elements(locator)
    _assert_up_to_one(elements, locator)
    return elements[0] if elements else None


class SearchInformation:
    """
    A search surface and a locator kept together, so several kinds of search
    and wait can run against the same pair without repeating it.
    """

    def __init__(self, search_context: SearchSurface, locator: Locator, *, wait: Optional[WaitUntil] = None) -> None:
        self.search_context = search_context
        self.locator = locator
        self.wait = wait or WaitUntil()

    def __repr__(self) -> str:
        return f"SearchInformation({self.search_context!r}, {self.locator})"

    def find_element(self) -> ElementHandle:
        """First match; raises NoSuchElementError when there is none."""
        element = find_first_or_default(self.search_context, self.locator)
        if element is None:
            raise NoSuchElementError(f"No elements were found using {self.locator}")
        return element

    def find_elements(self) -> List[ElementHandle]:
        return self.search_context.find_elements(self.locator)

    def wait_until_element_exists(self, timeout_ms: Optional[int] = None) -> ElementHandle:
        return self.wait.element_exists(self.locator, search_context=self.search_context, timeout_ms=timeout_ms)

    def wait_until_no_elements_exist(self, timeout_ms: Optional[int] = None) -> None:
        self.wait.no_elements_exist(self.locator, search_context=self.search_context, timeout_ms=timeout_ms)
