import pytest

from pagewait.core.errors import MultipleElementsError, NoSuchElementError, WaitTimeoutError
from pagewait.core.search import (
    SearchInformation,
    find_first_or_default,
    find_single,
    find_single_or_default,
)
from pagewait.drivers.interface import Locator

from conftest import FakeElement, FakeSurface

ROWS = Locator.css("tr")


def test_find_first_or_default():
    a, b = FakeElement("a"), FakeElement("b")
    assert find_first_or_default(FakeSurface([[a, b]]), ROWS) is a
    assert find_first_or_default(FakeSurface([[]]), ROWS) is None


def test_find_single():
    a = FakeElement("a")
    assert find_single(FakeSurface([[a]]), ROWS) is a

    with pytest.raises(NoSuchElementError, match="By.css: tr"):
        find_single(FakeSurface([[]]), ROWS)

    with pytest.raises(MultipleElementsError, match="More than one element"):
        find_single(FakeSurface([[a, FakeElement("b")]]), ROWS)


def test_find_single_or_default():
    assert find_single_or_default(FakeSurface([[]]), ROWS) is None
    with pytest.raises(MultipleElementsError):
        find_single_or_default(FakeSurface([[FakeElement(), FakeElement()]]), ROWS)


def test_search_information_finds_within_its_context():
    a = FakeElement("a")
    table = FakeSurface([[a]])
    info = SearchInformation(table, ROWS)

    assert info.find_element() is a
    assert info.find_elements() == [a]
    assert table.locators == [ROWS, ROWS]


def test_search_information_find_element_raises_when_missing():
    with pytest.raises(NoSuchElementError):
        SearchInformation(FakeSurface([[]]), ROWS).find_element()


def test_search_information_waits_use_its_pair(make_wait, clock):
    row = FakeElement("row")
    table = FakeSurface([[], [row], [row], []])
    info = SearchInformation(table, ROWS, wait=make_wait(None))

    assert info.wait_until_element_exists() is row
    info.wait_until_no_elements_exist()
    assert table.find_calls == 4
    assert all(loc == ROWS for loc in table.locators)


def test_search_information_wait_timeout(make_wait):
    info = SearchInformation(FakeSurface([[]]), ROWS, wait=make_wait(None))
    with pytest.raises(WaitTimeoutError):
        info.wait_until_element_exists(timeout_ms=400)
