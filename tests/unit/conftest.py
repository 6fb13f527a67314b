from typing import List, Optional, Sequence

import pytest

from pagewait.core.engine import WaitUntil
from pagewait.core.errors import StaleHandleError
from pagewait.drivers.interface import Ok, Point, Size, StaleHandle
from pagewait.utils.config import WaitPolicy


class FakeClock:
    """Time only moves when the engine sleeps."""

    def __init__(self) -> None:
        self.now = 0
        self.sleeps: List[int] = []

    def now_ms(self) -> int:
        return self.now

    def sleep_ms(self, ms: int) -> None:
        self.sleeps.append(ms)
        self.now += ms


class Seq:
    """Hands out values in order, repeating the last one forever."""

    def __init__(self, values: Sequence) -> None:
        self.values = list(values)
        self.calls = 0

    def next(self):
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


class FakeElement:
    def __init__(
        self,
        name: str = "el",
        *,
        displayed: Sequence[bool] = (True,),
        enabled: Sequence[bool] = (True,),
        classes: Sequence[Optional[str]] = (None,),
        css: Optional[dict] = None,
        locations: Sequence[Point] = (Point(0, 0),),
        sizes: Sequence[Size] = (Size(10, 10),),
        stale_from_read: Optional[int] = None,
        read_error: Optional[Exception] = None,
        text: str = "",
        children: Sequence[Sequence["FakeElement"]] = ((),),
    ) -> None:
        self.name = name
        self._displayed = Seq(displayed)
        self._enabled = Seq(enabled)
        self._classes = Seq(classes)
        self._css = css or {}
        self._locations = Seq(locations)
        self._sizes = Seq(sizes)
        self._stale_from_read = stale_from_read
        self._read_error = read_error
        self.reads = 0
        self.stale = False
        self._text = text
        self._children = Seq([list(c) for c in children])

    def __repr__(self) -> str:
        return f"FakeElement({self.name})"

    def _check(self) -> None:
        if self.stale:
            raise StaleHandleError(f"{self.name} is stale")

    def find_elements(self, locator) -> list:
        self._check()
        return self._children.next()

    @property
    def text(self) -> str:
        self._check()
        return self._text

    def is_displayed(self) -> bool:
        self._check()
        return self._displayed.next()

    def is_enabled(self) -> bool:
        self._check()
        return self._enabled.next()

    def get_attribute(self, name: str) -> Optional[str]:
        self._check()
        if name == "class":
            return self._classes.next()
        return None

    def read_attribute(self, name: str):
        self.reads += 1
        if self._read_error is not None:
            raise self._read_error
        if self.stale or (self._stale_from_read is not None and self.reads >= self._stale_from_read):
            return StaleHandle()
        return Ok(None)

    def value_of_css_property(self, name: str) -> str:
        self._check()
        return self._css.get(name, "")

    @property
    def location(self) -> Point:
        self._check()
        return self._locations.next()

    @property
    def size(self) -> Size:
        self._check()
        return self._sizes.next()


class FakeSurface:
    """Returns the next scripted result list on every search."""

    def __init__(self, results: Sequence[Sequence[FakeElement]] = ((),)) -> None:
        self._results = Seq([list(r) for r in results])
        self.locators: list = []

    @property
    def find_calls(self) -> int:
        return len(self.locators)

    def find_elements(self, locator) -> list:
        self.locators.append(locator)
        return self._results.next()


class FakeSession(FakeSurface):
    def __init__(self, results: Sequence[Sequence[FakeElement]] = ((),), urls: Sequence[str] = ("about:blank",)) -> None:
        super().__init__(results)
        self._urls = Seq(urls)
        self.visited: List[str] = []
        self.quit_count = 0

    @property
    def current_url(self) -> str:
        return self._urls.next()

    def get(self, url: str) -> None:
        self.visited.append(url)

    def quit(self) -> None:
        self.quit_count += 1


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_wait(clock):
    """Build a WaitUntil on the fake clock with the stock 20 s / 200 ms / 500 ms policy."""
    def _make(session=None, policy: Optional[WaitPolicy] = None) -> WaitUntil:
        return WaitUntil(session, policy=policy or WaitPolicy(), clock=clock)
    return _make
