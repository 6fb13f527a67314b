# pagewait/drivers/interface.py
from __future__ import annotations

"""Driver capability interface
-----------------------------
The small surface the wait engine needs from a browser driver. Concrete
adapters (Playwright, Selenium) wrap the driver's own page/element objects
so the engine never imports a driver library directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------- Locators ----------

class LocatorStrategy(str, Enum):
    css = "css"
    xpath = "xpath"
    id = "id"
    name = "name"
    tag_name = "tag_name"
    class_name = "class_name"
    link_text = "link_text"


class Locator(BaseModel):
    """How to find elements inside a search surface."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Selector string, interpreted per strategy")
    strategy: LocatorStrategy = Field(default=LocatorStrategy.css)

    @field_validator("value")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("locator.value cannot be empty")
        return v

    def __str__(self) -> str:
        return f"By.{self.strategy.value}: {self.value}"

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls(value=value, strategy=LocatorStrategy.css)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls(value=value, strategy=LocatorStrategy.xpath)

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls(value=value, strategy=LocatorStrategy.id)

    @classmethod
    def name(cls, value: str) -> "Locator":
        return cls(value=value, strategy=LocatorStrategy.name)

    @classmethod
    def tag_name(cls, value: str) -> "Locator":
        return cls(value=value, strategy=LocatorStrategy.tag_name)

    @classmethod
    def class_name(cls, value: str) -> "Locator":
        return cls(value=value, strategy=LocatorStrategy.class_name)

    @classmethod
    def link_text(cls, value: str) -> "Locator":
        return cls(value=value, strategy=LocatorStrategy.link_text)


# ---------- Geometry ----------

@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Size:
    width: int
    height: int


# ---------- Tagged attribute read ----------

@dataclass(frozen=True)
class Ok:
    value: Optional[str]


@dataclass(frozen=True)
class StaleHandle:
    pass


AttributeRead = Union[Ok, StaleHandle]


# ---------- Capabilities ----------

@runtime_checkable
class SearchSurface(Protocol):
    def find_elements(self, locator: Locator) -> List["ElementHandle"]:
        """All matches in document order; empty when nothing matches."""
        ...


@runtime_checkable
class ElementHandle(SearchSurface, Protocol):
    """
    A reference to a page node. Every call may raise StaleHandleError once the
    node has been removed or replaced, except read_attribute which reports it
    as a StaleHandle value instead.
    """

    @property
    def text(self) -> str:
        ...

    def is_displayed(self) -> bool:
        ...

    def is_enabled(self) -> bool:
        ...

    def get_attribute(self, name: str) -> Optional[str]:
        ...

    def read_attribute(self, name: str) -> AttributeRead:
        ...

    def value_of_css_property(self, name: str) -> str:
        ...

    @property
    def location(self) -> Point:
        ...

    @property
    def size(self) -> Size:
        ...


@runtime_checkable
class Session(SearchSurface, Protocol):
    @property
    def current_url(self) -> str:
        """Never None."""
        ...

    def get(self, url: str) -> None:
        ...

    def quit(self) -> None:
        ...
