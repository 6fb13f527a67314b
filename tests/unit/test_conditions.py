import pytest

from pagewait.core import conditions
from pagewait.core.errors import WaitTimeoutError
from pagewait.drivers.interface import Size

from conftest import FakeElement


def test_get_classes_splits_on_whitespace():
    el = FakeElement(classes=["a  b\tc"])
    assert conditions.get_classes(el) == {"a", "b", "c"}


def test_get_classes_without_attribute_is_empty():
    assert conditions.get_classes(FakeElement(classes=[None])) == set()


def test_has_class_matches_whole_tokens_only():
    el = FakeElement(classes=["a b"])
    assert conditions.has_class("a")(el)
    assert not conditions.has_class("ab")(el)
    assert conditions.lacks_class("ab")(el)


@pytest.mark.parametrize("size", [Size(0, 5), Size(5, 0), Size(0, 0)])
def test_has_size_needs_both_dimensions(size):
    assert not conditions.has_size(FakeElement(sizes=[size]))


def test_has_size_with_area():
    assert conditions.has_size(FakeElement(sizes=[Size(1, 1)]))


def test_css_value_is_compared_as_exact_string():
    el = FakeElement(css={"color": "rgb(0, 0, 0)"})
    assert conditions.css_value_equals("color", "rgb(0, 0, 0)")(el)
    assert not conditions.css_value_equals("color", "rgb(0,0,0)")(el)


def test_is_stale_only_on_stale_tag():
    assert not conditions.is_stale(FakeElement())
    assert conditions.is_stale(FakeElement(stale_from_read=1))


def test_is_stale_lets_other_errors_through():
    el = FakeElement(read_error=ConnectionError("driver went away"))
    with pytest.raises(ConnectionError):
        conditions.is_stale(el)


def test_change_predicates():
    assert conditions.changed(1, 2) and not conditions.changed(2, 2)
    assert conditions.unchanged(2, 2) and not conditions.unchanged(1, 2)


# ---------- engine waits built on the predicates ----------


def test_element_has_size_keeps_waiting_through_zero_dimensions(make_wait, clock):
    el = FakeElement(sizes=[Size(0, 5), Size(5, 0), Size(0, 0), Size(1, 1)])
    assert make_wait().element_has_size(el) is el
    assert len(clock.sleeps) == 3


def test_element_is_stale_once_a_read_reports_it(make_wait, clock):
    el = FakeElement(stale_from_read=3)
    assert make_wait().element_is_stale(el) is el
    assert el.reads == 3
    assert len(clock.sleeps) == 2


def test_element_display_and_enable_waits(make_wait):
    wait = make_wait()
    el = FakeElement(displayed=[False, True], enabled=[True, False])
    assert wait.element_is_displayed(el) is el

    el = FakeElement(displayed=[True, False], enabled=[False, True])
    assert wait.element_is_not_displayed(el) is el
    assert wait.element_is_enabled(el) is el

    assert wait.element_is_disabled(FakeElement(enabled=[True, True, False])).name == "el"


def test_element_class_waits(make_wait, clock):
    wait = make_wait()
    el = FakeElement(classes=["btn", "btn loading", "btn loading"])
    assert wait.element_has_class(el, "loading") is el

    el = FakeElement(classes=["btn loading", "btn"])
    assert wait.element_lacks_class(el, "loading") is el


def test_element_css_wait_times_out_with_property_in_message(make_wait):
    el = FakeElement(css={"opacity": "0.5"})
    with pytest.raises(WaitTimeoutError, match="'opacity' was not '1'"):
        make_wait().element_css_value_equals(el, "opacity", "1", timeout_ms=400)


def test_element_satisfies_custom_predicate(make_wait):
    el = FakeElement(text="Saved")
    assert make_wait().element_satisfies(el, lambda e: e.text == "Saved", "Text never said Saved") is el


def test_named_element_waits_honor_interval_override(make_wait, clock):
    el = FakeElement(displayed=[False, False, True])
    assert make_wait().element_is_displayed(el, interval_ms=50) is el
    assert clock.sleeps == [50, 50]


def test_named_element_waits_honor_both_overrides_together(make_wait, clock):
    el = FakeElement(classes=["btn"])
    with pytest.raises(WaitTimeoutError):
        make_wait().element_has_class(el, "active", timeout_ms=300, interval_ms=100)
    assert clock.sleeps == [100, 100, 100]
