import pytest

from pagewait.core.errors import WaitTimeoutError

from conftest import FakeSession


def test_url_starts_with_returns_matching_url(make_wait, clock):
    session = FakeSession(urls=["about:blank", "https://shop.test/login", "https://shop.test/home?x=1"])
    wait = make_wait(session)

    assert wait.url_starts_with("https://shop.test/home") == "https://shop.test/home?x=1"
    assert clock.sleeps == [200, 200]


def test_url_equals(make_wait):
    wait = make_wait(FakeSession(urls=["https://a.test/", "https://b.test/"]))
    assert wait.url_equals("https://b.test/") == "https://b.test/"


def test_url_equals_empty_string_still_ends_the_wait(make_wait, clock):
    wait = make_wait(FakeSession(urls=[""]))
    assert wait.url_equals("") == ""
    assert clock.sleeps == []


def test_url_is_not_empty(make_wait):
    wait = make_wait(FakeSession(urls=["", "", "https://a.test/"]))
    assert wait.url_is_not_empty() == "https://a.test/"


def test_url_satisfies_custom_predicate(make_wait):
    wait = make_wait(FakeSession(urls=["https://a.test/step/1", "https://a.test/step/2"]))
    assert wait.url_satisfies(lambda u: u.endswith("/2")) == "https://a.test/step/2"


def test_url_wait_timeout_message(make_wait):
    wait = make_wait(FakeSession(urls=["https://a.test/login"]))
    with pytest.raises(WaitTimeoutError) as info:
        wait.url_starts_with("https://a.test/home", timeout_ms=2000)
    assert str(info.value) == "URL did not start with 'https://a.test/home' after a timeout of 2 seconds"


def test_url_wait_needs_a_session(make_wait):
    with pytest.raises(RuntimeError):
        make_wait(None).url_is_not_empty()
