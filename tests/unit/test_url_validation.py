import pytest

from linkpreview.app.routers.utils import is_valid_url, normalize_url, url_hostname


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("example.com", "http://example.com"),
        ("  example.com/a?b=c  ", "http://example.com/a?b=c"),
        ("www.example.co.uk", "http://www.example.co.uk"),
        ("https://example.com", "https://example.com"),
        ("ftp://files.example.com", "ftp://files.example.com"),
    ],
)
def test_normalize_url_prepends_http_only_without_scheme(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_normalize_url_empty_is_none(raw):
    assert normalize_url(raw) is None


@pytest.mark.parametrize(
    "url",
    [
        "http://example.com",
        "https://sub.example.io/path/to?x=1&y=2#frag",
        "http://user@example.com:8080/",
        "https://EXAMPLE.COM",
    ],
)
def test_is_valid_url_accepts_url_shaped_input(url):
    assert is_valid_url(url)


@pytest.mark.parametrize(
    "url",
    [
        "http://localhost",
        "http://not-a-url",
        "http://a.b",
        "http://",
        "http://example.c0m",
        "http://[::1",
    ],
)
def test_is_valid_url_rejects_malformed_input(url):
    assert not is_valid_url(url)


def test_url_hostname_is_lowercased():
    assert url_hostname("http://WWW.Example.com:8080/x") == "www.example.com"


def test_url_hostname_none_when_unparseable():
    assert url_hostname("http://[::1") is None
    assert url_hostname("http://") is None
