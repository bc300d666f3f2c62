import logging

import pytest

from core.exceptions import HeaderParseError, ResourceError
from core.wordlists import (
    expand_words,
    load_extensions,
    load_user_agents,
    load_wordlist,
    parse_header,
    parse_headers,
)


def test_wordlist_skips_blank_and_comment_lines(write_lines):
    path = write_lines("words.txt", ["# common paths", "admin", "", "   ", "login  ", "#backup"])
    assert load_wordlist(path) == ["admin", "login"]


def test_missing_wordlist_raises_resource_error(tmp_path):
    with pytest.raises(ResourceError) as exc_info:
        load_wordlist(str(tmp_path / "nope.txt"))
    assert "nope.txt" in str(exc_info.value)


def test_user_agents_optional(write_lines):
    assert load_user_agents(None) == []
    path = write_lines("ua.txt", ["# agents", "Mozilla/5.0", "curl/8.0"])
    assert load_user_agents(path) == ["Mozilla/5.0", "curl/8.0"]


def test_extensions_without_marker_are_skipped(write_lines, caplog):
    path = write_lines("ext.txt", ["%.php", ".bak", "%~"])
    with caplog.at_level(logging.WARNING):
        assert load_extensions(path) == ["%.php", "%~"]
    assert ".bak" in caplog.text


def test_expansion_is_word_major():
    expanded = expand_words(["admin", "login"], ["%.php", "%.bak"])
    assert expanded == ["admin.php", "admin.bak", "login.php", "login.bak"]


def test_expansion_without_extensions_keeps_words():
    assert expand_words(["admin", "login"]) == ["admin", "login"]
    assert expand_words(["admin"], []) == ["admin"]


def test_subdomain_suffix_applied_after_extensions():
    assert expand_words(["api"], subdomain_host="example.com") == ["api.example.com"]
    assert expand_words(["a"], ["%-dev"], "example.com") == ["a-dev.example.com"]


def test_parse_header():
    assert parse_header("X-Token:  Abc ") == ("x-token", "Abc")


@pytest.mark.parametrize("raw", [
    "NoColon",
    "Authorization: Bearer a:b",
    ": empty-key",
    "X-Name: café",
    "Ünïcode: 1",
])
def test_parse_header_rejects_malformed(raw):
    with pytest.raises(HeaderParseError):
        parse_header(raw)


def test_parse_headers_skips_malformed_and_keeps_first(caplog):
    with caplog.at_level(logging.WARNING):
        headers = parse_headers(["X-A: 1", "broken", "x-a: 2", "Cookie: session=1"])
    assert headers == {"x-a": "1", "cookie": "session=1"}
    assert "broken" in caplog.text


def test_parse_headers_skips_non_ascii_values(caplog):
    with caplog.at_level(logging.WARNING):
        headers = parse_headers(["X-Name: café", "X-A: 1"])
    assert headers == {"x-a": "1"}
    assert "X-Name: café" in caplog.text


def test_parse_headers_none():
    assert parse_headers(None) == {}
