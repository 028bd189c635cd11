from urllib.parse import parse_qsl, urlsplit

import pytest

from src.amp_cache.cache_urls import resolve_cache_url
from src.amp_cache.refresh import (
    build_refresh_url,
    canonical_query,
    decode_urlsafe_signature,
    escape_path,
    urlsafe_signature,
    verify_refresh_url,
)
from src.core.exceptions import RefreshURLError

TS = 1700000000
CACHE_URL = "https://example-com.cdn.ampproject.org/c/s/example.com/page"


def _signature_of(url: str) -> str:
    return dict(parse_qsl(urlsplit(url).query))["amp_url_signature"]


def test_end_to_end_refresh_url(keys):
    cache_url = resolve_cache_url("https://example.com/page", "cdn.ampproject.org")
    url = build_refresh_url(cache_url, TS, keys)
    parts = urlsplit(url)

    assert parts.scheme == "https"
    assert parts.netloc == "example-com.cdn.ampproject.org"
    assert parts.path == "/update-cache/c/s/example.com/page"
    assert parts.query.startswith("amp_action=flush&amp_ts=1700000000&amp_url_signature=")
    assert verify_refresh_url(url, keys) is True


def test_signed_bytes_are_path_and_query_without_signature(keys):
    url = build_refresh_url(CACHE_URL, TS, keys)
    signature = decode_urlsafe_signature(_signature_of(url))
    message = b"/update-cache/c/s/example.com/page?amp_action=flush&amp_ts=1700000000"
    assert keys.verify(message, signature) is True


def test_signature_is_url_safe(keys):
    for ts in range(TS, TS + 20):
        signature = _signature_of(build_refresh_url(CACHE_URL, ts, keys))
        assert not set(signature) & {"=", "+", "/"}
        assert len(signature) == 342  # 256 bytes, padding stripped


def test_same_input_same_url(keys):
    assert build_refresh_url(CACHE_URL, TS, keys) == build_refresh_url(CACHE_URL, TS, keys)


def test_timestamp_changes_url(keys):
    first = build_refresh_url(CACHE_URL, TS, keys)
    second = build_refresh_url(CACHE_URL, TS + 1, keys)
    assert first != second
    assert "amp_ts=1700000001" in second


def test_existing_query_is_kept_and_sorted(keys):
    url = build_refresh_url(CACHE_URL + "?x=1&b=2", TS, keys)
    names = [k for k, _ in parse_qsl(urlsplit(url).query)]
    assert names == ["amp_action", "amp_ts", "amp_url_signature", "b", "x"]
    assert verify_refresh_url(url, keys)


def test_protocol_params_are_overwritten(keys):
    url = build_refresh_url(CACHE_URL + "?amp_action=remove&amp_ts=1", TS, keys)
    params = dict(parse_qsl(urlsplit(url).query))
    assert params["amp_action"] == "flush"
    assert params["amp_ts"] == str(TS)


def test_stale_signature_on_cache_url_is_not_signed(keys):
    url = build_refresh_url(CACHE_URL + "?amp_url_signature=stale", TS, keys)
    assert "stale" not in url
    assert verify_refresh_url(url, keys)


def test_duplicate_keys_last_wins(keys):
    url = build_refresh_url(CACHE_URL + "?x=1&x=2", TS, keys)
    assert parse_qsl(urlsplit(url).query)[-1] == ("x", "2")


def test_encoded_path_and_query_verify(keys):
    cache_url = resolve_cache_url("https://example.com/caf%C3%A9/a b?q=a+b&t=%7E", "cdn.ampproject.org")
    url = build_refresh_url(cache_url, TS, keys)
    parts = urlsplit(url)
    assert parts.path == "/update-cache/c/s/example.com/caf%C3%A9/a%20b"
    assert parts.query.endswith("&q=a+b&t=~")
    assert verify_refresh_url(url, keys)


def test_fragment_is_not_sent(keys):
    url = build_refresh_url(CACHE_URL + "#section", TS, keys)
    assert "#" not in url
    assert verify_refresh_url(url, keys)


@pytest.mark.parametrize("cache_url", ["", "not a url", "/c/s/example.com/page", "https://[::1/page"])
def test_malformed_cache_url(keys, cache_url):
    with pytest.raises(RefreshURLError):
        build_refresh_url(cache_url, TS, keys)


def test_canonical_query_encoding():
    assert canonical_query({"z": "~-._", "q": "a b", "k": "é/&="}) == "k=%C3%A9%2F%26%3D&q=a+b&z=~-._"


def test_canonical_query_empty():
    assert canonical_query({}) == ""


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/c/s/example.com/page", "/c/s/example.com/page"),
        ("/c/s/example.com/a%20b", "/c/s/example.com/a%20b"),
        ("/c/s/example.com/a b", "/c/s/example.com/a%20b"),
        ("/café", "/caf%C3%A9"),
        ("/50%", "/50%25"),
        ("/a:b@c;d=e", "/a:b@c;d=e"),
    ],
)
def test_escape_path(path, expected):
    assert escape_path(path) == expected


def test_urlsafe_signature_alphabet():
    assert urlsafe_signature(b"\xfb\xff") == "-_8"
    assert decode_urlsafe_signature("-_8") == b"\xfb\xff"


def test_verify_rejects_other_key(keys, other_keys):
    assert verify_refresh_url(build_refresh_url(CACHE_URL, TS, other_keys), keys) is False


def test_verify_rejects_tampered_timestamp(keys):
    url = build_refresh_url(CACHE_URL, TS, keys)
    assert verify_refresh_url(url.replace("amp_ts=1700000000", "amp_ts=1700000001"), keys) is False


def test_verify_rejects_missing_signature(keys):
    assert verify_refresh_url(CACHE_URL.replace("/c/s/", "/update-cache/c/s/") + "?amp_action=flush&amp_ts=1", keys) is False


def test_verify_rejects_non_update_cache_path(keys):
    url = build_refresh_url(CACHE_URL, TS, keys)
    assert verify_refresh_url(url.replace("/update-cache", "", 1), keys) is False
