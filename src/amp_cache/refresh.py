"""
Signed update-cache ("refresh") URLs.

A cache verifies a refresh request by rebuilding the signed string from what it
receives: the request path, "?" and the query string without `amp_url_signature`,
with parameters sorted by name. Builder and verifier must agree byte for byte, so
the query encoding is spelled out here instead of relying on `urlencode`.
"""
from __future__ import annotations

import base64
import binascii
import re
from typing import Mapping
from urllib.parse import parse_qsl, quote, quote_plus, unquote, urlsplit, urlunsplit

from src.core.exceptions import RefreshURLError
from src.crypto.keys import KeyMaterial

UPDATE_CACHE_PATH = "/update-cache"

AMP_ACTION = "amp_action"
AMP_TS = "amp_ts"
AMP_URL_SIGNATURE = "amp_url_signature"
FLUSH = "flush"

# reserved characters left literal inside a path
_PATH_SAFE = "/$&+,:;=@"
_ENCODED_PATH_RE = re.compile(r"^(?:[A-Za-z0-9\-._~!$&'()*+,;=:@/\[\]]|%[0-9A-Fa-f]{2})*$")


def escape_path(path: str) -> str:
    """Keep a path that is already validly percent-encoded, otherwise encode it."""
    if _ENCODED_PATH_RE.match(path):
        return path
    return quote(unquote(path), safe=_PATH_SAFE)


def canonical_query(params: Mapping[str, str]) -> str:
    """
    key=value pairs sorted by key (then value), both sides form-encoded with only
    A-Z a-z 0-9 - _ . ~ left literal, spaces as "+" and upper-case hex escapes.
    """
    return "&".join(
        f"{quote_plus(k, safe='')}={quote_plus(v, safe='')}" for k, v in sorted(params.items())
    )


def urlsafe_signature(signature: bytes) -> str:
    b64 = base64.b64encode(signature).decode("ascii")
    return b64.replace("=", "").replace("+", "-").replace("/", "_")


def decode_urlsafe_signature(value: str) -> bytes:
    pad = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + pad)


def signing_input(path: str, params: Mapping[str, str]) -> bytes:
    return f"{path}?{canonical_query(params)}".encode("utf-8")


def _split(url: str):
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise RefreshURLError(f"Invalid cache URL: {e}", extra={"url": url}) from e
    if not parts.scheme or not parts.netloc:
        raise RefreshURLError("Cache URL must be absolute with a host", extra={"url": url})
    return parts


def build_refresh_url(cache_url: str, now: int, keys: KeyMaterial) -> str:
    parts = _split(cache_url)

    # duplicate keys are not supported: the last occurrence wins
    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    # a stale signature on the cache URL is never part of the signed bytes
    params.pop(AMP_URL_SIGNATURE, None)
    params[AMP_ACTION] = FLUSH
    params[AMP_TS] = str(int(now))

    path = UPDATE_CACHE_PATH + escape_path(parts.path)
    signature = keys.sign(signing_input(path, params))

    params[AMP_URL_SIGNATURE] = urlsafe_signature(signature)
    return urlunsplit((parts.scheme, parts.netloc, path, canonical_query(params), ""))


def verify_refresh_url(refresh_url: str, keys: KeyMaterial) -> bool:
    """Check a refresh URL the way a cache does: drop the signature, re-canonicalize, verify."""
    parts = _split(refresh_url)
    if not parts.path.startswith(UPDATE_CACHE_PATH):
        return False

    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    encoded = params.pop(AMP_URL_SIGNATURE, None)
    if not encoded:
        return False
    try:
        signature = decode_urlsafe_signature(encoded)
    except (binascii.Error, ValueError):
        return False
    return keys.verify(signing_input(parts.path, params), signature)
