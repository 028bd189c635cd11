from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

from src.core.exceptions import CacheResolutionError, InvalidOriginURLError

# "/c/s/" addresses content the origin serves over https
SECURE_CONTENT_PREFIX = "/c/s/"

_DNS_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
_DOMAIN_SUFFIX_RE = re.compile(rf"^{_DNS_LABEL}(?:\.{_DNS_LABEL})*$")


def escape_hostname(hostname: str) -> str:
    """
    Fold a hostname into a single DNS label: "-" becomes "--", then "." becomes "-".
    No other normalization (case, IDNA, empty labels) is applied.
    """
    return hostname.replace("-", "--").replace(".", "-")


def split_netloc(netloc: str) -> tuple[str, str, str]:
    """Split a raw netloc into (userinfo incl. "@", hostname, port) without lower-casing."""
    userinfo, at, hostport = netloc.rpartition("@")
    if hostport.startswith("["):
        host, _, rest = hostport[1:].partition("]")
        port = rest[1:] if rest.startswith(":") else ""
    else:
        host, _, port = hostport.partition(":")
    return userinfo + at, host, port


def validate_origin(origin: str):
    """Split `origin`, requiring a scheme and a non-empty hostname."""
    try:
        parts = urlsplit(origin)
    except ValueError as e:
        raise InvalidOriginURLError(f"Invalid origin URL: {e}", extra={"url": origin}) from e

    if not parts.scheme or not split_netloc(parts.netloc)[1]:
        raise InvalidOriginURLError("Origin URL must be absolute with a host", extra={"url": origin})
    return parts


def resolve_cache_url(origin: str, domain_suffix: str) -> str:
    parts = validate_origin(origin)
    userinfo, hostname, _port = split_netloc(parts.netloc)

    if not domain_suffix or not _DOMAIN_SUFFIX_RE.match(domain_suffix):
        raise CacheResolutionError(
            f"Invalid cache domain suffix: {domain_suffix!r}",
            extra={"url": origin, "domain_suffix": domain_suffix},
        )

    host = f"{escape_hostname(hostname)}.{domain_suffix}"
    path = SECURE_CONTENT_PREFIX + hostname + parts.path
    return urlunsplit((parts.scheme, userinfo + host, path, parts.query, parts.fragment))
