import logging
from dataclasses import dataclass, field
from typing import Callable

import httpx
from django.utils import timezone

from src.amp_cache.cache_urls import resolve_cache_url
from src.amp_cache.http_client import client_scope
from src.amp_cache.refresh import build_refresh_url, verify_refresh_url
from src.amp_cache.schemas import CacheDirectory
from src.amp_cache.selectors import fetch_cache_directory
from src.core.exceptions import DispatchError, PurgeError, RefreshURLError
from src.crypto.keys import KeyMaterial

logger = logging.getLogger(__name__)


@dataclass
class CacheRefreshResult:
    cache_id: str
    cache_url: str | None = None
    refresh_url: str | None = None
    status_code: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code == 200

    def as_dict(self) -> dict:
        return {
            "cache_id": self.cache_id,
            "cache_url": self.cache_url,
            "refresh_url": self.refresh_url,
            "status_code": self.status_code,
            "error": self.error,
            "ok": self.ok,
        }


@dataclass
class PurgeReport:
    origin: str
    results: list[CacheRefreshResult] = field(default_factory=list)
    dry_run: bool = False

    def _passed(self, result: CacheRefreshResult) -> bool:
        # nothing is dispatched on a dry run
        return result.error is None if self.dry_run else result.ok

    @property
    def failed(self) -> list[CacheRefreshResult]:
        return [r for r in self.results if not self._passed(r)]

    @property
    def succeeded(self) -> list[CacheRefreshResult]:
        return [r for r in self.results if self._passed(r)]

    @property
    def ok(self) -> bool:
        return not self.failed

    def as_dict(self) -> dict:
        return {
            "origin": self.origin,
            "ok": self.ok,
            "results": [r.as_dict() for r in self.results],
        }


def current_timestamp() -> int:
    return int(timezone.now().timestamp())


def dispatch_refresh(refresh_url: str, *, client: httpx.Client) -> int:
    """One GET per refresh URL, no retry. The status code is the only signal."""
    try:
        resp = client.get(refresh_url)
    except httpx.HTTPError as e:
        raise DispatchError(f"Refresh request failed: {e}", extra={"url": refresh_url}) from e
    return resp.status_code


def purge(
    origin: str,
    *,
    keys: KeyMaterial,
    directory: CacheDirectory | None = None,
    client: httpx.Client | None = None,
    clock: Callable[[], int] = current_timestamp,
    dry_run: bool = False,
    verify: bool = False,
) -> PurgeReport:
    """
    Flush `origin` from every AMP cache, one cache after another.

    A failure on one cache is recorded on its result and the next cache is
    tried. Discovery failures and broken key material propagate.
    """
    report = PurgeReport(origin=origin, dry_run=dry_run)

    with client_scope(client) as c:
        if directory is None:
            directory = fetch_cache_directory(c)

        logger.info("Purging url=%s caches=%d dry_run=%s", origin, len(directory.caches), dry_run)

        for cache in directory.caches:
            result = CacheRefreshResult(cache_id=cache.id)
            report.results.append(result)
            try:
                result.cache_url = resolve_cache_url(origin, cache.update_cache_api_domain_suffix)
                result.refresh_url = build_refresh_url(result.cache_url, clock(), keys)
                if verify and not verify_refresh_url(result.refresh_url, keys):
                    raise RefreshURLError("Refresh URL does not verify against the public key")
                if dry_run:
                    continue
                result.status_code = dispatch_refresh(result.refresh_url, client=c)
            except PurgeError as e:
                result.error = e.message
                logger.warning("Purge failed cache=%s url=%s error=%s", cache.id, origin, e.message)
                continue

            if result.status_code == 200:
                logger.info("Purged cache=%s status=%s", cache.id, result.status_code)
            else:
                logger.warning("Cache refused purge cache=%s status=%s", cache.id, result.status_code)

    return report
