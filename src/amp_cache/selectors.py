import logging
from functools import lru_cache

import httpx
from django.conf import settings

from src.amp_cache.http_client import client_scope
from src.amp_cache.schemas import CacheDirectory
from src.core.exceptions import DiscoveryError, KeyMaterialError
from src.crypto.keys import KeyMaterial, load_key_material

logger = logging.getLogger(__name__)

DEFAULT_CACHES_JSON_URL = "https://cdn.ampproject.org/caches.json"


def fetch_cache_directory(client: httpx.Client | None = None) -> CacheDirectory:
    """
    GET the published list of caches. Anything short of a 200 with a well-formed
    document is fatal for the purge run: no partial directory is returned.
    """
    url = getattr(settings, "AMP_CACHES_JSON_URL", "") or DEFAULT_CACHES_JSON_URL
    with client_scope(client) as c:
        try:
            resp = c.get(url, follow_redirects=True)
        except httpx.HTTPError as e:
            logger.error("Cache discovery request failed url=%s error=%s", url, e)
            raise DiscoveryError(f"Cache discovery request failed: {e}", extra={"url": url}) from e

    if resp.status_code != 200:
        logger.error("Cache discovery returned status=%s url=%s", resp.status_code, url)
        raise DiscoveryError(
            f"status code error: {resp.status_code} {resp.reason_phrase}",
            extra={"url": url, "status_code": resp.status_code},
        )

    # json decoding and schema errors are both ValueError subclasses
    try:
        directory = CacheDirectory.model_validate(resp.json())
    except ValueError as e:
        logger.error("Cache discovery payload rejected url=%s error=%s", url, e)
        raise DiscoveryError(f"Malformed cache directory: {e}", extra={"url": url}) from e

    logger.info("Discovered %d AMP caches", len(directory.caches))
    return directory


@lru_cache(maxsize=1)
def get_key_material() -> KeyMaterial:
    """
    Process-wide signing keys. PEM files take precedence; inline PEM settings
    (usually resolved from OpenBao) are the fallback.
    """
    private_file = getattr(settings, "AMP_PRIVATE_KEY_FILE", "")
    public_file = getattr(settings, "AMP_PUBLIC_KEY_FILE", "")
    if private_file or public_file:
        return load_key_material(private_file, public_file)

    private_pem = getattr(settings, "AMP_PRIVATE_KEY_PEM", "")
    public_pem = getattr(settings, "AMP_PUBLIC_KEY_PEM", "")
    if private_pem and public_pem:
        return KeyMaterial.from_pem(private_pem.encode("utf-8"), public_pem.encode("utf-8"))

    raise KeyMaterialError(
        "No signing keys configured (set PRIVATEKEY_FILE and PUBLICKEY_FILE)"
    )
