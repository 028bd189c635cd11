from urllib.parse import urlsplit

from ninja import Schema
from pydantic import ConfigDict, Field, field_validator


class CacheDescriptor(Schema):
    """One entry of caches.json. Only the update-cache suffix drives addressing."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    docs: str = ""
    cache_domain: str = Field(default="", alias="cacheDomain")
    update_cache_api_domain_suffix: str = Field(alias="updateCacheApiDomainSuffix")


class CacheDirectory(Schema):
    model_config = ConfigDict(extra="ignore")

    caches: list[CacheDescriptor]


class PurgePayload(Schema):
    url: str

    @field_validator("url")
    @classmethod
    def _validate_url(cls, v: str) -> str:
        v = (v or "").strip()
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("url must be an absolute http(s) URL")
        return v
