from ninja_extra import api_controller, route
from ninja_extra.throttling import DynamicRateThrottle

from src.amp_cache.cache_urls import validate_origin
from src.amp_cache.policies import PurgeTokenAuth
from src.amp_cache.schemas import PurgePayload
from src.amp_cache.selectors import fetch_cache_directory, get_key_material
from src.amp_cache.services import purge
from src.core.apis import BaseAPIController


@api_controller("/amp-cache", tags=["AMP Cache"], auth=PurgeTokenAuth(),
                throttle=[DynamicRateThrottle(scope="sustained")])
class AmpCacheController(BaseAPIController):
    @route.post("/purge")
    def purge_url(self, request, payload: PurgePayload):
        """
        Flush one URL from every AMP cache.
        200 when every cache accepted the request, 207 when at least one did not.
        """
        # a bad origin fails the same way for every cache; reject it up front
        validate_origin(payload.url)
        report = purge(payload.url, keys=get_key_material())
        if report.ok:
            return self.create_response(message="Purged", data=report.as_dict(), status_code=200)
        return self.create_response(
            message=f"{len(report.failed)} of {len(report.results)} caches did not accept the purge",
            data=report.as_dict(),
            status_code=207,
            code="PARTIAL_PURGE",
        )

    @route.get("/caches")
    def list_caches(self, request):
        directory = fetch_cache_directory()
        return self.create_response(
            message="OK",
            data={"caches": [c.model_dump() for c in directory.caches]},
            status_code=200,
        )
