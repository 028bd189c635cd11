from ninja_extra import NinjaExtraAPI

from src.api.exception_handler import attach_exception_handlers
from src.amp_cache.apis import AmpCacheController


api = NinjaExtraAPI(title="AMP Cache Purger API", version="1.0.0", csrf=False)

# Register exception handlers in one place
attach_exception_handlers(api)

api.register_controllers(
    AmpCacheController,
)
