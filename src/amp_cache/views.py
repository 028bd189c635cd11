import logging

from django.http import HttpResponse
from django.views.decorators.http import require_GET

from src.amp_cache.selectors import get_key_material
from src.core.exceptions import KeyMaterialError

logger = logging.getLogger(__name__)


@require_GET
def amp_public_key(request):
    """
    /.well-known/amphtml/apikey.pub
    AMP caches fetch the origin's public key here to check update-cache signatures.
    """
    try:
        keys = get_key_material()
    except KeyMaterialError as e:
        logger.error("Public key unavailable: %s", e.message)
        return HttpResponse("Public key unavailable", status=503, content_type="text/plain")
    return HttpResponse(keys.public_key_pem(), content_type="text/plain")
