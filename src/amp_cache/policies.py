import hmac

from django.conf import settings
from ninja.security import HttpBearer


class PurgeTokenAuth(HttpBearer):
    """Bearer token shared with the publishing side. No token configured means no access."""

    def authenticate(self, request, token):
        expected = getattr(settings, "AMP_PURGE_API_TOKEN", "")
        if expected and hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
            return token
        return None
