from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-secret-key"

DATABASES = {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": ":memory:"}}

AMP_CACHES_JSON_URL = "https://cdn.ampproject.test/caches.json"
AMP_PRIVATE_KEY_FILE = ""
AMP_PUBLIC_KEY_FILE = ""
AMP_PRIVATE_KEY_PEM = ""
AMP_PUBLIC_KEY_PEM = ""
AMP_PURGE_API_TOKEN = "test-purge-token"

NINJA_EXTRA = {"THROTTLE_RATES": {"sustained": "10000/hour"}}
