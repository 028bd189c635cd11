from config.env import BASE_DIR, env

# ENV_FILE=.env.backend in deployments
env.read_env(str(BASE_DIR.path(env("ENV_FILE", default=".env"))))

SECRET_KEY = env("DJANGO_SECRET_KEY", default="insecure-dev-key-change-me")

DEBUG = env.bool("DEBUG", default=False)

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.sessions",
    "ninja_extra",
    "src.amp_cache.apps.AmpCacheConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    # throttles key on request.user
    "django.contrib.auth.middleware.AuthenticationMiddleware",
]

SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# The purger keeps no state of its own
DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR.path('db.sqlite3')}"),
}
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

CACHES = {
    "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"},
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

NINJA_EXTRA = {
    "THROTTLE_RATES": {
        "sustained": env("PURGE_THROTTLE_SUSTAINED", default="600/hour"),
    },
}

from config.settings.amp_cache import *  # noqa
from config.settings.logging import *  # noqa
