import os

SETTINGS_BY_ENV = {
    "production": "config.django.production",
    "test": "config.django.test",
}


def use_settings_for_env() -> None:
    """Point DJANGO_SETTINGS_MODULE at the overlay matching DJANGO_ENV (development by default)."""
    env_name = os.environ.get("DJANGO_ENV", "development")
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", SETTINGS_BY_ENV.get(env_name, "config.django.base"))
