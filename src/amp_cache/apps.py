from django.apps import AppConfig


class AmpCacheConfig(AppConfig):
    name = 'src.amp_cache'
    verbose_name = "AMP cache purge"
