from django.core.management.base import BaseCommand, CommandError

from src.amp_cache.selectors import fetch_cache_directory
from src.core.exceptions import DiscoveryError


class Command(BaseCommand):
    help = "List the AMP caches currently published in caches.json"

    def handle(self, *args, **opts):
        try:
            directory = fetch_cache_directory()
        except DiscoveryError as e:
            raise CommandError(e.message)

        for cache in directory.caches:
            self.stdout.write(
                f"{cache.id:<12} {cache.update_cache_api_domain_suffix:<28} {cache.name}"
            )
