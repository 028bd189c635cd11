import json

from django.core.management.base import BaseCommand, CommandError

from src.amp_cache.http_client import client_scope
from src.amp_cache.selectors import fetch_cache_directory, get_key_material
from src.amp_cache.services import purge
from src.core.exceptions import ApplicationError


class Command(BaseCommand):
    help = "Flush URLs from every AMP cache with signed update-cache requests"

    def add_arguments(self, parser):
        parser.add_argument("urls", nargs="+", help="Origin URL(s) to flush.")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Build and print the signed refresh URLs without sending them.",
        )
        parser.add_argument(
            "--verify",
            action="store_true",
            help="Check every refresh URL against the public key before it is used.",
        )
        parser.add_argument("--json", action="store_true", help="Print JSON report.")

    def handle(self, *args, **opts):
        dry_run: bool = opts["dry_run"]
        as_json: bool = opts["json"]

        reports = []
        try:
            keys = get_key_material()
            with client_scope() as client:
                directory = fetch_cache_directory(client)
                for url in opts["urls"]:
                    reports.append(
                        purge(
                            url,
                            keys=keys,
                            directory=directory,
                            client=client,
                            dry_run=dry_run,
                            verify=opts["verify"],
                        )
                    )
        except ApplicationError as e:
            raise CommandError(e.message)

        if as_json:
            self.stdout.write(json.dumps([r.as_dict() for r in reports], ensure_ascii=False, indent=2))
        else:
            for report in reports:
                self._write_report(report, dry_run)

        failed = sum(len(r.failed) for r in reports)
        if failed:
            raise CommandError(f"{failed} cache purge(s) failed", returncode=1)

    def _write_report(self, report, dry_run: bool) -> None:
        self.stdout.write(self.style.NOTICE(f"URL: {report.origin}"))
        for r in report.results:
            if r.error:
                self.stderr.write(self.style.ERROR(f"  {r.cache_id:<12} error: {r.error}"))
            elif dry_run:
                self.stdout.write(f"  {r.cache_id:<12} {r.refresh_url}")
            elif r.ok:
                self.stdout.write(self.style.SUCCESS(f"  {r.cache_id:<12} Status: {r.status_code}"))
            else:
                self.stderr.write(self.style.WARNING(f"  {r.cache_id:<12} Status: {r.status_code}"))
