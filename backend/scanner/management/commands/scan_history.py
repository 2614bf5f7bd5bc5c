from __future__ import annotations

from datetime import datetime, timezone

from django.core.management.base import BaseCommand

from scanner.domain_utils import registered_domain
from scanner.history import ScanHistoryStore


class Command(BaseCommand):
    help = 'List or clear locally recorded scan results.'

    def add_arguments(self, parser):
        parser.add_argument('--limit', type=int, default=20, help='Maximum number of results to list.')
        parser.add_argument('--domain', type=str, default='', help='Only list results for this registered domain.')
        parser.add_argument('--clear', action='store_true', help='Delete the recorded history.')

    def handle(self, *args, **options):
        store = ScanHistoryStore()

        if options['clear']:
            store.clear_history()
            self.stdout.write(self.style.SUCCESS('Scan history cleared.'))
            return

        limit = max(options['limit'], 1)
        target_domain = registered_domain(options['domain']) if options['domain'] else ''

        history = store.get_history()
        if target_domain:
            history = [item for item in history if registered_domain(str(item.get('url') or '')) == target_domain]

        if not history:
            self.stdout.write(self.style.SUCCESS('No scan results recorded.'))
            return

        for item in history[:limit]:
            timestamp = item.get('timestamp')
            scanned_at = (
                datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).isoformat()
                if isinstance(timestamp, (int, float))
                else 'unknown time'
            )
            risk = str(item.get('risk') or 'unknown').upper()
            self.stdout.write(f'{scanned_at}  {risk:<8}  {item.get("url", "")}')

        self.stdout.write(self.style.SUCCESS(f'{min(len(history), limit)} of {len(history)} result(s) shown.'))
