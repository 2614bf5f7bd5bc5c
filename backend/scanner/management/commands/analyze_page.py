from __future__ import annotations

import json
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from scanner.ai.providers import resolve_provider_name
from scanner.ai.types import RiskLevel, WebsiteContent
from scanner.history import ScanHistoryStore
from scanner.relay import RelayClient
from scanner.services import analyze_website


class Command(BaseCommand):
    help = 'Ask the configured AI provider whether a page looks like a scam.'

    def add_arguments(self, parser):
        parser.add_argument('--url', type=str, required=True, help='Page URL.')
        parser.add_argument('--title', type=str, default='', help='Page title.')
        parser.add_argument('--text', type=str, default='', help='Extracted page text.')
        parser.add_argument('--text-file', type=str, default='', help='Read the page text from this file.')
        parser.add_argument('--link', action='append', default=[], help='Link found on the page (repeatable).')
        parser.add_argument('--provider', type=str, default='', help='AI provider; defaults to the stored preference.')
        parser.add_argument('--remember-provider', action='store_true', help='Store --provider as the preference.')
        parser.add_argument(
            '--backend-url',
            type=str,
            default=None,
            help='Relay through a running backend instead of calling the provider in-process.',
        )
        parser.add_argument('--no-history', action='store_true', help='Do not record the result.')

    def handle(self, *args, **options):
        url = (options['url'] or '').strip()
        text = options['text'] or ''
        if options['text_file']:
            try:
                text = Path(options['text_file']).read_text(encoding='utf-8')
            except OSError as exc:
                raise CommandError(f'Could not read text file: {exc}') from exc
        if not url or not text.strip():
            raise CommandError('Both --url and page text (--text or --text-file) are required.')

        store = ScanHistoryStore()
        provider = options['provider'] or store.get_config().get('provider', '')
        if options['remember_provider'] and options['provider']:
            store.save_config({'provider': resolve_provider_name(options['provider'])})

        content = WebsiteContent(
            url=url,
            text=text,
            title=options['title'] or '',
            links=tuple(options['link'] or ()),
        )

        backend_url = options['backend_url']
        if backend_url is None:
            backend_url = getattr(settings, 'UMBRELLA_BACKEND_URL', '')

        if backend_url:
            relay = RelayClient(
                backend_url,
                provider=provider,
                api_token=getattr(settings, 'API_AUTH_TOKEN', ''),
                timeout=getattr(settings, 'UMBRELLA_RELAY_TIMEOUT_SECONDS', 30),
            )
            record = relay.analyze(content)
        else:
            record = analyze_website(content, provider_name=provider)

        if not options['no_history']:
            store.save_result(record)

        self.stdout.write(json.dumps(record, indent=2))
        badge_text, badge_colour = RiskLevel.coerce(record.get('risk')).badge
        style = self.style.SUCCESS if badge_text in {'SAFE', 'LOW'} else self.style.WARNING
        self.stdout.write(style(f'[{badge_text}] {url} (badge {badge_colour})'))
