# sitemaphelper/management/commands/generate_sitemap.py
# Run from cron to keep a static copy of the sitemap, e.g. with django-crontab:
#   CRONJOBS = [('0 3 * * *', 'django.core.management.call_command', ['generate_sitemap'])]
import os

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from sitemaphelper.builder import SitemapBuilder
from sitemaphelper.conf import get_setting


class Command(BaseCommand):
    help = 'Generate sitemap.xml from the configured static pages, model collections and routes'

    def add_arguments(self, parser):
        parser.add_argument('path', nargs='?',
                            help='Output file (default: STATIC_ROOT/sitemap.xml)')
        parser.add_argument('--no-routes', action='store_true',
                            help='Do not add the public routes of the URLconf')
        parser.add_argument('--base-url',
                            help='Make every location absolute against this url')
        parser.add_argument('--split', action='store_true',
                            help='Write sitemap-N.xml pages and an index when there are too many urls')

    def handle(self, *args, **options):
        path = options['path'] or os.path.join(getattr(settings, 'STATIC_ROOT', None) or '.', 'sitemap.xml')
        base_url = options['base_url']

        builder_options = {}
        if base_url:
            builder_options = {'url_policy': 'absolute', 'base_url': base_url}

        builder = SitemapBuilder.quick_generate(
            models=get_setting('MODEL_COLLECTIONS'),
            static_pages=get_setting('STATIC_PAGES'),
            include_routes=False if options['no_routes'] else None,
            **builder_options
        )
        self.stdout.write(f"Collected {builder.count()} urls")

        if options['split']:
            index_base = base_url or builder.base_url
            if not index_base:
                raise CommandError('--split needs --base-url or SITE_URL to point the index at the pages')
            saved = builder.save_pages(os.path.dirname(path) or '.', index_base, os.path.basename(path))
        else:
            saved = builder.save(path)

        if not saved:
            self.stdout.write(self.style.ERROR(f'Failed to write {path}'))
            raise CommandError(f'Could not write sitemap to {path}')

        self.stdout.write(self.style.SUCCESS(f'Successfully wrote {path}'))
