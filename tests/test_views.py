import os
import tempfile
import xml.etree.ElementTree as ET
from http import HTTPStatus
from io import StringIO

from django.core.management import CommandError, call_command
from django.test import TestCase, override_settings

from .models import Article

NS = '{http://www.sitemaps.org/schemas/sitemap/0.9}'

FIVE_PAGES = [{'url': f'/page-{i}', 'priority': 0.5} for i in range(1, 6)]


def locations(content):
    if isinstance(content, str):
        content = content.encode('utf-8')
    return [loc.text for loc in ET.fromstring(content).iter(f'{NS}loc')]


class SitemapViewTest(TestCase):
    @override_settings(SITEMAP_HELPER={
        'INCLUDE_ROUTES': False,
        'MODEL_COLLECTIONS': [{'model': 'tests.Article', 'route': 'article_detail', 'slug_field': 'slug'}],
    })
    def test_sitemap_xml(self):
        Article.objects.create(title='Hello', slug='hello')
        response = self.client.get('/sitemap.xml')

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response['content-type'], 'application/xml')
        self.assertEqual(locations(response.content), ['/', '/articles/hello/'])

    def test_sitemap_xml_lists_public_routes(self):
        response = self.client.get('/sitemap.xml')
        listed = locations(response.content)

        self.assertIn('/about/', listed)
        self.assertIn('/sitemap.xml', listed)
        self.assertNotIn('/admin/dashboard/', listed)
        self.assertFalse(any('<' in loc for loc in listed))

    @override_settings(SITEMAP_HELPER={
        'INCLUDE_ROUTES': False, 'STATIC_PAGES': FIVE_PAGES, 'MAX_URLS_PER_SITEMAP': 2,
    })
    def test_sitemap_index(self):
        response = self.client.get('/sitemap-index.xml')

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response['content-type'], 'application/xml')
        self.assertEqual(locations(response.content), [
            'http://testserver/sitemap-1.xml',
            'http://testserver/sitemap-2.xml',
            'http://testserver/sitemap-3.xml',
        ])

    @override_settings(SITEMAP_HELPER={
        'INCLUDE_ROUTES': False, 'STATIC_PAGES': FIVE_PAGES, 'MAX_URLS_PER_SITEMAP': 2,
    })
    def test_sitemap_section(self):
        self.assertEqual(locations(self.client.get('/sitemap-2.xml').content), ['/page-3', '/page-4'])
        self.assertEqual(locations(self.client.get('/sitemap-3.xml').content), ['/page-5'])
        self.assertEqual(self.client.get('/sitemap-4.xml').status_code, HTTPStatus.NOT_FOUND)
        self.assertEqual(self.client.get('/sitemap-0.xml').status_code, HTTPStatus.NOT_FOUND)


@override_settings(SITEMAP_HELPER={'INCLUDE_ROUTES': False, 'STATIC_PAGES': FIVE_PAGES,
                                   'MAX_URLS_PER_SITEMAP': 2})
class GenerateSitemapCommandTest(TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = tmp.name

    def test_writes_sitemap(self):
        path = os.path.join(self.tmp, 'out', 'sitemap.xml')
        out = StringIO()
        call_command('generate_sitemap', path, stdout=out)

        self.assertIn('Collected 5 urls', out.getvalue())
        self.assertIn('Successfully wrote', out.getvalue())
        with open(path, encoding='utf-8') as f:
            self.assertEqual(locations(f.read()), [page['url'] for page in FIVE_PAGES])

    def test_base_url_makes_locations_absolute(self):
        path = os.path.join(self.tmp, 'sitemap.xml')
        call_command('generate_sitemap', path, '--base-url', 'https://example.org', stdout=StringIO())

        with open(path, encoding='utf-8') as f:
            self.assertEqual(locations(f.read())[0], 'https://example.org/page-1')

    def test_split(self):
        path = os.path.join(self.tmp, 'sitemap.xml')
        call_command('generate_sitemap', path, '--split', stdout=StringIO())

        self.assertEqual(sorted(os.listdir(self.tmp)),
                         ['sitemap-1.xml', 'sitemap-2.xml', 'sitemap-3.xml', 'sitemap.xml'])
        with open(path, encoding='utf-8') as f:
            self.assertEqual(locations(f.read())[0], 'https://example.com/sitemap-1.xml')

    @override_settings(SITE_URL=None)
    def test_split_needs_base_url(self):
        with self.assertRaises(CommandError):
            call_command('generate_sitemap', os.path.join(self.tmp, 'sitemap.xml'), '--split',
                         stdout=StringIO())

    def test_write_failure(self):
        blocker = os.path.join(self.tmp, 'blocker')
        with open(blocker, 'w') as f:
            f.write('')

        with self.assertRaises(CommandError):
            call_command('generate_sitemap', os.path.join(blocker, 'sitemap.xml'),
                         stdout=StringIO(), stderr=StringIO())

    @override_settings(SITEMAP_HELPER={'STATIC_PAGES': []})
    def test_includes_public_routes(self):
        path = os.path.join(self.tmp, 'sitemap.xml')
        call_command('generate_sitemap', path, stdout=StringIO())

        with open(path, encoding='utf-8') as f:
            listed = locations(f.read())
        self.assertEqual(listed[0], '/')
        self.assertIn('/about/', listed)
        self.assertNotIn('/old-about/', listed)
        self.assertNotIn('/contact/', listed)
