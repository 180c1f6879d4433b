"""
XML sitemaps (sitemaps.org protocol) for Django sites.

Urls come from static page lists, the URLconf and model querysets; the
result is returned as a string, saved to a file or served as a response:

    from sitemaphelper import sitemap

    xml = (sitemap()
           .add_static_pages([{'url': '/', 'priority': 1.0, 'change_freq': 'daily'}])
           .add_model_collection('blog.Article', 'article_detail', slug_field='slug')
           .add_routes()
           .generate())
"""
from .builder import SitemapBuilder
from .model_collections import ModelCollection
from .records import CHANGE_FREQUENCIES, UrlRecord
from .registry import site
from .shortcuts import sitemap, sitemap_quick

__version__ = '1.0.0'

__all__ = [
    'SitemapBuilder',
    'ModelCollection',
    'UrlRecord',
    'CHANGE_FREQUENCIES',
    'site',
    'sitemap',
    'sitemap_quick',
]
