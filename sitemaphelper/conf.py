# sitemaphelper/conf.py
# Settings are read from settings.SITEMAP_HELPER, e.g.
#
#   SITEMAP_HELPER = {
#       'DEFAULT_CHANGE_FREQ': 'weekly',
#       'URL_POLICY': 'absolute',
#       'MODEL_COLLECTIONS': [
#           {'model': 'blog.Article', 'route': 'article_detail', 'slug_field': 'slug'},
#       ],
#   }
from django.conf import settings

default_excluded_routes = [
    'admin/*', 'api/*', 'auth/*', 'password/*', 'email/*',
    'verification/*', 'sanctum/*', 'telescope/*', 'horizon/*',
    'log-viewer/*', 'debugbar/*', 'broadcasting/*', 'oauth/*', 'socialite/*',
]

defaults = {
    'DEFAULT_PRIORITY': 0.5,
    'DEFAULT_CHANGE_FREQ': 'monthly',
    'EXCLUDED_ROUTES': default_excluded_routes,
    'URL_POLICY': 'relative',
    'BASE_URL': None,
    'MAX_URLS_PER_SITEMAP': 50000,
    'STATIC_PAGES': [
        {'url': '/', 'priority': 1.0, 'change_freq': 'daily'},
    ],
    'MODEL_COLLECTIONS': [],
    'INCLUDE_ROUTES': True,
}


def get_setting(name):
    user_settings = getattr(settings, 'SITEMAP_HELPER', None) or {}
    if name in user_settings:
        return user_settings[name]
    if name == 'BASE_URL':
        # Same setting the rest of the site uses to build absolute links
        return getattr(settings, 'SITE_URL', None)
    value = defaults[name]
    if isinstance(value, list):
        return list(value)
    return value
