# sitemaphelper/routes.py
# Route table adapter: walks the Django URLconf and keeps the routes that can
# be listed in a sitemap as they are (readable with GET, no parameters, not
# excluded by a glob pattern).
import logging
from collections import namedtuple
from fnmatch import fnmatchcase

from django.core.exceptions import ImproperlyConfigured
from django.urls import URLResolver, get_resolver
from django.urls.resolvers import RegexPattern, RoutePattern
from django.views.generic import RedirectView

from .conf import default_excluded_routes

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_ROUTES = tuple(default_excluded_routes)
READ_METHODS = ('GET', 'HEAD')
REGEX_METACHARACTERS = set('.^$*+?{}[]|()')
PARAMETER_MARKERS = ('{', '<')

Route = namedtuple('Route', ['uri', 'methods', 'has_parameters'])


def should_include_route(route, excluded=DEFAULT_EXCLUDED_ROUTES):
    if not any(method in route.methods for method in READ_METHODS):
        return False

    # Skip routes with parameters
    if route.has_parameters or any(marker in route.uri for marker in PARAMETER_MARKERS):
        return False

    # Check excluded patterns
    for pattern in excluded:
        if fnmatchcase(route.uri, pattern):
            return False

    return True


def filter_routes(routes, excluded=DEFAULT_EXCLUDED_ROUTES):
    return [route for route in routes if should_include_route(route, excluded)]


def regex_to_uri(regex):
    """Turn an anchored regex without groups back into a plain path.

    Returns (uri, dynamic); dynamic is True when the regex matches more than
    one literal path.
    """
    regex = regex.lstrip('^')
    if regex.endswith('\\Z'):
        regex = regex[:-2]
    elif regex.endswith('$') and not regex.endswith('\\$'):
        regex = regex[:-1]

    uri = ''
    escaped = False
    for char in regex:
        if escaped:
            if char.isalnum():
                # \d, \w, \s ...
                return regex, True
            uri += char
            escaped = False
        elif char == '\\':
            escaped = True
        elif char in REGEX_METACHARACTERS:
            return regex, True
        else:
            uri += char
    return uri, escaped


def describe_pattern(pattern):
    if isinstance(pattern, RoutePattern):
        return str(pattern), bool(pattern.converters)
    if isinstance(pattern, RegexPattern):
        uri, dynamic = regex_to_uri(str(pattern))
        return uri, dynamic or pattern.regex.groups > 0
    # LocalePrefixPattern and friends render to a literal prefix
    return str(pattern), False


def view_methods(callback):
    view_class = getattr(callback, 'view_class', None)
    if view_class is None:
        # Function views do not advertise their methods
        return frozenset(READ_METHODS)
    if issubclass(view_class, RedirectView):
        # Redirects are not pages of their own
        return frozenset()
    methods = {name.upper() for name in view_class.http_method_names if hasattr(view_class, name)}
    if 'GET' in methods:
        methods.add('HEAD')
    return frozenset(methods)


def iter_url_patterns(url_patterns, prefix='', dynamic=False):
    for entry in url_patterns:
        part, part_dynamic = describe_pattern(entry.pattern)
        uri = prefix + part
        if isinstance(entry, URLResolver):
            yield from iter_url_patterns(entry.url_patterns, uri, dynamic or part_dynamic)
        else:
            yield Route(uri, view_methods(entry.callback), dynamic or part_dynamic)


def iter_django_routes(urlconf=None):
    return iter_url_patterns(get_resolver(urlconf).url_patterns)


def get_route_table(urlconf=None):
    """All routes of the URLconf, or an empty list when there is no usable URLconf."""
    try:
        routes = list(iter_django_routes(urlconf))
    except (ImproperlyConfigured, ImportError, AttributeError) as e:
        logger.warning("No route table available, skipping routes: %s", e)
        return []
    logger.debug("Route table has %d routes", len(routes))
    return routes
