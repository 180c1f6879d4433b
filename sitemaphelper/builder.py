# sitemaphelper/builder.py
import logging
import os

from django.core.exceptions import ValidationError

from . import serializers
from .conf import get_setting
from .model_collections import ModelCollection
from .records import (
    UrlRecord, absolute_url_re, clean_change_frequency, clean_priority,
    normalize_location as normalize_relative_location,
)
from .registry import NotRegistered, site
from .routes import filter_routes, get_route_table
from .utils import write_xml

logger = logging.getLogger(__name__)

RELATIVE = 'relative'
ABSOLUTE = 'absolute'
URL_POLICIES = (RELATIVE, ABSOLUTE)


def normalize_location(location, policy=RELATIVE, base_url=None):
    """
    Trim the location and make sure it is absolute or root-relative.

    With the "absolute" policy root-relative paths are joined to base_url.
    """
    location = normalize_relative_location(location)
    if absolute_url_re.match(location):
        return location
    if policy == ABSOLUTE:
        return base_url.rstrip('/') + location
    return location


class SitemapBuilder:
    """
    Ordered collection of sitemap records.

    Records are only appended; defaults (priority, change frequency) are
    resolved when a url is added, so changing a default later does not touch
    the records already in the builder. One builder per generated sitemap.
    """

    def __init__(self, default_priority=None, default_change_freq=None, excluded_routes=None,
                 url_policy=None, base_url=None, max_urls=None):
        self._urls = []
        self.default_priority = None
        self.default_change_freq = None
        self.excluded_routes = []
        self.url_policy = RELATIVE
        self.base_url = None

        self.set_default_priority(
            get_setting('DEFAULT_PRIORITY') if default_priority is None else default_priority)
        self.set_default_change_freq(
            get_setting('DEFAULT_CHANGE_FREQ') if default_change_freq is None else default_change_freq)
        self.set_excluded_routes(
            get_setting('EXCLUDED_ROUTES') if excluded_routes is None else excluded_routes)
        self.set_url_policy(
            url_policy or get_setting('URL_POLICY'),
            base_url or get_setting('BASE_URL'))
        self.max_urls = max_urls or get_setting('MAX_URLS_PER_SITEMAP')

    def __repr__(self):
        return f"<SitemapBuilder: {len(self._urls)} urls>"

    @classmethod
    def create_default(cls, **kwargs):
        """Builder pre-populated with the STATIC_PAGES setting."""
        return cls(**kwargs).add_static_pages(get_setting('STATIC_PAGES'))

    @classmethod
    def quick_generate(cls, models=None, static_pages=None, include_routes=None, **kwargs):
        """One-shot builder: static pages, then model collections, then public routes."""
        builder = cls(**kwargs)

        if static_pages:
            builder.add_static_pages(static_pages)

        if models:
            builder.add_model_collections(models)

        if include_routes is None:
            include_routes = get_setting('INCLUDE_ROUTES')
        if include_routes:
            builder.add_routes()

        return builder

    # defaults

    def set_default_priority(self, priority):
        self.default_priority = clean_priority(priority)
        return self

    def set_default_change_freq(self, change_freq):
        self.default_change_freq = clean_change_frequency(change_freq)
        return self

    def set_excluded_routes(self, patterns):
        self.excluded_routes = list(patterns)
        return self

    def set_url_policy(self, policy, base_url=None):
        if policy not in URL_POLICIES:
            raise ValidationError(
                'Unknown url policy %(policy)s', code='invalid_policy', params={'policy': policy})
        if policy == ABSOLUTE and not base_url:
            raise ValidationError(
                'The absolute url policy needs a base url', code='missing_base_url')
        self.url_policy = policy
        self.base_url = base_url
        return self

    # adding urls

    def add_url(self, location, last_modified=None, change_freq=None, priority=None):
        record = UrlRecord(
            normalize_location(location, self.url_policy, self.base_url),
            last_modified=last_modified,
            change_frequency=self.default_change_freq if change_freq is None else change_freq,
            priority=self.default_priority if priority is None else priority,
        )
        self._urls.append(record)
        return self

    def add_static_pages(self, pages):
        for page in pages:
            if not page.get('url'):
                raise ValidationError('Static page %(page)r has no url', code='missing_url',
                                      params={'page': page})
            self.add_url(
                page['url'],
                page.get('last_modified', page.get('lastmod')),
                page.get('change_freq'),
                page.get('priority'),
            )
        return self

    def add_models(self, collection):
        try:
            entries = list(collection.entries())
        except LookupError as e:
            logger.warning("Skipping model collection %r: %s", collection, e)
            return self

        for entry in entries:
            self.add_url(
                entry['location'],
                entry['last_modified'],
                entry['change_frequency'],
                entry['priority'],
            )
        logger.debug("Added %d urls from %r", len(entries), collection)
        return self

    def add_model_collection(self, model, route_name, change_freq='monthly', priority=0.7,
                             where=None, slug_field=None):
        return self.add_models(ModelCollection(
            model, route_name,
            change_freq=change_freq,
            priority=priority,
            where=where,
            slug_field=slug_field,
        ))

    def add_registered(self, tag, registry=None):
        registry = site if registry is None else registry
        try:
            collection = registry.get(tag)
        except NotRegistered:
            logger.warning("No model collection registered as %r, skipping", tag)
            return self
        return self.add_models(collection)

    def add_model_collections(self, collections):
        """Add collections given as dicts, ModelCollection objects or registered tags."""
        for collection in collections:
            if isinstance(collection, str):
                self.add_registered(collection)
            elif isinstance(collection, ModelCollection):
                self.add_models(collection)
            else:
                self.add_models(ModelCollection.from_dict(collection))
        return self

    def add_routes(self, excluded=None, routes=None):
        """Add every public route of the route table with the builder defaults."""
        if routes is None:
            routes = get_route_table()
        excluded = self.excluded_routes if excluded is None else excluded

        included = filter_routes(routes, excluded)
        for route in included:
            # the root route is registered as an empty path
            self.add_url(route.uri or '/')
        logger.debug("Added %d routes", len(included))
        return self

    # reading

    def clear(self):
        self._urls = []
        return self

    def get_urls(self):
        return tuple(self._urls)

    def count(self):
        return len(self._urls)

    def is_empty(self):
        return not self._urls

    def __len__(self):
        return len(self._urls)

    def __iter__(self):
        return iter(tuple(self._urls))

    def paginate(self, per_page=None):
        return serializers.paginate(self._urls, per_page or self.max_urls)

    # output

    def generate(self):
        return serializers.generate(self._urls)

    def generate_index(self, sitemaps, lastmod=None):
        return serializers.generate_index(sitemaps, lastmod)

    def response(self):
        from .views import xml_response
        return xml_response(self.generate())

    def save(self, file_path):
        return write_xml(file_path, self.generate())

    def save_pages(self, directory, base_url, filename='sitemap.xml'):
        """
        Save the sitemap under directory. When there are more urls than fit in
        one sitemap, write sitemap-1.xml ... sitemap-N.xml and an index named
        filename that points at them through base_url.
        """
        pages = self.paginate()
        if len(pages) == 1:
            return write_xml(os.path.join(directory, filename), self.generate())

        locations = []
        for number, page in enumerate(pages, start=1):
            page_name = f'sitemap-{number}.xml'
            if not write_xml(os.path.join(directory, page_name), serializers.generate(page)):
                return False
            locations.append(f"{base_url.rstrip('/')}/{page_name}")
        return write_xml(os.path.join(directory, filename), self.generate_index(locations))
