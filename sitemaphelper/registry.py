# sitemaphelper/registry.py
from .model_collections import ModelCollection


class AlreadyRegistered(Exception):
    pass


class NotRegistered(Exception):
    pass


class SitemapRegistry:
    """
    Explicit mapping of a tag to the ModelCollection that lists it.

    Apps register their collections once, usually from AppConfig.ready():

        from sitemaphelper.registry import site
        site.register('articles', ModelCollection(Article, 'article_detail', slug_field='slug'))

    and the builder looks them up by tag with add_registered('articles').
    """

    def __init__(self):
        self._registry = {}

    def register(self, tag, collection=None, **options):
        if tag in self._registry:
            raise AlreadyRegistered(f"{tag!r} is already registered")
        if collection is None:
            collection = ModelCollection(**options)
        self._registry[tag] = collection
        return collection

    def unregister(self, tag):
        if tag not in self._registry:
            raise NotRegistered(f"{tag!r} is not registered")
        del self._registry[tag]

    def get(self, tag):
        try:
            return self._registry[tag]
        except KeyError:
            raise NotRegistered(f"{tag!r} is not registered")

    def __contains__(self, tag):
        return tag in self._registry

    def __iter__(self):
        return iter(self._registry)

    def __len__(self):
        return len(self._registry)


site = SitemapRegistry()
