from .builder import SitemapBuilder


def sitemap(**kwargs):
    """A new, empty SitemapBuilder."""
    return SitemapBuilder(**kwargs)


def sitemap_quick(models=None, static_pages=None, **kwargs):
    """Builder filled with static pages, model collections and public routes."""
    return SitemapBuilder.quick_generate(models=models, static_pages=static_pages, **kwargs)
