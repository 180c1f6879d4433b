from django.apps import AppConfig


class SitemapHelperConfig(AppConfig):
    name = 'sitemaphelper'
    verbose_name = 'Sitemap helper'
