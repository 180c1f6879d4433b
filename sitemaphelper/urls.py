from django.urls import path

from .views import sitemap_index, sitemap_section, sitemap_xml

urlpatterns = [
    path('sitemap.xml', sitemap_xml, name='sitemap_xml'),
    path('sitemap-index.xml', sitemap_index, name='sitemap_index'),
    path('sitemap-<int:section>.xml', sitemap_section, name='sitemap_section'),
]
