from django.http import Http404, HttpResponse
from django.urls import reverse

from . import serializers
from .builder import SitemapBuilder
from .conf import get_setting


def xml_response(xml_content):
    return HttpResponse(xml_content, content_type='application/xml')


def build_sitemap():
    return SitemapBuilder.quick_generate(
        models=get_setting('MODEL_COLLECTIONS'),
        static_pages=get_setting('STATIC_PAGES'),
    )


def sitemap_xml(request):
    return build_sitemap().response()


def sitemap_index(request):
    sitemap_count = len(build_sitemap().paginate())
    locations = [
        request.build_absolute_uri(reverse('sitemap_section', args=[i]))
        for i in range(1, sitemap_count + 1)
    ]
    return xml_response(serializers.generate_index(locations))


def sitemap_section(request, section):
    pages = build_sitemap().paginate()
    if not 1 <= section <= len(pages):
        raise Http404(f"No sitemap section {section}")
    return xml_response(serializers.generate(pages[section - 1]))
