# sitemaphelper/serializers.py
import html

from django.utils import timezone

SITEMAP_NAMESPACE = 'http://www.sitemaps.org/schemas/sitemap/0.9'
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def escape(value):
    return html.escape(str(value), quote=True)


def generate(records):
    """Build a <urlset> document, one <url> per record, in the given order."""
    xml_content = XML_DECLARATION + '\n'
    xml_content += f'<urlset xmlns="{SITEMAP_NAMESPACE}">\n'

    for record in records:
        xml_content += '  <url>\n'
        xml_content += f'    <loc>{escape(record.location)}</loc>\n'
        if record.last_modified:
            xml_content += f'    <lastmod>{escape(record.last_modified)}</lastmod>\n'
        if record.change_frequency:
            xml_content += f'    <changefreq>{escape(record.change_frequency)}</changefreq>\n'
        if record.priority is not None:
            xml_content += f'    <priority>{record.formatted_priority}</priority>\n'
        xml_content += '  </url>\n'

    xml_content += '</urlset>'

    return xml_content


def generate_index(locations, lastmod=None):
    """Build a <sitemapindex> document; every entry is stamped with the generation time."""
    if lastmod is None:
        lastmod = timezone.now().isoformat()
    elif not isinstance(lastmod, str):
        lastmod = lastmod.isoformat()

    xml_content = XML_DECLARATION + '\n'
    xml_content += f'<sitemapindex xmlns="{SITEMAP_NAMESPACE}">\n'

    for location in locations:
        xml_content += '  <sitemap>\n'
        xml_content += f'    <loc>{escape(location)}</loc>\n'
        xml_content += f'    <lastmod>{escape(lastmod)}</lastmod>\n'
        xml_content += '  </sitemap>\n'

    xml_content += '</sitemapindex>'

    return xml_content


def paginate(records, per_page):
    records = tuple(records)
    if per_page < 1:
        raise ValueError('per_page must be at least 1')
    if not records:
        return [()]
    return [records[start:start + per_page] for start in range(0, len(records), per_page)]
