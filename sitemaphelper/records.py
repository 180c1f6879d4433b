# sitemaphelper/records.py
import re
from datetime import date, datetime
from decimal import Decimal
from numbers import Real

from django.core.exceptions import ValidationError

CHANGE_FREQUENCY_CHOICES = [
    ('always', 'Always'),
    ('hourly', 'Hourly'),
    ('daily', 'Daily'),
    ('weekly', 'Weekly'),
    ('monthly', 'Monthly'),
    ('yearly', 'Yearly'),
    ('never', 'Never'),
]
CHANGE_FREQUENCIES = [value for value, label in CHANGE_FREQUENCY_CHOICES]

absolute_url_re = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*://')


def normalize_location(location):
    """Trim the location and prefix bare paths with a slash; empty locations are rejected."""
    if location is None:
        raise ValidationError('Sitemap location cannot be empty', code='empty_location')
    location = str(location).strip()
    if not location:
        raise ValidationError('Sitemap location cannot be empty', code='empty_location')
    if absolute_url_re.match(location) or location.startswith('/'):
        return location
    return '/' + location


def clean_change_frequency(value):
    if value is None:
        return None
    cleaned = str(value).strip().lower()
    if cleaned not in CHANGE_FREQUENCIES:
        raise ValidationError(
            '%(value)s is not a valid change frequency',
            code='invalid_change_freq',
            params={'value': value},
        )
    return cleaned


def clean_priority(value):
    if value is None:
        return None
    # bool is a Real too, but True/False as a priority is always a mistake
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal, str)):
        raise ValidationError('Priority must be a number', code='invalid_priority')
    try:
        priority = float(value)
    except ValueError:
        raise ValidationError('Priority must be a number', code='invalid_priority')
    if not 0.0 <= priority <= 1.0:
        raise ValidationError(
            'Priority %(value)s is outside 0.0 - 1.0',
            code='invalid_priority',
            params={'value': value},
        )
    return priority


def clean_last_modified(value):
    if value is None or value == '':
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, str):
        return value.strip() or None
    raise ValidationError(
        'Last modified must be a date, a datetime or an ISO-8601 string',
        code='invalid_lastmod',
    )


class UrlRecord:
    """
    One <url> entry of a sitemap.

    Records are values: the location is normalized on construction (the
    builder has already substituted its defaults) and nothing changes
    afterwards.
    """
    __slots__ = ('location', 'last_modified', 'change_frequency', 'priority')

    def __init__(self, location, last_modified=None, change_frequency=None, priority=None):
        set_ = object.__setattr__
        set_(self, 'location', normalize_location(location))
        set_(self, 'last_modified', clean_last_modified(last_modified))
        set_(self, 'change_frequency', clean_change_frequency(change_frequency))
        set_(self, 'priority', clean_priority(priority))

    def __setattr__(self, name, value):
        raise AttributeError('UrlRecord is immutable')

    def __delattr__(self, name):
        raise AttributeError('UrlRecord is immutable')

    @property
    def formatted_priority(self):
        if self.priority is None:
            return None
        return f"{self.priority:.1f}"

    def to_dict(self):
        return {
            'location': self.location,
            'last_modified': self.last_modified,
            'change_frequency': self.change_frequency,
            'priority': self.priority,
        }

    def __eq__(self, other):
        if not isinstance(other, UrlRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self.location, self.last_modified, self.change_frequency, self.priority))

    def __repr__(self):
        return (f"UrlRecord({self.location!r}, last_modified={self.last_modified!r}, "
                f"change_frequency={self.change_frequency!r}, priority={self.priority!r})")

    def __str__(self):
        return self.location
