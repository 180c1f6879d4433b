# sitemaphelper/model_collections.py
# Model adapter: turns the rows of a queryset into sitemap entries. The
# builder only ever sees the dicts yielded by ModelCollection.entries().
import logging

from django.apps import apps
from django.core.exceptions import ValidationError
from django.db import models
from django.urls import NoReverseMatch, reverse

logger = logging.getLogger(__name__)

# (operator, value) constraint pairs -> Django field lookups
LOOKUP_OPERATORS = {
    '=': 'exact',
    '==': 'exact',
    '>': 'gt',
    '>=': 'gte',
    '<': 'lt',
    '<=': 'lte',
    'in': 'in',
    'like': 'contains',
}
NEGATED_OPERATORS = ('!=', '<>')
TIMESTAMP_FIELDS = ('updated_at', 'created_at')


def resolve_model(model):
    """Model class for a model class or an "app_label.ModelName" label.

    Raises LookupError when the label does not name an installed model.
    """
    if isinstance(model, type) and issubclass(model, models.Model):
        return model
    try:
        return apps.get_model(model)
    except ValueError:
        raise LookupError(f"{model!r} is not an app_label.ModelName label")


class ModelCollection:
    def __init__(self, model, route_name, change_freq='monthly', priority=0.7,
                 where=None, slug_field=None):
        self.model = model
        self.route_name = route_name
        self.change_freq = change_freq
        self.priority = priority
        self.where = dict(where or {})
        self.slug_field = slug_field

    def __repr__(self):
        return f"ModelCollection({self.model!r}, {self.route_name!r})"

    def get_model(self):
        return resolve_model(self.model)

    def apply_constraints(self, queryset):
        for field, value in self.where.items():
            if isinstance(value, (list, tuple)) and len(value) == 2:
                # comparison operators: ('>', 100)
                operator, operand = value
                operator = str(operator).strip().lower()
                if operator in NEGATED_OPERATORS:
                    queryset = queryset.exclude(**{field: operand})
                    continue
                lookup = LOOKUP_OPERATORS.get(operator)
                if lookup is None:
                    raise ValidationError(
                        'Unsupported operator %(operator)s for %(field)s',
                        code='invalid_lookup',
                        params={'operator': operator, 'field': field},
                    )
                queryset = queryset.filter(**{f'{field}__{lookup}': operand})
            else:
                queryset = queryset.filter(**{field: value})
        return queryset

    def get_queryset(self):
        model = self.get_model()
        return self.apply_constraints(model._default_manager.all()).order_by('pk')

    def route_parameter(self, obj):
        # Use slug field if specified, otherwise the primary key
        if self.slug_field:
            slug = getattr(obj, self.slug_field, None)
            if slug not in (None, ''):
                return slug
        return obj.pk

    def location(self, obj):
        parameter = self.route_parameter(obj)
        try:
            return reverse(self.route_name, args=[parameter])
        except NoReverseMatch:
            logger.debug("Cannot reverse %s for %r, using fallback url", self.route_name, parameter)
            return f"/{self.route_name}/{parameter}"

    def last_modified(self, obj):
        for field in TIMESTAMP_FIELDS:
            value = getattr(obj, field, None)
            if value:
                return value.isoformat()
        return None

    def entries(self):
        for obj in self.get_queryset():
            yield {
                'location': self.location(obj),
                'last_modified': self.last_modified(obj),
                'change_frequency': self.change_freq,
                'priority': self.priority,
            }

    @classmethod
    def from_dict(cls, data):
        return cls(
            data['model'],
            data['route'],
            change_freq=data.get('change_freq', 'monthly'),
            priority=data.get('priority', 0.7),
            where=data.get('where'),
            slug_field=data.get('slug_field', data.get('slug_column')),
        )
