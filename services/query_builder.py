import math
from dataclasses import dataclass

from django.conf import settings

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def parse_positive_int(value, default):
    """Parse a query parameter, falling back to default for junk or values below 1."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass
class Page:
    items: list
    total: int
    pages: int
    page: int
    limit: int


class QueryBuilder:
    """Filtered, paginated reads over a queryset, most recent first."""

    ordering = ('-created_at',)

    def __init__(self, queryset, default_limit=DEFAULT_LIMIT):
        self.queryset = queryset
        self.default_limit = default_limit

    def filter(self, **equalities):
        # Absent filters are dropped, never matched against null
        constraints = {name: value for name, value in equalities.items() if value not in (None, '')}
        if constraints:
            self.queryset = self.queryset.filter(**constraints)
        return self

    def search(self, **substrings):
        for name, value in substrings.items():
            if value:
                self.queryset = self.queryset.filter(**{f'{name}__icontains': value})
        return self

    def ordered(self):
        return self.queryset.order_by(*self.ordering)

    def paginate(self, page=None, limit=None):
        page = parse_positive_int(page, DEFAULT_PAGE)
        limit = min(parse_positive_int(limit, self.default_limit), settings.MAX_PAGE_LIMIT)

        total = self.queryset.count()
        offset = (page - 1) * limit
        items = list(self.ordered()[offset:offset + limit])
        return Page(
            items=items,
            total=total,
            pages=math.ceil(total / limit),
            page=page,
            limit=limit,
        )
