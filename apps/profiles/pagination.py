"""
Page/limit pagination shaped the way the directory frontend expects.

    GET /api/v1/profiles/?page=2&limit=12
    → {"profiles": [...], "total": 13, "page": 2, "limit": 12, "total_pages": 2}

Unlike DRF's PageNumberPagination an out-of-range page is not an error: it
simply yields an empty slice, so the client can still read ``total``.
"""

import math

from django.conf import settings
from rest_framework.pagination import BasePagination
from rest_framework.response import Response

DEFAULT_PAGE = 1
MAX_LIMIT = 100


def default_limit():
    return getattr(settings, "REST_FRAMEWORK", {}).get("PAGE_SIZE") or 12


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def clean_page_params(page=None, limit=None):
    """Coerce raw ``page``/``limit`` values into positive ints, capping the limit."""
    page = _positive_int(page, DEFAULT_PAGE)
    limit = min(_positive_int(limit, default_limit()), MAX_LIMIT)
    return page, limit


def page_count(total, limit):
    return math.ceil(total / limit) if limit else 0


def page_envelope(key, data, total, page, limit):
    """Response body shared by every page/limit listing."""
    return {
        key: data,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": page_count(total, limit),
    }


class ProfilePagination(BasePagination):
    page_query_param = "page"
    limit_query_param = "limit"
    results_key = "profiles"

    def paginate_queryset(self, queryset, request, view=None):
        self.page, self.limit = clean_page_params(
            request.query_params.get(self.page_query_param),
            request.query_params.get(self.limit_query_param),
        )
        self.total = queryset.count()
        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        return Response(page_envelope(self.results_key, data, self.total, self.page, self.limit))

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                self.results_key: schema,
                "total": {"type": "integer"},
                "page": {"type": "integer"},
                "limit": {"type": "integer"},
                "total_pages": {"type": "integer"},
            },
        }


class ActivityPagination(ProfilePagination):
    results_key = "results"
