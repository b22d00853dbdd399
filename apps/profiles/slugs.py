"""
Slug generation for profile URLs.

``slugify_name`` turns a display name into a URL-safe base; ``unique_slug``
probes ``base``, ``base-1``, ``base-2`` ... until it finds an unused value.
Django's own ``slugify`` is not used: it keeps underscores and transliterates
accents, whereas profile slugs are restricted to ``[a-z0-9-]``.
"""

import itertools
import re

FALLBACK_SLUG = "profile"
MAX_BASE_LENGTH = 200

_DISALLOWED = re.compile(r"[^a-z0-9 -]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify_name(name):
    """
    Return the URL-safe base slug for ``name``.

    >>> slugify_name("  Alice   O'Brien--Smith ")
    'alice-obrien-smith'
    """
    slug = _DISALLOWED.sub("", (name or "").lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    slug = slug[:MAX_BASE_LENGTH].strip("-")
    return slug or FALLBACK_SLUG


def unique_slug(base, exists):
    """
    Return the first of ``base``, ``base-1``, ``base-2`` ... for which
    ``exists(candidate)`` is false.

    ``exists`` is a predicate supplied by the caller (normally a database
    lookup), so the probe terminates after at most N + 1 calls where N is the
    number of stored slugs.
    """
    if not exists(base):
        return base
    for counter in itertools.count(1):
        candidate = f"{base}-{counter}"
        if not exists(candidate):
            return candidate
