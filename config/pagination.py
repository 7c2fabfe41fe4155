"""
Body-driven pagination for OfficeDesk list endpoints.

List endpoints are POST requests carrying `page` and `pageSize` in the JSON
body, so DRF's query-param paginators do not apply. The conventions are:

- `page` defaults to 1.
- `pageSize` absent falls back to the caller's default.
- `pageSize == 0` means unbounded: every matching row is returned.
"""
from django.conf import settings

UNBOUNDED = None


def resolve_page_size(page_size, default=UNBOUNDED):
    """Return the effective page size, or UNBOUNDED for "return everything"."""
    if page_size is None:
        return default
    if page_size == 0:
        return UNBOUNDED
    return page_size


def paginate_queryset(queryset, page=None, page_size=None, default=UNBOUNDED):
    """Slice an ordered queryset according to the body pagination rules."""
    size = resolve_page_size(page_size, default)
    if size is UNBOUNDED:
        return queryset
    page = page or 1
    offset = (page - 1) * size
    return queryset[offset:offset + size]


def default_page_size():
    return getattr(settings, 'DEFAULT_PAGE_SIZE', 10)
