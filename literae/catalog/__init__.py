"""
Catalog package for the bookstore API.

This package proxies book search and book detail requests to the
Google Books API. Responses are forwarded verbatim so the front-end
renders the provider's own volume format; no local copy of the
catalogue is kept.
"""

from .router import router as catalog_router  # noqa: F401
