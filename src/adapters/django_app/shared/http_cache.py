"""
HTTP caching headers.

Server side response caching is out of scope; this middleware only tells
clients and proxies how to cache. Validation (ETag / If-None-Match -> 304)
is done by ``django.middleware.http.ConditionalGetMiddleware``, which must
be listed before this middleware so that it sees the final headers.
"""

from django.conf import settings
from django.utils.cache import patch_cache_control, patch_vary_headers


def add_expiration_headers(response, max_age: int) -> None:
    """Mark a response as privately cacheable for ``max_age`` seconds."""
    patch_cache_control(response, private=True, max_age=max_age, must_revalidate=True)


class HttpCacheHeadersMiddleware:
    """
    Default ``Cache-Control`` and ``Vary: Accept`` for readable responses.

    Applies to successful GET/HEAD responses that did not set their own
    ``Cache-Control``. The default max-age comes from the
    ``HTTP_CACHE_MAX_AGE`` setting.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.max_age = getattr(settings, "HTTP_CACHE_MAX_AGE", 60)

    def __call__(self, request):
        response = self.get_response(request)

        if request.method not in ("GET", "HEAD"):
            return response

        # representations vary by content negotiation
        patch_vary_headers(response, ("Accept",))

        if response.status_code == 200 and not response.has_header("Cache-Control"):
            add_expiration_headers(response, self.max_age)

        return response
