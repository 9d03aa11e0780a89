import logging
from urllib.parse import urlsplit

from django.conf import settings
from django.http import HttpResponseForbidden
from django.utils.cache import patch_vary_headers

from api.metrics import record_theme_resolution
from web.theme import CLIENT_HINT_HEADER, ClientHintSignal, CookieStore, ThemeResolver


logger = logging.getLogger(__name__)


class RestrictAPIAccessMiddleware:
    """
    Deny requests to API endpoints unless the Origin/Referer matches configured frontend origins.

    Applies to paths starting with settings.API_PATH_PREFIX (default '/api/').
    Checks the 'Origin' header first, then falls back to 'Referer'.
    If ENFORCE_FRONTEND_ORIGIN is False, the middleware does nothing. Safe
    methods are always let through so counters stay readable.
    """

    SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}

    def __init__(self, get_response):
        self.get_response = get_response
        self.prefix = getattr(settings, "API_PATH_PREFIX", "/api/")
        self.allowed = {self.normalize(o) for o in getattr(settings, "FRONTEND_ALLOWED_ORIGINS", [])}
        self.allowed.discard(None)
        self.enabled = bool(getattr(settings, "ENFORCE_FRONTEND_ORIGIN", True))

    @staticmethod
    def normalize(url: str | None) -> str | None:
        if not url:
            return None
        # Keep scheme + host + optional port
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            return None
        return f"{parts.scheme}://{parts.netloc}".rstrip("/")

    def __call__(self, request):
        if (
            self.enabled
            and request.path.startswith(self.prefix)
            and request.method not in self.SAFE_METHODS
        ):
            origin = request.headers.get("Origin")
            referer = request.headers.get("Referer")
            source = self.normalize(origin) or self.normalize(referer)
            if self.allowed and source not in self.allowed:
                logger.info("Rejected %s %s from origin %s", request.method, request.path, source)
                return HttpResponseForbidden("Forbidden: origin not allowed")

        return self.get_response(request)


class ThemeMiddleware:
    """
    Resolve the color scheme before the view renders anything.

    Attaches a ``ThemeResolver`` as ``request.theme`` so templates can write
    ``data-theme`` into the document root, persists toggles made during the
    request as a cookie, and asks the browser for the color-scheme client hint.
    ``Critical-CH`` makes the browser retry a first visit with the hint
    attached, so even that response is rendered with the system theme.
    Headers and metrics apply to HTML pages only; static assets, admin
    pages and JSON responses are left alone apart from the cookie.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        static_prefix = getattr(settings, "STATIC_URL", None) or "/static/"
        if not static_prefix.startswith("/"):
            static_prefix = "/" + static_prefix
        self.skip_prefixes = (static_prefix, *getattr(settings, "THEME_SKIP_PATH_PREFIXES", ["/admin/"]))

    def is_page(self, request, response) -> bool:
        """Only HTML documents carry a theme; assets and JSON do not."""
        if request.path.startswith(self.skip_prefixes):
            return False
        return response.get("Content-Type", "").startswith("text/html")

    def __call__(self, request):
        store = CookieStore(request)
        resolver = ThemeResolver(store, ClientHintSignal(request))
        resolver.resolve()
        request.theme = resolver

        response = self.get_response(request)

        # Toggles arrive as JSON requests, so cookies are applied to every response
        store.apply(response)
        if not self.is_page(request, response):
            return response

        try:
            record_theme_resolution(resolver.source)
        except Exception:
            logger.exception("Failed to record Prometheus metrics for theme resolution")
        response["Accept-CH"] = CLIENT_HINT_HEADER
        response["Critical-CH"] = CLIENT_HINT_HEADER
        patch_vary_headers(response, (CLIENT_HINT_HEADER, "Cookie"))
        return response
