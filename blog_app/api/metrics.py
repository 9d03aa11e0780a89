from prometheus_client import Counter


# Counters
PAGE_VIEWS_TOTAL = Counter(
    "blog_page_views_total", "Total number of page views recorded", ["slug"]
)
PAGE_LIKES_TOTAL = Counter(
    "blog_page_likes_total", "Total number of likes recorded", ["slug"]
)
THEME_RESOLUTIONS_TOTAL = Counter(
    "blog_theme_resolutions_total",
    "Server-side theme resolutions by the tier that decided the theme",
    ["source"],
)
THEME_TOGGLES_TOTAL = Counter(
    "blog_theme_toggles_total", "Explicit theme choices made by visitors", ["theme"]
)


def record_page_view(slug: str) -> None:
    PAGE_VIEWS_TOTAL.labels(slug=slug).inc()


def record_page_like(slug: str, increment: int = 1) -> None:
    """Record likes for a page; non-positive increments are ignored."""
    if increment <= 0:
        return
    PAGE_LIKES_TOTAL.labels(slug=slug).inc(increment)


def record_theme_resolution(source: str) -> None:
    THEME_RESOLUTIONS_TOTAL.labels(source=str(source)).inc()


def record_theme_toggle(theme: str) -> None:
    THEME_TOGGLES_TOTAL.labels(theme=str(theme)).inc()
